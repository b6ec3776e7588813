"""JSON encoding and decoding with the library's default conventions.

Models are pydantic models or dataclasses with snake_case fields, which
match the snake_case keys used on the wire. Dates travel as ISO-8601.
"""

from __future__ import annotations

import json
import re
from typing import Any, TypeVar

from pydantic import (
    PydanticSchemaGenerationError,
    TypeAdapter,
    ValidationError,
)
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .errors import InvalidBodyError, InvalidJSONError

T = TypeVar("T")

_QUOTED_KEY = re.compile(r'"([^"]*)": ')


def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def to_plain(value: Any) -> Any:
    """Convert a model or dataclass into plain Python containers.

    Floats are kept as they are; ``encode`` rejects non-finite ones.
    """
    try:
        return _adapter(type(value)).dump_python(value, mode="python")
    except (PydanticSchemaGenerationError, PydanticSerializationError) as exc:
        raise InvalidBodyError(
            f"Cannot serialize {type(value).__name__}: {exc}"
        ) from exc


def encode(value: Any) -> bytes:
    """Encode a value to compact JSON bytes.

    Raises:
        InvalidBodyError: if the value cannot be serialized or holds NaN or
            infinity.
    """
    try:
        return json.dumps(
            to_plain(value),
            separators=(",", ":"),
            allow_nan=False,
            default=to_jsonable_python,
        ).encode("utf-8")
    except (PydanticSerializationError, ValueError) as exc:
        raise InvalidBodyError(str(exc)) from exc


def encode_to_string(value: Any) -> str:
    return encode(value).decode("utf-8")


def decode(data: bytes | str, target: type[T] | Any) -> T:
    """Decode JSON text into ``target``.

    Raises:
        InvalidJSONError: if the text is not JSON or does not match target.
    """
    try:
        return _adapter(target).validate_json(data)
    except ValidationError as exc:
        raise InvalidJSONError(str(exc)) from exc


def decode_value(value: Any, target: type[T] | Any) -> T:
    """Validate already-parsed JSON data into ``target``."""
    try:
        return _adapter(target).validate_python(value)
    except ValidationError as exc:
        raise InvalidJSONError(str(exc)) from exc


def pretty_print(data: bytes | str) -> str | None:
    """Render JSON text indented with unquoted keys, or None if not JSON."""
    try:
        payload = json.loads(data)
    except (ValueError, TypeError):
        return None
    rendered = json.dumps(payload, indent=2, ensure_ascii=False)
    return _QUOTED_KEY.sub(r"\1: ", rendered)
