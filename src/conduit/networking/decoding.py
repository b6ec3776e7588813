"""Typed decoding of response bodies with optional envelope unwrapping.

Many APIs wrap payloads as ``{"<key>": <payload>}``. ``decode`` with an
``unwrap_by`` key first tries the wrapped form and falls back to decoding
the whole body, so it copes with endpoints that wrap only sometimes.
"""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

from . import json_coding
from .errors import (
    ApiError,
    EmptyDataError,
    InvalidJSONError,
    MissingKeyError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)

_EMPTY = object()


def unwrap_value(payload: Any, key: str | None = None) -> Any:
    """Extract the wrapped value from a parsed JSON object.

    With ``key`` the value stored under it is returned. Without one, an
    object with exactly one key yields that key's value and an empty object
    yields itself. Objects with several keys are ambiguous.

    Raises:
        InvalidJSONError: if ``payload`` is not a JSON object.
        MissingKeyError: if ``key`` is absent or no single key can be chosen.
    """
    if not isinstance(payload, dict):
        raise InvalidJSONError("Expected a JSON object to unwrap")
    if key:
        value = payload.get(key, _EMPTY)
        if value is _EMPTY:
            raise MissingKeyError(f"Missing key {key!r}")
        return value
    if not payload:
        return payload
    if len(payload) == 1:
        return next(iter(payload.values()))
    raise MissingKeyError(
        "Cannot choose an unwrap key among " + ", ".join(sorted(payload))
    )


def decode_unwrapped(
    data: bytes, target: type[T] | Any, key: str | None = None
) -> T:
    """Decode ``target`` from the value wrapped inside ``data``.

    Raises:
        EmptyDataError: if ``data`` is empty.
        InvalidJSONError: if ``data`` is not JSON or the value does not match.
        MissingKeyError: see ``unwrap_value``.
    """
    if not data:
        raise EmptyDataError()
    try:
        payload = json.loads(data)
    except ValueError as exc:
        raise InvalidJSONError(str(exc)) from exc
    return json_coding.decode_value(unwrap_value(payload, key), target)


def decode(
    data: bytes, target: type[T] | Any, unwrap_by: str | None = None
) -> T:
    """Decode a response body into ``target``.

    Raises:
        InvalidJSONError: if the body cannot be decoded into ``target``.
    """
    if unwrap_by:
        try:
            return decode_unwrapped(data, target, unwrap_by)
        except ApiError as exc:
            logger.debug(
                "Unwrapping by %r failed (%s), decoding the body directly",
                unwrap_by,
                exc,
            )
    return json_coding.decode(data, target)
