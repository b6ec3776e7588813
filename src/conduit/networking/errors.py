"""Error taxonomy for the conduit networking layer.

Every failure that reaches a caller is one of the ``ApiError`` subclasses
below. Errors are values: two errors of the same kind compare equal when
their payloads match.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

import requests


class ApiError(Exception):
    """Base class for every error raised by the networking layer."""

    description = "The request failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.description)

    @property
    def message(self) -> str:
        return str(self)

    @property
    def status_code(self) -> int | None:
        return None

    @property
    def meta(self) -> Mapping[str, Any] | None:
        return None

    @property
    def underlying_error(self) -> BaseException | None:
        return None

    def _identity(self) -> tuple[Any, ...]:
        return ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiError):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash((type(self), self.status_code))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class InvalidURLError(ApiError):
    description = "The URL is invalid."


class InvalidBodyError(ApiError):
    description = "The request body is invalid."


class EmptyDataError(ApiError):
    description = "The response data is empty."


class InvalidJSONError(ApiError):
    description = "The response JSON is invalid."


class InvalidResponseError(ApiError):
    description = "The response is invalid."


class InvalidKeyError(ApiError):
    description = "The included key is invalid."


class MissingKeyError(ApiError):
    description = "Missing key"


class NotConfiguredError(ApiError):
    description = (
        "The API is not configured. Call configure() or pass a "
        "configuration before making requests."
    )


class CustomError(ApiError):
    """Error carrying a caller-supplied message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)

    def _identity(self) -> tuple[Any, ...]:
        return (str(self),)


class NetworkError(ApiError):
    """Transport-level failure; the original exception is kept as ``cause``."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Network error: {cause}")
        self.cause = cause

    @property
    def underlying_error(self) -> BaseException | None:
        return self.cause

    def _identity(self) -> tuple[Any, ...]:
        return (type(self.cause), self.cause.args)


class RequestTimeoutError(NetworkError):
    """The transport gave up waiting for the server."""


class ServerError(Exception):
    """Error parsed from a non-2xx JSON body.

    Every top-level key except ``meta`` is flattened into a ``key - value``
    line. Nested objects are flattened recursively and arrays are joined
    with commas. ``meta`` is kept aside as structured metadata.
    """

    def __init__(
        self, description: str, meta: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(description)
        self.description = description
        self.meta = dict(meta) if meta is not None else None

    @classmethod
    def from_response(
        cls,
        data: bytes,
        response: requests.Response,
        *,
        debug: bool = False,
    ) -> ServerError | None:
        """Parse a server error from a response body.

        Returns None when the body is not a JSON object, unless ``debug`` is
        set, in which case a description built from the status and URL is
        returned instead.
        """
        try:
            payload = json.loads(data) if data else None
        except ValueError:
            payload = None

        status = response.status_code
        if not isinstance(payload, dict):
            if not debug:
                return None
            return cls(
                "DEBUG\n"
                f"Status code: {status}\n"
                f"URL: {response.url or 'NONE'}\n"
                f"{_status_hint(status)}"
            )

        description = flatten_error_payload(payload)
        meta = payload.get("meta")
        if debug:
            description = (
                "DEBUG\n"
                f"Status code: {status}\n"
                f"URL: {response.url or 'NONE'}\n"
                f"Error body:\n{description}\n"
                f"{_status_hint(status)}"
            )
        return cls(description, meta if isinstance(meta, dict) else None)


class StatusCodeError(ApiError):
    """Non-2xx HTTP response."""

    def __init__(
        self,
        code: int,
        error: BaseException,
        meta: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(str(error))
        self.code = code
        self.error = error
        self._meta = dict(meta) if meta is not None else None

    @property
    def status_code(self) -> int | None:
        return self.code

    @property
    def meta(self) -> Mapping[str, Any] | None:
        return self._meta

    @property
    def underlying_error(self) -> BaseException | None:
        return self.error

    def _identity(self) -> tuple[Any, ...]:
        return (self.code, str(self.error), _comparable_meta(self._meta))

    def __repr__(self) -> str:
        return f"StatusCodeError({self.code}, {str(self.error)!r})"


_STATUS_HINTS = {
    401: (
        "Unauthorized\nThe request is missing a token or the token "
        "is not valid."
    ),
    403: "Forbidden\nThe token does not grant permission for this action.",
    404: (
        "Not found\nNothing exists at this endpoint. Check the request path "
        "and the requested object."
    ),
    422: (
        "Validation Error\nThe server rejected the submitted data. Check "
        "the payload against the server-side validation rules."
    ),
    500: "Internal Server\nThe server failed while handling the request.",
}


def _status_hint(status: int) -> str:
    return _STATUS_HINTS.get(status, "Error")


def _render_scalar(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def flatten_error_payload(payload: Mapping[str, Any]) -> str:
    """Render a JSON error object as ``key - value`` lines."""
    lines: list[str] = []
    for key, value in payload.items():
        if key == "meta":
            continue
        if isinstance(value, dict):
            nested = flatten_error_payload(value)
            if nested:
                lines.append(nested)
        elif isinstance(value, list):
            joined = ",".join(_render_scalar(item) for item in value)
            lines.append(f"{key} - {joined}")
        else:
            lines.append(f"{key} - {_render_scalar(value)}")
    return "\n".join(lines)


def _comparable_meta(meta: Mapping[str, Any] | None) -> str | None:
    if meta is None:
        return None
    return json.dumps(meta, sort_keys=True, default=str)


def to_api_error(error: BaseException) -> ApiError:
    """Map any exception onto the ApiError taxonomy."""
    if isinstance(error, ApiError):
        return error
    if isinstance(error, requests.exceptions.Timeout):
        return RequestTimeoutError(error)
    if isinstance(error, requests.exceptions.RequestException):
        return NetworkError(error)
    return CustomError(str(error) or type(error).__name__)
