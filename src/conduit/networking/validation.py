"""Status-code validation of transport responses."""

from __future__ import annotations

from typing import Any

import requests

from .errors import (
    CustomError,
    InvalidResponseError,
    ServerError,
    StatusCodeError,
)

UNKNOWN_SERVER_ERROR = "Unknown server error"


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def validate(data: bytes, response: Any, *, debug: bool = False) -> bytes:
    """Return ``data`` untouched for 2xx responses.

    The body is not inspected on success; an empty body passes.

    Raises:
        InvalidResponseError: if ``response`` is not an HTTP response.
        StatusCodeError: for any status outside 200-299, carrying the parsed
            server error (or a generic fallback) and its ``meta`` object.
    """
    if not isinstance(response, requests.Response):
        raise InvalidResponseError()

    status = response.status_code
    if is_success(status):
        return data

    server_error = ServerError.from_response(data, response, debug=debug)
    if server_error is None:
        raise StatusCodeError(status, CustomError(UNKNOWN_SERVER_ERROR))
    raise StatusCodeError(status, server_error, server_error.meta)
