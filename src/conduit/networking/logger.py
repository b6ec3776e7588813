"""Request/response logging gated by the active ``LogLevel``.

The level is process-wide. ``configure`` installs the configuration's level,
``reset`` returns to ``LogLevel.ERROR``. Records go to the standard
``logging`` module; handlers are the host application's concern.
"""

from __future__ import annotations

import logging
import threading
from enum import IntEnum
from typing import TYPE_CHECKING, Mapping

import requests

from .json_coding import pretty_print

if TYPE_CHECKING:
    from .builder import ApiRequest

logger = logging.getLogger(__name__)


class LogLevel(IntEnum):
    """Verbosity of request/response logging, ordered from quiet to loud."""

    NONE = 0
    ERROR = 1
    DEBUG = 2
    VERBOSE = 3


DEFAULT_LOG_LEVEL = LogLevel.ERROR

_lock = threading.Lock()
_log_level = DEFAULT_LOG_LEVEL


def get_log_level() -> LogLevel:
    return _log_level


def set_log_level(level: LogLevel) -> None:
    global _log_level
    with _lock:
        _log_level = LogLevel(level)


def _format_body(body: bytes | str | None) -> str | None:
    if not body:
        return None
    pretty = pretty_print(body)
    if pretty is not None:
        return pretty
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def _log_details(
    level: int,
    prefix: str,
    headers: Mapping[str, str],
    body: bytes | str | None,
) -> None:
    if headers:
        logger.log(level, "%s HEADERS: %s", prefix, dict(headers))
    formatted = _format_body(body)
    if formatted is not None:
        logger.log(level, "%s BODY: %s", prefix, formatted)


def log_request(request: ApiRequest) -> None:
    """Log an outgoing request.

    The method and URL are logged at every level except NONE; headers and
    body only at VERBOSE.
    """
    level = get_log_level()
    if level == LogLevel.NONE:
        return

    logger.info("REQUEST: %s %s", request.method, request.url)
    if level >= LogLevel.VERBOSE:
        _log_details(logging.DEBUG, "REQUEST", request.headers, request.body)


def log_response(
    response: requests.Response | None = None,
    error: BaseException | None = None,
    url: str | None = None,
) -> None:
    """Log the outcome of a request.

    Failures are logged whenever logging is enabled at all; successful
    responses need DEBUG for the status line and VERBOSE for the details.
    """
    level = get_log_level()
    if level == LogLevel.NONE:
        return

    if error is not None:
        logger.error("ERROR: %s (%s)", error, url or "")
        return

    if not isinstance(response, requests.Response):
        logger.error("UNKNOWN RESPONSE: %s", url or "")
        return

    status = response.status_code
    if not 200 <= status < 300:
        logger.error("RESPONSE [%s]: %s", status, url or response.url or "")
        _log_details(
            logging.ERROR, "RESPONSE", response.headers, response.content
        )
        return

    if level < LogLevel.DEBUG:
        return
    logger.info("RESPONSE [%s]: %s", status, url or response.url or "")
    if level >= LogLevel.VERBOSE:
        _log_details(
            logging.DEBUG, "RESPONSE", response.headers, response.content
        )
