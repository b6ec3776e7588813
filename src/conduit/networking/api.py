"""Process-wide configuration lifecycle.

Builders and operations accept an explicit ``ApiConfiguration``; when none
is given they fall back to the one installed here. Installation swaps a
whole immutable snapshot, so in-flight requests keep the configuration they
started with.
"""

from __future__ import annotations

import threading

from .config import ApiConfiguration
from .errors import NotConfiguredError
from .logger import DEFAULT_LOG_LEVEL, LogLevel, set_log_level

_lock = threading.Lock()
_configuration: ApiConfiguration | None = None


def configure(configuration: ApiConfiguration) -> None:
    """Install ``configuration`` and adopt its log level."""
    global _configuration
    with _lock:
        _configuration = configuration
        set_log_level(configuration.log_level)


def is_configured() -> bool:
    return _configuration is not None


def reset() -> None:
    """Remove the installed configuration; logging falls back to ERROR."""
    global _configuration
    with _lock:
        _configuration = None
        set_log_level(DEFAULT_LOG_LEVEL)


def get_configuration() -> ApiConfiguration | None:
    return _configuration


def require_configuration(
    configuration: ApiConfiguration | None = None,
) -> ApiConfiguration:
    """Return the explicit configuration, else the installed one.

    Raises:
        NotConfiguredError: if neither is available.
    """
    if configuration is not None:
        return configuration
    current = _configuration
    if current is None:
        raise NotConfiguredError()
    return current


def set_logging_level(level: LogLevel) -> None:
    """Change the log level without reinstalling the whole configuration.

    The active level always changes; an installed configuration is replaced
    by a copy carrying the new level so the two stay in sync.
    """
    global _configuration
    with _lock:
        if _configuration is not None:
            _configuration = _configuration.with_log_level(level)
        set_log_level(level)
