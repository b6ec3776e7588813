"""Configuration models for the conduit networking layer."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import urlsplit

from .http import ContentType, HTTPHeaderField
from .logger import DEFAULT_LOG_LEVEL, LogLevel
from .parameters import URLParameter

DEFAULT_TIMEOUT = 30.0


class ConfigurationKey(str, Enum):
    """Well-known keys of the extension store.

    Any plain string works as a key too; these are the ones the library
    reads itself.
    """

    PAGE_PARAMETER_NAME = "pageParameterName"
    PER_PAGE_PARAMETER_NAME = "perPageParameterName"
    TOKEN = "token"
    DEFAULT_TOKEN = "defaultToken"


def _key(key: ConfigurationKey | str) -> str:
    if isinstance(key, ConfigurationKey):
        return key.value
    return str(key)


def _default_headers() -> Mapping[str, str]:
    """Return the immutable default header mapping."""

    return MappingProxyType(
        {HTTPHeaderField.CONTENT_TYPE.value: ContentType.JSON.value}
    )


def _empty_extras() -> Mapping[str, Any]:
    return MappingProxyType({})


def _validate_url(name: str, value: str | None, *, required: bool) -> None:
    if value is None:
        if required:
            raise ValueError(f"{name} is required")
        return
    parts = urlsplit(value)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"{name} must be an absolute URL, got {value!r}")


@dataclass(frozen=True)
class ApiConfiguration:
    """Settings shared by every request built against one API.

    Instances are immutable snapshots. Use ``with_value``,
    ``with_log_level`` or ``with_authorization`` to derive updated copies.
    """

    base_url: str
    cdn_url: str | None = None
    media_cdn_url: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    default_headers: Mapping[str, str] = field(
        default_factory=_default_headers
    )
    log_level: LogLevel = DEFAULT_LOG_LEVEL
    extras: Mapping[str, Any] = field(default_factory=_empty_extras)
    debug: bool = False

    def __post_init__(self) -> None:
        _validate_url("base_url", self.base_url or None, required=True)
        _validate_url("cdn_url", self.cdn_url, required=False)
        _validate_url("media_cdn_url", self.media_cdn_url, required=False)
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        object.__setattr__(self, "log_level", LogLevel(self.log_level))

        # Freeze copied mappings to avoid post-init mutation side effects.
        object.__setattr__(
            self,
            "default_headers",
            MappingProxyType(dict(self.default_headers)),
        )
        extras = {_key(key): value for key, value in self.extras.items()}
        extras.setdefault(
            ConfigurationKey.PAGE_PARAMETER_NAME.value, URLParameter.PAGE.value
        )
        extras.setdefault(
            ConfigurationKey.PER_PAGE_PARAMETER_NAME.value,
            URLParameter.PER_PAGE.value,
        )
        object.__setattr__(self, "extras", MappingProxyType(extras))

    @property
    def page_parameter_name(self) -> str:
        return self.get_string(ConfigurationKey.PAGE_PARAMETER_NAME) or (
            URLParameter.PAGE.value
        )

    @property
    def per_page_parameter_name(self) -> str:
        return self.get_string(ConfigurationKey.PER_PAGE_PARAMETER_NAME) or (
            URLParameter.PER_PAGE.value
        )

    def get_value(
        self, key: ConfigurationKey | str, default: Any = None
    ) -> Any:
        return self.extras.get(_key(key), default)

    def _typed(self, key: ConfigurationKey | str, kind: type) -> Any:
        value = self.get_value(key)
        # bool is an int subclass; keep the two apart.
        if kind is not bool and isinstance(value, bool):
            return None
        return value if isinstance(value, kind) else None

    def get_string(self, key: ConfigurationKey | str) -> str | None:
        return self._typed(key, str)

    def get_int(self, key: ConfigurationKey | str) -> int | None:
        return self._typed(key, int)

    def get_float(self, key: ConfigurationKey | str) -> float | None:
        value = self.get_value(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return float(value)

    def get_bool(self, key: ConfigurationKey | str) -> bool | None:
        return self._typed(key, bool)

    def get_url(self, key: ConfigurationKey | str) -> str | None:
        """Return a stored string value if it parses as an absolute URL."""
        value = self.get_string(key)
        if value is None:
            return None
        parts = urlsplit(value)
        if not parts.scheme or not parts.netloc:
            return None
        return value

    def with_value(
        self, key: ConfigurationKey | str, value: Any
    ) -> ApiConfiguration:
        extras = dict(self.extras)
        extras[_key(key)] = value
        return replace(self, extras=extras)

    def with_log_level(self, level: LogLevel) -> ApiConfiguration:
        return replace(self, log_level=level)

    def with_authorization(
        self, token: str, default_token: str | None = None
    ) -> ApiConfiguration:
        """Store the token scheme and, optionally, a fallback token."""
        config = self.with_value(ConfigurationKey.TOKEN, token)
        if default_token is not None:
            config = config.with_value(
                ConfigurationKey.DEFAULT_TOKEN, default_token
            )
        return config
