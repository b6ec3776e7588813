"""Endpoint paths and URL construction.

An endpoint is any ``str`` or any ``Enum`` member with a string value, so
plain strings work wherever an endpoint is expected. Paths may contain
``{name}`` placeholders.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Mapping, Union
from urllib.parse import urlsplit

import requests
from requests.utils import requote_uri

from .errors import InvalidURLError

Endpoint = Union[str, Enum]

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def endpoint_path(endpoint: Endpoint) -> str:
    """Return the raw path of an endpoint."""
    if isinstance(endpoint, Enum):
        return str(endpoint.value)
    return str(endpoint)


def substitute(endpoint: Endpoint, parameters: Mapping[str, object]) -> str:
    """Replace ``{key}`` placeholders with values from ``parameters``.

    Placeholders without a matching key are left as they are. Substitution
    is a single pass, so inserted values are never scanned again.
    """
    values = {str(key): str(value) for key, value in parameters.items()}

    def _replace(match: re.Match[str]) -> str:
        return values.get(match.group(1), match.group(0))

    return _PLACEHOLDER.sub(_replace, endpoint_path(endpoint))


def is_absolute(path: str) -> bool:
    parts = urlsplit(path)
    return bool(parts.scheme and parts.netloc)


def join_url(base_url: str, path: str) -> str:
    """Concatenate base and path and percent-encode the result.

    Absolute paths are used as given.

    Raises:
        InvalidURLError: if the result is not a valid absolute URL.
    """
    if base_url.endswith("/") and path.startswith("/"):
        joined = base_url + path[1:]
    else:
        joined = base_url + path

    try:
        if is_absolute(path):
            joined = path
        encoded = requote_uri(joined)
        parts = urlsplit(encoded)
    except (ValueError, requests.exceptions.InvalidURL) as exc:
        raise InvalidURLError(f"The URL is invalid: {joined!r}") from exc
    if not parts.scheme or not parts.netloc:
        raise InvalidURLError(f"The URL is invalid: {joined!r}")
    return encoded


def endpoint_url(
    endpoint: Endpoint,
    base_url: str,
    parameters: Mapping[str, object] | None = None,
) -> str:
    """Build the full URL of ``endpoint`` under ``base_url``."""
    return join_url(base_url, substitute(endpoint, parameters or {}))


def full_path(
    endpoint: Endpoint, base_url: str, api_path: str = "/api"
) -> str:
    """Concatenate base URL, API prefix and endpoint path without encoding."""
    return base_url + api_path + endpoint_path(endpoint)


class ApiEndpoint(str, Enum):
    """Base for declaring the endpoints of one API as an enum.

    Example::

        class Users(ApiEndpoint):
            LIST = "/users"
            DETAIL = "/users/{id}"
    """

    @property
    def path(self) -> str:
        return str(self.value)

    def substituting(self, parameters: Mapping[str, object]) -> str:
        return substitute(self, parameters)

    def url(
        self, base_url: str, parameters: Mapping[str, object] | None = None
    ) -> str:
        return endpoint_url(self, base_url, parameters)
