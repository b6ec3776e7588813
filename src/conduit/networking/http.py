"""HTTP vocabulary shared by the request builder and the operations layer."""

from __future__ import annotations

from enum import Enum


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def carries_query(self) -> bool:
        """Return True when parameters belong in the URL query string."""
        return self in (HTTPMethod.GET, HTTPMethod.DELETE)


class HTTPHeaderField(str, Enum):
    AUTHORIZATION = "Authorization"
    CONTENT_TYPE = "Content-Type"
    ACCEPT = "Accept"
    ACCEPT_LANGUAGE = "Accept-Language"
    ACCEPT_ENCODING = "Accept-Encoding"
    USER_AGENT = "User-Agent"
    CACHE_CONTROL = "Cache-Control"
    API_KEY = "Api-Key"
    API_VERSION = "Api-Version"
    API_AUTHORIZATION = "Api-Authorization"
    LANGUAGE_PREFERENCES = "X-Language-Preferences"


class ContentType(str, Enum):
    JSON = "application/json"
    FORM_URL_ENCODED = "application/x-www-form-urlencoded"
    MULTIPART_FORM_DATA = "multipart/form-data"
    TEXT_PLAIN = "text/plain"
    XML = "application/xml"


class CachePolicy(str, Enum):
    """Cache behavior requested from intermediaries via Cache-Control."""

    USE_PROTOCOL_CACHE_POLICY = "use_protocol_cache_policy"
    RELOAD_IGNORING_LOCAL_CACHE_DATA = "reload_ignoring_local_cache_data"
    RETURN_CACHE_DATA_ELSE_LOAD = "return_cache_data_else_load"
    RETURN_CACHE_DATA_DONT_LOAD = "return_cache_data_dont_load"

    @property
    def cache_control(self) -> str | None:
        return _CACHE_CONTROL.get(self)


_CACHE_CONTROL = {
    CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA: "no-cache",
    CachePolicy.RETURN_CACHE_DATA_ELSE_LOAD: "max-stale",
    CachePolicy.RETURN_CACHE_DATA_DONT_LOAD: "only-if-cached",
}


def header_name(field: HTTPHeaderField | str) -> str:
    """Return the wire name for a header given as enum member or string."""
    if isinstance(field, HTTPHeaderField):
        return field.value
    return str(field)
