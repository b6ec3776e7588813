"""Query and header parameter helpers.

Callers assemble parameters as plain sequences. Conditional entries are
written inline as ``item if condition else None``; the helpers below drop
the ``None`` placeholders.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, NamedTuple

from .http import HTTPHeaderField, header_name


class QueryItem(NamedTuple):
    name: str
    value: str | None = None


class HeaderItem(NamedTuple):
    field: HTTPHeaderField | str
    value: str | None


class URLParameter(str, Enum):
    PAGE = "page"
    PER_PAGE = "per_page"

    SORT_BY = "sort_by"
    SORT_ORDER = "sort_order"
    FILTER = "filter"
    QUERY = "query"
    SEARCH = "search"

    EMAIL = "email"
    PASSWORD = "password"
    TOKEN = "token"
    REFRESH_TOKEN = "refresh_token"
    API_KEY = "api_key"
    CURRENT_DATETIME = "current_datetime"

    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    USER_NAME = "user_name"
    DISPLAY_NAME = "display_name"
    PROFILE_IMAGE = "profile_image"
    DATE_OF_BIRTH = "date_of_birth"
    GENDER = "gender"
    PHONE_NUMBER = "phone_number"

    LATITUDE = "lat"
    LONGITUDE = "lon"
    RADIUS = "radius"

    LANGUAGE = "language"
    VERSION = "version"
    PLATFORM = "platform"
    DEVICE_ID = "device_id"
    TIMEZONE = "timezone"
    FORMAT = "format"

    def query_item(self, value: str | int | float | bool | None) -> QueryItem:
        """Build a query item named after this parameter."""
        return QueryItem(self.value, format_query_value(value))


def _text(value: object) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def format_query_value(value: str | int | float | bool | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return _text(value)


def query_items(
    *entries: QueryItem | tuple[str, str | None] | None,
) -> list[QueryItem]:
    """Collect query items in order, skipping ``None`` entries.

    Duplicate names are kept; every item is encoded.
    """
    items: list[QueryItem] = []
    for entry in entries:
        if entry is None:
            continue
        name, value = entry
        items.append(QueryItem(_text(name), value))
    return items


def header_items(
    *entries: HeaderItem | tuple[HTTPHeaderField | str, str | None] | None,
) -> dict[str, str]:
    """Collect headers into a mapping; later entries override earlier ones.

    Entries that are ``None`` or carry a ``None`` value are skipped.
    """
    headers: dict[str, str] = {}
    for entry in entries:
        if entry is None:
            continue
        field, value = entry
        if value is None:
            continue
        headers[header_name(field)] = value
    return headers


def normalize_query_items(
    items: Iterable[QueryItem | tuple[str, str | None]],
) -> tuple[QueryItem, ...]:
    return tuple(QueryItem(_text(name), value) for name, value in items)
