"""Immutable request builder.

A ``RequestBuilder`` accumulates method, headers, parameters, body, cache
policy and timeout. Every mutator returns a new builder; ``build`` turns the
accumulated state into an ``ApiRequest`` against a configuration.

Parameter placement is decided at build time. GET and DELETE send the
parameters in the query string; POST, PUT and PATCH send them as a JSON
object whose values are coerced to int, float or bool where the text allows
it. An explicit body always wins over derived body parameters.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Iterable, Mapping
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

import requests
from requests.structures import CaseInsensitiveDict

from . import json_coding
from .api import get_configuration, require_configuration
from .config import ApiConfiguration
from .endpoint import Endpoint, endpoint_path, join_url, substitute
from .errors import CustomError, InvalidBodyError, InvalidURLError
from .http import (
    CachePolicy,
    ContentType,
    HTTPHeaderField,
    HTTPMethod,
    header_name,
)
from .parameters import QueryItem, normalize_query_items

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|nan|inf|infinity)",
    re.IGNORECASE,
)

_CONTENT_TYPE = HTTPHeaderField.CONTENT_TYPE.value
_CACHE_CONTROL = HTTPHeaderField.CACHE_CONTROL.value


def coerce_parameter(value: str) -> Any:
    """Interpret a parameter string as int, then float, then bool.

    Only ASCII digits count. Text that matches none of them is returned
    unchanged. ``nan``, ``inf`` and ``infinity`` match as floats in any
    case, so a body parameter such as ``"Nan"`` makes the body invalid.
    """
    if _INT_PATTERN.fullmatch(value):
        try:
            return int(value)
        except ValueError:
            pass  # Longer than the interpreter allows for int()
    if _FLOAT_PATTERN.fullmatch(value):
        try:
            return float(value)
        except ValueError:
            pass
    if value in ("true", "false"):
        return value == "true"
    return value


def body_parameters(items: Iterable[QueryItem]) -> dict[str, Any]:
    """Turn query items into a JSON object; valueless items are dropped."""
    parameters: dict[str, Any] = {}
    for name, value in items:
        if value is None:
            continue
        parameters[name] = coerce_parameter(value)
    return parameters


def encode_query(items: Iterable[QueryItem]) -> str:
    """Percent-encode query items in order, keeping duplicates."""
    parts = []
    for name, value in items:
        encoded_name = quote(name, safe="")
        if value is None:
            parts.append(encoded_name)
        else:
            parts.append(f"{encoded_name}={quote(value, safe='')}")
    return "&".join(parts)


def _with_query(url: str, query: str) -> str:
    if not query:
        return url
    parts = urlsplit(url)
    merged = f"{parts.query}&{query}" if parts.query else query
    return urlunsplit(parts._replace(query=merged))


@dataclass(frozen=True)
class ApiRequest:
    """A materialized request, ready to hand to the transport."""

    prepared: requests.PreparedRequest
    timeout: float
    cache_policy: CachePolicy = CachePolicy.USE_PROTOCOL_CACHE_POLICY

    @property
    def method(self) -> str:
        return self.prepared.method or HTTPMethod.GET.value

    @property
    def url(self) -> str:
        return self.prepared.url or ""

    @property
    def headers(self) -> CaseInsensitiveDict[str]:
        return self.prepared.headers

    @property
    def body(self) -> bytes | None:
        body = self.prepared.body
        if isinstance(body, str):
            return body.encode("utf-8")
        return body

    def json(self) -> Any:
        """Return the decoded JSON body, or None when there is no body."""
        body = self.body
        return json.loads(body) if body else None


def _frozen(mapping: Mapping[str, str] | None = None) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class RequestBuilder:
    """Accumulates request settings; each mutator returns a new builder."""

    endpoint: Endpoint
    http_method: HTTPMethod = HTTPMethod.GET
    header_overrides: Mapping[str, str] = field(default_factory=_frozen)
    query_items: tuple[QueryItem, ...] = ()
    path_values: Mapping[str, str] = field(default_factory=_frozen)
    page: tuple[int, int] | None = None
    custom_body: bytes | None = None
    policy: CachePolicy = CachePolicy.USE_PROTOCOL_CACHE_POLICY
    timeout_override: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "endpoint", endpoint_path(self.endpoint))
        object.__setattr__(self, "http_method", HTTPMethod(self.http_method))
        object.__setattr__(
            self, "header_overrides", _frozen(self.header_overrides)
        )
        object.__setattr__(self, "path_values", _frozen(self.path_values))
        object.__setattr__(
            self, "query_items", normalize_query_items(self.query_items)
        )

    @classmethod
    def from_url(
        cls, url: str, configuration: ApiConfiguration | None = None
    ) -> RequestBuilder:
        """Start from an absolute URL.

        The query string becomes query items. When the URL lives under the
        base URL of the configuration (explicit or installed), only the
        remainder is kept as the endpoint path.
        """
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            raise InvalidURLError(f"The URL is invalid: {url!r}")
        items = tuple(
            QueryItem(name, value)
            for name, value in parse_qsl(parts.query, keep_blank_values=True)
        )
        without_query = urlunsplit(parts._replace(query="", fragment=""))

        config = configuration or get_configuration()
        endpoint = without_query
        if config is not None and without_query.startswith(config.base_url):
            endpoint = without_query[len(config.base_url):]
        return cls(endpoint=endpoint, query_items=items)

    def method(self, method: HTTPMethod | str) -> RequestBuilder:
        return replace(self, http_method=HTTPMethod(method))

    def headers(
        self, headers: Mapping[HTTPHeaderField | str, str | None]
    ) -> RequestBuilder:
        """Merge headers; later values win and ``None`` values are skipped."""
        merged = CaseInsensitiveDict(self.header_overrides)
        for field_name, value in headers.items():
            if value is not None:
                merged[header_name(field_name)] = value
        return replace(self, header_overrides=_frozen(merged))

    def header(
        self, field_name: HTTPHeaderField | str, value: str
    ) -> RequestBuilder:
        return self.headers({field_name: value})

    def parameters(
        self, items: Iterable[QueryItem | tuple[str, str | None]]
    ) -> RequestBuilder:
        """Append parameters; names may repeat."""
        return replace(
            self, query_items=self.query_items + normalize_query_items(items)
        )

    def path_parameters(self, values: Mapping[str, object]) -> RequestBuilder:
        merged = dict(self.path_values)
        merged.update({str(k): str(v) for k, v in values.items()})
        return replace(self, path_values=_frozen(merged))

    def paged(self, page: int, per_page: int = 20) -> RequestBuilder:
        """Add pagination; its parameters precede every other parameter."""
        return replace(self, page=(page, per_page))

    def authenticated(self, token: str | None) -> RequestBuilder:
        """Set the Authorization header; an empty token changes nothing."""
        if not token:
            return self
        return self.header(HTTPHeaderField.AUTHORIZATION, token)

    def cache_policy(self, policy: CachePolicy) -> RequestBuilder:
        return replace(self, policy=policy)

    def timeout(self, seconds: float) -> RequestBuilder:
        if seconds <= 0:
            raise ValueError("timeout must be > 0")
        return replace(self, timeout_override=seconds)

    def json_body(self, value: Any) -> RequestBuilder:
        """Use ``value`` serialized as JSON for the body.

        Accepts raw bytes, pydantic models, dataclasses, dicts and lists.

        Raises:
            InvalidBodyError: if the value cannot be serialized.
        """
        if isinstance(value, (bytes, bytearray)):
            data = bytes(value)
        else:
            data = json_coding.encode(value)
        return replace(self, custom_body=data).header(
            HTTPHeaderField.CONTENT_TYPE, ContentType.JSON.value
        )

    def body(
        self, data: bytes, content_type: ContentType | str | None = None
    ) -> RequestBuilder:
        builder = replace(self, custom_body=bytes(data))
        if content_type is not None:
            if isinstance(content_type, ContentType):
                content_type = content_type.value
            builder = builder.header(
                HTTPHeaderField.CONTENT_TYPE, content_type
            )
        return builder

    def _all_items(self, configuration: ApiConfiguration) -> list[QueryItem]:
        items: list[QueryItem] = []
        if self.page is not None:
            page, per_page = self.page
            items.append(
                QueryItem(configuration.page_parameter_name, str(page))
            )
            items.append(
                QueryItem(configuration.per_page_parameter_name, str(per_page))
            )
        items.extend(self.query_items)
        return items

    def build(
        self, configuration: ApiConfiguration | None = None
    ) -> ApiRequest:
        """Materialize the request.

        Raises:
            NotConfiguredError: if no configuration is given or installed.
            InvalidURLError: if base URL and path do not form a valid URL.
            InvalidBodyError: if derived body parameters cannot be encoded.
        """
        config = require_configuration(configuration)
        path = substitute(self.endpoint, self.path_values)
        url = join_url(config.base_url, path)

        items = self._all_items(config)
        body: bytes | None = None
        derived_body = False
        if self.http_method.carries_query:
            url = _with_query(url, encode_query(items))
        if self.custom_body is not None:
            body = self.custom_body
        elif not self.http_method.carries_query and items:
            parameters = body_parameters(items)
            if parameters:
                try:
                    body = json.dumps(
                        parameters, separators=(",", ":"), allow_nan=False
                    ).encode("utf-8")
                except ValueError as exc:
                    raise InvalidBodyError(str(exc)) from exc
                derived_body = True

        headers: CaseInsensitiveDict[str] = CaseInsensitiveDict(
            config.default_headers
        )
        cache_control = self.policy.cache_control
        if cache_control is not None:
            headers[_CACHE_CONTROL] = cache_control
        headers.update(self.header_overrides)
        if derived_body and _CONTENT_TYPE not in headers:
            headers[_CONTENT_TYPE] = ContentType.JSON.value

        try:
            prepared = requests.Request(
                method=self.http_method.value,
                url=url,
                headers=dict(headers),
                data=body,
            ).prepare()
        except requests.exceptions.InvalidHeader as exc:
            raise CustomError(f"Invalid header: {exc}") from exc
        except (requests.exceptions.RequestException, ValueError) as exc:
            raise InvalidURLError(f"The URL is invalid: {url!r}") from exc

        return ApiRequest(
            prepared=prepared,
            timeout=self.timeout_override or config.timeout,
            cache_policy=self.policy,
        )
