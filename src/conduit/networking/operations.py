"""CRUD convenience operations.

Each operation builds a request with a fixed HTTP method, applies the
token, parameters and headers, performs it and decodes the result. Without
an explicit configuration the installed one is read at call time.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, TypeVar

from .builder import RequestBuilder
from .client import HttpClient
from .config import ApiConfiguration
from .endpoint import Endpoint
from .http import ContentType, HTTPHeaderField, HTTPMethod
from .parameters import QueryItem

T = TypeVar("T")

Parameters = Iterable[QueryItem | tuple[str, str | None]]
Headers = Mapping[HTTPHeaderField | str, str | None]


class ApiClient:
    """Typed CRUD operations on top of ``HttpClient``."""

    def __init__(
        self,
        configuration: ApiConfiguration | None = None,
        http_client: HttpClient | None = None,
    ) -> None:
        self._configuration = configuration
        self._http = http_client or HttpClient()

    @property
    def http_client(self) -> HttpClient:
        return self._http

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def request(
        self,
        endpoint: Endpoint,
        method: HTTPMethod,
        *,
        token: str | None = None,
        parameters: Parameters = (),
        headers: Headers | None = None,
        path_parameters: Mapping[str, object] | None = None,
    ) -> RequestBuilder:
        """Return a builder prepared the way every operation prepares it."""
        builder = (
            RequestBuilder(endpoint)
            .method(method)
            .authenticated(token)
            .parameters(parameters)
            .headers(headers or {})
        )
        if path_parameters:
            builder = builder.path_parameters(path_parameters)
        return builder

    def _perform(
        self,
        builder: RequestBuilder,
        target: type[T] | Any,
        unwrap_by: str | None,
    ) -> T:
        request = builder.build(self._configuration)
        return self._http.perform(
            request,
            target,
            unwrap_by=unwrap_by,
            configuration=self._configuration,
        )

    def _perform_without_response(self, builder: RequestBuilder) -> None:
        request = builder.build(self._configuration)
        self._http.perform_without_response(
            request, configuration=self._configuration
        )

    def fetch_resource(
        self,
        endpoint: Endpoint,
        target: type[T],
        *,
        token: str | None = None,
        unwrap_by: str | None = None,
        parameters: Parameters = (),
        headers: Headers | None = None,
        path_parameters: Mapping[str, object] | None = None,
    ) -> T:
        """GET a single resource and decode it into ``target``."""
        builder = self.request(
            endpoint,
            HTTPMethod.GET,
            token=token,
            parameters=parameters,
            headers=headers,
            path_parameters=path_parameters,
        )
        return self._perform(builder, target, unwrap_by)

    def fetch_collection(
        self,
        endpoint: Endpoint,
        target: type[T],
        *,
        page: int | None = None,
        per_page: int = 20,
        token: str | None = None,
        unwrap_by: str | None = None,
        parameters: Parameters = (),
        headers: Headers | None = None,
        path_parameters: Mapping[str, object] | None = None,
    ) -> list[T]:
        """GET a collection and decode it into ``list[target]``.

        With ``page`` set the configuration's pagination parameters are sent
        ahead of ``parameters``. Names are not deduplicated, so a caller
        parameter with the same name is sent as well.
        """
        builder = self.request(
            endpoint,
            HTTPMethod.GET,
            token=token,
            parameters=parameters,
            headers=headers,
            path_parameters=path_parameters,
        )
        if page is not None:
            builder = builder.paged(page, per_page)
        return self._perform(builder, list[target], unwrap_by)

    def create_resource(
        self,
        endpoint: Endpoint,
        target: type[T] | None = None,
        *,
        token: str | None = None,
        unwrap_by: str | None = None,
        parameters: Parameters = (),
        body: Any = None,
        headers: Headers | None = None,
        path_parameters: Mapping[str, object] | None = None,
    ) -> T | None:
        """POST a resource.

        ``parameters`` become a JSON body unless ``body`` is given, which is
        serialized as JSON instead. Without ``target`` only the status is
        checked and None is returned.
        """
        builder = self.request(
            endpoint,
            HTTPMethod.POST,
            token=token,
            parameters=parameters,
            headers=headers,
            path_parameters=path_parameters,
        )
        if body is not None:
            builder = builder.json_body(body)
        if target is None:
            self._perform_without_response(builder)
            return None
        return self._perform(builder, target, unwrap_by)

    def create_resource_with_data(
        self,
        endpoint: Endpoint,
        data: bytes,
        target: type[T],
        *,
        content_type: ContentType | str = "application/octet-stream",
        token: str | None = None,
        unwrap_by: str | None = None,
        headers: Headers | None = None,
        path_parameters: Mapping[str, object] | None = None,
    ) -> T:
        """POST raw bytes with an explicit Content-Type."""
        builder = self.request(
            endpoint,
            HTTPMethod.POST,
            token=token,
            path_parameters=path_parameters,
        )
        builder = builder.body(data, content_type)
        if headers:
            builder = builder.headers(headers)
        return self._perform(builder, target, unwrap_by)

    def update_resource(
        self,
        endpoint: Endpoint,
        target: type[T],
        *,
        token: str | None = None,
        unwrap_by: str | None = None,
        parameters: Parameters = (),
        body: Any = None,
        headers: Headers | None = None,
        path_parameters: Mapping[str, object] | None = None,
    ) -> T:
        """PUT a resource and decode the response."""
        builder = self.request(
            endpoint,
            HTTPMethod.PUT,
            token=token,
            parameters=parameters,
            headers=headers,
            path_parameters=path_parameters,
        )
        if body is not None:
            builder = builder.json_body(body)
        return self._perform(builder, target, unwrap_by)

    def patch_resource(
        self,
        endpoint: Endpoint,
        target: type[T],
        *,
        token: str | None = None,
        unwrap_by: str | None = None,
        parameters: Parameters = (),
        body: Any = None,
        headers: Headers | None = None,
        path_parameters: Mapping[str, object] | None = None,
    ) -> T:
        """PATCH a resource and decode the response."""
        builder = self.request(
            endpoint,
            HTTPMethod.PATCH,
            token=token,
            parameters=parameters,
            headers=headers,
            path_parameters=path_parameters,
        )
        if body is not None:
            builder = builder.json_body(body)
        return self._perform(builder, target, unwrap_by)

    def delete_resource(
        self,
        endpoint: Endpoint,
        target: type[T] | None = None,
        *,
        token: str | None = None,
        unwrap_by: str | None = None,
        parameters: Parameters = (),
        headers: Headers | None = None,
        path_parameters: Mapping[str, object] | None = None,
    ) -> T | None:
        """DELETE a resource.

        Only the status is checked unless ``target`` is given.
        """
        builder = self.request(
            endpoint,
            HTTPMethod.DELETE,
            token=token,
            parameters=parameters,
            headers=headers,
            path_parameters=path_parameters,
        )
        if target is None:
            self._perform_without_response(builder)
            return None
        return self._perform(builder, target, unwrap_by)
