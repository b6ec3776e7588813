"""Request execution for the conduit networking layer.

``HttpClient`` sends built requests through a ``requests.Session`` and runs
the response pipeline: logging, transport-error mapping, status validation
and typed decoding. It also downloads files and checks whether a URL still
answers. One call performs exactly one request; there are no retries.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, TypeVar

import requests

from .api import get_configuration, require_configuration
from .builder import ApiRequest
from .config import DEFAULT_TIMEOUT, ApiConfiguration
from .decoding import decode
from .errors import CustomError, InvalidResponseError, to_api_error
from .logger import log_request, log_response
from .types import Err, Ok, Result
from .validation import is_success, validate

T = TypeVar("T")

DOWNLOAD_CHUNK_SIZE = 64 * 1024


class HttpClient:
    """Executes ``ApiRequest`` objects.

    ``send`` returns a Result with the raw response or the transport error
    plus request metadata. ``perform`` and ``perform_without_response``
    raise ``ApiError`` subclasses instead.
    """

    def __init__(self, session: requests.Session | None = None) -> None:
        """Create a new HttpClient.

        Args:
            session: Session to send through; a fresh one is created when
                omitted.
        """
        self._session = session or requests.Session()

    @property
    def session(self) -> requests.Session:
        return self._session

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _build_meta(
        self,
        request: ApiRequest,
        response: requests.Response | None,
        final_error: str | None = None,
    ) -> dict[str, Any]:
        """Construct metadata dictionary from request and response."""
        meta: dict[str, Any] = {}
        meta["method"] = request.method
        meta["url"] = request.url
        meta["timeout_s"] = request.timeout
        meta["cache_policy"] = request.cache_policy.value

        if response is not None:
            meta["status_code"] = response.status_code
            meta["url"] = response.url or request.url
            meta["reason"] = response.reason
            try:
                meta["elapsed_s"] = response.elapsed.total_seconds()
            except AttributeError:
                pass  # Responses built by hand carry no elapsed time
        if final_error is not None:
            meta["final_error"] = final_error

        return meta

    def send(
        self, request: ApiRequest
    ) -> Result[requests.Response, Exception]:
        """Send ``request`` once.

        Returns:
            Ok with the response for any HTTP status, or Err with the
            transport exception when no response was received.
        """
        try:
            response = self._session.send(
                request.prepared, timeout=request.timeout
            )
        except requests.exceptions.RequestException as exc:
            return Err(
                exc,
                meta=self._build_meta(
                    request, exc.response, final_error=type(exc).__name__
                ),
            )
        return Ok(response, meta=self._build_meta(request, response))

    def _execute(
        self, request: ApiRequest, configuration: ApiConfiguration | None
    ) -> tuple[bytes, requests.Response, ApiConfiguration]:
        config = require_configuration(configuration)
        log_request(request)

        result = self.send(request)
        if not result.ok:
            log_response(error=result.error, url=request.url)
            raise to_api_error(result.error)

        response = result.value
        log_response(response=response, url=request.url)
        if response is None or response.content is None:
            raise InvalidResponseError()
        return response.content, response, config

    def perform(
        self,
        request: ApiRequest,
        target: type[T] | Any,
        *,
        unwrap_by: str | None = None,
        configuration: ApiConfiguration | None = None,
    ) -> T:
        """Send ``request`` and decode the body into ``target``.

        Args:
            request: The built request.
            target: Type to decode into (model class, ``list[Model]``, ...).
            unwrap_by: Optional envelope key holding the payload.
            configuration: Configuration to use instead of the installed one.

        Raises:
            NotConfiguredError: if no configuration is available.
            NetworkError: if the transport failed.
            StatusCodeError: for non-2xx responses.
            InvalidJSONError: if the body does not decode into ``target``.
        """
        data, response, config = self._execute(request, configuration)
        validated = validate(data, response, debug=config.debug)
        return decode(validated, target, unwrap_by)

    def perform_without_response(
        self,
        request: ApiRequest,
        *,
        configuration: ApiConfiguration | None = None,
    ) -> None:
        """Send ``request`` and validate the status, ignoring the body."""
        data, response, config = self._execute(request, configuration)
        validate(data, response, debug=config.debug)


    def _get_timeout(self, timeout: float | None) -> float:
        if timeout is not None:
            return timeout
        config = get_configuration()
        return config.timeout if config is not None else DEFAULT_TIMEOUT

    def download(
        self,
        url: str,
        destination: str | os.PathLike[str],
        *,
        timeout: float | None = None,
    ) -> requests.Response:
        """Stream ``url`` into the file at ``destination``.

        An existing file at ``destination`` is replaced. The body is written
        to a temporary file next to it first, so a failed download leaves
        the old file in place. The response is returned whatever its status;
        callers check ``status_code``.

        Args:
            url: Absolute URL to request.
            destination: Path of the file to create or replace.
            timeout: Override timeout in seconds; defaults to the installed
                configuration's timeout.

        Raises:
            NetworkError: if the transport failed.
            CustomError: if the file cannot be written.
        """
        target = Path(destination)
        try:
            response = self._session.get(
                url, timeout=self._get_timeout(timeout), stream=True
            )
        except requests.exceptions.RequestException as exc:
            log_response(error=exc, url=url)
            raise to_api_error(exc) from exc

        try:
            log_response(response=response, url=url)
            self._write_body(response, target)
        finally:
            response.close()
        return response

    def _write_body(self, response: requests.Response, target: Path) -> None:
        try:
            handle, partial = tempfile.mkstemp(
                dir=target.parent, prefix=f".{target.name}.", suffix=".part"
            )
        except OSError as exc:
            raise CustomError(f"Cannot create file {target}: {exc}") from exc

        try:
            with os.fdopen(handle, "wb") as stream:
                for chunk in response.iter_content(DOWNLOAD_CHUNK_SIZE):
                    stream.write(chunk)
            os.replace(partial, target)
        except requests.exceptions.RequestException as exc:
            os.unlink(partial)
            raise to_api_error(exc) from exc
        except OSError as exc:
            if os.path.exists(partial):
                os.unlink(partial)
            raise CustomError(f"Cannot create file {target}: {exc}") from exc

    def has_url_expired(
        self, url: str, *, timeout: float | None = None
    ) -> bool:
        """Return True when ``url`` no longer answers with a 2xx status.

        Transport failures count as expired. The body is not read.
        """
        try:
            response = self._session.get(
                url, timeout=self._get_timeout(timeout), stream=True
            )
        except requests.exceptions.RequestException:
            return True
        try:
            return not is_success(response.status_code)
        finally:
            response.close()
