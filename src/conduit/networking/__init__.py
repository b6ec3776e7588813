"""Request building, execution and response decoding."""

from .api import (
    configure,
    get_configuration,
    is_configured,
    require_configuration,
    reset,
    set_logging_level,
)
from .builder import ApiRequest, RequestBuilder
from .client import HttpClient
from .config import ApiConfiguration, ConfigurationKey
from .decoding import decode, decode_unwrapped, unwrap_value
from .endpoint import ApiEndpoint, endpoint_url, full_path, substitute
from .errors import (
    ApiError,
    CustomError,
    EmptyDataError,
    InvalidBodyError,
    InvalidJSONError,
    InvalidKeyError,
    InvalidResponseError,
    InvalidURLError,
    MissingKeyError,
    NetworkError,
    NotConfiguredError,
    RequestTimeoutError,
    ServerError,
    StatusCodeError,
)
from .http import CachePolicy, ContentType, HTTPHeaderField, HTTPMethod
from .logger import LogLevel
from .operations import ApiClient
from .parameters import (
    HeaderItem,
    QueryItem,
    URLParameter,
    header_items,
    query_items,
)
from .validation import validate

__all__ = [
    "ApiClient",
    "ApiConfiguration",
    "ApiEndpoint",
    "ApiError",
    "ApiRequest",
    "CachePolicy",
    "ConfigurationKey",
    "ContentType",
    "CustomError",
    "EmptyDataError",
    "HTTPHeaderField",
    "HTTPMethod",
    "HeaderItem",
    "HttpClient",
    "InvalidBodyError",
    "InvalidJSONError",
    "InvalidKeyError",
    "InvalidResponseError",
    "InvalidURLError",
    "LogLevel",
    "MissingKeyError",
    "NetworkError",
    "NotConfiguredError",
    "QueryItem",
    "RequestBuilder",
    "RequestTimeoutError",
    "ServerError",
    "StatusCodeError",
    "URLParameter",
    "configure",
    "decode",
    "decode_unwrapped",
    "endpoint_url",
    "full_path",
    "get_configuration",
    "header_items",
    "is_configured",
    "query_items",
    "require_configuration",
    "reset",
    "set_logging_level",
    "substitute",
    "unwrap_value",
    "validate",
]
