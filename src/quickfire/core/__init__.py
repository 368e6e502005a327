"""Core QuickFire модули."""

from .config import NetworkConfig, get_default_config, set_default_config, set_base_url
from .deferred import Deferred, DeferredState
from .exceptions import (
    QuickFireException,
    ErrorKind,
    NetworkError,
    InvalidError,
    ServerStatusError,
    ParsingError,
    UserAbandonedError,
    CustomError,
    MalformedEndpointError,
    InvalidURLError,
    ConfigurationError,
)
from .multipart import MultipartEncoder, MultipartField, MultipartPayload
from .request import (
    BodyMode,
    Endpoint,
    HttpMethod,
    NetworkResponse,
    RequestSpec,
    build_body,
    build_query_string,
    build_url,
    escape,
    parse_endpoint,
)
from .transport import (
    ProgressReader,
    ProgressStream,
    RawResponse,
    RequestsTransport,
    Transport,
    UploadProgress,
    WireRequest,
)
from .network_manager import ClassifiedResult, NetworkManager, UploadTask, classify_response

__all__ = [
    # Config
    "NetworkConfig",
    "get_default_config",
    "set_default_config",
    "set_base_url",
    # Deferred
    "Deferred",
    "DeferredState",
    # Exceptions
    "QuickFireException",
    "ErrorKind",
    "NetworkError",
    "InvalidError",
    "ServerStatusError",
    "ParsingError",
    "UserAbandonedError",
    "CustomError",
    "MalformedEndpointError",
    "InvalidURLError",
    "ConfigurationError",
    # Multipart
    "MultipartEncoder",
    "MultipartField",
    "MultipartPayload",
    # Request model
    "BodyMode",
    "Endpoint",
    "HttpMethod",
    "NetworkResponse",
    "RequestSpec",
    "build_body",
    "build_query_string",
    "build_url",
    "escape",
    "parse_endpoint",
    # Transport
    "ProgressReader",
    "ProgressStream",
    "RawResponse",
    "RequestsTransport",
    "Transport",
    "UploadProgress",
    "WireRequest",
    # Orchestrator
    "ClassifiedResult",
    "NetworkManager",
    "UploadTask",
    "classify_response",
]
