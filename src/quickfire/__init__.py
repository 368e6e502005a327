"""QuickFire - declarative HTTP requests delivered through deferred values."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.config import NetworkConfig, get_default_config, set_default_config, set_base_url
from .core.deferred import Deferred, DeferredState
from .core.exceptions import (
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
from .core.multipart import MultipartEncoder, MultipartField, MultipartPayload
from .core.request import BodyMode, HttpMethod, NetworkResponse, RequestSpec
from .core.transport import RequestsTransport, Transport, UploadProgress
from .core.network_manager import NetworkManager, UploadTask
from .core.env_config import load_from_env

# Users can configure logging themselves using logging.getLogger('quickfire')
logging.getLogger('quickfire').addHandler(logging.NullHandler())

try:
    __version__ = version("quickfire")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Core
    "NetworkManager",
    "RequestSpec",
    "Deferred",
    "DeferredState",
    "UploadTask",

    # Request model
    "HttpMethod",
    "BodyMode",
    "NetworkResponse",

    # Multipart
    "MultipartEncoder",
    "MultipartField",
    "MultipartPayload",

    # Transport
    "Transport",
    "RequestsTransport",
    "UploadProgress",

    # Config
    "NetworkConfig",
    "get_default_config",
    "set_default_config",
    "set_base_url",
    "load_from_env",

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

    "__version__",
]
