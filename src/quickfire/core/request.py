"""
Declarative request model and the pure functions that turn it into
URL, query string and body bytes.
"""

import json
import re
from enum import Enum
from typing import (
    TYPE_CHECKING, Any, Dict, Mapping, NamedTuple, Optional, Protocol, Sequence, Type, Union,
    runtime_checkable,
)
from urllib.parse import quote, urlsplit

from .config import NetworkConfig, get_default_config
from .deferred import Deferred
from .exceptions import InvalidURLError, MalformedEndpointError, ParsingError
from .multipart import MultipartPayload

if TYPE_CHECKING:
    from concurrent.futures import Executor
    from .network_manager import NetworkManager, ProgressCallback


ParamValue = Union[str, Sequence[str]]

# Query-allowed characters minus RFC 3986 gen-delims ":#[]@" and
# sub-delims "!$&'()*+,;=". "?" and "/" stay literal (RFC 3986, section 3.4).
QUERY_SAFE_CHARS = "/?"

_WHITESPACE_RE = re.compile(r"\s")


class HttpMethod(str, Enum):
    """Supported HTTP verbs."""
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, name: Optional[str]) -> "HttpMethod":
        """Case-insensitive lookup; anything unknown is treated as GET."""
        if name:
            try:
                return cls(name.upper())
            except ValueError:
                pass
        return cls.GET

    @property
    def has_body(self) -> bool:
        return self in (HttpMethod.POST, HttpMethod.PUT)

    @property
    def has_query(self) -> bool:
        return self in (HttpMethod.GET, HttpMethod.DELETE)


class BodyMode(str, Enum):
    """How POST/PUT parameters are sent."""
    FORM_URL_ENCODED = "form_url_encoded"
    JSON = "json"
    MULTIPART = "multipart"


class Endpoint(NamedTuple):
    """Parsed "METHOD /path" pair."""
    method_name: str
    path: str


@runtime_checkable
class NetworkResponse(Protocol):
    """
    Response type capable of building itself from parsed JSON.

    Example:
        >>> class ProductDetail:
        ...     def __init__(self, name):
        ...         self.name = name
        ...
        ...     @classmethod
        ...     def from_json(cls, data):
        ...         if isinstance(data, dict) and isinstance(data.get("title"), str):
        ...             return cls(data["title"])
        ...         return None
    """

    @classmethod
    def from_json(cls, data: Any) -> Optional["NetworkResponse"]:
        ...


# ==================== Pure transforms ====================

def parse_endpoint(endpoint: str) -> Endpoint:
    """
    Split "METHOD /path" into its two parts.

    Raises:
        MalformedEndpointError: unless there are exactly two non-empty tokens

    Examples:
        >>> parse_endpoint("GET /api/v1/x/")
        Endpoint(method_name='GET', path='/api/v1/x/')
    """
    parts = endpoint.split(" ") if isinstance(endpoint, str) else []
    if len(parts) != 2 or not all(parts):
        raise MalformedEndpointError(str(endpoint))
    return Endpoint(method_name=parts[0], path=parts[1])


def escape(value: str) -> str:
    """
    Percent-encode a query value.

    Only unreserved characters plus "/" and "?" are left as is.

    Examples:
        >>> escape("a b&c=d")
        'a%20b%26c%3Dd'
    """
    return quote(value, safe=QUERY_SAFE_CHARS)


def parameter_string(key: str, value: Any) -> str:
    """Render one parameter; lists repeat the key for every element."""
    if isinstance(value, str):
        return f"{key}={escape(value)}"
    if isinstance(value, (list, tuple)):
        return "&".join(f"{key}={escape(str(item))}" for item in value)
    return f"{key}={escape(str(value))}"


def build_query_string(parameters: Optional[Mapping[str, Any]]) -> Optional[str]:
    """
    Join parameters as key=value pairs, keeping mapping order.

    Returns:
        None when parameters is None, otherwise the joined string

    Examples:
        >>> build_query_string({"q": "shoes", "tag": ["a", "b"]})
        'q=shoes&tag=a&tag=b'
    """
    if parameters is None:
        return None
    return "&".join(parameter_string(key, value) for key, value in parameters.items())


def build_url(config: NetworkConfig, spec: "RequestSpec") -> str:
    """
    base_url + path, plus "?query" for GET/DELETE with parameters.

    Raises:
        InvalidURLError: malformed endpoint or not an absolute http(s) URL
    """
    try:
        endpoint = parse_endpoint(spec.endpoint)
    except MalformedEndpointError as e:
        raise InvalidURLError(e.message) from e

    url = f"{config.base_url}{endpoint.path}"
    if spec.method.has_query and spec.parameters:
        url = f"{url}?{build_query_string(spec.parameters)}"

    if _WHITESPACE_RE.search(url):
        raise InvalidURLError("URL contains whitespace", url)
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidURLError("URL is not absolute", url)

    return url


def build_body(spec: "RequestSpec") -> Optional[bytes]:
    """
    Encode parameters as the POST/PUT body.

    Returns:
        Form-urlencoded or JSON bytes (values JSON cannot represent go
        through str()), None for GET/DELETE or no parameters
    """
    if not spec.method.has_body or spec.parameters is None:
        return None
    if spec.body_mode is BodyMode.JSON:
        return json.dumps(dict(spec.parameters), default=str).encode("utf-8")
    return build_query_string(spec.parameters).encode("utf-8")


# ==================== Request model ====================

class RequestSpec:
    """
    Transport-agnostic description of one HTTP call.

    Subclass to declare an API endpoint:

        >>> class ProductDetailRequest(RequestSpec):
        ...     response_type = ProductDetail
        ...
        ...     def __init__(self, product_id):
        ...         super().__init__(f"GET /api/v1/products/{product_id}/")
        >>>
        >>> ProductDetailRequest("1111").execute().then(show).catch(report)

    Or build one inline:

        >>> RequestSpec("POST /api/v1/login/", parameters={"user": "alice"},
        ...             body_mode=BodyMode.JSON).execute()
    """

    endpoint: str = ""
    body_mode: BodyMode = BodyMode.FORM_URL_ENCODED
    response_type: Optional[Type[NetworkResponse]] = None

    def __init__(
        self,
        endpoint: Optional[str] = None,
        parameters: Optional[Mapping[str, ParamValue]] = None,
        headers: Optional[Dict[str, str]] = None,
        body_mode: Optional[BodyMode] = None,
        multipart: Optional[MultipartPayload] = None,
        response_type: Optional[Type[NetworkResponse]] = None,
    ):
        if endpoint is not None:
            self.endpoint = endpoint
        self.parameters = parameters
        self.headers = dict(headers) if headers else {}
        self.multipart = multipart
        if body_mode is not None:
            self.body_mode = body_mode
        elif multipart is not None:
            self.body_mode = BodyMode.MULTIPART
        if response_type is not None:
            self.response_type = response_type

    @property
    def method(self) -> HttpMethod:
        """Parsed verb; GET when the endpoint cannot be parsed."""
        try:
            return HttpMethod.parse(parse_endpoint(self.endpoint).method_name)
        except MalformedEndpointError:
            return HttpMethod.GET

    @property
    def path(self) -> Optional[str]:
        try:
            return parse_endpoint(self.endpoint).path
        except MalformedEndpointError:
            return None

    def full_url(self, config: Optional[NetworkConfig] = None) -> Optional[str]:
        """base_url + path without the query string, None if malformed."""
        path = self.path
        if path is None:
            return None
        return f"{(config or get_default_config()).base_url}{path}"

    def decode(self, payload: Any) -> Any:
        """
        Convert a successful payload through response_type.

        Raises:
            ParsingError: from_json returned None or choked on the payload
        """
        if self.response_type is None:
            return payload
        try:
            result = self.response_type.from_json(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise ParsingError(f"Parsing Error: {e}") from e
        if result is None:
            raise ParsingError()
        return result

    def execute(
        self,
        manager: Optional["NetworkManager"] = None,
        config: Optional[NetworkConfig] = None,
        on_progress: Optional["ProgressCallback"] = None,
        callback_executor: Optional["Executor"] = None,
    ) -> Deferred:
        """
        Perform the request.

        Args:
            manager: Orchestrator to use (default: NetworkManager.shared())
            config: Config for this call (default: process-wide config)
            on_progress: Upload progress callback (multipart only)
            callback_executor: Delivery context override

        Returns:
            Deferred settled with the decoded response or a NetworkError
        """
        if manager is None:
            from .network_manager import NetworkManager
            manager = NetworkManager.shared()

        deferred: Deferred = Deferred()

        def on_success(payload: Any) -> None:
            try:
                deferred.fulfill(self.decode(payload))
            except ParsingError as e:
                deferred.reject(e)

        manager.execute(
            self,
            config=config,
            on_progress=on_progress,
            callback_executor=callback_executor,
        ).then(on_success).catch(deferred.reject)

        return deferred

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.endpoint!r}>"
