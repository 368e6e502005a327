# src/quickfire/core/transport.py
"""
Transport collaborator: wire-level types and a requests-backed transport.

The orchestrator never talks to the network itself. It hands a WireRequest
to a Transport and gets a RawResponse back through a completion callback.
"""

import logging
import queue
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional

import requests
from requests.exceptions import RequestException

from .config import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass
class WireRequest:
    """Fully built HTTP request."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class RawResponse:
    """
    Outcome of one exchange as seen by the transport.

    Attributes:
        content: Response bytes (None if nothing was received)
        status_code: HTTP status (None if no HTTP response was received)
        error: Transport error message, if any
    """

    content: Optional[bytes] = None
    status_code: Optional[int] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class UploadProgress:
    """Snapshot of an upload in flight."""

    bytes_sent: int
    total_bytes: int

    @property
    def fraction(self) -> float:
        if self.total_bytes <= 0:
            return 0.0
        return self.bytes_sent / self.total_bytes


CompletionCallback = Callable[[RawResponse], None]
ProgressCallback = Callable[[UploadProgress], None]


class ProgressStream:
    """
    Finite, lazily consumed sequence of upload progress snapshots.

    Producer side calls push() and finally close(); iterating blocks until
    the next snapshot arrives and stops after close().

    Example:
        >>> task = manager.upload(AvatarUpload(field))
        >>> for progress in task.progress:
        ...     print(f"{progress.fraction:.0%}")
        >>> task.result.wait()
    """

    _END = object()

    def __init__(self):
        self._queue: "queue.Queue" = queue.Queue()
        self._closed = threading.Event()

    def push(self, progress: UploadProgress) -> None:
        if not self._closed.is_set():
            self._queue.put(progress)

    def close(self, *_args) -> None:
        """Mark the stream finished. Idempotent; accepts and ignores arguments."""
        if not self._closed.is_set():
            self._closed.set()
            self._queue.put(self._END)

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def __iter__(self) -> Iterator[UploadProgress]:
        while True:
            item = self._queue.get()
            if item is self._END:
                # Let other iterators terminate too
                self._queue.put(self._END)
                return
            yield item


class ProgressReader:
    """
    File-like wrapper around an upload body that reports bytes read.

    requests/urllib3 pull the body through read() in blocks, so every read
    is one progress step. len() gives requests the Content-Length.
    """

    def __init__(self, data: bytes, callback: Optional[ProgressCallback] = None):
        self._data = data
        self._position = 0
        self._callback = callback

    def __len__(self) -> int:
        return len(self._data)

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            size = len(self._data) - self._position
        chunk = self._data[self._position:self._position + size]
        self._position += len(chunk)
        if chunk and self._callback is not None:
            self._callback(UploadProgress(self._position, len(self._data)))
        return chunk

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self.read(8192)
            if not chunk:
                return
            yield chunk


class Transport(ABC):
    """
    Asynchronous transport interface.

    Both methods return immediately and deliver exactly one RawResponse to
    completion, from whatever thread the transport uses.
    """

    @abstractmethod
    def send(self, request: WireRequest, completion: CompletionCallback) -> None:
        """Plain request/response exchange."""

    @abstractmethod
    def upload(
        self,
        request: WireRequest,
        payload: bytes,
        progress: Optional[ProgressCallback],
        completion: CompletionCallback,
    ) -> None:
        """Upload payload as the request body, reporting progress."""

    def close(self) -> None:
        """Release resources."""


class RequestsTransport(Transport):
    """
    Transport backed by requests.Session and a worker thread pool.

    HTTP error statuses are returned as-is; classification is the
    orchestrator's job. requests exceptions become RawResponse.error.

    Example:
        >>> transport = RequestsTransport(max_workers=8)
        >>> manager = NetworkManager(transport=transport)
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        executor: Optional[Executor] = None,
        max_workers: int = 4,
    ):
        self._session = session or requests.Session()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="quickfire"
        )

    @property
    def session(self) -> requests.Session:
        return self._session

    def send(self, request: WireRequest, completion: CompletionCallback) -> None:
        self._executor.submit(self._perform, request, request.body, completion)

    def upload(
        self,
        request: WireRequest,
        payload: bytes,
        progress: Optional[ProgressCallback],
        completion: CompletionCallback,
    ) -> None:
        body = ProgressReader(payload, progress)
        self._executor.submit(self._perform, request, body, completion)

    def _perform(self, request: WireRequest, body, completion: CompletionCallback) -> None:
        # Completion must fire exactly once, whatever the body reader raises
        try:
            raw = self.perform(request, body)
        except Exception as e:
            logger.exception("Exchange %s %s failed outside of requests", request.method, request.url)
            raw = RawResponse(error=str(e) or e.__class__.__name__)
        completion(raw)

    def perform(self, request: WireRequest, body=None) -> RawResponse:
        """
        Run one exchange synchronously on the calling thread.

        Args:
            request: Wire request
            body: Body override (bytes or file-like); defaults to request.body
        """
        if body is None:
            body = request.body
        try:
            response = self._session.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                data=body,
                timeout=request.timeout,
            )
        except RequestException as e:
            response = getattr(e, 'response', None)
            return RawResponse(
                content=response.content if response is not None else None,
                status_code=response.status_code if response is not None else None,
                error=str(e) or e.__class__.__name__,
            )

        return RawResponse(content=response.content, status_code=response.status_code)

    def close(self) -> None:
        """Закрывает сессию и пул потоков (если пул создан транспортом)."""
        if self._owns_executor:
            self._executor.shutdown(wait=False)
        self._session.close()
