# src/quickfire/core/network_manager.py
"""
Transport orchestrator: RequestSpec -> WireRequest -> Transport -> Deferred.
"""

import json
import logging
import threading
import time
import uuid
from concurrent.futures import Executor
from typing import Any, Callable, Dict, NamedTuple, Optional, TYPE_CHECKING

from .config import NetworkConfig, get_default_config
from .deferred import Deferred
from .exceptions import CustomError, InvalidError, InvalidURLError, NetworkError, ServerStatusError
from .request import BodyMode, HttpMethod, RequestSpec, build_body, build_url
from .transport import (
    ProgressCallback,
    ProgressStream,
    RawResponse,
    RequestsTransport,
    Transport,
    UploadProgress,
    WireRequest,
)

# Delayed import to avoid circular dependency
if TYPE_CHECKING:
    from .logging import LoggingConfig, QuickFireLogger

logger = logging.getLogger(__name__)

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"


class ClassifiedResult(NamedTuple):
    """Outcome of response classification: exactly one of payload/error matters."""
    ok: bool
    payload: Any = None
    error: Optional[NetworkError] = None


class UploadTask(NamedTuple):
    """Terminal result plus the stream of progress snapshots of one upload."""
    result: Deferred
    progress: ProgressStream


def _fallback_error(raw: RawResponse) -> NetworkError:
    if raw.error:
        return CustomError(raw.error)
    return InvalidError()


def classify_response(raw: RawResponse, method: HttpMethod) -> ClassifiedResult:
    """
    Классифицировать сырой ответ транспорта в успех или ошибку.

    Порядок:
        1. Тело - JSON и ответ получен: 400 -> ServerStatusError(400),
           2xx -> успех с разобранным JSON, иначе CustomError/InvalidError.
        2. Тело - UTF-8 текст: пустой текст на DELETE -> успех с "",
           иначе NetworkError.from_status(status_code).
        3. Иначе CustomError(сообщение транспорта) или InvalidError.

    Args:
        raw: Ответ транспорта
        method: HTTP метод запроса

    Returns:
        ClassifiedResult

    Examples:
        >>> classify_response(RawResponse(b'{"a": 1}', 200), HttpMethod.GET).payload
        {'a': 1}
        >>> classify_response(RawResponse(b"", 204), HttpMethod.DELETE).payload
        ''
    """
    if raw.content is not None and raw.status_code is not None:
        try:
            parsed = json.loads(raw.content)
        except ValueError:
            pass
        else:
            if raw.status_code == 400:
                return ClassifiedResult(False, error=ServerStatusError(400))
            if 200 <= raw.status_code <= 299:
                return ClassifiedResult(True, payload=parsed)
            return ClassifiedResult(False, error=_fallback_error(raw))

    if raw.content is not None:
        try:
            text = raw.content.decode("utf-8")
        except UnicodeDecodeError:
            pass
        else:
            if text == "" and method is HttpMethod.DELETE:
                return ClassifiedResult(True, payload=text)
            return ClassifiedResult(False, error=NetworkError.from_status(raw.status_code))

    return ClassifiedResult(False, error=_fallback_error(raw))


class NetworkManager:
    """
    Выполняет RequestSpec через Transport и доставляет результат в Deferred.

    Features:
        - Content negotiation (JSON, form-urlencoded, multipart)
        - Upload progress (callback, ProgressStream, tqdm bar)
        - Callbacks на заданном executor (по умолчанию - в потоке транспорта)
        - Структурированное логирование и curl-репродукция в debug режиме

    Example:
        >>> with NetworkManager() as manager:
        ...     spec = RequestSpec("GET /api/v1/products/", parameters={"q": "shoes"})
        ...     products = manager.execute(spec).wait(timeout=30)
    """

    _shared: Optional["NetworkManager"] = None
    _shared_lock = threading.Lock()

    def __init__(
        self,
        transport: Optional[Transport] = None,
        logging: Optional['LoggingConfig'] = None,
    ):
        """
        Args:
            transport: Transport to dispatch through (default: RequestsTransport)
            logging: Logging configuration (None = no request logging)
        """
        self._transport = transport or RequestsTransport()

        logger_instance: Optional['QuickFireLogger'] = None
        if logging is not None:
            from .logging import QuickFireLogger
            logger_instance = QuickFireLogger(config=logging, name="quickfire.network")
        self._logger = logger_instance

    @classmethod
    def shared(cls) -> "NetworkManager":
        """Process-wide manager used by RequestSpec.execute() by default."""
        with cls._shared_lock:
            if cls._shared is None:
                cls._shared = cls()
            return cls._shared

    @property
    def transport(self) -> Transport:
        return self._transport

    # ==================== Lifecycle ====================

    def close(self) -> None:
        """Закрывает транспорт и логгер."""
        if self._logger is not None:
            self._logger.close()
        self._transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # ==================== Building ====================

    def build_headers(self, spec: RequestSpec, config: NetworkConfig) -> Dict[str, str]:
        """
        Default headers + spec headers, then negotiated Content-Type.
        """
        headers = config.default_headers()
        headers.update(spec.headers)

        if spec.method is HttpMethod.GET:
            headers["Content-Type"] = CONTENT_TYPE_JSON
        elif spec.multipart is not None:
            headers["Content-Type"] = spec.multipart.content_type
            headers["Content-Length"] = str(len(spec.multipart))
        elif spec.body_mode is BodyMode.JSON:
            headers["Content-Type"] = CONTENT_TYPE_JSON
        else:
            headers["Content-Type"] = CONTENT_TYPE_FORM

        return headers

    def build_request(self, spec: RequestSpec, config: NetworkConfig) -> WireRequest:
        """
        Build the wire request.

        Raises:
            InvalidURLError: URL could not be built
        """
        url = build_url(config, spec)
        body = spec.multipart.content if spec.multipart is not None else build_body(spec)
        return WireRequest(
            method=spec.method.value,
            url=url,
            headers=self.build_headers(spec, config),
            body=body,
            timeout=config.timeout,
        )

    # ==================== Execution ====================

    def execute(
        self,
        spec: RequestSpec,
        config: Optional[NetworkConfig] = None,
        on_progress: Optional[ProgressCallback] = None,
        callback_executor: Optional[Executor] = None,
    ) -> Deferred:
        """
        Выполнить запрос.

        Никогда не выбрасывает исключений: любые ошибки (включая невалидный
        URL) приходят через failure канал Deferred.

        Args:
            spec: Описание запроса
            config: Конфиг вызова (None = процессный default)
            on_progress: Callback прогресса загрузки (только multipart)
            callback_executor: Где вызывать callbacks (переопределяет config)

        Returns:
            Deferred с разобранным JSON (или "" для пустого DELETE)
        """
        config = config or get_default_config()
        executor = callback_executor or config.callback_executor
        deferred: Deferred = Deferred()
        correlation_id = str(uuid.uuid4())

        try:
            request = self.build_request(spec, config)
        except InvalidURLError as e:
            if self._logger:
                self._logger.warning(
                    "Request rejected before dispatch",
                    endpoint=spec.endpoint,
                    error=e.message,
                    correlation_id=correlation_id,
                )
            deferred.reject(InvalidError())
            return deferred
        except (TypeError, ValueError) as e:
            if self._logger:
                self._logger.warning(
                    "Request body could not be encoded",
                    endpoint=spec.endpoint,
                    error=str(e),
                    correlation_id=correlation_id,
                )
            deferred.reject(CustomError(f"Request body could not be encoded: {e}"))
            return deferred

        if (spec.multipart is not None and spec.multipart.is_empty) or (
            spec.body_mode is BodyMode.MULTIPART and spec.multipart is None
        ):
            deferred.reject(CustomError("Multipart body could not be encoded"))
            return deferred

        start_time = time.time()

        if self._logger:
            self._logger.info(
                "Request started",
                method=request.method,
                url=request.url,
                correlation_id=correlation_id,
                multipart=spec.multipart is not None,
            )

        if config.debug:
            self._emit_curl(request, correlation_id)

        def deliver(action: Callable[[], None]) -> None:
            if executor is None:
                action()
            else:
                executor.submit(action)

        def complete(raw: RawResponse) -> None:
            result = classify_response(raw, spec.method)
            self._log_completion(request, raw, result, start_time, correlation_id)
            if result.ok:
                deliver(lambda: deferred.fulfill(result.payload))
            else:
                deliver(lambda: deferred.reject(result.error))

        if spec.multipart is not None:
            def report(snapshot: UploadProgress) -> None:
                # A failing progress observer must not abort the upload
                try:
                    on_progress(snapshot)
                except Exception:
                    logger.exception("Upload progress callback raised")

            def progress(snapshot: UploadProgress) -> None:
                if on_progress is not None:
                    deliver(lambda: report(snapshot))

            def upload_complete(raw: RawResponse) -> None:
                # Upload transport failures keep their message verbatim
                if raw.error:
                    self._log_completion(
                        request, raw, ClassifiedResult(False, error=CustomError(raw.error)),
                        start_time, correlation_id,
                    )
                    deliver(lambda: deferred.reject(CustomError(raw.error)))
                else:
                    complete(raw)

            self._transport.upload(request, spec.multipart.content, progress, upload_complete)
        else:
            self._transport.send(request, complete)

        return deferred

    def upload(
        self,
        spec: RequestSpec,
        config: Optional[NetworkConfig] = None,
        callback_executor: Optional[Executor] = None,
        show_progress: bool = False,
    ) -> UploadTask:
        """
        Upload a multipart request, exposing progress as a stream.

        Args:
            spec: Request with a multipart payload
            config: Config for this call
            callback_executor: Delivery context override
            show_progress: Also render a tqdm progress bar

        Returns:
            UploadTask(result, progress); progress ends when result settles

        Example:
            >>> task = manager.upload(spec)
            >>> for snapshot in task.progress:
            ...     print(snapshot.bytes_sent, "/", snapshot.total_bytes)
        """
        stream = ProgressStream()
        bar = None
        if show_progress:
            from ..utils.progress import UploadProgressBar
            bar = UploadProgressBar(description=spec.path)

        def on_progress(snapshot: UploadProgress) -> None:
            stream.push(snapshot)
            if bar is not None:
                bar(snapshot)

        result = self.execute(
            spec,
            config=config,
            on_progress=on_progress,
            callback_executor=callback_executor,
        )
        result.then(stream.close).catch(stream.close)
        if bar is not None:
            result.then(bar.close).catch(bar.close)

        return UploadTask(result=result, progress=stream)

    # ==================== Diagnostics ====================

    def _emit_curl(self, request: WireRequest, correlation_id: str) -> None:
        from ..utils.curl import to_curl

        command = to_curl(request)
        if self._logger:
            self._logger.debug("Equivalent curl command", curl=command, correlation_id=correlation_id)
        else:
            logger.debug("Equivalent curl command: %s", command)

    def _log_completion(
        self,
        request: WireRequest,
        raw: RawResponse,
        result: ClassifiedResult,
        start_time: float,
        correlation_id: str,
    ) -> None:
        if not self._logger:
            return

        duration_ms = round((time.time() - start_time) * 1000, 2)
        if result.ok:
            self._logger.info(
                "Request completed",
                method=request.method,
                url=request.url,
                status_code=raw.status_code,
                duration_ms=duration_ms,
                response_size=len(raw.content or b""),
                correlation_id=correlation_id,
            )
        else:
            self._logger.error(
                "Request failed",
                method=request.method,
                url=request.url,
                status_code=raw.status_code,
                duration_ms=duration_ms,
                error=result.error.description,
                error_kind=result.error.kind.value,
                correlation_id=correlation_id,
            )
