"""
Single-assignment deferred value.

A Deferred starts pending and settles exactly once, either fulfilled with a
value or rejected with an error. Subscribers registered before settlement run
at settlement time in registration order; subscribers registered afterwards
run immediately with the stored outcome.
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DeferredState(str, Enum):
    """Lifecycle states of a Deferred."""
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


class Deferred(Generic[T]):
    """
    Promise-like container delivering one asynchronous result.

    Thread-safe: settlement and subscription are serialized by an internal
    lock and callbacks run outside of it. A subscriber that arrives from
    another thread while earlier callbacks are still being delivered is
    queued behind them, so subscription order holds across threads.

    Example:
        >>> deferred = Deferred()
        >>> deferred.then(print).catch(lambda e: print("failed", e))
        >>> deferred.fulfill({"id": 1})
        {'id': 1}
        >>> deferred.then(print)  # late subscriber still fires
        {'id': 1}
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._settled = threading.Event()
        self._state = DeferredState.PENDING
        self._value: Optional[T] = None
        self._error: Optional[BaseException] = None
        self._delivering = False
        self._success_callbacks: List[Callable[[T], Any]] = []
        self._failure_callbacks: List[Callable[[BaseException], Any]] = []

    # ==================== Subscription ====================

    def then(self, callback: Callable[[T], Any]) -> "Deferred[T]":
        """
        Subscribe to the success channel.

        Args:
            callback: Called with the value once fulfilled

        Returns:
            self, for chaining
        """
        return self._subscribe(DeferredState.FULFILLED, callback)

    def catch(self, callback: Callable[[BaseException], Any]) -> "Deferred[T]":
        """
        Subscribe to the failure channel.

        Args:
            callback: Called with the error once rejected

        Returns:
            self, for chaining
        """
        return self._subscribe(DeferredState.REJECTED, callback)

    def _subscribe(self, channel: DeferredState, callback: Callable[[Any], Any]) -> "Deferred[T]":
        callbacks = (
            self._success_callbacks if channel is DeferredState.FULFILLED
            else self._failure_callbacks
        )
        with self._lock:
            if self._state is DeferredState.PENDING:
                callbacks.append(callback)
                return self
            if self._state is not channel:
                return self
            if self._delivering:
                # Queued behind callbacks registered earlier
                callbacks.append(callback)
                return self
            outcome = self._outcome()

        self._invoke(callback, outcome)
        return self

    # ==================== Settlement ====================

    def fulfill(self, value: T) -> None:
        """Settle with a value. No-op if already settled."""
        with self._lock:
            if self._state is not DeferredState.PENDING:
                return
            self._state = DeferredState.FULFILLED
            self._value = value
            self._failure_callbacks.clear()
            self._delivering = True
        self._settled.set()
        self._drain(self._success_callbacks)

    def reject(self, error: BaseException) -> None:
        """Settle with an error. No-op if already settled."""
        with self._lock:
            if self._state is not DeferredState.PENDING:
                return
            self._state = DeferredState.REJECTED
            self._error = error
            self._success_callbacks.clear()
            self._delivering = True
        self._settled.set()
        self._drain(self._failure_callbacks)

    def _outcome(self) -> Any:
        return self._value if self._state is DeferredState.FULFILLED else self._error

    def _drain(self, callbacks: List[Callable[[Any], Any]]) -> None:
        # Callbacks run outside the lock, one at a time in subscription order;
        # subscribers arriving meanwhile are appended and run in turn.
        while True:
            with self._lock:
                if not callbacks:
                    self._delivering = False
                    return
                callback = callbacks.pop(0)
                outcome = self._outcome()
            self._invoke(callback, outcome)

    def _invoke(self, callback: Callable[[Any], Any], argument: Any) -> None:
        # One failing subscriber must not starve the rest.
        try:
            callback(argument)
        except Exception:
            logger.exception(
                "Deferred subscriber %r raised", getattr(callback, "__name__", callback)
            )

    # ==================== Inspection ====================

    def wait(self, timeout: Optional[float] = None) -> T:
        """
        Block the calling thread until settled.

        Args:
            timeout: Seconds to wait (None = forever)

        Returns:
            The fulfilled value

        Raises:
            The rejection error, or TimeoutError if still pending after timeout
        """
        if not self._settled.wait(timeout):
            raise TimeoutError(f"Deferred still pending after {timeout}s")
        if self._state is DeferredState.REJECTED:
            raise self._error
        return self._value

    @property
    def state(self) -> DeferredState:
        return self._state

    @property
    def is_pending(self) -> bool:
        return self._state is DeferredState.PENDING

    @property
    def is_fulfilled(self) -> bool:
        return self._state is DeferredState.FULFILLED

    @property
    def is_rejected(self) -> bool:
        return self._state is DeferredState.REJECTED

    def __repr__(self) -> str:
        return f"<Deferred state={self._state.value}>"
