"""
Error bus.

A publish/subscribe channel that decouples the place a store operation fails
(deep inside a request handler or a snapshot listener) from the place it is
reported. One bus is created per application and injected where needed.
"""

import threading
from collections import defaultdict, deque
from typing import Any, Callable, Deque, Dict, List

from app.store.errors import StorePermissionError
from app.utils.logger import extra, get_logger

logger = get_logger(__name__)

PERMISSION_ERROR = "permission-error"

Listener = Callable[[Any], None]


class ErrorBus:
    """Named-event emitter with synchronous delivery."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)
        self._lock = threading.Lock()

    def on(self, event: str, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for ``event``; returns a function that removes it."""
        with self._lock:
            self._listeners[event].append(listener)
        return lambda: self.off(event, listener)

    def off(self, event: str, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners.get(event, []):
                self._listeners[event].remove(listener)

    def emit(self, event: str, payload: Any) -> int:
        """
        Deliver ``payload`` to every listener of ``event``.

        A listener that raises is logged and does not stop delivery to the
        others.

        Returns:
            Number of listeners that received the payload.
        """
        with self._lock:
            listeners = list(self._listeners.get(event, []))

        for listener in listeners:
            try:
                listener(payload)
            except Exception:
                logger.exception(f"Error bus listener failed for {event}")
        return len(listeners)

    def listener_count(self, event: str) -> int:
        with self._lock:
            return len(self._listeners.get(event, []))


class DiagnosticsLog:
    """Bus listener that logs permission errors and keeps the most recent ones."""

    def __init__(self, maxlen: int = 200) -> None:
        self._records: Deque[Dict[str, Any]] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def __call__(self, error: StorePermissionError) -> None:
        record = error.to_dict()
        with self._lock:
            self._records.append(record)
        logger.warning(
            f"Permission denied: {error.operation.value} {error.path}",
            extra=extra(permission_error=record),
        )

    def attach(self, bus: ErrorBus) -> Callable[[], None]:
        return bus.on(PERMISSION_ERROR, self)

    def records(self) -> List[Dict[str, Any]]:
        """Most recent first."""
        with self._lock:
            return list(reversed(self._records))

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
