"""
Live collection and document subscriptions.

Each subscription object binds local state (``data``, ``loading``,
``error``) to one live query or document at a time. Pointing it at a new
descriptor tears the old watch down first; pointing it at ``None`` or
closing it clears the state synchronously.
"""

import threading
from typing import Any, Callable, Dict, List, Optional, Union

from app.store.errors import Operation, StorePermissionError
from app.store.events import PERMISSION_ERROR, ErrorBus
from app.store.policy import ANONYMOUS, AccessPolicy, AuthContext
from app.store.queries import DocumentDescriptor, QueryDescriptor
from app.utils.logger import get_logger

logger = get_logger(__name__)

ID_FIELD = "id"

Descriptor = Union[QueryDescriptor, DocumentDescriptor]


def with_id(snapshot: Any) -> Dict[str, Any]:
    """Snapshot data merged with its document id under the reserved key."""
    data = dict(snapshot.to_dict() or {})
    data[ID_FIELD] = snapshot.id
    return data


class _Subscription:
    operation: Operation

    def __init__(
        self,
        db: Any,
        bus: ErrorBus,
        policy: Optional[AccessPolicy] = None,
        auth: AuthContext = ANONYMOUS,
        on_change: Optional[Callable[["_Subscription"], None]] = None,
    ) -> None:
        self._db = db
        self._bus = bus
        self._policy = policy
        self._auth = auth
        self._on_change = on_change

        self._lock = threading.RLock()
        self._target: Optional[Descriptor] = None
        self._watch: Any = None
        # Bumped on every (re)subscription so late callbacks from a torn-down
        # watch are dropped.
        self._generation = 0

        self.data: Any = None
        self.loading = False
        self.error: Optional[StorePermissionError] = None

    @property
    def target(self) -> Optional[Descriptor]:
        return self._target

    @property
    def active(self) -> bool:
        return self._watch is not None

    def watch(self, target: Optional[Descriptor]) -> None:
        """Point the subscription at ``target`` (``None`` means not ready)."""
        with self._lock:
            if target is None:
                self._teardown()
                self.data = None
                self.loading = False
            else:
                if target == self._target and self._watch is not None:
                    return
                self._teardown()
                self._target = target
                self.loading = True
                self._generation += 1
                generation = self._generation
        self._notify()

        if target is not None:
            self._open(target, generation)

    def close(self) -> None:
        self.watch(None)

    def snapshot(self) -> Dict[str, Any]:
        """Current state as a plain dict."""
        with self._lock:
            return {
                "data": self.data,
                "loading": self.loading,
                "error": self.error.to_dict() if self.error else None,
            }

    def _open(self, target: Descriptor, generation: int) -> None:
        if self._policy is not None and not self._policy.allows(
            self._auth, self.operation, target.path, group=getattr(target, "group", False)
        ):
            self._fail(generation, target, None)
            return

        def callback(docs, changes, read_time):
            self._deliver(generation, docs)

        try:
            watch = target.build(self._db).on_snapshot(callback)
        except Exception as exc:
            logger.debug(f"Subscription to {target.path} failed: {exc}")
            self._fail(generation, target, exc)
            return

        with self._lock:
            if generation == self._generation:
                self._watch = watch
                return
        # Superseded while opening.
        watch.unsubscribe()

    def _deliver(self, generation: int, docs: List[Any]) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self.data = self._transform(docs)
            self.error = None
            self.loading = False
        self._notify()

    def _fail(self, generation: int, target: Descriptor, cause: Optional[BaseException]) -> None:
        error = StorePermissionError(
            path=target.path,
            operation=self.operation,
            auth=self._auth.to_dict(),
            cause=cause,
        )
        with self._lock:
            if generation != self._generation:
                return
            self._watch = None
            self.error = error
            self.data = None
            self.loading = False
        self._bus.emit(PERMISSION_ERROR, error)
        self._notify()

    def _teardown(self) -> None:
        self._generation += 1
        self._target = None
        if self._watch is not None:
            watch, self._watch = self._watch, None
            watch.unsubscribe()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)

    def _transform(self, docs: List[Any]) -> Any:
        raise NotImplementedError


class CollectionSubscription(_Subscription):
    """Live result set of a query; ``data`` is a list of dicts with ``id``."""

    operation = Operation.LIST

    def _transform(self, docs: List[Any]) -> List[Dict[str, Any]]:
        return [with_id(doc) for doc in docs]


class DocumentSubscription(_Subscription):
    """Live single document; ``data`` is ``None`` when it does not exist."""

    operation = Operation.GET

    def _transform(self, docs: List[Any]) -> Optional[Dict[str, Any]]:
        snapshot = docs[0] if docs else None
        if snapshot is None or not snapshot.exists:
            return None
        return with_id(snapshot)
