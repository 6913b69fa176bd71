"""
Write pipeline.

Every mutation goes through here. A call never raises for a rejected write:
it returns a failed ``WriteResult`` and publishes exactly one
``StorePermissionError`` on the error bus. Readers observe successful writes
through their next snapshot; there is no optimistic local state.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from app.store.errors import Operation, StorePermissionError
from app.store.events import PERMISSION_ERROR, ErrorBus
from app.store.policy import ANONYMOUS, AccessPolicy, AuthContext
from app.store.queries import DocumentDescriptor, QueryDescriptor
from app.utils.exceptions import WriteFailedError
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class WriteResult:
    """Outcome of one write call."""

    ok: bool
    path: str
    operation: Operation
    doc_id: Optional[str] = None
    error: Optional[StorePermissionError] = None

    def raise_for_error(self) -> "WriteResult":
        """Raise the generic user-facing failure if the write was rejected."""
        if not self.ok:
            raise WriteFailedError(details={"path": self.path, "operation": self.operation.value})
        return self


class WritePipeline:
    """Create, set, update and delete calls against the store."""

    def __init__(self, db: Any, bus: ErrorBus, policy: Optional[AccessPolicy] = None) -> None:
        self._db = db
        self._bus = bus
        self._policy = policy

    def create(
        self,
        collection_path: str,
        data: Dict[str, Any],
        auth: AuthContext = ANONYMOUS,
    ) -> WriteResult:
        """Add a document with a store-assigned id to ``collection_path``."""
        path = QueryDescriptor.collection(collection_path).path

        def action() -> str:
            _, doc_ref = self._db.collection(path).add(data)
            return doc_ref.id

        return self._run(Operation.CREATE, path, data, auth, action)

    def set(
        self,
        doc_path: str,
        data: Dict[str, Any],
        auth: AuthContext = ANONYMOUS,
        merge: bool = False,
        operation: Optional[Operation] = None,
    ) -> WriteResult:
        """
        Write a document at a known path.

        ``merge=True`` keeps fields not present in ``data``; otherwise the
        document is overwritten. The operation is reported as ``update`` for
        merges and ``create`` for overwrites unless given explicitly.
        """
        target = DocumentDescriptor(doc_path)
        if operation is None:
            operation = Operation.UPDATE if merge else Operation.CREATE

        def action() -> str:
            self._db.document(target.path).set(data, merge=merge)
            return target.document_id

        return self._run(operation, target.path, data, auth, action)

    def update(
        self,
        doc_path: str,
        data: Dict[str, Any],
        auth: AuthContext = ANONYMOUS,
    ) -> WriteResult:
        """Update fields of an existing document; fails if it does not exist."""
        target = DocumentDescriptor(doc_path)

        def action() -> str:
            self._db.document(target.path).update(data)
            return target.document_id

        return self._run(Operation.UPDATE, target.path, data, auth, action)

    def delete(self, doc_path: str, auth: AuthContext = ANONYMOUS) -> WriteResult:
        target = DocumentDescriptor(doc_path)

        def action() -> str:
            self._db.document(target.path).delete()
            return target.document_id

        return self._run(Operation.DELETE, target.path, None, auth, action)

    def _run(
        self,
        operation: Operation,
        path: str,
        data: Optional[Dict[str, Any]],
        auth: AuthContext,
        action: Callable[[], str],
    ) -> WriteResult:
        if self._policy is not None and not self._policy.allows(auth, operation, path):
            return self._fail(operation, path, data, auth, None)

        try:
            doc_id = action()
        except Exception as exc:
            logger.error(f"{operation.value} {path} failed: {exc}", exc_info=True)
            return self._fail(operation, path, data, auth, exc)

        logger.debug(f"{operation.value} {path} ok")
        return WriteResult(ok=True, path=path, operation=operation, doc_id=doc_id)

    def _fail(
        self,
        operation: Operation,
        path: str,
        data: Optional[Dict[str, Any]],
        auth: AuthContext,
        cause: Optional[BaseException],
    ) -> WriteResult:
        error = StorePermissionError(
            path=path,
            operation=operation,
            request_resource_data=data,
            auth=auth.to_dict(),
            cause=cause,
        )
        self._bus.emit(PERMISSION_ERROR, error)
        return WriteResult(ok=False, path=path, operation=operation, error=error)
