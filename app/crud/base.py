"""
Base Repository
Typed reads and pipeline-backed writes for one collection.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from app.models.base import DocumentModel
from app.store.errors import Operation, StorePermissionError
from app.store.events import PERMISSION_ERROR, ErrorBus
from app.store.policy import AccessPolicy, AuthContext
from app.store.queries import DocumentDescriptor, QueryDescriptor
from app.store.writes import WritePipeline, WriteResult
from app.utils.exceptions import AuthorizationError
from app.utils.logger import extra, get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=DocumentModel)


@dataclass
class StoreContext:
    """Everything a repository needs to talk to the store."""

    db: Any
    bus: ErrorBus
    policy: AccessPolicy
    writes: WritePipeline


class BaseRepository(ABC, Generic[T]):
    """
    Base repository for a collection of typed documents.

    Reads are checked against the access policy; a denied read publishes a
    permission error and raises a generic AuthorizationError. Writes go
    through the write pipeline and return its WriteResult.
    """

    model: Type[T]
    collection_path: str

    def __init__(self, store: StoreContext):
        """
        Initialize repository with the store context.

        Args:
            store: Store client, error bus, policy and write pipeline
        """
        self.store = store

    # ── Reads ───────────────────────────────────────────────────

    def query(self) -> QueryDescriptor:
        return QueryDescriptor.collection(self.collection_path)

    def doc_path(self, doc_id: str) -> str:
        return f"{self.collection_path}/{doc_id}"

    def list(self, auth: AuthContext, descriptor: Optional[QueryDescriptor] = None) -> List[T]:
        """
        Run a query and validate each result.

        Args:
            auth: Caller
            descriptor: Query to run; defaults to the whole collection

        Returns:
            Typed documents in store order; stored documents that do not
            fit the model are skipped
        """
        descriptor = descriptor or self.query()
        self._check_read(Operation.LIST, descriptor.path, auth, group=descriptor.group)
        docs = descriptor.build(self.store.db).get()
        items = (self._load(doc) for doc in docs)
        return [item for item in items if item is not None]

    def get(self, doc_id: str, auth: AuthContext) -> Optional[T]:
        """Get a document by ID, or None if it does not exist."""
        target = DocumentDescriptor(self.doc_path(doc_id))
        self._check_read(Operation.GET, target.path, auth)
        snapshot = target.build(self.store.db).get()
        if not snapshot.exists:
            return None
        return self._load(snapshot)

    def find_by(self, field: str, value: Any, auth: AuthContext) -> List[T]:
        return self.list(auth, self.query().where(field, "==", value))

    # ── Writes ──────────────────────────────────────────────────

    def create(self, item: T, auth: AuthContext, extra: Optional[Dict[str, Any]] = None) -> WriteResult:
        """Add a new document with a store-assigned ID."""
        data = item.to_dict()
        if extra:
            data.update(extra)
        return self.store.writes.create(self.collection_path, data, auth)

    def overwrite(self, doc_id: str, item: T, auth: AuthContext) -> WriteResult:
        """Replace a document's body entirely."""
        return self.store.writes.set(
            self.doc_path(doc_id), item.to_dict(), auth, merge=False, operation=Operation.UPDATE
        )

    def merge(self, doc_id: str, fields: Dict[str, Any], auth: AuthContext) -> WriteResult:
        """Set the given fields, keeping everything else."""
        return self.store.writes.set(self.doc_path(doc_id), fields, auth, merge=True)

    def update(self, doc_id: str, fields: Dict[str, Any], auth: AuthContext) -> WriteResult:
        """Update fields of an existing document."""
        return self.store.writes.update(self.doc_path(doc_id), fields, auth)

    def delete(self, doc_id: str, auth: AuthContext) -> WriteResult:
        return self.store.writes.delete(self.doc_path(doc_id), auth)

    def _check_read(self, operation: Operation, path: str, auth: AuthContext, group: bool = False) -> None:
        if self.store.policy.allows(auth, operation, path, group=group):
            return
        error = StorePermissionError(path=path, operation=operation, auth=auth.to_dict())
        self.store.bus.emit(PERMISSION_ERROR, error)
        raise AuthorizationError(details={"path": path, "operation": operation.value})

    def _load(self, snapshot: Any) -> Optional[T]:
        """Validate a stored document, or None if it does not fit the model."""
        try:
            return self.model.from_snapshot(snapshot)
        except PydanticValidationError as e:
            logger.warning(
                f"Skipping malformed {self.model.kind} at {snapshot.reference.path}",
                extra=extra(errors=e.errors(include_url=False, include_input=False)),
            )
            return None
