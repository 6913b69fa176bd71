"""
In-memory data store that mimics the Firestore client surface.
Used when no Firebase credentials are found, and by the test-suite.

Supports nested collections, collection-group queries, ``set`` with merge,
server timestamps and ``on_snapshot`` listeners that fire synchronously
after every write.
"""

import copy
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from google.api_core.exceptions import NotFound
from google.cloud.firestore_v1 import DELETE_FIELD, SERVER_TIMESTAMP

from app.store.queries import split_path


def _resolve_transforms(data: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    """Copy of ``data`` with server timestamps filled in.

    Sentinels are compared by identity, so they are never deep-copied.
    """
    resolved = {}
    for key, value in data.items():
        if value is SERVER_TIMESTAMP:
            resolved[key] = now
        elif value is DELETE_FIELD:
            resolved[key] = value
        elif isinstance(value, dict):
            resolved[key] = _resolve_transforms(value, now)
        else:
            resolved[key] = copy.deepcopy(value)
    return resolved


def _deep_merge(target: Dict[str, Any], updates: Dict[str, Any]) -> None:
    for key, value in updates.items():
        if value is DELETE_FIELD:
            target.pop(key, None)
        elif isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value


def _matches(doc: Dict[str, Any], field: str, op: str, value: Any) -> bool:
    doc_val = doc.get(field)
    if doc_val is None:
        return False
    if op == "==":
        return doc_val == value
    if op == "!=":
        return doc_val != value
    if op == ">=":
        return doc_val >= value
    if op == "<=":
        return doc_val <= value
    if op == ">":
        return doc_val > value
    if op == "<":
        return doc_val < value
    if op == "in":
        return doc_val in value
    if op == "not-in":
        return doc_val not in value
    if op == "array_contains":
        return isinstance(doc_val, list) and value in doc_val
    if op == "array_contains_any":
        return isinstance(doc_val, list) and any(v in doc_val for v in value)
    raise ValueError(f"Unsupported operator: {op}")


class LocalStore:
    """Thread-safe in-memory store keyed by collection path."""

    def __init__(self):
        # collection path -> {doc id -> data}
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.RLock()
        self._listeners: List["_Listener"] = []

    # ── Client surface ──────────────────────────────────────────

    def collection(self, path: str) -> "CollectionRef":
        segments = split_path(path)
        if len(segments) % 2 != 1:
            raise ValueError(f"Not a collection path: {path!r}")
        return CollectionRef(self, "/".join(segments))

    def collection_group(self, collection_id: str) -> "Query":
        return Query(self, collection_id, group=True)

    def document(self, path: str) -> "DocumentRef":
        segments = split_path(path)
        if not segments or len(segments) % 2 != 0:
            raise ValueError(f"Not a document path: {path!r}")
        return DocumentRef(self, "/".join(segments[:-1]), segments[-1])

    # ── Internals ───────────────────────────────────────────────

    def _read(self, collection_path: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            doc = self.collections.get(collection_path, {}).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def _scan(self, path: str, group: bool) -> List[Tuple[str, str, Dict[str, Any]]]:
        with self._lock:
            if group:
                sources = [
                    (cpath, docs) for cpath, docs in self.collections.items()
                    if split_path(cpath)[-1] == path
                ]
            else:
                sources = [(path, self.collections.get(path, {}))]
            return [
                (cpath, doc_id, copy.deepcopy(doc))
                for cpath, docs in sources
                for doc_id, doc in docs.items()
            ]

    def _write(self, collection_path: str, doc_id: str, mutate: Callable[[Optional[dict]], Optional[dict]]) -> None:
        with self._lock:
            docs = self.collections.setdefault(collection_path, {})
            result = mutate(docs.get(doc_id))
            if result is None:
                docs.pop(doc_id, None)
            else:
                docs[doc_id] = result
            listeners = list(self._listeners)
        for listener in listeners:
            listener.maybe_fire(collection_path, doc_id)

    def _subscribe(self, listener: "_Listener") -> "Watch":
        with self._lock:
            self._listeners.append(listener)
        listener.fire()
        return Watch(self, listener)

    def _unsubscribe(self, listener: "_Listener") -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)


class Query:
    """Mimics a Firestore query (immutable; each refinement returns a copy)."""

    def __init__(self, store: LocalStore, path: str, group: bool = False):
        self._store = store
        self._path = path
        self._group = group
        self._filters: List[Tuple[str, str, Any]] = []
        self._order_by: List[Tuple[str, str]] = []
        self._limit_val: Optional[int] = None

    def _copy(self) -> "Query":
        new_query = Query(self._store, self._path, self._group)
        new_query._filters = list(self._filters)
        new_query._order_by = list(self._order_by)
        new_query._limit_val = self._limit_val
        return new_query

    def where(self, field_path: Optional[str] = None, op_string: Optional[str] = None,
              value: Any = None, *, filter: Any = None) -> "Query":
        new_query = self._copy()
        if filter is not None:
            field_path, op_string, value = filter.field_path, filter.op_string, filter.value
        new_query._filters.append((field_path, op_string, value))
        return new_query

    def order_by(self, field_path: str, direction: str = "ASCENDING") -> "Query":
        new_query = self._copy()
        new_query._order_by.append((field_path, direction))
        return new_query

    def limit(self, count: int) -> "Query":
        new_query = self._copy()
        new_query._limit_val = count
        return new_query

    def get(self) -> List["DocumentSnapshot"]:
        rows = self._store._scan(self._path, self._group)

        for field_path, op, value in self._filters:
            rows = [row for row in rows if _matches(row[2], field_path, op, value)]

        # Stable sorts applied last-key-first give multi-key ordering.
        for field_path, direction in reversed(self._order_by):
            rows = [row for row in rows if row[2].get(field_path) is not None]
            rows.sort(key=lambda row: row[2][field_path], reverse=direction == "DESCENDING")

        if self._limit_val:
            rows = rows[: self._limit_val]

        return [
            DocumentSnapshot(DocumentRef(self._store, cpath, doc_id), data)
            for cpath, doc_id, data in rows
        ]

    def stream(self):
        return iter(self.get())

    def on_snapshot(self, callback: Callable) -> "Watch":
        return self._store._subscribe(_QueryListener(self, callback))

    def _covers(self, collection_path: str) -> bool:
        if self._group:
            return split_path(collection_path)[-1] == self._path
        return collection_path == self._path


class CollectionRef(Query):
    """Mimics a Firestore collection reference."""

    def __init__(self, store: LocalStore, path: str):
        super().__init__(store, path)

    @property
    def id(self) -> str:
        return split_path(self._path)[-1]

    @property
    def path(self) -> str:
        return self._path

    def document(self, doc_id: Optional[str] = None) -> "DocumentRef":
        return DocumentRef(self._store, self._path, doc_id or uuid.uuid4().hex[:20])

    def add(self, data: dict, document_id: Optional[str] = None) -> Tuple[datetime, "DocumentRef"]:
        doc_ref = self.document(document_id)
        update_time = doc_ref.create(data)
        return update_time, doc_ref


class DocumentRef:
    """Mimics a Firestore document reference."""

    def __init__(self, store: LocalStore, collection_path: str, doc_id: str):
        self._store = store
        self._collection_path = collection_path
        self._id = doc_id

    @property
    def id(self) -> str:
        return self._id

    @property
    def path(self) -> str:
        return f"{self._collection_path}/{self._id}"

    @property
    def parent(self) -> CollectionRef:
        return CollectionRef(self._store, self._collection_path)

    def collection(self, name: str) -> CollectionRef:
        return CollectionRef(self._store, f"{self.path}/{name}")

    def get(self) -> "DocumentSnapshot":
        return DocumentSnapshot(self, self._store._read(self._collection_path, self._id))

    def create(self, data: dict) -> datetime:
        now = datetime.now(timezone.utc)
        self._store._write(
            self._collection_path, self._id,
            lambda _: _resolve_transforms(data, now),
        )
        return now

    def set(self, data: dict, merge: bool = False) -> datetime:
        now = datetime.now(timezone.utc)
        resolved = _resolve_transforms(data, now)

        def mutate(existing: Optional[dict]) -> dict:
            if merge and existing is not None:
                _deep_merge(existing, resolved)
                return existing
            return {k: v for k, v in resolved.items() if v is not DELETE_FIELD}

        self._store._write(self._collection_path, self._id, mutate)
        return now

    def update(self, data: dict) -> datetime:
        now = datetime.now(timezone.utc)
        resolved = _resolve_transforms(data, now)

        def mutate(existing: Optional[dict]) -> dict:
            if existing is None:
                raise NotFound(f"No document to update: {self.path}")
            _deep_merge(existing, resolved)
            return existing

        self._store._write(self._collection_path, self._id, mutate)
        return now

    def delete(self) -> datetime:
        self._store._write(self._collection_path, self._id, lambda _: None)
        return datetime.now(timezone.utc)

    def on_snapshot(self, callback: Callable) -> "Watch":
        return self._store._subscribe(_DocumentListener(self, callback))


class DocumentSnapshot:
    """Mimics a Firestore document snapshot."""

    def __init__(self, reference: DocumentRef, data: Optional[dict]):
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[dict]:
        return copy.deepcopy(self._data)

    def get(self, field: str, default=None):
        if self._data is None:
            return default
        return self._data.get(field, default)


# ── Listeners ───────────────────────────────────────────────────


class _Listener:
    def __init__(self, callback: Callable):
        self._callback = callback

    def fire(self) -> None:
        raise NotImplementedError

    def maybe_fire(self, collection_path: str, doc_id: str) -> None:
        raise NotImplementedError


class _QueryListener(_Listener):
    def __init__(self, query: Query, callback: Callable):
        super().__init__(callback)
        self._query = query

    def fire(self) -> None:
        self._callback(self._query.get(), [], datetime.now(timezone.utc))

    def maybe_fire(self, collection_path: str, doc_id: str) -> None:
        if self._query._covers(collection_path):
            self.fire()


class _DocumentListener(_Listener):
    def __init__(self, ref: DocumentRef, callback: Callable):
        super().__init__(callback)
        self._ref = ref

    def fire(self) -> None:
        self._callback([self._ref.get()], [], datetime.now(timezone.utc))

    def maybe_fire(self, collection_path: str, doc_id: str) -> None:
        if collection_path == self._ref._collection_path and doc_id == self._ref.id:
            self.fire()


class Watch:
    """Handle returned by ``on_snapshot``."""

    def __init__(self, store: LocalStore, listener: _Listener):
        self._store = store
        self._listener = listener

    def unsubscribe(self) -> None:
        self._store._unsubscribe(self._listener)


# ── Singleton ────────────────────────────────────────────────────

_local_store: Optional[LocalStore] = None


def get_local_store() -> LocalStore:
    """Get or create the singleton LocalStore instance."""
    global _local_store
    if _local_store is None:
        _local_store = LocalStore()
    return _local_store
