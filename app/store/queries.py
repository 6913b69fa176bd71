"""
Query descriptors.

Immutable, structurally comparable descriptions of what a subscription or a
read is pointed at. Two descriptors are equal exactly when they would build
the same query, which makes them safe to use as the re-subscription key.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Tuple

from google.cloud.firestore_v1.base_query import FieldFilter

ASCENDING = "ASCENDING"
DESCENDING = "DESCENDING"


def _freeze(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def split_path(path: str) -> Tuple[str, ...]:
    """Split a slash-separated store path into its segments."""
    return tuple(segment for segment in path.strip("/").split("/") if segment)


@dataclass(frozen=True)
class Filter:
    """A single ``field op value`` condition."""

    field: str
    op: str
    value: Any

    def to_field_filter(self) -> FieldFilter:
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return FieldFilter(self.field, self.op, value)


@dataclass(frozen=True)
class QueryDescriptor:
    """Describes a collection (or collection-group) query."""

    path: str
    filters: Tuple[Filter, ...] = ()
    order: Tuple[Tuple[str, str], ...] = ()
    limit: Optional[int] = None
    group: bool = False

    @classmethod
    def collection(cls, path: str) -> "QueryDescriptor":
        segments = split_path(path)
        if len(segments) % 2 != 1:
            raise ValueError(f"Not a collection path: {path!r}")
        return cls(path="/".join(segments))

    @classmethod
    def collection_group(cls, collection_id: str) -> "QueryDescriptor":
        if "/" in collection_id:
            raise ValueError("Collection group id must not contain '/'")
        return cls(path=collection_id, group=True)

    def where(self, field_path: str, op: str, value: Any) -> "QueryDescriptor":
        return replace(self, filters=self.filters + (Filter(field_path, op, _freeze(value)),))

    def order_by(self, field_path: str, direction: str = ASCENDING) -> "QueryDescriptor":
        if direction not in (ASCENDING, DESCENDING):
            raise ValueError(f"Invalid direction: {direction!r}")
        return replace(self, order=self.order + ((field_path, direction),))

    def limited(self, count: int) -> "QueryDescriptor":
        if count < 1:
            raise ValueError("limit must be at least 1")
        return replace(self, limit=count)

    @property
    def collection_id(self) -> str:
        return split_path(self.path)[-1]

    def build(self, db: Any) -> Any:
        """Turn the descriptor into a query on a Firestore client or LocalStore."""
        query = db.collection_group(self.path) if self.group else db.collection(self.path)
        for flt in self.filters:
            query = query.where(filter=flt.to_field_filter())
        for field_path, direction in self.order:
            query = query.order_by(field_path, direction=direction)
        if self.limit is not None:
            query = query.limit(self.limit)
        return query


@dataclass(frozen=True)
class DocumentDescriptor:
    """Describes a single document by its full path."""

    path: str
    segments: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        segments = split_path(self.path)
        if not segments or len(segments) % 2 != 0:
            raise ValueError(f"Not a document path: {self.path!r}")
        object.__setattr__(self, "path", "/".join(segments))
        object.__setattr__(self, "segments", segments)

    @classmethod
    def of(cls, *segments: str) -> "DocumentDescriptor":
        return cls("/".join(segments))

    @property
    def document_id(self) -> str:
        return self.segments[-1]

    @property
    def collection_path(self) -> str:
        return "/".join(self.segments[:-1])

    def build(self, db: Any) -> Any:
        return db.document(self.path)
