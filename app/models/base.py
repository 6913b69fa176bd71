"""
Base Document Model
Shared behaviour for records stored in the document store.
"""

from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """
    A typed document.

    Fields are snake_case in Python and camelCase in the store and over the
    API. ``id`` is never written into the document body; it is injected from
    the snapshot on read.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
    )

    kind: ClassVar[str] = "document"

    id: Optional[str] = Field(default=None, description="Store-assigned document ID")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the document body written to the store."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"id"})

    @classmethod
    def from_dict(cls, data: Dict[str, Any], doc_id: Optional[str] = None):
        """Validate a document body read from the store."""
        if doc_id is not None:
            data = {**data, "id": doc_id}
        return cls.model_validate(data)

    @classmethod
    def from_snapshot(cls, snapshot: Any):
        return cls.from_dict(snapshot.to_dict() or {}, snapshot.id)

    def to_response(self) -> Dict[str, Any]:
        """JSON-ready representation including the id."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
