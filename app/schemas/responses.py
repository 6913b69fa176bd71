"""
Standard API Response Wrappers
Envelope returned by every endpoint.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    success: bool = Field(description="Whether the operation was successful")
    data: Optional[T] = Field(default=None, description="Response data")
    message: str = Field(default="", description="Response message")

    @classmethod
    def ok(cls, data: Any = None, message: str = "Success") -> "ApiResponse":
        """Create a successful response."""
        return cls(success=True, data=data, message=message)


class ListData(BaseModel):
    """A list payload with its size."""

    items: List[Dict[str, Any]] = Field(description="Items in store order")
    total: int = Field(ge=0, description="Number of items")

    @classmethod
    def of(cls, items: List[Any]) -> "ListData":
        rendered = [item.to_response() if hasattr(item, "to_response") else item for item in items]
        return cls(items=rendered, total=len(rendered))


class WriteData(BaseModel):
    """Result of a successful write."""

    id: Optional[str] = Field(default=None, description="ID of the written document")
    path: str = Field(description="Store path that was written")

    @classmethod
    def from_result(cls, result: Any) -> "WriteData":
        """Build from a WriteResult, raising the generic failure if it was rejected."""
        result.raise_for_error()
        return cls(id=result.doc_id, path=result.path)
