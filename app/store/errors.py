"""Structured permission errors for store reads and writes."""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from google.cloud.firestore_v1.transforms import Sentinel

from app.utils.exceptions import PhysioCareException

DATABASE_PREFIX = "/databases/(default)/documents/"


class Operation(str, Enum):
    """Kind of store operation that was attempted."""

    GET = "get"
    LIST = "list"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def is_write(self) -> bool:
        return self in (Operation.CREATE, Operation.UPDATE, Operation.DELETE)


def describe_payload(value: Any) -> Any:
    """Render a write payload as plain JSON-friendly data for diagnostics."""
    if isinstance(value, Sentinel):
        return "SERVER_TIMESTAMP" if "timestamp" in value.description.lower() else value.description
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: describe_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [describe_payload(v) for v in value]
    return value


class StorePermissionError(PhysioCareException):
    """
    A denied store operation.

    Carries the path, the operation kind and, for writes, the payload that
    was attempted. Published on the error bus for developer-facing
    diagnostics; end users only ever see a generic failure.
    """

    def __init__(
        self,
        path: str,
        operation: Operation,
        request_resource_data: Optional[Dict[str, Any]] = None,
        auth: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.path = path.strip("/")
        self.operation = Operation(operation)
        self.request_resource_data = (
            describe_payload(request_resource_data) if request_resource_data is not None else None
        )
        self.auth = auth
        self.cause = repr(cause) if cause is not None else None
        self.occurred_at = datetime.now(timezone.utc)

        super().__init__(
            message=(
                "Missing or insufficient permissions: the following request was denied:\n"
                + json.dumps(self.request, indent=2, default=str)
            ),
            status_code=403,
            error_code="PERMISSION_DENIED",
            details=self.to_dict(),
        )

    @property
    def request(self) -> Dict[str, Any]:
        """The denied request, shaped like a security-rules evaluation context."""
        request: Dict[str, Any] = {
            "auth": self.auth,
            "method": self.operation.value,
            "path": DATABASE_PREFIX + self.path,
        }
        if self.request_resource_data is not None:
            request["resource"] = {"data": self.request_resource_data}
        return request

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "path": self.path,
            "operation": self.operation.value,
            "auth": self.auth,
            "occurredAt": self.occurred_at.isoformat(),
        }
        if self.request_resource_data is not None:
            data["requestResourceData"] = self.request_resource_data
        if self.cause is not None:
            data["cause"] = self.cause
        return data
