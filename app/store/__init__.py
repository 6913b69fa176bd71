"""
Store synchronization layer: query descriptors, live subscriptions, the
write pipeline and the permission-error bus.
"""

from app.store.errors import Operation, StorePermissionError
from app.store.events import PERMISSION_ERROR, DiagnosticsLog, ErrorBus
from app.store.policy import ANONYMOUS, AccessPolicy, AdminDirectory, AuthContext
from app.store.queries import ASCENDING, DESCENDING, DocumentDescriptor, QueryDescriptor
from app.store.subscriptions import CollectionSubscription, DocumentSubscription
from app.store.writes import WritePipeline, WriteResult

__all__ = [
    "ASCENDING",
    "DESCENDING",
    "ANONYMOUS",
    "PERMISSION_ERROR",
    "AccessPolicy",
    "AdminDirectory",
    "AuthContext",
    "CollectionSubscription",
    "DiagnosticsLog",
    "DocumentDescriptor",
    "DocumentSubscription",
    "ErrorBus",
    "Operation",
    "QueryDescriptor",
    "StorePermissionError",
    "WritePipeline",
    "WriteResult",
]
