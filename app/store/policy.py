"""
Access policy.

Server-side counterpart of the store security rules: decides whether an
authenticated (or anonymous) caller may perform an operation on a path.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.store.errors import Operation
from app.store.queries import split_path
from app.utils.logger import get_logger

logger = get_logger(__name__)

ADMINS_COLLECTION = "admins"


@dataclass(frozen=True)
class AuthContext:
    """Who is making a request."""

    uid: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    is_admin: bool = False

    @property
    def authenticated(self) -> bool:
        return self.uid is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        if not self.authenticated:
            return None
        return {"uid": self.uid, "email": self.email, "isAdmin": self.is_admin}


ANONYMOUS = AuthContext()


def collection_pattern(path: str) -> str:
    """
    Collapse a path to its collection pattern.

    ``therapists/t1/appointments/a9`` -> ``therapists/*/appointments``
    """
    segments = list(split_path(path))
    if len(segments) % 2 == 0:
        segments = segments[:-1]
    return "/".join("*" if i % 2 else s for i, s in enumerate(segments))


class AccessPolicy:
    """Read/write rules per collection pattern. Admins may do anything."""

    PUBLIC_READ = frozenset({
        "conditions",
        "treatmentGuides",
        "therapists",
        "therapists/*/availability",
        "products",
        "subscriptionPlans",
        "feedback",
        "socialLinks",
        "contactInformation",
    })

    PUBLIC_CREATE = frozenset({
        "contactFormSubmissions",
        "feedback",
        "therapists/*/appointments",
    })

    OWNER_COLLECTIONS = frozenset({
        "users/*/subscriptions",
    })

    def allows(
        self,
        auth: AuthContext,
        operation: Operation,
        path: str,
        group: bool = False,
    ) -> bool:
        operation = Operation(operation)
        if auth.is_admin:
            return True
        if group:
            return False

        pattern = collection_pattern(path)

        if pattern in self.OWNER_COLLECTIONS:
            owner = split_path(path)[1]
            if operation in (Operation.GET, Operation.LIST, Operation.CREATE):
                return auth.uid is not None and auth.uid == owner
            return False

        if operation in (Operation.GET, Operation.LIST):
            return pattern in self.PUBLIC_READ
        if operation == Operation.CREATE:
            return pattern in self.PUBLIC_CREATE
        return False


class AdminDirectory:
    """
    Resolves admin capability for a uid.

    A uid is an admin when it matches the configured bootstrap uid or when a
    document keyed by it exists in the ``admins`` collection.
    """

    def __init__(self, db: Any, bootstrap_uid: str = "") -> None:
        self._db = db
        self._bootstrap_uid = bootstrap_uid

    def is_admin(self, uid: Optional[str]) -> bool:
        if not uid:
            return False
        if self._bootstrap_uid and uid == self._bootstrap_uid:
            return True
        return self._db.collection(ADMINS_COLLECTION).document(uid).get().exists

    def context_for(
        self,
        uid: str,
        email: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> AuthContext:
        return AuthContext(
            uid=uid,
            email=email,
            display_name=display_name,
            is_admin=self.is_admin(uid),
        )
