"""
Message Repositories
Contact submissions, feedback and admin membership.
"""

from typing import List

from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from app.crud.base import BaseRepository
from app.models.messages import AdminRecord, ContactSubmission, Feedback
from app.store.errors import Operation
from app.store.policy import ADMINS_COLLECTION, AuthContext
from app.store.queries import DESCENDING
from app.store.writes import WriteResult


class ContactSubmissionRepository(BaseRepository[ContactSubmission]):
    model = ContactSubmission
    collection_path = "contactFormSubmissions"

    def submit(self, submission: ContactSubmission, auth: AuthContext) -> WriteResult:
        return self.create(submission, auth, extra={"submittedAt": SERVER_TIMESTAMP})

    def newest_first(self, auth: AuthContext) -> List[ContactSubmission]:
        return self.list(auth, self.query().order_by("submittedAt", DESCENDING))


class FeedbackRepository(BaseRepository[Feedback]):
    model = Feedback
    collection_path = "feedback"

    def submit(self, feedback: Feedback, auth: AuthContext) -> WriteResult:
        """Store feedback, stamping the submitter's name when signed in."""
        extra = {"submittedAt": SERVER_TIMESTAMP}
        if auth.authenticated:
            extra["userId"] = auth.uid
            extra["userDisplayName"] = auth.display_name or auth.email
        item = feedback.model_copy(update={"user_id": None, "user_display_name": None})
        return self.create(item, auth, extra=extra)

    def newest_first(self, auth: AuthContext) -> List[Feedback]:
        return self.list(auth, self.query().order_by("submittedAt", DESCENDING))


class AdminRepository(BaseRepository[AdminRecord]):
    """Documents keyed by uid; existence is what grants admin capability."""

    model = AdminRecord
    collection_path = ADMINS_COLLECTION

    def grant(self, uid: str, auth: AuthContext) -> WriteResult:
        return self.store.writes.set(
            self.doc_path(uid.strip()),
            {"addedOn": SERVER_TIMESTAMP},
            auth,
            operation=Operation.CREATE,
        )

    def revoke(self, uid: str, auth: AuthContext) -> WriteResult:
        return self.delete(uid.strip(), auth)
