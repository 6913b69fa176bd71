"""
Message Models
Contact form submissions, patient feedback and admin membership records.
"""

from datetime import datetime
from typing import Any, ClassVar, Optional

from pydantic import EmailStr, Field

from app.models.base import DocumentModel


class ContactSubmission(DocumentModel):
    """A message sent through the public contact form."""

    kind: ClassVar[str] = "contactSubmission"

    name: str = Field(min_length=2)
    email: EmailStr
    message: str = Field(min_length=10)
    submitted_at: Optional[Any] = Field(default=None, description="Server timestamp")


class Feedback(DocumentModel):
    """A patient's rating and written experience."""

    kind: ClassVar[str] = "feedback"

    rating: int = Field(ge=1, le=5)
    experience: str = Field(min_length=10)
    submitted_at: Optional[Any] = Field(default=None, description="Server timestamp")
    user_id: Optional[str] = None
    user_display_name: Optional[str] = Field(
        default=None,
        description="Denormalized name of the signed-in submitter",
    )


class AdminRecord(DocumentModel):
    """Presence of ``admins/{uid}`` grants admin capability; the id is the uid."""

    kind: ClassVar[str] = "admin"

    added_on: Optional[datetime] = None
