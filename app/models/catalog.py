"""
Catalog Models
Public marketing content: conditions, treatment guides, therapists,
products, social links and the clinic's contact information.
"""

import re
from enum import Enum
from typing import ClassVar, List, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.base import DocumentModel

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def _check_slug(value: str) -> str:
    if not SLUG_PATTERN.match(value):
        raise ValueError("Slug must be lowercase letters, numbers and hyphens")
    return value


class Condition(DocumentModel):
    """A condition the clinic treats."""

    kind: ClassVar[str] = "condition"

    name: str = Field(min_length=2, description="Display name")
    slug: str = Field(min_length=2, description="URL-safe identifier (not unique-enforced)")
    description: str = Field(min_length=10)
    treatment_options: str = Field(min_length=10)
    related_guide_slugs: List[str] = Field(
        default_factory=list,
        description="Slugs of related treatment guides, informational only",
    )

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: str) -> str:
        return _check_slug(value)


class GuideStep(BaseModel):
    """One step of a treatment guide."""

    title: str = Field(min_length=1)
    instructions: str = Field(min_length=1)


class TreatmentGuide(DocumentModel):
    """An illustrated exercise guide."""

    kind: ClassVar[str] = "treatmentGuide"

    title: str = Field(min_length=2)
    slug: str = Field(min_length=2)
    description: str = Field(min_length=10)
    image_url: Optional[str] = None
    image_id: Optional[str] = None
    video_url: Optional[str] = None
    steps: List[GuideStep] = Field(default_factory=list)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, value: str) -> str:
        return _check_slug(value)


class Therapist(DocumentModel):
    """A member of the clinical team."""

    kind: ClassVar[str] = "therapist"

    name: str = Field(min_length=2)
    title: str = Field(min_length=2)
    bio: str = Field(min_length=10)
    image_url: str = ""
    specializations: List[str] = Field(default_factory=list)


class Product(DocumentModel):
    """An item sold in the clinic store."""

    kind: ClassVar[str] = "product"

    name: str = Field(min_length=2)
    description: str = Field(min_length=10)
    price: float = Field(gt=0, description="Price, positive")
    image_url: str = ""


class SocialPlatform(str, Enum):
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"


class SocialLink(DocumentModel):
    """A link to one of the clinic's social profiles (one per platform)."""

    kind: ClassVar[str] = "socialLink"

    platform: SocialPlatform
    url: str = Field(pattern=r"^https?://")


class ContactInformation(DocumentModel):
    """The single ``contactInformation/main`` document."""

    kind: ClassVar[str] = "contactInformation"

    address: str = ""
    phone: str = ""
    email: str = ""
    hours: str = ""
