"""
Subscription Models
Plans offered by the clinic and the subscriptions users hold.
"""

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, ClassVar, List, Optional, Union

from pydantic import Field, field_validator

from app.models.base import DocumentModel


class SubscriptionStatus(str, Enum):
    """Persisted status of a user subscription."""
    ACTIVE = "active"
    CANCELLED = "cancelled"


class LifecycleStatus(str, Enum):
    """Status derived at read time; never written to the store."""
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


def split_features(text: str) -> List[str]:
    """Turn newline-separated form text into a clean feature list."""
    return [line.strip() for line in text.splitlines() if line.strip()]


class SubscriptionPlan(DocumentModel):
    """A plan patients can subscribe to."""

    kind: ClassVar[str] = "subscriptionPlan"

    name: str = Field(min_length=2)
    description: str = Field(min_length=10)
    price: float = Field(ge=0)
    duration_in_days: int = Field(gt=0, description="Length of a subscription period")
    features: List[str] = Field(default_factory=list, description="Ordered feature bullet points")
    is_featured: bool = False
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    content: Optional[str] = None

    @field_validator("features", mode="before")
    @classmethod
    def parse_features(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_features(value)
        return value


class UserSubscription(DocumentModel):
    """A subscription in ``users/{uid}/subscriptions``."""

    kind: ClassVar[str] = "userSubscription"

    user_id: Optional[str] = None
    user_email: Optional[str] = None
    plan_id: Optional[str] = None
    plan_name: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    start_date: Optional[datetime] = Field(
        default=None,
        description="Missing on some admin-assigned subscriptions",
    )
    end_date: Optional[datetime] = Field(
        default=None,
        description="Missing for legacy/admin-assigned subscriptions, which never expire",
    )

    @classmethod
    def start(cls, plan: SubscriptionPlan, user_id: str, user_email: Optional[str] = None,
              now: Optional[datetime] = None) -> "UserSubscription":
        """New active subscription for ``plan`` beginning ``now``."""
        start = now or datetime.now(timezone.utc)
        return cls(
            user_id=user_id,
            user_email=user_email,
            plan_id=plan.id,
            plan_name=plan.name,
            price=plan.price,
            status=SubscriptionStatus.ACTIVE,
            start_date=start,
            end_date=start + timedelta(days=plan.duration_in_days),
        )

    @classmethod
    def from_snapshot(cls, snapshot: Any):
        """Fill ``userId`` from the owning user's path when the body lacks it."""
        sub = super().from_snapshot(snapshot)
        if sub.user_id is None:
            segments = snapshot.reference.path.split("/")
            if len(segments) >= 4 and segments[-4] == "users":
                sub.user_id = segments[-3]
        return sub

    @property
    def lifecycle_status(self) -> LifecycleStatus:
        return derive_status(self)


SubscriptionLike = Union[UserSubscription, Mapping]


def as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _fields(sub: SubscriptionLike):
    if isinstance(sub, Mapping):
        return sub.get("status"), sub.get("endDate")
    return sub.status, sub.end_date


def derive_status(sub: SubscriptionLike, now: Optional[datetime] = None) -> LifecycleStatus:
    """
    Lifecycle status of a subscription at ``now``.

    cancelled if the persisted status is cancelled, regardless of dates;
    otherwise expired once ``endDate`` has passed; otherwise active. A
    subscription without an end date never expires.

    Accepts a ``UserSubscription`` or a raw snapshot dict.
    """
    status, end_date = _fields(sub)
    if status == SubscriptionStatus.CANCELLED:
        return LifecycleStatus.CANCELLED
    if end_date is not None:
        now = as_aware(now or datetime.now(timezone.utc))
        if as_aware(end_date) < now:
            return LifecycleStatus.EXPIRED
    return LifecycleStatus.ACTIVE


def format_end_date(sub: SubscriptionLike) -> str:
    """End date for display; ``Never`` when there is none."""
    _, end_date = _fields(sub)
    if end_date is None:
        return "Never"
    return end_date.strftime("%b %d, %Y")
