"""
PhysioCare Models
Typed document records validated at the store boundary.
"""

from app.models.base import DocumentModel
from app.models.booking import Appointment, AppointmentStatus, Availability, BookingRequest
from app.models.catalog import (
    Condition,
    ContactInformation,
    GuideStep,
    Product,
    SocialLink,
    SocialPlatform,
    Therapist,
    TreatmentGuide,
)
from app.models.messages import AdminRecord, ContactSubmission, Feedback
from app.models.subscription import (
    LifecycleStatus,
    SubscriptionPlan,
    SubscriptionStatus,
    UserSubscription,
    derive_status,
    format_end_date,
)

__all__ = [
    "DocumentModel",
    "Appointment",
    "AppointmentStatus",
    "Availability",
    "BookingRequest",
    "Condition",
    "ContactInformation",
    "GuideStep",
    "Product",
    "SocialLink",
    "SocialPlatform",
    "Therapist",
    "TreatmentGuide",
    "AdminRecord",
    "ContactSubmission",
    "Feedback",
    "LifecycleStatus",
    "SubscriptionPlan",
    "SubscriptionStatus",
    "UserSubscription",
    "derive_status",
    "format_end_date",
]
