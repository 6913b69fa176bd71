"""
Booking Models
Appointments requested through the booking form and therapist availability.
"""

import re
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import ClassVar, List

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.base import DocumentModel

TIME_SLOT = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


def to_iso_utc(moment: datetime) -> str:
    """
    ISO-8601 UTC string with millisecond precision and a ``Z`` suffix.

    Naive datetimes are taken to be in the server's local time zone.
    """
    if moment.tzinfo is None:
        moment = moment.astimezone()
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def appointment_moment(day: date, slot: str) -> datetime:
    """Local datetime for a booking date and an ``HH:MM`` slot."""
    hours, minutes = (int(part) for part in slot.split(":"))
    return datetime.combine(day, time(hours, minutes))


class BookingRequest(BaseModel):
    """What a patient submits from the booking form."""

    name: str = Field(min_length=2, description="Patient name")
    email: EmailStr
    phone: str = Field(min_length=10)
    therapist_id: str = Field(min_length=1, alias="therapistId")
    appointment_date: date = Field(alias="date")
    slot: str = Field(alias="time")

    model_config = {"populate_by_name": True}

    @field_validator("slot")
    @classmethod
    def validate_slot(cls, value: str) -> str:
        if not TIME_SLOT.match(value):
            raise ValueError("Please select a time.")
        return value


class Appointment(DocumentModel):
    """A document in ``therapists/{id}/appointments``."""

    kind: ClassVar[str] = "appointment"

    patient_name: str
    email: str
    phone_number: str
    appointment_date_time: str = Field(description="ISO-8601 UTC string")
    therapist_id: str
    status: AppointmentStatus = AppointmentStatus.PENDING

    @classmethod
    def from_booking(cls, booking: BookingRequest) -> "Appointment":
        return cls(
            patient_name=booking.name,
            email=booking.email,
            phone_number=booking.phone,
            appointment_date_time=to_iso_utc(appointment_moment(booking.appointment_date, booking.slot)),
            therapist_id=booking.therapist_id,
            status=AppointmentStatus.PENDING,
        )


class Availability(DocumentModel):
    """A document in ``therapists/{id}/availability/{yyyy-MM-dd}``."""

    kind: ClassVar[str] = "availability"

    time_slots: List[str] = Field(default_factory=list)

    @field_validator("time_slots")
    @classmethod
    def sort_slots(cls, value: List[str]) -> List[str]:
        for slot in value:
            if not TIME_SLOT.match(slot):
                raise ValueError(f"Invalid time slot: {slot}")
        return sorted(set(value))
