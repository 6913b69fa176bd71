"""
Booking Repositories
Per-therapist appointments and availability sub-collections.
"""

from datetime import date
from typing import List, Optional

from app.crud.base import BaseRepository, StoreContext
from app.models.booking import Appointment, AppointmentStatus, Availability, BookingRequest
from app.store.policy import AuthContext
from app.store.queries import DESCENDING
from app.store.writes import WriteResult


class AppointmentRepository(BaseRepository[Appointment]):
    """``therapists/{therapist_id}/appointments``"""

    model = Appointment

    def __init__(self, store: StoreContext, therapist_id: str):
        super().__init__(store)
        self.therapist_id = therapist_id
        self.collection_path = f"therapists/{therapist_id}/appointments"

    def book(self, booking: BookingRequest, auth: AuthContext) -> WriteResult:
        """Record a pending appointment request from the booking form."""
        return self.create(Appointment.from_booking(booking), auth)

    def upcoming_first(self, auth: AuthContext) -> List[Appointment]:
        return self.list(auth, self.query().order_by("appointmentDateTime", DESCENDING))

    def set_status(self, appointment_id: str, status: AppointmentStatus, auth: AuthContext) -> WriteResult:
        return self.update(appointment_id, {"status": AppointmentStatus(status).value}, auth)


class AvailabilityRepository(BaseRepository[Availability]):
    """``therapists/{therapist_id}/availability/{yyyy-MM-dd}``"""

    model = Availability

    def __init__(self, store: StoreContext, therapist_id: str):
        super().__init__(store)
        self.therapist_id = therapist_id
        self.collection_path = f"therapists/{therapist_id}/availability"

    @staticmethod
    def day_key(day: date) -> str:
        return day.strftime("%Y-%m-%d")

    def slots_for(self, day: date, auth: AuthContext) -> List[str]:
        """Sorted free time slots for a day; empty when none are published."""
        availability: Optional[Availability] = self.get(self.day_key(day), auth)
        return availability.time_slots if availability else []

    def publish(self, day: date, slots: List[str], auth: AuthContext) -> WriteResult:
        availability = Availability(time_slots=slots)
        return self.store.writes.set(self.doc_path(self.day_key(day)), availability.to_dict(), auth)
