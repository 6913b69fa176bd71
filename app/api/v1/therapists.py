"""Therapist, availability and appointment endpoints."""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from app.crud.base import StoreContext
from app.crud.booking import AppointmentRepository, AvailabilityRepository
from app.crud.catalog import TherapistRepository
from app.dependencies import get_optional_user, get_store
from app.models.booking import AppointmentStatus, BookingRequest
from app.models.catalog import Therapist
from app.schemas.responses import ApiResponse, ListData, WriteData
from app.store.policy import AuthContext
from app.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()
bookings_router = APIRouter()


class AvailabilityRequest(BaseModel):
    """Time slots a therapist is free on one day."""
    time_slots: List[str] = Field(alias="timeSlots")


class AppointmentStatusRequest(BaseModel):
    status: AppointmentStatus


@router.get("", response_model=ApiResponse)
async def list_therapists(
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    therapists = TherapistRepository(store).list(user)
    return ApiResponse.ok(ListData.of(therapists), "Therapists retrieved successfully")


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_therapist(
    therapist: Therapist,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = TherapistRepository(store).create(therapist, user)
    return ApiResponse.ok(WriteData.from_result(result), f"{therapist.name} has been added.")


@router.delete("/{therapist_id}", response_model=ApiResponse)
async def delete_therapist(
    therapist_id: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = TherapistRepository(store).delete(therapist_id, user)
    return ApiResponse.ok(WriteData.from_result(result), "Therapist deleted.")


@router.get("/{therapist_id}/availability/{day}", response_model=ApiResponse)
async def get_availability(
    therapist_id: str,
    day: date,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    """Sorted free slots for a day (empty list when none are published)."""
    slots = AvailabilityRepository(store, therapist_id).slots_for(day, user)
    return ApiResponse.ok({"date": day.isoformat(), "timeSlots": slots}, "Availability retrieved")


@router.put("/{therapist_id}/availability/{day}", response_model=ApiResponse)
async def set_availability(
    therapist_id: str,
    day: date,
    request: AvailabilityRequest,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = AvailabilityRepository(store, therapist_id).publish(day, request.time_slots, user)
    return ApiResponse.ok(WriteData.from_result(result), "Availability updated.")


@router.get("/{therapist_id}/appointments", response_model=ApiResponse)
async def list_appointments(
    therapist_id: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    appointments = AppointmentRepository(store, therapist_id).upcoming_first(user)
    return ApiResponse.ok(ListData.of(appointments), "Appointments retrieved successfully")


@router.patch("/{therapist_id}/appointments/{appointment_id}", response_model=ApiResponse)
async def update_appointment_status(
    therapist_id: str,
    appointment_id: str,
    request: AppointmentStatusRequest,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = AppointmentRepository(store, therapist_id).set_status(appointment_id, request.status, user)
    return ApiResponse.ok(WriteData.from_result(result), f"Appointment is now {request.status.value}.")


@bookings_router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    booking: BookingRequest,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    """
    Request an appointment from the public booking form.

    The appointment is stored as ``pending``; the clinic confirms it later.
    """
    result = AppointmentRepository(store, booking.therapist_id).book(booking, user)
    data = WriteData.from_result(result)
    logger.info(f"Appointment requested with therapist {booking.therapist_id}")
    return ApiResponse.ok(
        data,
        f"We've received your request for an appointment on "
        f"{booking.appointment_date.strftime('%B %d, %Y')} at {booking.slot}. "
        "We will contact you shortly to confirm.",
    )
