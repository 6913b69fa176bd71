"""Tests for document models and derived values."""

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from app.models.booking import Appointment, Availability, BookingRequest, to_iso_utc
from app.models.catalog import Condition, Product, SocialLink
from app.models.subscription import (
    LifecycleStatus,
    SubscriptionPlan,
    UserSubscription,
    derive_status,
    format_end_date,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "status,end_date,expected",
    [
        ("active", None, LifecycleStatus.ACTIVE),
        ("active", NOW + timedelta(days=1), LifecycleStatus.ACTIVE),
        ("active", NOW - timedelta(days=1), LifecycleStatus.EXPIRED),
        ("cancelled", None, LifecycleStatus.CANCELLED),
        ("cancelled", NOW + timedelta(days=1), LifecycleStatus.CANCELLED),
        ("cancelled", NOW - timedelta(days=1), LifecycleStatus.CANCELLED),
    ],
)
def test_derive_status(status, end_date, expected):
    assert derive_status({"status": status, "endDate": end_date}, now=NOW) == expected


def test_derive_status_treats_naive_end_date_as_utc():
    sub = {"status": "active", "endDate": datetime(2024, 5, 31)}
    assert derive_status(sub, now=NOW) == LifecycleStatus.EXPIRED


def test_format_end_date():
    assert format_end_date({"status": "active"}) == "Never"
    assert format_end_date({"endDate": datetime(2024, 7, 1)}) == "Jul 01, 2024"


def test_subscription_start_sets_end_date():
    plan = SubscriptionPlan(
        id="p1", name="Monthly", description="One month of care", price=49.0, duration_in_days=30
    )
    sub = UserSubscription.start(plan, user_id="u1", user_email="u1@example.com", now=NOW)
    assert sub.end_date == NOW + timedelta(days=30)
    assert sub.plan_name == "Monthly"
    assert sub.status == "active"
    assert "id" not in sub.to_dict()
    assert sub.to_dict()["planId"] == "p1"


def test_plan_features_from_text():
    plan = SubscriptionPlan.model_validate({
        "name": "Monthly",
        "description": "One month of care",
        "price": 49,
        "durationInDays": 30,
        "features": "Weekly session\n\n  Home exercises  \n",
    })
    assert plan.features == ["Weekly session", "Home exercises"]


def test_to_iso_utc_for_aware_datetime():
    moment = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)
    assert to_iso_utc(moment) == "2024-06-01T09:00:00.000Z"


def test_booking_becomes_pending_appointment():
    booking = BookingRequest.model_validate({
        "name": "Sam Patient",
        "email": "sam@example.com",
        "phone": "5551234567",
        "therapistId": "t1",
        "date": "2024-06-01",
        "time": "09:00",
    })
    appointment = Appointment.from_booking(booking)
    assert booking.appointment_date == date(2024, 6, 1)
    assert appointment.status == "pending"
    assert appointment.therapist_id == "t1"
    assert appointment.appointment_date_time == to_iso_utc(datetime(2024, 6, 1, 9, 0))
    assert appointment.to_dict()["patientName"] == "Sam Patient"


@pytest.mark.parametrize(
    "field,value",
    [("email", "not-an-email"), ("phone", "123"), ("time", "9am"), ("name", "S")],
)
def test_booking_validation(field, value):
    payload = {
        "name": "Sam Patient",
        "email": "sam@example.com",
        "phone": "5551234567",
        "therapistId": "t1",
        "date": "2024-06-01",
        "time": "09:00",
    }
    payload[field] = value
    with pytest.raises(ValidationError):
        BookingRequest.model_validate(payload)


def test_availability_slots_sorted_and_unique():
    availability = Availability(time_slots=["14:00", "09:00", "14:00"])
    assert availability.time_slots == ["09:00", "14:00"]


def test_condition_slug_must_be_url_safe():
    with pytest.raises(ValidationError):
        Condition(
            name="Neck Pain",
            slug="Neck Pain!",
            description="Pain in the neck region",
            treatment_options="Stretching and strengthening",
        )


def test_product_price_positive():
    with pytest.raises(ValidationError):
        Product(name="Band", description="Resistance band set", price=0)


def test_social_link_platform_stored_as_string():
    link = SocialLink(platform="instagram", url="https://instagram.com/clinic")
    assert link.to_dict() == {"platform": "instagram", "url": "https://instagram.com/clinic"}
