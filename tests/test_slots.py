"""Tests for the shop-local booking grid."""

from datetime import date, datetime, timezone

import pytest

from salonbook.core.errors import ConfigurationError
from salonbook.models.appointment import Appointment, AppointmentStatus
from salonbook.models.nail_tech import NailTech
from salonbook.services.slots import available_slots, generate_time_slots, time_to_minutes
from salonbook.utils.tz import resolve_timezone

LA = resolve_timezone("America/Los_Angeles")
DAY = date(2025, 1, 15)  # Wednesday
LONG_AGO = datetime(2000, 1, 1, tzinfo=timezone.utc)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_time_to_minutes():
    assert time_to_minutes("09:30") == 570
    assert time_to_minutes("20:00") == 1200
    with pytest.raises(ConfigurationError):
        time_to_minutes("noon")


def test_full_day_grid():
    slots = generate_time_slots(DAY, LA, "11:00", "20:00", 15, now=LONG_AGO)
    assert len(slots) == 37
    assert slots[0].label == "11:00 AM"
    assert slots[0].start_utc == utc(2025, 1, 15, 19, 0)
    assert slots[-1].label == "8:00 PM"
    assert slots[4].label == "12:00 PM"
    assert not any(s.disabled for s in slots)


def test_duration_must_fit_before_close():
    slots = generate_time_slots(DAY, LA, "11:00", "20:00", 15, duration_min=60, now=LONG_AGO)
    assert slots[-1].label == "7:00 PM"
    assert slots[-1].end_utc == utc(2025, 1, 16, 4, 0)
    assert len(slots) == 33


def test_break_disables_slots():
    slots = generate_time_slots(DAY, LA, "11:00", "20:00", 15, breaks=(("14:00", "14:30"),), now=LONG_AGO)
    disabled = [s.label for s in slots if s.disabled]
    assert disabled == ["2:00 PM", "2:15 PM"]


def test_past_slots_disabled_today():
    now = utc(2025, 1, 15, 20, 0)  # noon local
    slots = generate_time_slots(DAY, LA, "11:00", "20:00", 15, now=now)
    disabled = [s.label for s in slots if s.disabled]
    assert disabled == ["11:00 AM", "11:15 AM", "11:30 AM", "11:45 AM"]


def test_closed_weekday_has_no_slots():
    assert generate_time_slots(DAY, LA, "11:00", "20:00", 15, closed_weekdays=("wed",)) == []


def test_non_positive_step_is_configuration_error():
    with pytest.raises(ConfigurationError):
        generate_time_slots(DAY, LA, "11:00", "20:00", 0)


@pytest.mark.asyncio
async def test_available_slots_marks_bookings(db, user, gel_manicure):
    amy = NailTech(name="Amy")
    bea = NailTech(name="Bea")
    db.add_all([amy, bea])
    await db.commit()

    def appt(at, tech, status=AppointmentStatus.CONFIRMED):
        return Appointment(
            scheduled_at=at, user_id=user.id, status=status, customer_name="Jane",
            phone_number="555-0100", nail_tech_id=tech.id, service_id=gel_manicure.id,
            service_name=gel_manicure.name, price_cents=gel_manicure.price_cents, has_design=False,
        )

    db.add_all([
        appt(utc(2025, 1, 15, 19, 30), amy),  # 11:30 AM
        appt(utc(2025, 1, 15, 21, 0), bea, AppointmentStatus.CANCELLED),  # 1:00 PM
    ])
    await db.commit()

    slots = {s.label: s for s in await available_slots(db, "2025-01-15", nail_tech_id=amy.id, now=LONG_AGO)}
    assert slots["11:30 AM"].booked and slots["11:30 AM"].conflict
    assert not slots["11:45 AM"].booked
    # A cancelled booking keeps its minute
    assert slots["1:00 PM"].booked and not slots["1:00 PM"].conflict

    slots = {s.label: s for s in await available_slots(db, "2025-01-15", nail_tech_id=bea.id, now=LONG_AGO)}
    assert slots["11:30 AM"].booked and not slots["11:30 AM"].conflict
    assert slots["1:00 PM"].conflict


@pytest.mark.asyncio
async def test_available_slots_uses_service_duration(db, gel_manicure):
    slots = await available_slots(db, "2025-01-15", service_id=gel_manicure.id, now=LONG_AGO)
    assert slots[-1].label == "7:00 PM"


@pytest.mark.asyncio
async def test_slots_endpoint(auth_client, gel_manicure):
    response = await auth_client.get(
        "/api/v1/appointments/slots", params={"date": "2025-01-15", "serviceId": gel_manicure.id}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["date"] == "2025-01-15"
    assert body["slots"][0]["label"] == "11:00 AM"
    assert body["slots"][-1]["label"] == "7:00 PM"


@pytest.mark.asyncio
async def test_slots_endpoint_errors(auth_client):
    response = await auth_client.get("/api/v1/appointments/slots", params={"date": "soon"})
    assert response.status_code == 400

    response = await auth_client.get("/api/v1/appointments/slots", params={"date": "2025-01-15", "serviceId": 404})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_grid_agrees_with_booking_conflicts(auth_client, gel_manicure):
    kim_id = (await auth_client.post("/api/v1/nail-techs", json={"name": "Kim"})).json()["nailTech"]["id"]

    def booking(start_utc):
        return {
            "date": start_utc,
            "customerName": "Jane",
            "phoneNumber": "555-0100",
            "serviceId": gel_manicure.id,
            "nailTechId": kim_id,
        }

    created = await auth_client.post("/api/v1/appointments", json=booking("2025-01-15T19:00:00Z"))
    appt_id = created.json()["appointment"]["id"]
    await auth_client.patch(f"/api/v1/appointments/{appt_id}", json={"status": "cancelled"})

    response = await auth_client.get(
        "/api/v1/appointments/slots", params={"date": "2025-01-15", "nailTechId": kim_id}
    )
    slots = response.json()["slots"]
    held, free = slots[0], slots[1]
    assert held["label"] == "11:00 AM" and held["booked"] and held["conflict"]
    assert free["label"] == "11:15 AM" and not free["conflict"]

    response = await auth_client.post("/api/v1/appointments", json=booking(held["startUtc"]))
    assert response.status_code == 409

    response = await auth_client.post("/api/v1/appointments", json=booking(free["startUtc"]))
    assert response.status_code == 201
