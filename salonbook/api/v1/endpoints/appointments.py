"""Appointment booking, listing and status endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.database import get_db
from salonbook.core.deps import get_current_user, get_current_user_id
from salonbook.models.user import User
from salonbook.schemas.appointment import (
    AppointmentCreate,
    AppointmentCreatedResponse,
    AppointmentListResponse,
    AppointmentOut,
    AppointmentResponse,
    AvailableSlotsResponse,
    StatusUpdate,
    TimeSlotOut,
)
from salonbook.services.appointments import AppointmentService
from salonbook.services.slots import available_slots
from salonbook.utils.tz import parse_ymd

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=AppointmentListResponse)
async def list_appointments(
    date: Optional[str] = Query(None, description="Shop-local day, YYYY-MM-DD"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List appointments, optionally only those on one shop-local day."""
    ymd = parse_ymd(date).isoformat() if date else None
    appointments = await AppointmentService(db).list_for_day(ymd)
    return AppointmentListResponse(
        appointments=[
            AppointmentOut.model_validate(a).model_copy(
                update={"service_duration_min": a.service.duration_min if a.service else None}
            )
            for a in appointments
        ]
    )


@router.get("/slots", response_model=AvailableSlotsResponse)
async def get_available_slots(
    date: str = Query(..., description="Shop-local day, YYYY-MM-DD"),
    service_id: Optional[int] = Query(None, alias="serviceId"),
    nail_tech_id: Optional[int] = Query(None, alias="nailTechId"),
    db: AsyncSession = Depends(get_db),
    _: str = Depends(get_current_user_id),
):
    """Booking grid for a day, with already-booked minutes flagged."""
    day = parse_ymd(date)
    slots = await available_slots(db, day, service_id=service_id, nail_tech_id=nail_tech_id)
    return AvailableSlotsResponse(
        date=day,
        slots=[TimeSlotOut.model_validate(s) for s in slots],
    )


@router.post("", response_model=AppointmentCreatedResponse, status_code=201)
async def create_appointment(
    request: AppointmentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Book a new appointment for the signed-in staff user."""
    appointment = await AppointmentService(db).create(current_user.id, request)
    return AppointmentCreatedResponse(appointment=AppointmentOut.model_validate(appointment))


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment_status(
    appointment_id: int,
    update: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(get_current_user_id),
):
    """Change status; marking done stamps finish time and total."""
    appointment = await AppointmentService(db).set_status(appointment_id, update.status)
    return AppointmentResponse(appointment=AppointmentOut.model_validate(appointment))
