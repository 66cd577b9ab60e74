"""Pydantic schemas for Appointments."""

from datetime import date, datetime
from typing import Optional
from pydantic import AliasChoices, Field, field_validator
from salonbook.models.appointment import AppointmentStatus
from salonbook.schemas.base import CamelModel, StrictCamelModel
from salonbook.schemas.nail_tech import NailTechOut

# Upper bound for a manually entered design price, in dollars
MAX_DESIGN_PRICE = 100_000


class AppointmentCreate(StrictCamelModel):
    """Booking request. ``date`` is the slot's UTC instant."""
    scheduled_at: datetime = Field(..., validation_alias=AliasChoices("date", "scheduledAt", "scheduled_at"))
    customer_name: str = Field(..., min_length=1, max_length=100)
    phone_number: str = Field(..., min_length=1, max_length=40)
    service_id: int
    nail_tech_id: Optional[int] = None
    nail_tech_name: Optional[str] = Field(None, max_length=100)
    add_design: bool = False
    design_price: Optional[float] = Field(None, le=MAX_DESIGN_PRICE, allow_inf_nan=False)  # major units, custom mode only
    design_preset_id: Optional[int] = None
    design_notes: Optional[str] = None

    @field_validator("customer_name", "phone_number")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("nail_tech_name")
    @classmethod
    def strip_tech_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class StatusUpdate(StrictCamelModel):
    status: AppointmentStatus


class AppointmentOut(CamelModel):
    """Schema for returning appointment details."""
    id: int
    scheduled_at: datetime = Field(
        ...,
        validation_alias=AliasChoices("scheduled_at", "date"),
        serialization_alias="date",
    )
    customer_name: str
    phone_number: str
    status: AppointmentStatus
    nail_tech: Optional[NailTechOut] = None
    service_id: int
    service_name: str
    price_cents: int
    has_design: bool
    design_price_cents: Optional[int] = None
    design_notes: Optional[str] = None
    finished_at: Optional[datetime] = None
    total_cents: Optional[int] = None
    service_duration_min: Optional[int] = None


class AppointmentResponse(CamelModel):
    appointment: AppointmentOut


class AppointmentCreatedResponse(CamelModel):
    success: bool = True
    appointment: AppointmentOut


class AppointmentListResponse(CamelModel):
    appointments: list[AppointmentOut]


class TimeSlotOut(CamelModel):
    label: str  # "11:15 AM"
    start_utc: datetime
    end_utc: datetime
    disabled: bool
    booked: bool = False
    conflict: bool = False


class AvailableSlotsResponse(CamelModel):
    date: date
    slots: list[TimeSlotOut]
