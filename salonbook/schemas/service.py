"""Pydantic schemas for the service catalog."""

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator
from salonbook.models.service import DesignMode
from salonbook.schemas.base import MAX_CENTS, CamelModel, StrictCamelModel


class DesignPriceOptionIn(StrictCamelModel):
    label: Optional[str] = Field(None, max_length=40)
    price_cents: int = Field(..., gt=0, le=MAX_CENTS)

    @field_validator("label")
    @classmethod
    def strip_label(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("label must not be blank")
        return v


class DesignPriceOptionOut(CamelModel):
    id: int
    label: Optional[str] = None
    price_cents: int


class ServiceCreate(StrictCamelModel):
    """Schema for creating a service. Design invariants are checked by the catalog service."""
    name: str = Field(..., min_length=2)
    price_cents: int = Field(..., gt=0, le=MAX_CENTS)
    duration_min: Optional[int] = Field(None, gt=0)
    active: bool = True
    design_mode: DesignMode = DesignMode.NONE
    design_price_cents: Optional[int] = Field(None, gt=0, le=MAX_CENTS)
    design_price_options: list[DesignPriceOptionIn] = []


class ServiceUpdate(StrictCamelModel):
    """Partial update; an explicit null designPriceCents clears the price."""
    name: Optional[str] = Field(None, min_length=2)
    price_cents: Optional[int] = Field(None, gt=0, le=MAX_CENTS)
    duration_min: Optional[int] = Field(None, gt=0)
    active: Optional[bool] = None
    design_mode: Optional[DesignMode] = None
    design_price_cents: Optional[int] = Field(None, gt=0, le=MAX_CENTS)
    design_price_options: Optional[list[DesignPriceOptionIn]] = None


class ServiceOut(CamelModel):
    id: int
    name: str
    price_cents: int
    duration_min: Optional[int] = None
    active: bool
    design_mode: DesignMode
    design_price_cents: Optional[int] = None
    design_price_options: list[DesignPriceOptionOut] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ServiceResponse(CamelModel):
    service: ServiceOut


class ServiceListResponse(CamelModel):
    services: list[ServiceOut]


class ServiceDeleteResponse(CamelModel):
    soft_deleted: bool
    service: Optional[ServiceOut] = None
