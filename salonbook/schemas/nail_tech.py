"""Pydantic schemas for nail technicians."""

from pydantic import Field, field_validator
from salonbook.schemas.base import CamelModel, StrictCamelModel


class NailTechCreate(StrictCamelModel):
    name: str = Field(..., max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v


class NailTechOut(CamelModel):
    id: int
    name: str


class NailTechResponse(CamelModel):
    nail_tech: NailTechOut


class NailTechListResponse(CamelModel):
    nail_techs: list[NailTechOut]
