"""Shared pydantic base for the camelCase JSON the booking UI speaks."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts camelCase or snake_case on input, emits camelCase."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class StrictCamelModel(CamelModel):
    """Request body model: unknown keys are rejected."""

    class Config:
        extra = "forbid"


# Money columns are 32-bit INTEGER cents
MAX_CENTS = 2_147_483_647
