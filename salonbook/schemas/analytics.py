"""Pydantic schemas for revenue reporting."""

from datetime import datetime
from salonbook.schemas.base import CamelModel


class RevenueBucketOut(CamelModel):
    bucket_start: datetime
    count: int
    revenue_cents: int


class RevenueResponse(CamelModel):
    data: list[RevenueBucketOut]
