"""Revenue analytics endpoint.

- GET /api/v1/analytics/revenue → completed-appointment revenue per local day/week/month
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.database import get_db
from salonbook.schemas.analytics import RevenueBucketOut, RevenueResponse
from salonbook.services.revenue import revenue_buckets

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/revenue", response_model=RevenueResponse)
async def get_revenue(
    granularity: Literal["day", "week", "month"] = Query("day"),
    date_from: Optional[str] = Query(None, alias="from", description="YYYY-MM-DD, inclusive"),
    date_to: Optional[str] = Query(None, alias="to", description="YYYY-MM-DD, inclusive"),
    tz: Optional[str] = Query(None, description="IANA zone; defaults to the shop zone"),
    db: AsyncSession = Depends(get_db),
):
    buckets = await revenue_buckets(db, granularity, date_from or None, date_to or None, tz or None)
    return RevenueResponse(data=[RevenueBucketOut.model_validate(b) for b in buckets])
