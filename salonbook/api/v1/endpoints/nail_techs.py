"""Nail technician endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.database import get_db
from salonbook.core.deps import get_current_user_id
from salonbook.schemas.nail_tech import NailTechCreate, NailTechListResponse, NailTechOut, NailTechResponse
from salonbook.services.nail_techs import create_nail_tech, list_nail_techs

router = APIRouter()


@router.get("", response_model=NailTechListResponse)
async def get_nail_techs(db: AsyncSession = Depends(get_db)):
    nail_techs = await list_nail_techs(db)
    return NailTechListResponse(nail_techs=[NailTechOut.model_validate(t) for t in nail_techs])


@router.post("", response_model=NailTechResponse, status_code=201)
async def post_nail_tech(
    data: NailTechCreate,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(get_current_user_id),
):
    nail_tech = await create_nail_tech(db, data.name)
    return NailTechResponse(nail_tech=NailTechOut.model_validate(nail_tech))
