"""Service catalog endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.database import get_db
from salonbook.core.deps import get_current_user_id
from salonbook.schemas.service import (
    ServiceCreate,
    ServiceDeleteResponse,
    ServiceListResponse,
    ServiceOut,
    ServiceResponse,
    ServiceUpdate,
)
from salonbook.services import catalog

router = APIRouter()


@router.get("", response_model=ServiceListResponse)
async def list_services(
    db: AsyncSession = Depends(get_db),
    _: str = Depends(get_current_user_id),
):
    services = await catalog.list_services(db)
    return ServiceListResponse(services=[ServiceOut.model_validate(s) for s in services])


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(get_current_user_id),
):
    service = await catalog.create_service(db, data)
    return ServiceResponse(service=ServiceOut.model_validate(service))


@router.patch("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    patch: ServiceUpdate,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(get_current_user_id),
):
    service = await catalog.update_service(db, service_id, patch)
    return ServiceResponse(service=ServiceOut.model_validate(service))


@router.delete("/{service_id}", response_model=ServiceDeleteResponse)
async def delete_service(
    service_id: int,
    db: AsyncSession = Depends(get_db),
    _: str = Depends(get_current_user_id),
):
    """Hard-delete an unused service; deactivate one that has bookings."""
    service, soft_deleted = await catalog.delete_service(db, service_id)
    return ServiceDeleteResponse(
        soft_deleted=soft_deleted,
        service=ServiceOut.model_validate(service) if service else None,
    )
