"""Service catalog management: create, update, soft/hard delete, seed."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.errors import ConflictError, NotFoundError
from salonbook.models.appointment import Appointment
from salonbook.models.service import DesignMode, DesignPriceOption, Service
from salonbook.schemas.service import ServiceCreate, ServiceUpdate
from salonbook.services.pricing import validate_design_config

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A service with that name already exists."

# Default catalog for a fresh shop (name, price in cents, minutes)
DEFAULT_SERVICES = [
    ("Gel Manicure", 4500, 60),
    ("Acrylic Full Set", 6500, 75),
    ("Acrylic Fill", 5000, 60),
    ("Classic Pedicure", 5000, 60),
    ("Deluxe Spa Pedicure", 7000, 75),
    ("Dip Powder Manicure", 5500, 60),
    ("SNS Manicure", 5500, 60),
    ("Nail Art (simple, per nail)", 500, 5),
    ("Nail Art (detailed, per nail)", 800, 8),
    ("Add Polish Change (hands)", 2000, 30),
    ("Add Polish Change (toes)", 2500, 35),
]


async def list_services(db: AsyncSession) -> list[Service]:
    """Active services first, then alphabetical."""
    result = await db.execute(
        select(Service).order_by(Service.active.desc(), Service.name.asc())
    )
    return list(result.scalars().all())


async def get_service(db: AsyncSession, service_id: int) -> Service:
    result = await db.execute(select(Service).where(Service.id == service_id))
    service = result.scalar_one_or_none()
    if not service:
        raise NotFoundError("Service not found")
    return service


async def _commit_or_conflict(db: AsyncSession) -> None:
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(DUPLICATE_NAME_MESSAGE, field="name")


async def create_service(db: AsyncSession, data: ServiceCreate) -> Service:
    validate_design_config(data.design_mode, data.design_price_cents)

    service = Service(
        name=data.name.strip(),
        price_cents=data.price_cents,
        duration_min=data.duration_min,
        active=data.active,
        design_mode=data.design_mode,
        design_price_cents=data.design_price_cents if data.design_mode == DesignMode.FIXED else None,
        design_price_options=[
            DesignPriceOption(label=o.label, price_cents=o.price_cents)
            for o in data.design_price_options
        ],
    )
    db.add(service)
    await _commit_or_conflict(db)

    service_id = service.id
    logger.info("Service created: id=%s name=%r mode=%s", service_id, service.name, service.design_mode.value)
    # Reload so presets come back in price order
    db.expire(service)
    return await get_service(db, service_id)


async def update_service(db: AsyncSession, service_id: int, patch: ServiceUpdate) -> Service:
    """Apply a partial update, validating design invariants on the resulting state."""
    service = await get_service(db, service_id)
    fields = patch.model_fields_set

    next_mode = patch.design_mode if patch.design_mode is not None else DesignMode(service.design_mode)
    if "design_price_cents" in fields:
        next_design_price = patch.design_price_cents
    else:
        next_design_price = service.design_price_cents
        # Leaving FIXED drops the stored price rather than failing the invariant
        if next_mode != DesignMode.FIXED and patch.design_mode is not None:
            next_design_price = None
    validate_design_config(next_mode, next_design_price)

    for key in ("name", "price_cents", "duration_min", "active"):
        if key in fields:
            value = getattr(patch, key)
            if key == "name" and value is not None:
                value = value.strip()
            if value is None and key != "duration_min":
                continue
            setattr(service, key, value)

    service.design_mode = next_mode
    service.design_price_cents = next_design_price if next_mode == DesignMode.FIXED else None

    if patch.design_price_options is not None:
        service.design_price_options = [
            DesignPriceOption(label=o.label, price_cents=o.price_cents)
            for o in patch.design_price_options
        ]

    await _commit_or_conflict(db)
    logger.info("Service updated: id=%s fields=%s", service_id, sorted(fields))
    db.expire(service)
    return await get_service(db, service_id)


async def delete_service(db: AsyncSession, service_id: int) -> tuple[Service | None, bool]:
    """Delete a service, or deactivate it if appointments reference it.

    Returns ``(service, soft_deleted)``; ``service`` is None after a hard delete.
    """
    service = await get_service(db, service_id)

    used = (await db.execute(
        select(func.count(Appointment.id)).where(Appointment.service_id == service_id)
    )).scalar_one()

    if used > 0:
        service.active = False
        await db.commit()
        logger.info("Service %s soft-deleted (%d appointments reference it)", service_id, used)
        return await get_service(db, service_id), True

    await db.delete(service)
    await db.commit()
    logger.info("Service %s deleted", service_id)
    return None, False


async def seed_default_services(db: AsyncSession) -> int:
    """Insert any default services missing by name. Returns how many were added."""
    existing = set((await db.execute(select(Service.name))).scalars().all())
    added = 0
    for name, price_cents, duration_min in DEFAULT_SERVICES:
        if name in existing:
            continue
        db.add(Service(name=name, price_cents=price_cents, duration_min=duration_min))
        added += 1
    if added:
        await db.commit()
    return added
