"""Appointment lifecycle: booking, status changes and day listings."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from salonbook.core.database import utcnow
from salonbook.core.errors import ConflictError, NotFoundError, ValidationError
from salonbook.models.appointment import Appointment, AppointmentStatus
from salonbook.models.service import Service
from salonbook.schemas.appointment import AppointmentCreate
from salonbook.services.conflicts import CONFLICT_MESSAGE, ensure_slot_free, is_slot_violation
from salonbook.services.nail_techs import get_nail_tech, resolve_nail_tech
from salonbook.services.pricing import appointment_total_cents, resolve_design
from salonbook.utils.tz import local_day_start_utc, local_next_day_start_utc, truncate_to_minute

logger = logging.getLogger(__name__)


class AppointmentService:
    def __init__(self, session: AsyncSession) -> None:
        self.db = session

    async def get(self, appointment_id: int) -> Appointment:
        result = await self.db.execute(
            select(Appointment)
            .options(selectinload(Appointment.service))
            .where(Appointment.id == appointment_id)
            .execution_options(populate_existing=True)
        )
        appointment = result.scalar_one_or_none()
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    async def list_for_day(self, ymd: str | None = None, tz: str | None = None) -> list[Appointment]:
        """Appointments in the local day ``ymd`` (all when None), earliest first."""
        query = select(Appointment).options(selectinload(Appointment.service))
        if ymd:
            query = query.where(
                Appointment.scheduled_at >= local_day_start_utc(ymd, tz),
                Appointment.scheduled_at < local_next_day_start_utc(ymd, tz),
            )
        query = query.order_by(Appointment.scheduled_at.asc(), Appointment.id.asc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(self, user_id: int, request: AppointmentCreate) -> Appointment:
        """Book an appointment and freeze its price snapshot.

        Order matters: the design quote is computed from the service before
        the technician is resolved, because the technician upsert may roll
        the session back and expire loaded rows.
        """
        service = (await self.db.execute(
            select(Service).where(Service.id == request.service_id)
        )).scalar_one_or_none()
        if not service or not service.active:
            raise ValidationError("Invalid service.", field="serviceId")

        quote = resolve_design(
            service,
            request.add_design,
            design_price=request.design_price,
            preset_id=request.design_preset_id,
            design_notes=request.design_notes,
        )
        snapshot = {
            "service_id": service.id,
            "service_name": service.name,
            "price_cents": service.price_cents,
            "has_design": quote.has_design,
            "design_price_cents": quote.design_price_cents if quote.has_design else None,
            "design_notes": quote.design_notes if quote.has_design else None,
        }

        if request.nail_tech_id is not None:
            nail_tech_id = (await get_nail_tech(self.db, request.nail_tech_id)).id
        elif request.nail_tech_name:
            nail_tech_id = (await resolve_nail_tech(self.db, request.nail_tech_name)).id
        else:
            nail_tech_id = None

        scheduled_at = truncate_to_minute(request.scheduled_at)
        await ensure_slot_free(self.db, nail_tech_id, scheduled_at)

        appointment = Appointment(
            scheduled_at=scheduled_at,
            user_id=user_id,
            status=AppointmentStatus.CONFIRMED,
            customer_name=request.customer_name,
            phone_number=request.phone_number,
            nail_tech_id=nail_tech_id,
            **snapshot,
        )
        self.db.add(appointment)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            if is_slot_violation(exc):
                logger.warning(
                    "Double booking rejected by index: nail_tech_id=%s at %s",
                    nail_tech_id, scheduled_at.isoformat(),
                )
                raise ConflictError(CONFLICT_MESSAGE, field="date") from exc
            raise

        logger.info(
            "Appointment %s booked: service=%s nail_tech_id=%s at %s design=%s",
            appointment.id, snapshot["service_name"], nail_tech_id,
            scheduled_at.isoformat(), snapshot["design_price_cents"],
        )
        return await self.get(appointment.id)

    async def set_status(self, appointment_id: int, new_status: AppointmentStatus) -> Appointment:
        """Overwrite the status, stamping or clearing the completion snapshot.

        Any status may move to any other; only the destination decides the
        side effects.
        """
        appointment = await self.get(appointment_id)
        previous = appointment.status

        appointment.status = new_status
        if new_status == AppointmentStatus.DONE:
            appointment.total_cents = appointment_total_cents(
                appointment.price_cents, appointment.design_price_cents
            )
            appointment.finished_at = utcnow()
        else:
            appointment.total_cents = None
            appointment.finished_at = None

        await self.db.commit()
        logger.info(
            "Appointment %s status %s -> %s", appointment_id, previous.value, new_status.value
        )
        return await self.get(appointment_id)
