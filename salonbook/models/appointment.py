"""Appointment model with its frozen price snapshot."""

import enum
from sqlalchemy import (
    Column, String, Integer, Boolean, ForeignKey, UniqueConstraint, Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from salonbook.core.database import Base, UTCDateTime, utcnow
from salonbook.models.nail_tech import NailTech  # noqa: F401  relationship targets
from salonbook.models.service import Service  # noqa: F401
from salonbook.models.user import User  # noqa: F401

TECH_SLOT_CONSTRAINT = "uq_appointments_tech_slot"


class AppointmentStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    DONE = "done"


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        # One booking per technician per minute; scheduled_at is stored minute-aligned
        UniqueConstraint("nail_tech_id", "scheduled_at", name=TECH_SLOT_CONSTRAINT),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    scheduled_at = Column(UTCDateTime, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(
        SQLEnum(AppointmentStatus, name="appointmentstatus", values_callable=lambda e: [m.value for m in e]),
        default=AppointmentStatus.CONFIRMED,
        nullable=False,
        index=True,
    )

    # Customer info
    customer_name = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    nail_tech_id = Column(Integer, ForeignKey("nail_techs.id"), nullable=True, index=True)

    # Price snapshot taken at booking time
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False, index=True)
    service_name = Column(String, nullable=False)
    price_cents = Column(Integer, nullable=False)
    has_design = Column(Boolean, nullable=False, default=False)
    design_price_cents = Column(Integer, nullable=True)
    design_notes = Column(String(200), nullable=True)

    # Set only while status is DONE
    finished_at = Column(UTCDateTime, nullable=True)
    total_cents = Column(Integer, nullable=True)

    created_at = Column(UTCDateTime, default=utcnow)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    user = relationship("User", back_populates="appointments")
    nail_tech = relationship("NailTech", back_populates="appointments", lazy="joined")
    service = relationship("Service", back_populates="appointments")
