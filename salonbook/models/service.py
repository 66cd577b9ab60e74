"""Service catalog models: bookable services and their design price presets."""

import enum
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, CheckConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
from salonbook.core.database import Base, UTCDateTime, utcnow


class DesignMode(str, enum.Enum):
    """How a service prices its optional design add-on."""
    NONE = "none"
    FIXED = "fixed"
    CUSTOM = "custom"


class Service(Base):
    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint(
            "(design_mode = 'fixed' AND design_price_cents > 0) OR "
            "(design_mode <> 'fixed' AND design_price_cents IS NULL)",
            name="ck_services_design_price",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, unique=True, nullable=False)
    price_cents = Column(Integer, nullable=False)
    duration_min = Column(Integer, nullable=True)
    active = Column(Boolean, nullable=False, default=True)

    # Design add-on; design_price_cents is set only in FIXED mode
    design_mode = Column(
        SQLEnum(DesignMode, name="designmode", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=DesignMode.NONE,
    )
    design_price_cents = Column(Integer, nullable=True)

    created_at = Column(UTCDateTime, default=utcnow)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    design_price_options = relationship(
        "DesignPriceOption",
        back_populates="service",
        cascade="all, delete-orphan",
        order_by="DesignPriceOption.price_cents",
        lazy="selectin",
    )
    appointments = relationship("Appointment", back_populates="service", passive_deletes=True)


class DesignPriceOption(Base):
    """A named preset price offered when a service is in CUSTOM design mode."""
    __tablename__ = "design_price_options"
    __table_args__ = (CheckConstraint("price_cents > 0", name="ck_design_price_options_positive"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)
    label = Column(String(40), nullable=True)
    price_cents = Column(Integer, nullable=False)

    service = relationship("Service", back_populates="design_price_options")
