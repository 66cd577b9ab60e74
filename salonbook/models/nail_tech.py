"""Nail technician model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from salonbook.core.database import Base, UTCDateTime, utcnow


class NailTech(Base):
    __tablename__ = "nail_techs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    created_at = Column(UTCDateTime, default=utcnow)

    appointments = relationship("Appointment", back_populates="nail_tech")
