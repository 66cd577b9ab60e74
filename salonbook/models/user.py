"""User model; rows mirror accounts held by the external identity provider."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from salonbook.core.database import Base, UTCDateTime, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    external_id = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, nullable=False, default="")
    name = Column(String, nullable=False, default="")
    created_at = Column(UTCDateTime, default=utcnow)

    # Relationships
    appointments = relationship("Appointment", back_populates="user")
