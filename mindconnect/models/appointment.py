"""Appointment model definitions."""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, JSON, String
from mindconnect.database import Base


class Appointment(Base):
    """Represents a booked telehealth session."""
    __tablename__ = "appointments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    patient_name = Column(String, nullable=False)
    patient_email = Column(String, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    duration = Column(Integer, nullable=False, default=45)  # minutes
    type = Column(String, nullable=False, default="Initial Consultation")
    status = Column(String, nullable=False, default="pending")
    zoom_meeting_id = Column(String)
    zoom_meeting_url = Column(String)
    zoom_meeting_password = Column(String)
    questionnaire = Column(JSON)
