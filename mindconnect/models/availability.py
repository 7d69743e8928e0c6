"""Availability model definitions."""

from sqlalchemy import Column, Integer, Boolean, String
from mindconnect.database import Base


class Availability(Base):
    """Represents the provider's business hours for one weekday."""
    __tablename__ = "availability"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    day_of_week = Column(Integer, nullable=False, index=True)  # 0-6, Sunday first
    start_time = Column(String, nullable=False)  # "HH:MM", 24h
    end_time = Column(String, nullable=False)
    is_available = Column(Boolean, default=True)
