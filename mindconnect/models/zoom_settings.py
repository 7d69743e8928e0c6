"""Zoom integration settings model."""

from sqlalchemy import Column, Integer, String
from mindconnect.database import Base


class ZoomSettings(Base):
    """Singleton row holding the Zoom account credentials."""
    __tablename__ = "zoom_settings"

    id = Column(Integer, primary_key=True)
    api_key = Column(String)
    api_secret = Column(String)
    zoom_email = Column(String)
