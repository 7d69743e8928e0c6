"""User model definitions."""

from sqlalchemy import Column, Integer, String
from mindconnect.database import Base


class User(Base):
    """Represents an application user."""
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String)
    last_name = Column(String)
    role = Column(String, default="patient", nullable=False)  # patient/admin
