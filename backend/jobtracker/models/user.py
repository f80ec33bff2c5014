"""
User Model - account credentials for the job tracker

Passwords are stored as bcrypt hashes; emails are stored lower-cased.
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from jobtracker.database import Base
import uuid


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(128), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
