import uuid

from sqlalchemy import Boolean, Column, DateTime, String, Text
from sqlalchemy.sql import func

from app.core.database import Base


class User(Base):
    __tablename__ = "users"

    # Primary key (uuid string, shared with the auth provider)
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Profile information
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=True)
    role = Column(String(20), default="member", nullable=False)
    photo_url = Column(Text, nullable=True)

    # Account status
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    last_login = Column(DateTime, nullable=True)

    @property
    def display_name(self) -> str:
        """Name printed on certificates"""
        return self.name or "Peserta"

    def __repr__(self):
        return f"<User(id={self.id}, name='{self.name}')>"
