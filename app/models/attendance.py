# app/models/attendance.py
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)

from app.core.database import Base


class AttendanceSession(Base):
    __tablename__ = "attendance_sessions"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<AttendanceSession(id={self.id}, title='{self.title}')>"


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "attendance_session_id", name="uq_attendance_user_session"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    attendance_session_id = Column(
        Integer, ForeignKey("attendance_sessions.id"), nullable=False, index=True
    )
    check_in_time = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<AttendanceRecord(user_id={self.user_id}, session_id={self.attendance_session_id})>"
