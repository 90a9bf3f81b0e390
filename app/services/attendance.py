# app/services/attendance.py
import logging
from datetime import datetime
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.decorator import db_exception
from app.models.attendance import AttendanceRecord, AttendanceSession

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, db: Session):
        self.db = db

    def list_active_sessions(self, user_id: str) -> List[dict]:
        sessions = (
            self.db.query(AttendanceSession)
            .filter(AttendanceSession.is_active.is_(True))
            .order_by(AttendanceSession.created_at.desc())
            .all()
        )

        checked_in = {
            session_id
            for (session_id,) in self.db.query(
                AttendanceRecord.attendance_session_id
            ).filter(AttendanceRecord.user_id == user_id)
        }

        return [
            {
                "id": s.id,
                "title": s.title,
                "is_active": s.is_active,
                "created_at": s.created_at,
                "checked_in": s.id in checked_in,
            }
            for s in sessions
        ]

    @db_exception
    def check_in(self, session_id: int, user_id: str) -> dict:
        """Record the user's attendance for an active session, once"""
        session = (
            self.db.query(AttendanceSession)
            .filter(AttendanceSession.id == session_id)
            .first()
        )
        if not session or not session.is_active:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Sesi tidak tersedia",
            )

        already_checked_in = HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Anda sudah absen di sesi ini",
        )

        existing = (
            self.db.query(AttendanceRecord)
            .filter(
                AttendanceRecord.user_id == user_id,
                AttendanceRecord.attendance_session_id == session_id,
            )
            .first()
        )
        if existing:
            raise already_checked_in

        record = AttendanceRecord(
            user_id=user_id,
            attendance_session_id=session_id,
            check_in_time=datetime.utcnow(),
        )
        try:
            self.db.add(record)
            self.db.commit()
        except IntegrityError:
            # Lost the race against a parallel check-in
            self.db.rollback()
            raise already_checked_in

        self.db.refresh(record)
        logger.info(f"User {user_id} checked in to attendance session {session_id}")

        return {
            "message": "Berhasil Check-in!",
            "check_in_time": record.check_in_time,
        }
