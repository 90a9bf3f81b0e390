# app/routers/attendance.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.models.user import User
from app.schemas.attendance import AttendanceSessionResponse, CheckInResponse
from app.services.attendance import AttendanceService

router = APIRouter(prefix="/attendance-sessions", tags=["Attendance"])


@router.get("/", response_model=List[AttendanceSessionResponse])
def list_attendance_sessions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = AttendanceService(db)
    return service.list_active_sessions(current_user.id)


@router.post("/{session_id}/check-in", response_model=CheckInResponse)
def check_in(
    session_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Check in to an active attendance session. One check-in per user per session."""
    service = AttendanceService(db)
    return service.check_in(session_id, current_user.id)
