# app/schemas/attendance.py
from datetime import datetime

from pydantic import BaseModel


class AttendanceSessionResponse(BaseModel):
    id: int
    title: str
    is_active: bool
    created_at: datetime
    checked_in: bool


class CheckInResponse(BaseModel):
    message: str
    check_in_time: datetime
