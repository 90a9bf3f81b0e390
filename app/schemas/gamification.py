# app/schemas/gamification.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class GamificationLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    action_type: str
    action_id: Optional[str] = None
    points: int
    created_at: datetime


class GamificationSummary(BaseModel):
    total_points: int
    level: int
    rank: int
    total_users: int


class GamificationHistoryResponse(BaseModel):
    logs: List[GamificationLogResponse]
    summary: GamificationSummary


class DailyLoginResponse(BaseModel):
    awarded: bool
    points: int
    total_points: int
    level: int


class RecentActivity(BaseModel):
    type: str
    points: int
    created_at: datetime


class DashboardStatsResponse(BaseModel):
    total_xp: int
    level: int
    rank: int
    total_users: int
    certificates_count: int
    pending_quizzes: int
    current_streak: int
    max_streak: int
    recent_activities: List[RecentActivity]
