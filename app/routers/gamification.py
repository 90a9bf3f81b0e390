# app/routers/gamification.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.models.user import User
from app.schemas.gamification import (
    DailyLoginResponse,
    DashboardStatsResponse,
    GamificationHistoryResponse,
)
from app.services.dashboard import DashboardService
from app.services.points import PointsService

router = APIRouter(prefix="/user", tags=["Gamification"])


@router.get("/gamification/history", response_model=GamificationHistoryResponse)
def get_point_history(
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Latest ledger entries with total points, level and rank"""
    service = PointsService(db)
    return service.get_history(current_user.id, limit)


@router.post("/gamification/daily-login", response_model=DailyLoginResponse)
def claim_daily_login(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Claim today's login bonus. Repeated claims on the same day award nothing."""
    service = PointsService(db)
    log = service.award_daily_login(current_user.id)
    total_points, level = service.get_profile_totals(current_user.id)
    return {
        "awarded": log is not None,
        "points": log.points if log else 0,
        "total_points": total_points,
        "level": level,
    }


@router.get("/dashboard/stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = DashboardService(db)
    return service.get_stats(current_user.id)
