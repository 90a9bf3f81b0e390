# app/services/dashboard.py
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Tuple

from sqlalchemy.orm import Session

from app.models.gamification import GamificationLog
from app.models.quiz import WeeklyQuiz
from app.models.quiz_attempt import QuizAttempt
from app.services.certificate import CertificateService
from app.services.points import DAILY_LOGIN_ACTION, PointsService


def compute_streaks(login_dates: Iterable[date], today: date) -> Tuple[int, int]:
    """
    Current and longest run of consecutive login days.

    The current streak is only alive when the latest login was today or
    yesterday.
    """
    days = sorted(set(login_dates), reverse=True)
    if not days:
        return 0, 0

    current = 0
    if days[0] in (today, today - timedelta(days=1)):
        current = 1
        for newer, older in zip(days, days[1:]):
            if newer - older != timedelta(days=1):
                break
            current += 1

    longest = run = 1
    for newer, older in zip(days, days[1:]):
        if newer - older == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)

    return current, longest


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self.points = PointsService(db)

    def _pending_quiz_count(self, user_id: str, now: datetime) -> int:
        open_quiz_ids = [
            quiz_id
            for (quiz_id,) in self.db.query(WeeklyQuiz.id).filter(
                WeeklyQuiz.is_active.is_(True),
                WeeklyQuiz.start_date <= now,
                WeeklyQuiz.end_date >= now,
            )
        ]
        if not open_quiz_ids:
            return 0

        attempted = {
            quiz_id
            for (quiz_id,) in self.db.query(QuizAttempt.quiz_id)
            .filter(
                QuizAttempt.user_id == user_id,
                QuizAttempt.quiz_id.in_(open_quiz_ids),
            )
            .distinct()
        }
        return len(set(open_quiz_ids) - attempted)

    def get_stats(self, user_id: str, today: Optional[date] = None) -> dict:
        now = datetime.utcnow()
        today = today or now.date()

        total_points, level = self.points.get_profile_totals(user_id)
        rank, total_users = self.points.get_rank(user_id)

        login_dates = [
            created_at.date()
            for (created_at,) in self.db.query(GamificationLog.created_at).filter(
                GamificationLog.user_id == user_id,
                GamificationLog.action_type == DAILY_LOGIN_ACTION,
            )
        ]
        current_streak, max_streak = compute_streaks(login_dates, today)

        recent = (
            self.db.query(GamificationLog)
            .filter(GamificationLog.user_id == user_id)
            .order_by(GamificationLog.created_at.desc(), GamificationLog.id.desc())
            .limit(5)
            .all()
        )

        return {
            "total_xp": total_points,
            "level": level,
            "rank": rank,
            "total_users": total_users,
            "certificates_count": CertificateService(self.db).count_user_certificates(
                user_id
            ),
            "pending_quizzes": self._pending_quiz_count(user_id, now),
            "current_streak": current_streak,
            "max_streak": max_streak,
            "recent_activities": [
                {"type": log.action_type, "points": log.points, "created_at": log.created_at}
                for log in recent
            ],
        }
