# app/services/points.py
import logging
from datetime import date, datetime
from typing import Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.decorator import db_exception
from app.models.gamification import GamificationLog, GamificationProfile

logger = logging.getLogger(__name__)

DAILY_LOGIN_ACTION = "daily_login"


def level_for_points(total_points: int) -> int:
    """Level 1 at 0 XP, +1 every `xp_per_level` points"""
    return max(total_points, 0) // settings.xp_per_level + 1


class PointsService:
    """
    Points ledger.

    Every award appends a `GamificationLog` row and bumps the user's
    `GamificationProfile` total in the same transaction. The profile row is
    read with SELECT ... FOR UPDATE so concurrent awards for one user queue
    up instead of losing updates.
    """

    def __init__(self, db: Session):
        self.db = db

    def lock_profile(self, user_id: str) -> GamificationProfile:
        """Fetch the user's profile under a row lock, creating it on first award"""
        profile = (
            self.db.query(GamificationProfile)
            .filter(GamificationProfile.user_id == user_id)
            .with_for_update()
            .first()
        )
        if profile:
            return profile

        try:
            with self.db.begin_nested():
                profile = GamificationProfile(user_id=user_id, total_points=0, level=1)
                self.db.add(profile)
        except IntegrityError:
            # Another request created it between our read and insert
            logger.info(f"Gamification profile for {user_id} created concurrently")
            profile = (
                self.db.query(GamificationProfile)
                .filter(GamificationProfile.user_id == user_id)
                .with_for_update()
                .one()
            )
        return profile

    def award_points(
        self,
        user_id: str,
        action_type: str,
        amount: int,
        reference_key: Optional[str] = None,
        commit: bool = True,
    ) -> Optional[GamificationLog]:
        """
        Append a ledger entry and update the running total.

        Args:
            user_id: Receiving user
            action_type: Ledger category ("quiz", "daily_login", ...)
            amount: Points to add; 0 is a no-op
            reference_key: Opaque key of the source, e.g. "quiz_12"
            commit: When False the caller owns the transaction and must commit

        Returns:
            The new ledger entry, or None when nothing was awarded
        """
        if amount < 0:
            raise ValueError("Point awards cannot be negative")

        if amount == 0:
            logger.info(
                f"No points awarded to {user_id} for {action_type} ({reference_key})"
            )
            return None

        try:
            profile = self.lock_profile(user_id)

            log = GamificationLog(
                user_id=user_id,
                action_type=action_type,
                action_id=reference_key,
                points=amount,
                created_at=datetime.utcnow(),
            )
            self.db.add(log)

            profile.total_points = (profile.total_points or 0) + amount
            profile.level = level_for_points(profile.total_points)

            if commit:
                self.db.commit()
                self.db.refresh(log)
            else:
                self.db.flush()
        except SQLAlchemyError:
            if commit:
                self.db.rollback()
            raise

        logger.info(
            f"Awarded {amount} points to {user_id} for {action_type} ({reference_key})"
        )
        return log

    @db_exception
    def award_daily_login(
        self, user_id: str, today: Optional[date] = None
    ) -> Optional[GamificationLog]:
        """Award the daily login bonus at most once per UTC day"""
        today = today or datetime.utcnow().date()
        reference_key = f"{DAILY_LOGIN_ACTION}_{today.isoformat()}"

        # Lock first so two parallel logins cannot both pass the check
        self.lock_profile(user_id)

        already_awarded = (
            self.db.query(GamificationLog.id)
            .filter(
                GamificationLog.user_id == user_id,
                GamificationLog.action_type == DAILY_LOGIN_ACTION,
                GamificationLog.action_id == reference_key,
            )
            .first()
        )
        if already_awarded:
            self.db.commit()
            return None

        return self.award_points(
            user_id, DAILY_LOGIN_ACTION, settings.daily_login_points, reference_key
        )

    def get_profile_totals(self, user_id: str) -> Tuple[int, int]:
        """(total_points, level) with defaults for users who never scored"""
        profile = (
            self.db.query(GamificationProfile)
            .filter(GamificationProfile.user_id == user_id)
            .first()
        )
        if not profile:
            return 0, 1
        return profile.total_points, profile.level

    def get_rank(self, user_id: str) -> Tuple[int, int]:
        """(rank, total_users); users with equal points share a rank"""
        total_points, _ = self.get_profile_totals(user_id)

        higher_ranked = (
            self.db.query(func.count(GamificationProfile.id))
            .filter(GamificationProfile.total_points > total_points)
            .scalar()
        )
        total_users = self.db.query(func.count(GamificationProfile.id)).scalar()

        return (higher_ranked or 0) + 1, total_users or 0

    def get_history(self, user_id: str, limit: int = 50) -> dict:
        logs = (
            self.db.query(GamificationLog)
            .filter(GamificationLog.user_id == user_id)
            .order_by(GamificationLog.created_at.desc(), GamificationLog.id.desc())
            .limit(limit)
            .all()
        )

        total_points, level = self.get_profile_totals(user_id)
        rank, total_users = self.get_rank(user_id)

        return {
            "logs": logs,
            "summary": {
                "total_points": total_points,
                "level": level,
                "rank": rank,
                "total_users": total_users,
            },
        }
