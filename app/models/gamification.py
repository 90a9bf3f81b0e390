# app/models/gamification.py
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from app.core.database import Base


class GamificationLog(Base):
    """Append-only points ledger"""

    __tablename__ = "gamification_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    action_type = Column(String(50), nullable=False, index=True)  # quiz, daily_login
    action_id = Column(String(100), nullable=True)  # quiz_<id>, daily_login_<date>
    points = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<GamificationLog(user_id={self.user_id}, action={self.action_type}, points={self.points})>"


class GamificationProfile(Base):
    """Running total of the ledger, one row per user"""

    __tablename__ = "gamification_profile"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String(36), ForeignKey("users.id"), unique=True, nullable=False, index=True
    )
    total_points = Column(Integer, nullable=False, default=0, index=True)
    level = Column(Integer, nullable=False, default=1)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self):
        return f"<GamificationProfile(user_id={self.user_id}, total={self.total_points}, level={self.level})>"
