# app/models/quiz_attempt.py
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from app.core.database import Base


class QuizAttempt(Base):
    __tablename__ = "quiz_attempts"

    id = Column(Integer, primary_key=True, index=True)

    # Relationships
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    quiz_id = Column(
        Integer, ForeignKey("weekly_quizzes.id"), nullable=False, index=True
    )

    # Attempt data
    score = Column(Integer, nullable=False)  # 0..100
    answers = Column(Text, nullable=False)  # raw JSON: {"<question_id>": "<answer>"}

    # Time tracking
    started_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    finished_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return (
            f"<QuizAttempt(id={self.id}, user_id={self.user_id}, score={self.score})>"
        )
