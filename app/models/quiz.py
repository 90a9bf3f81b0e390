# app/models/quiz.py
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from app.core.database import Base


class WeeklyQuiz(Base):
    __tablename__ = "weekly_quizzes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    category_id = Column(
        Integer, ForeignKey("question_categories.id"), nullable=True, index=True
    )

    # Activity window (UTC)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Free-form JSON: {"question_count": 10, "duration": 30, "type_id": 3}
    config = Column(Text, nullable=True)

    def is_open(self, now) -> bool:
        return self.start_date <= now <= self.end_date

    def __repr__(self):
        return f"<WeeklyQuiz(id={self.id}, title='{self.title}')>"


class QuizQuestionOrder(Base):
    __tablename__ = "quiz_question_order"
    __table_args__ = (
        UniqueConstraint("quiz_id", "question_id", name="uq_quiz_question_order"),
    )

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(
        Integer, ForeignKey("weekly_quizzes.id"), nullable=False, index=True
    )
    question_id = Column(Integer, ForeignKey("question_bank.id"), nullable=False)
    order = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<QuizQuestionOrder(quiz_id={self.quiz_id}, question_id={self.question_id}, order={self.order})>"
