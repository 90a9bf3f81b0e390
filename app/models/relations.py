# app/models/relations.py

from sqlalchemy.orm import relationship

from .attendance import AttendanceRecord, AttendanceSession
from .certificate import Certificate
from .gamification import GamificationProfile
from .question import QuestionBank, QuestionCategory, QuestionType
from .quiz import QuizQuestionOrder, WeeklyQuiz
from .user import User


def setup_relationships():
    """
    Configure all SQLAlchemy relationships between models.
    """

    # --- Question Bank ---

    # 1. Category to Types (One-to-Many)
    QuestionCategory.types = relationship("QuestionType", back_populates="category")
    QuestionType.category = relationship("QuestionCategory", back_populates="types")

    # 2. Type to Questions (One-to-Many)
    QuestionType.questions = relationship("QuestionBank", back_populates="type")
    QuestionBank.type = relationship("QuestionType", back_populates="questions")

    # --- Weekly Quizzes ---

    # 3. Quiz to curated question order (One-to-Many)
    WeeklyQuiz.question_orders = relationship(
        "QuizQuestionOrder",
        back_populates="quiz",
        order_by="QuizQuestionOrder.order",
        cascade="all, delete-orphan",
    )
    QuizQuestionOrder.quiz = relationship(
        "WeeklyQuiz", back_populates="question_orders"
    )
    QuizQuestionOrder.question = relationship("QuestionBank")

    WeeklyQuiz.category = relationship("QuestionCategory")

    # --- Gamification & Certificates ---

    # 4. User to Profile (One-to-One)
    User.gamification_profile = relationship(
        "GamificationProfile", back_populates="user", uselist=False
    )
    GamificationProfile.user = relationship(
        "User", back_populates="gamification_profile"
    )

    # 5. Certificate to Quiz (Many-to-One)
    Certificate.quiz = relationship("WeeklyQuiz")

    # --- Attendance ---

    # 6. Session to Records (One-to-Many)
    AttendanceSession.records = relationship(
        "AttendanceRecord", back_populates="session"
    )
    AttendanceRecord.session = relationship(
        "AttendanceSession", back_populates="records"
    )
