"""
Models package initialization
Import all models and setup relationships
"""

from .attendance import AttendanceRecord, AttendanceSession
from .certificate import Certificate
from .gamification import GamificationLog, GamificationProfile
from .question import QuestionBank, QuestionCategory, QuestionType
from .quiz import QuizQuestionOrder, WeeklyQuiz
from .quiz_attempt import QuizAttempt

# Import and setup relationships
from .relations import setup_relationships
from .user import User

# Setup all relationships after models are imported
setup_relationships()

# Make models available at package level
__all__ = [
    "AttendanceRecord",
    "AttendanceSession",
    "Certificate",
    "GamificationLog",
    "GamificationProfile",
    "QuestionBank",
    "QuestionCategory",
    "QuestionType",
    "QuizAttempt",
    "QuizQuestionOrder",
    "User",
    "WeeklyQuiz",
]
