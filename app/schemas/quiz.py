# app/schemas/quiz.py
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.core.config import settings

logger = logging.getLogger(__name__)


# ==================== Quiz Configuration ====================


class QuizConfig(BaseModel):
    """Typed view of the free-form `weekly_quizzes.config` JSON column"""

    model_config = ConfigDict(extra="ignore")

    question_count: int = Field(
        default_factory=lambda: settings.default_question_count, ge=1
    )
    duration: int = Field(
        default_factory=lambda: settings.default_quiz_duration,
        ge=1,
        description="Time limit in minutes",
    )
    type_id: Optional[int] = Field(
        None, description="Draw questions from this type instead of the category"
    )

    @classmethod
    def from_raw(cls, raw: Optional[str]) -> "QuizConfig":
        """
        Parse the stored JSON config.

        Only recognized keys are read. A malformed document, or a key with an
        invalid value, falls back to the default for that key.
        """
        if not raw:
            return cls()

        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed quiz config: {raw!r}")
            return cls()

        if not isinstance(data, dict):
            logger.warning(f"Ignoring non-object quiz config: {raw!r}")
            return cls()

        values = {}
        for name in cls.model_fields:
            if name not in data:
                continue
            try:
                cls(**{name: data[name]})
            except ValidationError:
                logger.warning(f"Invalid quiz config value {name}={data[name]!r}")
                continue
            values[name] = data[name]

        return cls(**values)


# ==================== Quiz Listing ====================


class QuizListItem(BaseModel):
    id: int
    title: str
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    start_date: datetime
    end_date: datetime
    is_active: bool
    attempted: bool
    last_score: Optional[int] = None


# ==================== Start Quiz ====================


class QuizQuestionForAttempt(BaseModel):
    """Schema for quiz question during attempt - WITHOUT correct answer"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    options: List[Any]
    type_id: Optional[int] = None


class StartQuizResponse(BaseModel):
    questions: List[QuizQuestionForAttempt]
    duration: int = Field(..., description="Time limit in minutes")


# ==================== Submit Quiz ====================


class QuizSubmission(BaseModel):
    """Answers keyed by question id: {"12": "B", "15": "A"}"""

    answers: Dict[str, Any] = Field(default_factory=dict)


class QuestionResult(BaseModel):
    """Per-question review. The key is only revealed for correct answers."""

    id: int
    content: str
    options: List[Any]
    submitted_answer: Any = None
    is_correct: bool
    correct_answer: Optional[str] = None
    explanation: Optional[str] = None


class QuizSubmitResponse(BaseModel):
    message: str = "Quiz submitted successfully"
    score: int = Field(..., ge=0, le=100)
    correct_count: int
    total_questions: int
    earned_points: int
    certificate_url: Optional[str] = None
    certificate_status: str = Field(
        ..., description="not_eligible | issued | existing | failed"
    )
    results: List[QuestionResult]
