# app/routers/quiz.py
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.core.limiter import limiter
from app.models.user import User
from app.schemas.quiz import (
    QuizListItem,
    QuizSubmission,
    QuizSubmitResponse,
    StartQuizResponse,
)
from app.services.quiz import QuizService

router = APIRouter(
    prefix="/user/quizzes",
    tags=["Quizzes"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[QuizListItem])
def list_quizzes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Open weekly quizzes with the user's attempt status"""
    service = QuizService(db)
    return service.list_active_quizzes(current_user.id)


@router.get("/{quiz_id}/start", response_model=StartQuizResponse)
def start_quiz(
    quiz_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Start a quiz.
    Returns the questions without answers and the time limit in minutes.
    """
    service = QuizService(db)
    return service.start_quiz(quiz_id, current_user.id)


@router.post("/{quiz_id}/submit", response_model=QuizSubmitResponse)
@limiter.limit(settings.quiz_submit_rate_limit)
def submit_quiz(
    request: Request,
    quiz_id: int,
    submission: QuizSubmission,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Submit answers for a quiz.

    - Points are only awarded for improving on the best previous attempt
    - A certificate is issued once the score reaches the passing grade
    - Correct answers and explanations are only shown for questions answered correctly
    """
    service = QuizService(db)
    return service.submit_quiz(quiz_id, current_user, submission.answers)
