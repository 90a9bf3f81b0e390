# app/services/quiz.py
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.core.decorator import DBException
from app.models.quiz import WeeklyQuiz
from app.models.quiz_attempt import QuizAttempt
from app.models.user import User
from app.schemas.quiz import QuizConfig, QuizQuestionForAttempt
from app.services.certificate import (
    STATUS_FAILED,
    CertificateIssue,
    CertificateService,
)
from app.services.points import PointsService
from app.services.question_bank import QuestionBankService
from app.services.scoring import (
    calculate_earned_points,
    is_correct_answer,
    score_answers,
)

logger = logging.getLogger(__name__)

QUIZ_ACTION = "quiz"


class QuizService:
    def __init__(self, db: Session, certificate_service: Optional[CertificateService] = None):
        self.db = db
        self.question_bank = QuestionBankService(db)
        self.points = PointsService(db)
        self.certificates = certificate_service or CertificateService(db)

    # ==================== Helpers ====================

    def _get_quiz(self, quiz_id: int) -> WeeklyQuiz:
        quiz = self.db.query(WeeklyQuiz).filter(WeeklyQuiz.id == quiz_id).first()
        if not quiz:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Quiz not found",
            )
        return quiz

    @staticmethod
    def _ensure_open(quiz: WeeklyQuiz, now: datetime) -> None:
        if not quiz.is_active:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Quiz is not active",
            )
        if not quiz.is_open(now):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Quiz is not currently open",
            )

    @staticmethod
    def _normalize_answers(answers: Dict[str, Any]) -> Dict[str, Any]:
        """Canonical string keys ("07" -> "7") so lookups by question id line up"""
        try:
            return {str(int(question_id)): value for question_id, value in answers.items()}
        except (TypeError, ValueError):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid question id in answers",
            )

    # ==================== Listing ====================

    def list_active_quizzes(self, user_id: str) -> List[dict]:
        """Open quizzes, soonest deadline first, flagged with the user's last attempt"""
        now = datetime.utcnow()
        quizzes = (
            self.db.query(WeeklyQuiz)
            .options(selectinload(WeeklyQuiz.category))
            .filter(
                WeeklyQuiz.is_active.is_(True),
                WeeklyQuiz.start_date <= now,
                WeeklyQuiz.end_date >= now,
            )
            .order_by(WeeklyQuiz.end_date.asc())
            .all()
        )

        last_scores: Dict[int, int] = {}
        if quizzes:
            attempts = (
                self.db.query(QuizAttempt)
                .filter(
                    QuizAttempt.user_id == user_id,
                    QuizAttempt.quiz_id.in_([q.id for q in quizzes]),
                )
                .order_by(QuizAttempt.finished_at.desc(), QuizAttempt.id.desc())
                .all()
            )
            for attempt in attempts:
                last_scores.setdefault(attempt.quiz_id, attempt.score)

        return [
            {
                "id": quiz.id,
                "title": quiz.title,
                "category_id": quiz.category_id,
                "category_name": quiz.category.name if quiz.category else None,
                "start_date": quiz.start_date,
                "end_date": quiz.end_date,
                "is_active": quiz.is_active,
                "attempted": quiz.id in last_scores,
                "last_score": last_scores.get(quiz.id),
            }
            for quiz in quizzes
        ]

    # ==================== Start ====================

    def start_quiz(self, quiz_id: int, user_id: str) -> dict:
        """Questions to answer (without the answer key) and the time limit"""
        quiz = self._get_quiz(quiz_id)
        self._ensure_open(quiz, datetime.utcnow())

        config = QuizConfig.from_raw(quiz.config)

        questions = self.question_bank.find_ordered_for_quiz(quiz.id)
        if not questions:
            # No curated order: draw from the configured type, else the category
            questions = self.question_bank.find_by_type_or_category(
                config.type_id, quiz.category_id, config.question_count
            )

        if not questions:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No questions available for this quiz",
            )

        logger.info(f"User {user_id} started quiz {quiz.id} ({len(questions)} questions)")

        return {
            "questions": [QuizQuestionForAttempt.model_validate(q) for q in questions],
            "duration": config.duration,
        }

    # ==================== Submit ====================

    def submit_quiz(self, quiz_id: int, user: User, answers: Dict[str, Any]) -> dict:
        """
        Score a submission, record it, award improvement points and issue the
        certificate when the passing score is reached.

        The attempt row and the points award commit together. Certificate
        issuance runs afterwards and only degrades the response when it fails.
        """
        if not answers:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No answers provided",
            )
        answers = self._normalize_answers(answers)
        question_ids = [int(question_id) for question_id in answers]

        quiz = self._get_quiz(quiz_id)
        now = datetime.utcnow()
        self._ensure_open(quiz, now)
        quiz_title = quiz.title

        questions = self.question_bank.find_by_ids(question_ids)
        result = score_answers(answers, questions)

        try:
            # Hold the user's profile lock while reading the previous best, so
            # parallel submissions of one user cannot both earn the same delta
            self.points.lock_profile(user.id)

            previous_scores = [
                score
                for (score,) in self.db.query(QuizAttempt.score).filter(
                    QuizAttempt.user_id == user.id,
                    QuizAttempt.quiz_id == quiz.id,
                )
            ]
            earned_points = calculate_earned_points(
                result.score, previous_scores, result.total_questions
            )

            attempt = QuizAttempt(
                user_id=user.id,
                quiz_id=quiz.id,
                score=result.score,
                answers=json.dumps(answers),
                started_at=now,
                finished_at=now,
            )
            self.db.add(attempt)
            self.db.flush()

            self.points.award_points(
                user.id, QUIZ_ACTION, earned_points, f"quiz_{quiz.id}", commit=False
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                f"Failed to save attempt for user {user.id}, quiz {quiz_id}: {e}",
                exc_info=True,
            )
            raise DBException("Error submitting quiz", 500)

        logger.info(
            f"Quiz {quiz_id} submitted by {user.id}: score={result.score}, "
            f"correct={result.correct_count}/{result.total_questions}, points=+{earned_points}"
        )

        review = self._build_review(question_ids, questions, answers)
        user_id = user.id

        try:
            certificate = self.certificates.issue_if_eligible(
                user_id, quiz.id, user.display_name, quiz_title, result.score
            )
        except DBException:
            certificate = CertificateIssue(None, STATUS_FAILED)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                f"Certificate lookup failed for user {user_id}, quiz {quiz_id}: {e}",
                exc_info=True,
            )
            certificate = CertificateIssue(None, STATUS_FAILED)

        return {
            "message": "Quiz submitted successfully",
            "score": result.score,
            "correct_count": result.correct_count,
            "total_questions": result.total_questions,
            "earned_points": earned_points,
            "certificate_url": certificate.url,
            "certificate_status": certificate.status,
            "results": review,
        }

    @staticmethod
    def _build_review(
        question_ids: List[int], questions: list, answers: Dict[str, Any]
    ) -> List[dict]:
        """
        Per-question review in submission order. The correct answer and the
        explanation are only shown for questions the user got right.
        """
        by_id = {q.id: q for q in questions}
        review = []
        for question_id in question_ids:
            question = by_id.get(question_id)
            if question is None:
                continue
            submitted = answers.get(str(question.id))
            is_correct = is_correct_answer(question, submitted)
            review.append(
                {
                    "id": question.id,
                    "content": question.content,
                    "options": question.options,
                    "submitted_answer": submitted,
                    "is_correct": is_correct,
                    "correct_answer": question.correct_answer if is_correct else None,
                    "explanation": question.explanation if is_correct else None,
                }
            )
        return review
