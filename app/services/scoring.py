# app/services/scoring.py
"""
Quiz scoring and point calculation.

Pure functions: no database access, so the orchestrator can score a
submission before it opens the write transaction.
"""
import math
from typing import Any, Dict, Iterable, List, NamedTuple

from app.core.config import settings
from app.models.question import QuestionBank


class ScoreResult(NamedTuple):
    score: int  # 0..100
    correct_count: int
    total_questions: int


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (Python's round() is banker's)"""
    return int(math.floor(value + 0.5))


def is_correct_answer(question: QuestionBank, submitted: Any) -> bool:
    # Exact equality, no coercion: "1" and 1 are different answers
    return submitted is not None and submitted == question.correct_answer


def score_answers(
    answers: Dict[str, Any], questions: List[QuestionBank]
) -> ScoreResult:
    """
    Score submitted answers against the resolved questions.

    Args:
        answers: Submitted answers keyed by question id (as string)
        questions: Questions the answers refer to

    Returns:
        ScoreResult with a 0..100 percentage
    """
    total_questions = len(questions)
    correct_count = sum(
        1 for q in questions if is_correct_answer(q, answers.get(str(q.id)))
    )

    if total_questions == 0:
        return ScoreResult(0, 0, 0)

    score = round_half_up(correct_count / total_questions * 100)
    return ScoreResult(score, correct_count, total_questions)


def calculate_points(score: int, total_questions: int) -> int:
    """
    Points for a score, independent of which questions were right.

    10 points per correct-answer equivalent, plus a flat bonus for a
    perfect score.
    """
    correct_equivalent = round_half_up(score / 100 * total_questions)
    points = correct_equivalent * settings.points_per_correct_answer
    if score == 100:
        points += settings.perfect_score_bonus
    return points


def calculate_earned_points(
    new_score: int, previous_scores: Iterable[int], total_questions: int
) -> int:
    """
    Points to credit for a retake: only the improvement over the best
    previous attempt. Previous scores are reinterpreted against the
    current question count.
    """
    previous_best = max(
        (calculate_points(s, total_questions) for s in previous_scores), default=0
    )
    current = calculate_points(new_score, total_questions)
    return max(0, current - previous_best)
