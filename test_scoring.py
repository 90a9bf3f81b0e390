"""
Tests for quiz scoring and point calculation
"""

import pytest

from app.models.question import QuestionBank
from app.schemas.quiz import QuizConfig
from app.services.scoring import (
    calculate_earned_points,
    calculate_points,
    is_correct_answer,
    round_half_up,
    score_answers,
)


def _questions(count):
    return [
        QuestionBank(id=i, type_id=1, content=f"Q{i}", options=[], correct_answer="A")
        for i in range(1, count + 1)
    ]


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (66.666, 67), (33.333, 33), (0.0, 0)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_score_answers_counts_exact_matches():
    questions = _questions(3)
    result = score_answers({"1": "A", "2": "B", "3": "A"}, questions)

    assert result.correct_count == 2
    assert result.total_questions == 3
    assert result.score == 67


def test_answers_are_compared_without_coercion():
    question = QuestionBank(id=1, correct_answer="1")
    assert is_correct_answer(question, "1")
    assert not is_correct_answer(question, 1)
    assert not is_correct_answer(question, "a1")
    assert not is_correct_answer(question, None)


def test_score_with_no_questions_is_zero():
    result = score_answers({"99": "A"}, [])
    assert result == (0, 0, 0)


def test_points_per_score():
    assert calculate_points(60, 10) == 60
    assert calculate_points(0, 10) == 0
    # perfect score bonus
    assert calculate_points(100, 10) == 150
    # 67% of 3 questions rounds back to 2 answers
    assert calculate_points(67, 3) == 20


def test_retake_only_awards_improvement():
    # 60 -> 100 -> 80 on a 10 question quiz
    assert calculate_earned_points(60, [], 10) == 60
    assert calculate_earned_points(100, [60], 10) == 90
    assert calculate_earned_points(80, [60, 100], 10) == 0


def test_repeating_the_same_score_awards_nothing():
    assert calculate_earned_points(70, [70], 10) == 0
    assert calculate_earned_points(100, [100, 100], 10) == 0


def test_previous_scores_use_current_question_count():
    # A 50% attempt on the old 10 question version counts as 5 of 20 now
    assert calculate_earned_points(50, [50], 20) == 0
    assert calculate_earned_points(75, [50], 20) == 50


class TestQuizConfig:
    def test_defaults_when_missing(self):
        config = QuizConfig.from_raw(None)
        assert config.question_count == 10
        assert config.duration == 30
        assert config.type_id is None

    def test_reads_known_keys(self):
        config = QuizConfig.from_raw(
            '{"question_count": 5, "duration": 45, "type_id": 3, "theme": "dark"}'
        )
        assert config.question_count == 5
        assert config.duration == 45
        assert config.type_id == 3

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"text"', "null"])
    def test_malformed_config_falls_back_to_defaults(self, raw):
        config = QuizConfig.from_raw(raw)
        assert config.question_count == 10
        assert config.duration == 30

    def test_invalid_value_only_resets_that_key(self):
        config = QuizConfig.from_raw('{"question_count": 0, "duration": 15}')
        assert config.question_count == 10
        assert config.duration == 15
