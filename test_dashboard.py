"""
Tests for dashboard statistics and login streaks
"""

from datetime import date, timedelta

from app.services.dashboard import DashboardService, compute_streaks
from app.services.points import PointsService

TODAY = date(2026, 3, 10)


def _days_ago(*offsets):
    return [TODAY - timedelta(days=n) for n in offsets]


def test_no_logins():
    assert compute_streaks([], TODAY) == (0, 0)


def test_streak_ending_today():
    assert compute_streaks(_days_ago(0, 1, 2), TODAY) == (3, 3)


def test_streak_ending_yesterday_is_still_current():
    assert compute_streaks(_days_ago(1, 2), TODAY) == (2, 2)


def test_broken_streak_keeps_longest_run():
    logins = _days_ago(0, 5, 6, 7, 8)
    assert compute_streaks(logins, TODAY) == (1, 4)


def test_stale_streak_is_not_current():
    assert compute_streaks(_days_ago(3, 4), TODAY) == (0, 2)


def test_duplicate_days_count_once():
    assert compute_streaks(_days_ago(0, 0, 1), TODAY) == (2, 2)


def test_stats_for_new_user(db, user, make_quiz):
    make_quiz()

    stats = DashboardService(db).get_stats(user.id)

    assert stats["total_xp"] == 0
    assert stats["level"] == 1
    assert stats["certificates_count"] == 0
    assert stats["pending_quizzes"] == 1
    assert stats["current_streak"] == 0
    assert stats["recent_activities"] == []


def test_stats_recent_activity_is_capped(db, user):
    points = PointsService(db)
    for i in range(7):
        points.award_points(user.id, "quiz", 10, f"quiz_{i}")

    stats = DashboardService(db).get_stats(user.id)

    assert stats["total_xp"] == 70
    assert len(stats["recent_activities"]) == 5
    assert stats["rank"] == 1 and stats["total_users"] == 1
