"""
End-to-end tests for the HTTP surface
"""

from app.core.security import jwt_manager
from app.models.attendance import AttendanceSession


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "healthy"


def test_requires_bearer_token(client):
    assert client.get("/user/quizzes/").status_code == 401
    response = client.get(
        "/user/quizzes/", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401


def test_inactive_user_is_forbidden(client, make_user):
    inactive = make_user(is_active=False)
    token = jwt_manager.create_access_token(inactive)
    response = client.get(
        "/user/quizzes/", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 403


def test_quiz_flow(client, auth_headers, make_questions, make_quiz, answer_sheet):
    questions = make_questions(4)
    quiz = make_quiz(questions=questions)

    listed = client.get("/user/quizzes/", headers=auth_headers).json()
    assert [q["id"] for q in listed] == [quiz.id]

    started = client.get(f"/user/quizzes/{quiz.id}/start", headers=auth_headers)
    assert started.status_code == 200
    body = started.json()
    assert body["duration"] == 30
    assert all("correct_answer" not in q for q in body["questions"])

    submitted = client.post(
        f"/user/quizzes/{quiz.id}/submit",
        json={"answers": answer_sheet(questions, 2)},
        headers=auth_headers,
    )
    assert submitted.status_code == 200
    result = submitted.json()
    assert result["score"] == 50
    assert result["earned_points"] == 20
    assert result["certificate_status"] == "not_eligible"
    assert sum(1 for r in result["results"] if r["correct_answer"] is not None) == 2

    history = client.get("/user/gamification/history", headers=auth_headers).json()
    assert history["summary"]["total_points"] == 20
    assert history["logs"][0]["action_id"] == f"quiz_{quiz.id}"


def test_submit_without_answers_is_400(client, auth_headers, make_quiz):
    quiz = make_quiz()
    response = client.post(
        f"/user/quizzes/{quiz.id}/submit", json={"answers": {}}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "No answers provided"


def test_submit_unknown_quiz_is_404(client, auth_headers):
    response = client.post(
        "/user/quizzes/424242/submit", json={"answers": {"1": "A"}}, headers=auth_headers
    )
    assert response.status_code == 404


def test_passing_submission_issues_certificate(
    client, auth_headers, make_questions, make_quiz, answer_sheet
):
    questions = make_questions(2)
    quiz = make_quiz(questions=questions)

    result = client.post(
        f"/user/quizzes/{quiz.id}/submit",
        json={"answers": answer_sheet(questions, 2)},
        headers=auth_headers,
    ).json()

    assert result["certificate_status"] == "issued"
    assert result["certificate_url"].endswith(".pdf")

    certificates = client.get("/user/certificates/", headers=auth_headers).json()
    assert certificates["total"] == 1
    assert certificates["certificates"][0]["file_url"] == result["certificate_url"]


def test_daily_login_and_dashboard(client, auth_headers):
    first = client.post("/user/gamification/daily-login", headers=auth_headers).json()
    second = client.post("/user/gamification/daily-login", headers=auth_headers).json()

    assert first == {"awarded": True, "points": 10, "total_points": 10, "level": 1}
    assert second["awarded"] is False
    assert second["total_points"] == 10

    stats = client.get("/user/dashboard/stats", headers=auth_headers).json()
    assert stats["total_xp"] == 10
    assert stats["current_streak"] == 1
    assert stats["recent_activities"][0]["type"] == "daily_login"


def test_attendance_check_in_once(client, db, auth_headers):
    session = AttendanceSession(title="Kelas Pagi")
    closed = AttendanceSession(title="Kelas Lama", is_active=False)
    db.add_all([session, closed])
    db.commit()

    sessions = client.get("/attendance-sessions/", headers=auth_headers).json()
    assert [s["title"] for s in sessions] == ["Kelas Pagi"]
    assert sessions[0]["checked_in"] is False

    first = client.post(
        f"/attendance-sessions/{session.id}/check-in", headers=auth_headers
    )
    assert first.status_code == 200
    assert first.json()["message"] == "Berhasil Check-in!"

    again = client.post(
        f"/attendance-sessions/{session.id}/check-in", headers=auth_headers
    )
    assert again.status_code == 400
    assert again.json()["detail"] == "Anda sudah absen di sesi ini"

    inactive = client.post(
        f"/attendance-sessions/{closed.id}/check-in", headers=auth_headers
    )
    assert inactive.status_code == 400
    assert inactive.json()["detail"] == "Sesi tidak tersedia"
