import json
import os
import tempfile
from datetime import datetime, timedelta

# Settings are read at import time, so point them at a scratch workspace first
_TEST_ROOT = tempfile.mkdtemp(prefix="lpk-merdeka-tests-")
os.environ["DB_CONNECTION"] = "sqlite"
os.environ["DB_DATABASE"] = os.path.join(_TEST_ROOT, "test.db")
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_ROOT, "storage")
os.environ["LOG_DIR"] = os.path.join(_TEST_ROOT, "logs")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DEBUG"] = "false"
os.environ["APP_URL"] = "http://testserver"

import pytest
from fastapi.testclient import TestClient

from app.core.database import Base, SessionLocal, engine, get_db
from app.core.security import jwt_manager
from app.models import (
    QuestionBank,
    QuestionCategory,
    QuestionType,
    QuizQuestionOrder,
    User,
    WeeklyQuiz,
)


class FakeRenderer:
    """Stands in for the PDF renderer; records what it was asked to draw"""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    def render(self, user_name, quiz_title, issued_date, code):
        self.calls.append((user_name, quiz_title, code))
        if self.fail:
            raise RuntimeError("renderer exploded")
        return f"http://testserver/storage/certificates/{code}.pdf"


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def failing_renderer():
    return FakeRenderer(fail=True)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(name="Budi Santoso", **kwargs):
        counter["n"] += 1
        user = User(
            name=name,
            email=kwargs.pop("email", f"user{counter['n']}@example.com"),
            **kwargs,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def category(db):
    category = QuestionCategory(name="Bahasa Jepang")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def question_type(db, category):
    question_type = QuestionType(category_id=category.id, name="Kosakata")
    db.add(question_type)
    db.commit()
    db.refresh(question_type)
    return question_type


@pytest.fixture
def make_questions(db, question_type):
    def _make_questions(count=10, type_id=None):
        questions = []
        for i in range(count):
            question = QuestionBank(
                type_id=type_id or question_type.id,
                content=f"Pertanyaan {i + 1}?",
                options=["A. satu", "B. dua", "C. tiga", "D. empat"],
                correct_answer="A",
                explanation=f"Penjelasan {i + 1}",
            )
            db.add(question)
            questions.append(question)
        db.commit()
        for question in questions:
            db.refresh(question)
        return questions

    return _make_questions


@pytest.fixture
def make_quiz(db, category):
    def _make_quiz(
        title="Kuis Mingguan 1",
        is_active=True,
        start_date=None,
        end_date=None,
        config=None,
        questions=None,
        category_id="default",
    ):
        now = datetime.utcnow()
        quiz = WeeklyQuiz(
            title=title,
            category_id=category.id if category_id == "default" else category_id,
            start_date=start_date or now - timedelta(days=1),
            end_date=end_date or now + timedelta(days=6),
            is_active=is_active,
            config=json.dumps(config) if isinstance(config, dict) else config,
        )
        db.add(quiz)
        db.commit()
        db.refresh(quiz)

        for order, question in enumerate(questions or []):
            db.add(
                QuizQuestionOrder(quiz_id=quiz.id, question_id=question.id, order=order)
            )
        db.commit()
        return quiz

    return _make_quiz


@pytest.fixture
def answer_sheet():
    def _answer_sheet(questions, correct):
        """First `correct` questions answered right, the rest wrong"""
        return {
            str(q.id): ("A" if i < correct else "B") for i, q in enumerate(questions)
        }

    return _answer_sheet


@pytest.fixture
def client(db):
    from main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(user):
    token = jwt_manager.create_access_token(user)
    return {"Authorization": f"Bearer {token}"}
