"""
Tests for certificate issuance
"""

import threading
import time
from datetime import datetime

from app.models.certificate import Certificate
from app.services.certificate import (
    STATUS_EXISTING,
    STATUS_FAILED,
    STATUS_ISSUED,
    STATUS_NOT_ELIGIBLE,
    CertificateService,
    build_certificate_code,
)
from app.utils.certificate_pdf import (
    certificate_output_dir,
    certificate_public_url,
    render_with_timeout,
)


class SlowRenderer:
    def render(self, user_name, quiz_title, issued_date, code):
        time.sleep(0.5)
        return "http://testserver/too-late.pdf"


class FileRenderer:
    """Writes a placeholder PDF where the real renderer would"""

    def __init__(self, delay=0.0):
        self.delay = delay
        self.codes = []
        self.written = threading.Event()

    def render(self, user_name, quiz_title, issued_date, code):
        time.sleep(self.delay)
        (certificate_output_dir() / f"{code}.pdf").write_bytes(b"%PDF-1.4\n")
        self.codes.append(code)
        self.written.set()
        return certificate_public_url(code)


def test_certificate_code_format():
    code = build_certificate_code(7, "3f2a9c1e-1111-2222-3333-444455556666", 1700000000000)
    assert code == "CERT-7-3f2a9c1e-1700000000000"


def test_certificate_code_is_capped():
    code = build_certificate_code(10**30, "abcdefghijkl", 1700000000000)
    assert len(code) == 50
    assert code.startswith("CERT-")


def test_below_passing_score_is_not_eligible(db, user, make_quiz, fake_renderer):
    quiz = make_quiz()
    service = CertificateService(db, renderer=fake_renderer)

    issue = service.issue_if_eligible(user.id, quiz.id, user.name, quiz.title, 69)

    assert issue == (None, STATUS_NOT_ELIGIBLE)
    assert fake_renderer.calls == []
    assert db.query(Certificate).count() == 0


def test_issues_once_and_reuses(db, user, make_quiz, fake_renderer):
    quiz = make_quiz()
    service = CertificateService(db, renderer=fake_renderer)

    first = service.issue_if_eligible(user.id, quiz.id, user.name, quiz.title, 70)
    second = service.issue_if_eligible(user.id, quiz.id, user.name, quiz.title, 100)

    assert first.status == STATUS_ISSUED
    assert first.url.endswith(".pdf")
    assert second == (first.url, STATUS_EXISTING)
    assert len(fake_renderer.calls) == 1
    assert fake_renderer.calls[0][:2] == ("Budi Santoso", "Kuis Mingguan 1")

    certificate = db.query(Certificate).one()
    assert certificate.file_url == first.url
    assert certificate.certificate_code.startswith(f"CERT-{quiz.id}-{user.id[:8]}-")


def test_renderer_failure_creates_no_row(db, user, make_quiz, failing_renderer):
    quiz = make_quiz()
    service = CertificateService(db, renderer=failing_renderer)

    issue = service.issue_if_eligible(user.id, quiz.id, user.name, quiz.title, 90)

    assert issue == (None, STATUS_FAILED)
    assert db.query(Certificate).count() == 0


def test_concurrent_duplicate_returns_existing(db, user, make_quiz, fake_renderer):
    quiz = make_quiz()
    winner = Certificate(
        user_id=user.id,
        quiz_id=quiz.id,
        certificate_code="CERT-winner",
        file_url="http://testserver/storage/certificates/CERT-winner.pdf",
        issued_at=datetime.utcnow(),
    )
    db.add(winner)
    db.commit()

    service = CertificateService(db, renderer=fake_renderer)
    real_get_existing = service.get_existing
    lookups = []

    def get_existing_after_race(user_id, quiz_id):
        # The pre-check misses the row the other request is committing
        lookups.append(quiz_id)
        if len(lookups) == 1:
            return None
        return real_get_existing(user_id, quiz_id)

    service.get_existing = get_existing_after_race

    issue = service.issue_if_eligible(user.id, quiz.id, user.name, quiz.title, 100)

    assert issue == (winner.file_url, STATUS_EXISTING)
    assert db.query(Certificate).count() == 1


def test_render_timeout_returns_none():
    url = render_with_timeout(
        SlowRenderer(), "Budi", "Kuis", datetime.utcnow(), "CERT-slow", timeout=0.05
    )
    assert url is None


def test_list_user_certificates(db, user, make_quiz, fake_renderer):
    quiz = make_quiz(title="Kuis Hiragana")
    service = CertificateService(db, renderer=fake_renderer)
    service.issue_if_eligible(user.id, quiz.id, user.name, quiz.title, 85)

    certificates = service.list_user_certificates(user.id)

    assert len(certificates) == 1
    assert certificates[0]["quiz_title"] == "Kuis Hiragana"
    assert service.count_user_certificates(user.id) == 1


def test_losing_the_race_removes_rendered_file(db, user, make_quiz):
    quiz = make_quiz()
    winner = Certificate(
        user_id=user.id,
        quiz_id=quiz.id,
        certificate_code="CERT-first",
        file_url="http://testserver/storage/certificates/CERT-first.pdf",
        issued_at=datetime.utcnow(),
    )
    db.add(winner)
    db.commit()

    renderer = FileRenderer()
    service = CertificateService(db, renderer=renderer)
    real_get_existing = service.get_existing
    lookups = []

    def get_existing_after_race(user_id, quiz_id):
        lookups.append(quiz_id)
        if len(lookups) == 1:
            return None
        return real_get_existing(user_id, quiz_id)

    service.get_existing = get_existing_after_race

    issue = service.issue_if_eligible(user.id, quiz.id, user.name, quiz.title, 100)

    assert issue.status == STATUS_EXISTING
    assert len(renderer.codes) == 1
    assert not (certificate_output_dir() / f"{renderer.codes[0]}.pdf").exists()


def test_issued_certificate_file_is_kept(db, user, make_quiz):
    quiz = make_quiz()
    renderer = FileRenderer()

    issue = CertificateService(db, renderer=renderer).issue_if_eligible(
        user.id, quiz.id, user.name, quiz.title, 80
    )

    assert issue.status == STATUS_ISSUED
    assert (certificate_output_dir() / f"{renderer.codes[0]}.pdf").exists()


def test_late_render_file_is_removed_after_timeout():
    renderer = FileRenderer(delay=0.3)
    code = "CERT-late-render"
    path = certificate_output_dir() / f"{code}.pdf"

    url = render_with_timeout(
        renderer, "Budi", "Kuis", datetime.utcnow(), code, timeout=0.05
    )
    assert url is None

    assert renderer.written.wait(timeout=5)
    deadline = time.time() + 5
    while path.exists() and time.time() < deadline:
        time.sleep(0.01)
    assert not path.exists()
