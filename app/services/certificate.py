# app/services/certificate.py
import logging
import time
from datetime import datetime
from typing import List, NamedTuple, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.core.config import settings
from app.core.decorator import DBException
from app.models.certificate import Certificate
from app.utils.certificate_pdf import (
    certificate_renderer,
    discard_certificate_file,
    render_with_timeout,
)

logger = logging.getLogger(__name__)

CERTIFICATE_CODE_MAX_LENGTH = 50

STATUS_NOT_ELIGIBLE = "not_eligible"
STATUS_ISSUED = "issued"
STATUS_EXISTING = "existing"
STATUS_FAILED = "failed"


class CertificateIssue(NamedTuple):
    url: Optional[str]
    status: str


def build_certificate_code(
    quiz_id: int, user_id: str, now_ms: Optional[int] = None
) -> str:
    """CERT-<quiz>-<first 8 chars of user id>-<epoch ms>, capped at 50 chars"""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    code = f"CERT-{quiz_id}-{str(user_id)[:8]}-{now_ms}"
    return code[:CERTIFICATE_CODE_MAX_LENGTH]


class CertificateService:
    def __init__(self, db: Session, renderer=None):
        self.db = db
        self.renderer = renderer or certificate_renderer

    def get_existing(self, user_id: str, quiz_id: int) -> Optional[Certificate]:
        return (
            self.db.query(Certificate)
            .filter(Certificate.user_id == user_id, Certificate.quiz_id == quiz_id)
            .first()
        )

    def issue_if_eligible(
        self,
        user_id: str,
        quiz_id: int,
        user_name: str,
        quiz_title: str,
        score: int,
    ) -> CertificateIssue:
        """
        Issue the (user, quiz) certificate once the passing score is reached.

        A user gets at most one certificate per quiz: later qualifying
        retakes get the first certificate's URL back, and a concurrent
        duplicate insert is resolved by the unique constraint.

        Raises:
            DBException: on persistence errors other than the duplicate
        """
        if score < settings.certificate_passing_score:
            return CertificateIssue(None, STATUS_NOT_ELIGIBLE)

        existing = self.get_existing(user_id, quiz_id)
        if existing:
            logger.info(
                f"Reusing certificate {existing.certificate_code} for user {user_id}, quiz {quiz_id}"
            )
            return CertificateIssue(existing.file_url, STATUS_EXISTING)

        issued_at = datetime.utcnow()
        code = build_certificate_code(quiz_id, user_id)

        file_url = render_with_timeout(
            self.renderer, user_name, quiz_title, issued_at, code
        )
        if not file_url:
            logger.warning(f"Certificate {code} not issued: rendering failed")
            return CertificateIssue(None, STATUS_FAILED)

        certificate = Certificate(
            user_id=user_id,
            quiz_id=quiz_id,
            certificate_code=code,
            file_url=file_url,
            issued_at=issued_at,
        )

        try:
            self.db.add(certificate)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self.get_existing(user_id, quiz_id)
            if existing:
                if existing.certificate_code != code:
                    discard_certificate_file(code)
                logger.info(
                    f"Certificate for user {user_id}, quiz {quiz_id} issued concurrently; keeping {existing.certificate_code}"
                )
                return CertificateIssue(existing.file_url, STATUS_EXISTING)
            # A same-code row owns that PDF path, so the file stays
            logger.error(f"Certificate code collision: {code}")
            return CertificateIssue(None, STATUS_FAILED)
        except SQLAlchemyError as e:
            self.db.rollback()
            discard_certificate_file(code)
            logger.error(f"Failed to save certificate {code}: {e}", exc_info=True)
            raise DBException("Error issuing certificate", 500)

        logger.info(f"Certificate {code} issued to user {user_id} for quiz {quiz_id}")
        return CertificateIssue(file_url, STATUS_ISSUED)

    def list_user_certificates(self, user_id: str) -> List[dict]:
        certificates = (
            self.db.query(Certificate)
            .options(selectinload(Certificate.quiz))
            .filter(Certificate.user_id == user_id)
            .order_by(Certificate.issued_at.desc())
            .all()
        )

        return [
            {
                "id": cert.id,
                "quiz_id": cert.quiz_id,
                "quiz_title": cert.quiz.title if cert.quiz else None,
                "certificate_code": cert.certificate_code,
                "file_url": cert.file_url,
                "issued_at": cert.issued_at,
            }
            for cert in certificates
        ]

    def count_user_certificates(self, user_id: str) -> int:
        return (
            self.db.query(Certificate).filter(Certificate.user_id == user_id).count()
        )
