# app/models/certificate.py
from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from app.core.database import Base


class Certificate(Base):
    __tablename__ = "certificates"
    __table_args__ = (
        UniqueConstraint("user_id", "quiz_id", name="uq_certificates_user_quiz"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    quiz_id = Column(
        Integer, ForeignKey("weekly_quizzes.id"), nullable=False, index=True
    )

    certificate_code = Column(String(50), unique=True, nullable=False)
    file_url = Column(Text, nullable=False)
    issued_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<Certificate(code='{self.certificate_code}', user_id={self.user_id})>"
