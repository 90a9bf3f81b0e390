# app/models/question.py
from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Text

from app.core.database import Base


class QuestionCategory(Base):
    __tablename__ = "question_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<QuestionCategory(id={self.id}, name='{self.name}')>"


class QuestionType(Base):
    __tablename__ = "question_types"

    id = Column(Integer, primary_key=True, index=True)
    category_id = Column(
        Integer, ForeignKey("question_categories.id"), nullable=False, index=True
    )
    name = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<QuestionType(id={self.id}, category_id={self.category_id})>"


class QuestionBank(Base):
    __tablename__ = "question_bank"

    id = Column(Integer, primary_key=True, index=True)
    type_id = Column(
        Integer, ForeignKey("question_types.id"), nullable=False, index=True
    )

    content = Column(Text, nullable=False)
    options = Column(JSON, nullable=False)  # ["A. ...", "B. ...", ...]
    correct_answer = Column(String(255), nullable=False)
    explanation = Column(Text, nullable=True)

    def __repr__(self):
        return f"<QuestionBank(id={self.id}, type_id={self.type_id})>"
