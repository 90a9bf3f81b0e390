# app/services/question_bank.py
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.models.question import QuestionBank, QuestionType
from app.models.quiz import QuizQuestionOrder


class QuestionBankService:
    """Read-only lookups against the question bank"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_ids(self, ids: Iterable[int]) -> List[QuestionBank]:
        ids = list(ids)
        if not ids:
            return []
        return (
            self.db.query(QuestionBank)
            .filter(QuestionBank.id.in_(ids))
            .order_by(QuestionBank.id)
            .all()
        )

    def find_by_type_or_category(
        self,
        type_id: Optional[int],
        category_id: Optional[int],
        limit: int,
    ) -> List[QuestionBank]:
        """Questions of a type when given, otherwise of any type in the category"""
        query = self.db.query(QuestionBank)

        if type_id is not None:
            query = query.filter(QuestionBank.type_id == type_id)
        else:
            query = query.join(QuestionType, QuestionBank.type_id == QuestionType.id).filter(
                QuestionType.category_id == category_id
            )

        return query.order_by(QuestionBank.id).limit(limit).all()

    def find_ordered_for_quiz(self, quiz_id: int) -> List[QuestionBank]:
        """Curated questions of a quiz, in their configured order"""
        return (
            self.db.query(QuestionBank)
            .join(QuizQuestionOrder, QuizQuestionOrder.question_id == QuestionBank.id)
            .filter(QuizQuestionOrder.quiz_id == quiz_id)
            .order_by(QuizQuestionOrder.order.asc(), QuizQuestionOrder.id.asc())
            .all()
        )
