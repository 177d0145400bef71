# icebreaker/services/question_service.py
from typing import List

from sqlalchemy.orm import Session

from icebreaker.core.config import settings
from icebreaker.models.category import Category
from icebreaker.models.question import Question
from icebreaker.services.lifecycle import validate_role
from icebreaker.services.sampler import sample_questions


def list_categories(db: Session, role: str) -> List[Category]:
    """
    categories of one role, ascending id (this is the question order too)
    """
    validate_role(role)
    return (
        db.query(Category)
        .filter(Category.role == role)
        .order_by(Category.id.asc())
        .all()
    )


def list_active_questions(db: Session, category_id: int) -> List[Question]:
    return (
        db.query(Question)
        .filter(
            Question.category_id == category_id,
            Question.is_active.is_(True),
        )
        .order_by(Question.id.asc())
        .all()
    )


def select_questions_for_category(
    db: Session,
    *,
    match_id: str,
    category: Category,
) -> List[Question]:
    pool = list_active_questions(db, category.id)
    return sample_questions(
        pool,
        match_id,
        category.id,
        category.role,
        limit=settings.QUESTIONS_PER_CATEGORY,
    )


def select_questions_for_role(
    db: Session,
    *,
    match_id: str,
    role: str,
) -> List[Question]:
    """
    The questions a match asks of ``role``: the sampled subset of every
    category, concatenated in category order. Always recomputed, never cached.
    """
    questions: List[Question] = []
    for category in list_categories(db, role):
        questions.extend(
            select_questions_for_category(db, match_id=match_id, category=category)
        )
    return questions
