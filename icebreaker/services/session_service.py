# icebreaker/services/session_service.py
"""
Teacher / student side of a match: fetch the question set, submit answers.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from icebreaker.models.answer import Answer
from icebreaker.models.match import Match
from icebreaker.models.question import Question
from icebreaker.services import match_service, question_service
from icebreaker.services.errors import AnswerValidationError
from icebreaker.services.lifecycle import next_status, validate_role

logger = logging.getLogger(__name__)


@dataclass
class RoleQuestions:
    match: Match
    questions: List[Question]
    existing_answers: List[Answer]


def list_answers(db: Session, *, match_id: str, role: str) -> List[Answer]:
    return (
        db.query(Answer)
        .filter(Answer.match_id == match_id, Answer.role == role)
        .order_by(Answer.id.asc())
        .all()
    )


def get_questions_for_role(db: Session, match_id: str, role: str) -> RoleQuestions:
    validate_role(role)
    match = match_service.get_match_or_404(db, match_id)

    questions = question_service.select_questions_for_role(
        db, match_id=match.id, role=role
    )
    existing = list_answers(db, match_id=match.id, role=role)
    return RoleQuestions(match=match, questions=questions, existing_answers=existing)


def get_match_status(db: Session, match_id: str) -> Match:
    return match_service.get_match_or_404(db, match_id)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _normalize_answers(
    answers: Optional[Sequence[Any]],
    allowed_ids: set[int],
) -> List[tuple[int, str]]:
    """
    (question_id, content) pairs, or AnswerValidationError.

    Accepts pydantic AnswerIn objects or plain mappings.
    """
    if answers is None:
        raise AnswerValidationError("answers are required")

    seen: set[int] = set()
    normalized: List[tuple[int, str]] = []
    for index, item in enumerate(answers):
        question_id = _field(item, "question_id")
        content = _field(item, "content")

        if isinstance(question_id, bool) or not isinstance(question_id, int):
            raise AnswerValidationError(f"answers[{index}]: question_id is required")
        if not isinstance(content, str):
            raise AnswerValidationError(f"answers[{index}]: content is required")
        if question_id in seen:
            raise AnswerValidationError(
                f"answers[{index}]: question {question_id} answered twice"
            )
        if question_id not in allowed_ids:
            raise AnswerValidationError(
                f"answers[{index}]: question {question_id} is not part of this match"
            )

        seen.add(question_id)
        normalized.append((question_id, content))
    return normalized


def submit_answers(
    db: Session,
    match_id: str,
    role: str,
    answers: Optional[Sequence[Any]],
) -> Match:
    """
    Replace every answer of ``role`` for the match and advance its status.

    Delete, insert and status update share one transaction under a row lock
    on the match; any failure rolls all of it back.
    """
    validate_role(role)
    match_service.get_match_or_404(db, match_id)

    allowed_ids = {
        q.id
        for q in question_service.select_questions_for_role(
            db, match_id=match_id, role=role
        )
    }
    normalized = _normalize_answers(answers, allowed_ids)

    try:
        match = match_service.lock_match(db, match_id)

        db.query(Answer).filter(
            Answer.match_id == match_id,
            Answer.role == role,
        ).delete()
        db.flush()

        db.add_all(
            Answer(
                match_id=match_id,
                role=role,
                question_id=question_id,
                content=content,
            )
            for question_id, content in normalized
        )

        previous = match.status
        match.status = next_status(previous, role)
        db.add(match)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(match)
    logger.info(
        f"Match {match_id}: {role} submitted {len(normalized)} answers, "
        f"status {previous} -> {match.status}"
    )
    return match
