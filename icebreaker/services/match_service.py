# icebreaker/services/match_service.py
import logging
import secrets
import string
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from icebreaker.models.answer import Answer
from icebreaker.models.match import Match
from icebreaker.models.question import Question
from icebreaker.schemas.match import MatchCreate
from icebreaker.services.errors import ConflictError, NotFoundError
from icebreaker.services.lifecycle import STATUSES, STUDENT, TEACHER, WAITING

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 8


def generate_match_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def get_match(db: Session, match_id: str) -> Optional[Match]:
    return db.get(Match, match_id)


def get_match_or_404(db: Session, match_id: str) -> Match:
    match = get_match(db, match_id)
    if match is None:
        raise NotFoundError(f"match {match_id} not found")
    return match


def lock_match(db: Session, match_id: str) -> Match:
    """
    Load the match row with ``SELECT ... FOR UPDATE``.

    Held until the caller commits or rolls back, which serializes writers of
    the same match (answers resubmission, first report generation).
    """
    match = (
        db.query(Match)
        .filter(Match.id == match_id)
        .populate_existing()
        .with_for_update()
        .first()
    )
    if match is None:
        raise NotFoundError(f"match {match_id} not found")
    return match


def create_match(db: Session, *, obj_in: MatchCreate) -> Match:
    """
    admin pairs a teacher with a student; status starts at 'waiting'
    """
    match_id = obj_in.id
    if match_id is not None:
        if get_match(db, match_id) is not None:
            raise ConflictError(f"match id {match_id} is already in use")
    else:
        match_id = generate_match_id()
        while get_match(db, match_id) is not None:
            match_id = generate_match_id()

    db_obj = Match(
        id=match_id,
        teacher_name=obj_in.teacher_name,
        teacher_phone=obj_in.teacher_phone,
        student_name=obj_in.student_name,
        student_phone=obj_in.student_phone,
        status=WAITING,
    )
    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)

    logger.info(f"Created match {db_obj.id} ({db_obj.teacher_name} / {db_obj.student_name})")
    return db_obj


def list_matches(
    db: Session,
    *,
    status: str | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 100,
) -> List[Match]:
    """
    dashboard list, newest first; search hits teacher or student name
    """
    query = db.query(Match)
    if status:
        query = query.filter(Match.status == status)
    if search:
        pattern = f"%{search.strip().lower()}%"
        query = query.filter(
            or_(
                func.lower(Match.teacher_name).like(pattern),
                func.lower(Match.student_name).like(pattern),
            )
        )
    return (
        query.order_by(Match.created_at.desc(), Match.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def count_by_status(db: Session) -> Dict[str, int]:
    counts = {status: 0 for status in STATUSES}
    rows = db.query(Match.status, func.count(Match.id)).group_by(Match.status).all()
    for status, count in rows:
        counts[status] = count
    counts["total"] = sum(count for _, count in rows)
    return counts


def session_links(match: Match, base_url: str) -> Dict[str, str]:
    base = base_url.rstrip("/")
    return {
        TEACHER: f"{base}/session/{match.id}/{TEACHER}",
        STUDENT: f"{base}/session/{match.id}/{STUDENT}",
    }


def list_answers_for_match(db: Session, match_id: str) -> List[Answer]:
    """
    every stored answer of a match, oldest first, with question + category loaded
    """
    return (
        db.query(Answer)
        .options(joinedload(Answer.question).joinedload(Question.category))
        .filter(Answer.match_id == match_id)
        .order_by(Answer.created_at.asc(), Answer.id.asc())
        .all()
    )


def reset_report(db: Session, match_id: str) -> Tuple[Optional[str], Match]:
    """
    Forget the stored report so the next generation renders a fresh one.
    Returns the previous report url and the updated match.
    """
    match = get_match_or_404(db, match_id)
    previous = match.report_url
    match.report_url = None
    db.add(match)
    db.commit()
    db.refresh(match)

    logger.info(f"Reset report for match {match_id} (was {previous})")
    return previous, match
