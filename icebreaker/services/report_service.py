# icebreaker/services/report_service.py
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from icebreaker.core.config import settings
from icebreaker.models.answer import Answer
from icebreaker.models.match import Match
from icebreaker.models.question import Question
from icebreaker.services import match_service, question_service
from icebreaker.services.errors import PreconditionFailedError
from icebreaker.services.lifecycle import BOTH_COMPLETED, STUDENT, TEACHER
from icebreaker.services.pdf_renderer import render_report_pdf
from icebreaker.services.session_service import list_answers

logger = logging.getLogger(__name__)

REPORT_URL_TEMPLATE = "/api/v1/session/{match_id}/report.pdf"


@dataclass
class ReportEntry:
    question_id: int
    category_name: str
    question_text: str
    content: str = ""


@dataclass
class ReportData:
    match_id: str
    teacher_name: str
    student_name: str
    created_at: Optional[datetime]
    teacher_entries: List[ReportEntry] = field(default_factory=list)
    student_entries: List[ReportEntry] = field(default_factory=list)


def report_url_for(match_id: str) -> str:
    return REPORT_URL_TEMPLATE.format(match_id=match_id)


def report_path(match_id: str, reports_dir: Path | str | None = None) -> Path:
    base = Path(reports_dir if reports_dir is not None else settings.REPORTS_DIR)
    return base / f"{match_id}.pdf"


def _entries_for_role(db: Session, match: Match, role: str) -> List[ReportEntry]:
    """
    Selected questions of the role in sampler order, each paired with its
    stored answer, or an empty one when it was never answered.
    """
    questions: List[Question] = question_service.select_questions_for_role(
        db, match_id=match.id, role=role
    )
    answers: Dict[int, Answer] = {
        a.question_id: a for a in list_answers(db, match_id=match.id, role=role)
    }

    entries = []
    for question in questions:
        answer = answers.get(question.id)
        entries.append(
            ReportEntry(
                question_id=question.id,
                category_name=question.category.name,
                question_text=question.question_text,
                content=answer.content if answer is not None else "",
            )
        )
    return entries


def build_report(db: Session, match: Match) -> ReportData:
    return ReportData(
        match_id=match.id,
        teacher_name=match.teacher_name,
        student_name=match.student_name,
        created_at=match.created_at,
        teacher_entries=_entries_for_role(db, match, TEACHER),
        student_entries=_entries_for_role(db, match, STUDENT),
    )


def _require_complete(match: Match) -> None:
    if match.status != BOTH_COMPLETED:
        raise PreconditionFailedError(
            f"match {match.id} is '{match.status}', both sides must answer first"
        )


def generate_report(
    db: Session,
    match_id: str,
    *,
    reports_dir: Path | str | None = None,
) -> Match:
    """
    Render and store the PDF for a completed match, once.

    If a report url is already stored it is returned as is, even when answers
    changed afterwards; an admin reset is the only way to re-render.
    """
    match = match_service.get_match_or_404(db, match_id)
    _require_complete(match)

    if match.report_url:
        logger.info(f"Report for match {match_id} already exists: {match.report_url}")
        return match

    try:
        # re-check under the row lock; a concurrent request may have won
        match = match_service.lock_match(db, match_id)
        _require_complete(match)
        if match.report_url:
            db.rollback()
            return match

        pdf_bytes = render_report_pdf(build_report(db, match))

        path = report_path(match_id, reports_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(pdf_bytes)

        match.report_url = report_url_for(match_id)
        db.add(match)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(match)
    logger.info(f"Generated report for match {match_id} at {path} ({len(pdf_bytes)} bytes)")
    return match
