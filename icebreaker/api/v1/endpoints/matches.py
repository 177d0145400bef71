# icebreaker/api/v1/endpoints/matches.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from icebreaker.core.config import settings
from icebreaker.core.security import get_current_admin
from icebreaker.db.session import get_db
from icebreaker.models.admin import Admin
from icebreaker.schemas.answer import AdminAnswer, MatchAnswers
from icebreaker.schemas.match import (
    MatchCreate,
    MatchDetail,
    MatchStats,
    MatchWithLinks,
    ReportResetResponse,
)
from icebreaker.services import match_service
from icebreaker.services.lifecycle import STATUSES, STUDENT, TEACHER

router = APIRouter(prefix="/admin/matches", tags=["admin"])


def _with_links(match) -> MatchWithLinks:
    return MatchWithLinks(
        match=MatchDetail.model_validate(match),
        links=match_service.session_links(match, settings.PUBLIC_BASE_URL),
    )


def _to_admin_answer(answer) -> AdminAnswer:
    question = answer.question
    return AdminAnswer(
        id=answer.id,
        question_id=answer.question_id,
        question_text=question.question_text if question else "",
        category_name=question.category.name if question and question.category else "",
        content=answer.content,
        created_at=answer.created_at,
    )


@router.get("/", response_model=List[MatchDetail])
def list_matches(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
    status_filter: str | None = Query(default=None, alias="status"),
    search: str | None = None,
    skip: int = 0,
    limit: int = 100,
):
    """
    All matches, newest first; optional status filter and name search.
    """
    if status_filter and status_filter not in STATUSES:
        raise HTTPException(status_code=400, detail=f"Unknown status {status_filter!r}")
    return match_service.list_matches(
        db, status=status_filter, search=search, skip=skip, limit=limit
    )


@router.post("/", response_model=MatchWithLinks, status_code=status.HTTP_201_CREATED)
def create_match(
    obj_in: MatchCreate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    match = match_service.create_match(db, obj_in=obj_in)
    return _with_links(match)


@router.get("/stats", response_model=MatchStats)
def match_stats(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return match_service.count_by_status(db)


@router.get("/{match_id}", response_model=MatchWithLinks)
def get_match(
    match_id: str,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    match = match_service.get_match(db, match_id)
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")
    return _with_links(match)


@router.get("/{match_id}/answers", response_model=MatchAnswers)
def get_match_answers(
    match_id: str,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    match = match_service.get_match(db, match_id)
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")

    answers = match_service.list_answers_for_match(db, match_id)
    return MatchAnswers(
        match=MatchDetail.model_validate(match),
        teacher_answers=[_to_admin_answer(a) for a in answers if a.role == TEACHER],
        student_answers=[_to_admin_answer(a) for a in answers if a.role == STUDENT],
        total_answers=len(answers),
    )


@router.post("/{match_id}/reset-report", response_model=ReportResetResponse)
def reset_report(
    match_id: str,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """
    Drop the stored report so the next generation renders the current answers.
    """
    previous, match = match_service.reset_report(db, match_id)
    return ReportResetResponse(
        message="Report reset",
        match_id=match.id,
        previous_report_url=previous,
        report_url=match.report_url,
    )
