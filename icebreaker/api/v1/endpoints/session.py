# icebreaker/api/v1/endpoints/session.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from icebreaker.db.session import get_db
from icebreaker.schemas.answer import (
    AnswerPublic,
    SessionQuestions,
    SubmitRequest,
    SubmitResponse,
)
from icebreaker.schemas.match import MatchPublic, MatchStatusResponse, ReportResponse
from icebreaker.schemas.question import QuestionPublic
from icebreaker.services import report_service, session_service

router = APIRouter(prefix="/session", tags=["session"])

# /{match_id}/status and /{match_id}/report.pdf are declared before
# /{match_id}/{role} so they are not swallowed by it.


@router.get("/{match_id}/status", response_model=MatchStatusResponse)
def get_match_status(match_id: str, db: Session = Depends(get_db)):
    """
    Polled by the result page of both sides.
    """
    match = session_service.get_match_status(db, match_id)
    return MatchStatusResponse(match=MatchPublic.model_validate(match))


@router.get("/{match_id}/report.pdf")
def download_report(match_id: str, db: Session = Depends(get_db)):
    match = session_service.get_match_status(db, match_id)
    if not match.report_url:
        raise HTTPException(status_code=404, detail="Report has not been generated yet")

    path = report_service.report_path(match.id)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Report file is missing")

    return FileResponse(path, media_type="application/pdf", filename=f"{match.id}.pdf")


@router.post("/{match_id}/report", response_model=ReportResponse)
def generate_report(match_id: str, db: Session = Depends(get_db)):
    """
    Build the answer sheet once both sides are done; later calls return the
    stored one.
    """
    already = bool(session_service.get_match_status(db, match_id).report_url)
    match = report_service.generate_report(db, match_id)
    return ReportResponse(
        message="Report already generated" if already else "Report generated",
        report_url=match.report_url,
        match=MatchPublic.model_validate(match),
    )


@router.get("/{match_id}/{role}", response_model=SessionQuestions)
def get_questions_for_role(match_id: str, role: str, db: Session = Depends(get_db)):
    """
    Question set of one side (3 per category), plus answers already saved.
    """
    result = session_service.get_questions_for_role(db, match_id, role)
    return SessionQuestions(
        match=MatchPublic.model_validate(result.match),
        questions=[QuestionPublic.model_validate(q) for q in result.questions],
        existing_answers=[AnswerPublic.model_validate(a) for a in result.existing_answers],
    )


@router.post(
    "/{match_id}/{role}/submit",
    response_model=SubmitResponse,
    status_code=status.HTTP_200_OK,
)
def submit_answers(
    match_id: str,
    role: str,
    payload: SubmitRequest,
    db: Session = Depends(get_db),
):
    """
    Replaces every answer of this side and moves the match status forward.
    """
    match = session_service.submit_answers(db, match_id, role, payload.answers)
    return SubmitResponse(message="Answers submitted", status=match.status)
