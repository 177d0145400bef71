# icebreaker/schemas/match.py
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

MatchId = Annotated[str, Field(max_length=64, pattern=r"^[A-Za-z0-9_-]+$")]


class MatchCreate(BaseModel):
    teacher_name: str
    teacher_phone: str
    student_name: str
    student_phone: str
    # optional externally provided id; generated when omitted
    id: MatchId | None = None

    @field_validator("teacher_name", "teacher_phone", "student_name", "student_phone")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class MatchPublic(BaseModel):
    """What a teacher / student sees through their link (no phone numbers)."""
    id: str
    teacher_name: str
    student_name: str
    status: str
    report_url: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class MatchDetail(MatchPublic):
    """Admin view"""
    teacher_phone: str
    student_phone: str
    updated_at: datetime | None = None


class MatchLinks(BaseModel):
    teacher: str
    student: str


class MatchWithLinks(BaseModel):
    match: MatchDetail
    links: MatchLinks


class MatchStatusResponse(BaseModel):
    match: MatchPublic


class MatchStats(BaseModel):
    total: int
    waiting: int
    teacher_completed: int
    student_completed: int
    both_completed: int


class ReportResponse(BaseModel):
    message: str
    report_url: str
    match: MatchPublic


class ReportResetResponse(BaseModel):
    message: str
    match_id: str
    previous_report_url: str | None = None
    report_url: str | None = None
