# icebreaker/schemas/answer.py
from datetime import datetime

from pydantic import BaseModel

from icebreaker.schemas.match import MatchDetail, MatchPublic
from icebreaker.schemas.question import QuestionPublic


class AnswerIn(BaseModel):
    question_id: int
    content: str


class SubmitRequest(BaseModel):
    answers: list[AnswerIn]


class SubmitResponse(BaseModel):
    message: str
    status: str


class AnswerPublic(BaseModel):
    id: int
    question_id: int
    role: str
    content: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class SessionQuestions(BaseModel):
    """Question set for one side of a match, plus anything already answered."""
    match: MatchPublic
    questions: list[QuestionPublic]
    existing_answers: list[AnswerPublic]


class AdminAnswer(BaseModel):
    id: int
    question_id: int
    question_text: str
    category_name: str
    content: str
    created_at: datetime | None = None


class MatchAnswers(BaseModel):
    match: MatchDetail
    teacher_answers: list[AdminAnswer]
    student_answers: list[AdminAnswer]
    total_answers: int
