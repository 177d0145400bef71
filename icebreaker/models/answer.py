# icebreaker/models/answer.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from icebreaker.db.base import Base


class Answer(Base):
    __tablename__ = "answers"
    __table_args__ = (
        UniqueConstraint("match_id", "role", "question_id", name="uq_answer_match_role_question"),
    )

    id = Column(Integer, primary_key=True, index=True)

    match_id = Column(String(64), ForeignKey("matches.id"), nullable=False, index=True)
    role = Column(String(20), nullable=False)  # 'teacher' / 'student'
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False)

    content = Column(Text, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    question = relationship("Question")
