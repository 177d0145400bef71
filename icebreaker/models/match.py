# icebreaker/models/match.py
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from icebreaker.db.base import Base


class Match(Base):
    __tablename__ = "matches"

    # opaque id, shared in the teacher / student links
    id = Column(String(64), primary_key=True, index=True)

    teacher_name = Column(String(100), nullable=False)
    teacher_phone = Column(String(30), nullable=False)
    student_name = Column(String(100), nullable=False)
    student_phone = Column(String(30), nullable=False)

    # 状态：waiting / teacher_completed / student_completed / both_completed
    status = Column(String(20), nullable=False, default="waiting", index=True)

    report_url = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
