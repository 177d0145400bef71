# icebreaker/models/admin.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from icebreaker.db.base import Base


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
