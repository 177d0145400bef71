# icebreaker/models/category.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from icebreaker.db.base import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    role = Column(String(20), nullable=False, index=True)  # 'teacher' / 'student'
    name = Column(String(100), nullable=False)

    questions = relationship("Question", back_populates="category")
