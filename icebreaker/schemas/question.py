# icebreaker/schemas/question.py
from pydantic import BaseModel


class CategoryPublic(BaseModel):
    id: int
    role: str
    name: str

    model_config = {"from_attributes": True}


class QuestionPublic(BaseModel):
    id: int
    category_id: int
    question_text: str
    category: CategoryPublic

    model_config = {"from_attributes": True}
