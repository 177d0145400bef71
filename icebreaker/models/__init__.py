from icebreaker.models.admin import Admin
from icebreaker.models.category import Category
from icebreaker.models.question import Question
from icebreaker.models.match import Match
from icebreaker.models.answer import Answer

__all__ = ["Admin", "Category", "Question", "Match", "Answer"]
