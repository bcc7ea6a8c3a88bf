from .base import Base, BaseModel
from .question import Question
from .answer import Answer

__all__ = ["Base", "BaseModel", "Question", "Answer"]
