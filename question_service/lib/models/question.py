from sqlalchemy import Column, Integer, Text, DateTime, func
from sqlalchemy.orm import relationship
from .base import BaseModel


class Question(BaseModel):
    __tablename__ = "questions"
    # AUTOINCREMENT keeps SQLite from handing out a deleted row's id again
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    # Answers are removed with their question in the same flush; the FK
    # also cascades at the store for deletes issued outside the ORM.
    answers = relationship(
        "Answer",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="Answer.id",
    )
