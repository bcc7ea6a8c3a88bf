from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship

from .base import BaseModel


class Answer(BaseModel):
    __tablename__ = "answers"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    question_id = Column(
        Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Uuid, nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    question = relationship("Question", back_populates="answers", lazy="select")
