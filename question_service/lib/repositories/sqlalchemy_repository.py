import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from question_service.lib.errors import NotFoundError, StoreError
from question_service.lib.models import Answer, Question


class SQLAlchemyRepository:
    """Repository backed by a SQLAlchemy session.

    The session (usually the app-wide ``scoped_session``) and the logger are
    passed in; nothing is looked up from module globals.
    """

    def __init__(self, session, logger: Optional[logging.Logger] = None):
        self.session = session
        self.logger = logger or logging.getLogger(__name__)

    @contextmanager
    def _store_errors(self, action: str):
        try:
            yield
        # sqlite3 raises OverflowError for ids past 64 bits
        except (SQLAlchemyError, OverflowError) as e:
            self.session.rollback()
            self.logger.error(f"Store failure while {action}: {e}")
            raise StoreError(f"{action} failed: {e}") from e

    def create_question(self, question: Question) -> Question:
        self.logger.debug(f"Creating question: {question.text!r}")
        with self._store_errors("creating question"):
            self.session.add(question)
            self.session.commit()
            # created_at comes from the server default
            self.session.refresh(question)
        return question

    def get_question(self, question_id: int) -> Question:
        self.logger.debug(f"Getting question with ID: {question_id}")
        with self._store_errors(f"getting question {question_id}"):
            question = self.session.execute(
                select(Question)
                .options(selectinload(Question.answers))
                .execution_options(populate_existing=True)
                .where(Question.id == question_id)
            ).scalar_one_or_none()
        if question is None:
            raise NotFoundError("question", question_id)
        return question

    def get_all_questions(self) -> List[Question]:
        self.logger.debug("Getting all questions")
        with self._store_errors("getting all questions"):
            return list(
                self.session.execute(
                    select(Question)
                    .options(selectinload(Question.answers))
                    .execution_options(populate_existing=True)
                    .order_by(Question.id)
                ).scalars()
            )

    def delete_question(self, question_id: int) -> None:
        self.logger.debug(f"Deleting question with ID: {question_id}")
        with self._store_errors(f"deleting question {question_id}"):
            question = self.session.get(Question, question_id)
            if question is None:
                self.logger.debug(f"Question {question_id} does not exist, nothing to delete")
                return
            # Answers go in the same flush via the relationship cascade
            self.session.delete(question)
            self.session.commit()

    def create_answer(self, answer: Answer) -> Answer:
        self.logger.debug(f"Creating answer for question {answer.question_id}")
        with self._store_errors(f"creating answer for question {answer.question_id}"):
            self.session.add(answer)
            self.session.commit()
            self.session.refresh(answer)
        return answer

    def get_answer(self, answer_id: int) -> Answer:
        self.logger.debug(f"Getting answer with ID: {answer_id}")
        with self._store_errors(f"getting answer {answer_id}"):
            answer = self.session.get(Answer, answer_id)
        if answer is None:
            raise NotFoundError("answer", answer_id)
        return answer

    def delete_answer(self, answer_id: int) -> None:
        self.logger.debug(f"Deleting answer with ID: {answer_id}")
        with self._store_errors(f"deleting answer {answer_id}"):
            answer = self.session.get(Answer, answer_id)
            if answer is None:
                self.logger.debug(f"Answer {answer_id} does not exist, nothing to delete")
                return
            self.session.delete(answer)
            self.session.commit()
