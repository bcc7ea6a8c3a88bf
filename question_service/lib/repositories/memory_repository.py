import itertools
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from question_service.lib.errors import NotFoundError, StoreError
from question_service.lib.models import Answer, Question


class InMemoryRepository:
    """Dict-backed repository for exercising the service without a database.

    Mirrors the store's guarantees: ids are sequential and never reused,
    deleting a question drops its answers, and an answer whose question is
    gone is rejected the way the foreign key would reject it.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._questions: Dict[int, Question] = {}
        self._answers: Dict[int, Answer] = {}
        self._question_ids = itertools.count(1)
        self._answer_ids = itertools.count(1)

    def _now(self):
        return datetime.now(timezone.utc)

    def create_question(self, question: Question) -> Question:
        self.logger.debug(f"Creating question: {question.text!r}")
        question.id = next(self._question_ids)
        question.created_at = self._now()
        self._questions[question.id] = question
        return question

    def get_question(self, question_id: int) -> Question:
        self.logger.debug(f"Getting question with ID: {question_id}")
        question = self._questions.get(question_id)
        if question is None:
            raise NotFoundError("question", question_id)
        question.answers = self._answers_for(question_id)
        return question

    def get_all_questions(self) -> List[Question]:
        self.logger.debug("Getting all questions")
        return [self.get_question(qid) for qid in sorted(self._questions)]

    def delete_question(self, question_id: int) -> None:
        self.logger.debug(f"Deleting question with ID: {question_id}")
        if self._questions.pop(question_id, None) is None:
            return
        for answer in self._answers_for(question_id):
            del self._answers[answer.id]

    def create_answer(self, answer: Answer) -> Answer:
        self.logger.debug(f"Creating answer for question {answer.question_id}")
        if answer.question_id not in self._questions:
            raise StoreError(
                f"FOREIGN KEY constraint failed: question {answer.question_id} does not exist"
            )
        answer.id = next(self._answer_ids)
        answer.created_at = self._now()
        self._answers[answer.id] = answer
        return answer

    def get_answer(self, answer_id: int) -> Answer:
        self.logger.debug(f"Getting answer with ID: {answer_id}")
        answer = self._answers.get(answer_id)
        if answer is None:
            raise NotFoundError("answer", answer_id)
        return answer

    def delete_answer(self, answer_id: int) -> None:
        self.logger.debug(f"Deleting answer with ID: {answer_id}")
        self._answers.pop(answer_id, None)

    def _answers_for(self, question_id):
        return [
            a for aid, a in sorted(self._answers.items()) if a.question_id == question_id
        ]
