import logging
import uuid
from typing import List, Optional

from question_service.lib.errors import QuestionReferenceError, StoreError
from question_service.lib.models import Answer, Question
from question_service.lib.repositories import Repository


class QuestionAnswerService:
    """Business rules for questions and answers.

    Field validation happens before a call gets here. The service owns the
    fields a client must not control (an answer's ``question_id`` and
    ``user_id``) and refuses answers for questions that do not exist;
    everything else passes straight through to the repository.
    """

    def __init__(self, repository: Repository, logger: Optional[logging.Logger] = None):
        self.repository = repository
        self.logger = logger or logging.getLogger(__name__)

    def create_question(self, question: Question) -> Question:
        return self.repository.create_question(question)

    def get_question(self, question_id: int) -> Question:
        return self.repository.get_question(question_id)

    def get_all_questions(self) -> List[Question]:
        return self.repository.get_all_questions()

    def delete_question(self, question_id: int) -> None:
        self.repository.delete_question(question_id)

    def create_answer(self, question_id: int, answer: Answer) -> Answer:
        """Attach ``answer`` to question ``question_id`` and persist it.

        Raises ``QuestionReferenceError`` (chained from the lookup error) when
        the question cannot be loaded; nothing is written in that case. The
        lookup and the insert are separate statements: a question deleted in
        between makes the insert fail on the foreign key with ``StoreError``.
        """
        try:
            self.repository.get_question(question_id)
        except StoreError as e:
            self.logger.warning(f"Rejecting answer for question {question_id}: {e}")
            raise QuestionReferenceError(question_id) from e

        answer.question_id = question_id
        answer.user_id = uuid.uuid4()
        created = self.repository.create_answer(answer)
        self.logger.info(f"Created answer {created.id} for question {question_id}")
        return created

    def get_answer(self, answer_id: int) -> Answer:
        return self.repository.get_answer(answer_id)

    def delete_answer(self, answer_id: int) -> None:
        self.repository.delete_answer(answer_id)
