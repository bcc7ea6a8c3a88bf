from typing import List, Protocol, runtime_checkable

from question_service.lib.models import Answer, Question


@runtime_checkable
class Repository(Protocol):
    """Storage-backed CRUD primitives for questions and answers.

    Implementations hold no domain rules. Every operation may raise
    ``StoreError``; lookups of a missing id raise ``NotFoundError``.
    Deleting an id that does not exist succeeds without doing anything.
    """

    def create_question(self, question: Question) -> Question:
        """Insert ``question`` and return it with ``id`` and ``created_at`` set."""
        ...

    def get_question(self, question_id: int) -> Question:
        """Fetch a question with its answers loaded."""
        ...

    def get_all_questions(self) -> List[Question]:
        """Fetch every question with its answers loaded, ordered by id."""
        ...

    def delete_question(self, question_id: int) -> None:
        """Delete a question and all of its answers in one transaction."""
        ...

    def create_answer(self, answer: Answer) -> Answer:
        """Insert ``answer`` and return it with ``id`` and ``created_at`` set."""
        ...

    def get_answer(self, answer_id: int) -> Answer:
        ...

    def delete_answer(self, answer_id: int) -> None:
        ...
