"""Errors raised by the repository and service layers.

``StoreError`` is the root: anything the store reports (connectivity,
constraint violations, serialization failures) surfaces as one, with the
driver exception chained as ``__cause__``. ``NotFoundError`` and
``QuestionReferenceError`` are the two conditions the API layer maps to
client-facing statuses.
"""


class StoreError(Exception):
    """A failure reported by the persistence store."""


class NotFoundError(StoreError):
    """The requested question or answer does not exist."""

    def __init__(self, entity, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID {entity_id} not found")


class QuestionReferenceError(StoreError):
    """An answer was submitted for a question that could not be resolved.

    The lookup failure is chained as ``__cause__``; callers inspect it to
    tell a missing question from a store outage.
    """

    def __init__(self, question_id):
        self.question_id = question_id
        super().__init__(f"question with ID {question_id} not found")

    @property
    def is_missing(self):
        return isinstance(self.__cause__, NotFoundError)
