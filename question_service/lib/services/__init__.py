from .question_answer_service import QuestionAnswerService

__all__ = ["QuestionAnswerService"]
