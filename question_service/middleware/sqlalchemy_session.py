import logging
from question_service.lib.models.base import BaseModel

logger = logging.getLogger(__name__)


class SQLAlchemySessionMiddleware:
    """
    Middleware to ensure proper SQLAlchemy session lifecycle management.

    - On exceptions: rollback the scoped session
    - On request completion: remove the session so the next request on this
      thread starts clean
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        try:
            return self.get_response(request)
        except Exception:
            BaseModel.cleanup_session_on_exception()
            raise
        finally:
            self._remove_session()

    def _remove_session(self):
        try:
            session = BaseModel.get_session()
        except RuntimeError:
            # SQLAlchemy never initialized (non-strict startup)
            return
        if hasattr(session, "remove"):
            session.remove()
            logger.debug("Scoped session removed at request end")
