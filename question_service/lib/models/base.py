import logging

from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()


class BaseModel(Base):
    __abstract__ = True
    _session = None

    @classmethod
    def set_session(cls, session):
        cls._session = session

    @classmethod
    def get_session(cls):
        if cls._session is None:
            raise RuntimeError(
                "From models/base.py. Session has not been set. Call set_session() first."
            )
        return cls._session

    @classmethod
    def cleanup_session_on_exception(cls):
        """Roll back the current session after a failed request."""
        if cls._session is None:
            return
        try:
            cls._session.rollback()
        except Exception as e:
            logger.warning(f"Rollback after exception failed: {e}")

    @classmethod
    def declared_tables(cls):
        return sorted(cls.metadata.tables.keys())

    @classmethod
    def get(cls, id, session=None):
        """Find a single record by its ID."""
        if session is None:
            session = cls.get_session()
        return session.get(cls, id)

    @classmethod
    def count(cls, session=None):
        """Count the number of records in the table."""
        if session is None:
            session = cls.get_session()
        return session.query(cls).count()

    def to_dict(self):
        """Convert the model instance to a dictionary."""
        return {
            column.name: getattr(self, column.name) for column in self.__table__.columns
        }

    def __repr__(self):
        return f"<{type(self).__name__} id={getattr(self, 'id', None)}>"
