from .base import Repository
from .sqlalchemy_repository import SQLAlchemyRepository
from .memory_repository import InMemoryRepository

__all__ = ["Repository", "SQLAlchemyRepository", "InMemoryRepository"]
