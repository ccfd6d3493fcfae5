"""I/O layer - SQLite persistence and the developer query console."""

from .database_manager import VocabDatabase
from .query_gateway import QueryGateway

__all__ = ["VocabDatabase", "QueryGateway"]
