"""Game store contract and its SQLAlchemy implementation."""

from .sql_store import SqlGameStore
from .store import GameStore

__all__ = ["GameStore", "SqlGameStore"]
