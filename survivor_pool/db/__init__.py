"""
Database models and session management.

Models live in db.pool and are also exposed through the ``db_models``
namespace so persistence code reads ``db_models.Game``.

Session management:
    from survivor_pool.db import get_session
"""

from __future__ import annotations

from contextlib import contextmanager
from types import SimpleNamespace
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from ..config import settings
from ..logging import logger
from .base import Base
from .pool import (
    PHASE_PREFERENCE,
    Game,
    GameStatus,
    Phase,
    Pick,
    PickStatus,
    Team,
    User,
)

db_models = SimpleNamespace(
    # Enums
    Phase=Phase,
    GameStatus=GameStatus,
    PickStatus=PickStatus,
    # Tables
    Team=Team,
    User=User,
    Game=Game,
    Pick=Pick,
)

# Lazily created so tests can import modules without connecting.
_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def _get_engine() -> Engine:
    """Get or create the database engine (lazy initialization)."""
    global _engine
    if _engine is None:
        _engine = create_engine(
            settings.database_url,
            echo=settings.sql_echo,
            future=True,
            pool_pre_ping=True,
        )
    return _engine


def _get_session_factory() -> sessionmaker[Session]:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            bind=_get_engine(),
            autoflush=False,
            autocommit=False,
            class_=Session,
        )
    return _SessionLocal


@contextmanager
def get_session() -> Iterator[Session]:
    """
    Provide a transactional database session context manager.

    Commits on a clean exit, rolls back and re-raises on error and
    always closes the session.

    Usage:
        with get_session() as session:
            store = SqlGameStore(session)
            SettlementEngine(store).settle(2025, Phase.reg, 3)
    """
    session = _get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception as exc:
        session.rollback()
        logger.exception("db_session_rollback", error=str(exc))
        raise
    finally:
        session.close()


def dispose_engine() -> None:
    """Close pooled connections (worker shutdown)."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
        _engine = None
        _SessionLocal = None


__all__ = [
    "Base",
    "PHASE_PREFERENCE",
    "Game",
    "GameStatus",
    "Phase",
    "Pick",
    "PickStatus",
    "Team",
    "User",
    "db_models",
    "dispose_engine",
    "get_session",
]
