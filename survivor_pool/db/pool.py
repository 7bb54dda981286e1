"""Pool models: teams, users, games and weekly picks."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import text

from .base import Base


class Phase(str, Enum):
    """Competition period. Week numbers restart in every phase."""

    pre = "pre"
    reg = "reg"
    post = "post"


# Phase order used when inferring the active week
PHASE_PREFERENCE: tuple[Phase, ...] = (Phase.reg, Phase.pre, Phase.post)


class GameStatus(str, Enum):
    """Derived game status. Advisory only: scores decide finality."""

    scheduled = "scheduled"
    in_progress = "in_progress"
    final = "final"


class PickStatus(str, Enum):
    """Pick lifecycle: pending → win | loss | push, never reverted."""

    pending = "pending"
    win = "win"
    loss = "loss"
    push = "push"


class Team(Base):
    """Reference team data, looked up by code or case-insensitive name."""

    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[str] = mapped_column(String(8), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    __table_args__ = (
        Index("idx_teams_name_lower", text("lower(name)")),
    )


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    picks: Mapped[list["Pick"]] = relationship(
        "Pick", back_populates="user", cascade="all, delete-orphan"
    )


class Game(Base):
    """Scheduled matchups keyed externally by (source, provider_game_id)."""

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    season: Mapped[int] = mapped_column(Integer, nullable=False)
    phase: Mapped[str] = mapped_column(String(8), nullable=False)
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    home_team_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True
    )
    away_team_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True
    )
    home_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=GameStatus.scheduled.value, nullable=False
    )
    source: Mapped[str] = mapped_column(String(50), nullable=False)
    provider_game_id: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    home_team: Mapped[Team] = relationship("Team", foreign_keys=[home_team_id])
    away_team: Mapped[Team] = relationship("Team", foreign_keys=[away_team_id])

    __table_args__ = (
        UniqueConstraint("source", "provider_game_id", name="uq_games_source_provider_id"),
        Index("idx_games_phase_week", "phase", "week"),
        Index("idx_games_phase_start", "phase", "start_time"),
    )


class Pick(Base):
    """One team per user per week, resolved against a single game."""

    __tablename__ = "picks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    week: Mapped[int] = mapped_column(Integer, nullable=False)
    team_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False
    )
    game_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # NULL is read as pending
    status: Mapped[str | None] = mapped_column(
        String(10), default=PickStatus.pending.value, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    user: Mapped[User] = relationship("User", back_populates="picks")
    team: Mapped[Team] = relationship("Team")
    game: Mapped[Game] = relationship("Game")

    __table_args__ = (
        UniqueConstraint("user_id", "week", name="uq_picks_user_week"),
        Index("idx_picks_game_status", "game_id", "status"),
    )
