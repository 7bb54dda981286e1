"""Pydantic models exchanged between ingestion, settlement and the leaderboard."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..db.pool import Phase, PickStatus


class NormalizedEvent(BaseModel):
    """A provider game event flattened to the fields the pool needs."""

    provider_id: str
    week_raw: str | int | None = None
    week: int | None = None
    epoch: int = 0
    home_name: str | None = None
    away_name: str | None = None
    home_score: int | None = None
    away_score: int | None = None
    raw_status: str = ""


class GameUpsert(BaseModel):
    """One row written to the game store, keyed on (source, provider_game_id)."""

    source: str
    provider_game_id: str
    season: int
    phase: Phase
    week: int
    start_time: datetime
    home_team_id: int
    away_team_id: int
    home_score: int | None = None
    away_score: int | None = None
    status: str

    def as_row(self) -> dict:
        return self.model_dump(mode="python") | {"phase": self.phase.value}


class MappingMiss(BaseModel):
    """A provider event skipped because its id or a team could not be resolved."""

    provider_id: str | None = None
    week_raw: str | int | None = None
    week: int | None = None
    home_name: str | None = None
    away_name: str | None = None
    reason: str


class SyncResult(BaseModel):
    season: int
    phase: Phase
    week: int
    fetched: int = 0
    in_week: int = 0
    upserted: int = 0
    misses: list[MappingMiss] = Field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.misses)


class GameOutcome(BaseModel):
    """Result of one final game. A tie has no winner."""

    game_id: int
    winner_team_id: int | None = None
    tie: bool = False


class SettlementResult(BaseModel):
    season: int
    phase: Phase
    week: int
    final_games: int = 0
    wins: int = 0
    losses: int = 0
    pushes: int = 0

    @property
    def updated(self) -> int:
        return self.wins + self.losses + self.pushes


class LeaderboardPick(BaseModel):
    week: int
    team_code: str | None = None
    status: str = PickStatus.pending.value
    starts_at: datetime | None = None


class LeaderboardRow(BaseModel):
    id: int
    name: str
    eliminated: bool
    picks: list[LeaderboardPick] = Field(default_factory=list)


class Leaderboard(BaseModel):
    """Read model: every user lands in exactly one of the two groups."""

    model_config = ConfigDict(populate_by_name=True)

    still_in: list[LeaderboardRow] = Field(default_factory=list, alias="stillIn")
    eliminated: list[LeaderboardRow] = Field(default_factory=list)

    def as_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class AvailableTeams(BaseModel):
    phase: Phase
    week: int
    available_teams: list[str] = Field(default_factory=list)
