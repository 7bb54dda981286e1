"""Typed models shared across the pool services."""

from .records import (
    GameRecord,
    PickDetail,
    PickRecord,
    ScheduledGame,
    TeamRecord,
    UserRecord,
)
from .schemas import (
    AvailableTeams,
    GameOutcome,
    GameUpsert,
    Leaderboard,
    LeaderboardPick,
    LeaderboardRow,
    MappingMiss,
    NormalizedEvent,
    SettlementResult,
    SyncResult,
)

__all__ = [
    "AvailableTeams",
    "GameOutcome",
    "GameRecord",
    "GameUpsert",
    "Leaderboard",
    "LeaderboardPick",
    "LeaderboardRow",
    "MappingMiss",
    "NormalizedEvent",
    "PickDetail",
    "PickRecord",
    "ScheduledGame",
    "SettlementResult",
    "SyncResult",
    "TeamRecord",
    "UserRecord",
]
