"""Pool services. Each one takes a GameStore at construction."""

from .ingestion import EventSource, ResultIngester
from .leaderboard import LeaderboardAggregator, is_eliminated
from .phase_week import PhaseWeekResolver
from .picks import PickService
from .schedule import ScheduleService
from .settlement import SettlementEngine

__all__ = [
    "EventSource",
    "LeaderboardAggregator",
    "PhaseWeekResolver",
    "PickService",
    "ResultIngester",
    "ScheduleService",
    "SettlementEngine",
    "is_eliminated",
]
