"""ResultIngester: pull a season from the provider and upsert one (phase, week).

Steps:
1. Fetch every event of the season (the provider has no week filter).
2. Flatten each event through the ordered field extractors.
3. Keep events whose week token's leading integer equals the requested week.
4. Map home/away display names to team ids (case-insensitive exact match).
   Events missing a provider id or a team, or with an unusable kickoff
   timestamp, are skipped and reported.
5. Derive a status label; two scores mean final even if the text disagrees.
6. Upsert the batch keyed on (source, provider id).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Protocol

from ..db.pool import Phase
from ..errors import ConfigurationError, ValidationError
from ..logging import logger
from ..models import GameUpsert, MappingMiss, NormalizedEvent, SyncResult
from ..normalization import derive_status, normalize_event, normalize_team_name
from ..persistence import GameStore
from ..utils.datetime_utils import epoch_to_utc, now_utc
from ..utils.parsing import parse_phase


class EventSource(Protocol):
    @property
    def source_name(self) -> str: ...

    def fetch_season_events(self, season: int) -> list[dict[str, Any]]: ...


class ResultIngester:
    def __init__(
        self,
        store: GameStore | None,
        provider: EventSource | None,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self.store = store
        self.provider = provider
        self.clock = clock

    def sync(self, season: int, phase: Phase | str, week: int) -> int:
        """Sync one (phase, week) and return the number of rows upserted."""
        return self.sync_week(season, phase, week).upserted

    def sync_week(self, season: int, phase: Phase | str, week: int) -> SyncResult:
        phase = parse_phase(phase)
        if week < 1:
            raise ValidationError(f"week must be a positive integer. Got: {week}")
        if self.store is None:
            raise ConfigurationError("A game store is required to sync games.")
        if self.provider is None:
            raise ConfigurationError("A score provider is required to sync games.")

        label = f"{phase.value.upper()}{week}"
        logger.info("sync_started", season=season, week_label=label)

        events = self.provider.fetch_season_events(season)
        normalized = [normalize_event(event) for event in events]
        week_events = [event for event in normalized if event.week == week]

        result = SyncResult(
            season=season,
            phase=phase,
            week=week,
            fetched=len(events),
            in_week=len(week_events),
        )
        if not week_events:
            logger.info("sync_no_events_for_week", season=season, week_label=label, fetched=len(events))
            return result

        name_to_id = {
            normalize_team_name(team.name): team.id for team in self.store.list_teams()
        }
        now = self.clock()
        rows: list[GameUpsert] = []
        for event in week_events:
            home_id = name_to_id.get(normalize_team_name(event.home_name))
            away_id = name_to_id.get(normalize_team_name(event.away_name))
            miss_reason = _miss_reason(event, home_id, away_id)
            kickoff = None
            if not miss_reason:
                try:
                    kickoff = epoch_to_utc(event.epoch)
                except ValidationError:
                    miss_reason = "invalid_kickoff"
            if miss_reason:
                miss = MappingMiss(
                    provider_id=event.provider_id or None,
                    week_raw=event.week_raw,
                    week=event.week,
                    home_name=event.home_name,
                    away_name=event.away_name,
                    reason=miss_reason,
                )
                result.misses.append(miss)
                logger.warning("sync_event_skipped", **miss.model_dump())
                continue

            rows.append(
                GameUpsert(
                    source=self.provider.source_name,
                    provider_game_id=event.provider_id,
                    season=season,
                    phase=phase,
                    week=week,
                    start_time=kickoff or now,
                    home_team_id=home_id,
                    away_team_id=away_id,
                    home_score=event.home_score,
                    away_score=event.away_score,
                    status=derive_status(
                        event.raw_status,
                        event.epoch,
                        event.home_score,
                        event.away_score,
                        now=now,
                    ),
                )
            )

        if not rows:
            logger.info(
                "sync_no_mappable_rows",
                season=season,
                week_label=label,
                skipped=result.skipped,
            )
            return result

        result.upserted = self.store.upsert_games(rows)
        logger.info(
            "sync_completed",
            season=season,
            week_label=label,
            fetched=result.fetched,
            in_week=result.in_week,
            upserted=result.upserted,
            skipped=result.skipped,
        )
        return result


def _miss_reason(event: NormalizedEvent, home_id: int | None, away_id: int | None) -> str | None:
    if not event.provider_id:
        return "missing_provider_id"
    if home_id is None and away_id is None:
        return "unknown_teams"
    if home_id is None:
        return "unknown_home_team"
    if away_id is None:
        return "unknown_away_team"
    return None
