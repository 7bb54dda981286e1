"""SQLAlchemy-backed GameStore."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Iterable, Iterator, Sequence

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from ..db import db_models
from ..db.pool import Phase, PickStatus
from ..errors import DuplicatePickError, StoreError
from ..logging import logger
from ..models import (
    GameRecord,
    GameUpsert,
    PickDetail,
    PickRecord,
    ScheduledGame,
    TeamRecord,
    UserRecord,
)
from ..utils.datetime_utils import ensure_utc
from .games import build_game_upsert, dedupe_by_natural_key

Game = db_models.Game
Pick = db_models.Pick
Team = db_models.Team
User = db_models.User


def _pending_clause():
    return or_(Pick.status.is_(None), Pick.status == PickStatus.pending.value)


def _game_record(game) -> GameRecord:
    return GameRecord(
        id=game.id,
        season=game.season,
        phase=game.phase,
        week=game.week,
        start_time=ensure_utc(game.start_time),
        home_team_id=game.home_team_id,
        away_team_id=game.away_team_id,
        home_score=game.home_score,
        away_score=game.away_score,
        status=game.status,
    )


def _team_record(team) -> TeamRecord:
    return TeamRecord(id=team.id, code=team.code, name=team.name)


def _pick_record(pick) -> PickRecord:
    return PickRecord(
        id=pick.id,
        user_id=pick.user_id,
        week=pick.week,
        team_id=pick.team_id,
        game_id=pick.game_id,
        status=pick.status,
    )


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("store_operation_failed", operation=operation, error=str(exc))
        raise StoreError(f"{operation} failed: {exc}") from exc


class SqlGameStore:
    """GameStore over one SQLAlchemy session. The caller owns commit/rollback."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # -- games ---------------------------------------------------------------
    def earliest_future_game(self, phase: Phase, now: datetime) -> GameRecord | None:
        stmt = (
            select(Game)
            .where(Game.phase == phase.value, Game.start_time > now)
            .order_by(Game.start_time.asc())
            .limit(1)
        )
        with _store_errors("earliest_future_game"):
            game = self.session.execute(stmt).scalars().first()
        return _game_record(game) if game else None

    def max_week(self, phase: Phase) -> int | None:
        stmt = select(func.max(Game.week)).where(Game.phase == phase.value)
        with _store_errors("max_week"):
            return self.session.execute(stmt).scalar()

    def final_games(
        self, phase: Phase, week: int, start: datetime, end: datetime
    ) -> list[GameRecord]:
        stmt = select(Game).where(
            Game.phase == phase.value,
            Game.week == week,
            Game.start_time >= start,
            Game.start_time < end,
            Game.home_score.isnot(None),
            Game.away_score.isnot(None),
        )
        with _store_errors("final_games"):
            games = self.session.execute(stmt).scalars().all()
        return [_game_record(game) for game in games]

    def upsert_games(self, rows: Sequence[GameUpsert]) -> int:
        unique_rows = dedupe_by_natural_key(rows)
        if not unique_rows:
            return 0
        with _store_errors("upsert_games"):
            self.session.execute(build_game_upsert(unique_rows))
            self.session.flush()
        return len(unique_rows)

    def open_game_for_team(
        self, team_id: int, week: int, phase: Phase | None, now: datetime
    ) -> GameRecord | None:
        stmt = select(Game).where(
            Game.week == week,
            or_(Game.home_team_id == team_id, Game.away_team_id == team_id),
            Game.start_time > now,
        )
        if phase is not None:
            stmt = stmt.where(Game.phase == phase.value)
        stmt = stmt.order_by(Game.start_time.asc()).limit(1)
        with _store_errors("open_game_for_team"):
            game = self.session.execute(stmt).scalars().first()
        return _game_record(game) if game else None

    def started_team_ids(self, phase: Phase, week: int, now: datetime) -> set[int]:
        stmt = select(Game.home_team_id, Game.away_team_id).where(
            Game.phase == phase.value,
            Game.week == week,
            Game.start_time <= now,
        )
        with _store_errors("started_team_ids"):
            rows = self.session.execute(stmt).all()
        locked: set[int] = set()
        for home_id, away_id in rows:
            locked.add(home_id)
            locked.add(away_id)
        return locked

    def games_for_week(
        self, week: int, start: datetime | None = None, end: datetime | None = None
    ) -> list[ScheduledGame]:
        home = aliased(Team)
        away = aliased(Team)
        stmt = (
            select(Game, home, away)
            .join(home, Game.home_team_id == home.id)
            .join(away, Game.away_team_id == away.id)
            .where(Game.week == week)
        )
        if start is not None:
            stmt = stmt.where(Game.start_time >= start)
        if end is not None:
            stmt = stmt.where(Game.start_time < end)
        stmt = stmt.order_by(Game.start_time.asc())
        with _store_errors("games_for_week"):
            rows = self.session.execute(stmt).all()
        return [
            ScheduledGame(
                id=game.id,
                phase=game.phase,
                week=game.week,
                start_time=ensure_utc(game.start_time),
                status=game.status,
                home_score=game.home_score,
                away_score=game.away_score,
                home=_team_record(home_team),
                away=_team_record(away_team),
            )
            for game, home_team, away_team in rows
        ]

    # -- teams ---------------------------------------------------------------
    def list_teams(self) -> list[TeamRecord]:
        stmt = select(Team).order_by(Team.code.asc())
        with _store_errors("list_teams"):
            teams = self.session.execute(stmt).scalars().all()
        return [_team_record(team) for team in teams]

    def team_by_code(self, code: str) -> TeamRecord | None:
        stmt = select(Team).where(Team.code == code)
        with _store_errors("team_by_code"):
            team = self.session.execute(stmt).scalars().first()
        return _team_record(team) if team else None

    # -- users ---------------------------------------------------------------
    def users_ordered_by_name(self) -> list[UserRecord]:
        stmt = select(User.id, User.name).order_by(User.name.asc(), User.id.asc())
        with _store_errors("users_ordered_by_name"):
            rows = self.session.execute(stmt).all()
        return [UserRecord(id=user_id, name=name) for user_id, name in rows]

    # -- picks ---------------------------------------------------------------
    def pending_picks_for_games(self, game_ids: Iterable[int]) -> list[PickRecord]:
        ids = list(game_ids)
        if not ids:
            return []
        stmt = select(Pick).where(Pick.game_id.in_(ids), _pending_clause())
        with _store_errors("pending_picks_for_games"):
            picks = self.session.execute(stmt).scalars().all()
        return [_pick_record(pick) for pick in picks]

    def update_pick_status(self, pick_ids: Sequence[int], status: str) -> int:
        if not pick_ids:
            return 0
        stmt = (
            update(Pick)
            .where(Pick.id.in_(list(pick_ids)), _pending_clause())
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        with _store_errors("update_pick_status"):
            result = self.session.execute(stmt)
            self.session.flush()
        return result.rowcount or 0

    def pick_details(self, user_id: int | None = None) -> list[PickDetail]:
        stmt = (
            select(
                Pick.id,
                Pick.user_id,
                Pick.week,
                Pick.status,
                Team.code,
                Team.name,
                Game.id,
                Game.start_time,
                Game.status,
            )
            .outerjoin(Team, Pick.team_id == Team.id)
            .outerjoin(Game, Pick.game_id == Game.id)
        )
        if user_id is not None:
            stmt = stmt.where(Pick.user_id == user_id)
        stmt = stmt.order_by(Pick.week.asc(), Pick.id.asc())
        with _store_errors("pick_details"):
            rows = self.session.execute(stmt).all()
        return [
            PickDetail(
                id=pick_id,
                user_id=owner_id,
                week=week,
                status=status,
                team_code=team_code,
                team_name=team_name,
                game_id=game_id,
                starts_at=ensure_utc(starts_at) if starts_at else None,
                game_status=game_status,
            )
            for (
                pick_id,
                owner_id,
                week,
                status,
                team_code,
                team_name,
                game_id,
                starts_at,
                game_status,
            ) in rows
        ]

    def pick_for_user_week(self, user_id: int, week: int) -> PickRecord | None:
        stmt = select(Pick).where(Pick.user_id == user_id, Pick.week == week).limit(1)
        with _store_errors("pick_for_user_week"):
            pick = self.session.execute(stmt).scalars().first()
        return _pick_record(pick) if pick else None

    def picked_team_ids(self, user_id: int) -> set[int]:
        stmt = select(Pick.team_id).where(Pick.user_id == user_id)
        with _store_errors("picked_team_ids"):
            return set(self.session.execute(stmt).scalars().all())

    def create_pick(
        self, user_id: int, week: int, team_id: int, game_id: int
    ) -> PickDetail:
        pick = Pick(
            user_id=user_id,
            week=week,
            team_id=team_id,
            game_id=game_id,
            status=PickStatus.pending.value,
        )
        try:
            with self.session.begin_nested():
                self.session.add(pick)
                self.session.flush()
        except IntegrityError as exc:
            if "uq_picks_user_week" in str(exc.orig):
                raise DuplicatePickError(
                    f"Pick already submitted for week {week}"
                ) from exc
            raise StoreError(f"create_pick failed: {exc}") from exc
        except SQLAlchemyError as exc:
            raise StoreError(f"create_pick failed: {exc}") from exc
        details = self.pick_details(user_id)
        return next(detail for detail in details if detail.id == pick.id)
