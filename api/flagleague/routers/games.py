"""Game schedule and scoring endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import or_

from ..db import AsyncSession, get_db
from ..db.games import Game, GameStatus, empty_side_score, empty_side_statistics
from ..db.league import Division, Team, Tournament
from ..dependencies.auth import CurrentUser, require_admin
from ..services.statistics import (
    PassingStats,
    completion_percentage,
    parse_time_of_possession,
    red_zone_efficiency,
    third_down_efficiency,
)
from .common import PageParams, ensure_exists, get_or_404, page_params, paginate
from .schemas.common import MessageResponse, Page
from .schemas.games import (
    GameCreate,
    GameDetail,
    GameEvent,
    GameScore,
    GameStatistics,
    GameSummary,
    GameUpdate,
    Official,
    SideDerived,
    Venue,
    Weather,
)
from .schemas.tournaments import TeamRef

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/games", tags=["games"])


def _team_ref(team: Team | None) -> TeamRef | None:
    if team is None:
        return None
    return TeamRef(id=team.id, name=team.name, shortName=team.short_name)


def side_derived(side: dict[str, Any]) -> SideDerived:
    """Efficiency figures for one side's stored game statistics."""
    passing = PassingStats.from_mapping(side)
    third_down = side.get("third_down_conversions") or {}
    red_zone = side.get("red_zone_efficiency") or {}
    possession = side.get("time_of_possession")
    return SideDerived(
        completionPercentage=completion_percentage(passing),
        thirdDownEfficiency=third_down_efficiency(
            int(third_down.get("made") or 0), int(third_down.get("attempted") or 0)
        ),
        redZoneEfficiency=red_zone_efficiency(
            int(red_zone.get("scores") or 0), int(red_zone.get("attempts") or 0)
        ),
        timeOfPossessionSeconds=parse_time_of_possession(possession) if possession else None,
    )


def _summary(game: Game) -> GameSummary:
    return GameSummary(
        id=game.id,
        tournamentId=game.tournament_id,
        divisionId=game.division_id,
        homeTeam=_team_ref(game.home_team),
        awayTeam=_team_ref(game.away_team),
        venue=Venue(name=game.venue_name, address=game.venue_address),
        scheduledDate=game.scheduled_date,
        status=game.status,
        week=game.week,
        round=game.round,
        score=GameScore.model_validate(game.score or {}),
    )


def _detail(game: Game) -> GameDetail:
    statistics = game.statistics or {}
    return GameDetail(
        **_summary(game).model_dump(by_alias=True),
        actualStartTime=game.actual_start_time,
        actualEndTime=game.actual_end_time,
        statistics=GameStatistics.model_validate(statistics),
        derived={side: side_derived(statistics.get(side) or {}) for side in ("home", "away")},
        officials=[Official.model_validate(o) for o in game.officials or []],
        weather=Weather.model_validate(game.weather) if game.weather else None,
        events=[GameEvent.model_validate(e) for e in game.events or []],
        notes=game.notes,
    )


async def _load(session: AsyncSession, game_id: int) -> Game:
    result = await session.execute(
        select(Game)
        .options(selectinload(Game.home_team), selectinload(Game.away_team))
        .where(Game.id == game_id)
        .execution_options(populate_existing=True)
    )
    game = result.scalar_one_or_none()
    if game is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Game not found"
        )
    return game


@router.get("", response_model=Page[GameSummary])
async def list_games(
    tournament: int | None = Query(None),
    division: int | None = Query(None),
    status_filter: GameStatus | None = Query(None, alias="status"),
    team: int | None = Query(None),
    params: PageParams = Depends(page_params),
    session: AsyncSession = Depends(get_db),
) -> Page[GameSummary]:
    """List games, newest scheduled date first."""
    stmt = select(Game).options(selectinload(Game.home_team), selectinload(Game.away_team))
    if tournament is not None:
        stmt = stmt.where(Game.tournament_id == tournament)
    if division is not None:
        stmt = stmt.where(Game.division_id == division)
    if status_filter is not None:
        stmt = stmt.where(Game.status == status_filter.value)
    if team is not None:
        stmt = stmt.where(or_(Game.home_team_id == team, Game.away_team_id == team))
    stmt = stmt.order_by(Game.scheduled_date.desc(), Game.id.desc())

    rows, pagination = await paginate(session, stmt, params)
    return Page[GameSummary](data=[_summary(g) for g in rows], pagination=pagination)


@router.post("", response_model=GameDetail, status_code=status.HTTP_201_CREATED)
async def create_game(
    payload: GameCreate,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> GameDetail:
    """Schedule a game. Scores and statistics start at zero."""
    await ensure_exists(session, Tournament, payload.tournament_id, "Tournament")
    await ensure_exists(session, Division, payload.division_id, "Division")
    await ensure_exists(session, Team, payload.home_team_id, "Team")
    await ensure_exists(session, Team, payload.away_team_id, "Team")

    game = Game(
        tournament_id=payload.tournament_id,
        division_id=payload.division_id,
        home_team_id=payload.home_team_id,
        away_team_id=payload.away_team_id,
        venue_name=payload.venue.name,
        venue_address=payload.venue.address,
        scheduled_date=payload.scheduled_date,
        status=GameStatus.scheduled.value,
        week=payload.week,
        round=payload.round,
        score={"home": empty_side_score(), "away": empty_side_score()},
        statistics={"home": empty_side_statistics(), "away": empty_side_statistics()},
        officials=[o.model_dump(mode="json") for o in payload.officials],
        weather=payload.weather.model_dump() if payload.weather else None,
        events=[],
        notes=payload.notes,
    )
    session.add(game)
    await session.flush()
    return _detail(await _load(session, game.id))


@router.get("/{game_id}", response_model=GameDetail)
async def get_game(game_id: int, session: AsyncSession = Depends(get_db)) -> GameDetail:
    return _detail(await _load(session, game_id))


@router.put("/{game_id}", response_model=GameDetail)
async def update_game(
    game_id: int,
    payload: GameUpdate,
    current_user: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> GameDetail:
    """Apply a partial update: schedule, status, quarter scores, statistics, events.

    Quarter totals are recomputed from the submitted quarters.
    """
    game = await get_or_404(session, Game, game_id, "Game")
    changes = payload.model_dump(exclude_unset=True)

    home_team_id = changes.get("home_team_id", game.home_team_id)
    away_team_id = changes.get("away_team_id", game.away_team_id)
    if home_team_id is not None and home_team_id == away_team_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A team cannot play itself",
        )
    if "home_team_id" in changes:
        await ensure_exists(session, Team, home_team_id, "Team")
        game.home_team_id = home_team_id
    if "away_team_id" in changes:
        await ensure_exists(session, Team, away_team_id, "Team")
        game.away_team_id = away_team_id

    if payload.venue is not None:
        game.venue_name = payload.venue.name
        game.venue_address = payload.venue.address
    for field in ("scheduled_date", "actual_start_time", "actual_end_time", "week", "round", "notes"):
        if field in changes:
            setattr(game, field, changes[field])
    if payload.status is not None:
        game.status = payload.status.value
    if payload.score is not None:
        game.score = payload.score.model_dump()
    if payload.statistics is not None:
        game.statistics = payload.statistics.model_dump()
    if payload.officials is not None:
        game.officials = [o.model_dump(mode="json") for o in payload.officials]
    if "weather" in changes:
        game.weather = payload.weather.model_dump() if payload.weather else None
    if payload.events is not None:
        game.events = [e.model_dump(mode="json") for e in payload.events]

    await session.flush()
    logger.info(
        "game_updated",
        extra={"game_id": game_id, "user_id": current_user.id, "fields": sorted(changes)},
    )
    return _detail(await _load(session, game_id))


@router.delete("/{game_id}", response_model=MessageResponse)
async def delete_game(
    game_id: int,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    game = await get_or_404(session, Game, game_id, "Game")
    await session.delete(game)
    return MessageResponse(message="Game deleted")
