"""Season statistics endpoints for players and teams.

Sorting accepts only the keys of ``PlayerStatSort`` / ``TeamStatSort``;
each key maps to a fixed SQL expression below.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ..db import AsyncSession, get_db
from ..db.league import Division, Player, Team, Tournament
from ..db.statistics import PlayerStatistics, TeamStatistics
from ..dependencies.auth import CurrentUser, require_admin
from ..services.statistics import (
    PassingStats,
    ReceivingStats,
    RushingStats,
    TeamRecord,
    average_per_game,
    completion_percentage,
    kicking_accuracy,
    passer_rating,
    punt_average,
    receiving_average,
    red_zone_efficiency,
    rushing_average,
    sum_group,
    third_down_efficiency,
    turnover_differential,
)
from .common import PageParams, ensure_exists, page_params, paginate
from .schemas.common import Page
from .schemas.statistics import (
    DefensiveGroup,
    DefensiveTeamGroup,
    KickingGroup,
    OffensiveTeamGroup,
    PassingGroup,
    PlayerDerived,
    PlayerRefOut,
    PlayerStatisticsOut,
    PlayerStatisticsPayload,
    PlayerStatSort,
    PuntingGroup,
    ReceivingGroup,
    ReturningGroup,
    RushingGroup,
    SortOrder,
    TeamDerived,
    TeamStatisticsOut,
    TeamStatisticsPayload,
    TeamStatSort,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/statistics", tags=["statistics"])

PLAYER_SORT_COLUMNS: dict[PlayerStatSort, Any] = {
    PlayerStatSort.passing_touchdowns: PlayerStatistics.passing["touchdowns"].as_integer(),
    PlayerStatSort.passing_yards: PlayerStatistics.passing["yards"].as_integer(),
    PlayerStatSort.passing_completions: PlayerStatistics.passing["completions"].as_integer(),
    PlayerStatSort.rushing_touchdowns: PlayerStatistics.rushing["touchdowns"].as_integer(),
    PlayerStatSort.rushing_yards: PlayerStatistics.rushing["yards"].as_integer(),
    PlayerStatSort.receiving_touchdowns: PlayerStatistics.receiving["touchdowns"].as_integer(),
    PlayerStatSort.receiving_yards: PlayerStatistics.receiving["yards"].as_integer(),
    PlayerStatSort.receiving_receptions: PlayerStatistics.receiving["receptions"].as_integer(),
    PlayerStatSort.defensive_tackles: PlayerStatistics.defensive["tackles"].as_integer(),
    PlayerStatSort.defensive_sacks: PlayerStatistics.defensive["sacks"].as_integer(),
    PlayerStatSort.defensive_interceptions: PlayerStatistics.defensive["interceptions"].as_integer(),
    PlayerStatSort.games_played: PlayerStatistics.games_played,
}

TEAM_SORT_COLUMNS: dict[TeamStatSort, Any] = {
    TeamStatSort.wins: TeamStatistics.wins,
    TeamStatSort.losses: TeamStatistics.losses,
    TeamStatSort.ties: TeamStatistics.ties,
    TeamStatSort.points_for: TeamStatistics.points_for,
    TeamStatSort.points_against: TeamStatistics.points_against,
    TeamStatSort.points_differential: TeamStatistics.points_for - TeamStatistics.points_against,
    TeamStatSort.turnovers: TeamStatistics.turnovers,
    TeamStatSort.turnover_differential: TeamStatistics.forced_turnovers - TeamStatistics.turnovers,
    TeamStatSort.penalties: TeamStatistics.penalties,
    TeamStatSort.total_yards: TeamStatistics.offensive["total_yards"].as_integer(),
}


def _ordered(stmt: Any, column: Any, order: SortOrder, id_column: Any) -> Any:
    if order is SortOrder.asc:
        return stmt.order_by(column.asc().nulls_first(), id_column.asc())
    return stmt.order_by(column.desc().nulls_last(), id_column.asc())


def player_derived(stats: PlayerStatistics) -> PlayerDerived:
    passing = PassingStats.from_mapping(stats.passing)
    kicking = stats.kicking or {}
    punting = stats.punting or {}
    return PlayerDerived(
        passerRating=passer_rating(passing),
        completionPercentage=completion_percentage(passing),
        rushingAverage=rushing_average(RushingStats.from_mapping(stats.rushing)),
        receivingAverage=receiving_average(ReceivingStats.from_mapping(stats.receiving)),
        kickingAccuracy=kicking_accuracy(
            int(kicking.get("field_goals_made") or 0),
            int(kicking.get("field_goal_attempts") or 0),
        ),
        puntAverage=punt_average(int(punting.get("yards") or 0), int(punting.get("punts") or 0)),
        totalTouchdowns=sum_group([stats.passing, stats.rushing, stats.receiving], "touchdowns"),
    )


def team_derived(stats: TeamStatistics) -> TeamDerived:
    record = TeamRecord(
        wins=stats.wins,
        losses=stats.losses,
        ties=stats.ties,
        points_for=stats.points_for,
        points_against=stats.points_against,
    )
    offensive = stats.offensive or {}
    third_down = offensive.get("third_down_conversions") or {}
    red_zone = offensive.get("red_zone_efficiency") or {}
    games_played = record.games_played
    return TeamDerived(
        gamesPlayed=games_played,
        winPercentage=record.percentage,
        pointsDifferential=record.points_differential,
        turnoverDifferential=turnover_differential(stats.forced_turnovers, stats.turnovers),
        thirdDownEfficiency=third_down_efficiency(
            int(third_down.get("made") or 0), int(third_down.get("attempted") or 0)
        ),
        redZoneEfficiency=red_zone_efficiency(
            int(red_zone.get("scores") or 0), int(red_zone.get("attempts") or 0)
        ),
        yardsPerGame=average_per_game(int(offensive.get("total_yards") or 0), games_played),
        pointsPerGame=average_per_game(record.points_for, games_played),
        pointsAllowedPerGame=average_per_game(record.points_against, games_played),
    )


def _player_out(stats: PlayerStatistics) -> PlayerStatisticsOut:
    player = stats.player
    return PlayerStatisticsOut(
        id=stats.id,
        player=PlayerRefOut(
            id=player.id,
            fullName=player.full_name,
            jerseyNumber=player.jersey_number,
            position=player.position,
            teamId=player.team_id,
            teamName=player.team.name if player.team else None,
        ),
        tournamentId=stats.tournament_id,
        divisionId=stats.division_id,
        passing=PassingGroup.model_validate(stats.passing or {}),
        rushing=RushingGroup.model_validate(stats.rushing or {}),
        receiving=ReceivingGroup.model_validate(stats.receiving or {}),
        defensive=DefensiveGroup.model_validate(stats.defensive or {}),
        kicking=KickingGroup.model_validate(stats.kicking or {}),
        punting=PuntingGroup.model_validate(stats.punting or {}),
        returning=ReturningGroup.model_validate(stats.returning or {}),
        gamesPlayed=stats.games_played,
        gamesStarted=stats.games_started,
        derived=player_derived(stats),
    )


def _team_out(stats: TeamStatistics) -> TeamStatisticsOut:
    return TeamStatisticsOut(
        id=stats.id,
        teamId=stats.team_id,
        teamName=stats.team.name,
        tournamentId=stats.tournament_id,
        divisionId=stats.division_id,
        wins=stats.wins,
        losses=stats.losses,
        ties=stats.ties,
        pointsFor=stats.points_for,
        pointsAgainst=stats.points_against,
        turnovers=stats.turnovers,
        forcedTurnovers=stats.forced_turnovers,
        penalties=stats.penalties,
        penaltyYards=stats.penalty_yards,
        offensive=OffensiveTeamGroup.model_validate(stats.offensive or {}),
        defensive=DefensiveTeamGroup.model_validate(stats.defensive or {}),
        derived=team_derived(stats),
    )


async def _ensure_scope(session: AsyncSession, tournament_id: int, division_id: int) -> None:
    await ensure_exists(session, Tournament, tournament_id, "Tournament")
    await ensure_exists(session, Division, division_id, "Division")


@router.get("/players", response_model=Page[PlayerStatisticsOut])
async def list_player_statistics(
    tournament: int | None = Query(None),
    division: int | None = Query(None),
    player: int | None = Query(None),
    sort_by: PlayerStatSort = Query(PlayerStatSort.passing_touchdowns, alias="sortBy"),
    order: SortOrder = Query(SortOrder.desc),
    params: PageParams = Depends(page_params),
    session: AsyncSession = Depends(get_db),
) -> Page[PlayerStatisticsOut]:
    stmt = select(PlayerStatistics).options(
        selectinload(PlayerStatistics.player).selectinload(Player.team)
    )
    if tournament is not None:
        stmt = stmt.where(PlayerStatistics.tournament_id == tournament)
    if division is not None:
        stmt = stmt.where(PlayerStatistics.division_id == division)
    if player is not None:
        stmt = stmt.where(PlayerStatistics.player_id == player)
    stmt = _ordered(stmt, PLAYER_SORT_COLUMNS[sort_by], order, PlayerStatistics.id)

    rows, pagination = await paginate(session, stmt, params)
    return Page[PlayerStatisticsOut](data=[_player_out(s) for s in rows], pagination=pagination)


@router.post("/players", response_model=PlayerStatisticsOut)
async def upsert_player_statistics(
    payload: PlayerStatisticsPayload,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> PlayerStatisticsOut:
    """Create or replace the statistics row for (player, tournament, division)."""
    await ensure_exists(session, Player, payload.player_id, "Player")
    await _ensure_scope(session, payload.tournament_id, payload.division_id)

    result = await session.execute(
        select(PlayerStatistics).where(
            PlayerStatistics.player_id == payload.player_id,
            PlayerStatistics.tournament_id == payload.tournament_id,
            PlayerStatistics.division_id == payload.division_id,
        )
    )
    stats = result.scalar_one_or_none()
    if stats is None:
        stats = PlayerStatistics(
            player_id=payload.player_id,
            tournament_id=payload.tournament_id,
            division_id=payload.division_id,
        )
        session.add(stats)

    for group in ("passing", "rushing", "receiving", "defensive", "kicking", "punting", "returning"):
        setattr(stats, group, getattr(payload, group).model_dump())
    stats.games_played = payload.games_played
    stats.games_started = payload.games_started
    await session.flush()

    loaded = await session.execute(
        select(PlayerStatistics)
        .options(selectinload(PlayerStatistics.player).selectinload(Player.team))
        .where(PlayerStatistics.id == stats.id)
        .execution_options(populate_existing=True)
    )
    return _player_out(loaded.scalar_one())


@router.get("/teams", response_model=Page[TeamStatisticsOut])
async def list_team_statistics(
    tournament: int | None = Query(None),
    division: int | None = Query(None),
    team: int | None = Query(None),
    sort_by: TeamStatSort = Query(TeamStatSort.wins, alias="sortBy"),
    order: SortOrder = Query(SortOrder.desc),
    params: PageParams = Depends(page_params),
    session: AsyncSession = Depends(get_db),
) -> Page[TeamStatisticsOut]:
    stmt = select(TeamStatistics).options(selectinload(TeamStatistics.team))
    if tournament is not None:
        stmt = stmt.where(TeamStatistics.tournament_id == tournament)
    if division is not None:
        stmt = stmt.where(TeamStatistics.division_id == division)
    if team is not None:
        stmt = stmt.where(TeamStatistics.team_id == team)
    stmt = _ordered(stmt, TEAM_SORT_COLUMNS[sort_by], order, TeamStatistics.id)

    rows, pagination = await paginate(session, stmt, params)
    return Page[TeamStatisticsOut](data=[_team_out(s) for s in rows], pagination=pagination)


@router.post("/teams", response_model=TeamStatisticsOut)
async def upsert_team_statistics(
    payload: TeamStatisticsPayload,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> TeamStatisticsOut:
    await ensure_exists(session, Team, payload.team_id, "Team")
    await _ensure_scope(session, payload.tournament_id, payload.division_id)

    result = await session.execute(
        select(TeamStatistics).where(
            TeamStatistics.team_id == payload.team_id,
            TeamStatistics.tournament_id == payload.tournament_id,
            TeamStatistics.division_id == payload.division_id,
        )
    )
    stats = result.scalar_one_or_none()
    if stats is None:
        stats = TeamStatistics(
            team_id=payload.team_id,
            tournament_id=payload.tournament_id,
            division_id=payload.division_id,
        )
        session.add(stats)

    for field in (
        "wins",
        "losses",
        "ties",
        "points_for",
        "points_against",
        "turnovers",
        "forced_turnovers",
        "penalties",
        "penalty_yards",
    ):
        setattr(stats, field, getattr(payload, field))
    stats.offensive = payload.offensive.model_dump()
    stats.defensive = payload.defensive.model_dump()
    await session.flush()

    loaded = await session.execute(
        select(TeamStatistics)
        .options(selectinload(TeamStatistics.team))
        .where(TeamStatistics.id == stats.id)
        .execution_options(populate_existing=True)
    )
    logger.info("team_statistics_saved", extra={"team_id": payload.team_id})
    return _team_out(loaded.scalar_one())
