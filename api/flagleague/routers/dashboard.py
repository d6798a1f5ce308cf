"""Home dashboard summary."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from ..db import AsyncSession, get_db
from ..db.games import Game, GameStatus
from ..db.league import Player, PlayerStatus, Team, TeamStatus, Tournament, TournamentStatus
from ..db.statistics import PlayerStatistics
from .schemas.dashboard import DashboardStats, NextGame, TopPlayer

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

NEXT_GAMES_LIMIT = 3
TOP_PLAYERS_LIMIT = 3

_TOUCHDOWNS = (
    func.coalesce(PlayerStatistics.passing["touchdowns"].as_integer(), 0)
    + func.coalesce(PlayerStatistics.rushing["touchdowns"].as_integer(), 0)
    + func.coalesce(PlayerStatistics.receiving["touchdowns"].as_integer(), 0)
)


async def _count(session: AsyncSession, stmt) -> int:
    return (await session.execute(stmt)).scalar() or 0


@router.get("", response_model=DashboardStats)
async def get_dashboard(session: AsyncSession = Depends(get_db)) -> DashboardStats:
    active_tournaments = await _count(
        session,
        select(func.count(Tournament.id)).where(
            Tournament.status.in_([TournamentStatus.active.value, TournamentStatus.upcoming.value])
        ),
    )
    total_teams = await _count(
        session, select(func.count(Team.id)).where(Team.status == TeamStatus.active.value)
    )
    total_players = await _count(
        session, select(func.count(Player.id)).where(Player.status == PlayerStatus.active.value)
    )
    completed_games = await _count(
        session, select(func.count(Game.id)).where(Game.status == GameStatus.completed.value)
    )

    upcoming = await session.execute(
        select(Game)
        .where(Game.status.in_([GameStatus.scheduled.value, GameStatus.in_progress.value]))
        .options(
            selectinload(Game.home_team),
            selectinload(Game.away_team),
            selectinload(Game.division),
        )
        .order_by(Game.scheduled_date, Game.id)
        .limit(NEXT_GAMES_LIMIT)
    )
    next_games = [
        NextGame(
            id=game.id,
            homeTeam=game.home_team.name if game.home_team else "N/A",
            awayTeam=game.away_team.name if game.away_team else "N/A",
            division=game.division.name if game.division else "N/A",
            venue=game.venue_name,
            scheduledDate=game.scheduled_date,
            status=game.status,
        )
        for game in upcoming.scalars()
    ]

    touchdowns = func.coalesce(func.sum(_TOUCHDOWNS), 0).label("touchdowns")
    leaders = await session.execute(
        select(Player, touchdowns)
        .outerjoin(PlayerStatistics, PlayerStatistics.player_id == Player.id)
        .where(Player.status == PlayerStatus.active.value)
        .options(selectinload(Player.team))
        .group_by(Player.id)
        .order_by(touchdowns.desc(), Player.id)
        .limit(TOP_PLAYERS_LIMIT)
    )
    top_players = [
        TopPlayer(
            id=row.Player.id,
            name=row.Player.full_name,
            position=row.Player.position,
            team=row.Player.team.name if row.Player.team else "N/A",
            stat=int(row.touchdowns or 0),
        )
        for row in leaders.all()
    ]

    return DashboardStats(
        activeTournaments=active_tournaments,
        totalTeams=total_teams,
        totalPlayers=total_players,
        completedGames=completed_games,
        nextGames=next_games,
        topPlayers=top_players,
    )
