"""Standings endpoint; tables are derived from completed games on read."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select

from ..db import AsyncSession, get_db
from ..db.games import Game, GameStatus
from ..db.league import Division, Team
from ..services.standings import StandingRow, build_standings
from .schemas.standings import SplitRecordOut, StandingEntry, StandingsResponse

router = APIRouter(prefix="/standings", tags=["standings"])


def _entry(row: StandingRow) -> StandingEntry:
    return StandingEntry(
        position=row.position or 0,
        teamId=row.team_id,
        teamName=row.team_name,
        gamesPlayed=row.games_played,
        wins=row.wins,
        losses=row.losses,
        ties=row.ties,
        pointsFor=row.points_for,
        pointsAgainst=row.points_against,
        pointsDifferential=row.points_differential,
        percentage=row.percentage,
        streak=row.streak,
        lastFive=row.last_five,
        homeRecord=SplitRecordOut(
            wins=row.home_record.wins, losses=row.home_record.losses, ties=row.home_record.ties
        ),
        awayRecord=SplitRecordOut(
            wins=row.away_record.wins, losses=row.away_record.losses, ties=row.away_record.ties
        ),
    )


@router.get("", response_model=StandingsResponse)
async def get_standings(
    division: int | None = Query(None),
    tournament: int | None = Query(None),
    session: AsyncSession = Depends(get_db),
) -> StandingsResponse:
    """Rank teams by win percentage, points differential, then points scored."""
    teams_stmt = select(Team)
    games_stmt = select(Game).where(Game.status == GameStatus.completed.value)
    if division is not None:
        teams_stmt = teams_stmt.where(Team.division_id == division)
        games_stmt = games_stmt.where(Game.division_id == division)
    if tournament is not None:
        teams_stmt = teams_stmt.join(Division, Team.division_id == Division.id).where(
            Division.tournament_id == tournament
        )
        games_stmt = games_stmt.where(Game.tournament_id == tournament)

    # Fully tied rows keep this order.
    teams = (await session.execute(teams_stmt.order_by(Team.name, Team.id))).scalars().all()
    games = (await session.execute(games_stmt.order_by(Game.scheduled_date, Game.id))).scalars().all()

    rows = build_standings(list(teams), games)
    return StandingsResponse(
        divisionId=division,
        tournamentId=tournament,
        data=[_entry(row) for row in rows],
    )
