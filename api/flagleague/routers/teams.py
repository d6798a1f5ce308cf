"""Team endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import or_

from ..db import AsyncSession, get_db
from ..db.games import Game
from ..db.league import Division, Player, Team, TeamStatus
from ..dependencies.auth import CurrentUser, require_admin
from ..services.standings import counts_toward_standings, game_total, outcome_for
from ..services.statistics import streak
from .common import PageParams, ensure_exists, get_or_404, page_params, paginate
from .schemas.common import MessageResponse, Page
from .schemas.teams import (
    Coach,
    ContactInfo,
    PlayerRef,
    TeamDetail,
    TeamGameSummary,
    TeamPayload,
    TeamSummary,
)

router = APIRouter(prefix="/teams", tags=["teams"])

RECENT_GAMES_LIMIT = 10


async def _player_counts(session: AsyncSession, team_ids: list[int]) -> dict[int, int]:
    if not team_ids:
        return {}
    result = await session.execute(
        select(Player.team_id, func.count(Player.id))
        .where(Player.team_id.in_(team_ids))
        .group_by(Player.team_id)
    )
    return {team_id: count for team_id, count in result.all()}


def _summary(team: Team, players_count: int) -> TeamSummary:
    return TeamSummary(
        id=team.id,
        name=team.name,
        shortName=team.short_name,
        logo=team.logo,
        primaryColor=team.primary_color,
        secondaryColor=team.secondary_color,
        divisionId=team.division_id,
        divisionName=team.division.name if team.division else None,
        status=team.status,
        playersCount=players_count,
    )


def _game_from_team_side(game: Game, team_id: int) -> TeamGameSummary:
    is_home = game.home_team_id == team_id
    opponent = game.away_team if is_home else game.home_team
    scored = game_total(game, "home" if is_home else "away")
    allowed = game_total(game, "away" if is_home else "home")
    result = outcome_for(scored, allowed).value if counts_toward_standings(game) else "-"
    return TeamGameSummary(
        id=game.id,
        scheduledDate=game.scheduled_date,
        opponent=opponent.name if opponent else "TBD",
        isHome=is_home,
        status=game.status,
        score=f"{scored}-{allowed}",
        result=result,
    )


async def _team_games(session: AsyncSession, team_id: int) -> list[Game]:
    """All games involving the team, oldest first."""
    result = await session.execute(
        select(Game)
        .where(or_(Game.home_team_id == team_id, Game.away_team_id == team_id))
        .options(selectinload(Game.home_team), selectinload(Game.away_team))
        .order_by(Game.scheduled_date, Game.id)
    )
    return list(result.scalars().all())


def _apply(team: Team, payload: TeamPayload) -> None:
    team.name = payload.name.strip()
    team.short_name = payload.short_name
    team.logo = payload.logo
    team.primary_color = payload.primary_color
    team.secondary_color = payload.secondary_color
    team.division_id = payload.division_id
    team.coach = payload.coach.model_dump() if payload.coach else None
    team.contact = payload.contact.model_dump()
    team.registration_date = payload.registration_date
    team.status = payload.status.value


async def _load(session: AsyncSession, team_id: int) -> Team:
    result = await session.execute(
        select(Team)
        .options(selectinload(Team.division), selectinload(Team.players))
        .where(Team.id == team_id)
        .execution_options(populate_existing=True)
    )
    team = result.scalar_one_or_none()
    if team is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Team not found"
        )
    return team


async def _detail(session: AsyncSession, team: Team) -> TeamDetail:
    games = await _team_games(session, team.id)
    completed = [game for game in games if counts_toward_standings(game)]
    outcomes = [
        outcome_for(
            game_total(game, "home" if game.home_team_id == team.id else "away"),
            game_total(game, "away" if game.home_team_id == team.id else "home"),
        )
        for game in completed
    ]
    recent = [_game_from_team_side(game, team.id) for game in reversed(games)]

    players = sorted(team.players, key=lambda p: (p.jersey_number, p.id))
    return TeamDetail(
        **_summary(team, len(players)).model_dump(by_alias=True),
        coach=Coach.model_validate(team.coach) if team.coach else None,
        contact=ContactInfo.model_validate(team.contact or {}),
        registrationDate=team.registration_date,
        players=[
            PlayerRef(
                id=p.id,
                fullName=p.full_name,
                jerseyNumber=p.jersey_number,
                position=p.position,
            )
            for p in players
        ],
        recentGames=recent[:RECENT_GAMES_LIMIT],
        streak=streak(outcomes),
    )


@router.get("", response_model=Page[TeamSummary])
async def list_teams(
    division: int | None = Query(None),
    status_filter: TeamStatus | None = Query(None, alias="status"),
    search: str | None = Query(None),
    params: PageParams = Depends(page_params),
    session: AsyncSession = Depends(get_db),
) -> Page[TeamSummary]:
    """List teams with optional division/status filter and name search."""
    stmt = select(Team).options(selectinload(Team.division))
    if division is not None:
        stmt = stmt.where(Team.division_id == division)
    if status_filter is not None:
        stmt = stmt.where(Team.status == status_filter.value)
    if search:
        search_pattern = f"%{search}%"
        stmt = stmt.where(
            or_(
                Team.name.ilike(search_pattern),
                Team.short_name.ilike(search_pattern),
            )
        )
    stmt = stmt.order_by(Team.name, Team.id)

    rows, pagination = await paginate(session, stmt, params)
    counts = await _player_counts(session, [t.id for t in rows])
    return Page[TeamSummary](
        data=[_summary(t, counts.get(t.id, 0)) for t in rows],
        pagination=pagination,
    )


@router.post("", response_model=TeamDetail, status_code=status.HTTP_201_CREATED)
async def create_team(
    payload: TeamPayload,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> TeamDetail:
    await ensure_exists(session, Division, payload.division_id, "Division")
    team = Team()
    _apply(team, payload)
    session.add(team)
    await session.flush()
    return await _detail(session, await _load(session, team.id))


@router.get("/{team_id}", response_model=TeamDetail)
async def get_team(team_id: int, session: AsyncSession = Depends(get_db)) -> TeamDetail:
    """Get team detail with roster, recent games and current streak."""
    return await _detail(session, await _load(session, team_id))


@router.put("/{team_id}", response_model=TeamDetail)
async def update_team(
    team_id: int,
    payload: TeamPayload,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> TeamDetail:
    team = await get_or_404(session, Team, team_id, "Team")
    await ensure_exists(session, Division, payload.division_id, "Division")
    _apply(team, payload)
    await session.flush()
    return await _detail(session, await _load(session, team_id))


@router.delete("/{team_id}", response_model=MessageResponse)
async def delete_team(
    team_id: int,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    team = await get_or_404(session, Team, team_id, "Team")
    await session.delete(team)
    return MessageResponse(message="Team deleted")
