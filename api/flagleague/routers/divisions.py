"""Division endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from ..db import AsyncSession, get_db
from ..db.league import Division, DivisionCategory, Team, Tournament
from ..dependencies.auth import CurrentUser, require_admin
from .common import PageParams, ensure_exists, get_or_404, page_params, paginate
from .schemas.common import MessageResponse, Page
from .schemas.tournaments import DivisionDetail, DivisionPayload, DivisionSummary, TeamRef

router = APIRouter(prefix="/divisions", tags=["divisions"])


async def _team_counts(session: AsyncSession, division_ids: list[int]) -> dict[int, int]:
    if not division_ids:
        return {}
    result = await session.execute(
        select(Team.division_id, func.count(Team.id))
        .where(Team.division_id.in_(division_ids))
        .group_by(Team.division_id)
    )
    return {division_id: count for division_id, count in result.all()}


def _summary(division: Division, teams_count: int) -> DivisionSummary:
    return DivisionSummary(
        id=division.id,
        name=division.name,
        category=division.category,
        ageGroup=division.age_group,
        tournamentId=division.tournament_id,
        tournamentName=division.tournament.name if division.tournament else None,
        maxTeams=division.max_teams,
        teamsCount=teams_count,
    )


async def _load(session: AsyncSession, division_id: int) -> Division:
    result = await session.execute(
        select(Division)
        .options(selectinload(Division.tournament), selectinload(Division.teams))
        .where(Division.id == division_id)
        .execution_options(populate_existing=True)
    )
    division = result.scalar_one_or_none()
    if division is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Division not found"
        )
    return division


def _detail(division: Division) -> DivisionDetail:
    teams = sorted(division.teams, key=lambda t: t.name)
    return DivisionDetail(
        **_summary(division, len(teams)).model_dump(by_alias=True),
        teams=[TeamRef(id=t.id, name=t.name, shortName=t.short_name) for t in teams],
    )


def _apply(division: Division, payload: DivisionPayload) -> None:
    division.name = payload.name.strip()
    division.category = payload.category.value
    division.age_group = payload.age_group
    division.tournament_id = payload.tournament_id
    division.max_teams = payload.max_teams


@router.get("", response_model=Page[DivisionSummary])
async def list_divisions(
    tournament: int | None = Query(None),
    category: DivisionCategory | None = Query(None),
    params: PageParams = Depends(page_params),
    session: AsyncSession = Depends(get_db),
) -> Page[DivisionSummary]:
    stmt = select(Division).options(selectinload(Division.tournament))
    if tournament is not None:
        stmt = stmt.where(Division.tournament_id == tournament)
    if category is not None:
        stmt = stmt.where(Division.category == category.value)
    stmt = stmt.order_by(Division.name, Division.id)

    rows, pagination = await paginate(session, stmt, params)
    counts = await _team_counts(session, [d.id for d in rows])
    return Page[DivisionSummary](
        data=[_summary(d, counts.get(d.id, 0)) for d in rows],
        pagination=pagination,
    )


@router.post("", response_model=DivisionDetail, status_code=status.HTTP_201_CREATED)
async def create_division(
    payload: DivisionPayload,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> DivisionDetail:
    await ensure_exists(session, Tournament, payload.tournament_id, "Tournament")
    division = Division()
    _apply(division, payload)
    session.add(division)
    await session.flush()
    return _detail(await _load(session, division.id))


@router.get("/{division_id}", response_model=DivisionDetail)
async def get_division(
    division_id: int, session: AsyncSession = Depends(get_db)
) -> DivisionDetail:
    return _detail(await _load(session, division_id))


@router.put("/{division_id}", response_model=DivisionDetail)
async def update_division(
    division_id: int,
    payload: DivisionPayload,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> DivisionDetail:
    division = await get_or_404(session, Division, division_id, "Division")
    await ensure_exists(session, Tournament, payload.tournament_id, "Tournament")
    _apply(division, payload)
    await session.flush()
    return _detail(await _load(session, division_id))


@router.delete("/{division_id}", response_model=MessageResponse)
async def delete_division(
    division_id: int,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    division = await get_or_404(session, Division, division_id, "Division")
    await session.delete(division)
    return MessageResponse(message="Division deleted")
