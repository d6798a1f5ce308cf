"""Tournament endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select, update
from sqlalchemy.orm import selectinload

from ..db import AsyncSession, get_db
from ..db.league import Division, Tournament, TournamentStatus
from ..dependencies.auth import CurrentUser, require_admin
from .common import PageParams, get_or_404, page_params, paginate
from .schemas.common import MessageResponse, Page
from .schemas.tournaments import (
    DivisionRef,
    Prize,
    TournamentDetail,
    TournamentPayload,
    TournamentRules,
    TournamentSummary,
)

router = APIRouter(prefix="/tournaments", tags=["tournaments"])


def _summary(tournament: Tournament) -> TournamentSummary:
    return TournamentSummary(
        id=tournament.id,
        name=tournament.name,
        season=tournament.season,
        year=tournament.year,
        startDate=tournament.start_date,
        endDate=tournament.end_date,
        status=tournament.status,
        format=tournament.format,
    )


def _detail(tournament: Tournament) -> TournamentDetail:
    return TournamentDetail(
        **_summary(tournament).model_dump(by_alias=True),
        description=tournament.description,
        registrationDeadline=tournament.registration_deadline,
        rules=TournamentRules.model_validate(tournament.rules) if tournament.rules else None,
        prizes=[Prize.model_validate(prize) for prize in tournament.prizes or []],
        divisions=[
            DivisionRef(id=division.id, name=division.name, category=division.category)
            for division in sorted(tournament.divisions, key=lambda d: d.name)
        ],
    )


async def _load(session: AsyncSession, tournament_id: int) -> Tournament:
    result = await session.execute(
        select(Tournament)
        .options(selectinload(Tournament.divisions))
        .where(Tournament.id == tournament_id)
        .execution_options(populate_existing=True)
    )
    tournament = result.scalar_one_or_none()
    if tournament is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Tournament not found"
        )
    return tournament


async def _attach_divisions(
    session: AsyncSession, tournament_id: int, division_ids: list[int]
) -> None:
    """Point exactly ``division_ids`` at the tournament; 400 if any is missing."""
    wanted = set(division_ids)
    if wanted:
        found = await session.execute(select(Division.id).where(Division.id.in_(wanted)))
        missing = wanted - set(found.scalars().all())
        if missing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Divisions do not exist: {sorted(missing)}",
            )

    detach = update(Division).where(Division.tournament_id == tournament_id)
    if wanted:
        detach = detach.where(Division.id.not_in(wanted))
    await session.execute(detach.values(tournament_id=None))
    if wanted:
        await session.execute(
            update(Division).where(Division.id.in_(wanted)).values(tournament_id=tournament_id)
        )


def _apply(tournament: Tournament, payload: TournamentPayload) -> None:
    tournament.name = payload.name.strip()
    tournament.description = payload.description
    tournament.season = payload.season
    tournament.year = payload.year
    tournament.start_date = payload.start_date
    tournament.end_date = payload.end_date
    tournament.registration_deadline = payload.registration_deadline
    tournament.status = payload.status.value
    tournament.format = payload.format.value
    tournament.rules = payload.rules.model_dump() if payload.rules else None
    tournament.prizes = [prize.model_dump() for prize in payload.prizes]


@router.get("", response_model=Page[TournamentSummary])
async def list_tournaments(
    status_filter: TournamentStatus | None = Query(None, alias="status"),
    year: int | None = Query(None),
    params: PageParams = Depends(page_params),
    session: AsyncSession = Depends(get_db),
) -> Page[TournamentSummary]:
    """List tournaments, most recent start date first."""
    stmt = select(Tournament)
    if status_filter is not None:
        stmt = stmt.where(Tournament.status == status_filter.value)
    if year is not None:
        stmt = stmt.where(Tournament.year == year)
    stmt = stmt.order_by(Tournament.start_date.desc(), Tournament.id.desc())

    rows, pagination = await paginate(session, stmt, params)
    return Page[TournamentSummary](data=[_summary(t) for t in rows], pagination=pagination)


@router.post("", response_model=TournamentDetail, status_code=status.HTTP_201_CREATED)
async def create_tournament(
    payload: TournamentPayload,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> TournamentDetail:
    tournament = Tournament()
    _apply(tournament, payload)
    session.add(tournament)
    await session.flush()
    if payload.division_ids is not None:
        await _attach_divisions(session, tournament.id, payload.division_ids)
    return _detail(await _load(session, tournament.id))


@router.get("/{tournament_id}", response_model=TournamentDetail)
async def get_tournament(
    tournament_id: int, session: AsyncSession = Depends(get_db)
) -> TournamentDetail:
    return _detail(await _load(session, tournament_id))


@router.put("/{tournament_id}", response_model=TournamentDetail)
async def update_tournament(
    tournament_id: int,
    payload: TournamentPayload,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> TournamentDetail:
    tournament = await get_or_404(session, Tournament, tournament_id, "Tournament")
    _apply(tournament, payload)
    await session.flush()
    if payload.division_ids is not None:
        await _attach_divisions(session, tournament.id, payload.division_ids)
    return _detail(await _load(session, tournament_id))


@router.delete("/{tournament_id}", response_model=MessageResponse)
async def delete_tournament(
    tournament_id: int,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    tournament = await get_or_404(session, Tournament, tournament_id, "Tournament")
    await session.delete(tournament)
    return MessageResponse(message="Tournament deleted")
