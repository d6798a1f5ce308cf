"""Player endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import or_

from ..db import AsyncSession, get_db
from ..db.league import Player, PlayerPosition, PlayerStatus, Team
from ..dependencies.auth import CurrentUser, require_admin
from ..services.statistics import age
from .common import PageParams, ensure_exists, get_or_404, page_params, paginate
from .schemas.common import MessageResponse, Page
from .schemas.teams import (
    EmergencyContact,
    MedicalInfo,
    PlayerDetail,
    PlayerPayload,
    PlayerSummary,
)

router = APIRouter(prefix="/players", tags=["players"])


def _summary(player: Player) -> PlayerSummary:
    return PlayerSummary(
        id=player.id,
        firstName=player.first_name,
        lastName=player.last_name,
        fullName=player.full_name,
        jerseyNumber=player.jersey_number,
        position=player.position,
        status=player.status,
        teamId=player.team_id,
        teamName=player.team.name if player.team else None,
        age=age(player.date_of_birth),
    )


def _detail(player: Player) -> PlayerDetail:
    return PlayerDetail(
        **_summary(player).model_dump(by_alias=True),
        email=player.email,
        phone=player.phone,
        dateOfBirth=player.date_of_birth,
        heightCm=player.height_cm,
        weightKg=player.weight_kg,
        experience=player.experience,
        emergencyContact=(
            EmergencyContact.model_validate(player.emergency_contact)
            if player.emergency_contact
            else None
        ),
        medicalInfo=MedicalInfo.model_validate(player.medical_info) if player.medical_info else None,
        registrationDate=player.registration_date,
    )


async def _load(session: AsyncSession, player_id: int) -> Player:
    result = await session.execute(
        select(Player)
        .options(selectinload(Player.team))
        .where(Player.id == player_id)
        .execution_options(populate_existing=True)
    )
    player = result.scalar_one_or_none()
    if player is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Player not found"
        )
    return player


async def _ensure_jersey_free(
    session: AsyncSession, team_id: int, jersey_number: int, player_id: int | None = None
) -> None:
    stmt = select(Player.id).where(
        Player.team_id == team_id, Player.jersey_number == jersey_number
    )
    if player_id is not None:
        stmt = stmt.where(Player.id != player_id)
    if (await session.execute(stmt)).first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Jersey number {jersey_number} is already taken on this team",
        )


def _apply(player: Player, payload: PlayerPayload) -> None:
    player.first_name = payload.first_name.strip()
    player.last_name = payload.last_name.strip()
    player.email = payload.email
    player.phone = payload.phone
    player.date_of_birth = payload.date_of_birth
    player.team_id = payload.team_id
    player.jersey_number = payload.jersey_number
    player.position = payload.position.value
    player.height_cm = payload.height_cm
    player.weight_kg = payload.weight_kg
    player.experience = payload.experience
    player.emergency_contact = payload.emergency_contact.model_dump() if payload.emergency_contact else None
    player.medical_info = payload.medical_info.model_dump() if payload.medical_info else None
    player.registration_date = payload.registration_date
    player.status = payload.status.value


@router.get("", response_model=Page[PlayerSummary])
async def list_players(
    team: int | None = Query(None),
    position: PlayerPosition | None = Query(None),
    status_filter: PlayerStatus | None = Query(None, alias="status"),
    search: str | None = Query(None),
    params: PageParams = Depends(page_params),
    session: AsyncSession = Depends(get_db),
) -> Page[PlayerSummary]:
    """List players ordered by last name, then first name."""
    stmt = select(Player).options(selectinload(Player.team))
    if team is not None:
        stmt = stmt.where(Player.team_id == team)
    if position is not None:
        stmt = stmt.where(Player.position == position.value)
    if status_filter is not None:
        stmt = stmt.where(Player.status == status_filter.value)
    if search:
        search_pattern = f"%{search}%"
        stmt = stmt.where(
            or_(
                Player.first_name.ilike(search_pattern),
                Player.last_name.ilike(search_pattern),
                Player.email.ilike(search_pattern),
            )
        )
    stmt = stmt.order_by(Player.last_name, Player.first_name, Player.id)

    rows, pagination = await paginate(session, stmt, params)
    return Page[PlayerSummary](data=[_summary(p) for p in rows], pagination=pagination)


@router.post("", response_model=PlayerDetail, status_code=status.HTTP_201_CREATED)
async def create_player(
    payload: PlayerPayload,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> PlayerDetail:
    await ensure_exists(session, Team, payload.team_id, "Team")
    await _ensure_jersey_free(session, payload.team_id, payload.jersey_number)
    player = Player()
    _apply(player, payload)
    session.add(player)
    await session.flush()
    return _detail(await _load(session, player.id))


@router.get("/{player_id}", response_model=PlayerDetail)
async def get_player(player_id: int, session: AsyncSession = Depends(get_db)) -> PlayerDetail:
    return _detail(await _load(session, player_id))


@router.put("/{player_id}", response_model=PlayerDetail)
async def update_player(
    player_id: int,
    payload: PlayerPayload,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> PlayerDetail:
    player = await get_or_404(session, Player, player_id, "Player")
    await ensure_exists(session, Team, payload.team_id, "Team")
    await _ensure_jersey_free(session, payload.team_id, payload.jersey_number, player_id)
    _apply(player, payload)
    await session.flush()
    return _detail(await _load(session, player_id))


@router.delete("/{player_id}", response_model=MessageResponse)
async def delete_player(
    player_id: int,
    _: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    player = await get_or_404(session, Player, player_id, "Player")
    await session.delete(player)
    return MessageResponse(message="Player deleted")
