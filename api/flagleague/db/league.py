"""League structure models: tournaments, divisions, teams, players."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, TYPE_CHECKING

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import text

from .base import Base

if TYPE_CHECKING:
    from .games import Game


class TournamentStatus(str, Enum):
    upcoming = "upcoming"
    active = "active"
    completed = "completed"
    cancelled = "cancelled"


class TournamentFormat(str, Enum):
    league = "league"
    playoff = "playoff"
    tournament = "tournament"


class DivisionCategory(str, Enum):
    masculino = "masculino"
    femenino = "femenino"
    mixto = "mixto"


class TeamStatus(str, Enum):
    active = "active"
    inactive = "inactive"
    suspended = "suspended"


class PlayerStatus(str, Enum):
    active = "active"
    inactive = "inactive"
    injured = "injured"
    suspended = "suspended"


class PlayerPosition(str, Enum):
    """Flag football positions, offense then defense then specialists."""

    QB = "QB"
    WR = "WR"
    RB = "RB"
    C = "C"
    G = "G"
    T = "T"
    DE = "DE"
    DT = "DT"
    RS = "RS"
    LB = "LB"
    CB = "CB"
    FS = "FS"
    SS = "SS"
    K = "K"
    P = "P"
    FLEX = "FLEX"


class Tournament(Base):
    """A competition run over a season, grouping one or more divisions."""

    __tablename__ = "tournaments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    season: Mapped[str] = mapped_column(String(50), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    registration_deadline: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=TournamentStatus.upcoming.value, nullable=False, index=True)
    format: Mapped[str] = mapped_column(String(20), default=TournamentFormat.league.value, nullable=False)
    # Game duration, quarters, timeouts, roster sizes and scoring values.
    rules: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    prizes: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, server_default=text("'[]'::jsonb"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    divisions: Mapped[list["Division"]] = relationship("Division", back_populates="tournament")
    games: Mapped[list["Game"]] = relationship("Game", back_populates="tournament", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("name", "year", name="uq_tournament_name_year"),
    )


class Division(Base):
    __tablename__ = "divisions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    age_group: Mapped[str | None] = mapped_column(String(50), nullable=True)
    tournament_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("tournaments.id", ondelete="SET NULL"), nullable=True, index=True)
    max_teams: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    tournament: Mapped[Tournament | None] = relationship("Tournament", back_populates="divisions")
    teams: Mapped[list["Team"]] = relationship("Team", back_populates="division", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_divisions_name_category", "name", "category"),
    )


class Team(Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    division_id: Mapped[int] = mapped_column(Integer, ForeignKey("divisions.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    short_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    logo: Mapped[str | None] = mapped_column(String(500), nullable=True)
    primary_color: Mapped[str] = mapped_column(String(20), nullable=False)
    secondary_color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    coach: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    contact: Mapped[dict[str, Any]] = mapped_column(JSONB, server_default=text("'{}'::jsonb"), nullable=False)
    registration_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=TeamStatus.active.value, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    division: Mapped[Division] = relationship("Division", back_populates="teams")
    players: Mapped[list["Player"]] = relationship("Player", back_populates="team", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("division_id", "name", name="uq_team_division_name"),
    )


class Player(Base):
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    team_id: Mapped[int] = mapped_column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    jersey_number: Mapped[int] = mapped_column(Integer, nullable=False)
    position: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    height_cm: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight_kg: Mapped[int | None] = mapped_column(Integer, nullable=True)
    experience: Mapped[str | None] = mapped_column(String(200), nullable=True)
    emergency_contact: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    medical_info: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    registration_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=PlayerStatus.active.value, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    team: Mapped[Team] = relationship("Team", back_populates="players")

    __table_args__ = (
        UniqueConstraint("team_id", "jersey_number", name="uq_player_team_jersey"),
        Index("idx_players_name", "last_name", "first_name"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
