"""Season statistics per player and per team, scoped to tournament and division.

Counters are grouped in JSONB documents (``passing``, ``rushing``...) whose
keys match the value objects in ``flagleague.services.statistics``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import text

from .base import Base

if TYPE_CHECKING:
    from .league import Division, Player, Team, Tournament


def _json_group() -> Any:
    return mapped_column(JSONB, server_default=text("'{}'::jsonb"), nullable=False)


class PlayerStatistics(Base):
    __tablename__ = "player_statistics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    player_id: Mapped[int] = mapped_column(Integer, ForeignKey("players.id", ondelete="CASCADE"), nullable=False, index=True)
    tournament_id: Mapped[int] = mapped_column(Integer, ForeignKey("tournaments.id", ondelete="CASCADE"), nullable=False, index=True)
    division_id: Mapped[int] = mapped_column(Integer, ForeignKey("divisions.id", ondelete="CASCADE"), nullable=False, index=True)
    passing: Mapped[dict[str, Any]] = _json_group()
    rushing: Mapped[dict[str, Any]] = _json_group()
    receiving: Mapped[dict[str, Any]] = _json_group()
    defensive: Mapped[dict[str, Any]] = _json_group()
    kicking: Mapped[dict[str, Any]] = _json_group()
    punting: Mapped[dict[str, Any]] = _json_group()
    returning: Mapped[dict[str, Any]] = _json_group()
    games_played: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    games_started: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    player: Mapped["Player"] = relationship("Player")
    tournament: Mapped["Tournament"] = relationship("Tournament")
    division: Mapped["Division"] = relationship("Division")

    __table_args__ = (
        UniqueConstraint("player_id", "tournament_id", "division_id", name="uq_player_statistics_scope"),
    )


class TeamStatistics(Base):
    __tablename__ = "team_statistics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    team_id: Mapped[int] = mapped_column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    tournament_id: Mapped[int] = mapped_column(Integer, ForeignKey("tournaments.id", ondelete="CASCADE"), nullable=False, index=True)
    division_id: Mapped[int] = mapped_column(Integer, ForeignKey("divisions.id", ondelete="CASCADE"), nullable=False, index=True)
    wins: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    losses: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    ties: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    points_for: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    points_against: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    turnovers: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    forced_turnovers: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    penalties: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    penalty_yards: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    offensive: Mapped[dict[str, Any]] = _json_group()
    defensive: Mapped[dict[str, Any]] = _json_group()
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    team: Mapped["Team"] = relationship("Team")
    tournament: Mapped["Tournament"] = relationship("Tournament")
    division: Mapped["Division"] = relationship("Division")

    __table_args__ = (
        UniqueConstraint("team_id", "tournament_id", "division_id", name="uq_team_statistics_scope"),
    )

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties
