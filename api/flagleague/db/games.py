"""Game model.

Scores and per-side team statistics are JSONB documents:

    score = {"home": {"q1": 7, "q2": 0, "q3": 6, "q4": 14, "overtime": 0, "total": 27},
             "away": {...}}
    statistics = {"home": {"passing_yards": ..., "time_of_possession": "18:42", ...},
                  "away": {...}}

``home_team_id`` / ``away_team_id`` are nullable so playoff brackets can be
scheduled before the teams are known.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import text

from .base import Base

if TYPE_CHECKING:
    from .league import Division, Team, Tournament


class GameStatus(str, Enum):
    """Game lifecycle: scheduled -> in_progress -> completed."""

    scheduled = "scheduled"
    in_progress = "in_progress"
    completed = "completed"
    postponed = "postponed"
    cancelled = "cancelled"


QUARTER_KEYS = ("q1", "q2", "q3", "q4", "overtime")


def empty_side_score() -> dict[str, int]:
    score = {key: 0 for key in QUARTER_KEYS}
    score["total"] = 0
    return score


def empty_side_statistics() -> dict[str, Any]:
    return {
        "passing_yards": 0,
        "rushing_yards": 0,
        "total_yards": 0,
        "completions": 0,
        "attempts": 0,
        "interceptions": 0,
        "fumbles": 0,
        "penalties": 0,
        "penalty_yards": 0,
        "time_of_possession": None,
        "third_down_conversions": {"made": 0, "attempted": 0},
        "red_zone_efficiency": {"scores": 0, "attempts": 0},
    }


class Game(Base):
    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tournament_id: Mapped[int] = mapped_column(Integer, ForeignKey("tournaments.id", ondelete="CASCADE"), nullable=False)
    division_id: Mapped[int] = mapped_column(Integer, ForeignKey("divisions.id", ondelete="CASCADE"), nullable=False)
    home_team_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True)
    away_team_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True)
    venue_name: Mapped[str] = mapped_column(String(200), nullable=False)
    venue_address: Mapped[str] = mapped_column(String(300), nullable=False)
    scheduled_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    actual_start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    actual_end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=GameStatus.scheduled.value, nullable=False, index=True)
    week: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    round: Mapped[str | None] = mapped_column(String(50), nullable=True)
    score: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    statistics: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    officials: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, server_default=text("'[]'::jsonb"), nullable=False)
    weather: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    events: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, server_default=text("'[]'::jsonb"), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    tournament: Mapped["Tournament"] = relationship("Tournament", back_populates="games")
    division: Mapped["Division"] = relationship("Division")
    home_team: Mapped["Team | None"] = relationship("Team", foreign_keys=[home_team_id])
    away_team: Mapped["Team | None"] = relationship("Team", foreign_keys=[away_team_id])

    __table_args__ = (
        Index("idx_games_tournament_division", "tournament_id", "division_id"),
        Index(
            "uq_games_matchup_date",
            "home_team_id",
            "away_team_id",
            "scheduled_date",
            unique=True,
            postgresql_where=text("home_team_id IS NOT NULL AND away_team_id IS NOT NULL"),
        ),
    )

    @property
    def is_completed(self) -> bool:
        return self.status == GameStatus.completed.value
