"""Game schemas: schedule, scores, per-side statistics, events."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...db.games import GameStatus
from ...services.statistics import (
    QUARTER_SCORE_MAX,
    format_time_of_possession,
    parse_time_of_possession,
    quarter_score_valid,
)
from .tournaments import TeamRef


class OfficialRole(str, Enum):
    referee = "referee"
    umpire = "umpire"
    linesman = "linesman"
    field_judge = "field_judge"


class GameEventType(str, Enum):
    touchdown = "touchdown"
    extra_point = "extra_point"
    field_goal = "field_goal"
    safety = "safety"
    interception = "interception"
    fumble = "fumble"
    penalty = "penalty"
    timeout = "timeout"
    quarter_end = "quarter_end"
    game_end = "game_end"
    substitution = "substitution"
    injury = "injury"
    first_down = "first_down"
    sack = "sack"


class Venue(BaseModel):
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)


class Official(BaseModel):
    name: str = Field(..., min_length=1)
    role: OfficialRole
    certification: str | None = None


class Weather(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temperature: float | None = None
    humidity: float | None = None
    wind_speed: float | None = Field(None, alias="windSpeed")
    conditions: str | None = None


class QuarterScore(BaseModel):
    """Points by quarter for one side; ``total`` is always recomputed."""

    q1: int = 0
    q2: int = 0
    q3: int = 0
    q4: int = 0
    overtime: int = 0
    total: int = 0

    @field_validator("q1", "q2", "q3", "q4", "overtime")
    @classmethod
    def validate_quarter(cls, v: int) -> int:
        if not quarter_score_valid(v):
            raise ValueError(f"quarter score must be between 0 and {QUARTER_SCORE_MAX}")
        return v

    @model_validator(mode="after")
    def compute_total(self) -> "QuarterScore":
        self.total = self.q1 + self.q2 + self.q3 + self.q4 + self.overtime
        return self


class GameScore(BaseModel):
    home: QuarterScore = Field(default_factory=QuarterScore)
    away: QuarterScore = Field(default_factory=QuarterScore)


class Conversions(BaseModel):
    made: int = Field(0, ge=0)
    attempted: int = Field(0, ge=0)


class RedZone(BaseModel):
    scores: int = Field(0, ge=0)
    attempts: int = Field(0, ge=0)


class TeamGameStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    passing_yards: int = Field(0, alias="passingYards")
    rushing_yards: int = Field(0, alias="rushingYards")
    total_yards: int = Field(0, alias="totalYards")
    completions: int = Field(0, ge=0)
    attempts: int = Field(0, ge=0)
    interceptions: int = Field(0, ge=0)
    fumbles: int = Field(0, ge=0)
    penalties: int = Field(0, ge=0)
    penalty_yards: int = Field(0, alias="penaltyYards")
    time_of_possession: str | None = Field(None, alias="timeOfPossession")
    third_down_conversions: Conversions = Field(default_factory=Conversions, alias="thirdDownConversions")
    red_zone_efficiency: RedZone = Field(default_factory=RedZone, alias="redZoneEfficiency")

    @field_validator("time_of_possession")
    @classmethod
    def normalize_time_of_possession(cls, v: str | None) -> str | None:
        """Accept ``M:SS`` or ``MM:SS`` and store the zero-padded form."""
        if v is None:
            return None
        return format_time_of_possession(parse_time_of_possession(v))


class GameStatistics(BaseModel):
    home: TeamGameStats = Field(default_factory=TeamGameStats)
    away: TeamGameStats = Field(default_factory=TeamGameStats)


class GameEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    quarter: int = Field(..., ge=1, le=5)
    time: str
    type: GameEventType
    team_id: int = Field(alias="teamId")
    player_id: int | None = Field(None, alias="playerId")
    description: str = Field(..., min_length=1)
    yards: int | None = None
    points: int | None = None
    details: dict[str, Any] | None = None

    @field_validator("time")
    @classmethod
    def validate_clock(cls, v: str) -> str:
        return format_time_of_possession(parse_time_of_possession(v))


class GameCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tournament_id: int = Field(alias="tournamentId")
    division_id: int = Field(alias="divisionId")
    home_team_id: int | None = Field(None, alias="homeTeamId")
    away_team_id: int | None = Field(None, alias="awayTeamId")
    venue: Venue
    scheduled_date: datetime = Field(alias="scheduledDate")
    week: int | None = Field(None, ge=1)
    round: str | None = None
    officials: list[Official] = Field(default_factory=list)
    weather: Weather | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def check_distinct_teams(self) -> "GameCreate":
        if self.home_team_id is not None and self.home_team_id == self.away_team_id:
            raise ValueError("a team cannot play itself")
        return self


class GameUpdate(BaseModel):
    """Partial update; only fields present in the body are applied."""

    model_config = ConfigDict(populate_by_name=True)

    home_team_id: int | None = Field(None, alias="homeTeamId")
    away_team_id: int | None = Field(None, alias="awayTeamId")
    venue: Venue | None = None
    scheduled_date: datetime | None = Field(None, alias="scheduledDate")
    actual_start_time: datetime | None = Field(None, alias="actualStartTime")
    actual_end_time: datetime | None = Field(None, alias="actualEndTime")
    status: GameStatus | None = None
    week: int | None = Field(None, ge=1)
    round: str | None = None
    score: GameScore | None = None
    statistics: GameStatistics | None = None
    officials: list[Official] | None = None
    weather: Weather | None = None
    events: list[GameEvent] | None = None
    notes: str | None = None


class SideDerived(BaseModel):
    """Efficiency figures for one side of a game."""

    model_config = ConfigDict(populate_by_name=True)

    completion_percentage: float = Field(alias="completionPercentage")
    third_down_efficiency: float = Field(alias="thirdDownEfficiency")
    red_zone_efficiency: float = Field(alias="redZoneEfficiency")
    time_of_possession_seconds: int | None = Field(None, alias="timeOfPossessionSeconds")


class GameSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    tournament_id: int = Field(alias="tournamentId")
    division_id: int = Field(alias="divisionId")
    home_team: TeamRef | None = Field(None, alias="homeTeam")
    away_team: TeamRef | None = Field(None, alias="awayTeam")
    venue: Venue
    scheduled_date: datetime = Field(alias="scheduledDate")
    status: str
    week: int | None = None
    round: str | None = None
    score: GameScore


class GameDetail(GameSummary):
    actual_start_time: datetime | None = Field(None, alias="actualStartTime")
    actual_end_time: datetime | None = Field(None, alias="actualEndTime")
    statistics: GameStatistics
    derived: dict[str, SideDerived]
    officials: list[Official]
    weather: Weather | None = None
    events: list[GameEvent]
    notes: str | None = None
