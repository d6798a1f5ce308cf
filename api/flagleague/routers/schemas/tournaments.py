"""Tournament and division schemas."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ...db.league import DivisionCategory, TournamentFormat, TournamentStatus


class ScoringRules(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    touchdown: int = Field(6, ge=0)
    extra_point_1_yard: int = Field(1, ge=0, alias="extraPoint1Yard")
    extra_point_5_yard: int = Field(2, ge=0, alias="extraPoint5Yard")
    extra_point_10_yard: int = Field(3, ge=0, alias="extraPoint10Yard")
    safety: int = Field(2, ge=0)
    field_goal: int | None = Field(3, ge=0, alias="fieldGoal")


class TournamentRules(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    game_duration: int = Field(40, ge=1, alias="gameDuration")
    quarters: int = Field(4, ge=1)
    timeouts_per_team: int = Field(3, ge=0, alias="timeoutsPerTeam")
    players_per_team: int = Field(7, ge=1, alias="playersPerTeam")
    minimum_players: int = Field(5, ge=1, alias="minimumPlayers")
    overtime_rules: str | None = Field(None, alias="overtimeRules")
    scoring_rules: ScoringRules = Field(default_factory=ScoringRules, alias="scoringRules")


class Prize(BaseModel):
    position: int = Field(..., ge=1)
    description: str
    amount: float | None = None
    trophy: str | None = None


class TournamentPayload(BaseModel):
    """Request body for creating or replacing a tournament."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    season: str = Field(..., min_length=1, max_length=50)
    year: int = Field(..., ge=1900, le=3000)
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    registration_deadline: date | None = Field(None, alias="registrationDeadline")
    status: TournamentStatus = TournamentStatus.upcoming
    format: TournamentFormat = TournamentFormat.league
    rules: TournamentRules | None = None
    prizes: list[Prize] = Field(default_factory=list)
    division_ids: list[int] | None = Field(None, alias="divisionIds")

    @model_validator(mode="after")
    def check_dates(self) -> "TournamentPayload":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class DivisionRef(BaseModel):
    id: int
    name: str
    category: str


class TournamentSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    season: str
    year: int
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    status: str
    format: str


class TournamentDetail(TournamentSummary):
    description: str | None
    registration_deadline: date | None = Field(None, alias="registrationDeadline")
    rules: TournamentRules | None
    prizes: list[Prize]
    divisions: list[DivisionRef]


class DivisionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100)
    category: DivisionCategory
    age_group: str | None = Field(None, alias="ageGroup")
    tournament_id: int | None = Field(None, alias="tournamentId")
    max_teams: int | None = Field(None, ge=1, alias="maxTeams")


class TeamRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    short_name: str | None = Field(None, alias="shortName")


class DivisionSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    category: str
    age_group: str | None = Field(None, alias="ageGroup")
    tournament_id: int | None = Field(None, alias="tournamentId")
    tournament_name: str | None = Field(None, alias="tournamentName")
    max_teams: int | None = Field(None, alias="maxTeams")
    teams_count: int = Field(0, alias="teamsCount")


class DivisionDetail(DivisionSummary):
    teams: list[TeamRef]
