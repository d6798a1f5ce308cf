"""Standings response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SplitRecordOut(BaseModel):
    wins: int
    losses: int
    ties: int


class StandingEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    position: int
    team_id: int = Field(alias="teamId")
    team_name: str = Field(alias="teamName")
    games_played: int = Field(alias="gamesPlayed")
    wins: int
    losses: int
    ties: int
    points_for: int = Field(alias="pointsFor")
    points_against: int = Field(alias="pointsAgainst")
    points_differential: int = Field(alias="pointsDifferential")
    percentage: float
    streak: str
    last_five: str = Field(alias="lastFive")
    home_record: SplitRecordOut = Field(alias="homeRecord")
    away_record: SplitRecordOut = Field(alias="awayRecord")


class StandingsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    division_id: int | None = Field(None, alias="divisionId")
    tournament_id: int | None = Field(None, alias="tournamentId")
    data: list[StandingEntry]
