"""Dashboard summary schema."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NextGame(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    home_team: str = Field(alias="homeTeam")
    away_team: str = Field(alias="awayTeam")
    division: str
    venue: str
    scheduled_date: datetime = Field(alias="scheduledDate")
    status: str


class TopPlayer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    position: str
    team: str
    stat: int
    stat_label: str = Field("TD", alias="statLabel")


class DashboardStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    active_tournaments: int = Field(alias="activeTournaments")
    total_teams: int = Field(alias="totalTeams")
    total_players: int = Field(alias="totalPlayers")
    completed_games: int = Field(alias="completedGames")
    next_games: list[NextGame] = Field(alias="nextGames")
    top_players: list[TopPlayer] = Field(alias="topPlayers")
