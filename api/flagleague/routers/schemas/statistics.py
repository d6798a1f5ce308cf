"""Player and team season statistics schemas.

Groups are stored in JSONB under their snake_case field names
(``model_dump()``); responses use the camelCase aliases.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class _Group(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PassingGroup(_Group):
    attempts: int = Field(0, ge=0)
    completions: int = Field(0, ge=0)
    yards: int = 0
    touchdowns: int = Field(0, ge=0)
    interceptions: int = Field(0, ge=0)
    sacks: int = Field(0, ge=0)
    longest_pass: int | None = Field(None, alias="longestPass")


class RushingGroup(_Group):
    attempts: int = Field(0, ge=0)
    yards: int = 0
    touchdowns: int = Field(0, ge=0)
    fumbles: int = Field(0, ge=0)
    longest_rush: int | None = Field(None, alias="longestRush")


class ReceivingGroup(_Group):
    receptions: int = Field(0, ge=0)
    yards: int = 0
    touchdowns: int = Field(0, ge=0)
    targets: int = Field(0, ge=0)
    drops: int = Field(0, ge=0)
    longest_reception: int | None = Field(None, alias="longestReception")


class DefensiveGroup(_Group):
    tackles: int = Field(0, ge=0)
    assisted_tackles: int = Field(0, ge=0, alias="assistedTackles")
    sacks: int = Field(0, ge=0)
    interceptions: int = Field(0, ge=0)
    pass_defensed: int = Field(0, ge=0, alias="passDefensed")
    forced_fumbles: int = Field(0, ge=0, alias="forcedFumbles")
    fumble_recoveries: int = Field(0, ge=0, alias="fumbleRecoveries")
    defensive_touchdowns: int = Field(0, ge=0, alias="defensiveTouchdowns")
    safeties: int = Field(0, ge=0)


class KickingGroup(_Group):
    field_goal_attempts: int = Field(0, ge=0, alias="fieldGoalAttempts")
    field_goals_made: int = Field(0, ge=0, alias="fieldGoalsMade")
    extra_point_attempts: int = Field(0, ge=0, alias="extraPointAttempts")
    extra_points_made: int = Field(0, ge=0, alias="extraPointsMade")
    longest_field_goal: int | None = Field(None, alias="longestFieldGoal")


class PuntingGroup(_Group):
    punts: int = Field(0, ge=0)
    yards: int = 0
    longest: int = Field(0, ge=0)
    inside20: int = Field(0, ge=0)
    touchbacks: int = Field(0, ge=0)


class ReturningGroup(_Group):
    kick_returns: int = Field(0, ge=0, alias="kickReturns")
    kick_return_yards: int = Field(0, alias="kickReturnYards")
    kick_return_touchdowns: int = Field(0, ge=0, alias="kickReturnTouchdowns")
    punt_returns: int = Field(0, ge=0, alias="puntReturns")
    punt_return_yards: int = Field(0, alias="puntReturnYards")
    punt_return_touchdowns: int = Field(0, ge=0, alias="puntReturnTouchdowns")


class ConversionStat(_Group):
    made: int = Field(0, ge=0)
    attempted: int = Field(0, ge=0)


class RedZoneStat(_Group):
    scores: int = Field(0, ge=0)
    attempts: int = Field(0, ge=0)


class OffensiveTeamGroup(_Group):
    total_yards: int = Field(0, alias="totalYards")
    passing_yards: int = Field(0, alias="passingYards")
    rushing_yards: int = Field(0, alias="rushingYards")
    touchdowns: int = Field(0, ge=0)
    field_goals: int = Field(0, ge=0, alias="fieldGoals")
    first_downs: int = Field(0, ge=0, alias="firstDowns")
    third_down_conversions: ConversionStat = Field(default_factory=ConversionStat, alias="thirdDownConversions")
    red_zone_efficiency: RedZoneStat = Field(default_factory=RedZoneStat, alias="redZoneEfficiency")


class DefensiveTeamGroup(_Group):
    total_yards_allowed: int = Field(0, alias="totalYardsAllowed")
    passing_yards_allowed: int = Field(0, alias="passingYardsAllowed")
    rushing_yards_allowed: int = Field(0, alias="rushingYardsAllowed")
    touchdowns_allowed: int = Field(0, ge=0, alias="touchdownsAllowed")
    interceptions: int = Field(0, ge=0)
    fumble_recoveries: int = Field(0, ge=0, alias="fumbleRecoveries")
    sacks: int = Field(0, ge=0)
    safeties: int = Field(0, ge=0)


class PlayerStatisticsPayload(_Group):
    """Upsert body; the row is keyed by (player, tournament, division)."""

    player_id: int = Field(alias="playerId")
    tournament_id: int = Field(alias="tournamentId")
    division_id: int = Field(alias="divisionId")
    passing: PassingGroup = Field(default_factory=PassingGroup)
    rushing: RushingGroup = Field(default_factory=RushingGroup)
    receiving: ReceivingGroup = Field(default_factory=ReceivingGroup)
    defensive: DefensiveGroup = Field(default_factory=DefensiveGroup)
    kicking: KickingGroup = Field(default_factory=KickingGroup)
    punting: PuntingGroup = Field(default_factory=PuntingGroup)
    returning: ReturningGroup = Field(default_factory=ReturningGroup)
    games_played: int = Field(0, ge=0, alias="gamesPlayed")
    games_started: int = Field(0, ge=0, alias="gamesStarted")


class TeamStatisticsPayload(_Group):
    team_id: int = Field(alias="teamId")
    tournament_id: int = Field(alias="tournamentId")
    division_id: int = Field(alias="divisionId")
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    ties: int = Field(0, ge=0)
    points_for: int = Field(0, ge=0, alias="pointsFor")
    points_against: int = Field(0, ge=0, alias="pointsAgainst")
    turnovers: int = Field(0, ge=0)
    forced_turnovers: int = Field(0, ge=0, alias="forcedTurnovers")
    penalties: int = Field(0, ge=0)
    penalty_yards: int = Field(0, ge=0, alias="penaltyYards")
    offensive: OffensiveTeamGroup = Field(default_factory=OffensiveTeamGroup)
    defensive: DefensiveTeamGroup = Field(default_factory=DefensiveTeamGroup)


class PlayerDerived(_Group):
    passer_rating: float = Field(alias="passerRating")
    completion_percentage: float = Field(alias="completionPercentage")
    rushing_average: float = Field(alias="rushingAverage")
    receiving_average: float = Field(alias="receivingAverage")
    kicking_accuracy: float = Field(alias="kickingAccuracy")
    punt_average: float = Field(alias="puntAverage")
    total_touchdowns: int = Field(alias="totalTouchdowns")


class TeamDerived(_Group):
    games_played: int = Field(alias="gamesPlayed")
    win_percentage: float = Field(alias="winPercentage")
    points_differential: int = Field(alias="pointsDifferential")
    turnover_differential: int = Field(alias="turnoverDifferential")
    third_down_efficiency: float = Field(alias="thirdDownEfficiency")
    red_zone_efficiency: float = Field(alias="redZoneEfficiency")
    yards_per_game: float = Field(alias="yardsPerGame")
    points_per_game: float = Field(alias="pointsPerGame")
    points_allowed_per_game: float = Field(alias="pointsAllowedPerGame")


class PlayerRefOut(_Group):
    id: int
    full_name: str = Field(alias="fullName")
    jersey_number: int = Field(alias="jerseyNumber")
    position: str
    team_id: int = Field(alias="teamId")
    team_name: str | None = Field(None, alias="teamName")


class PlayerStatisticsOut(_Group):
    id: int
    player: PlayerRefOut
    tournament_id: int = Field(alias="tournamentId")
    division_id: int = Field(alias="divisionId")
    passing: PassingGroup
    rushing: RushingGroup
    receiving: ReceivingGroup
    defensive: DefensiveGroup
    kicking: KickingGroup
    punting: PuntingGroup
    returning: ReturningGroup
    games_played: int = Field(alias="gamesPlayed")
    games_started: int = Field(alias="gamesStarted")
    derived: PlayerDerived


class TeamStatisticsOut(_Group):
    id: int
    team_id: int = Field(alias="teamId")
    team_name: str = Field(alias="teamName")
    tournament_id: int = Field(alias="tournamentId")
    division_id: int = Field(alias="divisionId")
    wins: int
    losses: int
    ties: int
    points_for: int = Field(alias="pointsFor")
    points_against: int = Field(alias="pointsAgainst")
    turnovers: int
    forced_turnovers: int = Field(alias="forcedTurnovers")
    penalties: int
    penalty_yards: int = Field(alias="penaltyYards")
    offensive: OffensiveTeamGroup
    defensive: DefensiveTeamGroup
    derived: TeamDerived


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class PlayerStatSort(str, Enum):
    """Sortable player statistics; anything else is rejected with 422."""

    passing_touchdowns = "passing.touchdowns"
    passing_yards = "passing.yards"
    passing_completions = "passing.completions"
    rushing_touchdowns = "rushing.touchdowns"
    rushing_yards = "rushing.yards"
    receiving_touchdowns = "receiving.touchdowns"
    receiving_yards = "receiving.yards"
    receiving_receptions = "receiving.receptions"
    defensive_tackles = "defensive.tackles"
    defensive_sacks = "defensive.sacks"
    defensive_interceptions = "defensive.interceptions"
    games_played = "gamesPlayed"


class TeamStatSort(str, Enum):
    wins = "wins"
    losses = "losses"
    ties = "ties"
    points_for = "pointsFor"
    points_against = "pointsAgainst"
    points_differential = "pointsDifferential"
    turnovers = "turnovers"
    turnover_differential = "turnoverDifferential"
    penalties = "penalties"
    total_yards = "offensive.totalYards"
