"""Division standings.

Standings are recomputed from completed games on every request and ranked
by win percentage, then points differential, then points scored. There is
no tie-break past points scored: fully tied teams keep the order they were
passed in, so callers should supply teams in a deterministic order.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Iterable, Protocol, Sequence

from .statistics import GameOutcome, TeamRecord, last_games, streak, win_percentage

COMPLETED_STATUS = "completed"


class _TeamLike(Protocol):
    id: int
    name: str


class _GameLike(Protocol):
    home_team_id: int | None
    away_team_id: int | None
    status: str
    scheduled_date: datetime
    score: dict[str, Any]


@dataclass(frozen=True, slots=True)
class SplitRecord:
    wins: int = 0
    losses: int = 0
    ties: int = 0


@dataclass(frozen=True, slots=True)
class StandingRow:
    """One team's line in the standings table."""

    team_id: int
    team_name: str
    wins: int
    losses: int
    ties: int
    points_for: int
    points_against: int
    percentage: float
    points_differential: int
    streak: str = ""
    last_five: str = ""
    home_record: SplitRecord = field(default_factory=SplitRecord)
    away_record: SplitRecord = field(default_factory=SplitRecord)
    position: int | None = None

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @classmethod
    def from_record(cls, team_id: int, team_name: str, record: TeamRecord, **extra: Any) -> "StandingRow":
        return cls(
            team_id=team_id,
            team_name=team_name,
            wins=record.wins,
            losses=record.losses,
            ties=record.ties,
            points_for=record.points_for,
            points_against=record.points_against,
            percentage=win_percentage(record.wins, record.losses, record.ties),
            points_differential=record.points_differential,
            **extra,
        )


def _ranking_key(row: StandingRow) -> tuple[float, int, int]:
    return (-row.percentage, -row.points_differential, -row.points_for)


def sort_standings(rows: Iterable[StandingRow]) -> list[StandingRow]:
    """Return ``rows`` ranked best first.

    Keys, each consulted only when the previous ones are equal:
    percentage desc, points differential desc, points for desc.
    The input is not modified.
    """
    return sorted(rows, key=_ranking_key)


def game_total(game: _GameLike, side: str) -> int:
    """Final points for ``side`` ("home" or "away"); missing scores count as 0."""
    side_score = (game.score or {}).get(side) or {}
    return int(side_score.get("total") or 0)


def outcome_for(points_for: int, points_against: int) -> GameOutcome:
    if points_for > points_against:
        return GameOutcome.win
    if points_for < points_against:
        return GameOutcome.loss
    return GameOutcome.tie


def _split_add(split: SplitRecord, outcome: GameOutcome) -> SplitRecord:
    if outcome is GameOutcome.win:
        return replace(split, wins=split.wins + 1)
    if outcome is GameOutcome.loss:
        return replace(split, losses=split.losses + 1)
    return replace(split, ties=split.ties + 1)


def _record_add(record: TeamRecord, outcome: GameOutcome, scored: int, allowed: int) -> TeamRecord:
    return TeamRecord(
        wins=record.wins + (outcome is GameOutcome.win),
        losses=record.losses + (outcome is GameOutcome.loss),
        ties=record.ties + (outcome is GameOutcome.tie),
        points_for=record.points_for + scored,
        points_against=record.points_against + allowed,
    )


def counts_toward_standings(game: _GameLike) -> bool:
    return (
        game.status == COMPLETED_STATUS
        and game.home_team_id is not None
        and game.away_team_id is not None
    )


def build_standings(teams: Sequence[_TeamLike], games: Iterable[_GameLike]) -> list[StandingRow]:
    """Derive and rank a standings table for ``teams`` from ``games``.

    Only completed games with both teams assigned are counted, and only the
    sides that belong to ``teams``. Games are replayed in scheduled order so
    streaks and the last-five column read oldest to newest. Every team in
    ``teams`` gets a row, including teams with no games yet.
    """
    team_ids = {team.id for team in teams}
    records: dict[int, TeamRecord] = defaultdict(TeamRecord)
    home_splits: dict[int, SplitRecord] = defaultdict(SplitRecord)
    away_splits: dict[int, SplitRecord] = defaultdict(SplitRecord)
    results: dict[int, list[GameOutcome]] = defaultdict(list)

    counted = sorted(
        (game for game in games if counts_toward_standings(game)),
        key=lambda game: game.scheduled_date,
    )
    for game in counted:
        home_points = game_total(game, "home")
        away_points = game_total(game, "away")

        if game.home_team_id in team_ids:
            outcome = outcome_for(home_points, away_points)
            records[game.home_team_id] = _record_add(records[game.home_team_id], outcome, home_points, away_points)
            home_splits[game.home_team_id] = _split_add(home_splits[game.home_team_id], outcome)
            results[game.home_team_id].append(outcome)

        if game.away_team_id in team_ids:
            outcome = outcome_for(away_points, home_points)
            records[game.away_team_id] = _record_add(records[game.away_team_id], outcome, away_points, home_points)
            away_splits[game.away_team_id] = _split_add(away_splits[game.away_team_id], outcome)
            results[game.away_team_id].append(outcome)

    rows = [
        StandingRow.from_record(
            team.id,
            team.name,
            records[team.id],
            streak=streak(results[team.id]),
            last_five=last_games(results[team.id], 5),
            home_record=home_splits[team.id],
            away_record=away_splits[team.id],
        )
        for team in teams
    ]
    return [
        replace(row, position=position)
        for position, row in enumerate(sort_standings(rows), start=1)
    ]
