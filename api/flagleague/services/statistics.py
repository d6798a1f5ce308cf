"""Derived flag football statistics.

Converts raw cumulative counters (attempts, completions, yards, wins,
losses...) into the display metrics shown on player and team pages.

Every function here is pure. Zero denominators and empty result lists give
0 or "". Malformed time-of-possession strings and unknown outcome letters
raise ``ValueError``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from ..utils.datetime_utils import today_utc

# Passer rating components are each capped at this value before summing.
RATING_COMPONENT_MAX = 2.375

JERSEY_NUMBER_MIN = 1
JERSEY_NUMBER_MAX = 99
QUARTER_SCORE_MAX = 100


class GameOutcome(str, Enum):
    """Single-game result from one team's point of view."""

    win = "W"
    loss = "L"
    tie = "T"


def _int(source: Mapping[str, Any], key: str) -> int:
    value = source.get(key)
    if value is None:
        return 0
    return int(value)


@dataclass(frozen=True, slots=True)
class PassingStats:
    attempts: int = 0
    completions: int = 0
    yards: int = 0
    touchdowns: int = 0
    interceptions: int = 0

    @classmethod
    def from_mapping(cls, source: Mapping[str, Any] | None) -> "PassingStats":
        """Build from a stored stats group; missing keys count as zero."""
        source = source or {}
        return cls(
            attempts=_int(source, "attempts"),
            completions=_int(source, "completions"),
            yards=_int(source, "yards"),
            touchdowns=_int(source, "touchdowns"),
            interceptions=_int(source, "interceptions"),
        )


@dataclass(frozen=True, slots=True)
class RushingStats:
    attempts: int = 0
    yards: int = 0
    touchdowns: int = 0
    fumbles: int = 0

    @classmethod
    def from_mapping(cls, source: Mapping[str, Any] | None) -> "RushingStats":
        source = source or {}
        return cls(
            attempts=_int(source, "attempts"),
            yards=_int(source, "yards"),
            touchdowns=_int(source, "touchdowns"),
            fumbles=_int(source, "fumbles"),
        )


@dataclass(frozen=True, slots=True)
class ReceivingStats:
    receptions: int = 0
    yards: int = 0
    touchdowns: int = 0

    @classmethod
    def from_mapping(cls, source: Mapping[str, Any] | None) -> "ReceivingStats":
        source = source or {}
        return cls(
            receptions=_int(source, "receptions"),
            yards=_int(source, "yards"),
            touchdowns=_int(source, "touchdowns"),
        )


@dataclass(frozen=True, slots=True)
class TeamRecord:
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: int = 0
    points_against: int = 0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def points_differential(self) -> int:
        return self.points_for - self.points_against

    @property
    def percentage(self) -> float:
        return win_percentage(self.wins, self.losses, self.ties)


def round2(value: float) -> float:
    """Round to two decimals with halves going towards positive infinity.

    0.125 -> 0.13 and -0.125 -> -0.12. The builtin ``round`` rounds exact
    halves to even.
    """
    return math.floor(value * 100 + 0.5) / 100


def _clamp(value: float, low: float = 0.0, high: float = RATING_COMPONENT_MAX) -> float:
    return max(low, min(high, value))


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return round2(numerator / denominator)


def _percentage(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return round2(numerator / denominator * 100)


def passer_rating(passing: PassingStats) -> float:
    """Four-component passer rating.

    Each component is clamped to [0, 2.375] before summing; the sum is
    divided by 6 and expressed as a percentage, so a perfect line tops out
    at 158.33.
    """
    attempts = passing.attempts
    if attempts == 0:
        return 0.0

    completion = _clamp((passing.completions / attempts - 0.3) * 5)
    yards = _clamp((passing.yards / attempts - 3) * 0.25)
    touchdowns = _clamp((passing.touchdowns / attempts) * 20)
    interceptions = _clamp(RATING_COMPONENT_MAX - (passing.interceptions / attempts) * 25)

    return round2((completion + yards + touchdowns + interceptions) / 6 * 100)


def rushing_average(rushing: RushingStats) -> float:
    return _ratio(rushing.yards, rushing.attempts)


def receiving_average(receiving: ReceivingStats) -> float:
    return _ratio(receiving.yards, receiving.receptions)


def completion_percentage(passing: PassingStats) -> float:
    return _percentage(passing.completions, passing.attempts)


def third_down_efficiency(made: int, attempted: int) -> float:
    return _percentage(made, attempted)


def red_zone_efficiency(scores: int, attempts: int) -> float:
    return _percentage(scores, attempts)


def kicking_accuracy(made: int, attempted: int) -> float:
    return _percentage(made, attempted)


def win_percentage(wins: int, losses: int, ties: int) -> float:
    """Win rate on a 0-100 scale; a tie counts as half a win."""
    total_games = wins + losses + ties
    return _percentage(wins + ties * 0.5, total_games)


def average_per_game(total: float, games_played: int) -> float:
    """Per-game average, used for both yards and points per game."""
    return _ratio(total, games_played)


def turnover_differential(forced: int, lost: int) -> int:
    return forced - lost


def punt_average(total_yards: int, total_punts: int) -> float:
    return _ratio(total_yards, total_punts)


def format_time_of_possession(seconds: int) -> str:
    """Render seconds as zero-padded ``MM:SS``.

    Minutes are not capped, so 6000 seconds renders as ``100:00``. Negative
    input renders as ``00:00``.
    """
    minutes, remaining = divmod(max(int(seconds), 0), 60)
    return f"{minutes:02d}:{remaining:02d}"


def parse_time_of_possession(value: str) -> int:
    """Parse ``MM:SS`` into seconds.

    Raises:
        ValueError: if the string is not two ``:``-separated integers or
            the seconds part is outside 0-59.
    """
    parts = value.strip().split(":")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValueError(f"invalid time of possession: {value!r}")
    minutes, seconds = int(parts[0]), int(parts[1])
    if seconds >= 60:
        raise ValueError(f"invalid time of possession: {value!r}")
    return minutes * 60 + seconds


def _outcome_letter(result: GameOutcome | str) -> str:
    if isinstance(result, GameOutcome):
        return result.value
    return GameOutcome(result).value


def streak(results: Sequence[GameOutcome | str]) -> str:
    """Describe the current run, e.g. ``"W3"``.

    ``results`` is ordered oldest to newest. The letter is the most recent
    outcome and the count is how many games in a row ended that way,
    scanning back from the end. An empty history gives ``""``.
    """
    if not results:
        return ""

    letters = [_outcome_letter(result) for result in results]
    last = letters[-1]
    count = 0
    for letter in reversed(letters):
        if letter != last:
            break
        count += 1
    return f"{last}{count}"


def last_games(results: Sequence[GameOutcome | str], count: int = 5) -> str:
    """Most recent ``count`` outcome letters, oldest first (``"WWLWW"``)."""
    if count <= 0:
        return ""
    return "".join(_outcome_letter(result) for result in results[-count:])


def age(date_of_birth: date, as_of: date | None = None) -> int:
    """Calendar age in whole years as of ``as_of`` (today by default)."""
    today = as_of or today_utc()
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


def jersey_number_valid(number: int) -> bool:
    return JERSEY_NUMBER_MIN <= number <= JERSEY_NUMBER_MAX


def quarter_score_valid(score: int) -> bool:
    return 0 <= score <= QUARTER_SCORE_MAX


def sum_group(groups: Iterable[Mapping[str, Any] | None], key: str) -> int:
    """Total a counter across several stored stats groups."""
    return sum(_int(group or {}, key) for group in groups)
