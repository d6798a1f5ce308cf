"""Tests for derived flag football statistics."""

from __future__ import annotations

from datetime import date

import pytest

from flagleague.services.statistics import (
    GameOutcome,
    PassingStats,
    ReceivingStats,
    RushingStats,
    TeamRecord,
    age,
    average_per_game,
    completion_percentage,
    format_time_of_possession,
    jersey_number_valid,
    kicking_accuracy,
    last_games,
    parse_time_of_possession,
    passer_rating,
    punt_average,
    quarter_score_valid,
    receiving_average,
    red_zone_efficiency,
    round2,
    rushing_average,
    streak,
    sum_group,
    third_down_efficiency,
    turnover_differential,
    win_percentage,
)


class TestPasserRating:
    def test_zero_attempts_is_zero(self) -> None:
        passing = PassingStats(attempts=0, completions=0, yards=0, touchdowns=3, interceptions=1)
        assert passer_rating(passing) == 0.0
        assert completion_percentage(passing) == 0.0

    def test_perfect_line_is_capped(self) -> None:
        passing = PassingStats(attempts=10, completions=10, yards=300, touchdowns=5, interceptions=0)
        assert passer_rating(passing) == 158.33

    def test_typical_line(self) -> None:
        # completion 1.75, yards 1.0, touchdowns 1.0, interceptions 1.125
        passing = PassingStats(attempts=20, completions=13, yards=140, touchdowns=1, interceptions=1)
        assert passer_rating(passing) == 81.25

    def test_worst_line_floors_at_zero(self) -> None:
        passing = PassingStats(attempts=10, completions=0, yards=0, touchdowns=0, interceptions=10)
        assert passer_rating(passing) == 0.0

    def test_from_mapping_treats_missing_keys_as_zero(self) -> None:
        passing = PassingStats.from_mapping({"attempts": 4, "completions": 3})
        assert passing == PassingStats(attempts=4, completions=3)
        assert completion_percentage(passing) == 75.0

    def test_from_mapping_accepts_none(self) -> None:
        assert PassingStats.from_mapping(None) == PassingStats()


class TestAverages:
    def test_rushing_average(self) -> None:
        assert rushing_average(RushingStats(attempts=3, yards=10)) == 3.33
        assert rushing_average(RushingStats()) == 0.0

    def test_rushing_average_with_negative_yards(self) -> None:
        assert rushing_average(RushingStats(attempts=8, yards=-1)) == -0.12
        assert rushing_average(RushingStats(attempts=4, yards=-10)) == -2.5

    def test_receiving_average(self) -> None:
        assert receiving_average(ReceivingStats(receptions=4, yards=50)) == 12.5
        assert receiving_average(ReceivingStats.from_mapping({})) == 0.0

    def test_average_per_game(self) -> None:
        assert average_per_game(100, 3) == 33.33
        assert average_per_game(100, 0) == 0.0
        assert average_per_game(201, 200) == 1.0

    def test_punt_average(self) -> None:
        assert punt_average(205, 5) == 41.0
        assert punt_average(0, 0) == 0.0


class TestEfficiencies:
    @pytest.mark.parametrize("func", [third_down_efficiency, red_zone_efficiency, kicking_accuracy])
    def test_zero_attempts_is_zero(self, func) -> None:
        assert func(0, 0) == 0.0
        assert func(3, 0) == 0.0

    def test_values_are_percentages(self) -> None:
        assert third_down_efficiency(4, 10) == 40.0
        assert red_zone_efficiency(2, 3) == 66.67
        assert kicking_accuracy(7, 8) == 87.5


class TestWinPercentage:
    def test_examples(self) -> None:
        assert win_percentage(3, 1, 0) == 75.0
        assert win_percentage(2, 1, 2) == 60.0

    def test_no_games(self) -> None:
        assert win_percentage(0, 0, 0) == 0.0

    def test_only_depends_on_totals(self) -> None:
        # Same totals reached in any order give the same value.
        assert win_percentage(2, 2, 1) == TeamRecord(wins=2, losses=2, ties=1).percentage == 50.0

    def test_team_record_properties(self) -> None:
        record = TeamRecord(wins=3, losses=1, ties=1, points_for=120, points_against=90)
        assert record.games_played == 5
        assert record.points_differential == 30


class TestRounding:
    def test_half_rounds_up(self) -> None:
        assert round2(0.125) == 0.13
        assert round2(2.5) == 2.5

    def test_negative_half_rounds_towards_zero(self) -> None:
        assert round2(-0.125) == -0.12
        assert round2(-0.375) == -0.37

    def test_binary_representation_is_respected(self) -> None:
        # 2.675 and 1.005 are stored just below the half.
        assert round2(2.675) == 2.67
        assert round2(1.005) == 1.0

    def test_turnover_differential(self) -> None:
        assert turnover_differential(5, 8) == -3


class TestTimeOfPossession:
    @pytest.mark.parametrize("seconds", [0, 1, 59, 60, 754, 1800, 5999])
    def test_round_trip(self, seconds: int) -> None:
        assert parse_time_of_possession(format_time_of_possession(seconds)) == seconds

    def test_format_pads(self) -> None:
        assert format_time_of_possession(65) == "01:05"
        assert format_time_of_possession(0) == "00:00"

    def test_minutes_not_capped(self) -> None:
        assert format_time_of_possession(6000) == "100:00"

    def test_negative_renders_as_zero(self) -> None:
        assert format_time_of_possession(-1) == "00:00"
        assert format_time_of_possession(-600) == "00:00"

    def test_parse_accepts_single_digit_minutes(self) -> None:
        assert parse_time_of_possession("5:07") == 307

    @pytest.mark.parametrize("value", ["", "12", "12:60", "ab:cd", "1:2:3", "-1:30", "12:"])
    def test_parse_rejects_malformed(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_time_of_possession(value)


class TestStreak:
    def test_examples(self) -> None:
        assert streak(["W", "W", "L", "W", "W", "W"]) == "W3"
        assert streak(["L"]) == "L1"
        assert streak([]) == ""

    def test_accepts_enum_values(self) -> None:
        assert streak([GameOutcome.win, GameOutcome.tie, GameOutcome.tie]) == "T2"

    def test_unknown_letter_rejected(self) -> None:
        with pytest.raises(ValueError):
            streak(["X"])

    def test_last_games(self) -> None:
        assert last_games(["L", "W", "W", "L", "W", "W"]) == "WWLWW"
        assert last_games(["W", "L"]) == "WL"
        assert last_games([]) == ""
        assert last_games(["W"], 0) == ""


class TestAge:
    def test_birthday_not_reached(self) -> None:
        assert age(date(2000, 6, 15), as_of=date(2025, 6, 14)) == 24

    def test_on_birthday(self) -> None:
        assert age(date(2000, 6, 15), as_of=date(2025, 6, 15)) == 25

    def test_defaults_to_today(self) -> None:
        assert age(date(2000, 1, 1)) >= 25


class TestValidators:
    def test_jersey_number_bounds(self) -> None:
        assert jersey_number_valid(0) is False
        assert jersey_number_valid(1) is True
        assert jersey_number_valid(99) is True
        assert jersey_number_valid(100) is False

    def test_quarter_score_bounds(self) -> None:
        assert quarter_score_valid(0) is True
        assert quarter_score_valid(100) is True
        assert quarter_score_valid(101) is False
        assert quarter_score_valid(-1) is False


class TestSumGroup:
    def test_sums_across_groups(self) -> None:
        groups = [{"touchdowns": 2}, {"touchdowns": 1, "yards": 40}, None, {}]
        assert sum_group(groups, "touchdowns") == 3


class TestPurity:
    def test_repeated_calls_match(self) -> None:
        passing = PassingStats(attempts=31, completions=19, yards=244, touchdowns=2, interceptions=1)
        assert passer_rating(passing) == passer_rating(passing)
        assert win_percentage(7, 3, 1) == win_percentage(7, 3, 1)
        results = ["W", "L", "L"]
        assert streak(results) == streak(results) == "L2"
        assert results == ["W", "L", "L"]
