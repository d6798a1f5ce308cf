"""Tests for request schema validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from flagleague.routers.schemas.auth import RegisterRequest
from flagleague.routers.schemas.common import Pagination
from flagleague.routers.schemas.games import GameCreate, QuarterScore, TeamGameStats
from flagleague.routers.schemas.teams import PlayerPayload, TeamPayload
from flagleague.routers.schemas.tournaments import TournamentPayload


def _player(**overrides) -> dict:
    payload = {
        "firstName": "Luis",
        "lastName": "Pérez",
        "dateOfBirth": "2001-04-02",
        "teamId": 1,
        "jerseyNumber": 12,
        "position": "QB",
        "registrationDate": "2025-01-10",
    }
    payload.update(overrides)
    return payload


class TestPlayerPayload:
    @pytest.mark.parametrize("number", [0, 100, -5])
    def test_jersey_out_of_range_rejected(self, number: int) -> None:
        with pytest.raises(ValidationError, match="jersey number must be between 1 and 99"):
            PlayerPayload.model_validate(_player(jerseyNumber=number))

    @pytest.mark.parametrize("number", [1, 99])
    def test_jersey_bounds_accepted(self, number: int) -> None:
        assert PlayerPayload.model_validate(_player(jerseyNumber=number)).jersey_number == number

    def test_email_normalized(self) -> None:
        player = PlayerPayload.model_validate(_player(email="  Luis@Example.COM "))
        assert player.email == "luis@example.com"

    def test_unknown_position_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PlayerPayload.model_validate(_player(position="XX"))


class TestTeamPayload:
    def test_colors_uppercased(self) -> None:
        team = TeamPayload.model_validate(
            {
                "name": "Halcones",
                "primaryColor": "#1a2b3c",
                "secondaryColor": "#ffffff",
                "divisionId": 3,
                "registrationDate": "2025-01-10",
            }
        )
        assert team.primary_color == "#1A2B3C"
        assert team.secondary_color == "#FFFFFF"

    def test_bad_color_rejected(self) -> None:
        with pytest.raises(ValidationError, match="hex color"):
            TeamPayload.model_validate(
                {
                    "name": "Halcones",
                    "primaryColor": "red",
                    "divisionId": 3,
                    "registrationDate": "2025-01-10",
                }
            )


class TestQuarterScore:
    def test_total_recomputed(self) -> None:
        score = QuarterScore.model_validate({"q1": 7, "q2": 6, "q3": 0, "q4": 14, "overtime": 6, "total": 1})
        assert score.total == 33

    @pytest.mark.parametrize("value", [101, -1])
    def test_out_of_range_rejected(self, value: int) -> None:
        with pytest.raises(ValidationError, match="quarter score must be between 0 and 100"):
            QuarterScore(q2=value)


class TestTeamGameStats:
    def test_time_of_possession_normalized(self) -> None:
        stats = TeamGameStats.model_validate({"timeOfPossession": "9:05"})
        assert stats.time_of_possession == "09:05"

    def test_time_of_possession_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TeamGameStats.model_validate({"timeOfPossession": "12:75"})

    def test_snake_case_dump(self) -> None:
        dumped = TeamGameStats(passing_yards=120).model_dump()
        assert dumped["passing_yards"] == 120
        assert dumped["third_down_conversions"] == {"made": 0, "attempted": 0}


class TestGameCreate:
    def test_team_cannot_play_itself(self) -> None:
        with pytest.raises(ValidationError, match="cannot play itself"):
            GameCreate.model_validate(
                {
                    "tournamentId": 1,
                    "divisionId": 1,
                    "homeTeamId": 4,
                    "awayTeamId": 4,
                    "venue": {"name": "Campo 1", "address": "Av. Central 100"},
                    "scheduledDate": "2025-03-01T10:00:00Z",
                }
            )

    def test_teams_may_be_unassigned(self) -> None:
        game = GameCreate.model_validate(
            {
                "tournamentId": 1,
                "divisionId": 1,
                "venue": {"name": "Campo 1", "address": "Av. Central 100"},
                "scheduledDate": "2025-03-01T10:00:00Z",
            }
        )
        assert game.home_team_id is None


class TestTournamentPayload:
    def test_end_before_start_rejected(self) -> None:
        with pytest.raises(ValidationError, match="endDate"):
            TournamentPayload.model_validate(
                {
                    "name": "Liga Primavera",
                    "season": "Primavera",
                    "year": 2025,
                    "startDate": "2025-03-01",
                    "endDate": "2025-02-01",
                }
            )


class TestRegisterRequest:
    def test_short_password_rejected(self) -> None:
        with pytest.raises(ValidationError, match="at least 6"):
            RegisterRequest(name="Ana", email="ana@example.com", password="12345")

    def test_email_lowercased(self) -> None:
        request = RegisterRequest(name="Ana", email=" Ana@Example.com", password="123456")
        assert request.email == "ana@example.com"

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError, match="invalid email"):
            RegisterRequest(name="Ana", email="not-an-email", password="123456")


class TestPagination:
    def test_build(self) -> None:
        pagination = Pagination.build(page=2, limit=10, count=25)
        assert pagination.total == pagination.pages == 3
        assert pagination.has_next and pagination.has_prev

    def test_empty(self) -> None:
        pagination = Pagination.build(page=1, limit=10, count=0)
        assert pagination.pages == 0
        assert not pagination.has_next
        assert not pagination.has_prev
