"""Team and player schemas."""

from __future__ import annotations

import re
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...db.league import PlayerPosition, PlayerStatus, TeamStatus
from ...services.statistics import JERSEY_NUMBER_MAX, JERSEY_NUMBER_MIN, jersey_number_valid

_HEX_COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}")


def _validate_hex_color(v: str | None) -> str | None:
    """Validate and normalize a hex color to uppercase #RRGGBB."""
    if v is None:
        return None
    if not isinstance(v, str) or not _HEX_COLOR_RE.fullmatch(v):
        raise ValueError("must be a #RRGGBB hex color (e.g. '#1A2B3C')")
    return v.upper()


class Coach(BaseModel):
    name: str = Field(..., min_length=1)
    email: str | None = None
    phone: str | None = None
    experience: str | None = None
    certifications: list[str] = Field(default_factory=list)


class SocialMedia(BaseModel):
    facebook: str | None = None
    instagram: str | None = None
    twitter: str | None = None


class ContactInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str | None = None
    phone: str | None = None
    address: str | None = None
    social_media: SocialMedia | None = Field(None, alias="socialMedia")


class TeamPayload(BaseModel):
    """Request body for creating or replacing a team."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    short_name: str | None = Field(None, max_length=50, alias="shortName")
    logo: str | None = None
    primary_color: str = Field(alias="primaryColor")
    secondary_color: str | None = Field(None, alias="secondaryColor")
    division_id: int = Field(alias="divisionId")
    coach: Coach | None = None
    contact: ContactInfo = Field(default_factory=ContactInfo)
    registration_date: date = Field(alias="registrationDate")
    status: TeamStatus = TeamStatus.active

    @field_validator("primary_color", "secondary_color", mode="before")
    @classmethod
    def validate_hex(cls, v: str | None) -> str | None:
        return _validate_hex_color(v)


class PlayerRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    full_name: str = Field(alias="fullName")
    jersey_number: int = Field(alias="jerseyNumber")
    position: str


class TeamGameSummary(BaseModel):
    """Completed or upcoming game from one team's point of view."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    scheduled_date: datetime = Field(alias="scheduledDate")
    opponent: str
    is_home: bool = Field(alias="isHome")
    status: str
    score: str
    result: str


class TeamSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    short_name: str | None = Field(None, alias="shortName")
    logo: str | None = None
    primary_color: str = Field(alias="primaryColor")
    secondary_color: str | None = Field(None, alias="secondaryColor")
    division_id: int = Field(alias="divisionId")
    division_name: str | None = Field(None, alias="divisionName")
    status: str
    players_count: int = Field(0, alias="playersCount")


class TeamDetail(TeamSummary):
    coach: Coach | None = None
    contact: ContactInfo
    registration_date: date = Field(alias="registrationDate")
    players: list[PlayerRef]
    recent_games: list[TeamGameSummary] = Field(alias="recentGames")
    streak: str = ""


class EmergencyContact(BaseModel):
    name: str = Field(..., min_length=1)
    relationship: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: str | None = None


class MedicalInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    allergies: list[str] = Field(default_factory=list)
    medications: list[str] = Field(default_factory=list)
    conditions: list[str] = Field(default_factory=list)
    insurance_info: str | None = Field(None, alias="insuranceInfo")


class PlayerPayload(BaseModel):
    """Request body for creating or replacing a player."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., min_length=1, max_length=100, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=100, alias="lastName")
    email: str | None = None
    phone: str | None = None
    date_of_birth: date = Field(alias="dateOfBirth")
    team_id: int = Field(alias="teamId")
    jersey_number: int = Field(alias="jerseyNumber")
    position: PlayerPosition
    height_cm: int | None = Field(None, gt=0, alias="heightCm")
    weight_kg: int | None = Field(None, gt=0, alias="weightKg")
    experience: str | None = None
    emergency_contact: EmergencyContact | None = Field(None, alias="emergencyContact")
    medical_info: MedicalInfo | None = Field(None, alias="medicalInfo")
    registration_date: date = Field(alias="registrationDate")
    status: PlayerStatus = PlayerStatus.active

    @field_validator("jersey_number")
    @classmethod
    def validate_jersey_number(cls, v: int) -> int:
        if not jersey_number_valid(v):
            raise ValueError(f"jersey number must be between {JERSEY_NUMBER_MIN} and {JERSEY_NUMBER_MAX}")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v


class PlayerSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    full_name: str = Field(alias="fullName")
    jersey_number: int = Field(alias="jerseyNumber")
    position: str
    status: str
    team_id: int = Field(alias="teamId")
    team_name: str | None = Field(None, alias="teamName")
    age: int


class PlayerDetail(PlayerSummary):
    email: str | None = None
    phone: str | None = None
    date_of_birth: date = Field(alias="dateOfBirth")
    height_cm: int | None = Field(None, alias="heightCm")
    weight_kg: int | None = Field(None, alias="weightKg")
    experience: str | None = None
    emergency_contact: EmergencyContact | None = Field(None, alias="emergencyContact")
    medical_info: MedicalInfo | None = Field(None, alias="medicalInfo")
    registration_date: date = Field(alias="registrationDate")
