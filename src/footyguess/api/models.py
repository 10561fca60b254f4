"""Pydantic models for the public HTTP API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from footyguess.domain.models import DailySubmissionCommand, Guess

LAT_MIN, LAT_MAX = -90.0, 90.0
LON_MIN, LON_MAX = -180.0, 180.0
TIME_MIN_MS, TIME_MAX_MS = 0, 86_400_000


class GuessPayload(BaseModel):
    """A guess for one photo."""

    photo_id: UUID
    guessed_lat: float = Field(ge=LAT_MIN, le=LAT_MAX)
    guessed_lon: float = Field(ge=LON_MIN, le=LON_MAX)
    guessed_year: int | None = None

    def to_guess(self) -> Guess:
        return Guess(
            photo_id=self.photo_id,
            guessed_lat=self.guessed_lat,
            guessed_lon=self.guessed_lon,
            guessed_year=self.guessed_year,
        )


class PhotoGuessRequest(BaseModel):
    """Body for scoring a single photo."""

    guessed_lat: float = Field(ge=LAT_MIN, le=LAT_MAX)
    guessed_lon: float = Field(ge=LON_MIN, le=LON_MAX)
    guessed_year: int | None = None


class DailySubmissionRequest(BaseModel):
    """Body of POST /api/daily/submissions."""

    daily_set_id: UUID
    date_utc: date
    nickname: str | None = None
    consent_given: bool = False
    guesses: list[GuessPayload]
    total_time_ms: int = Field(ge=TIME_MIN_MS, le=TIME_MAX_MS)

    def to_command(self) -> DailySubmissionCommand:
        return DailySubmissionCommand(
            daily_set_id=self.daily_set_id,
            date_utc=self.date_utc,
            nickname=self.nickname,
            consent_given=self.consent_given,
            guesses=[guess.to_guess() for guess in self.guesses],
            total_time_ms=self.total_time_ms,
        )


class PhotoScoreResultResponse(BaseModel):
    """Per-photo score with the revealed answer."""

    model_config = ConfigDict(from_attributes=True)

    photo_id: UUID
    location_score: int
    time_score: int | None
    total_score: int
    km_error: float
    year_error: int | None
    correct_lat: float
    correct_lon: float
    correct_year: int | None
    photo_url: str | None
    event_name: str | None
    description: str | None
    place: str | None
    source_url: str | None
    license: str | None
    credit: str | None


class DailySubmissionResponse(BaseModel):
    """Result of a daily submission."""

    model_config = ConfigDict(from_attributes=True)

    submission_id: UUID | None
    total_score: int
    total_time_ms: int
    leaderboard_rank: int | None
    potential_rank: int | None
    is_saved: bool
    photos: list[PhotoScoreResultResponse]


class SubmissionDetailsResponse(BaseModel):
    """A stored submission with its current rank."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    total_score: int
    total_time_ms: int
    submission_timestamp: datetime
    leaderboard_rank: int


class SubmissionCheckResponse(BaseModel):
    """Whether the caller already played the date."""

    model_config = ConfigDict(from_attributes=True)

    has_submitted: bool
    submission: SubmissionDetailsResponse | None


class LeaderboardEntryResponse(BaseModel):
    """One ranked leaderboard line."""

    model_config = ConfigDict(from_attributes=True)

    rank: int
    nickname: str
    total_score: int
    total_time_ms: int
    submission_timestamp: datetime


class LeaderboardResponse(BaseModel):
    """Leaderboard for a date."""

    date_utc: date
    leaderboard: list[LeaderboardEntryResponse]
    total_submissions: int


class DailySetPhotoResponse(BaseModel):
    """A daily set photo without its answer."""

    model_config = ConfigDict(from_attributes=True)

    photo_id: UUID
    position: int
    photo_url: str | None
    place: str | None
    tags: list[str] | None


class DailySetResponse(BaseModel):
    """Today's daily set."""

    model_config = ConfigDict(from_attributes=True)

    daily_set_id: UUID
    date_utc: date
    photos: list[DailySetPhotoResponse]


class ErrorResponse(BaseModel):
    """Standard error body."""

    error: str
    code: str | None = None
    details: list[str] = Field(default_factory=list)
    timestamp: datetime
