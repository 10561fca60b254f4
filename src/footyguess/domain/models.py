"""Domain models for the daily challenge."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID


@dataclass(frozen=True)
class Photo:
    """Reference answer for a photo, owned by the photo catalog."""

    id: UUID
    lat: float
    lon: float
    year: int | None = None
    photo_url: str | None = None
    event_name: str | None = None
    description: str | None = None
    place: str | None = None
    source_url: str | None = None
    license: str | None = None
    credit: str | None = None


@dataclass(frozen=True)
class DailySetPhoto:
    """Photo shown in a daily set, without its answer."""

    photo_id: UUID
    position: int
    photo_url: str | None
    place: str | None
    tags: list[str] | None


@dataclass(frozen=True)
class DailySet:
    """The group of photos assigned to one calendar date."""

    id: UUID
    date_utc: date
    is_published: bool
    photo_ids: frozenset[UUID]


@dataclass(frozen=True)
class Guess:
    """A single guess for one photo."""

    photo_id: UUID
    guessed_lat: float
    guessed_lon: float
    guessed_year: int | None = None


@dataclass(frozen=True)
class DailySubmissionCommand:
    """An attempt at a daily set as sent by the player."""

    daily_set_id: UUID
    date_utc: date
    nickname: str | None
    consent_given: bool
    guesses: list[Guess]
    total_time_ms: int


class IdentityKind(str, Enum):
    """Kind of identity a submission is stored under."""

    USER = "user"
    DEVICE = "device"


@dataclass(frozen=True)
class Identity:
    """Either an authenticated user id or an anonymous device token."""

    kind: IdentityKind
    value: str

    @classmethod
    def for_user(cls, user_id: UUID) -> "Identity":
        return cls(kind=IdentityKind.USER, value=str(user_id))

    @classmethod
    def for_device(cls, device_token: str) -> "Identity":
        return cls(kind=IdentityKind.DEVICE, value=device_token)

    @property
    def user_id(self) -> str | None:
        return self.value if self.kind is IdentityKind.USER else None

    @property
    def device_token(self) -> str | None:
        return self.value if self.kind is IdentityKind.DEVICE else None


@dataclass(frozen=True)
class NewSubmission:
    """A validated, scored submission ready to be stored."""

    daily_set_id: UUID
    date_utc: date
    identity: Identity
    nickname: str
    total_score: int
    total_time_ms: int


@dataclass(frozen=True)
class DailySubmission:
    """A stored daily submission."""

    id: UUID
    daily_set_id: UUID
    date_utc: date
    identity: Identity
    nickname: str
    total_score: int
    total_time_ms: int
    submission_timestamp: datetime


@dataclass(frozen=True)
class PhotoScoreResult:
    """Per-photo score breakdown with the revealed answer."""

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


@dataclass(frozen=True)
class DailySubmissionResult:
    """Outcome of a daily submission."""

    submission_id: UUID | None
    total_score: int
    total_time_ms: int
    leaderboard_rank: int | None
    potential_rank: int | None
    is_saved: bool
    photos: list[PhotoScoreResult]


@dataclass(frozen=True)
class SubmissionDetails:
    """A stored submission together with its current rank."""

    id: UUID
    total_score: int
    total_time_ms: int
    submission_timestamp: datetime
    leaderboard_rank: int


@dataclass(frozen=True)
class SubmissionCheck:
    """Whether an identity already played a given date."""

    has_submitted: bool
    submission: SubmissionDetails | None
