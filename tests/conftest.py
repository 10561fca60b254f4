"""Shared test fixtures."""

import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from footyguess.config import Settings
from footyguess.containers import AppContainer
from footyguess.domain.errors import DuplicateSubmissionError
from footyguess.domain.leaderboard import LeaderboardRow
from footyguess.domain.models import (
    DailySet,
    DailySetPhoto,
    DailySubmission,
    Guess,
    Identity,
    NewSubmission,
    Photo,
)
from footyguess.domain.ranking import RankPosition, rank_key, ranks_above
from footyguess.services.admin import AdminRepository, AdminService
from footyguess.services.daily_sets import DailySetRepository, DailySetService
from footyguess.services.dedup import DedupGuard, SubmissionLookup
from footyguess.services.leaderboard import LeaderboardRepository, LeaderboardService
from footyguess.services.photos import PhotoRepository, PhotoScoringService
from footyguess.services.ranking import RankCalculator, RankRepository
from footyguess.services.submissions import (
    DeviceNicknameRepository,
    SubmissionPersister,
    SubmissionRepository,
    SubmissionService,
)
from footyguess.services.validation import SubmissionValidator

TODAY = date(2024, 5, 1)
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

# Wembley, Camp Nou, Maracana, San Siro, Anfield
PHOTO_COORDINATES = [
    (51.556, -0.2796),
    (41.3809, 2.1228),
    (-22.9122, -43.2302),
    (45.4781, 9.124),
    (53.4308, -2.9608),
]

# Header.payload.signature shape accepted by supabase.create_client.
SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)


@dataclass
class FixedClock:
    """Clock that only moves when told to."""

    current: datetime = NOW

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current += delta


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """In-memory photo repository for tests."""

    photos: dict[UUID, Photo] = field(default_factory=dict)

    def add(self, photo: Photo) -> Photo:
        self.photos[photo.id] = photo
        return photo

    def get_photos(self, photo_ids: Iterable[UUID]) -> dict[UUID, Photo]:
        return {
            photo_id: self.photos[photo_id]
            for photo_id in photo_ids
            if photo_id in self.photos
        }

    def get_photo(self, photo_id: UUID) -> Photo | None:
        return self.photos.get(photo_id)


@dataclass
class InMemoryDailySetRepository(DailySetRepository):
    """In-memory daily set repository for tests."""

    sets: dict[UUID, DailySet] = field(default_factory=dict)
    set_photos: dict[UUID, list[DailySetPhoto]] = field(default_factory=dict)

    def add(self, daily_set: DailySet, photos: list[DailySetPhoto]) -> DailySet:
        self.sets[daily_set.id] = daily_set
        self.set_photos[daily_set.id] = photos
        return daily_set

    def get_daily_set(self, daily_set_id: UUID) -> DailySet | None:
        return self.sets.get(daily_set_id)

    def get_published_set(
        self, date_utc: date
    ) -> tuple[DailySet, list[DailySetPhoto]] | None:
        for daily_set in self.sets.values():
            if daily_set.date_utc == date_utc and daily_set.is_published:
                return daily_set, list(self.set_photos[daily_set.id])
        return None


@dataclass
class InMemorySubmissionRepository(
    SubmissionRepository,
    SubmissionLookup,
    RankRepository,
    LeaderboardRepository,
    AdminRepository,
):
    """In-memory submission store enforcing one row per identity and date.

    Timestamps come from the shared clock, which is advanced by a millisecond
    on each insert so stored timestamps are strictly increasing.
    """

    clock: FixedClock
    rows: list[DailySubmission] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)
    insert_attempts: int = 0

    def insert_submission(self, submission: NewSubmission) -> DailySubmission:
        with self.lock:
            self.insert_attempts += 1
            for row in self.rows:
                if (
                    row.date_utc == submission.date_utc
                    and row.identity == submission.identity
                ):
                    raise DuplicateSubmissionError()
            stored = DailySubmission(
                id=uuid4(),
                daily_set_id=submission.daily_set_id,
                date_utc=submission.date_utc,
                identity=submission.identity,
                nickname=submission.nickname,
                total_score=submission.total_score,
                total_time_ms=submission.total_time_ms,
                submission_timestamp=self.clock.now(),
            )
            self.clock.advance(timedelta(milliseconds=1))
            self.rows.append(stored)
            return stored

    def seed(
        self,
        total_score: int,
        total_time_ms: int,
        nickname: str = "Seeded",
        date_utc: date = TODAY,
    ) -> DailySubmission:
        return self.insert_submission(
            NewSubmission(
                daily_set_id=uuid4(),
                date_utc=date_utc,
                identity=Identity.for_device(f"device-{uuid4()}"),
                nickname=nickname,
                total_score=total_score,
                total_time_ms=total_time_ms,
            )
        )

    def find_submission(
        self, date_utc: date, identity: Identity
    ) -> DailySubmission | None:
        for row in self.rows:
            if row.date_utc == date_utc and row.identity == identity:
                return row
        return None

    def count_ranked_above(self, date_utc: date, position: RankPosition) -> int:
        return sum(
            1
            for row in self.rows
            if row.date_utc == date_utc and ranks_above(row, position)
        )

    def list_top_submissions(self, date_utc: date, limit: int) -> list[LeaderboardRow]:
        ordered = sorted(self._for_date(date_utc), key=rank_key)[:limit]
        return [
            LeaderboardRow(
                submission_id=row.id,
                nickname=row.nickname,
                total_score=row.total_score,
                total_time_ms=row.total_time_ms,
                submission_timestamp=row.submission_timestamp,
            )
            for row in ordered
        ]

    def count_submissions(self, date_utc: date) -> int:
        return len(self._for_date(date_utc))

    def list_submission_dates(self, limit: int) -> list[date]:
        dates = sorted({row.date_utc for row in self.rows}, reverse=True)
        return dates[:limit]

    def list_submissions(self, date_utc: date, limit: int) -> list[DailySubmission]:
        return sorted(self._for_date(date_utc), key=rank_key)[:limit]

    def _for_date(self, date_utc: date) -> list[DailySubmission]:
        return [row for row in self.rows if row.date_utc == date_utc]


@dataclass
class InMemoryDeviceNicknameRepository(DeviceNicknameRepository):
    """Records device nicknames; can be told to fail."""

    nicknames: dict[str, str] = field(default_factory=dict)
    fail: bool = False

    def upsert_device_nickname(
        self, device_token: str, nickname: str, consent_given_at: datetime
    ) -> None:
        if self.fail:
            raise RuntimeError("device_nicknames unavailable")
        self.nicknames[device_token] = nickname


@dataclass
class FakeAuthClient:
    """Auth client accepting a fixed set of tokens."""

    tokens: dict[str, UUID] = field(default_factory=dict)

    def get_user_id(self, access_token: str) -> UUID | None:
        return self.tokens.get(access_token)


@dataclass(frozen=True)
class SeededDailySet:
    """A published daily set and its photos."""

    daily_set: DailySet
    photos: list[Photo]

    def exact_guesses(self) -> list[Guess]:
        return [
            Guess(photo_id=photo.id, guessed_lat=photo.lat, guessed_lon=photo.lon)
            for photo in self.photos
        ]


def seed_daily_set(
    photo_repository: InMemoryPhotoRepository,
    daily_set_repository: InMemoryDailySetRepository,
    date_utc: date = TODAY,
) -> SeededDailySet:
    photos = [
        photo_repository.add(
            Photo(
                id=uuid4(),
                lat=lat,
                lon=lon,
                year=1990 + index,
                photo_url=f"https://cdn.example.com/{index}.jpg",
                event_name=f"Match {index}",
                place=f"Stadium {index}",
            )
        )
        for index, (lat, lon) in enumerate(PHOTO_COORDINATES)
    ]
    daily_set = daily_set_repository.add(
        DailySet(
            id=uuid4(),
            date_utc=date_utc,
            is_published=True,
            photo_ids=frozenset(photo.id for photo in photos),
        ),
        [
            DailySetPhoto(
                photo_id=photo.id,
                position=position,
                photo_url=photo.photo_url,
                place=photo.place,
                tags=["derby"],
            )
            for position, photo in reversed(list(enumerate(photos, start=1)))
        ],
    )
    return SeededDailySet(daily_set=daily_set, photos=photos)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=SERVICE_KEY,
        admin_token="admin-token",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def photo_repository() -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository()


@pytest.fixture
def daily_set_repository() -> InMemoryDailySetRepository:
    return InMemoryDailySetRepository()


@pytest.fixture
def submission_repository(clock: FixedClock) -> InMemorySubmissionRepository:
    return InMemorySubmissionRepository(clock=clock)


@pytest.fixture
def nickname_repository() -> InMemoryDeviceNicknameRepository:
    return InMemoryDeviceNicknameRepository()


@pytest.fixture
def seeded_set(
    photo_repository: InMemoryPhotoRepository,
    daily_set_repository: InMemoryDailySetRepository,
) -> SeededDailySet:
    return seed_daily_set(photo_repository, daily_set_repository)


@pytest.fixture
def submission_service(
    clock: FixedClock,
    photo_repository: InMemoryPhotoRepository,
    daily_set_repository: InMemoryDailySetRepository,
    submission_repository: InMemorySubmissionRepository,
    nickname_repository: InMemoryDeviceNicknameRepository,
) -> SubmissionService:
    return SubmissionService(
        validator=SubmissionValidator(daily_set_repository),
        photo_repository=photo_repository,
        dedup_guard=DedupGuard(submission_repository),
        persister=SubmissionPersister(submission_repository),
        rank_calculator=RankCalculator(submission_repository, clock),
        nickname_repository=nickname_repository,
        clock=clock,
    )


@pytest.fixture
def leaderboard_service(
    clock: FixedClock, submission_repository: InMemorySubmissionRepository
) -> LeaderboardService:
    return LeaderboardService(repository=submission_repository, clock=clock)


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    clock: FixedClock,
    auth_client: FakeAuthClient,
    photo_repository: InMemoryPhotoRepository,
    daily_set_repository: InMemoryDailySetRepository,
    submission_repository: InMemorySubmissionRepository,
    submission_service: SubmissionService,
    leaderboard_service: LeaderboardService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        clock=clock,
        auth_client=auth_client,
        submission_service=submission_service,
        leaderboard_service=leaderboard_service,
        daily_set_service=DailySetService(daily_set_repository, clock),
        photo_scoring_service=PhotoScoringService(photo_repository),
        admin_service=AdminService(submission_repository),
    )
