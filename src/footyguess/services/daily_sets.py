"""Daily set lookups."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from footyguess.domain.errors import IncompleteDailySetError
from footyguess.domain.models import DailySet, DailySetPhoto
from footyguess.services.clock import Clock, today_utc

DAILY_SET_PHOTO_COUNT = 5

logger = logging.getLogger(__name__)


class DailySetRepository(Protocol):
    """Read access to daily sets."""

    def get_daily_set(self, daily_set_id: UUID) -> DailySet | None:
        """Return a daily set with its photo membership, if present."""

    def get_published_set(
        self, date_utc: date
    ) -> tuple[DailySet, list[DailySetPhoto]] | None:
        """Return the published set for a date with its photos by position."""


@dataclass(frozen=True)
class TodaysDailySet:
    """Today's daily set as shown to players."""

    daily_set_id: UUID
    date_utc: date
    photos: list[DailySetPhoto]


@dataclass
class DailySetService:
    """Serves the published daily set."""

    repository: DailySetRepository
    clock: Clock

    def get_today(self) -> TodaysDailySet | None:
        """Return today's published set, or None when nothing is published."""
        today = today_utc(self.clock)
        found = self.repository.get_published_set(today)
        if found is None:
            logger.warning("No published daily set", extra={"date_utc": str(today)})
            return None
        daily_set, photos = found
        if len(photos) != DAILY_SET_PHOTO_COUNT:
            raise IncompleteDailySetError(
                f"Daily set {daily_set.id} has {len(photos)} photos, "
                f"expected {DAILY_SET_PHOTO_COUNT}"
            )
        return TodaysDailySet(
            daily_set_id=daily_set.id,
            date_utc=daily_set.date_utc,
            photos=sorted(photos, key=lambda photo: photo.position),
        )
