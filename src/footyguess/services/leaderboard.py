"""Leaderboard read path."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from footyguess.domain import errors
from footyguess.domain.errors import ValidationError
from footyguess.domain.leaderboard import (
    LeaderboardEntry,
    LeaderboardPage,
    LeaderboardRow,
)
from footyguess.domain.ranking import rank_key
from footyguess.services.clock import Clock, today_utc

MIN_LIMIT = 1
MAX_LIMIT = 1000
DEFAULT_LIMIT = 100


class LeaderboardRepository(Protocol):
    """Read queries backing the leaderboard."""

    def list_top_submissions(
        self, date_utc: date, limit: int
    ) -> list[LeaderboardRow]:
        """Return up to ``limit`` rows for the date in leaderboard order."""

    def count_submissions(self, date_utc: date) -> int:
        """Return how many submissions exist for the date."""

    def list_submission_dates(self, limit: int) -> list[date]:
        """Return distinct dates with submissions, newest first."""


@dataclass
class LeaderboardService:
    """Builds ranked leaderboards; never writes."""

    repository: LeaderboardRepository
    clock: Clock
    default_limit: int = DEFAULT_LIMIT

    def get_leaderboard(
        self, date_utc: date | None = None, limit: int | None = None
    ) -> LeaderboardPage:
        """Return the top entries for a date, today by default."""
        resolved_limit = self.default_limit if limit is None else limit
        if not MIN_LIMIT <= resolved_limit <= MAX_LIMIT:
            raise ValidationError(
                f"limit must be between {MIN_LIMIT} and {MAX_LIMIT}",
                code=errors.INVALID_LIMIT,
            )
        resolved_date = date_utc or today_utc(self.clock)
        rows = self.repository.list_top_submissions(resolved_date, resolved_limit)
        ordered = sorted(rows, key=rank_key)[:resolved_limit]
        entries = [
            LeaderboardEntry(
                rank=position,
                nickname=row.nickname or "Anonymous",
                total_score=row.total_score,
                total_time_ms=row.total_time_ms,
                submission_timestamp=row.submission_timestamp,
            )
            for position, row in enumerate(ordered, start=1)
        ]
        total = self.repository.count_submissions(resolved_date) if entries else 0
        return LeaderboardPage(
            date_utc=resolved_date, entries=entries, total_submissions=total
        )

    def available_dates(self, limit: int = 30) -> list[date]:
        """Return dates that have leaderboard data, newest first."""
        return self.repository.list_submission_dates(limit)
