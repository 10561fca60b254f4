"""Domain models for leaderboards."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class LeaderboardRow:
    """A stored submission as seen by the leaderboard."""

    submission_id: UUID
    nickname: str
    total_score: int
    total_time_ms: int
    submission_timestamp: datetime


@dataclass(frozen=True)
class LeaderboardEntry:
    """A ranked leaderboard line."""

    rank: int
    nickname: str
    total_score: int
    total_time_ms: int
    submission_timestamp: datetime


@dataclass(frozen=True)
class LeaderboardPage:
    """Top entries for a date plus the number of submissions that day."""

    date_utc: date
    entries: list[LeaderboardEntry]
    total_submissions: int
