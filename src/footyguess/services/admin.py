"""Admin service for inspecting daily submissions."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from footyguess.domain.models import DailySubmission


class AdminRepository(Protocol):
    """Persistence interface for admin data."""

    def list_submissions(self, date_utc: date, limit: int) -> list[DailySubmission]:
        """Return full submission rows for a date in leaderboard order."""


@dataclass
class AdminService:
    """Service for admin dashboards."""

    admin_repository: AdminRepository

    def list_submissions(
        self, date_utc: date, limit: int = 50
    ) -> list[dict[str, object]]:
        """Return submissions for a date, including who submitted them."""
        submissions = self.admin_repository.list_submissions(date_utc, limit)
        return [
            _serialize_submission(rank, submission)
            for rank, submission in enumerate(submissions, start=1)
        ]


def _serialize_submission(
    rank: int, submission: DailySubmission
) -> dict[str, object]:
    return {
        "rank": rank,
        "id": str(submission.id),
        "daily_set_id": str(submission.daily_set_id),
        "date_utc": submission.date_utc.isoformat(),
        "identity_kind": submission.identity.kind.value,
        "user_id": submission.identity.user_id,
        "anon_device_token": submission.identity.device_token,
        "nickname": submission.nickname,
        "total_score": submission.total_score,
        "total_time_ms": submission.total_time_ms,
        "submission_timestamp": submission.submission_timestamp.isoformat(),
    }
