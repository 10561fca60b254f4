"""Supabase repository for daily submissions."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from footyguess.adapters.supabase_queries import (
    execute,
    order_by_rank,
    parse_date,
    parse_timestamp,
    ranked_above_filter,
)
from footyguess.domain.errors import DuplicateSubmissionError
from footyguess.domain.leaderboard import LeaderboardRow
from footyguess.domain.models import DailySubmission, Identity, NewSubmission
from footyguess.domain.ranking import RankPosition
from footyguess.services.admin import AdminRepository
from footyguess.services.dedup import SubmissionLookup
from footyguess.services.leaderboard import LeaderboardRepository
from footyguess.services.ranking import RankRepository
from footyguess.services.submissions import SubmissionRepository

_TABLE = "daily_submissions"
_DATES_VIEW = "daily_submission_dates"
_COLUMNS = (
    "id, daily_set_id, date_utc, user_id, anon_device_token, nickname, "
    "total_score, total_time_ms, submission_timestamp"
)


@dataclass
class SupabaseSubmissionRepository(
    SubmissionRepository,
    SubmissionLookup,
    RankRepository,
    LeaderboardRepository,
    AdminRepository,
):
    """Supabase implementation for daily submissions.

    Uniqueness of ``(date_utc, user_id)`` and ``(date_utc, anon_device_token)``
    is enforced by the database (see ``supabase/schema.sql``).
    """

    client: Client

    def insert_submission(self, submission: NewSubmission) -> DailySubmission:
        """Insert a submission row and return it."""
        payload = {
            "daily_set_id": str(submission.daily_set_id),
            "date_utc": submission.date_utc.isoformat(),
            "user_id": submission.identity.user_id,
            "anon_device_token": submission.identity.device_token,
            "nickname": submission.nickname,
            "total_score": submission.total_score,
            "total_time_ms": submission.total_time_ms,
        }
        try:
            response = execute(self.client.table(_TABLE).insert(payload))
        except APIError as exc:
            # execute() lets only unique violations through.
            raise DuplicateSubmissionError() from exc
        if not response.data:
            raise RuntimeError("Failed to create daily submission")
        return _parse_submission(response.data[0])

    def find_submission(
        self, date_utc: date, identity: Identity
    ) -> DailySubmission | None:
        """Return the identity's submission for the date, if present."""
        column = "user_id" if identity.user_id else "anon_device_token"
        response = execute(
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("date_utc", date_utc.isoformat())
            .eq(column, identity.value)
            .limit(1)
        )
        if not response.data:
            return None
        return _parse_submission(response.data[0])

    def count_ranked_above(self, date_utc: date, position: RankPosition) -> int:
        """Count submissions on the date ranked strictly above ``position``."""
        response = execute(
            self.client.table(_TABLE)
            .select("id", count="exact", head=True)
            .eq("date_utc", date_utc.isoformat())
            .or_(ranked_above_filter(position))
        )
        return response.count or 0

    def list_top_submissions(
        self, date_utc: date, limit: int
    ) -> list[LeaderboardRow]:
        """Return the best submissions for the date."""
        query = (
            self.client.table(_TABLE)
            .select("id, nickname, total_score, total_time_ms, submission_timestamp")
            .eq("date_utc", date_utc.isoformat())
        )
        response = execute(order_by_rank(query).limit(limit))
        return [_parse_leaderboard_row(row) for row in response.data or []]

    def count_submissions(self, date_utc: date) -> int:
        """Return the number of submissions for the date."""
        response = execute(
            self.client.table(_TABLE)
            .select("id", count="exact", head=True)
            .eq("date_utc", date_utc.isoformat())
        )
        return response.count or 0

    def list_submission_dates(self, limit: int) -> list[date]:
        """Return distinct submission dates, newest first."""
        response = execute(
            self.client.table(_DATES_VIEW)
            .select("date_utc")
            .order("date_utc", desc=True)
            .limit(limit)
        )
        dates: list[date] = []
        for row in response.data or []:
            parsed = parse_date(row["date_utc"])
            if parsed not in dates:
                dates.append(parsed)
        return dates

    def list_submissions(self, date_utc: date, limit: int) -> list[DailySubmission]:
        """Return full submission rows for the date in leaderboard order."""
        query = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("date_utc", date_utc.isoformat())
        )
        response = execute(order_by_rank(query).limit(limit))
        return [_parse_submission(row) for row in response.data or []]


def _parse_submission(row: dict[str, object]) -> DailySubmission:
    if row.get("user_id"):
        identity = Identity.for_user(UUID(str(row["user_id"])))
    else:
        identity = Identity.for_device(str(row.get("anon_device_token") or ""))
    return DailySubmission(
        id=UUID(str(row["id"])),
        daily_set_id=UUID(str(row["daily_set_id"])),
        date_utc=parse_date(row["date_utc"]),
        identity=identity,
        nickname=str(row.get("nickname") or ""),
        total_score=int(row.get("total_score", 0)),
        total_time_ms=int(row.get("total_time_ms", 0)),
        submission_timestamp=parse_timestamp(row["submission_timestamp"]),
    )


def _parse_leaderboard_row(row: dict[str, object]) -> LeaderboardRow:
    return LeaderboardRow(
        submission_id=UUID(str(row["id"])),
        nickname=str(row.get("nickname") or ""),
        total_score=int(row.get("total_score", 0)),
        total_time_ms=int(row.get("total_time_ms", 0)),
        submission_timestamp=parse_timestamp(row["submission_timestamp"]),
    )
