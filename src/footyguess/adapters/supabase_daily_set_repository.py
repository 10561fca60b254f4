"""Supabase repository for daily sets."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from footyguess.adapters.supabase_queries import execute, parse_date
from footyguess.domain.models import DailySet, DailySetPhoto
from footyguess.services.daily_sets import DailySetRepository


@dataclass
class SupabaseDailySetRepository(DailySetRepository):
    """Supabase implementation for daily set lookups."""

    client: Client

    def get_daily_set(self, daily_set_id: UUID) -> DailySet | None:
        """Return a daily set and its photo ids."""
        response = execute(
            self.client.table("daily_sets")
            .select("id, date_utc, is_published, daily_set_photos(photo_id)")
            .eq("id", str(daily_set_id))
            .limit(1)
        )
        if not response.data:
            return None
        return _parse_daily_set(response.data[0])

    def get_published_set(
        self, date_utc: date
    ) -> tuple[DailySet, list[DailySetPhoto]] | None:
        """Return the published set for a date with its photos."""
        response = execute(
            self.client.table("daily_sets")
            .select(
                "id, date_utc, is_published, "
                "daily_set_photos!inner(position, photo_id, "
                "photos!inner(id, photo_url, place, tags))"
            )
            .eq("date_utc", date_utc.isoformat())
            .eq("is_published", True)
            .limit(1)
        )
        if not response.data:
            return None
        row = response.data[0]
        photos = [
            DailySetPhoto(
                photo_id=UUID(str(link["photo_id"])),
                position=int(link.get("position", 0)),
                photo_url=(link.get("photos") or {}).get("photo_url"),
                place=(link.get("photos") or {}).get("place"),
                tags=(link.get("photos") or {}).get("tags"),
            )
            for link in row.get("daily_set_photos") or []
        ]
        return _parse_daily_set(row), photos


def _parse_daily_set(row: dict[str, object]) -> DailySet:
    links = row.get("daily_set_photos") or []
    return DailySet(
        id=UUID(str(row["id"])),
        date_utc=parse_date(row["date_utc"]),
        is_published=bool(row.get("is_published", False)),
        photo_ids=frozenset(UUID(str(link["photo_id"])) for link in links),
    )
