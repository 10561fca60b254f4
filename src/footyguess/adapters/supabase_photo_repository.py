"""Supabase repository for photo answers."""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from footyguess.adapters.supabase_queries import execute
from footyguess.domain.models import Photo
from footyguess.services.photos import PhotoRepository

_COLUMNS = (
    "id, lat, lon, year_utc, photo_url, event_name, description, place, "
    "source_url, license, credit"
)


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for reading photos."""

    client: Client

    def get_photos(self, photo_ids: Iterable[UUID]) -> dict[UUID, Photo]:
        """Return photos for the given ids."""
        ids = sorted({str(photo_id) for photo_id in photo_ids})
        if not ids:
            return {}
        response = execute(
            self.client.table("photos").select(_COLUMNS).in_("id", ids)
        )
        photos = [_parse_photo(row) for row in response.data or []]
        return {photo.id: photo for photo in photos}

    def get_photo(self, photo_id: UUID) -> Photo | None:
        """Return a single photo by id."""
        response = execute(
            self.client.table("photos")
            .select(_COLUMNS)
            .eq("id", str(photo_id))
            .limit(1)
        )
        if not response.data:
            return None
        return _parse_photo(response.data[0])


def _parse_photo(row: dict[str, object]) -> Photo:
    year = row.get("year_utc")
    return Photo(
        id=UUID(str(row["id"])),
        lat=float(row["lat"]),
        lon=float(row["lon"]),
        year=int(year) if year is not None else None,
        photo_url=row.get("photo_url"),
        event_name=row.get("event_name"),
        description=row.get("description"),
        place=row.get("place"),
        source_url=row.get("source_url"),
        license=row.get("license"),
        credit=row.get("credit"),
    )
