"""Photo answer lookups and single-photo scoring."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from footyguess.domain.models import Guess, Photo, PhotoScoreResult
from footyguess.domain.scoring import ScoringMode, score_guess


class PhotoRepository(Protocol):
    """Read access to photo answers."""

    def get_photos(self, photo_ids: Iterable[UUID]) -> dict[UUID, Photo]:
        """Return the photos found for the ids, keyed by id."""

    def get_photo(self, photo_id: UUID) -> Photo | None:
        """Return a photo by id, if present."""


@dataclass
class PhotoScoringService:
    """Scores one guess at a time, as the Normal mode does."""

    repository: PhotoRepository
    scoring_mode: ScoringMode = ScoringMode.LOCATION

    def score_photo(self, guess: Guess) -> PhotoScoreResult | None:
        """Score a guess, or return None if the photo does not exist."""
        photo = self.repository.get_photo(guess.photo_id)
        if photo is None:
            return None
        return score_guess(guess, photo, self.scoring_mode)
