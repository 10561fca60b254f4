"""Scoring rules for location and year guesses."""

from collections.abc import Mapping
from enum import Enum
from math import floor
from uuid import UUID

from footyguess.domain.errors import PhotoNotFoundError
from footyguess.domain.geo import distance_km
from footyguess.domain.models import Guess, Photo, PhotoScoreResult

MAX_LOCATION_SCORE = 10000
MAX_TIME_SCORE = 10000
KM_PENALTY = 5
YEAR_PENALTY = 400


class ScoringMode(str, Enum):
    """Which score components count towards a photo's total."""

    LOCATION = "location"
    LOCATION_AND_TIME = "location_and_time"

    @property
    def includes_time(self) -> bool:
        return self is ScoringMode.LOCATION_AND_TIME


def location_score(km_error: float) -> int:
    """Return 10000 minus 5 points per km, clamped to [0, 10000]."""
    return _clamp(
        _round_half_up(MAX_LOCATION_SCORE - km_error * KM_PENALTY),
        0,
        MAX_LOCATION_SCORE,
    )


def time_score(year_error: float) -> int:
    """Return 10000 minus 400 points per year off, clamped to [0, 10000]."""
    return _clamp(
        _round_half_up(MAX_TIME_SCORE - abs(year_error) * YEAR_PENALTY),
        0,
        MAX_TIME_SCORE,
    )


def score_guess(guess: Guess, photo: Photo, mode: ScoringMode) -> PhotoScoreResult:
    """Score one guess against its photo.

    The year breakdown is reported whenever both years are known, but only
    counts towards ``total_score`` when the mode includes time.
    """
    km_error = distance_km(guess.guessed_lat, guess.guessed_lon, photo.lat, photo.lon)
    loc_score = location_score(km_error)

    year_error: int | None = None
    yr_score: int | None = None
    if guess.guessed_year is not None and photo.year is not None:
        year_error = abs(guess.guessed_year - photo.year)
        yr_score = time_score(year_error)

    total = loc_score
    if mode.includes_time:
        total += yr_score or 0

    return PhotoScoreResult(
        photo_id=photo.id,
        location_score=loc_score,
        time_score=yr_score,
        total_score=total,
        km_error=round(km_error, 1),
        year_error=year_error,
        correct_lat=photo.lat,
        correct_lon=photo.lon,
        correct_year=photo.year,
        photo_url=photo.photo_url,
        event_name=photo.event_name,
        description=photo.description,
        place=photo.place,
        source_url=photo.source_url,
        license=photo.license,
        credit=photo.credit,
    )


def score_guesses(
    guesses: list[Guess], photos: Mapping[UUID, Photo], mode: ScoringMode
) -> list[PhotoScoreResult]:
    """Score each guess in order; every guessed photo must be present."""
    results = []
    for guess in guesses:
        photo = photos.get(guess.photo_id)
        if photo is None:
            raise PhotoNotFoundError(f"Photo not found: {guess.photo_id}")
        results.append(score_guess(guess, photo, mode))
    return results


def _round_half_up(value: float) -> int:
    return floor(value + 0.5)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
