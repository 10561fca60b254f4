"""Daily challenge submission flow."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from footyguess.domain.models import (
    DailySubmission,
    DailySubmissionCommand,
    DailySubmissionResult,
    Identity,
    IdentityKind,
    NewSubmission,
    SubmissionCheck,
    SubmissionDetails,
)
from footyguess.domain.scoring import ScoringMode, score_guesses
from footyguess.services.clock import Clock
from footyguess.services.dedup import DedupGuard
from footyguess.services.photos import PhotoRepository
from footyguess.services.ranking import RankCalculator
from footyguess.services.validation import SubmissionValidator

logger = logging.getLogger(__name__)


class SubmissionRepository(Protocol):
    """Write access to daily submissions."""

    def insert_submission(self, submission: NewSubmission) -> DailySubmission:
        """Insert one row and return it with its server-assigned fields.

        Raises ``DuplicateSubmissionError`` on a ``(date_utc, identity)``
        unique violation and ``TransientStoreError`` when storage is down.
        """


class DeviceNicknameRepository(Protocol):
    """Remembers the nickname an anonymous device chose."""

    def upsert_device_nickname(
        self, device_token: str, nickname: str, consent_given_at: datetime
    ) -> None:
        """Create or replace the nickname for a device token."""


@dataclass
class SubmissionPersister:
    """Records exactly one submission row per call."""

    repository: SubmissionRepository

    def persist(self, submission: NewSubmission) -> DailySubmission:
        """Insert the submission; duplicates surface as DuplicateSubmissionError."""
        stored = self.repository.insert_submission(submission)
        logger.info(
            "Daily submission stored",
            extra={
                "submission_id": str(stored.id),
                "date_utc": str(stored.date_utc),
                "identity_kind": stored.identity.kind.value,
            },
        )
        return stored


@dataclass
class SubmissionService:
    """Validates, scores, stores and ranks daily challenge attempts."""

    validator: SubmissionValidator
    photo_repository: PhotoRepository
    dedup_guard: DedupGuard
    persister: SubmissionPersister
    rank_calculator: RankCalculator
    nickname_repository: DeviceNicknameRepository
    clock: Clock
    scoring_mode: ScoringMode = ScoringMode.LOCATION

    def submit(
        self,
        command: DailySubmissionCommand,
        user_id: UUID | None = None,
        device_token: str | None = None,
    ) -> DailySubmissionResult:
        """Run one attempt through validation, scoring, storage and ranking.

        Attempts without a persistence identity (anonymous, no consent) are
        scored and given a potential rank but never written.
        """
        identity = self.dedup_guard.resolve_identity(
            user_id, device_token, command.consent_given
        )
        self.validator.validate(command, will_persist=identity is not None)

        photos = self.photo_repository.get_photos(
            [guess.photo_id for guess in command.guesses]
        )
        results = score_guesses(command.guesses, photos, self.scoring_mode)
        total_score = sum(result.total_score for result in results)

        if identity is None:
            potential_rank = self.rank_calculator.potential_rank(
                command.date_utc, total_score, command.total_time_ms
            )
            return DailySubmissionResult(
                submission_id=None,
                total_score=total_score,
                total_time_ms=command.total_time_ms,
                leaderboard_rank=None,
                potential_rank=potential_rank,
                is_saved=False,
                photos=results,
            )

        nickname = command.nickname or ""
        stored = self.persister.persist(
            NewSubmission(
                daily_set_id=command.daily_set_id,
                date_utc=command.date_utc,
                identity=identity,
                nickname=nickname,
                total_score=total_score,
                total_time_ms=command.total_time_ms,
            )
        )
        if identity.kind is IdentityKind.DEVICE:
            self._remember_nickname(identity.value, nickname)

        return DailySubmissionResult(
            submission_id=stored.id,
            total_score=stored.total_score,
            total_time_ms=stored.total_time_ms,
            leaderboard_rank=self.rank_calculator.persisted_rank(stored),
            potential_rank=None,
            is_saved=True,
            photos=results,
        )

    def check(self, date_utc: date, identity: Identity) -> SubmissionCheck:
        """Report whether the identity already has a submission for the date."""
        existing = self.dedup_guard.find_existing(date_utc, identity)
        if existing is None:
            return SubmissionCheck(has_submitted=False, submission=None)
        return SubmissionCheck(
            has_submitted=True,
            submission=SubmissionDetails(
                id=existing.id,
                total_score=existing.total_score,
                total_time_ms=existing.total_time_ms,
                submission_timestamp=existing.submission_timestamp,
                leaderboard_rank=self.rank_calculator.persisted_rank(existing),
            ),
        )

    def _remember_nickname(self, device_token: str, nickname: str) -> None:
        try:
            self.nickname_repository.upsert_device_nickname(
                device_token, nickname, consent_given_at=self.clock.now()
            )
        except Exception:
            # The submission row is already committed at this point.
            logger.exception("Failed to store device nickname")
