"""One submission per identity per day."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from footyguess.domain.models import DailySubmission, Identity


class SubmissionLookup(Protocol):
    """Lookup of an identity's stored submission."""

    def find_submission(
        self, date_utc: date, identity: Identity
    ) -> DailySubmission | None:
        """Return the submission stored for the identity on the date, if any."""


@dataclass
class DedupGuard:
    """Decides which identity, if any, an attempt is stored under.

    The storage unique constraint on ``(date_utc, identity)`` is what actually
    prevents duplicates; ``find_existing`` is advisory and is not consulted on
    the write path.
    """

    repository: SubmissionLookup

    @staticmethod
    def resolve_identity(
        user_id: UUID | None, device_token: str | None, consent_given: bool
    ) -> Identity | None:
        """Return the persistence identity, or None for an ephemeral attempt."""
        if user_id is not None:
            return Identity.for_user(user_id)
        if device_token and consent_given:
            return Identity.for_device(device_token)
        return None

    @staticmethod
    def lookup_identity(
        user_id: UUID | None, device_token: str | None
    ) -> Identity | None:
        """Return the identity to look submissions up by, ignoring consent."""
        if user_id is not None:
            return Identity.for_user(user_id)
        if device_token:
            return Identity.for_device(device_token)
        return None

    def find_existing(
        self, date_utc: date, identity: Identity
    ) -> DailySubmission | None:
        """Return an existing submission for the identity and date."""
        return self.repository.find_submission(date_utc, identity)
