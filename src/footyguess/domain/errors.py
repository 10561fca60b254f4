"""Typed errors raised by the daily challenge core.

Every error carries a stable ``code`` that the API layer returns verbatim, so
clients can branch on it without parsing messages.
"""

INVALID_GUESS_COUNT = "INVALID_GUESS_COUNT"
INVALID_NICKNAME = "INVALID_NICKNAME"
INVALID_LIMIT = "INVALID_LIMIT"
PHOTO_ID_MISMATCH = "PHOTO_ID_MISMATCH"
DAILY_SET_MISMATCH = "DAILY_SET_MISMATCH"
DUPLICATE_SUBMISSION = "DUPLICATE_SUBMISSION"
PHOTO_NOT_FOUND = "PHOTO_NOT_FOUND"
DAILY_SET_INCOMPLETE = "DAILY_SET_INCOMPLETE"
STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
STORE_ERROR = "STORE_ERROR"


class DailyChallengeError(Exception):
    """Base class for daily challenge errors."""

    code: str = "DAILY_CHALLENGE_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.message = message


class ValidationError(DailyChallengeError):
    """Malformed or incomplete command; correctable by the player."""


class ConsistencyError(DailyChallengeError):
    """Guesses do not match the daily set (stale client or tampering)."""

    code = PHOTO_ID_MISMATCH


class DuplicateSubmissionError(DailyChallengeError):
    """The identity already has a submission for the date."""

    code = DUPLICATE_SUBMISSION

    def __init__(self, message: str = "Already submitted for this date") -> None:
        super().__init__(message)


class NotFoundError(DailyChallengeError):
    """Data that earlier checks guaranteed is missing; a server-side fault."""


class PhotoNotFoundError(NotFoundError):
    """A photo id could not be resolved to its answer."""

    code = PHOTO_NOT_FOUND


class IncompleteDailySetError(NotFoundError):
    """A published daily set does not hold the expected number of photos."""

    code = DAILY_SET_INCOMPLETE


class TransientStoreError(DailyChallengeError):
    """The persistence layer is unavailable; the caller may retry."""

    code = STORE_UNAVAILABLE


class StoreError(DailyChallengeError):
    """The persistence layer rejected a request; retrying will not help."""

    code = STORE_ERROR
