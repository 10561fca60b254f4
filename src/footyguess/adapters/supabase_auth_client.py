"""Resolves Supabase access tokens to user ids."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from supabase import AuthError, Client

logger = logging.getLogger(__name__)


class AuthClient(Protocol):
    """Interface for resolving an access token to a user."""

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id for a valid token, else None."""


@dataclass
class SupabaseAuthClient(AuthClient):
    """Validates access tokens against Supabase Auth."""

    client: Client

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the authenticated user's id, or None if the token is rejected."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError as exc:
            logger.warning("Rejected access token", extra={"reason": str(exc)})
            return None
        if response is None or response.user is None:
            return None
        return UUID(str(response.user.id))
