"""Resolves the caller's identity from request headers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Header, HTTPException, Request, status

if TYPE_CHECKING:
    from footyguess.containers import AppContainer


@dataclass(frozen=True)
class RequestIdentity:
    """Authenticated user id and/or anonymous device token of a request."""

    user_id: UUID | None
    device_token: str | None


def resolve_request_identity(
    request: Request,
    authorization: str | None = Header(default=None),
    x_device_token: str | None = Header(default=None),
) -> RequestIdentity:
    """Resolve a bearer token through Supabase auth and read the device token."""
    container: AppContainer = request.app.state.container
    user_id = None
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
        user_id = container.auth_client.get_user_id(token.strip())
        if user_id is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    device_token = x_device_token.strip() if x_device_token else None
    return RequestIdentity(user_id=user_id, device_token=device_token or None)
