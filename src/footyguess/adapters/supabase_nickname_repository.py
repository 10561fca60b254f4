"""Supabase repository for device nicknames."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from footyguess.adapters.supabase_queries import execute
from footyguess.services.submissions import DeviceNicknameRepository


@dataclass
class SupabaseDeviceNicknameRepository(DeviceNicknameRepository):
    """Supabase implementation for device nicknames."""

    client: Client

    def upsert_device_nickname(
        self, device_token: str, nickname: str, consent_given_at: datetime
    ) -> None:
        """Create or update the nickname row for a device token."""
        execute(
            self.client.table("device_nicknames").upsert(
                {
                    "anon_device_token": device_token,
                    "nickname": nickname,
                    "consent_given_at": consent_given_at.isoformat(),
                },
                on_conflict="anon_device_token",
            )
        )
