"""Profile Repository - User profiles and notification preferences."""
from typing import Any, Dict, Optional

from .base import BaseRepository
from storefront.models import NotificationPreferences


class ProfileRepository(BaseRepository):
    """user_profiles table operations."""

    async def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        result = await self._run(
            lambda: self.client.table("user_profiles")
            .select("id, email, raw_user_meta_data")
            .eq("id", user_id)
            .execute()
        )
        return result.data[0] if result.data else None

    async def get_preferences(self, user_id: str) -> Optional[NotificationPreferences]:
        """Notification preferences, or None when the profile does not exist."""
        profile = await self.get_profile(user_id)
        if profile is None:
            return None
        return NotificationPreferences.from_metadata(profile.get("raw_user_meta_data"))

    async def update_preferences(self, user_id: str, preferences: NotificationPreferences) -> bool:
        """Merge preferences into the stored metadata. False when the profile does not exist."""
        profile = await self.get_profile(user_id)
        if profile is None:
            return False

        metadata = preferences.to_metadata(profile.get("raw_user_meta_data"))
        await self._run(
            lambda: self.client.table("user_profiles")
            .update({"raw_user_meta_data": metadata})
            .eq("id", user_id)
            .execute()
        )
        return True
