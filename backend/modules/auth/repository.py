"""
Profile repository.

Reads and updates rows of the ``profiles`` table. Used with the caller's
session client, so row-level security limits it to the caller's own row.
"""

from typing import Optional

from shared.repository import BaseRepository
from .models import UserProfile


class ProfileRepository(BaseRepository[UserProfile]):
    """Repository for user profiles."""

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        result = self._db.table("profiles").select("*").eq("id", user_id).execute()
        if not result.data:
            return None
        return UserProfile(**result.data[0])

    def update_full_name(self, user_id: str, full_name: str) -> None:
        self._db.table("profiles").update({"full_name": full_name}).eq("id", user_id).execute()
