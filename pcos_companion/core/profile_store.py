"""
Profile Store - Owns the Profile record and is its only writer.
Every mutation is merged onto the current value and persisted immediately.
"""

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from ..models import Profile, ProfileUpdate
from ..storage import StorageInterface

logger = logging.getLogger(__name__)


class ProfileStore:
    """
    Holds the in-memory Profile and writes the full record to storage on each update.

    Persistence failures are logged and never surfaced: the in-memory profile
    remains authoritative for the session.
    """

    def __init__(self, storage: StorageInterface, key: str = "pcosProfile"):
        """
        Args:
            storage: Key-value storage implementation
            key: Storage key for the profile record
        """
        self.storage = storage
        self.key = key
        self._profile = Profile()

    async def load(self) -> Profile:
        """Replace the in-memory profile with the persisted one, or defaults if there is none."""
        data = await self.storage.get(self.key)
        if data is None:
            self._profile = Profile()
            return self._profile

        try:
            self._profile = Profile.model_validate(data)
        except ValidationError as e:
            logger.warning(
                f"Stored profile is invalid, starting with defaults: {e.error_count()} errors",
                extra={"extra_fields": {"storage_key": self.key}}
            )
            self._profile = Profile()
        return self._profile

    def get(self) -> Profile:
        return self._profile

    def is_complete(self) -> bool:
        return self._profile.completed_setup

    async def update(self, changes: Union[ProfileUpdate, Mapping[str, Any]]) -> Profile:
        """
        Merge changes onto the current profile and persist it.

        The merge is shallow for every field: nested values such as height
        are replaced as a whole.

        Args:
            changes: ProfileUpdate, or a mapping with snake_case or camelCase keys

        Returns:
            Profile: The merged profile

        Raises:
            pydantic.ValidationError: If changes contain unknown fields or invalid values
        """
        if not isinstance(changes, ProfileUpdate):
            changes = ProfileUpdate.model_validate(dict(changes))

        merged = {**self._profile.model_dump(), **changes.changes()}
        self._profile = Profile.model_validate(merged)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Profile updated: fields={sorted(changes.changes())}")

        await self._persist()
        return self._profile

    async def seed_name(self, display_name: Optional[str]) -> bool:
        """
        Take the name from the identity provider, only if neither a name nor
        a completed setup exists yet.

        Returns:
            bool: True if the profile was changed
        """
        if not display_name or self._profile.name or self._profile.completed_setup:
            return False
        await self.update(ProfileUpdate(name=display_name))
        return True

    async def reset(self) -> Profile:
        """Restore defaults and remove the persisted record (logout)."""
        self._profile = Profile()
        await self.storage.delete(self.key)
        logger.info("Profile reset to defaults")
        return self._profile

    async def _persist(self) -> None:
        ok = await self.storage.set(self.key, self._profile.to_storage())
        if not ok:
            logger.error(
                "Failed to persist profile, keeping in-memory value",
                extra={"extra_fields": {"storage_key": self.key}}
            )
