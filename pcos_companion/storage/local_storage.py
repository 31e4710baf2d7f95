"""
Local Filesystem Storage Implementation.
Each key is stored as one JSON file inside a base directory.
"""

import json
import logging
import os
import re
import aiofiles
from pathlib import Path
from typing import Any, List, Optional
from .interface import StorageInterface

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]+$")


class LocalStorage(StorageInterface):
    """
    Local filesystem key-value storage.
    Survives process restarts; values live in <base_dir>/<key>.json.
    """

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Base directory for all stored records
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Map a key to its file, rejecting anything that could leave base_dir."""
        if not _KEY_PATTERN.match(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.base_dir / f"{key}.json"

    async def get(self, key: str) -> Optional[Any]:
        full_path = self._get_full_path(key)
        if not full_path.exists():
            return None

        try:
            async with aiofiles.open(full_path, 'r', encoding='utf-8') as f:
                content = await f.read()
            return json.loads(content)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(
                f"Stored record {key} is unreadable, treating as empty: {e}",
                extra={"extra_fields": {"storage_key": key, "error": str(e)}}
            )
            return None

    async def set(self, key: str, value: Any) -> bool:
        full_path = self._get_full_path(key)
        tmp_path = full_path.with_suffix(".json.tmp")

        try:
            content = json.dumps(value, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Value for {key} is not JSON-serializable: {e}")
            return False

        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, 'w', encoding='utf-8') as f:
                await f.write(content)
            # Atomic replace
            os.replace(tmp_path, full_path)
            return True
        except OSError as e:
            logger.error(
                f"Error saving record {key}: {e}",
                extra={"extra_fields": {"storage_key": key, "error": str(e)}}
            )
            return False

    async def delete(self, key: str) -> bool:
        full_path = self._get_full_path(key)
        try:
            if full_path.exists():
                full_path.unlink()
                return True
            return False
        except OSError as e:
            logger.error(f"Error deleting record {key}: {e}")
            return False

    async def exists(self, key: str) -> bool:
        try:
            return self._get_full_path(key).exists()
        except ValueError:
            return False

    async def keys(self) -> List[str]:
        if not self.base_dir.exists():
            return []
        return sorted(p.stem for p in self.base_dir.glob("*.json") if p.is_file())
