"""
Local Filesystem Storage Implementation.
Each key is stored as one JSON file under a base directory.
"""

import logging
import aiofiles
import aiofiles.os
from pathlib import Path
from typing import Optional

from ..core.errors import StorageError
from .interface import StorageInterface

logger = logging.getLogger(__name__)


class LocalStorage(StorageInterface):
    """
    Local filesystem storage implementation.
    Writes go to a temporary file that is then renamed over the target, so a
    crashed write never leaves a half-written record behind.
    """

    def __init__(self, base_dir: str = "./data", suffix: str = ".json"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Base directory for all stored records
            suffix: File suffix appended to each key
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.suffix = suffix

    def _get_full_path(self, key: str) -> Path:
        """Convert a key to a full absolute path within base directory."""
        full_path = (self.base_dir / f"{key}{self.suffix}").resolve()

        # Security check: ensure path is within base_dir
        if not full_path.is_relative_to(self.base_dir):
            raise StorageError(key, "path traversal detected")

        return full_path

    async def save(self, key: str, content: bytes | str) -> None:
        """Save content to local filesystem."""
        full_path = self._get_full_path(key)
        tmp_path = full_path.with_name(full_path.name + ".tmp")
        data = content.encode("utf-8") if isinstance(content, str) else content
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.replace(tmp_path, full_path)
        except OSError as e:
            logger.error(f"Error saving record {key}: {e}", exc_info=True)
            raise StorageError(key, str(e)) from e

    async def load(self, key: str) -> Optional[bytes]:
        """Load content from local filesystem."""
        full_path = self._get_full_path(key)
        try:
            if not full_path.exists():
                return None
            async with aiofiles.open(full_path, "rb") as f:
                return await f.read()
        except OSError as e:
            logger.error(f"Error loading record {key}: {e}", exc_info=True)
            raise StorageError(key, str(e)) from e

    async def exists(self, key: str) -> bool:
        """Check if record exists."""
        return self._get_full_path(key).exists()

    async def delete(self, key: str) -> bool:
        """Delete record from local filesystem."""
        full_path = self._get_full_path(key)
        try:
            if not full_path.exists():
                return False
            await aiofiles.os.remove(full_path)
            return True
        except OSError as e:
            logger.error(f"Error deleting record {key}: {e}", exc_info=True)
            raise StorageError(key, str(e)) from e
