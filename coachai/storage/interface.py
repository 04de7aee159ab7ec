"""
Storage Interface - Abstract base class for all storage implementations.
A dumb key-value blob store: the engine owns the record format, the storage
only moves bytes.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageInterface(ABC):
    """
    Abstract storage interface that defines the contract for all storage implementations.
    Implementations raise StorageError on I/O failure; absence is not an error.
    """

    @abstractmethod
    async def save(self, key: str, content: bytes | str) -> None:
        """
        Save content under the specified key, replacing any previous value.

        Args:
            key: Record key (e.g., "profile", "sessions")
            content: Serialized record

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def load(self, key: str) -> Optional[bytes]:
        """
        Load content stored under the specified key.

        Args:
            key: Record key

        Returns:
            Optional[bytes]: Stored bytes, or None if the key is absent

        Raises:
            StorageError: If the read fails
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Check if a record exists under the specified key.

        Args:
            key: Record key

        Returns:
            bool: True if the record exists
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete the record under the specified key.

        Args:
            key: Record key

        Returns:
            bool: True if a record was deleted, False if it was absent

        Raises:
            StorageError: If the delete fails
        """
        pass
