"""
Profile and Session Storage - JSON records on top of StorageInterface.

Two independent records are kept: "profile" (one Profile) and "sessions"
(all sessions, most recent first). An absent or unparsable record reads as
uninitialized.
"""

import logging
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from ..core.errors import NotFoundError
from ..models.profile import Profile
from ..models.session import Session
from .interface import StorageInterface

logger = logging.getLogger(__name__)

PROFILE_KEY = "profile"
SESSIONS_KEY = "sessions"

_session_list = TypeAdapter(List[Session])


class ProfileStore:
    """Reads and writes the single profile record."""

    def __init__(self, storage: StorageInterface, key: str = PROFILE_KEY):
        """
        Initialize profile storage.

        Args:
            storage: StorageInterface implementation
            key: Record key for the profile
        """
        self.storage = storage
        self.key = key

    async def get(self) -> Optional[Profile]:
        """
        Load the stored profile.

        Returns:
            Optional[Profile]: Profile, or None if absent or corrupt
        """
        content = await self.storage.load(self.key)
        if content is None:
            return None

        try:
            return Profile.model_validate_json(content)
        except (PydanticValidationError, ValueError) as e:
            logger.warning(f"Discarding corrupt profile record: {e}")
            return None

    @staticmethod
    def encode(profile: Profile) -> bytes:
        return profile.model_dump_json(indent=2).encode("utf-8")

    async def put(self, profile: Profile) -> None:
        """Persist the profile, replacing the previous record."""
        await self.storage.save(self.key, self.encode(profile))


class SessionStore:
    """Append-ordered collection of analysis sessions, most recent first."""

    def __init__(self, storage: StorageInterface, key: str = SESSIONS_KEY):
        self.storage = storage
        self.key = key

    async def load_raw(self) -> Optional[bytes]:
        """Stored bytes as-is, used to restore the record on rollback."""
        return await self.storage.load(self.key)

    @staticmethod
    def decode(content: Optional[bytes]) -> List[Session]:
        if content is None:
            return []
        try:
            return _session_list.validate_json(content)
        except (PydanticValidationError, ValueError) as e:
            logger.warning(f"Discarding corrupt sessions record: {e}")
            return []

    @staticmethod
    def encode(sessions: List[Session]) -> bytes:
        return _session_list.dump_json(sessions, indent=2)

    async def list(self) -> List[Session]:
        """
        List all sessions.

        Returns:
            List[Session]: Sessions, most recent first
        """
        return self.decode(await self.load_raw())

    async def get(self, session_id: str) -> Session:
        """
        Get one session by id.

        Raises:
            NotFoundError: If no session has this id
        """
        for session in await self.list():
            if session.id == session_id:
                return session
        raise NotFoundError(f"session {session_id}")

    @staticmethod
    def prepend(sessions: List[Session], session: Session) -> List[Session]:
        """New ordering with `session` first; the input list is untouched."""
        return [session, *sessions]

    async def put_all(self, sessions: List[Session]) -> None:
        await self.storage.save(self.key, self.encode(sessions))

    async def restore(self, content: Optional[bytes]) -> None:
        """Put back a previously loaded raw record (or remove it if it was absent)."""
        if content is None:
            await self.storage.delete(self.key)
        else:
            await self.storage.save(self.key, content)
