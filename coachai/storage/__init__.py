"""Storage module - provides interface and implementations for data persistence."""

from .interface import StorageInterface
from .local_storage import LocalStorage
from .memory_storage import MemoryStorage
from .profile_storage import ProfileStore, SessionStore, PROFILE_KEY, SESSIONS_KEY

__all__ = [
    'StorageInterface', 'LocalStorage', 'MemoryStorage',
    'ProfileStore', 'SessionStore', 'PROFILE_KEY', 'SESSIONS_KEY',
]
