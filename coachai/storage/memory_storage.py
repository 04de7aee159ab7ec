"""
In-memory Storage Implementation, for tests and embedding.
"""

from typing import Dict, Optional

from .interface import StorageInterface


class MemoryStorage(StorageInterface):
    """Keeps records in a dict for the lifetime of the process."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self.records: Dict[str, bytes] = dict(initial or {})

    async def save(self, key: str, content: bytes | str) -> None:
        self.records[key] = content.encode("utf-8") if isinstance(content, str) else bytes(content)

    async def load(self, key: str) -> Optional[bytes]:
        return self.records.get(key)

    async def exists(self, key: str) -> bool:
        return key in self.records

    async def delete(self, key: str) -> bool:
        return self.records.pop(key, None) is not None
