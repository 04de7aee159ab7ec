"""
Tests for storage backends and the profile/session record stores.
"""

from datetime import datetime
from unittest.mock import patch

import pytest

from coachai.core.errors import NotFoundError, StorageError
from coachai.models import AnalysisResult, Session
from coachai.storage import (
    PROFILE_KEY,
    SESSIONS_KEY,
    LocalStorage,
    MemoryStorage,
    ProfileStore,
    SessionStore,
)
from coachai.core import profile_engine as engine


def _session(session_id, payload):
    return Session(
        id=session_id,
        created_at=datetime(2024, 1, 10, 12, 0).astimezone(),
        data=AnalysisResult.model_validate(payload),
    )


class TestLocalStorage:

    @pytest.mark.asyncio
    async def test_save_and_load(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        await storage.save("profile", '{"a": 1}')
        assert await storage.load("profile") == b'{"a": 1}'
        assert (tmp_path / "profile.json").exists()
        assert not (tmp_path / "profile.json.tmp").exists()

    @pytest.mark.asyncio
    async def test_overwrite(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        await storage.save("profile", b"old")
        await storage.save("profile", b"new")
        assert await storage.load("profile") == b"new"

    @pytest.mark.asyncio
    async def test_missing_key(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        assert await storage.load("nothing") is None
        assert await storage.exists("nothing") is False
        assert await storage.delete("nothing") is False

    @pytest.mark.asyncio
    async def test_delete(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        await storage.save("sessions", b"[]")
        assert await storage.exists("sessions")
        assert await storage.delete("sessions") is True
        assert not await storage.exists("sessions")

    @pytest.mark.asyncio
    async def test_path_traversal_rejected(self, tmp_path):
        storage = LocalStorage(str(tmp_path / "data"))
        with pytest.raises(StorageError):
            await storage.save("../escape", b"x")
        assert not (tmp_path / "escape.json").exists()

    @pytest.mark.asyncio
    async def test_write_failure_raises_storage_error(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        await storage.save("profile", b"kept")
        with patch("aiofiles.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageError) as exc_info:
                await storage.save("profile", b"lost")
        assert exc_info.value.key == "profile"
        assert await storage.load("profile") == b"kept"


class TestMemoryStorage:

    @pytest.mark.asyncio
    async def test_round_trip(self):
        storage = MemoryStorage()
        await storage.save("k", "text")
        assert await storage.load("k") == b"text"
        assert await storage.delete("k") is True
        assert await storage.load("k") is None


class TestProfileStore:

    @pytest.mark.asyncio
    async def test_absent(self):
        assert await ProfileStore(MemoryStorage()).get() is None

    @pytest.mark.asyncio
    async def test_round_trip(self, clock):
        store = ProfileStore(MemoryStorage())
        profile = engine.new_profile("athlete@coach.ai", clock=clock)
        await store.put(profile)
        assert await store.get() == profile

    @pytest.mark.asyncio
    async def test_corrupt_reads_as_absent(self):
        store = ProfileStore(MemoryStorage({PROFILE_KEY: b'{"streak": "many"}'}))
        assert await store.get() is None


class TestSessionStore:

    @pytest.mark.asyncio
    async def test_empty(self):
        assert await SessionStore(MemoryStorage()).list() == []

    @pytest.mark.asyncio
    async def test_prepend_keeps_most_recent_first(self, make_payload):
        store = SessionStore(MemoryStorage())
        history = []
        for session_id in ("s1", "s2", "s3"):
            history = SessionStore.prepend(history, _session(session_id, make_payload()))
        await store.put_all(history)
        assert [s.id for s in await store.list()] == ["s3", "s2", "s1"]

    @pytest.mark.asyncio
    async def test_get(self, make_payload):
        store = SessionStore(MemoryStorage())
        await store.put_all([_session("s1", make_payload())])
        assert (await store.get("s1")).data.session_summary.sport == "Strength"
        with pytest.raises(NotFoundError):
            await store.get("missing")

    @pytest.mark.asyncio
    async def test_corrupt_reads_as_empty(self):
        store = SessionStore(MemoryStorage({SESSIONS_KEY: b"[{]"}))
        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_restore(self, make_payload):
        storage = MemoryStorage()
        store = SessionStore(storage)
        await store.put_all([_session("s1", make_payload())])
        raw = await store.load_raw()

        await store.put_all([])
        await store.restore(raw)
        assert storage.records[SESSIONS_KEY] == raw

        await store.restore(None)
        assert SESSIONS_KEY not in storage.records
