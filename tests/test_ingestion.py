"""
Tests for the ingestion pipeline: validation, atomic commit and rollback.
"""

import logging
from datetime import date
from unittest.mock import AsyncMock

import pytest

from coachai.core.errors import InferenceError, NotFoundError, StorageError, ValidationError
from coachai.core.ingestion import IngestionPipeline
from coachai.core.profile_service import ProfileService
from coachai.inference.base import VideoPayload
from coachai.models import DailyCalorieEntry
from coachai.storage import PROFILE_KEY, SESSIONS_KEY

TODAY = date(2024, 1, 10)


@pytest.fixture
def pipeline(service):
    return IngestionPipeline(service)


class TestIngest:

    @pytest.mark.asyncio
    async def test_first_session_end_to_end(self, service, pipeline, make_payload):
        await service.load()
        outcome = await pipeline.ingest(make_payload())

        assert outcome.profile.total_calories == 400
        assert outcome.profile.total_hours == pytest.approx(0.5)
        assert outcome.profile.streak == 1
        assert outcome.profile.daily_calories_log == [DailyCalorieEntry(date=TODAY, calories=400)]

        sessions = await service.list_sessions()
        assert [s.id for s in sessions] == [outcome.session.id]
        assert await service.get_session(outcome.session.id) == outcome.session
        assert service.snapshot() == outcome.profile

    @pytest.mark.asyncio
    async def test_sessions_most_recent_first(self, service, pipeline, make_payload, clock):
        await service.load()
        first = await pipeline.ingest(make_payload())
        clock.advance(hours=2)
        second = await pipeline.ingest(make_payload())
        sessions = await service.list_sessions()
        assert [s.id for s in sessions] == [second.session.id, first.session.id]
        assert second.profile.version == first.profile.version + 1

    @pytest.mark.asyncio
    async def test_invalid_payload_changes_nothing(self, service, storage, pipeline, make_payload):
        await service.load()
        before_records = dict(storage.records)
        before_profile = service.snapshot()

        def bad(p):
            p["exercise_detection"][0]["confidence"] = 1.5

        with pytest.raises(ValidationError) as exc_info:
            await pipeline.ingest(make_payload(bad))

        assert exc_info.value.field == "exercise_detection.0.confidence"
        assert storage.records == before_records
        assert service.snapshot() == before_profile
        assert await service.list_sessions() == []

    @pytest.mark.asyncio
    async def test_infinite_calories_change_nothing(self, service, storage, pipeline, make_payload, clock):
        await service.load()
        await service.apply_weight_update(82)
        before_records = dict(storage.records)

        def huge(p):
            p["session_summary"]["calories_estimate"] = float("inf")

        with pytest.raises(ValidationError) as exc_info:
            await pipeline.ingest(make_payload(huge))

        assert exc_info.value.field == "session_summary.calories_estimate"
        assert storage.records == before_records

        reloaded = await ProfileService(storage, "athlete@coach.ai", clock=clock).load()
        assert reloaded.weight == 82
        assert reloaded.total_calories == 0
        assert reloaded.version == 1

    @pytest.mark.asyncio
    async def test_requires_loaded_profile(self, pipeline, make_payload, storage):
        with pytest.raises(NotFoundError):
            await pipeline.ingest(make_payload())
        assert SESSIONS_KEY not in storage.records


class TestAtomicity:

    @pytest.mark.asyncio
    async def test_profile_write_failure_removes_new_sessions_record(
        self, service, storage, pipeline, make_payload
    ):
        await service.load()
        storage.fail_saves.add(PROFILE_KEY)

        with pytest.raises(StorageError):
            await pipeline.ingest(make_payload())

        assert SESSIONS_KEY not in storage.records
        assert service.snapshot().total_calories == 0

    @pytest.mark.asyncio
    async def test_profile_write_failure_restores_previous_sessions(
        self, service, storage, pipeline, make_payload
    ):
        await service.load()
        kept = await pipeline.ingest(make_payload())
        sessions_before = storage.records[SESSIONS_KEY]

        storage.fail_saves.add(PROFILE_KEY)
        with pytest.raises(StorageError):
            await pipeline.ingest(make_payload())

        assert storage.records[SESSIONS_KEY] == sessions_before
        assert [s.id for s in await service.list_sessions()] == [kept.session.id]
        assert service.snapshot() == kept.profile

    @pytest.mark.asyncio
    async def test_sessions_write_failure_leaves_profile(self, service, storage, pipeline, make_payload):
        await service.load()
        before = service.snapshot()
        storage.fail_saves.add(SESSIONS_KEY)

        with pytest.raises(StorageError) as exc_info:
            await pipeline.ingest(make_payload())

        assert exc_info.value.key == SESSIONS_KEY
        assert service.snapshot() == before

    @pytest.mark.asyncio
    async def test_failed_rollback_is_logged(self, service, storage, pipeline, make_payload, caplog):
        await service.load()
        storage.fail_saves.add(PROFILE_KEY)
        storage.fail_deletes = True

        with caplog.at_level(logging.CRITICAL):
            with pytest.raises(StorageError) as exc_info:
                await pipeline.ingest(make_payload())

        assert exc_info.value.key == PROFILE_KEY
        assert any(r.levelno == logging.CRITICAL for r in caplog.records)


class TestAnalyzeAndIngest:

    @pytest.mark.asyncio
    async def test_analyzes_then_ingests(self, service, make_payload):
        await service.load()
        provider = AsyncMock()
        provider.analyze.return_value = make_payload()
        pipeline = IngestionPipeline(service, provider=provider)
        video = VideoPayload(data=b"\x00\x01", media_type="video/mp4")

        outcome = await pipeline.analyze_and_ingest(video)

        provider.analyze.assert_awaited_once_with(video)
        assert outcome.profile.total_calories == 400

    @pytest.mark.asyncio
    async def test_without_provider(self, service, pipeline):
        await service.load()
        with pytest.raises(InferenceError):
            await pipeline.analyze_and_ingest(VideoPayload(data=b"x", media_type="video/mp4"))

    @pytest.mark.asyncio
    async def test_service_failure_changes_nothing(self, service, storage):
        await service.load()
        before = dict(storage.records)
        provider = AsyncMock()
        provider.analyze.side_effect = InferenceError("HTTP 500", 500)
        pipeline = IngestionPipeline(service, provider=provider)

        with pytest.raises(InferenceError):
            await pipeline.analyze_and_ingest(VideoPayload(data=b"x", media_type="video/mp4"))
        assert storage.records == before

    @pytest.mark.asyncio
    async def test_malformed_service_response_rejected(self, service, make_payload):
        await service.load()
        provider = AsyncMock()
        provider.analyze.return_value = make_payload(lambda p: p.pop("session_summary"))
        pipeline = IngestionPipeline(service, provider=provider)

        with pytest.raises(ValidationError) as exc_info:
            await pipeline.analyze_and_ingest(VideoPayload(data=b"x", media_type="video/mp4"))
        assert exc_info.value.field == "session_summary"
        assert await service.list_sessions() == []
