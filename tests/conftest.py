"""
Shared test fixtures and configuration.
"""

import copy
import os
from datetime import datetime, timedelta

import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("STORAGE_TYPE", "memory")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_CONSOLE_ENABLED", "false")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("ANALYSIS_API_KEY", "")

from coachai.core.errors import StorageError  # noqa: E402
from coachai.core.profile_service import ProfileService  # noqa: E402
from coachai.storage import MemoryStorage  # noqa: E402


class FixedClock:
    """Deterministic time source; starts at local noon so date math never straddles midnight."""

    def __init__(self, start: datetime):
        self.now = start.astimezone()

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class FlakyStorage(MemoryStorage):
    """MemoryStorage whose writes to selected keys fail on demand."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_saves = set()
        self.fail_deletes = False

    async def save(self, key, content):
        if key in self.fail_saves:
            raise StorageError(key, "disk full")
        await super().save(key, content)

    async def delete(self, key):
        if self.fail_deletes:
            raise StorageError(key, "read-only filesystem")
        return await super().delete(key)


VALID_PAYLOAD = {
    "session_summary": {
        "sport": "Strength",
        "exercise_type": "Back Squat",
        "estimated_duration_sec": 1800,
        "intensity_level": "High",
        "calories_estimate": 400,
        "score": 82,
    },
    "exercise_detection": [
        {"label": "Back Squat", "timestamp_range_sec": [0, 45], "confidence": 0.93, "score": 80},
    ],
    "form_feedback": [
        {
            "timestamp_range_sec": [12, 18],
            "issue": "Knees caving in",
            "cue": "Push knees out over toes",
            "severity": "moderate",
            "visual_overlay_hint": "arrow from knees outward",
            "body_focus": "knees",
        },
    ],
    "drill_recommendations": [
        {"name": "Banded squats", "purpose": "Knee tracking", "sets": 3, "reps": 12, "rest_sec": 60},
    ],
    "personalized_plan": {
        "weekly_focus": "Knee stability",
        "sessions_per_week": 3,
        "progression_rules": "Add 2.5 kg when all reps are clean",
        "milestones": ["Clean depth at bodyweight", "3x5 at 1x bodyweight"],
    },
}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 1, 10, 12, 0))


@pytest.fixture
def make_payload():
    """Factory for analysis payloads; pass a mutator to tweak the copy."""
    def _make(mutate=None):
        payload = copy.deepcopy(VALID_PAYLOAD)
        if mutate is not None:
            mutate(payload)
        return payload
    return _make


@pytest.fixture
def storage():
    return FlakyStorage()


@pytest.fixture
def service(storage, clock):
    return ProfileService(storage, "athlete@coach.ai", clock=clock)
