"""
Profile Service - Serializes mutations and persists committed snapshots.

The engine functions are pure; this service is the single writer around
them. It holds one asyncio.Lock so every mutation reads the most recently
committed snapshot, and it only publishes a new snapshot after it has been
persisted. Readers therefore always see a complete state, old or new.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Tuple

from ..models.analysis import AnalysisResult
from ..models.profile import ManualActivity, Profile, ScheduledWorkout
from ..models.session import Session
from ..storage.interface import StorageInterface
from ..storage.profile_storage import PROFILE_KEY, ProfileStore, SessionStore
from . import profile_engine as engine
from .errors import NotFoundError, StorageError, ValidationError
from .logging_config import ContextAdapter
from .temporal import Clock, system_clock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileDefaults:
    """Values used when the profile is initialized on first use."""
    name: str = "Athlete"
    avatar: str = ""
    dob: Optional[date] = None
    weight: Optional[float] = None


class ProfileService:
    """
    Owns the committed profile snapshot and the session record.
    """

    def __init__(
        self,
        storage: StorageInterface,
        profile_id: str,
        clock: Clock = system_clock,
        defaults: Optional[ProfileDefaults] = None,
    ):
        """
        Initialize the service.

        Args:
            storage: Persistence port shared by the profile and session records
            profile_id: Identity of the local profile
            clock: Time source for every date-dependent rule
            defaults: Values for init-on-first-use
        """
        self.profile_id = profile_id
        self.clock = clock
        self.defaults = defaults or ProfileDefaults()
        self.profiles = ProfileStore(storage)
        self.sessions = SessionStore(storage)
        self._lock = asyncio.Lock()
        self._profile: Optional[Profile] = None
        self.log = ContextAdapter(logger, {"profile_id": profile_id})

    @property
    def is_loaded(self) -> bool:
        return self._profile is not None

    def snapshot(self) -> Profile:
        """
        Last committed profile.

        Raises:
            NotFoundError: If the profile has not been loaded or created
        """
        if self._profile is None:
            raise NotFoundError("profile")
        return self._profile.model_copy(deep=True)

    async def load(self) -> Profile:
        """
        Load the stored profile, initializing it on first use.

        Decays a stale streak before the profile is exposed, and persists the
        result when anything derived changed.
        """
        async with self._lock:
            stored = await self.profiles.get()
            if stored is None:
                stored = engine.new_profile(
                    self.profile_id,
                    name=self.defaults.name,
                    avatar=self.defaults.avatar,
                    dob=self.defaults.dob,
                    weight=self.defaults.weight,
                    clock=self.clock,
                )
                await self.profiles.put(stored)
                self.log.info("Initialized default profile")

            loaded = engine.load_profile(stored, self.clock)
            if loaded != stored:
                loaded.version = stored.version + 1
                await self.profiles.put(loaded)

            self._profile = loaded
            return loaded.model_copy(deep=True)

    async def create_profile(
        self,
        name: str,
        avatar: str = "",
        dob: Optional[date] = None,
        weight: Optional[float] = None,
    ) -> Profile:
        """
        Initialize the profile explicitly (account setup).

        Raises:
            ValidationError: If a profile already exists or inputs are invalid
        """
        async with self._lock:
            if self._profile is not None or await self.profiles.get() is not None:
                raise ValidationError("profile_id", "profile already initialized")

            profile = engine.new_profile(
                self.profile_id, name=name, avatar=avatar, dob=dob, weight=weight, clock=self.clock
            )
            await self.profiles.put(profile)
            self._profile = profile
            self.log.info("Profile created")
            return profile.model_copy(deep=True)

    async def _commit(self, base: Profile, updated: Profile) -> Profile:
        """Persist `updated` as the successor of `base`, then publish it."""
        if self._profile is None or self._profile.version != base.version:
            raise StorageError(PROFILE_KEY, "profile changed since it was read")
        updated.version = base.version + 1
        await self.profiles.put(updated)
        self._profile = updated
        return updated.model_copy(deep=True)

    async def _mutate(self, name: str, mutation: Callable[[Optional[Profile]], Profile]) -> Profile:
        async with self._lock:
            base = self._profile
            updated = mutation(base)
            committed = await self._commit(base, updated)
            self.log.info(
                f"Committed {name}",
                extra={"extra_fields": {
                    "version": committed.version,
                    "streak": committed.streak,
                    "total_calories": committed.total_calories,
                }},
            )
            return committed

    async def apply_manual_activity(self, activity: ManualActivity) -> Profile:
        return await self._mutate(
            "manual activity",
            lambda p: engine.apply_manual_activity(p, activity, self.clock),
        )

    async def apply_weight_update(self, weight: float) -> Profile:
        return await self._mutate(
            "weight update",
            lambda p: engine.apply_weight_update(p, weight, self.clock),
        )

    async def update_details(
        self,
        name: Optional[str] = None,
        avatar: Optional[str] = None,
        dob: Optional[date] = None,
        weight: Optional[float] = None,
    ) -> Profile:
        return await self._mutate(
            "profile details",
            lambda p: engine.apply_profile_details(
                p, name=name, avatar=avatar, dob=dob, weight=weight, clock=self.clock
            ),
        )

    async def setup_account(
        self,
        name: str,
        avatar: str = "",
        dob: Optional[date] = None,
        weight: Optional[float] = None,
    ) -> Profile:
        """
        Account setup: create the profile, or fill in the one created on first use.

        Totals, streak, badges and logs of an existing profile are kept.
        """
        if not self.is_loaded and await self.profiles.get() is None:
            return await self.create_profile(name, avatar=avatar, dob=dob, weight=weight)
        if not self.is_loaded:
            await self.load()
        return await self.update_details(name=name, avatar=avatar, dob=dob, weight=weight)

    async def apply_schedule(self, workout: ScheduledWorkout) -> Profile:
        return await self._mutate(
            "scheduled workout",
            lambda p: engine.apply_schedule(p, workout),
        )

    async def commit_analysis(self, result: AnalysisResult) -> Tuple[Profile, Session]:
        """
        Record a validated analysis as a new session and fold it into the profile.

        The sessions record is written first and the profile second; if the
        profile write fails the previous sessions record is put back, so
        either both records change or neither does.

        Raises:
            NotFoundError: If the profile has not been loaded
            StorageError: If persistence fails
        """
        async with self._lock:
            base = self._profile
            updated = engine.apply_analysis_result(base, result, self.clock)
            session = Session(id=uuid.uuid4().hex, created_at=self.clock(), data=result)

            previous_raw = await self.sessions.load_raw()
            history = SessionStore.decode(previous_raw)
            await self.sessions.put_all(SessionStore.prepend(history, session))

            try:
                committed = await self._commit(base, updated)
            except StorageError:
                await self._restore_sessions(previous_raw)
                raise

            self.log.info(
                f"Committed analysis session {session.id}",
                extra={"extra_fields": {
                    "version": committed.version,
                    "sport": result.session_summary.sport,
                    "calories": result.session_summary.calories_estimate,
                    "streak": committed.streak,
                }},
            )
            return committed, session

    async def _restore_sessions(self, previous_raw: Optional[bytes]) -> None:
        try:
            await self.sessions.restore(previous_raw)
        except StorageError:
            self.log.critical(
                "Sessions record could not be rolled back after a failed profile write",
                exc_info=True,
            )

    async def list_sessions(self) -> List[Session]:
        return await self.sessions.list()

    async def get_session(self, session_id: str) -> Session:
        return await self.sessions.get(session_id)
