"""
Profile aggregate engine.

Pure functions over the Profile aggregate. Every entry point validates first,
then works on a deep copy and returns it; the input profile is never mutated,
so a rejected call leaves the caller's state exactly as it was.
"""

import logging
import math
from datetime import date, datetime
from typing import Any, Mapping, Optional, Union

from ..models.analysis import AnalysisResult
from ..models.profile import (
    DailyCalorieEntry,
    ManualActivity,
    Profile,
    ScheduledWorkout,
    WeightEntry,
)
from .badges import BadgeContext, evaluate_badges
from .demographics import calculate_age, program_label
from .errors import NotFoundError, ValidationError
from .series import add, merge_by_date, replace
from .streak import active_increment, passive_recompute
from .temporal import Clock, local_date, system_clock
from .validation import Invalid, validate_analysis_payload

logger = logging.getLogger(__name__)

DEFAULT_DOB = date(1990, 1, 1)
DEFAULT_WEIGHT_KG = 75.0
FALLBACK_AGE = 25  # used for the program label when no date of birth is known


def _require(profile: Optional[Profile]) -> Profile:
    if profile is None:
        raise NotFoundError("profile")
    return profile


def _positive(field: str, value: Any) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ValidationError(field, "must be a number")
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(field, "must be greater than zero")


def _refresh_demographics(profile: Profile, on: date) -> None:
    profile.age = calculate_age(profile.dob, on) if profile.dob else None
    if profile.weight is not None:
        profile.program = program_label(
            profile.age if profile.age is not None else FALLBACK_AGE,
            profile.weight,
        )


def _record_activity(
    profile: Profile,
    calories: float,
    duration_sec: float,
    occurred_at: datetime,
    analysis: Optional[AnalysisResult] = None,
) -> Profile:
    """Fold one activity into totals, calorie log, streak and badges."""
    updated = profile.model_copy(deep=True)
    event_day = local_date(occurred_at)

    updated.total_calories += calories
    updated.total_hours += duration_sec / 3600
    updated.daily_calories_log = merge_by_date(
        updated.daily_calories_log, event_day, calories, add, DailyCalorieEntry
    )
    updated.streak = active_increment(profile.last_activity_at, profile.streak, event_day)
    # The last activity day never moves backwards
    if profile.last_activity_at is None or event_day >= local_date(profile.last_activity_at):
        updated.last_activity_at = occurred_at

    badges = evaluate_badges(
        updated.badges,
        BadgeContext(
            streak=updated.streak,
            total_calories=updated.total_calories,
            analysis=analysis,
        ),
    )
    for badge in badges[len(updated.badges):]:
        logger.info(
            f"Badge unlocked: {badge}",
            extra={"extra_fields": {"profile_id": updated.profile_id, "badge": badge}},
        )
    updated.badges = badges
    return updated


def new_profile(
    profile_id: str,
    name: str = "Athlete",
    avatar: str = "",
    dob: Optional[date] = None,
    weight: Optional[float] = None,
    clock: Clock = system_clock,
) -> Profile:
    """
    Build a fresh profile for account initialization.

    Missing date of birth and weight fall back to defaults; the weight history
    is seeded with today's weight.
    """
    if not profile_id or not profile_id.strip():
        raise ValidationError("profile_id", "must not be empty")
    final_weight = DEFAULT_WEIGHT_KG if weight is None else weight
    _positive("weight", final_weight)

    today = local_date(clock())
    profile = Profile(
        profile_id=profile_id,
        name=name,
        avatar=avatar,
        dob=dob or DEFAULT_DOB,
        weight=final_weight,
        weight_history=[WeightEntry(date=today, weight=final_weight)],
    )
    _refresh_demographics(profile, today)
    return profile


def load_profile(profile: Optional[Profile], clock: Clock = system_clock) -> Profile:
    """Decay a stale streak and refresh derived demographics before display."""
    profile = _require(profile)
    today = local_date(clock())
    loaded = profile.model_copy(deep=True)
    loaded.streak = passive_recompute(profile.last_activity_at, profile.streak, today)
    _refresh_demographics(loaded, today)
    if loaded.streak != profile.streak:
        logger.info(
            f"Streak expired: {profile.streak} -> {loaded.streak}",
            extra={"extra_fields": {"profile_id": profile.profile_id}},
        )
    return loaded


def apply_analysis_result(
    profile: Optional[Profile],
    result: Union[AnalysisResult, Mapping[str, Any]],
    clock: Clock = system_clock,
) -> Profile:
    """
    Fold one analyzed session into the profile, keyed by "now".

    Raises:
        ValidationError: If a raw result fails schema validation
        NotFoundError: If there is no profile
    """
    profile = _require(profile)
    outcome = validate_analysis_payload(result)
    if isinstance(outcome, Invalid):
        raise ValidationError(outcome.field_path, outcome.reason)

    summary = outcome.result.session_summary
    return _record_activity(
        profile,
        calories=summary.calories_estimate,
        duration_sec=summary.estimated_duration_sec,
        occurred_at=clock(),
        analysis=outcome.result,
    )


def apply_manual_activity(
    profile: Optional[Profile],
    activity: ManualActivity,
    clock: Clock = system_clock,
) -> Profile:
    """
    Record a manually logged activity, keyed by the activity's own date.

    Raises:
        ValidationError: If duration or calories are not positive, or the exercise is blank
        NotFoundError: If there is no profile
    """
    profile = _require(profile)
    _positive("duration_sec", activity.duration_sec)
    _positive("calories", activity.calories)
    if not activity.exercise or not activity.exercise.strip():
        raise ValidationError("exercise", "must not be empty")

    now = clock()
    occurred_at = datetime.combine(activity.date, now.timetz())
    updated = _record_activity(
        profile,
        calories=activity.calories,
        duration_sec=activity.duration_sec,
        occurred_at=occurred_at,
    )
    updated.manual_activity_log.append(activity.model_copy())
    return updated


def apply_weight_update(
    profile: Optional[Profile],
    weight: float,
    clock: Clock = system_clock,
) -> Profile:
    """
    Record today's weight (replacing any entry for today) and re-derive the program.

    Raises:
        ValidationError: If weight is not positive
        NotFoundError: If there is no profile
    """
    profile = _require(profile)
    _positive("weight", weight)

    today = local_date(clock())
    updated = profile.model_copy(deep=True)
    updated.weight = weight
    updated.weight_history = merge_by_date(
        updated.weight_history, today, weight, replace, WeightEntry
    )
    _refresh_demographics(updated, today)
    return updated


def apply_profile_details(
    profile: Optional[Profile],
    name: Optional[str] = None,
    avatar: Optional[str] = None,
    dob: Optional[date] = None,
    weight: Optional[float] = None,
    clock: Clock = system_clock,
) -> Profile:
    """
    Update account details; only the arguments given are changed.

    A new weight is recorded like `apply_weight_update`. Age and program are
    re-derived afterwards.

    Raises:
        ValidationError: If name is blank, dob is in the future, or weight is not positive
        NotFoundError: If there is no profile
    """
    profile = _require(profile)
    today = local_date(clock())
    if name is not None and not name.strip():
        raise ValidationError("name", "must not be empty")
    if dob is not None and dob > today:
        raise ValidationError("dob", "must not be in the future")
    if weight is not None:
        _positive("weight", weight)

    updated = profile.model_copy(deep=True)
    if name is not None:
        updated.name = name.strip()
    if avatar is not None:
        updated.avatar = avatar
    if dob is not None:
        updated.dob = dob
    if weight is not None:
        updated.weight = weight
        updated.weight_history = merge_by_date(
            updated.weight_history, today, weight, replace, WeightEntry
        )
    _refresh_demographics(updated, today)
    return updated


def apply_schedule(profile: Optional[Profile], workout: ScheduledWorkout) -> Profile:
    """
    Append a planned workout.

    Raises:
        ValidationError: If date, time or exercise is missing or blank
        NotFoundError: If there is no profile
    """
    profile = _require(profile)
    for field in ("date", "time", "exercise"):
        value = getattr(workout, field)
        if value is None or not str(value).strip():
            raise ValidationError(field, "must not be empty")

    updated = profile.model_copy(deep=True)
    updated.scheduled_workouts.append(workout.model_copy())
    return updated
