"""Read-only views over a profile snapshot and the session history."""

from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from ..models.analysis import PersonalizedPlan
from ..models.profile import DailyCalorieEntry, Profile, ScheduledWorkout, WeightEntry
from ..models.session import Session


def _scheduled_at(workout: ScheduledWorkout, tzinfo) -> Optional[datetime]:
    try:
        when = datetime.fromisoformat(f"{workout.date}T{workout.time}")
    except (TypeError, ValueError):
        return None
    return when.replace(tzinfo=tzinfo) if when.tzinfo is None else when


def upcoming_workouts(profile: Profile, now: datetime, limit: Optional[int] = None) -> List[ScheduledWorkout]:
    """
    Scheduled workouts at or after `now`, soonest first.

    Entries whose date/time cannot be parsed are skipped. Naive schedule
    times are read in `now`'s timezone.
    """
    timed: List[Tuple[datetime, ScheduledWorkout]] = []
    for workout in profile.scheduled_workouts:
        when = _scheduled_at(workout, now.tzinfo)
        if when is not None and when >= now:
            timed.append((when, workout))
    timed.sort(key=lambda item: item[0])
    workouts = [workout for _, workout in timed]
    return workouts[:limit] if limit is not None else workouts


def calorie_chart(profile: Profile, days: int = 7) -> List[DailyCalorieEntry]:
    """Most recent calorie log entries, oldest first."""
    return list(profile.daily_calories_log[-days:]) if days > 0 else []


def recent_weights(profile: Profile, limit: int = 10) -> List[WeightEntry]:
    return list(profile.weight_history[-limit:]) if limit > 0 else []


def recent_sessions(sessions: Sequence[Session], limit: int = 3) -> List[Session]:
    return list(sessions[:limit])


def latest_plan(sessions: Sequence[Session]) -> Optional[PersonalizedPlan]:
    """Plan from the most recent session, if any."""
    return sessions[0].data.personalized_plan if sessions else None
