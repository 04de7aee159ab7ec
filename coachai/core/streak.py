"""
Activity streak state machine.

The state is always judged between the profile's last activity date and a
reference date:

- NO_HISTORY: no activity recorded yet
- SAME_DAY: reference date equals the last activity date
- CONSECUTIVE: reference date is exactly one day after it
- BROKEN: larger gap, or a reference date before the last activity

Two transitions exist. `passive_recompute` runs when a profile is loaded and
only decays a stale streak; `active_increment` runs when an activity is
actually recorded.
"""

from datetime import date
from enum import Enum
from typing import Optional

from .temporal import DateLike, is_next_day, same_day


class StreakState(str, Enum):
    NO_HISTORY = "no_history"
    SAME_DAY = "same_day"
    CONSECUTIVE = "consecutive"
    BROKEN = "broken"


def classify(last_activity: Optional[DateLike], reference: DateLike) -> StreakState:
    if last_activity is None:
        return StreakState.NO_HISTORY
    if same_day(last_activity, reference):
        return StreakState.SAME_DAY
    if is_next_day(last_activity, reference):
        return StreakState.CONSECUTIVE
    return StreakState.BROKEN


def passive_recompute(last_activity: Optional[DateLike], streak: int, today: date) -> int:
    """Streak to display on load; never registers a new activity."""
    state = classify(last_activity, today)
    if state in (StreakState.SAME_DAY, StreakState.CONSECUTIVE):
        return streak
    return 0


def active_increment(last_activity: Optional[DateLike], streak: int, event_date: DateLike) -> int:
    """Streak after recording an activity on `event_date`."""
    state = classify(last_activity, event_date)
    if state == StreakState.SAME_DAY:
        return streak
    if state == StreakState.CONSECUTIVE:
        return streak + 1
    return 1
