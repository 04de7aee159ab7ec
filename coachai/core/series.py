"""
Date-keyed series merge shared by the calorie log and the weight history.
"""

import operator
from datetime import date
from typing import Callable, List, Sequence, TypeVar

from ..models.profile import DailyCalorieEntry, WeightEntry

E = TypeVar("E", DailyCalorieEntry, WeightEntry)

Combine = Callable[[float, float], float]

add: Combine = operator.add


def replace(existing: float, new: float) -> float:
    """Latest value wins."""
    return new


def merge_by_date(
    series: Sequence[E],
    on: date,
    value: float,
    combine: Combine,
    entry_type: type[E],
) -> List[E]:
    """
    Insert or combine a value under a date key, then sort ascending.

    Args:
        series: Existing entries (unique dates); left untouched
        on: Calendar date key
        value: Value to merge
        combine: combine(existing, value) used when the date already exists
        entry_type: Entry model to build (DailyCalorieEntry or WeightEntry)

    Returns:
        New list, strictly ascending by date with unique keys
    """
    field = entry_type.value_field
    merged: List[E] = []
    found = False

    for entry in series:
        if entry.date == on:
            current = getattr(entry, field)
            merged.append(entry.model_copy(update={field: combine(current, value)}))
            found = True
        else:
            merged.append(entry.model_copy())

    if not found:
        merged.append(entry_type(**{"date": on, field: value}))

    merged.sort(key=lambda e: e.date)
    return merged
