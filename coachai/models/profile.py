"""
Profile Models - The single local athlete profile and its date-keyed logs.
"""

import uuid
from datetime import date, datetime
from typing import ClassVar, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


class DailyCalorieEntry(BaseModel):
    """Calories burned on one calendar day."""
    value_field: ClassVar[str] = "calories"

    date: date
    calories: float


class WeightEntry(BaseModel):
    """Body weight recorded on one calendar day."""
    value_field: ClassVar[str] = "weight"

    date: date
    weight: float  # kg


class ScheduledWorkout(BaseModel):
    """A planned workout. Kept as entered; 'upcoming' is a query."""
    date: Optional[str] = None  # YYYY-MM-DD
    time: Optional[str] = None  # HH:MM
    exercise: Optional[str] = None


class ManualActivity(BaseModel):
    """Manually logged activity."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    date: date
    exercise: str
    duration_sec: int
    calories: float
    intensity_level: str = "Medium"  # Low, Medium, High


class Profile(BaseModel):
    """Athlete profile with derived aggregates."""
    profile_id: str
    name: str = "Athlete"
    avatar: str = ""

    # Streak
    streak: int = Field(default=0, ge=0)
    last_activity_at: Optional[datetime] = None

    # Totals
    total_calories: float = Field(default=0, ge=0)
    total_hours: float = Field(default=0, ge=0)

    badges: List[str] = Field(default_factory=list)

    # Series (unique dates, ascending)
    daily_calories_log: List[DailyCalorieEntry] = Field(default_factory=list)
    weight_history: List[WeightEntry] = Field(default_factory=list)

    scheduled_workouts: List[ScheduledWorkout] = Field(default_factory=list)
    manual_activity_log: List[ManualActivity] = Field(default_factory=list)

    # Health profile
    dob: Optional[date] = None
    weight: Optional[float] = None
    age: Optional[int] = None  # derived from dob
    program: Optional[str] = None  # derived from age and weight

    # Bumped on every committed mutation
    version: int = 0

    @field_validator("badges")
    @classmethod
    def _unique_badges(cls, badges: List[str]) -> List[str]:
        return list(dict.fromkeys(badges))

    @field_validator("daily_calories_log")
    @classmethod
    def _normalize_calorie_log(cls, entries: List[DailyCalorieEntry]) -> List[DailyCalorieEntry]:
        totals: Dict[date, float] = {}
        for entry in entries:
            totals[entry.date] = totals.get(entry.date, 0) + entry.calories
        return [DailyCalorieEntry(date=d, calories=c) for d, c in sorted(totals.items())]

    @field_validator("weight_history")
    @classmethod
    def _normalize_weight_history(cls, entries: List[WeightEntry]) -> List[WeightEntry]:
        latest: Dict[date, float] = {}
        for entry in entries:
            latest[entry.date] = entry.weight
        return [WeightEntry(date=d, weight=w) for d, w in sorted(latest.items())]
