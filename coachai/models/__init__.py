"""Models module."""

from .profile import Profile, DailyCalorieEntry, WeightEntry, ScheduledWorkout, ManualActivity
from .analysis import (
    AnalysisResult, SessionSummary, ExerciseDetection, FormFeedback,
    DrillRecommendation, PersonalizedPlan,
)
from .session import Session, SessionList

__all__ = [
    'Profile', 'DailyCalorieEntry', 'WeightEntry', 'ScheduledWorkout', 'ManualActivity',
    'AnalysisResult', 'SessionSummary', 'ExerciseDetection', 'FormFeedback',
    'DrillRecommendation', 'PersonalizedPlan',
    'Session', 'SessionList'
]
