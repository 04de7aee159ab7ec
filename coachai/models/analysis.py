"""
Analysis Models - Structured result returned by the video analysis service.

Field names are the service's wire names and must not change.
"""

from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["minor", "moderate", "severe"]


class _AnalysisModel(BaseModel):
    # inf and nan are rejected; inf would otherwise satisfy ge=0
    model_config = ConfigDict(allow_inf_nan=False)


class SessionSummary(_AnalysisModel):
    sport: str
    exercise_type: str
    estimated_duration_sec: float = Field(..., ge=0)
    intensity_level: str
    calories_estimate: float = Field(..., ge=0)
    score: Optional[float] = Field(None, ge=0, le=100)  # overall score out of 100


class ExerciseDetection(_AnalysisModel):
    label: str
    timestamp_range_sec: Tuple[float, float]
    confidence: float = Field(..., ge=0, le=1)
    score: Optional[float] = Field(None, ge=0, le=100)


class FormFeedback(_AnalysisModel):
    timestamp_range_sec: Tuple[float, float]
    issue: str
    cue: str
    severity: Severity
    visual_overlay_hint: str
    body_focus: str


class DrillRecommendation(_AnalysisModel):
    name: str
    purpose: str
    sets: int
    reps: int
    rest_sec: float


class PersonalizedPlan(_AnalysisModel):
    weekly_focus: str
    sessions_per_week: int
    progression_rules: str
    milestones: List[str]


class AnalysisResult(_AnalysisModel):
    """Full analysis of one workout video."""
    session_summary: SessionSummary
    exercise_detection: List[ExerciseDetection]
    form_feedback: List[FormFeedback]
    drill_recommendations: List[DrillRecommendation]
    personalized_plan: PersonalizedPlan

    @property
    def has_severe_feedback(self) -> bool:
        return any(f.severity == "severe" for f in self.form_feedback)


TOP_LEVEL_GROUPS = tuple(AnalysisResult.model_fields)
