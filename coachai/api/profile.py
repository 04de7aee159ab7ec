"""
Profile API endpoints - Read the profile and apply direct mutations.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from ..core import queries
from ..core.profile_service import ProfileService
from ..models import ManualActivity, Profile, ScheduledWorkout
from .deps import get_profile_service

router = APIRouter(prefix="/profile", tags=["profile"])


class AccountSetup(BaseModel):
    """Account setup request."""
    name: str = Field(..., min_length=1, max_length=100)
    avatar: str = ""
    dob: Optional[date] = None
    weight: Optional[float] = None  # kg


class WeightUpdate(BaseModel):
    weight: float  # kg


class ManualActivityCreate(BaseModel):
    """Manual log entry as submitted by the client."""
    date: date
    exercise: str
    duration_sec: int
    calories: float
    intensity_level: str = "Medium"


@router.get("", response_model=Profile)
async def get_profile(service: ProfileService = Depends(get_profile_service)):
    """
    Get the current profile.

    Returns:
        Profile: Last committed snapshot
    """
    return service.snapshot()


@router.post("", response_model=Profile)
async def setup_account(
    body: AccountSetup,
    service: ProfileService = Depends(get_profile_service),
):
    """
    Account setup. Sets name, avatar, date of birth and weight, and
    re-derives age and program. Training history is kept.

    Args:
        body: Name, avatar, date of birth and weight

    Returns:
        Profile: Updated profile
    """
    return await service.setup_account(
        name=body.name, avatar=body.avatar, dob=body.dob, weight=body.weight
    )


@router.post("/weight", response_model=Profile)
async def update_weight(
    body: WeightUpdate,
    service: ProfileService = Depends(get_profile_service),
):
    """Record today's weight."""
    return await service.apply_weight_update(body.weight)


@router.post("/activities", response_model=Profile, status_code=status.HTTP_201_CREATED)
async def log_manual_activity(
    body: ManualActivityCreate,
    service: ProfileService = Depends(get_profile_service),
):
    """
    Log a manual activity.

    Args:
        body: Activity date, exercise, duration, calories and intensity

    Returns:
        Profile: Updated profile
    """
    activity = ManualActivity(**body.model_dump())
    return await service.apply_manual_activity(activity)


@router.post("/schedule", response_model=Profile, status_code=status.HTTP_201_CREATED)
async def schedule_workout(
    body: ScheduledWorkout,
    service: ProfileService = Depends(get_profile_service),
):
    """Plan a workout for a future date and time."""
    return await service.apply_schedule(body)


@router.get("/schedule/upcoming", response_model=List[ScheduledWorkout])
async def get_upcoming_workouts(service: ProfileService = Depends(get_profile_service)):
    """Scheduled workouts that have not started yet, soonest first."""
    return queries.upcoming_workouts(service.snapshot(), service.clock())


@router.get("/dashboard")
async def get_dashboard(service: ProfileService = Depends(get_profile_service)) -> Dict[str, Any]:
    """
    Everything the dashboard shows in one call.

    Returns:
        dict with profile, calorie chart (last 7 days logged), recent weights,
        next workouts, recent sessions and the latest weekly plan
    """
    profile = service.snapshot()
    sessions = await service.list_sessions()
    plan = queries.latest_plan(sessions)
    return {
        "profile": profile.model_dump(mode="json"),
        "calorie_chart": [e.model_dump(mode="json") for e in queries.calorie_chart(profile)],
        "recent_weights": [e.model_dump(mode="json") for e in queries.recent_weights(profile)],
        "upcoming_workouts": [
            w.model_dump(mode="json")
            for w in queries.upcoming_workouts(profile, service.clock(), limit=3)
        ],
        "recent_sessions": [s.model_dump(mode="json") for s in queries.recent_sessions(sessions)],
        "latest_plan": plan.model_dump(mode="json") if plan else None,
    }
