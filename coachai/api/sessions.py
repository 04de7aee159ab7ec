"""
Session API endpoints - Analysis ingestion and session history.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel

from ..core.ingestion import IngestionPipeline
from ..core.profile_service import ProfileService
from ..inference.base import VideoPayload
from ..models import Profile, Session, SessionList
from .deps import get_ingestion_pipeline, get_profile_service

router = APIRouter(prefix="/sessions", tags=["sessions"])


class IngestionResponse(BaseModel):
    profile: Profile
    session: Session


@router.get("", response_model=SessionList)
async def list_sessions(service: ProfileService = Depends(get_profile_service)):
    """List analyzed sessions, most recent first."""
    return SessionList(sessions=await service.list_sessions())


@router.get("/{session_id}", response_model=Session)
async def get_session(session_id: str, service: ProfileService = Depends(get_profile_service)):
    """Get one analyzed session."""
    return await service.get_session(session_id)


@router.post("/analysis", response_model=IngestionResponse, status_code=status.HTTP_201_CREATED)
async def ingest_analysis(
    payload: Dict[str, Any] = Body(...),
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
):
    """
    Ingest a raw analysis result.

    Args:
        payload: Analysis JSON as returned by the analysis service

    Returns:
        IngestionResponse: Updated profile and the new session
    """
    outcome = await pipeline.ingest(payload)
    return IngestionResponse(profile=outcome.profile, session=outcome.session)


@router.post("/analyze-video", response_model=IngestionResponse, status_code=status.HTTP_201_CREATED)
async def analyze_video(
    video: UploadFile = File(...),
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
):
    """
    Analyze an uploaded workout video and ingest the result.

    Args:
        video: Workout video file

    Returns:
        IngestionResponse: Updated profile and the new session
    """
    if pipeline.provider is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Analysis service not configured"
        )

    if not (video.content_type or "").startswith("video/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type: {video.content_type}"
        )

    data = await video.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty video file")

    outcome = await pipeline.analyze_and_ingest(
        VideoPayload(data=data, media_type=video.content_type, filename=video.filename or "workout.mp4")
    )
    return IngestionResponse(profile=outcome.profile, session=outcome.session)
