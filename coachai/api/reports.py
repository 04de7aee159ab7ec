"""
Report API endpoints - Downloadable profile export.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ..core.profile_service import ProfileService
from ..core.temporal import local_date
from ..reports import render_profile_report, report_filename
from .deps import get_profile_service

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/profile")
async def export_profile(service: ProfileService = Depends(get_profile_service)):
    """
    Export profile, weight log, sessions and manual logs as Markdown.

    Returns:
        Markdown attachment named CoachAI_Data_<date>.md
    """
    profile = service.snapshot()
    sessions = await service.list_sessions()
    content = render_profile_report(profile, sessions, clock=service.clock)
    filename = report_filename(local_date(service.clock()))
    return Response(
        content=content,
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
