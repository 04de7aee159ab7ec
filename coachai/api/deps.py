"""
Request dependencies - the host owns the service objects on app.state.
"""

from fastapi import Request

from ..core.ingestion import IngestionPipeline
from ..core.profile_service import ProfileService


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service


def get_ingestion_pipeline(request: Request) -> IngestionPipeline:
    return request.app.state.ingestion_pipeline
