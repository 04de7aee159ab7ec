"""
Ingestion Pipeline - Validates an analysis payload and folds it in atomically.

A payload is either rejected as a whole (no session, no profile change) or
recorded as one new session plus the matching profile update.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from ..inference.base import AnalysisProvider, VideoPayload
from ..models.profile import Profile
from ..models.session import Session
from .errors import InferenceError, ValidationError
from .profile_service import ProfileService
from .validation import Invalid, validate_analysis_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionOutcome:
    """Committed state after a successful ingestion."""
    profile: Profile
    session: Session


class IngestionPipeline:
    """
    Drives validation, the profile engine and both stores for one payload.
    """

    def __init__(self, service: ProfileService, provider: Optional[AnalysisProvider] = None):
        """
        Args:
            service: Profile service that owns the mutation lock and the stores
            provider: Analysis service client, required only for analyze_and_ingest
        """
        self.service = service
        self.provider = provider

    async def ingest(self, payload: Any) -> IngestionOutcome:
        """
        Validate and commit one raw analysis result.

        Args:
            payload: Decoded JSON returned by the analysis service

        Returns:
            IngestionOutcome with the committed profile and the new session

        Raises:
            ValidationError: Naming the first failing field; nothing is changed
            NotFoundError: If the profile has not been loaded
            StorageError: If persistence fails; nothing is changed
        """
        outcome = validate_analysis_payload(payload)
        if isinstance(outcome, Invalid):
            logger.warning(
                f"Rejected analysis payload: {outcome.field_path}: {outcome.reason}",
                extra={"extra_fields": {
                    "profile_id": self.service.profile_id,
                    "field": outcome.field_path,
                }},
            )
            raise ValidationError(outcome.field_path, outcome.reason)

        profile, session = await self.service.commit_analysis(outcome.result)
        return IngestionOutcome(profile=profile, session=session)

    async def analyze_and_ingest(self, video: VideoPayload) -> IngestionOutcome:
        """
        Send a workout video to the analysis service and ingest the result.

        Raises:
            InferenceError: If no provider is configured or the service call fails
        """
        if self.provider is None:
            raise InferenceError("analysis service not configured")

        start_time = time.time()
        payload = await self.provider.analyze(video)
        logger.info(
            f"Video analyzed: {video.filename}",
            extra={"extra_fields": {
                "profile_id": self.service.profile_id,
                "media_type": video.media_type,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }},
        )
        return await self.ingest(payload)
