"""
Analysis Provider Base - Abstract client for the video analysis service.
Providers only move bytes; validating the result is the ingestion pipeline's job.
"""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict

ANALYSIS_PROMPT = """Analyze this workout video. You are a professional Olympic-level coach.
1. Identify the sport and exercise types specifically.
2. Analyze form, body mechanics, and technique patterns throughout the entire video.
3. Provide specific, timestamped feedback with severity ratings (minor, moderate, severe) and body focus areas (e.g. knees, spine).
4. Suggest drills to fix the specific issues found.
5. Create a one-week training plan based on this performance.
6. Assign a performance score (0-100) for the overall session and for each detected exercise segment based on form accuracy, tempo, and stability.

Return the result in strictly structured JSON format matching the schema provided."""


@dataclass
class VideoPayload:
    """A workout video to analyze."""
    data: bytes
    media_type: str  # e.g. "video/mp4"
    filename: str = "workout.mp4"

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")


class AnalysisProvider(ABC):
    """
    Abstract base class for analysis service clients.
    """

    def __init__(self, api_key: str, base_url: str, model: str | None = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model

    @abstractmethod
    async def analyze(self, video: VideoPayload) -> Dict[str, Any]:
        """
        Analyze one workout video.

        Args:
            video: Video bytes and media type

        Returns:
            Raw decoded JSON result (untrusted, not yet validated)

        Raises:
            InferenceError: If the call fails or the body is not a JSON object
        """
        pass
