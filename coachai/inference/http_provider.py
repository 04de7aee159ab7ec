"""
HTTP Analysis Provider.
Posts the video to the analysis service's /analyze endpoint with the response
schema, and returns the decoded JSON body.
"""

import httpx
import json
import logging
import time
from typing import Any, Dict

from ..core.errors import InferenceError
from ..models.analysis import AnalysisResult
from .base import ANALYSIS_PROMPT, AnalysisProvider, VideoPayload

logger = logging.getLogger(__name__)


class HttpAnalysisProvider(AnalysisProvider):
    """
    Client for an HTTP video analysis service using bearer authentication.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "http://localhost:8500/v1",
        model: str | None = None,
        timeout: float = 300.0,
    ):
        super().__init__(api_key, base_url, model)
        self.timeout = timeout

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _build_payload(self, video: VideoPayload) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "prompt": ANALYSIS_PROMPT,
            "video": {
                "media_type": video.media_type,
                "filename": video.filename,
                "data": video.to_base64(),
            },
            "response_schema": AnalysisResult.model_json_schema(),
        }
        if self.model:
            payload["model"] = self.model
        return payload

    async def analyze(self, video: VideoPayload) -> Dict[str, Any]:
        """Send the video to the analysis endpoint."""
        start_time = time.time()
        url = f"{self.base_url}/analyze"

        logger.debug(
            f"Analysis call starting: url={url}, media_type={video.media_type}, "
            f"size={len(video.data)} bytes"
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, json=self._build_payload(video), headers=self._get_headers())
                logger.debug(f"Analysis response status: {resp.status_code}")
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Analysis call failed: HTTP {e.response.status_code}", exc_info=True)
            raise InferenceError(f"HTTP {e.response.status_code}", e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"Analysis call failed: {e}", exc_info=True)
            raise InferenceError(str(e) or type(e).__name__) from e
        except json.JSONDecodeError as e:
            logger.error(f"Analysis response is not JSON: {e}")
            raise InferenceError("response body is not JSON") from e

        if not isinstance(data, dict):
            raise InferenceError("response body is not a JSON object")

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Analysis call completed",
            extra={"extra_fields": {
                "url": url,
                "model": data.get("model", self.model),
                "duration_ms": round(duration_ms, 2),
            }}
        )

        # Some gateways wrap the result as {"result": {...}}
        result = data.get("result", data)
        if not isinstance(result, dict):
            raise InferenceError("result is not a JSON object")
        return result
