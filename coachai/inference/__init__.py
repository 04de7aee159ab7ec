"""Inference module - clients for the external video analysis service."""

from .base import AnalysisProvider, VideoPayload, ANALYSIS_PROMPT
from .http_provider import HttpAnalysisProvider
from .factory import create_analysis_provider

__all__ = [
    'AnalysisProvider',
    'VideoPayload',
    'ANALYSIS_PROMPT',
    'HttpAnalysisProvider',
    'create_analysis_provider',
]
