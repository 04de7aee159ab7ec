"""
Analysis Provider Factory - Creates the configured analysis service client.
"""

from typing import Optional
from .base import AnalysisProvider
from .http_provider import HttpAnalysisProvider


def create_analysis_provider(
    provider: str = "http",
    api_key: Optional[str] = "",
    base_url: Optional[str] = None,
    model: Optional[str] = None,
    **kwargs
) -> Optional[AnalysisProvider]:
    """
    Create an analysis provider instance based on configuration.

    Args:
        provider: Provider name ("http")
        api_key: API key for the analysis service
        base_url: Service base URL (uses provider default if not specified)
        model: Model name (uses service default if not specified)
        **kwargs: Additional provider-specific parameters (e.g. timeout)

    Returns:
        AnalysisProvider instance, or None if api_key is not configured
    """
    if not api_key:
        return None

    if provider == "http":
        params = {"api_key": api_key, "model": model}
        if base_url:
            params["base_url"] = base_url
        params.update(kwargs)
        return HttpAnalysisProvider(**params)

    raise ValueError(f"Unsupported analysis provider: {provider}")
