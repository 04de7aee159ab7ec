"""
Session Models - Completed video analysis sessions.
"""

from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict

from .analysis import AnalysisResult


class Session(BaseModel):
    """One analyzed workout. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime
    data: AnalysisResult


class SessionList(BaseModel):
    """Sessions, most recent first."""
    sessions: List[Session]
