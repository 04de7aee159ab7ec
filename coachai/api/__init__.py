"""API module."""

from .profile import router as profile_router
from .sessions import router as sessions_router
from .reports import router as reports_router

__all__ = ['profile_router', 'sessions_router', 'reports_router']
