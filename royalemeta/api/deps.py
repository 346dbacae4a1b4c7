"""
Shared API dependencies.

One AnalysisSession per process; the HTTP surface serves a single user
session, matching the single-page client it backs.
"""

from collections.abc import AsyncGenerator

from royalemeta.clients.royale_api import RoyaleApiClient
from royalemeta.config import settings
from royalemeta.services.session import AnalysisSession

_session: AnalysisSession | None = None


def get_session() -> AnalysisSession:
    """Get the process-wide analysis session."""
    global _session
    if _session is None:
        _session = AnalysisSession(recent_tags_limit=settings.recent_tags_limit)
    return _session


def reset_session() -> None:
    """Drop the session (for testing)."""
    global _session
    _session = None


async def get_api_client() -> AsyncGenerator[RoyaleApiClient, None]:
    """Provide a game API client for the duration of a request."""
    async with RoyaleApiClient() as client:
        yield client
