"""
Per-session analysis context.

Holds everything that lives for a browsing session: the card catalog, the
currently loaded profile, recent tag history and the last analysis results.

Analyses are guarded by a generation token. Starting an analysis, or loading
a different profile, bumps the generation; results and progress from an older
generation are discarded instead of overwriting newer state.
"""

import logging

from royalemeta.models.deck import ScoredArchetype
from royalemeta.models.profile import PlayerProfile
from royalemeta.services.card_catalog import CardCatalog

logger = logging.getLogger(__name__)

DEFAULT_RECENT_TAGS_LIMIT = 5


class AnalysisSession:
    """Session-scoped caches and analysis state."""

    def __init__(self, recent_tags_limit: int = DEFAULT_RECENT_TAGS_LIMIT) -> None:
        self.recent_tags_limit = recent_tags_limit
        self.catalog: CardCatalog | None = None
        self.profile: PlayerProfile | None = None
        self.results: list[ScoredArchetype] | None = None
        self.recent_tags: list[str] = []
        self.progress = 0
        self.running = False
        self._generation = 0

    def set_profile(self, profile: PlayerProfile) -> None:
        """Replace the loaded profile. Cached results belong to the old one."""
        self.profile = profile
        self.results = None
        self._invalidate()

    def clear_profile(self) -> None:
        self.profile = None
        self.results = None
        self._invalidate()

    def remember_tag(self, tag: str) -> list[str]:
        """Move a tag to the front of the history, capped at the limit."""
        if not tag or tag == "#":
            return self.recent_tags
        rest = [t for t in self.recent_tags if t != tag]
        self.recent_tags = [tag, *rest][: self.recent_tags_limit]
        return self.recent_tags

    def forget_tag(self, tag: str) -> list[str]:
        self.recent_tags = [t for t in self.recent_tags if t != tag]
        return self.recent_tags

    @property
    def generation(self) -> int:
        return self._generation

    def _invalidate(self) -> None:
        self._generation += 1
        self.running = False
        self.progress = 0

    def begin_analysis(self) -> int:
        """Start a new analysis, superseding any in flight. Returns its token."""
        self._generation += 1
        self.running = True
        self.progress = 0
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def report_progress(self, token: int, percent: int) -> bool:
        if not self.is_current(token):
            return False
        self.progress = max(self.progress, min(100, percent))
        return True

    def commit_results(self, token: int, results: list[ScoredArchetype]) -> bool:
        """
        Store analysis results if the analysis is still current.

        Returns:
            True if committed, False if a newer analysis or profile superseded it
        """
        if not self.is_current(token):
            logger.info("Discarding results of superseded analysis %d", token)
            return False
        self.results = results
        self.progress = 100
        return True

    def finish(self, token: int) -> None:
        if self.is_current(token):
            self.running = False
