"""
Meta analysis workflow.

Samples top players, recovers their decks, groups them into archetypes and
ranks the archetypes by affinity to the loaded player's collection.

Data flow:
1. Resolve the latest season (optional; failure just drops one endpoint)
2. Sample up to `sample_size` top players via the endpoint fallback chain
3. Recover decks in batches of `batch_size`, reporting progress per batch
4. Aggregate decks into archetypes
5. Score and rank archetypes
6. Commit results to the session unless a newer analysis superseded this one
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from royalemeta.analysis.affinity import DEFAULT_WEIGHTS, ScoringWeights, score_archetypes
from royalemeta.analysis.aggregator import aggregate
from royalemeta.analysis.extractor import DEFAULT_BATCH_SIZE, DeckSource, extract_decks
from royalemeta.analysis.ranker import rank_archetypes
from royalemeta.analysis.sampler import (
    DEFAULT_SAMPLE_SIZE,
    RankingSource,
    build_ranking_paths,
    resolve_latest_season,
    sample_top_players,
)
from royalemeta.config import MAX_BATCH_SIZE, MAX_SAMPLE_SIZE
from royalemeta.models.deck import ScoredArchetype
from royalemeta.models.failure import (
    AnalysisSupersededError,
    NoProfileLoadedError,
    TransportFailure,
)
from royalemeta.models.profile import PlayerProfile
from royalemeta.services.card_catalog import CardCatalog
from royalemeta.services.player_search import ProfileSource, load_catalog
from royalemeta.services.session import AnalysisSession

logger = logging.getLogger(__name__)


class MetaSource(RankingSource, DeckSource, ProfileSource, Protocol):
    """Everything the workflow needs from the game API."""


class EventKind(str, Enum):
    PROGRESS = "progress"
    RESULT = "result"
    FAILURE = "failure"


@dataclass
class AnalysisEvent:
    """One step of a streamed analysis."""

    kind: EventKind
    progress: int = 0
    results: list[ScoredArchetype] = field(default_factory=list)
    error: Exception | None = None

    @property
    def is_terminal(self) -> bool:
        return self.kind is not EventKind.PROGRESS


class MetaAnalyzer:
    """Runs meta analyses against a session."""

    def __init__(
        self,
        source: MetaSource,
        session: AnalysisSession,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        batch_size: int = DEFAULT_BATCH_SIZE,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
    ) -> None:
        if not 1 <= sample_size <= MAX_SAMPLE_SIZE:
            raise ValueError(f"sample_size must be between 1 and {MAX_SAMPLE_SIZE}")
        if not 1 <= batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}")
        self.source = source
        self.session = session
        self.sample_size = sample_size
        self.batch_size = batch_size
        self.weights = weights
        self._tasks: set[asyncio.Task[None]] = set()

    async def _catalog(self) -> CardCatalog:
        try:
            return await load_catalog(self.session, self.source)
        except TransportFailure as e:
            # Levels fall back to the rarity reported on each owned card
            logger.warning("Card catalog unavailable, scoring without it: %s", e.detail)
            return CardCatalog()

    async def run(
        self,
        profile: PlayerProfile | None = None,
        on_progress: Callable[[int], None] | None = None,
    ) -> list[ScoredArchetype]:
        """
        Run a full analysis.

        Args:
            profile: Collection to score against. Defaults to the session's profile.
            on_progress: Called with 0-100 as decks are recovered

        Returns:
            All archetypes ranked by affinity (best first)

        Raises:
            NoProfileLoadedError: If no profile is given or loaded
            SyncFailure: If no leaderboard data could be obtained
            AnalysisSupersededError: If a newer analysis or profile load replaced
                this run before it finished
        """
        profile = profile or self.session.profile
        if profile is None:
            raise NoProfileLoadedError()

        token = self.session.begin_analysis()

        def report(percent: int) -> None:
            if self.session.report_progress(token, percent) and on_progress:
                on_progress(percent)

        try:
            report(0)
            catalog = await self._catalog()

            season_id = await resolve_latest_season(self.source)
            paths = build_ranking_paths(season_id)
            players = await sample_top_players(self.source, paths, self.sample_size)

            decks = await extract_decks(
                self.source,
                players,
                batch_size=self.batch_size,
                on_progress=report,
                cancelled=lambda: not self.session.is_current(token),
            )
            if not self.session.is_current(token):
                logger.info("Analysis %d superseded after deck extraction", token)
                raise AnalysisSupersededError()

            archetypes = aggregate(decks)
            logger.info("Aggregated %d decks into %d archetypes", len(decks), len(archetypes))

            ranked = rank_archetypes(
                score_archetypes(list(archetypes.values()), profile, catalog, self.weights)
            )
            if not self.session.commit_results(token, ranked):
                raise AnalysisSupersededError()
            return ranked
        finally:
            self.session.finish(token)

    async def stream(self, profile: PlayerProfile | None = None) -> AsyncIterator[AnalysisEvent]:
        """
        Run an analysis, yielding progress events then one terminal event.

        The terminal event is RESULT with the ranked archetypes, or FAILURE
        carrying the exception. Abandoning the iterator does not cancel the
        analysis; its results are committed only if still current.
        """
        queue: asyncio.Queue[AnalysisEvent] = asyncio.Queue()

        def on_progress(percent: int) -> None:
            queue.put_nowait(AnalysisEvent(kind=EventKind.PROGRESS, progress=percent))

        async def runner() -> None:
            try:
                ranked = await self.run(profile, on_progress=on_progress)
            except Exception as e:  # reported as a FAILURE event
                logger.error("Meta analysis failed: %s", e)
                queue.put_nowait(AnalysisEvent(kind=EventKind.FAILURE, error=e))
            else:
                queue.put_nowait(
                    AnalysisEvent(kind=EventKind.RESULT, progress=100, results=ranked)
                )

        task = asyncio.create_task(runner())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        while True:
            event = await queue.get()
            yield event
            if event.is_terminal:
                break
        await task
