"""
Leaderboard sampling.

Collects a bounded sample of top players. The game API exposes several
leaderboard shapes and availability varies by season, so known endpoint
variants are tried in priority order until one returns players.
"""

import logging
from typing import Protocol

from royalemeta.analysis.fallback import Strategy, first_success
from royalemeta.models.failure import SyncFailure, TransportFailure
from royalemeta.models.profile import RankedPlayer

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 200


class RankingSource(Protocol):
    async def get_seasons(self) -> list[str]: ...

    async def fetch_rankings(self, path: str) -> list[RankedPlayer]: ...


def build_ranking_paths(season_id: str | None = None) -> list[str]:
    """
    Leaderboard endpoint variants in priority order.

    The season-scoped path is included only when a season id is known.
    """
    paths = ["/locations/global/pathoflegend/players?limit=200"]
    if season_id:
        paths.append(
            f"/locations/global/pathoflegend/seasons/{season_id}/rankings/players?limit=200"
        )
    paths.append("/locations/global/rankings/pathoflegend?limit=100")
    paths.append("/locations/global/rankings/players?limit=100")
    return paths


async def resolve_latest_season(source: RankingSource) -> str | None:
    """Most recent season id, or None if the listing is empty or unavailable."""
    try:
        seasons = await source.get_seasons()
    except TransportFailure as e:
        logger.warning("Seasons lookup failed: %s", e.detail)
        return None
    return seasons[-1] if seasons else None


async def sample_top_players(
    source: RankingSource,
    paths: list[str],
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> list[RankedPlayer]:
    """
    Fetch top players from the first endpoint variant that yields any.

    Args:
        source: Leaderboard data source
        paths: Endpoint variants in priority order
        sample_size: Max players to keep, in upstream rank order

    Returns:
        At most `sample_size` players, best first

    Raises:
        SyncFailure: If every endpoint failed or returned no players
    """

    def _attempt(path: str) -> Strategy[list[RankedPlayer]]:
        return Strategy(label=path, run=lambda: source.fetch_rankings(path))

    result = await first_success(
        [_attempt(path) for path in paths],
        recoverable=(TransportFailure, ValueError),
    )
    if not result.ok or result.value is None:
        logger.error("No leaderboard data from %d endpoints", len(result.attempted))
        raise SyncFailure(attempted=result.attempted)

    players = result.value[:sample_size]
    logger.info("Sampled %d players from %s", len(players), result.source)
    return players
