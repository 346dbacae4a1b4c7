"""
Command-line meta analysis.

Loads a player, runs a full meta analysis and logs the best-fitting decks.

Usage:
    python -m royalemeta.jobs.analyze_meta P802VR --top 10
"""

import argparse
import asyncio
import logging

from royalemeta.analysis.affinity import ScoringWeights
from royalemeta.clients.royale_api import RoyaleApiClient
from royalemeta.config import settings
from royalemeta.models.deck import ScoredArchetype
from royalemeta.models.failure import KnownError
from royalemeta.services.meta_analysis import MetaAnalyzer
from royalemeta.services.player_search import search_player
from royalemeta.services.session import AnalysisSession

logger = logging.getLogger(__name__)

DEFAULT_TOP = 10


def format_archetype(rank: int, scored: ScoredArchetype) -> str:
    """One-line summary of a ranked archetype."""
    names = ", ".join(card.name for card in scored.cards)
    line = (
        f"#{rank} score={scored.score:.1f} ({scored.affinity_percentage:.0f}%) "
        f"avg={scored.avg_level:.1f} elite={scored.elite_count}/8 uses={scored.count} "
        f"rating={scored.max_rating} [{names}]"
    )
    if scored.is_best_synergy:
        line += " BEST SYNERGY"
    if scored.missing_evolutions:
        line += " missing evos: " + ", ".join(m.name for m in scored.missing_evolutions)
    return line


async def run_analysis(
    tag: str,
    sample_size: int = settings.sample_size,
    batch_size: int = settings.batch_size,
    top: int = DEFAULT_TOP,
) -> list[ScoredArchetype]:
    """
    Search a player and analyze the meta against their collection.

    Returns:
        All ranked archetypes
    """
    session = AnalysisSession()

    async with RoyaleApiClient() as client:
        profile = await search_player(session, client, tag)
        logger.info("Analyzing meta for %s (%s)", profile.name, profile.tag)

        analyzer = MetaAnalyzer(
            client,
            session,
            sample_size=sample_size,
            batch_size=batch_size,
            weights=ScoringWeights.from_settings(settings),
        )
        ranked = await analyzer.run(
            on_progress=lambda pct: logger.info("Scanning battle logs... %d%%", pct)
        )

    for rank, scored in enumerate(ranked[:top], start=1):
        logger.info("%s", format_archetype(rank, scored))
    logger.info("Analysis complete. %d archetypes ranked", len(ranked))
    return ranked


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for running a meta analysis."""
    parser = argparse.ArgumentParser(description="Rank meta decks for a player's collection")
    parser.add_argument("tag", help="Player tag, with or without the leading #")
    parser.add_argument("--sample-size", type=int, default=settings.sample_size)
    parser.add_argument("--batch-size", type=int, default=settings.batch_size)
    parser.add_argument("--top", type=int, default=DEFAULT_TOP)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        asyncio.run(run_analysis(args.tag, args.sample_size, args.batch_size, args.top))
    except KnownError as e:
        logger.error("%s", e.message)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
