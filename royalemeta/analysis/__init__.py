from royalemeta.analysis.affinity import DEFAULT_WEIGHTS, ScoringWeights, score_archetype
from royalemeta.analysis.aggregator import aggregate, canonical_key
from royalemeta.analysis.extractor import deck_from_battle_log, extract_deck, extract_decks
from royalemeta.analysis.fallback import FallbackResult, Strategy, first_success
from royalemeta.analysis.levels import base_level, display_level
from royalemeta.analysis.ranker import (
    DeckFilter,
    SlotConstraint,
    deck_matches,
    filter_archetypes,
    rank_archetypes,
)
from royalemeta.analysis.sampler import (
    build_ranking_paths,
    resolve_latest_season,
    sample_top_players,
)

__all__ = [
    "DEFAULT_WEIGHTS",
    "DeckFilter",
    "FallbackResult",
    "ScoringWeights",
    "SlotConstraint",
    "Strategy",
    "aggregate",
    "base_level",
    "build_ranking_paths",
    "canonical_key",
    "deck_from_battle_log",
    "deck_matches",
    "display_level",
    "extract_deck",
    "extract_decks",
    "filter_archetypes",
    "first_success",
    "rank_archetypes",
    "resolve_latest_season",
    "sample_top_players",
    "score_archetype",
]
