"""
Archetype ranking and filtering.

Ranks scored archetypes by affinity and applies card filters for display.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from royalemeta.models.card import DeckCard
from royalemeta.models.deck import ScoredArchetype

# Number of results shown when no explicit limit is given
DEFAULT_RESULT_LIMIT = 50

EVOLUTION_SLOT_INDICES = (0, 1)


def rank_archetypes(scored: list[ScoredArchetype]) -> list[ScoredArchetype]:
    """Sort by score descending (best first). Returns a new list."""
    return sorted(scored, key=lambda s: s.score, reverse=True)


class SlotConstraint(str, Enum):
    """Where a filtered card must appear in a deck."""

    EVOLUTION_SLOT = "evolution_slot"
    ANYWHERE = "anywhere"


@dataclass(frozen=True, slots=True)
class DeckFilter:
    """Require a card in a deck, optionally in an evolution slot."""

    card_id: int
    slot: SlotConstraint = SlotConstraint.ANYWHERE


def _filter_matches(cards: Sequence[DeckCard], deck_filter: DeckFilter) -> bool:
    if deck_filter.slot is SlotConstraint.EVOLUTION_SLOT:
        return any(
            index < len(cards) and cards[index].id == deck_filter.card_id
            for index in EVOLUTION_SLOT_INDICES
        )
    return any(card.id == deck_filter.card_id for card in cards)


def deck_matches(cards: Sequence[DeckCard], filters: Sequence[DeckFilter]) -> bool:
    """True if the deck satisfies every filter (AND)."""
    return all(_filter_matches(cards, f) for f in filters)


def filter_archetypes(
    ranked: list[ScoredArchetype],
    filters: Sequence[DeckFilter] = (),
    limit: int | None = DEFAULT_RESULT_LIMIT,
) -> list[ScoredArchetype]:
    """
    Select ranked archetypes matching all filters, keeping rank order.

    Args:
        ranked: Archetypes, already ranked
        filters: Card filters combined with AND; empty matches everything
        limit: Max results to return (None for all)
    """
    matches = [s for s in ranked if deck_matches(s.cards, filters)]
    return matches if limit is None else matches[:limit]
