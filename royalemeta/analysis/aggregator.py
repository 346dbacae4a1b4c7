"""
Archetype aggregation.

Collapses sampled decks into unique card sets. Slot order does not affect
identity, but the first deck seen for a card set keeps its slot order as the
archetype's representative list, since slots 0 and 1 are the evolution slots.
"""

from collections.abc import Iterable

from royalemeta.models.deck import Archetype, SampledDeck

KEY_DELIMITER = ","


def canonical_key(card_ids: Iterable[int]) -> str:
    """Order-independent identity for a set of card ids."""
    return KEY_DELIMITER.join(str(card_id) for card_id in sorted(card_ids))


def aggregate(decks: Iterable[SampledDeck]) -> dict[str, Archetype]:
    """
    Group decks by canonical key.

    Returns:
        Mapping of canonical key to Archetype (count and max rating per key)
    """
    archetypes: dict[str, Archetype] = {}

    for deck in decks:
        key = canonical_key(deck.card_ids)
        existing = archetypes.get(key)
        if existing is None:
            archetypes[key] = Archetype(
                key=key,
                cards=list(deck.cards),
                count=1,
                max_rating=deck.rating,
            )
        else:
            existing.count += 1
            existing.max_rating = max(existing.max_rating, deck.rating)

    return archetypes
