"""
Card catalog service.

Indexes the game's card list by identifier for rarity, elixir and
evolution lookups.
"""

from collections.abc import Iterable, Iterator

from royalemeta.models.card import CardDefinition, Rarity

# Rarity ordering used when sorting collections (unknown rarity sorts last)
RARITY_WEIGHTS: dict[str, int] = {
    "champion": 5,
    "hero": 5,
    "legendary": 4,
    "epic": 3,
    "rare": 2,
    "common": 1,
}


def rarity_weight(rarity: str | None) -> int:
    """Sort weight for a raw rarity string. Unknown rarities weigh 0."""
    return RARITY_WEIGHTS.get((rarity or "").lower(), 0)


class CardCatalog:
    """
    Lookup of card definitions by identifier.

    Loaded once per session; never mutated after construction.
    """

    def __init__(self, definitions: Iterable[CardDefinition] = ()) -> None:
        self._cards: dict[int, CardDefinition] = {}
        for definition in definitions:
            # First entry wins for duplicate ids
            self._cards.setdefault(definition.id, definition)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards

    def __iter__(self) -> Iterator[CardDefinition]:
        return iter(self._cards.values())

    def get(self, card_id: int) -> CardDefinition | None:
        return self._cards.get(card_id)

    def rarity_of(self, card_id: int, fallback: str | None = None) -> str:
        """
        Resolve a card's rarity.

        Prefers the catalog entry; otherwise the fallback reported by the card
        record itself; otherwise "common". Returned lower-cased.
        """
        definition = self._cards.get(card_id)
        if definition is not None:
            return definition.rarity.value
        return (fallback or Rarity.COMMON.value).lower()

    def elixir_cost(self, card_id: int) -> int | None:
        definition = self._cards.get(card_id)
        return definition.elixir_cost if definition else None

    def evolution_icon(self, card_id: int) -> str | None:
        definition = self._cards.get(card_id)
        return definition.evolution_icon_url if definition else None

    def evolution_cards(self) -> list[CardDefinition]:
        """Evolution-capable cards, sorted by name."""
        return sorted((c for c in self._cards.values() if c.can_evolve), key=lambda c: c.name)

    def champion_cards(self) -> list[CardDefinition]:
        """Champion cards, sorted by name."""
        return sorted(
            (c for c in self._cards.values() if c.rarity is Rarity.CHAMPION),
            key=lambda c: c.name,
        )

    def all_cards_by_rarity(self) -> list[CardDefinition]:
        """All cards ordered by rarity (common first), then name."""
        return sorted(
            self._cards.values(),
            key=lambda c: (rarity_weight(c.rarity.value), c.name),
        )
