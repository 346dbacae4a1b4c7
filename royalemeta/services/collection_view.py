"""
Collection and deck views for display.

Sorting of a player's collection and per-card level annotations for a
recommended deck.
"""

from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key

from royalemeta.analysis.levels import display_level, levels_to_max
from royalemeta.analysis.ranker import EVOLUTION_SLOT_INDICES
from royalemeta.models.card import DeckCard, OwnedCard
from royalemeta.models.profile import PlayerProfile
from royalemeta.services.card_catalog import CardCatalog, rarity_weight


class CollectionSort(str, Enum):
    LEVEL = "level"
    ELIXIR = "elixir"
    RARITY = "rarity"
    EVOLUTION = "evo"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def sort_collection(
    cards: list[OwnedCard],
    catalog: CardCatalog,
    sort_by: CollectionSort = CollectionSort.LEVEL,
    order: SortOrder = SortOrder.DESC,
) -> list[OwnedCard]:
    """
    Sort a collection for display.

    Descending order puts the highest level / elixir / rarity first; the
    evolution sort puts unlocked evolutions first, then orders by level.
    Ties fall back to name. Ascending order is the exact reverse.
    """

    def compare(a: OwnedCard, b: OwnedCard) -> int:
        if sort_by is CollectionSort.ELIXIR:
            result = (catalog.elixir_cost(b.id) or 0) - (catalog.elixir_cost(a.id) or 0)
        elif sort_by is CollectionSort.RARITY:
            result = rarity_weight(catalog.rarity_of(b.id, b.rarity)) - rarity_weight(
                catalog.rarity_of(a.id, a.rarity)
            )
        elif sort_by is CollectionSort.EVOLUTION and a.has_evolution != b.has_evolution:
            result = 1 if b.has_evolution else -1
        else:
            result = display_level(b, catalog) - display_level(a, catalog)

        if result == 0:
            result = (a.name > b.name) - (a.name < b.name)
        return result if order is SortOrder.DESC else -result

    return sorted(cards, key=cmp_to_key(compare))


@dataclass(frozen=True, slots=True)
class DeckSlotView:
    """A deck card annotated with the player's progress on it."""

    card: DeckCard
    player_level: int  # 0 when the card is not owned
    levels_to_max: int
    is_maxed: bool
    is_evolution_slot: bool


def deck_slot_views(
    cards: list[DeckCard],
    profile: PlayerProfile,
    catalog: CardCatalog,
    elite_level: int = 15,
) -> list[DeckSlotView]:
    """Annotate each deck card with the player's display level."""
    views: list[DeckSlotView] = []
    for index, card in enumerate(cards):
        owned = profile.get_card(card.id)
        level = display_level(owned, catalog) if owned else 0
        views.append(
            DeckSlotView(
                card=card,
                player_level=level,
                levels_to_max=levels_to_max(owned, catalog, elite_level),
                is_maxed=level >= elite_level,
                is_evolution_slot=index in EVOLUTION_SLOT_INDICES and card.has_evolution_art,
            )
        )
    return views
