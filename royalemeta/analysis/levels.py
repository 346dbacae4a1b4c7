"""
Card level normalization.

The API reports levels relative to each rarity's starting level (a fresh
legendary is "level 1"). Display levels put every rarity on one scale where
a maxed card is 15 (higher for some elite upgrades).
"""

from royalemeta.models.card import OwnedCard
from royalemeta.services.card_catalog import CardCatalog

BASE_LEVELS: dict[str, int] = {
    "common": 1,
    "rare": 3,
    "epic": 6,
    "legendary": 9,
    "champion": 11,
    "hero": 11,
}


def base_level(rarity: str | None) -> int:
    """Absolute starting level for a rarity. Unknown rarities use common's."""
    return BASE_LEVELS.get((rarity or "").lower(), BASE_LEVELS["common"])


def display_level(card: OwnedCard, catalog: CardCatalog) -> int:
    """
    Convert an owned card's raw level to the unified display scale.

    A raw level of 0 yields base - 1; this is kept as reported rather than
    clamped.
    """
    rarity = catalog.rarity_of(card.id, fallback=card.rarity)
    return card.level + base_level(rarity) - 1


def levels_to_max(card: OwnedCard | None, catalog: CardCatalog, max_display: int = 15) -> int:
    """Display levels still missing before a card counts as maxed."""
    if card is None:
        return max_display
    return max(0, max_display - display_level(card, catalog))
