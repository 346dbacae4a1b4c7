from dataclasses import dataclass
from enum import Enum


class Rarity(str, Enum):
    """Card rarity as reported by the game API."""

    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"
    CHAMPION = "champion"

    @classmethod
    def parse(cls, value: str | None) -> "Rarity":
        """
        Parse an upstream rarity string.

        "hero" is a legacy alias for champion. Unknown or missing values
        parse to common.
        """
        if not value:
            return cls.COMMON
        normalized = value.strip().lower()
        if normalized == "hero":
            return cls.CHAMPION
        try:
            return cls(normalized)
        except ValueError:
            return cls.COMMON


@dataclass(frozen=True, slots=True)
class CardDefinition:
    """
    A card from the game's catalog.

    Attributes:
        id: Card identifier, unique across the catalog
        name: Card name as shown in game
        rarity: Card rarity
        elixir_cost: Elixir cost (0-10)
        max_level: Maximum raw level for this rarity
        icon_url: Regular card art
        evolution_icon_url: Evolved card art, present only for evolution-capable cards
    """

    id: int
    name: str
    rarity: Rarity
    elixir_cost: int = 0
    max_level: int = 0
    icon_url: str | None = None
    evolution_icon_url: str | None = None

    @property
    def can_evolve(self) -> bool:
        return self.evolution_icon_url is not None


@dataclass(frozen=True, slots=True)
class OwnedCard:
    """
    A card in a player's collection.

    Attributes:
        id: Card identifier (matches a CardDefinition)
        name: Card name
        level: Raw level as reported by the API (rarity-relative)
        max_level: Raw max level for the card's rarity
        rarity: Rarity string as reported on the card record, if any
        evolution_level: Evolution progress; > 0 means evolution unlocked
    """

    id: int
    name: str
    level: int
    max_level: int = 0
    rarity: str | None = None
    evolution_level: int | None = None
    icon_url: str | None = None
    evolution_icon_url: str | None = None

    @property
    def has_evolution(self) -> bool:
        """True if the player has unlocked this card's evolution."""
        return self.evolution_level is not None and self.evolution_level > 0


@dataclass(frozen=True, slots=True)
class DeckCard:
    """A card occupying a slot in a sampled deck."""

    id: int
    name: str
    icon_url: str | None = None
    evolution_icon_url: str | None = None

    @property
    def has_evolution_art(self) -> bool:
        return self.evolution_icon_url is not None
