from dataclasses import dataclass, field

from royalemeta.models.card import DeckCard

DECK_SIZE = 8

# Highest reachable affinity score: 8 elite cards (800) plus a full average level
# and popularity bonus. Used to express a score as a percentage.
MAX_AFFINITY_SCORE = 850.0


@dataclass(frozen=True)
class SampledDeck:
    """
    An 8-card deck recovered from a top player.

    Attributes:
        cards: Cards in slot order 0-7 (slots 0 and 1 are evolution slots)
        rating: The player's rating (path of legend elo or trophies)
    """

    cards: tuple[DeckCard, ...]
    rating: int = 0

    def __post_init__(self) -> None:
        if len(self.cards) != DECK_SIZE:
            raise ValueError(f"A deck must have {DECK_SIZE} cards, got {len(self.cards)}")

    @property
    def card_ids(self) -> list[int]:
        return [card.id for card in self.cards]


@dataclass
class Archetype:
    """
    A unique 8-card combination observed among sampled decks.

    Attributes:
        key: Canonical key (sorted card ids)
        cards: Representative card order, as first seen
        count: Number of sampled decks with this card set
        max_rating: Highest player rating seen with this card set
    """

    key: str
    cards: list[DeckCard]
    count: int = 1
    max_rating: int = 0


@dataclass(frozen=True, slots=True)
class MissingEvolution:
    """An evolution slot card whose evolution the player has not unlocked."""

    name: str
    icon_url: str | None


@dataclass
class ScoredArchetype:
    """An archetype with its affinity to a player's collection."""

    archetype: Archetype
    score: float
    avg_level: float
    elite_count: int
    is_best_synergy: bool
    missing_evolutions: list[MissingEvolution] = field(default_factory=list)

    @property
    def cards(self) -> list[DeckCard]:
        return self.archetype.cards

    @property
    def count(self) -> int:
        return self.archetype.count

    @property
    def max_rating(self) -> int:
        return self.archetype.max_rating

    @property
    def affinity_percentage(self) -> float:
        """Score normalized to 0-100 against the theoretical maximum."""
        return max(0.0, min(100.0, self.score / MAX_AFFINITY_SCORE * 100.0))
