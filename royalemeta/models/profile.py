from dataclasses import dataclass, field

from royalemeta.models.card import DeckCard, OwnedCard


@dataclass
class PlayerProfile:
    """
    A player's profile and card collection.

    Replaced wholesale on each new search; never partially mutated.

    Attributes:
        tag: Canonical player tag (e.g., "#P802VR")
        name: Display name
        trophies: Current trophy count
        exp_level: King level
        cards: Every card the player has unlocked, in API order
        current_deck: The 8 cards currently equipped
    """

    tag: str
    name: str
    trophies: int = 0
    best_trophies: int = 0
    exp_level: int = 0
    wins: int = 0
    losses: int = 0
    battle_count: int = 0
    cards: list[OwnedCard] = field(default_factory=list)
    current_deck: list[DeckCard] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._by_id: dict[int, OwnedCard] = {}
        for card in self.cards:
            self._by_id.setdefault(card.id, card)

    def get_card(self, card_id: int) -> OwnedCard | None:
        """Get the owned card with this identifier, if any."""
        return self._by_id.get(card_id)


@dataclass(frozen=True, slots=True)
class RankedPlayer:
    """An entry from a leaderboard, in upstream rank order."""

    tag: str
    name: str = ""
    rating: int = 0
