"""Response models shared by the API routers."""

from pydantic import BaseModel, Field

from royalemeta.analysis.levels import display_level
from royalemeta.models.card import CardDefinition, OwnedCard
from royalemeta.models.deck import ScoredArchetype
from royalemeta.models.profile import PlayerProfile
from royalemeta.services.card_catalog import CardCatalog
from royalemeta.services.collection_view import deck_slot_views


class CardResponse(BaseModel):
    """A card in the player's collection."""

    id: int
    name: str
    level: int = Field(description="Display level on the unified scale")
    raw_level: int
    rarity: str
    elixir_cost: int | None = None
    has_evolution: bool = False
    icon_url: str | None = None

    @classmethod
    def from_card(cls, card: OwnedCard, catalog: CardCatalog) -> "CardResponse":
        return cls(
            id=card.id,
            name=card.name,
            level=display_level(card, catalog),
            raw_level=card.level,
            rarity=catalog.rarity_of(card.id, card.rarity),
            elixir_cost=catalog.elixir_cost(card.id),
            has_evolution=card.has_evolution,
            icon_url=(
                card.evolution_icon_url
                if card.has_evolution and card.evolution_icon_url
                else card.icon_url
            ),
        )


class ProfileResponse(BaseModel):
    tag: str
    name: str
    trophies: int
    exp_level: int
    card_count: int
    cards: list[CardResponse] = Field(default_factory=list)


class RecentTagsResponse(BaseModel):
    tags: list[str]


class DeckCardResponse(BaseModel):
    """A deck slot annotated with the player's progress."""

    id: int
    name: str
    icon_url: str | None = None
    player_level: int
    levels_to_max: int
    is_maxed: bool
    is_evolution_slot: bool


class MissingEvolutionResponse(BaseModel):
    name: str
    icon_url: str | None = None


class MetaDeckResponse(BaseModel):
    """A ranked archetype."""

    cards: list[DeckCardResponse]
    score: float
    affinity_percentage: float = Field(ge=0.0, le=100.0)
    avg_level: float
    count: int
    elite_count: int
    is_best_synergy: bool
    max_rating: int
    missing_evolutions: list[MissingEvolutionResponse] = Field(default_factory=list)

    @classmethod
    def from_scored(
        cls,
        scored: ScoredArchetype,
        profile: PlayerProfile,
        catalog: CardCatalog,
    ) -> "MetaDeckResponse":
        cards = [
            DeckCardResponse(
                id=view.card.id,
                name=view.card.name,
                icon_url=(
                    view.card.evolution_icon_url if view.is_evolution_slot else view.card.icon_url
                ),
                player_level=view.player_level,
                levels_to_max=view.levels_to_max,
                is_maxed=view.is_maxed,
                is_evolution_slot=view.is_evolution_slot,
            )
            for view in deck_slot_views(scored.cards, profile, catalog)
        ]
        return cls(
            cards=cards,
            score=scored.score,
            affinity_percentage=scored.affinity_percentage,
            avg_level=scored.avg_level,
            count=scored.count,
            elite_count=scored.elite_count,
            is_best_synergy=scored.is_best_synergy,
            max_rating=scored.max_rating,
            missing_evolutions=[
                MissingEvolutionResponse(name=m.name, icon_url=m.icon_url)
                for m in scored.missing_evolutions
            ],
        )


class MetaDecksResponse(BaseModel):
    analyzed: bool
    total: int
    count: int
    decks: list[MetaDeckResponse] = Field(default_factory=list)


class ProgressResponse(BaseModel):
    running: bool
    progress: int = Field(ge=0, le=100)


class CardOptionResponse(BaseModel):
    """A catalog card offered as a deck filter."""

    id: int
    name: str
    rarity: str
    elixir_cost: int
    icon_url: str | None = None
    evolution_icon_url: str | None = None

    @classmethod
    def from_definition(cls, definition: CardDefinition) -> "CardOptionResponse":
        return cls(
            id=definition.id,
            name=definition.name,
            rarity=definition.rarity.value,
            elixir_cost=definition.elixir_cost,
            icon_url=definition.icon_url,
            evolution_icon_url=definition.evolution_icon_url,
        )


class FilterOptionsResponse(BaseModel):
    evolutions: list[CardOptionResponse] = Field(description="Evolution-capable cards by name")
    champions: list[CardOptionResponse] = Field(description="Champions by name")
    all_cards: list[CardOptionResponse] = Field(description="Every card by rarity, then name")

    @classmethod
    def from_catalog(cls, catalog: CardCatalog) -> "FilterOptionsResponse":
        return cls(
            evolutions=[CardOptionResponse.from_definition(c) for c in catalog.evolution_cards()],
            champions=[CardOptionResponse.from_definition(c) for c in catalog.champion_cards()],
            all_cards=[
                CardOptionResponse.from_definition(c) for c in catalog.all_cards_by_rarity()
            ],
        )
