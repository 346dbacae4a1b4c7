from royalemeta.models.card import CardDefinition, DeckCard, OwnedCard, Rarity
from royalemeta.models.deck import (
    DECK_SIZE,
    MAX_AFFINITY_SCORE,
    Archetype,
    MissingEvolution,
    SampledDeck,
    ScoredArchetype,
)
from royalemeta.models.failure import (
    AnalysisSupersededError,
    ApiResponse,
    FailureDetail,
    FailureKind,
    KnownError,
    NoProfileLoadedError,
    OutcomeType,
    SyncFailure,
    TransportFailure,
    ValidationFailure,
)
from royalemeta.models.profile import PlayerProfile, RankedPlayer

__all__ = [
    "AnalysisSupersededError",
    "ApiResponse",
    "Archetype",
    "CardDefinition",
    "DECK_SIZE",
    "DeckCard",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "MAX_AFFINITY_SCORE",
    "MissingEvolution",
    "NoProfileLoadedError",
    "OutcomeType",
    "OwnedCard",
    "PlayerProfile",
    "RankedPlayer",
    "Rarity",
    "SampledDeck",
    "ScoredArchetype",
    "SyncFailure",
    "TransportFailure",
    "ValidationFailure",
]
