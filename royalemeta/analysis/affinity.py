"""
Affinity scoring.

Scores how well a player's collection fits an archetype.

Score formula (higher is better):
- Each elite card (display level >= 15) contributes 100 points (max 800)
- Average display level across the 8 slots is added as a fine tiebreak (~1-15)
- Each evolution slot card whose evolution the player lacks costs 10 points
- Each sampled occurrence of the archetype adds 0.1 points

The weights are game-specific policy; ScoringWeights lets callers override
them without touching the algorithm.
"""

from dataclasses import dataclass

from royalemeta.analysis.levels import display_level
from royalemeta.config import Settings
from royalemeta.models.deck import DECK_SIZE, Archetype, MissingEvolution, ScoredArchetype
from royalemeta.models.profile import PlayerProfile
from royalemeta.services.card_catalog import CardCatalog


@dataclass(frozen=True)
class ScoringWeights:
    """Weights and thresholds for the affinity score."""

    elite_weight: float = 100.0
    missing_evolution_penalty: float = 10.0
    popularity_weight: float = 0.1
    elite_level: int = 15
    synergy_level: int = 14
    evolution_slots: int = 2
    unowned_level: int = 1

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScoringWeights":
        return cls(
            elite_weight=settings.elite_weight,
            missing_evolution_penalty=settings.missing_evolution_penalty,
            popularity_weight=settings.popularity_weight,
        )


DEFAULT_WEIGHTS = ScoringWeights()


def score_archetype(
    archetype: Archetype,
    profile: PlayerProfile,
    catalog: CardCatalog,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> ScoredArchetype:
    """
    Score one archetype against a player's collection.

    Slots are evaluated in the archetype's representative order; only the
    first `weights.evolution_slots` slots are checked for missing evolutions.
    Cards the player does not own count as level `weights.unowned_level`.
    """
    total_level = 0
    elite_count = 0
    all_at_synergy_level = True
    missing: list[MissingEvolution] = []

    for index, deck_card in enumerate(archetype.cards):
        owned = profile.get_card(deck_card.id)

        if owned is not None:
            level = display_level(owned, catalog)
            total_level += level
            if level >= weights.elite_level:
                elite_count += 1
            if level < weights.synergy_level:
                all_at_synergy_level = False
        else:
            total_level += weights.unowned_level
            all_at_synergy_level = False

        if index < weights.evolution_slots:
            evolution_icon = deck_card.evolution_icon_url or catalog.evolution_icon(deck_card.id)
            if evolution_icon and (owned is None or not owned.has_evolution):
                missing.append(MissingEvolution(name=deck_card.name, icon_url=evolution_icon))

    avg_level = total_level / DECK_SIZE
    score = (
        elite_count * weights.elite_weight
        + avg_level
        - len(missing) * weights.missing_evolution_penalty
        + archetype.count * weights.popularity_weight
    )

    return ScoredArchetype(
        archetype=archetype,
        score=score,
        avg_level=avg_level,
        elite_count=elite_count,
        is_best_synergy=all_at_synergy_level,
        missing_evolutions=missing,
    )


def score_archetypes(
    archetypes: list[Archetype],
    profile: PlayerProfile,
    catalog: CardCatalog,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[ScoredArchetype]:
    """Score every archetype. Order is preserved."""
    return [score_archetype(a, profile, catalog, weights) for a in archetypes]
