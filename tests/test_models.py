import pytest

from royalemeta.models.card import DeckCard, OwnedCard, Rarity
from royalemeta.models.deck import Archetype, SampledDeck, ScoredArchetype
from royalemeta.models.failure import (
    FailureKind,
    OutcomeType,
    SyncFailure,
    TransportFailure,
    ValidationFailure,
)
from royalemeta.models.profile import PlayerProfile


class TestRarity:
    def test_parse_known(self) -> None:
        assert Rarity.parse("Legendary") is Rarity.LEGENDARY

    def test_hero_alias(self) -> None:
        assert Rarity.parse("hero") is Rarity.CHAMPION

    def test_unknown_and_missing(self) -> None:
        assert Rarity.parse("mythic") is Rarity.COMMON
        assert Rarity.parse(None) is Rarity.COMMON


class TestOwnedCard:
    def test_has_evolution(self) -> None:
        assert OwnedCard(id=1, name="Knight", level=14, evolution_level=1).has_evolution
        assert not OwnedCard(id=1, name="Knight", level=14, evolution_level=0).has_evolution
        assert not OwnedCard(id=1, name="Knight", level=14).has_evolution

    def test_immutable(self) -> None:
        card = OwnedCard(id=1, name="Knight", level=14)
        with pytest.raises(AttributeError):
            card.level = 15  # type: ignore[misc]


class TestPlayerProfile:
    def test_get_card(self) -> None:
        knight = OwnedCard(id=1, name="Knight", level=14)
        profile = PlayerProfile(tag="#ABC", name="Tester", cards=[knight])
        assert profile.get_card(1) is knight
        assert profile.get_card(2) is None


class TestSampledDeck:
    def test_requires_eight_cards(self) -> None:
        with pytest.raises(ValueError, match="8 cards"):
            SampledDeck(cards=tuple(DeckCard(id=i, name=str(i)) for i in range(7)))

    def test_card_ids_keep_slot_order(self) -> None:
        ids = [8, 3, 5, 1, 2, 4, 6, 7]
        deck = SampledDeck(cards=tuple(DeckCard(id=i, name=str(i)) for i in ids))
        assert deck.card_ids == ids


class TestScoredArchetype:
    def _scored(self, score: float) -> ScoredArchetype:
        archetype = Archetype(key="k", cards=[DeckCard(id=i, name=str(i)) for i in range(8)])
        return ScoredArchetype(
            archetype=archetype,
            score=score,
            avg_level=1.0,
            elite_count=0,
            is_best_synergy=False,
        )

    def test_affinity_percentage(self) -> None:
        assert self._scored(425.0).affinity_percentage == pytest.approx(50.0)

    def test_affinity_percentage_clamped(self) -> None:
        assert self._scored(-12.0).affinity_percentage == 0.0
        assert self._scored(900.0).affinity_percentage == 100.0


class TestFailures:
    def test_sync_failure_response(self) -> None:
        error = SyncFailure(attempted=["/a", "/b"])
        response = error.to_response()
        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.kind == FailureKind.SYNC_FAILED
        assert response.failure.message == "Meta analysis sync failed."
        assert error.status_code == 502

    def test_transport_failure_status(self) -> None:
        assert TransportFailure("/players/%23X", "HTTP 404", status=404).status_code == 404
        assert TransportFailure("/cards", "ConnectError").status_code == 502

    def test_validation_failure(self) -> None:
        error = ValidationFailure()
        assert error.status_code == 400
        assert error.kind == FailureKind.INVALID_INPUT
