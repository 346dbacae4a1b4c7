import pytest

from royalemeta.analysis.levels import BASE_LEVELS, base_level, display_level, levels_to_max
from royalemeta.models.card import CardDefinition, OwnedCard, Rarity
from royalemeta.services.card_catalog import CardCatalog


@pytest.fixture
def catalog() -> CardCatalog:
    return CardCatalog(
        [
            CardDefinition(id=26000000, name="Knight", rarity=Rarity.COMMON),
            CardDefinition(id=26000001, name="Archers", rarity=Rarity.RARE),
            CardDefinition(id=26000010, name="Skeleton Army", rarity=Rarity.EPIC),
            CardDefinition(id=26000026, name="Princess", rarity=Rarity.LEGENDARY),
            CardDefinition(id=26000072, name="Archer Queen", rarity=Rarity.CHAMPION),
        ]
    )


class TestBaseLevel:
    def test_known_rarities(self) -> None:
        assert base_level("common") == 1
        assert base_level("rare") == 3
        assert base_level("epic") == 6
        assert base_level("legendary") == 9
        assert base_level("champion") == 11

    def test_hero_is_champion_alias(self) -> None:
        assert base_level("hero") == base_level("champion")

    def test_case_insensitive(self) -> None:
        assert base_level("Legendary") == 9

    def test_unknown_defaults_to_common(self) -> None:
        assert base_level("mythic") == 1
        assert base_level(None) == 1
        assert base_level("") == 1

    @pytest.mark.parametrize("rarity", [*BASE_LEVELS, "unknown", None])
    def test_base_level_in_allowed_set(self, rarity: str | None) -> None:
        assert base_level(rarity) in {1, 3, 6, 9, 11}


class TestDisplayLevel:
    def test_common(self, catalog: CardCatalog) -> None:
        card = OwnedCard(id=26000000, name="Knight", level=14)
        assert display_level(card, catalog) == 14

    def test_legendary_offset(self, catalog: CardCatalog) -> None:
        """A raw level 6 legendary displays as 14."""
        card = OwnedCard(id=26000026, name="Princess", level=6)
        assert display_level(card, catalog) == 14

    def test_champion_offset(self, catalog: CardCatalog) -> None:
        card = OwnedCard(id=26000072, name="Archer Queen", level=5)
        assert display_level(card, catalog) == 15

    def test_catalog_rarity_wins_over_card_rarity(self, catalog: CardCatalog) -> None:
        card = OwnedCard(id=26000010, name="Skeleton Army", level=1, rarity="common")
        assert display_level(card, catalog) == 6

    def test_falls_back_to_card_rarity(self) -> None:
        """Cards missing from the catalog use their own reported rarity."""
        card = OwnedCard(id=99, name="New Card", level=2, rarity="Epic")
        assert display_level(card, CardCatalog()) == 7

    def test_falls_back_to_common(self) -> None:
        card = OwnedCard(id=99, name="New Card", level=4)
        assert display_level(card, CardCatalog()) == 4

    def test_raw_level_zero_yields_base_minus_one(self, catalog: CardCatalog) -> None:
        card = OwnedCard(id=26000026, name="Princess", level=0)
        assert display_level(card, catalog) == 8

    @pytest.mark.parametrize("card_id", [26000000, 26000001, 26000010, 26000026, 26000072])
    def test_monotonic_in_raw_level(self, catalog: CardCatalog, card_id: int) -> None:
        levels = [
            display_level(OwnedCard(id=card_id, name="x", level=raw), catalog)
            for raw in range(0, 17)
        ]
        assert levels == sorted(levels)


class TestLevelsToMax:
    def test_unowned(self, catalog: CardCatalog) -> None:
        assert levels_to_max(None, catalog) == 15

    def test_partial(self, catalog: CardCatalog) -> None:
        card = OwnedCard(id=26000000, name="Knight", level=12)
        assert levels_to_max(card, catalog) == 3

    def test_never_negative(self, catalog: CardCatalog) -> None:
        card = OwnedCard(id=26000072, name="Archer Queen", level=6)
        assert levels_to_max(card, catalog) == 0
