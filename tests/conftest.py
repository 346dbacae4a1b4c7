import asyncio
from typing import Any

import pytest

from royalemeta.api import deps
from royalemeta.models.card import CardDefinition, DeckCard, OwnedCard, Rarity
from royalemeta.models.deck import SampledDeck
from royalemeta.models.failure import TransportFailure
from royalemeta.models.profile import PlayerProfile, RankedPlayer
from royalemeta.services.card_catalog import CardCatalog


def deck_card(card_id: int, evolution: bool = False) -> DeckCard:
    return DeckCard(
        id=card_id,
        name=f"Card {card_id}",
        icon_url=f"https://cdn.test/cards/{card_id}.png",
        evolution_icon_url=f"https://cdn.test/evo/{card_id}.png" if evolution else None,
    )


def battle_card_json(card_id: int, evolution: bool = False) -> dict[str, Any]:
    icons = {"medium": f"https://cdn.test/cards/{card_id}.png"}
    if evolution:
        icons["evolutionMedium"] = f"https://cdn.test/evo/{card_id}.png"
    return {"id": card_id, "name": f"Card {card_id}", "iconUrls": icons}


class FakeRoyaleSource:
    """
    In-memory stand-in for RoyaleApiClient.

    Values may be exceptions, which are raised when requested. Records every
    call and the peak number of concurrent deck fetches.
    """

    def __init__(self) -> None:
        self.cards: list[CardDefinition] | Exception = []
        self.profiles: dict[str, PlayerProfile | Exception] = {}
        self.seasons: list[str] | Exception = []
        self.rankings: dict[str, list[RankedPlayer] | Exception] = {}
        self.battle_logs: dict[str, list[dict[str, Any]] | None | Exception] = {}
        self.current_decks: dict[str, list[DeckCard] | None | Exception] = {}
        self.calls: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @staticmethod
    def _resolve(value: Any) -> Any:
        if isinstance(value, Exception):
            raise value
        return value

    async def get_all_cards(self) -> list[CardDefinition]:
        self.calls.append(("cards", ""))
        return self._resolve(self.cards)

    async def get_player_profile(self, tag: str) -> PlayerProfile:
        self.calls.append(("profile", tag))
        if tag not in self.profiles:
            raise TransportFailure(f"/players/{tag}", "HTTP 404", status=404)
        return self._resolve(self.profiles[tag])

    async def get_seasons(self) -> list[str]:
        self.calls.append(("seasons", ""))
        return self._resolve(self.seasons)

    async def fetch_rankings(self, path: str) -> list[RankedPlayer]:
        self.calls.append(("rankings", path))
        if path not in self.rankings:
            raise TransportFailure(path, "HTTP 404", status=404)
        return self._resolve(self.rankings[path])

    async def _track(self, value: Any) -> Any:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            return self._resolve(value)
        finally:
            self.in_flight -= 1

    async def get_battle_log(self, tag: str) -> list[dict[str, Any]] | None:
        self.calls.append(("battlelog", tag))
        return await self._track(self.battle_logs.get(tag))

    async def get_player_deck(self, tag: str) -> list[DeckCard] | None:
        self.calls.append(("deck", tag))
        return await self._track(self.current_decks.get(tag))

    def calls_of(self, kind: str) -> list[str]:
        return [arg for k, arg in self.calls if k == kind]


@pytest.fixture
def fake_source() -> FakeRoyaleSource:
    return FakeRoyaleSource()


@pytest.fixture
def make_deck_card():
    return deck_card


@pytest.fixture
def make_battle_card():
    return battle_card_json


@pytest.fixture
def make_deck():
    """Build a SampledDeck from card ids; `evolutions` marks evolution-capable ids."""

    def _make(ids: list[int], rating: int = 0, evolutions: tuple[int, ...] = ()) -> SampledDeck:
        return SampledDeck(
            cards=tuple(deck_card(i, evolution=i in evolutions) for i in ids),
            rating=rating,
        )

    return _make


@pytest.fixture
def common_catalog() -> CardCatalog:
    """Catalog of ids 1-20, all common, so display level equals raw level."""
    return CardCatalog(
        CardDefinition(
            id=i, name=f"Card {i}", rarity=Rarity.COMMON, elixir_cost=i % 10, max_level=16
        )
        for i in range(1, 21)
    )


@pytest.fixture
def make_profile():
    """Build a profile from {card_id: raw_level}; `evolved` lists unlocked evolutions."""

    def _make(
        levels: dict[int, int],
        evolved: tuple[int, ...] = (),
        tag: str = "#P802VR",
    ) -> PlayerProfile:
        return PlayerProfile(
            tag=tag,
            name="Tester",
            trophies=7500,
            exp_level=60,
            cards=[
                OwnedCard(
                    id=card_id,
                    name=f"Card {card_id}",
                    level=level,
                    evolution_level=1 if card_id in evolved else None,
                )
                for card_id, level in levels.items()
            ],
        )

    return _make


@pytest.fixture(autouse=True)
def clear_api_session():
    """Each test starts with a fresh process-wide API session."""
    deps.reset_session()
    yield
    deps.reset_session()


@pytest.fixture
async def client(fake_source):
    """Async test client with the game API replaced by the in-memory source."""
    from httpx import ASGITransport, AsyncClient

    from royalemeta.main import app

    app.dependency_overrides[deps.get_api_client] = lambda: fake_source

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
