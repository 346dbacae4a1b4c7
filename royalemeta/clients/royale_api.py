"""
Clash Royale API client.

Thin async wrapper over the official game API. Every method returns typed
records; HTTP and decoding errors are wrapped in TransportFailure. Battle log
and current deck lookups return None on a non-success status, since callers
treat a missing deck as "no data point" rather than an error. Bodies that
decode but do not have the expected shape are also TransportFailure.
"""

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any, TypeVar
from urllib.parse import quote

import httpx

from royalemeta.config import settings
from royalemeta.models.card import CardDefinition, DeckCard
from royalemeta.models.failure import TransportFailure
from royalemeta.models.profile import PlayerProfile, RankedPlayer
from royalemeta.parsers.royale import (
    parse_card_catalog,
    parse_deck_cards,
    parse_player_profile,
    parse_ranked_players,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def player_path(tag: str) -> str:
    """API path for a player, with the leading '#' percent-encoded."""
    clean = tag.strip().lstrip("#").upper()
    return f"/players/{quote('#' + clean, safe='')}"


class RoyaleApiClient:
    """
    Client for the Clash Royale API.

    Use as an async context manager so one connection pool is shared across
    the many requests of an analysis run:

        async with RoyaleApiClient() as api:
            profile = await api.get_player_profile("#P802VR")
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            base_url: API base URL. Defaults to settings.royale_api_url.
            api_key: Bearer token. Defaults to settings.royale_api_key.
            timeout: Request timeout in seconds. Defaults to settings.request_timeout.
            client: Optional preconfigured httpx client (not closed by this object).
        """
        self.base_url = (base_url or settings.royale_api_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.royale_api_key
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._client = client
        self._owns_client = client is None

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def __aenter__(self) -> "RoyaleApiClient":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, headers=self.headers)
            self._owns_client = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("RoyaleApiClient must be used as an async context manager")
        return self._client

    async def _request(self, path: str) -> httpx.Response:
        try:
            return await self._http().get(f"{self.base_url}{path}", headers=self.headers)
        except httpx.RequestError as e:
            raise TransportFailure(path, f"{type(e).__name__}: {e}") from e

    @staticmethod
    def _decode(response: httpx.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TransportFailure(path, "Response body is not valid JSON") from e

    @staticmethod
    def _parse(path: str, parser: Callable[[Any], T], data: Any) -> T:
        """Run a record parser, reporting a malformed body as TransportFailure."""
        try:
            return parser(data)
        except (AttributeError, TypeError, ValueError) as e:
            raise TransportFailure(path, f"Malformed response: {e}") from e

    async def get_json(self, path: str) -> Any:
        """
        GET a path and decode the JSON body.

        Raises:
            TransportFailure: On network error, non-2xx status or invalid JSON
        """
        response = await self._request(path)
        if not response.is_success:
            raise TransportFailure(
                path, f"HTTP {response.status_code}", status=response.status_code
            )
        return self._decode(response, path)

    async def get_json_or_none(self, path: str) -> Any | None:
        """Like get_json, but a non-2xx status yields None."""
        response = await self._request(path)
        if not response.is_success:
            logger.debug("GET %s returned %d", path, response.status_code)
            return None
        return self._decode(response, path)

    async def get_player_profile(self, tag: str) -> PlayerProfile:
        """Fetch a player's profile, including their full card collection."""
        path = player_path(tag)
        return self._parse(path, parse_player_profile, await self.get_json(path))

    async def get_all_cards(self) -> list[CardDefinition]:
        """Fetch the card catalog."""
        return self._parse("/cards", parse_card_catalog, await self.get_json("/cards"))

    async def get_seasons(self) -> list[str]:
        """Fetch global season ids, oldest first."""
        path = "/locations/global/seasons"
        data = await self.get_json(path)
        if not isinstance(data, dict) or not isinstance(data.get("items") or [], list):
            raise TransportFailure(path, "Malformed response: expected an items list")
        return [
            str(item["id"])
            for item in data.get("items") or []
            if isinstance(item, dict) and item.get("id") is not None
        ]

    async def fetch_rankings(self, path: str) -> list[RankedPlayer]:
        """
        Fetch one leaderboard endpoint variant.

        Args:
            path: Endpoint path including query string

        Returns:
            Ranked players in upstream order (possibly empty)
        """
        logger.info("Fetching rankings from %s", path)
        data = await self.get_json(path)
        items = (data.get("items") or []) if isinstance(data, dict) else []
        if not isinstance(items, list):
            items = []
        logger.info("Rankings items received: %d", len(items))
        return self._parse(path, parse_ranked_players, items)

    async def get_battle_log(self, tag: str) -> list[dict[str, Any]] | None:
        """Fetch a player's recent battles, newest first. None on non-2xx."""
        data = await self.get_json_or_none(f"{player_path(tag)}/battlelog")
        if data is None:
            return None
        return data if isinstance(data, list) else []

    async def get_player_deck(self, tag: str) -> list[DeckCard] | None:
        """Fetch the deck a player currently has equipped. None on non-2xx."""
        path = player_path(tag)
        data = await self.get_json_or_none(path)
        if data is None:
            return None
        if not isinstance(data, dict):
            return []
        return self._parse(path, parse_deck_cards, data.get("currentDeck"))
