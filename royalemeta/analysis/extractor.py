"""
Deck extraction for sampled players.

Recovers each player's most recently played deck, preferring the battle log
over the deck currently equipped. Players are processed in fixed-size
batches: all fetches in a batch run together and the batch is merged only
after every fetch settles. Batches never overlap, so at most `batch_size`
requests are in flight.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

from royalemeta.analysis.fallback import Strategy, first_success
from royalemeta.models.card import DeckCard
from royalemeta.models.deck import DECK_SIZE, SampledDeck
from royalemeta.models.failure import TransportFailure
from royalemeta.models.profile import RankedPlayer
from royalemeta.parsers.royale import parse_deck_cards

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 8

# Battle types that reflect a player's competitive deck
LADDER_BATTLE_TYPES = frozenset({"pathOfLegend", "PvP"})

ProgressCallback = Callable[[int], None]


class DeckSource(Protocol):
    async def get_battle_log(self, tag: str) -> list[dict[str, Any]] | None: ...

    async def get_player_deck(self, tag: str) -> list[DeckCard] | None: ...


def _full_deck(cards: list[DeckCard] | None) -> list[DeckCard] | None:
    if not cards or len(cards) < DECK_SIZE:
        return None
    return cards[:DECK_SIZE]


def deck_from_battle_log(log: list[dict[str, Any]]) -> list[DeckCard] | None:
    """
    Deck used in the most recent ladder battle.

    Only the newest ladder entry with team data is considered; if its deck
    is incomplete the log yields no deck. Entries that are not records are
    ignored.
    """
    team = next(
        (
            entry["team"][0]
            for entry in log
            if isinstance(entry, dict)
            and entry.get("type") in LADDER_BATTLE_TYPES
            and isinstance(entry.get("team"), list)
            and entry["team"]
            and isinstance(entry["team"][0], dict)
        ),
        None,
    )
    if team is None:
        return None
    return _full_deck(parse_deck_cards(team.get("cards")))


async def extract_deck(source: DeckSource, player: RankedPlayer) -> SampledDeck | None:
    """
    Recover one player's deck.

    Returns:
        SampledDeck tagged with the player's rating, or None if neither the
        battle log nor the current deck yields 8 cards
    """

    async def from_battle_log() -> list[DeckCard] | None:
        log = await source.get_battle_log(player.tag)
        return deck_from_battle_log(log) if log else None

    async def from_current_deck() -> list[DeckCard] | None:
        return _full_deck(await source.get_player_deck(player.tag))

    result = await first_success(
        [
            Strategy(label="battlelog", run=from_battle_log),
            Strategy(label="current_deck", run=from_current_deck),
        ],
        recoverable=(TransportFailure, ValueError),
    )
    if not result.ok or result.value is None:
        logger.debug("No deck recovered for %s", player.tag)
        return None
    return SampledDeck(cards=tuple(result.value), rating=player.rating)


async def extract_decks(
    source: DeckSource,
    players: list[RankedPlayer],
    batch_size: int = DEFAULT_BATCH_SIZE,
    on_progress: ProgressCallback | None = None,
    cancelled: Callable[[], bool] | None = None,
) -> list[SampledDeck]:
    """
    Recover decks for all players in sequential batches.

    Args:
        source: Deck data source
        players: Sampled players, in rank order
        batch_size: Concurrent fetches per batch
        on_progress: Called after each batch with the percentage processed
        cancelled: Checked before each batch; when it returns True no
            further batches are started

    Returns:
        Decks for players that yielded one, in player order
    """
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    total = len(players)
    decks: list[SampledDeck] = []

    if total == 0:
        if on_progress:
            on_progress(100)
        return decks

    for start in range(0, total, batch_size):
        if cancelled is not None and cancelled():
            logger.info("Deck extraction stopped after %d/%d players", start, total)
            break

        batch = players[start : start + batch_size]
        results = await asyncio.gather(
            *(extract_deck(source, player) for player in batch),
            return_exceptions=True,
        )

        for player, outcome in zip(batch, results, strict=True):
            if isinstance(outcome, BaseException):
                logger.warning("Deck fetch for %s failed: %s", player.tag, outcome)
            elif outcome is not None:
                decks.append(outcome)

        processed = start + len(batch)
        if on_progress:
            on_progress(round(processed / total * 100))

    logger.info("Recovered %d decks from %d players", len(decks), total)
    return decks
