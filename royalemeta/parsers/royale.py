"""
Clash Royale API record parsing.

Converts the JSON-shaped records returned by the game API into typed models.
Missing optional fields fall back to neutral defaults; records lacking an
identifier are rejected with ValueError.
"""

from typing import Any

from royalemeta.models.card import CardDefinition, DeckCard, OwnedCard, Rarity
from royalemeta.models.profile import PlayerProfile, RankedPlayer


def _icons(item: dict[str, Any]) -> tuple[str | None, str | None]:
    icons = item.get("iconUrls") or {}
    return icons.get("medium"), icons.get("evolutionMedium")


def _int(value: Any, default: int = 0) -> int:
    """Coerce API numbers (sometimes strings) to int."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _require_id(item: dict[str, Any]) -> int:
    if item.get("id") is None:
        raise ValueError(f"Card record has no id: {item!r}")
    return _int(item["id"])


def parse_card_definition(item: dict[str, Any]) -> CardDefinition:
    """Parse one entry of the /cards catalog listing."""
    icon, evo_icon = _icons(item)
    return CardDefinition(
        id=_require_id(item),
        name=item.get("name", ""),
        rarity=Rarity.parse(item.get("rarity")),
        elixir_cost=_int(item.get("elixirCost")),
        max_level=_int(item.get("maxLevel")),
        icon_url=icon,
        evolution_icon_url=evo_icon,
    )


def parse_card_catalog(data: dict[str, Any]) -> list[CardDefinition]:
    """Parse the /cards response body, skipping records without an id."""
    definitions: list[CardDefinition] = []
    for item in data.get("items") or []:
        if not isinstance(item, dict) or item.get("id") is None:
            continue
        definitions.append(parse_card_definition(item))
    return definitions


def parse_owned_card(item: dict[str, Any]) -> OwnedCard:
    """Parse a card from a player's collection."""
    icon, evo_icon = _icons(item)
    evolution = item.get("evolutionLevel")
    return OwnedCard(
        id=_require_id(item),
        name=item.get("name", ""),
        level=_int(item.get("level")),
        max_level=_int(item.get("maxLevel")),
        rarity=item.get("rarity"),
        evolution_level=_int(evolution) if evolution is not None else None,
        icon_url=icon,
        evolution_icon_url=evo_icon,
    )


def parse_deck_card(item: dict[str, Any]) -> DeckCard:
    """Parse a card from a deck (battle log team or current deck)."""
    icon, evo_icon = _icons(item)
    return DeckCard(
        id=_require_id(item),
        name=item.get("name", ""),
        icon_url=icon,
        evolution_icon_url=evo_icon,
    )


def parse_deck_cards(items: list[dict[str, Any]] | None) -> list[DeckCard]:
    return [parse_deck_card(item) for item in items or [] if isinstance(item, dict)]


def parse_player_profile(data: dict[str, Any]) -> PlayerProfile:
    """Parse the /players/{tag} response body."""
    return PlayerProfile(
        tag=data.get("tag", ""),
        name=data.get("name", ""),
        trophies=_int(data.get("trophies")),
        best_trophies=_int(data.get("bestTrophies")),
        exp_level=_int(data.get("expLevel")),
        wins=_int(data.get("wins")),
        losses=_int(data.get("losses")),
        battle_count=_int(data.get("battleCount")),
        cards=[parse_owned_card(c) for c in data.get("cards") or [] if isinstance(c, dict)],
        current_deck=parse_deck_cards(data.get("currentDeck")),
    )


def parse_ranked_player(item: dict[str, Any]) -> RankedPlayer:
    """
    Parse a leaderboard entry.

    Rating is the path of legend elo when present, otherwise trophies.
    """
    rating = _int(item.get("eloRating")) or _int(item.get("trophies"))
    return RankedPlayer(tag=item.get("tag", ""), name=item.get("name", ""), rating=rating)


def parse_ranked_players(items: list[dict[str, Any]]) -> list[RankedPlayer]:
    """Parse leaderboard entries, skipping anything that is not a tagged record."""
    return [
        parse_ranked_player(item) for item in items if isinstance(item, dict) and item.get("tag")
    ]
