from royalemeta.parsers.royale import (
    parse_card_catalog,
    parse_card_definition,
    parse_deck_card,
    parse_deck_cards,
    parse_owned_card,
    parse_player_profile,
    parse_ranked_player,
    parse_ranked_players,
)

__all__ = [
    "parse_card_catalog",
    "parse_card_definition",
    "parse_deck_card",
    "parse_deck_cards",
    "parse_owned_card",
    "parse_player_profile",
    "parse_ranked_player",
    "parse_ranked_players",
]
