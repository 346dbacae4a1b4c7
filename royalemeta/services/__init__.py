"""
Royale Meta services.

Session state, player search and the meta analysis workflow. Only the card
catalog is re-exported here; import the workflow modules directly.
"""

from royalemeta.services.card_catalog import RARITY_WEIGHTS, CardCatalog, rarity_weight

__all__ = [
    "RARITY_WEIGHTS",
    "CardCatalog",
    "rarity_weight",
]
