"""
Player search.

Validates a tag, makes sure the card catalog is loaded, then fetches the
player's profile into the session.
"""

import logging
import re
from typing import Protocol

from royalemeta.models.card import CardDefinition
from royalemeta.models.failure import KnownError, ValidationFailure
from royalemeta.models.profile import PlayerProfile
from royalemeta.services.card_catalog import CardCatalog
from royalemeta.services.session import AnalysisSession

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"^#[0-9A-Z]+$")


class ProfileSource(Protocol):
    async def get_all_cards(self) -> list[CardDefinition]: ...

    async def get_player_profile(self, tag: str) -> PlayerProfile: ...


def normalize_tag(tag: str) -> str:
    """Trim, upper-case and ensure a leading '#'. Empty input stays empty."""
    normalized = tag.strip().upper()
    if normalized and not normalized.startswith("#"):
        normalized = "#" + normalized
    return normalized


def validate_tag(raw_tag: str | None) -> str:
    """
    Normalize and validate a player tag.

    Raises:
        ValidationFailure: If the tag is empty or contains invalid characters
    """
    tag = normalize_tag(raw_tag or "")
    if not tag or tag == "#":
        raise ValidationFailure()
    if not TAG_PATTERN.match(tag):
        raise ValidationFailure(
            message="Player tag may only contain letters and digits.",
            detail=f"Rejected tag: {tag}",
        )
    return tag


async def load_catalog(
    session: AnalysisSession,
    source: ProfileSource,
    refresh: bool = False,
) -> CardCatalog:
    """Return the session's catalog, fetching it on first use or when refresh is set."""
    if session.catalog is None or refresh:
        definitions = await source.get_all_cards()
        session.catalog = CardCatalog(definitions)
        logger.info("Loaded card catalog with %d cards", len(session.catalog))
    return session.catalog


async def search_player(
    session: AnalysisSession,
    source: ProfileSource,
    raw_tag: str,
    refresh_catalog: bool = False,
) -> PlayerProfile:
    """
    Load a player's profile into the session.

    The tag is validated before any network call. On any fetch failure the
    previously loaded profile is cleared and the error re-raised.

    Returns:
        The loaded profile

    Raises:
        ValidationFailure: If the tag is malformed
        TransportFailure: If the catalog or profile fetch fails
    """
    tag = validate_tag(raw_tag)

    try:
        await load_catalog(session, source, refresh=refresh_catalog)
        profile = await source.get_player_profile(tag)
    except KnownError:
        session.clear_profile()
        raise

    session.set_profile(profile)
    session.remember_tag(tag)
    logger.info("Loaded profile %s with %d cards", tag, len(profile.cards))
    return profile
