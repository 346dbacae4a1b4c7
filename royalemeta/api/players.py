"""
Player API endpoints.

Player search and recent search history.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from royalemeta.api.deps import get_api_client, get_session
from royalemeta.api.schemas import CardResponse, ProfileResponse, RecentTagsResponse
from royalemeta.clients.royale_api import RoyaleApiClient
from royalemeta.services.card_catalog import CardCatalog
from royalemeta.services.collection_view import CollectionSort, SortOrder, sort_collection
from royalemeta.services.player_search import normalize_tag, search_player
from royalemeta.services.session import AnalysisSession

router = APIRouter(prefix="/players", tags=["players"])


@router.get("/history/recent", response_model=RecentTagsResponse)
async def get_recent_tags(
    session: Annotated[AnalysisSession, Depends(get_session)],
) -> RecentTagsResponse:
    """Recently searched tags, most recent first."""
    return RecentTagsResponse(tags=session.recent_tags)


@router.delete("/history/recent/{tag}", response_model=RecentTagsResponse)
async def remove_recent_tag(
    tag: str,
    session: Annotated[AnalysisSession, Depends(get_session)],
) -> RecentTagsResponse:
    """Remove a tag from the search history."""
    return RecentTagsResponse(tags=session.forget_tag(normalize_tag(tag)))


@router.get("/{tag}", response_model=ProfileResponse)
async def get_player(
    tag: str,
    session: Annotated[AnalysisSession, Depends(get_session)],
    client: Annotated[RoyaleApiClient, Depends(get_api_client)],
    sort: CollectionSort = CollectionSort.LEVEL,
    order: SortOrder = SortOrder.DESC,
    refresh_catalog: Annotated[bool, Query()] = False,
) -> ProfileResponse:
    """
    Search a player by tag.

    Loads the profile into the session (clearing cached meta results) and
    returns the collection sorted as requested.
    """
    profile = await search_player(session, client, tag, refresh_catalog=refresh_catalog)
    catalog = session.catalog or CardCatalog()

    return ProfileResponse(
        tag=profile.tag,
        name=profile.name,
        trophies=profile.trophies,
        exp_level=profile.exp_level,
        card_count=len(profile.cards),
        cards=[
            CardResponse.from_card(card, catalog)
            for card in sort_collection(profile.cards, catalog, sort, order)
        ],
    )
