"""
Meta analysis API endpoints.

Runs the meta analysis for the loaded profile and serves filtered results.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from royalemeta.analysis.affinity import ScoringWeights
from royalemeta.analysis.ranker import DeckFilter, SlotConstraint, filter_archetypes
from royalemeta.api.deps import get_api_client, get_session
from royalemeta.api.schemas import (
    FilterOptionsResponse,
    MetaDeckResponse,
    MetaDecksResponse,
    ProgressResponse,
)
from royalemeta.clients.royale_api import RoyaleApiClient
from royalemeta.config import settings
from royalemeta.models.deck import ScoredArchetype
from royalemeta.models.failure import NoProfileLoadedError
from royalemeta.services.card_catalog import CardCatalog
from royalemeta.services.meta_analysis import MetaAnalyzer
from royalemeta.services.player_search import load_catalog
from royalemeta.services.session import AnalysisSession

router = APIRouter(prefix="/meta", tags=["meta"])


def _to_response(
    session: AnalysisSession,
    decks: list[ScoredArchetype],
    total: int,
) -> MetaDecksResponse:
    if session.profile is None:
        raise NoProfileLoadedError()
    catalog = session.catalog or CardCatalog()
    return MetaDecksResponse(
        analyzed=session.results is not None,
        total=total,
        count=len(decks),
        decks=[MetaDeckResponse.from_scored(d, session.profile, catalog) for d in decks],
    )


@router.post("/analysis", response_model=MetaDecksResponse)
async def run_analysis(
    session: Annotated[AnalysisSession, Depends(get_session)],
    client: Annotated[RoyaleApiClient, Depends(get_api_client)],
    limit: Annotated[int, Query(ge=1, le=500)] = settings.result_limit,
) -> MetaDecksResponse:
    """
    Analyze the current meta against the loaded profile.

    Returns 409 if no profile is loaded or a newer request superseded the
    run, and 502 if no leaderboard data could be obtained (previous results
    are kept in that case).
    """
    if session.profile is None:
        raise NoProfileLoadedError()

    analyzer = MetaAnalyzer(
        client,
        session,
        sample_size=settings.sample_size,
        batch_size=settings.batch_size,
        weights=ScoringWeights.from_settings(settings),
    )
    ranked = await analyzer.run()
    return _to_response(session, ranked[:limit], total=len(ranked))


@router.get("/progress", response_model=ProgressResponse)
async def get_progress(
    session: Annotated[AnalysisSession, Depends(get_session)],
) -> ProgressResponse:
    """Progress of the running (or last) analysis."""
    return ProgressResponse(running=session.running, progress=session.progress)


@router.get("/filters", response_model=FilterOptionsResponse)
async def get_filter_options(
    session: Annotated[AnalysisSession, Depends(get_session)],
    client: Annotated[RoyaleApiClient, Depends(get_api_client)],
) -> FilterOptionsResponse:
    """Cards that can be used as deck filters, grouped for the filter picker."""
    catalog = await load_catalog(session, client)
    return FilterOptionsResponse.from_catalog(catalog)

@router.get("/decks", response_model=MetaDecksResponse)
async def get_meta_decks(
    session: Annotated[AnalysisSession, Depends(get_session)],
    evo: Annotated[
        list[int] | None, Query(description="Card ids required in an evolution slot")
    ] = None,
    card: Annotated[list[int] | None, Query(description="Card ids required anywhere")] = None,
    limit: Annotated[int, Query(ge=1, le=500)] = settings.result_limit,
) -> MetaDecksResponse:
    """
    Cached analysis results, filtered by card.

    All filters must match. An empty list is returned until an analysis
    has completed.
    """
    filters = [DeckFilter(card_id, SlotConstraint.EVOLUTION_SLOT) for card_id in evo or []]
    filters += [DeckFilter(card_id, SlotConstraint.ANYWHERE) for card_id in card or []]

    results = session.results or []
    return _to_response(session, filter_archetypes(results, filters, limit), total=len(results))
