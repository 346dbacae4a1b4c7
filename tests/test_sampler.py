import pytest

from royalemeta.analysis.sampler import (
    build_ranking_paths,
    resolve_latest_season,
    sample_top_players,
)
from royalemeta.models.failure import SyncFailure, TransportFailure
from royalemeta.models.profile import RankedPlayer


def _players(count: int) -> list[RankedPlayer]:
    return [RankedPlayer(tag=f"#P{i}", rating=3000 - i) for i in range(count)]


class TestBuildRankingPaths:
    def test_without_season(self) -> None:
        paths = build_ranking_paths()
        assert len(paths) == 3
        assert paths[0] == "/locations/global/pathoflegend/players?limit=200"
        assert all("seasons" not in p for p in paths)

    def test_with_season(self) -> None:
        paths = build_ranking_paths("2026-10")
        assert len(paths) == 4
        assert paths[1] == (
            "/locations/global/pathoflegend/seasons/2026-10/rankings/players?limit=200"
        )
        assert paths[-1] == "/locations/global/rankings/players?limit=100"


class TestResolveLatestSeason:
    async def test_latest_is_last(self, fake_source) -> None:
        fake_source.seasons = ["2026-08", "2026-09", "2026-10"]
        assert await resolve_latest_season(fake_source) == "2026-10"

    async def test_empty_listing(self, fake_source) -> None:
        assert await resolve_latest_season(fake_source) is None

    async def test_lookup_failure(self, fake_source) -> None:
        fake_source.seasons = TransportFailure("/locations/global/seasons", "HTTP 503", 503)
        assert await resolve_latest_season(fake_source) is None


class TestSampleTopPlayers:
    async def test_first_non_empty_endpoint_wins(self, fake_source) -> None:
        """Empty, failing, then 200 players: the third is used, the fourth never tried."""
        fake_source.rankings = {
            "/a": [],
            "/b": TransportFailure("/b", "HTTP 500", status=500),
            "/c": _players(200),
            "/d": _players(5),
        }

        players = await sample_top_players(fake_source, ["/a", "/b", "/c", "/d"])

        assert len(players) == 200
        assert players[0].tag == "#P0"
        assert fake_source.calls_of("rankings") == ["/a", "/b", "/c"]

    async def test_truncates_to_sample_size(self, fake_source) -> None:
        fake_source.rankings = {"/a": _players(300)}
        players = await sample_top_players(fake_source, ["/a"], sample_size=50)
        assert [p.tag for p in players] == [f"#P{i}" for i in range(50)]

    async def test_decode_error_is_recoverable(self, fake_source) -> None:
        fake_source.rankings = {"/a": ValueError("bad body"), "/b": _players(3)}
        assert len(await sample_top_players(fake_source, ["/a", "/b"])) == 3

    async def test_all_endpoints_fail(self, fake_source) -> None:
        fake_source.rankings = {"/a": [], "/b": TransportFailure("/b", "HTTP 403", 403)}

        with pytest.raises(SyncFailure) as exc_info:
            await sample_top_players(fake_source, ["/a", "/b", "/c"])

        assert exc_info.value.message == "Meta analysis sync failed."
        assert exc_info.value.attempted == ["/a", "/b", "/c"]
