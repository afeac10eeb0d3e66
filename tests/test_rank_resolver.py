import httpx
import pytest

from application.services import RankResolver
from tests.conftest import json_response, make_riot_client

ENTRY = {
    "queueType": "RANKED_SOLO_5x5",
    "tier": "GOLD",
    "rank": "II",
    "leaguePoints": 47,
    "wins": 20,
    "losses": 18,
}


async def test_entries_are_mapped():
    async with make_riot_client(lambda r: json_response([ENTRY])) as client:
        entries = await RankResolver(client).resolve_ranks("sid", "la1")

    assert len(entries) == 1
    assert entries[0].to_dict() == {
        "queueType": "RANKED_SOLO_5x5",
        "tier": "GOLD",
        "rank": "II",
        "leaguePoints": 47,
        "wins": 20,
        "losses": 18,
        "source": "api",
    }


@pytest.mark.parametrize("status", [400, 403, 404, 500, 503])
async def test_upstream_failure_is_empty(status):
    async with make_riot_client(lambda r: json_response({"status": {}}, status)) as client:
        assert await RankResolver(client).resolve_ranks("sid", "la1") == []


async def test_network_error_is_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    async with make_riot_client(handler) as client:
        assert await RankResolver(client).resolve_ranks("sid", "la1") == []


@pytest.mark.parametrize("summoner_id", ["", "   "])
async def test_invalid_summoner_id_never_calls_upstream(summoner_id):
    calls = []

    def handler(request):
        calls.append(request)
        return json_response([ENTRY])

    async with make_riot_client(handler) as client:
        assert await RankResolver(client).resolve_ranks(summoner_id, "la1") == []
    assert calls == []


@pytest.mark.parametrize("payload", [["GOLD"], [{"queueType": "RANKED_SOLO_5x5", "leaguePoints": "lots"}], [{"tier": 5}]])
async def test_malformed_payload_is_empty(payload):
    async with make_riot_client(lambda r: json_response(payload)) as client:
        assert await RankResolver(client).resolve_ranks("sid", "la1") == []
