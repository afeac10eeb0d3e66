import asyncio

import httpx

from application.services import MatchHistoryResolver
from tests.conftest import json_response, make_riot_client, match_payload

PUUID = "puuid-abc"
IDS = [f"LA1_{i}" for i in range(10)]
FAILING = {"LA1_2", "LA1_5", "LA1_9"}


def _participant(**extra):
    base = {
        "puuid": PUUID,
        "championName": "Ahri",
        "teamPosition": "MIDDLE",
        "win": True,
        "kills": 7,
        "deaths": 2,
        "assists": 9,
        "totalMinionsKilled": 180,
        "neutralMinionsKilled": 12,
        "goldEarned": 12000,
        "totalDamageDealtToChampions": 24000,
        "visionScore": 20,
        "item0": 3285,
        "item1": 3020,
    }
    base.update(extra)
    return base


def _handler(order):
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/ids"):
            return json_response(IDS[: int(request.url.params["count"])])
        match_id = path.rsplit("/", 1)[-1]
        order.append(match_id)
        if match_id in FAILING:
            return json_response({"status": {"status_code": 500}}, 500)
        return json_response(match_payload(match_id, [_participant()]))

    return handler


async def test_failed_details_are_skipped_in_order():
    order = []
    async with make_riot_client(_handler(order)) as client:
        matches = await MatchHistoryResolver(client, pacing_s=0).resolve_matches(IDS, "la1")

    assert [m.match_id for m in matches] == [i for i in IDS if i not in FAILING]
    assert len(matches) == 7
    # strictly sequential: fetched in the given order
    assert order == IDS


async def test_recent_matches_uses_platform_cluster():
    hosts = []
    order = []
    inner = _handler(order)

    def handler(request):
        hosts.append(request.url.host)
        return inner(request)

    async with make_riot_client(handler) as client:
        matches = await MatchHistoryResolver(client, pacing_s=0).resolve_recent_matches(PUUID, "euw1", count=3)

    assert [m.match_id for m in matches] == ["LA1_0", "LA1_1"]
    assert set(hosts) == {"europe.api.riotgames.com"}


async def test_id_failure_is_empty():
    async with make_riot_client(lambda r: json_response({}, 404)) as client:
        assert await MatchHistoryResolver(client, pacing_s=0).resolve_recent_matches(PUUID, "la1") == []


async def test_count_is_capped_at_100():
    counts = []

    def handler(request):
        counts.append(request.url.params["count"])
        return json_response([])

    async with make_riot_client(handler) as client:
        await MatchHistoryResolver(client, pacing_s=0).resolve_match_ids(PUUID, "la1", count=500)

    assert counts == ["100"]


async def test_for_player_row():
    async with make_riot_client(_handler([])) as client:
        [match] = await MatchHistoryResolver(client, pacing_s=0).resolve_matches(["LA1_0"], "la1")

    row = match.for_player(PUUID)
    assert row["role"] == "MID"
    assert row["kda"] == {"k": 7, "d": 2, "a": 9}
    assert row["cs"] == 192
    assert row["csPerMin"] == 6.4
    assert row["items"][:2] == [3285, 3020]
    assert match.for_player("someone-else") is None


async def test_malformed_detail_is_skipped():
    ids = ["LA1_0", "LA1_1", "LA1_2"]

    def handler(request):
        match_id = request.url.path.rsplit("/", 1)[-1]
        if match_id == "LA1_1":
            return json_response({"info": ["broken"]})
        return json_response(match_payload(match_id, [_participant()]))

    async with make_riot_client(handler) as client:
        matches = await MatchHistoryResolver(client, pacing_s=0).resolve_matches(ids, "la1")

    assert [m.match_id for m in matches] == ["LA1_0", "LA1_2"]


async def test_details_are_paced_and_never_overlap(monkeypatch):
    real_sleep = asyncio.sleep
    pauses = []
    in_flight = 0
    peak = 0

    async def recording_sleep(delay, *args, **kwargs):
        pauses.append(delay)
        await real_sleep(0)

    async def handler(request):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await real_sleep(0)
        in_flight -= 1
        match_id = request.url.path.rsplit("/", 1)[-1]
        if match_id in FAILING:
            return json_response({"status": {"status_code": 500}}, 500)
        return json_response(match_payload(match_id, [_participant()]))

    monkeypatch.setattr(asyncio, "sleep", recording_sleep)
    async with make_riot_client(handler) as client:
        matches = await MatchHistoryResolver(client, pacing_s=0.25).resolve_matches(IDS, "la1")

    assert len(matches) == 7
    # one pause after every fetch, failed ones included
    assert pauses.count(0.25) == len(IDS)
    assert peak == 1
