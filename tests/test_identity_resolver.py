import httpx
import pytest

from application.services import IdentityResolver
from core.errors import UpstreamError
from tests.conftest import json_response, make_riot_client, match_payload

PUUID = "puuid-abc"


def _summoner_handler(summoner: dict, *, ids=("LA1_1",), participant: dict = None, match_status: int = 200):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        calls.append(path)
        if "/summoner/v4/summoners/by-puuid/" in path:
            return json_response(summoner)
        if path.endswith("/ids"):
            return json_response(list(ids))
        if "/match/v5/matches/" in path:
            if match_status != 200:
                return json_response({"status": {"status_code": match_status}}, match_status)
            return json_response(match_payload(ids[0], [participant] if participant else []))
        return json_response({"status": {"status_code": 404}}, 404)

    return handler, calls


async def test_resolve_account_uses_tag_cluster():
    seen = []

    def handler(request):
        seen.append(request.url.host)
        return json_response({"puuid": PUUID, "gameName": "Faker", "tagLine": "KR1"})

    async with make_riot_client(handler) as client:
        account = await IdentityResolver(client).resolve_account("Faker", "KR1")

    assert seen == ["asia.api.riotgames.com"]
    assert account.puuid == PUUID
    assert account.riot_id == "Faker#KR1"


async def test_resolve_account_propagates_upstream_status():
    def handler(request):
        return json_response({"status": {"message": "Data not found", "status_code": 404}}, 404)

    async with make_riot_client(handler) as client:
        with pytest.raises(UpstreamError) as info:
            await IdentityResolver(client).resolve_account("Nobody", "LAN")

    assert info.value.status == 404
    assert info.value.body["status"]["status_code"] == 404


async def test_missing_summoner_id_is_recovered_from_latest_match():
    summoner = {"puuid": PUUID, "profileIconId": 29, "summonerLevel": 412, "revisionDate": 1}
    participant = {"puuid": PUUID, "summonerId": "sid-recovered", "summonerLevel": 1, "profileIcon": 7}
    handler, calls = _summoner_handler(summoner, participant=participant)

    async with make_riot_client(handler) as client:
        profile = await IdentityResolver(client).resolve_summoner(PUUID, "la1")

    assert profile.summoner_id == "sid-recovered"
    # fields already present are left alone
    assert profile.level == 412
    assert profile.profile_icon_id == 29
    assert profile.revision_date == 1
    assert any(c.endswith("/ids") for c in calls)


async def test_recovery_fills_level_and_icon_only_when_missing():
    summoner = {"puuid": PUUID}
    participant = {"puuid": PUUID, "summonerId": "sid", "summonerLevel": 55, "profileIcon": 7}
    handler, _ = _summoner_handler(summoner, participant=participant)

    async with make_riot_client(handler) as client:
        profile = await IdentityResolver(client).resolve_summoner(PUUID, "la1")

    assert (profile.summoner_id, profile.level, profile.profile_icon_id) == ("sid", 55, 7)


async def test_complete_profile_skips_recovery():
    summoner = {"id": "sid", "puuid": PUUID, "summonerLevel": 30, "profileIconId": 1}
    handler, calls = _summoner_handler(summoner)

    async with make_riot_client(handler) as client:
        profile = await IdentityResolver(client).resolve_summoner(PUUID, "euw1")

    assert profile.summoner_id == "sid"
    assert len(calls) == 1


async def test_recovery_failure_is_swallowed():
    summoner = {"puuid": PUUID, "summonerLevel": 100}
    handler, _ = _summoner_handler(summoner, participant=None, match_status=500)

    async with make_riot_client(handler) as client:
        profile = await IdentityResolver(client).resolve_summoner(PUUID, "la1")

    assert profile.summoner_id is None
    assert profile.level == 100


async def test_summoner_call_failure_propagates():
    def handler(request):
        return json_response({"status": {"status_code": 403}}, 403)

    async with make_riot_client(handler) as client:
        with pytest.raises(UpstreamError) as info:
            await IdentityResolver(client).resolve_summoner(PUUID, "la1")

    assert info.value.status == 403


@pytest.mark.parametrize("participant", ["not-a-dict", {"puuid": PUUID, "kills": "many"}])
async def test_malformed_recovery_match_returns_unrecovered_profile(participant):
    summoner = {"puuid": PUUID, "summonerLevel": 88}
    handler, _ = _summoner_handler(summoner, participant=participant)

    async with make_riot_client(handler) as client:
        profile = await IdentityResolver(client).resolve_summoner(PUUID, "la1")

    assert profile.puuid == PUUID
    assert profile.summoner_id is None
    assert profile.level == 88
