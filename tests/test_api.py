import httpx
import pytest
from fastapi.testclient import TestClient

from application.services import IconIdNormalizer
from infrastructure.api import DDragonClient
from presentation.api import create_app
from tests.conftest import FakeLauncher, FakePage, FastSettings, json_response, make_riot_client, zero_timeouts
from tests.test_icon_id_normalizer import RUNE_TREES, PinnedVersion

PUUID = "puuid-abc"


class NoKeySettings(FastSettings):
    RIOT_API_KEY = ""


def _riot_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if "/accounts/by-riot-id/" in path:
        if "Nobody" in path:
            return json_response({"status": {"message": "Data not found", "status_code": 404}}, 404)
        return json_response({"puuid": PUUID, "gameName": "Hide on bush", "tagLine": "KR1"})
    if "/summoners/by-puuid/" in path:
        return json_response({"id": "sid", "puuid": PUUID, "summonerLevel": 20, "profileIconId": 6})
    if "/league/v4/entries/" in path:
        return json_response({"status": {"status_code": 403}}, 403)
    if path.endswith("/ids"):
        return json_response([])
    return json_response({}, 404)


def _normalizer() -> IconIdNormalizer:
    def handler(request):
        if request.url.path.endswith("versions.json"):
            return json_response(["14.10.1"])
        return json_response(RUNE_TREES)

    return IconIdNormalizer(DDragonClient(settings=PinnedVersion(), transport=httpx.MockTransport(handler)))


@pytest.fixture
def client_factory():
    def factory(settings_obj=None, launcher=None):
        app = create_app(
            settings_obj or FastSettings(),
            api_client=make_riot_client(_riot_handler),
            launcher=launcher or FakeLauncher(FakePage()),
            normalizer=_normalizer(),
            timeouts=zero_timeouts(),
            build_http_first=False,
        )
        return TestClient(app)

    return factory


def test_health_reports_key_presence(client_factory):
    with client_factory(NoKeySettings()) as client:
        body = client.get("/health").json()

    assert body["status"] == "ok"
    assert body["hasRiotKey"] is False
    assert body["allowedOrigins"] == ["http://localhost:5173"]


@pytest.mark.parametrize(
    "path",
    [
        "/api/account/Faker/KR1",
        "/api/summoner/abc?region=kr",
        "/api/rank/sid",
        "/api/matches/abc",
        "/api/scrape-rank/kr/Faker/KR1",
        "/api/player/Faker/KR1",
    ],
)
def test_missing_key_is_500(client_factory, path):
    with client_factory(NoKeySettings()) as client:
        resp = client.get(path)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Riot API Key not configured in server"}


def test_account_found(client_factory):
    with client_factory() as client:
        resp = client.get("/api/account/Hide on bush/KR1")

    assert resp.status_code == 200
    assert resp.json() == {"puuid": PUUID, "gameName": "Hide on bush", "tagLine": "KR1"}
    assert resp.headers["x-request-id"]


def test_account_not_found_keeps_upstream_status(client_factory):
    with client_factory() as client:
        resp = client.get("/api/account/Nobody/LAN")

    assert resp.status_code == 404
    assert resp.json()["status"]["message"] == "Data not found"


def test_rank_failure_is_empty_200(client_factory):
    with client_factory() as client:
        resp = client.get("/api/rank/sid?region=kr")

    assert resp.status_code == 200
    assert resp.json() == []


def test_summoner_shape(client_factory):
    with client_factory() as client:
        body = client.get(f"/api/summoner/{PUUID}?region=kr").json()

    assert body["id"] == "sid"
    assert body["summonerLevel"] == 20
    assert body["profileIconId"] == 6


def test_build_without_key_is_empty_200(client_factory):
    launcher = FakeLauncher(FakePage(goto_error=TimeoutError("Timeout exceeded")))
    with client_factory(NoKeySettings(), launcher=launcher) as client:
        resp = client.get("/api/scrape-builds/Ahri/mid")

    assert resp.status_code == 200
    assert resp.json() == {
        "role": "Mid",
        "items": {"core": [], "boots": [], "situational": []},
        "runeIds": [],
        "itemIds": [],
        "winrate": None,
        "source": None,
    }
    assert launcher.total_closes == 1


def test_player_overview_low_level_skips_scrape(client_factory):
    launcher = FakeLauncher(FakePage())
    with client_factory(launcher=launcher) as client:
        body = client.get("/api/player/Hide on bush/KR1").json()

    assert body["platform"] == "kr"
    assert body["ranks"] == []
    assert body["matches"] == []
    assert body["stats"] is None
    assert launcher.browsers == []


class PreviewSettings(FastSettings):
    ALLOWED_ORIGIN_REGEX = r"https://rift-[a-z0-9-]+\.vercel\.app"


@pytest.mark.parametrize(
    "origin, allowed",
    [
        ("http://localhost:5173", True),
        ("https://rift-git-feature-x.vercel.app", True),
        ("https://evil.example", False),
    ],
)
def test_cors_origins_without_credentials(client_factory, origin, allowed):
    with client_factory(PreviewSettings()) as client:
        resp = client.get("/health", headers={"Origin": origin})

    assert resp.status_code == 200
    assert (resp.headers.get("access-control-allow-origin") == origin) is allowed
    assert "access-control-allow-credentials" not in resp.headers
