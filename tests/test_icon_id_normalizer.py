import httpx
import pytest

from application.services import IconIdNormalizer
from config.settings import Settings
from infrastructure.api import DDragonClient
from tests.conftest import json_response

RUNE_TREES = [
    {
        "id": 8100,
        "key": "Domination",
        "icon": "perk-images/Styles/7200_Domination.png",
        "slots": [
            {"runes": [{"id": 8112, "icon": "perk-images/Styles/Domination/Electrocute/Electrocute.png"}]},
            {"runes": [{"id": 8139, "icon": "perk-images/Styles/Domination/TasteOfBlood/GreenTerror_TasteOfBlood.png"}]},
        ],
    },
    {
        "id": 8200,
        "key": "Sorcery",
        "slots": [{"runes": [{"id": 8210, "icon": "perk-images/Styles/Sorcery/Transcendence/Transcendence.png"}]}],
    },
]


class PinnedVersion(Settings):
    DDRAGON_VERSION = ""
    DDRAGON_URL = "https://ddragon.test"


def _ddragon(fail: bool = False, calls=None) -> DDragonClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request.url.path)
        if request.url.path.endswith("versions.json"):
            return json_response(["14.10.1", "14.9.1"])
        if fail:
            return json_response({}, 503)
        return json_response(RUNE_TREES)

    return DDragonClient(settings=PinnedVersion(), transport=httpx.MockTransport(handler))


@pytest.fixture
async def normalizer():
    n = IconIdNormalizer(_ddragon())
    await n.load()
    return n


async def test_known_filename_resolves(normalizer):
    assert normalizer.resolve("Electrocute.png") == 8112
    assert normalizer.resolve("https://cdn.example/perks/GreenTerror_TasteOfBlood.png?v=2") == 8139


async def test_stat_shards_under_both_extensions(normalizer):
    assert normalizer.resolve("StatModsAdaptiveForceIcon.png") == 5008
    assert normalizer.resolve("StatModsAdaptiveForceIcon.webp") == 5008
    assert normalizer.resolve("StatModsHealthScalingIcon.png") == 5001


async def test_numeric_fallback(normalizer):
    assert normalizer.resolve("9001.png") == 9001
    assert normalizer.resolve(8229) == 8229


async def test_misses(normalizer):
    assert normalizer.resolve("not-a-number.png") is None
    assert normalizer.resolve("999.png") is None
    assert normalizer.resolve("") is None


async def test_resolve_many_drops_misses_keeps_order(normalizer):
    values = ["Transcendence.png", "not-a-number.png", "StatModsAdaptiveForceIcon.png", "StatModsAdaptiveForceIcon.webp"]
    assert normalizer.resolve_many(values) == [8210, 5008, 5008]
    assert normalizer.resolve_many(values, unique=True) == [8210, 5008]


async def test_load_fetches_latest_catalogue_once():
    calls = []
    n = IconIdNormalizer(_ddragon(calls=calls))
    await n.load()
    await n.load()

    assert calls == ["/api/versions.json", "/cdn/14.10.1/data/en_US/runesReforged.json"]
    assert n.loaded


async def test_feed_failure_keeps_shards_only():
    n = IconIdNormalizer(_ddragon(fail=True))
    await n.load()

    assert n.loaded
    assert n.resolve("Electrocute.png") is None
    assert n.resolve("StatModsArmorIcon.png") == 5002


async def test_invalidate_forces_reload():
    calls = []
    n = IconIdNormalizer(_ddragon(calls=calls))
    await n.load()
    n.invalidate()
    assert not n.loaded
    await n.load()

    assert calls.count("/cdn/14.10.1/data/en_US/runesReforged.json") == 2


async def test_no_published_versions_keeps_shards_only():
    def handler(request):
        return json_response([])

    n = IconIdNormalizer(DDragonClient(settings=PinnedVersion(), transport=httpx.MockTransport(handler)))
    await n.load()

    assert n.loaded
    assert n.resolve("StatModsAdaptiveForceIcon.png") == 5008
    assert n.resolve("Electrocute.png") is None


async def test_malformed_catalogue_entries_are_skipped():
    trees = [
        "not-a-tree",
        {"slots": "nope"},
        {"slots": [None, {"runes": [{"icon": "NoId.png"}, {"id": "x", "icon": "Bad.png"}, 42]}]},
        RUNE_TREES[0],
    ]

    def handler(request):
        if request.url.path.endswith("versions.json"):
            return json_response(["14.10.1"])
        return json_response(trees)

    n = IconIdNormalizer(DDragonClient(settings=PinnedVersion(), transport=httpx.MockTransport(handler)))
    await n.load()

    assert n.resolve("Electrocute.png") == 8112
    assert n.resolve("NoId.png") is None
    assert n.resolve("Bad.png") is None
