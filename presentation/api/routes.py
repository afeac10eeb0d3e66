"""HTTP routes consumed by the dashboard.

Only identity lookups and a missing credential answer with a non-200 status.
Rank, match and build routes always answer 200; an empty list or an empty
build is a valid answer.
"""
from __future__ import annotations

import time
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from config import settings as default_settings
from core.errors import ConfigurationError
from core.logging import bind

router = APIRouter()

_STARTED_AT = time.monotonic()


def get_settings(request: Request):
    return getattr(request.app.state, "settings", default_settings)


def require_api_key(request: Request) -> None:
    """Riot-keyed routes fail fast before any resolver runs."""
    if not get_settings(request).RIOT_API_KEY:
        raise ConfigurationError("Riot API Key not configured in server")


def _platform(request: Request, region: Optional[str]) -> str:
    return (region or get_settings(request).DEFAULT_PLATFORM).lower()


@router.get("/health")
async def health(request: Request):
    cfg = get_settings(request)
    return {
        "status": "ok",
        "hasRiotKey": bool(cfg.RIOT_API_KEY),
        "allowedOrigins": list(cfg.ALLOWED_ORIGINS),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
    }


@router.get("/api/account/{game_name}/{tag_line}", dependencies=[Depends(require_api_key)])
async def get_account(request: Request, game_name: str, tag_line: str):
    bind(player=f"{game_name}#{tag_line}")
    account = await request.app.state.identity.resolve_account(game_name, tag_line)
    return account.to_dict()


@router.get("/api/summoner/{puuid}", dependencies=[Depends(require_api_key)])
async def get_summoner(request: Request, puuid: str, region: Optional[str] = None):
    profile = await request.app.state.identity.resolve_summoner(puuid, _platform(request, region))
    return profile.to_dict()


@router.get("/api/rank/{summoner_id}", dependencies=[Depends(require_api_key)])
async def get_rank(request: Request, summoner_id: str, region: Optional[str] = None):
    entries = await request.app.state.ranks.resolve_ranks(summoner_id, _platform(request, region))
    return [e.to_dict() for e in entries]


@router.get("/api/matches/{puuid}", dependencies=[Depends(require_api_key)])
async def get_matches(
    request: Request,
    puuid: str,
    region: Optional[str] = None,
    count: Optional[int] = Query(None, ge=1, le=100),
):
    matches = await request.app.state.matches.resolve_recent_matches(puuid, _platform(request, region), count)
    return [m.to_dict() for m in matches]


@router.get("/api/scrape-rank/{region}/{name}/{tag}", dependencies=[Depends(require_api_key)])
async def scrape_rank(request: Request, region: str, name: str, tag: str):
    bind(player=f"{name}#{tag}")
    entries = await request.app.state.rank_scraper.scrape(region.lower(), name, tag)
    return [e.to_dict() for e in entries]


@router.get("/api/scrape-builds/{champion}")
@router.get("/api/scrape-builds/{champion}/{role}")
async def scrape_builds(request: Request, champion: str, role: Optional[str] = None):
    build = await request.app.state.build_scraper.scrape(champion, role)
    return build.to_dict()


@router.get("/api/player/{game_name}/{tag_line}", dependencies=[Depends(require_api_key)])
async def get_player(
    request: Request,
    game_name: str,
    tag_line: str,
    region: Optional[str] = None,
    count: Optional[int] = Query(None, ge=1, le=100),
):
    overview = await request.app.state.player.execute(game_name, tag_line, region, count)
    return overview.to_dict()
