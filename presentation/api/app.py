"""FastAPI application factory."""
from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from application.services import (
    BuildScraper,
    IconIdNormalizer,
    IdentityResolver,
    MatchHistoryResolver,
    RankResolver,
    RankScraper,
)
from application.use_cases import ResolvePlayerUseCase
from config import settings as default_settings
from core.errors import ConfigurationError, UpstreamError
from core.logging import context, get_logger
from domain.interfaces import IBrowserLauncher
from infrastructure.api import DDragonClient, RiotAPIClient
from infrastructure.scraping import PlaywrightLauncher, ScrapeTimeouts
from .routes import router

logger = get_logger(__name__, service="api")


def create_app(
    settings_obj=None,
    *,
    api_client: Optional[RiotAPIClient] = None,
    launcher: Optional[IBrowserLauncher] = None,
    normalizer: Optional[IconIdNormalizer] = None,
    timeouts: Optional[ScrapeTimeouts] = None,
    build_http_first: bool = True,
) -> FastAPI:
    """Wire clients, resolvers and scrapers onto ``app.state``.

    Collaborators can be injected (tests pass mock transports and fake
    launchers); anything not given is built from settings at startup.
    """
    cfg = settings_obj or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not cfg.RIOT_API_KEY:
            logger.warning("RIOT_API_KEY is not set; Riot-backed routes will answer 500")

        client = api_client or RiotAPIClient(cfg.RIOT_API_KEY, settings=cfg)
        await client.open()

        icons = normalizer or IconIdNormalizer(DDragonClient(settings=cfg))
        await icons.load()

        scrape_timeouts = timeouts or ScrapeTimeouts.from_env()
        browser_launcher = launcher or PlaywrightLauncher(scrape_timeouts.executable_path)

        identity = IdentityResolver(client)
        ranks = RankResolver(client)
        matches = MatchHistoryResolver(client)
        rank_scraper = RankScraper(browser_launcher, scrape_timeouts, site_url=cfg.PROFILE_SITE_URL)

        app.state.settings = cfg
        app.state.api_client = client
        app.state.normalizer = icons
        app.state.identity = identity
        app.state.ranks = ranks
        app.state.matches = matches
        app.state.rank_scraper = rank_scraper
        app.state.build_scraper = BuildScraper(
            browser_launcher,
            icons,
            scrape_timeouts,
            site_url=cfg.BUILD_SITE_URL,
            http_first=build_http_first,
        )
        app.state.player = ResolvePlayerUseCase(identity, ranks, rank_scraper, matches)

        logger.success(f"API ready ({len(icons)} icon mappings)")
        try:
            yield
        finally:
            await client.close()
            logger.info("API stopped")

    app = FastAPI(title="Rift Resolver", version="1.0.0", lifespan=lifespan)
    app.state.settings = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.ALLOWED_ORIGINS),
        allow_origin_regex=cfg.ALLOWED_ORIGIN_REGEX or None,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        with context(request_id=request_id, route=request.url.path):
            response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response

    @app.exception_handler(ConfigurationError)
    async def configuration_error(request: Request, exc: ConfigurationError):
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(UpstreamError)
    async def upstream_error(request: Request, exc: UpstreamError):
        logger.error(f"Upstream failure on {request.url.path}: {exc}")
        return JSONResponse(status_code=exc.status or 502, content=exc.to_payload())

    app.include_router(router)
    return app
