"""FastAPI app factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI

from radar.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.radar_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    from radar.feeds.flight_feed import create_feed

    async with httpx.AsyncClient(
        timeout=settings.http_timeout_s,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    ) as client:
        app.state.feed = create_feed(client, settings)
        yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Radar",
        description="Nearest-aircraft renderer for a 6-colour e-paper panel",
        version="0.1.0",
        lifespan=_lifespan,
    )

    # Fonts are loaded once, before the first request, and only read afterwards
    from radar.render.fonts import load_system_fonts
    from radar.render.pipeline import RenderPipeline

    fonts = load_system_fonts(settings.font_regular_paths, settings.font_bold_paths)
    app.state.pipeline = RenderPipeline(fonts)

    from radar.api.router import api_router, image_router

    app.include_router(image_router)
    app.include_router(api_router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    logger.info("listening on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
