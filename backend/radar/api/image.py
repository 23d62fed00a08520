"""GET /image.{svg,png,bin}: the renditions of the current frame."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, Response

from radar.dependencies import get_feed, get_pipeline
from radar.errors import RadarError, UpstreamError
from radar.feeds.flight_feed import FlightFeed
from radar.render.pipeline import RenderPipeline, Snapshot

logger = logging.getLogger(__name__)

router = APIRouter()

_NO_CACHE = {"Cache-Control": "no-cache, no-store, must-revalidate"}

_INDEX_HTML = (
    "<h1>Radar</h1><ul>"
    "<li><a href='/image.svg'>/image.svg</a></li>"
    "<li><a href='/image.png'>/image.png</a></li>"
    "<li><a href='/image_dithered.png'>/image_dithered.png</a></li>"
    "<li><a href='/image.bin'>/image.bin</a></li>"
    "</ul>"
)


async def _snapshot(feed: FlightFeed) -> Snapshot:
    try:
        return await feed.snapshot()
    except UpstreamError as e:
        logger.error("Error fetching flight: %s", e)
        raise HTTPException(status_code=502, detail="Error fetching flight data") from e


async def _render(
    render: Callable[[Snapshot], bytes | str],
    snapshot: Snapshot,
    media_type: str,
    error_msg: str,
) -> Response:
    # CPU-bound: keep the event loop free while the frame is drawn
    loop = asyncio.get_running_loop()
    try:
        body = await loop.run_in_executor(None, render, snapshot)
    except RadarError as e:
        logger.error("%s: %s", error_msg, e)
        raise HTTPException(status_code=500, detail=error_msg) from e
    return Response(content=body, media_type=media_type, headers=_NO_CACHE)


@router.get("/", response_class=HTMLResponse)
async def index() -> str:
    return _INDEX_HTML


@router.get("/image.svg")
async def image_svg(
    feed: FlightFeed = Depends(get_feed),
    pipeline: RenderPipeline = Depends(get_pipeline),
) -> Response:
    snapshot = await _snapshot(feed)
    return await _render(pipeline.svg, snapshot, "image/svg+xml", "Error rendering SVG")


@router.get("/image.png")
async def image_png(
    feed: FlightFeed = Depends(get_feed),
    pipeline: RenderPipeline = Depends(get_pipeline),
) -> Response:
    snapshot = await _snapshot(feed)
    return await _render(pipeline.png, snapshot, "image/png", "Error rendering PNG")


@router.get("/image_dithered.png")
async def image_dithered_png(
    feed: FlightFeed = Depends(get_feed),
    pipeline: RenderPipeline = Depends(get_pipeline),
) -> Response:
    snapshot = await _snapshot(feed)
    return await _render(pipeline.dithered_png, snapshot, "image/png", "Error rendering dithered PNG")


@router.get("/image.bin")
async def image_bin(
    feed: FlightFeed = Depends(get_feed),
    pipeline: RenderPipeline = Depends(get_pipeline),
) -> Response:
    snapshot = await _snapshot(feed)
    return await _render(pipeline.epd, snapshot, "application/octet-stream", "Error rendering BIN")
