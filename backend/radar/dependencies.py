"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Request

from radar.config import settings
from radar.feeds.flight_feed import FlightFeed
from radar.render.pipeline import RenderPipeline


def get_settings():
    return settings


def get_pipeline(request: Request) -> RenderPipeline:
    return request.app.state.pipeline


def get_feed(request: Request) -> FlightFeed:
    return request.app.state.feed
