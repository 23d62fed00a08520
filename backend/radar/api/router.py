"""Master API routers. Image renditions at the root, meta endpoints under /api."""

from __future__ import annotations

from fastapi import APIRouter

from radar.api import health, image

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)

image_router = APIRouter()
image_router.include_router(image.router)
