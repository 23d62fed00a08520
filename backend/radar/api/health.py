"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from radar.config import Settings
from radar.dependencies import get_pipeline, get_settings
from radar.models.responses import HealthResponse
from radar.render.pipeline import RenderPipeline

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(
    pipeline: RenderPipeline = Depends(get_pipeline),
    cfg: Settings = Depends(get_settings),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        fonts=pipeline.fonts.description,
        center=(cfg.latitude, cfg.longitude),
    )
