"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from spotdiff import __version__
from spotdiff.engine.pipeline import load_stages
from spotdiff.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        stages_registered=load_stages().count,
    )
