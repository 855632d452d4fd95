"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from spotdiff.api import detect, health, params

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(detect.router)
api_router.include_router(params.router)
