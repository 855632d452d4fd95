"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spotdiff import __version__
from spotdiff.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.spotdiff_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="SpotDiff",
        description="Difference detection for generated spot-the-difference puzzles",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register the detection stages up front rather than on the first request
    from spotdiff.engine.pipeline import load_stages

    load_stages()

    from spotdiff.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
