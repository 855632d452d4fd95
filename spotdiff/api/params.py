"""Parameter endpoints — adaptive suggestion and the preset table."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from spotdiff.config import Settings
from spotdiff.dependencies import get_settings
from spotdiff.engine.config import DEFAULT_CONFIG
from spotdiff.engine.detector import score_complexity
from spotdiff.engine.errors import AnalysisError
from spotdiff.engine.params import PRESETS, get_preset
from spotdiff.imaging.loader import decode_image
from spotdiff.models.requests import AnalysisParamsModel, SuggestParamsRequest
from spotdiff.models.responses import ErrorResponse, PresetsResponse, SuggestParamsResponse

router = APIRouter()


@router.post(
    "/params/suggest",
    response_model=SuggestParamsResponse,
    responses={422: {"model": ErrorResponse}},
)
async def suggest(
    req: SuggestParamsRequest,
    settings: Settings = Depends(get_settings),
) -> SuggestParamsResponse:
    try:
        buffer = decode_image(req.image, settings.max_image_bytes, settings.max_image_pixels)
        complexity, preset = await asyncio.to_thread(score_complexity, buffer)
    except AnalysisError as e:
        raise HTTPException(status_code=422, detail=e.to_dict()) from e

    return SuggestParamsResponse(
        complexity=complexity,
        preset=preset,
        params=AnalysisParamsModel.from_params(get_preset(preset)),
    )


@router.get("/params/presets", response_model=PresetsResponse)
async def presets() -> PresetsResponse:
    return PresetsResponse(
        low_complexity_breakpoint=DEFAULT_CONFIG.low_complexity_breakpoint,
        high_complexity_breakpoint=DEFAULT_CONFIG.high_complexity_breakpoint,
        presets={name: AnalysisParamsModel.from_params(p) for name, p in PRESETS.items()},
    )
