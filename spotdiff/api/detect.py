"""POST /api/detect — run the detection engine on an image pair."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from spotdiff.config import Settings
from spotdiff.dependencies import get_settings
from spotdiff.engine.context import DetectionContext
from spotdiff.engine.detector import analyze
from spotdiff.engine.errors import AnalysisError
from spotdiff.engine.pipeline import create_pipeline
from spotdiff.imaging.loader import decode_pair
from spotdiff.models.requests import AnalysisParamsModel, DetectRequest
from spotdiff.models.responses import DetectResponse, DifferenceModel, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()


_SENTINEL = object()  # marks end of queue


def _build_response(ctx: DetectionContext, elapsed_ms: float) -> DetectResponse:
    return DetectResponse(
        differences=[DifferenceModel.from_difference(d) for d in ctx.differences],
        params=AnalysisParamsModel.from_params(ctx.params),
        complexity=ctx.complexity,
        preset=ctx.preset,
        stats=ctx.stats(),
        timings_ms=ctx.timings_ms,
        processing_time_ms=round(elapsed_ms, 1),
    )


def _sse(event: str, payload: dict) -> str:
    return f"event: {event}\ndata: {json.dumps(payload)}\n\n"


async def _stream_detect(req: DetectRequest, settings: Settings) -> AsyncGenerator[str, None]:
    """Drive pipeline.run_streaming() in a thread, yielding SSE events as they arrive."""
    start = time.perf_counter()

    try:
        original, modified = decode_pair(
            req.original, req.modified, settings.max_image_bytes, settings.max_image_pixels
        )
    except AnalysisError as e:
        yield _sse("error", e.to_dict())
        return

    pipeline = create_pipeline()
    ctx = DetectionContext(
        original=original,
        modified=modified,
        params=req.params.to_params() if req.params else None,
        config=pipeline.config,
    )
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    def _run_pipeline() -> None:
        """Sync pipeline in thread — pushes progress dicts onto the async queue."""
        try:
            for progress in pipeline.run_streaming(ctx):
                loop.call_soon_threadsafe(queue.put_nowait, ("progress", progress))
        except AnalysisError as e:
            loop.call_soon_threadsafe(queue.put_nowait, ("error", e.to_dict()))
        except Exception as e:
            logger.exception("Streaming detection crashed")
            payload = {"kind": "internal", "message": str(e)}
            loop.call_soon_threadsafe(queue.put_nowait, ("error", payload))
        finally:
            loop.call_soon_threadsafe(queue.put_nowait, _SENTINEL)

    worker = loop.run_in_executor(None, _run_pipeline)

    failed = False
    while True:
        item = await queue.get()
        if item is _SENTINEL:
            break
        event, payload = item
        failed = failed or event == "error"
        yield _sse(event, payload)

    await worker
    if failed:
        return

    elapsed = (time.perf_counter() - start) * 1000
    response = _build_response(ctx, elapsed)
    yield _sse("result", response.model_dump(by_alias=True))
    yield _sse("done", {"type": "done"})


@router.post("/detect/stream")
async def detect_stream(
    req: DetectRequest,
    settings: Settings = Depends(get_settings),
) -> StreamingResponse:
    return StreamingResponse(
        _stream_detect(req, settings),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post(
    "/detect",
    response_model=DetectResponse,
    responses={422: {"model": ErrorResponse}},
)
async def detect(
    req: DetectRequest,
    settings: Settings = Depends(get_settings),
) -> DetectResponse:
    start = time.perf_counter()

    try:
        original, modified = decode_pair(
            req.original, req.modified, settings.max_image_bytes, settings.max_image_pixels
        )
        params = req.params.to_params() if req.params else None
        ctx = await asyncio.to_thread(analyze, original, modified, params)
    except AnalysisError as e:
        logger.info("Detection rejected: %s", e)
        raise HTTPException(status_code=422, detail=e.to_dict()) from e

    elapsed = (time.perf_counter() - start) * 1000
    return _build_response(ctx, elapsed)
