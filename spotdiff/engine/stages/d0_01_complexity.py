"""D0.01 — Image complexity score.

Share of interior pixels whose brightness jumps by more than a fixed step
against the pixel to the right or the pixel below. Only used to pick a
parameter preset.
"""

from __future__ import annotations

import numpy as np

from spotdiff.engine.context import DetectionContext, PixelBuffer
from spotdiff.engine.errors import AnalysisError, ErrorKind
from spotdiff.engine.registry import Phase, stage
from spotdiff.utils.filters import grayscale


def compute_complexity(buffer: PixelBuffer, edge_delta: float = 25.0) -> float:
    if buffer.is_empty:
        raise AnalysisError(
            ErrorKind.ZERO_DIMENSION,
            f"Image has zero dimension ({buffer.width}x{buffer.height})",
        )
    if buffer.width < 3 or buffer.height < 3:
        return 0.0

    brightness = grayscale(buffer.rgb())
    current = brightness[1:-1, 1:-1]
    right = brightness[1:-1, 2:]
    below = brightness[2:, 1:-1]

    edges = (np.abs(current - right) > edge_delta) | (np.abs(current - below) > edge_delta)
    return float(np.count_nonzero(edges)) / edges.size


@stage(
    id="D0.01",
    phase=Phase.TUNING,
    description="Score image complexity from brightness-gradient density",
)
def complexity_stage(ctx: DetectionContext) -> None:
    ctx.complexity = compute_complexity(ctx.original, ctx.config.edge_brightness_delta)
