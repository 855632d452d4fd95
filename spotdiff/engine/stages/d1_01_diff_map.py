"""D1.01 — Difference map.

Both images are smoothed independently, then every pixel whose RGB distance
exceeds the colour threshold is marked. Alpha is ignored. An empty map halts
the pipeline: nothing downstream can produce a difference.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from spotdiff.engine.context import DetectionContext, PixelBuffer
from spotdiff.engine.errors import AnalysisError, ErrorKind
from spotdiff.engine.registry import Phase, stage
from spotdiff.utils.filters import color_distance, gaussian_blur_rgb

logger = logging.getLogger(__name__)


def check_dimensions(original: PixelBuffer, modified: PixelBuffer) -> None:
    """Raise unless both buffers are non-empty and the same size."""
    for name, buf in (("original", original), ("modified", modified)):
        if buf.is_empty:
            raise AnalysisError(
                ErrorKind.ZERO_DIMENSION,
                f"The {name} image has zero dimension ({buf.width}x{buf.height})",
            )
    if (original.width, original.height) != (modified.width, modified.height):
        raise AnalysisError(
            ErrorKind.DIMENSION_MISMATCH,
            f"Image dimensions do not match: {original.width}x{original.height} "
            f"vs {modified.width}x{modified.height}",
        )


def build_diff_mask(
    original: PixelBuffer,
    modified: PixelBuffer,
    blur_radius: float,
    color_threshold: float,
) -> tuple[NDArray[np.bool_], int]:
    """Return the (H, W) difference mask and its number of set pixels."""
    check_dimensions(original, modified)

    a = gaussian_blur_rgb(original.rgb(), blur_radius)
    b = gaussian_blur_rgb(modified.rgb(), blur_radius)
    mask = color_distance(a, b) > color_threshold
    return mask, int(np.count_nonzero(mask))


@stage(
    id="D1.01",
    phase=Phase.DIFF_MAP,
    description="Blur both images and threshold their colour distance",
)
def diff_map_stage(ctx: DetectionContext) -> None:
    params = ctx.params
    mask, count = build_diff_mask(
        ctx.original, ctx.modified, params.blur_radius, params.color_threshold
    )
    ctx.diff_pixel_count = count
    if count == 0:
        logger.debug("No pixel exceeds colour threshold %.1f", params.color_threshold)
        ctx.halted = True
        return
    ctx.diff_mask = mask
