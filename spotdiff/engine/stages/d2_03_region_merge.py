"""D2.03 — Region merging.

Regions whose bounding boxes lie closer than ``merge_distance`` are replaced
by their union. Passes repeat until one completes without a merge, so the
output is a fixpoint: merging it again changes nothing.
"""

from __future__ import annotations

import logging

from spotdiff.engine.context import DetectionContext, Region
from spotdiff.engine.registry import Phase, stage
from spotdiff.utils.geometry import box_gap

logger = logging.getLogger(__name__)


def should_merge(a: Region, b: Region, merge_distance: float) -> bool:
    return box_gap(a.bbox, b.bbox) < merge_distance


def _merge_pass(regions: list[Region], merge_distance: float) -> tuple[list[Region], int]:
    """One quadratic pass. Each head region absorbs every later region in reach,
    growing as it goes; regions it skipped wait for the next pass."""
    merged: list[Region] = []
    pending = list(regions)
    merges = 0

    while pending:
        current = pending[0]
        rest: list[Region] = []
        for other in pending[1:]:
            if should_merge(current, other, merge_distance):
                current = current.union(other)
                merges += 1
            else:
                rest.append(other)
        merged.append(current)
        pending = rest

    return merged, merges


def merge_regions(regions: list[Region], merge_distance: float) -> list[Region]:
    if len(regions) < 2:
        return list(regions)

    current = list(regions)
    passes = 0
    while True:
        current, merges = _merge_pass(current, merge_distance)
        passes += 1
        if merges == 0:
            break

    logger.debug("Merged %d regions into %d in %d passes", len(regions), len(current), passes)
    return current


@stage(
    id="D2.03",
    phase=Phase.REGIONS,
    dependencies=["D2.02"],
    description="Merge regions with nearby bounding boxes",
)
def region_merge_stage(ctx: DetectionContext) -> None:
    ctx.merged_regions = merge_regions(ctx.filtered_regions, ctx.params.merge_distance)
