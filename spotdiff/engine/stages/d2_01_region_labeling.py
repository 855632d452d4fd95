"""D2.01 — Region labeling.

Groups the difference mask into 8-connected components, each reduced to its
bounding box and pixel count.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from spotdiff.engine.context import DetectionContext, Region
from spotdiff.engine.registry import Phase, stage
from spotdiff.utils.morphology import connected_components


def label_regions(mask: NDArray[np.bool_]) -> list[Region]:
    return [
        Region(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y, size=size)
        for min_x, max_x, min_y, max_y, size in connected_components(mask)
    ]


@stage(
    id="D2.01",
    phase=Phase.REGIONS,
    dependencies=["D1.01"],
    description="Flood-fill the difference mask into connected regions",
)
def region_labeling_stage(ctx: DetectionContext) -> None:
    ctx.regions = label_regions(ctx.diff_mask)
