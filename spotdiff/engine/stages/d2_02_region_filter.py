"""D2.02 — Region filter.

Drops noise-like regions by size, aspect ratio and density. Very large
regions keep their place even when sparse: past
``min_region_size * density_waiver_factor`` pixels the density test is waived.
"""

from __future__ import annotations

from spotdiff.engine.config import DEFAULT_CONFIG
from spotdiff.engine.context import DetectionContext, Region
from spotdiff.engine.params import AnalysisParams
from spotdiff.engine.registry import Phase, stage


def passes_size(region: Region, params: AnalysisParams) -> bool:
    return region.size >= params.min_region_size


def passes_aspect(region: Region, params: AnalysisParams) -> bool:
    return params.min_aspect_ratio <= region.aspect_ratio <= params.max_aspect_ratio


def passes_density(
    region: Region,
    params: AnalysisParams,
    waiver_factor: float = DEFAULT_CONFIG.density_waiver_factor,
) -> bool:
    if region.bounding_area == 0:
        return False
    if region.size > params.min_region_size * waiver_factor:
        return True
    return region.density >= params.min_density


def filter_regions(
    regions: list[Region],
    params: AnalysisParams,
    waiver_factor: float = DEFAULT_CONFIG.density_waiver_factor,
) -> list[Region]:
    """Keep regions passing every test, preserving their relative order."""
    return [
        r
        for r in regions
        if passes_size(r, params)
        and passes_aspect(r, params)
        and passes_density(r, params, waiver_factor)
    ]


@stage(
    id="D2.02",
    phase=Phase.REGIONS,
    dependencies=["D2.01"],
    description="Discard regions by size, aspect ratio and density",
)
def region_filter_stage(ctx: DetectionContext) -> None:
    ctx.filtered_regions = filter_regions(
        ctx.regions, ctx.params, ctx.config.density_waiver_factor
    )
