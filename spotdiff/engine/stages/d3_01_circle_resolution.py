"""D3.01 — Circle resolution.

Oversized regions are dropped, the rest become padded bounding circles.
Circles are visited largest first and kept only when they overlap no kept
circle, so two differences never claim the same clickable area. Kept
circles are numbered in that order and normalized to the image size.
"""

from __future__ import annotations

from spotdiff.engine.context import Circle, DetectionContext, Difference, Region
from spotdiff.engine.params import AnalysisParams
from spotdiff.engine.registry import Phase, stage


def within_size_cap(region: Region, params: AnalysisParams, min_dimension: int) -> bool:
    """Box spans (max - min) as a fraction of the shorter image side."""
    span_x = region.max_x - region.min_x
    span_y = region.max_y - region.min_y
    return (
        span_x / min_dimension <= params.max_region_size_percent
        and span_y / min_dimension <= params.max_region_size_percent
    )


def region_to_circle(region: Region, multiplier: float) -> Circle:
    cx, cy = region.center
    radius = max(region.width, region.height) / 2 * multiplier
    return Circle(x=cx, y=cy, radius=radius)


def resolve_overlaps(circles: list[Circle], larger_first: bool = True) -> list[Circle]:
    """Greedy non-overlapping subset. The sort is stable, so equal radii keep
    their input order."""
    if larger_first:
        circles = sorted(circles, key=lambda c: c.radius, reverse=True)

    kept: list[Circle] = []
    for circle in circles:
        if not any(circle.overlaps(existing) for existing in kept):
            kept.append(circle)
    return kept


def normalize(circles: list[Circle], width: int, height: int) -> list[Difference]:
    min_dimension = min(width, height)
    return [
        Difference(
            id=i,
            x=c.x / width,
            y=c.y / height,
            radius=c.radius / min_dimension,
        )
        for i, c in enumerate(circles)
    ]


def resolve_circles(
    regions: list[Region],
    params: AnalysisParams,
    width: int,
    height: int,
    larger_first: bool = True,
) -> list[Difference]:
    min_dimension = min(width, height)
    circles = [
        region_to_circle(r, params.circle_radius_multiplier)
        for r in regions
        if within_size_cap(r, params, min_dimension)
    ]
    return normalize(resolve_overlaps(circles, larger_first), width, height)


@stage(
    id="D3.01",
    phase=Phase.RESOLUTION,
    dependencies=["D2.03"],
    description="Convert regions to non-overlapping normalized circles",
)
def circle_resolution_stage(ctx: DetectionContext) -> None:
    params = ctx.params
    ctx.circles = [
        region_to_circle(r, params.circle_radius_multiplier)
        for r in ctx.merged_regions
        if within_size_cap(r, params, ctx.min_dimension)
    ]
    kept = resolve_overlaps(ctx.circles, ctx.config.larger_circle_wins)
    ctx.differences = normalize(kept, ctx.width, ctx.height)
