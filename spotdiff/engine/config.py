"""Pipeline configuration — named empirical rules shared by the stages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PipelineConfig:
    """Tuned constants that are not part of AnalysisParams."""

    # Brightness step (0-255) that marks a pixel as an edge for complexity scoring
    edge_brightness_delta: float = 25.0

    # Complexity breakpoints for preset selection
    low_complexity_breakpoint: float = 0.06  # below: "low" preset
    high_complexity_breakpoint: float = 0.15  # at or above: "high" preset

    # Large-region density waiver: regions with more than
    # min_region_size * density_waiver_factor pixels skip the density test
    density_waiver_factor: float = 10.0

    # Overlap resolution: circles are visited largest first, so a larger
    # circle always wins against a smaller one it overlaps
    larger_circle_wins: bool = True


DEFAULT_CONFIG = PipelineConfig()
