"""AnalysisParams — the value type that fully determines the detection stages.

The three presets below encode tuned empirical knowledge. They are looked up,
never derived at runtime.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

# Wire names used by the game UI (camelCase) → field names
_WIRE_NAMES = {
    "blurRadius": "blur_radius",
    "colorThreshold": "color_threshold",
    "minRegionSize": "min_region_size",
    "mergeDistance": "merge_distance",
    "minDensity": "min_density",
    "minAspectRatio": "min_aspect_ratio",
    "maxAspectRatio": "max_aspect_ratio",
    "maxRegionSizePercent": "max_region_size_percent",
    "circleRadiusMultiplier": "circle_radius_multiplier",
}
_FIELD_TO_WIRE = {v: k for k, v in _WIRE_NAMES.items()}


@dataclass(frozen=True)
class AnalysisParams:
    """Tuning knobs for one detection run."""

    # Gaussian blur standard deviation in pixels (0 = no smoothing)
    blur_radius: float
    # Minimum Euclidean RGB distance for a pixel to count as different
    color_threshold: float
    # Minimum pixel count of a connected region
    min_region_size: int
    # Bounding boxes closer than this (pixels) are merged
    merge_distance: float
    # Minimum pixel count / bounding-box area
    min_density: float
    # Bounding-box width / height bounds (inclusive)
    min_aspect_ratio: float
    max_aspect_ratio: float
    # Largest allowed box side as a fraction of the image's shorter side
    max_region_size_percent: float
    # Padding applied to the bounding-circle radius
    circle_radius_multiplier: float

    def replace(self, **changes: Any) -> AnalysisParams:
        return dataclasses.replace(self, **changes)

    def to_dict(self, wire: bool = False) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        if wire:
            return {_FIELD_TO_WIRE[k]: v for k, v in data.items()}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisParams:
        """Build from snake_case or camelCase keys. Unknown keys are rejected."""
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _WIRE_NAMES.get(key, key)
            if name not in _FIELD_TO_WIRE:
                raise KeyError(f"Unknown analysis parameter: {key}")
            kwargs[name] = value
        return cls(**kwargs)


PRESET_LOW = "low"
PRESET_MEDIUM = "medium"
PRESET_HIGH = "high"

PRESETS: dict[str, AnalysisParams] = {
    # Simple cartoons, clean scenes
    PRESET_LOW: AnalysisParams(
        blur_radius=1,
        color_threshold=40,
        min_region_size=150,
        merge_distance=25,
        min_density=0.20,
        min_aspect_ratio=0.1,
        max_aspect_ratio=10,
        max_region_size_percent=0.40,
        circle_radius_multiplier=1.3,
    ),
    # Detailed illustrations, busy rooms
    PRESET_MEDIUM: AnalysisParams(
        blur_radius=2,
        color_threshold=55,
        min_region_size=250,
        merge_distance=35,
        min_density=0.25,
        min_aspect_ratio=0.1,
        max_aspect_ratio=10,
        max_region_size_percent=0.35,
        circle_radius_multiplier=1.2,
    ),
    # Intricate patterns, heavy foliage
    PRESET_HIGH: AnalysisParams(
        blur_radius=2,
        color_threshold=60,
        min_region_size=300,
        merge_distance=45,
        min_density=0.28,
        min_aspect_ratio=0.1,
        max_aspect_ratio=10,
        max_region_size_percent=0.30,
        circle_radius_multiplier=1.15,
    ),
}


def get_preset(name: str) -> AnalysisParams:
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown preset: {name}") from None
