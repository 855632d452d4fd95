"""DetectionContext — the single mutable state object flowing through all stages.

Inputs (PixelBuffer, AnalysisParams) are read-only. Region and Circle live
only for one run; Difference is the only type that leaves the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import NDArray

from spotdiff.engine.config import DEFAULT_CONFIG, PipelineConfig
from spotdiff.engine.errors import AnalysisError, ErrorKind
from spotdiff.engine.params import AnalysisParams
from spotdiff.utils.geometry import circles_overlap

if TYPE_CHECKING:
    from PIL import Image


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded RGBA image: row-major, 4 bytes per pixel."""

    width: int
    height: int
    data: bytes = field(repr=False)

    def __post_init__(self) -> None:
        expected = self.width * self.height * 4
        if self.width < 0 or self.height < 0 or len(self.data) != expected:
            raise AnalysisError(
                ErrorKind.SOURCE_UNREADABLE,
                f"Pixel data has {len(self.data)} bytes, expected {expected} "
                f"for {self.width}x{self.height} RGBA",
            )

    @classmethod
    def from_array(cls, array: NDArray[np.uint8]) -> PixelBuffer:
        """Build from an HxWx3 (RGB) or HxWx4 (RGBA) uint8 array."""
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise AnalysisError(
                ErrorKind.SOURCE_UNREADABLE,
                f"Expected an HxWx3 or HxWx4 array, got shape {arr.shape}",
            )
        arr = arr.astype(np.uint8, copy=False)
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)
        height, width = arr.shape[:2]
        return cls(width=width, height=height, data=np.ascontiguousarray(arr).tobytes())

    @classmethod
    def from_image(cls, image: Image.Image) -> PixelBuffer:
        rgba = image.convert("RGBA")
        return cls(width=rgba.width, height=rgba.height, data=rgba.tobytes())

    def rgba(self) -> NDArray[np.uint8]:
        """Read-only (H, W, 4) view of the pixel data."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, 4)

    def rgb(self) -> NDArray[np.uint8]:
        """Read-only (H, W, 3) view; alpha is dropped."""
        return self.rgba()[:, :, :3]

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0


@dataclass
class Region:
    """Connected group of different pixels with inclusive pixel bounds."""

    min_x: int
    max_x: int
    min_y: int
    max_y: int
    size: int = 1

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    @property
    def bounding_area(self) -> int:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def density(self) -> float:
        area = self.bounding_area
        return self.size / area if area > 0 else 0.0

    @property
    def bbox(self) -> tuple[int, int, int, int]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def union(self, other: Region) -> Region:
        return Region(
            min_x=min(self.min_x, other.min_x),
            max_x=max(self.max_x, other.max_x),
            min_y=min(self.min_y, other.min_y),
            max_y=max(self.max_y, other.max_y),
            size=self.size + other.size,
        )


@dataclass
class Circle:
    """Bounding circle of a region, in pixel space."""

    x: float
    y: float
    radius: float

    def overlaps(self, other: Circle) -> bool:
        return circles_overlap((self.x, self.y, self.radius), (other.x, other.y, other.radius))


@dataclass
class Difference:
    """A clickable difference, normalized to image size.

    ``x`` and ``y`` are fractions of width and height, ``radius`` a fraction
    of the shorter side. ``found_time`` belongs to the consumer.
    """

    id: int
    x: float
    y: float
    radius: float
    found_time: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "radius": self.radius,
            "foundTime": self.found_time,
        }


@dataclass
class DetectionContext:
    """Shared state for one detection run."""

    original: PixelBuffer
    modified: PixelBuffer | None = None
    # None = adaptive: the tuning phase picks a preset from `original`
    params: AnalysisParams | None = None
    config: PipelineConfig = DEFAULT_CONFIG

    # --- Tuning phase ---
    complexity: float | None = None
    preset: str | None = None

    # --- Diff map ---
    diff_mask: NDArray[np.bool_] | None = None
    diff_pixel_count: int = 0

    # --- Regions after each stage ---
    regions: list[Region] = field(default_factory=list)
    filtered_regions: list[Region] = field(default_factory=list)
    merged_regions: list[Region] = field(default_factory=list)

    # --- Resolution ---
    circles: list[Circle] = field(default_factory=list)
    differences: list[Difference] = field(default_factory=list)

    # --- Pipeline metadata ---
    # Set when a stage proves no further work can produce a difference
    halted: bool = False
    completed_stages: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)
    timings_ms: dict[str, float] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return self.original.width

    @property
    def height(self) -> int:
        return self.original.height

    @property
    def min_dimension(self) -> int:
        return min(self.width, self.height)

    def stats(self) -> dict[str, int]:
        """Per-stage counts, as shown by the tuning panel."""
        return {
            "diff_pixels": self.diff_pixel_count,
            "regions_found": len(self.regions),
            "regions_filtered": len(self.filtered_regions),
            "regions_merged": len(self.merged_regions),
            "circles": len(self.circles),
            "differences": len(self.differences),
        }
