"""Shared test fixtures: synthetic RGBA buffers."""

from __future__ import annotations

import numpy as np
import pytest

from spotdiff.engine.context import PixelBuffer
from spotdiff.engine.params import AnalysisParams

GRAY = (128, 128, 128)
RED = (255, 0, 0)


def solid(width: int, height: int, color: tuple[int, int, int] = GRAY) -> np.ndarray:
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[:, :, :3] = color
    arr[:, :, 3] = 255
    return arr


def with_patch(
    arr: np.ndarray,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: tuple[int, int, int] = RED,
) -> np.ndarray:
    """Copy of ``arr`` with the inclusive rectangle (x0, y0)-(x1, y1) painted."""
    out = arr.copy()
    out[y0 : y1 + 1, x0 : x1 + 1, :3] = color
    return out


def checkerboard(width: int, height: int, cell: int = 2) -> np.ndarray:
    ys, xs = np.indices((height, width))
    on = ((xs // cell) + (ys // cell)) % 2 == 0
    arr = solid(width, height, (0, 0, 0))
    arr[on, :3] = 255
    return arr


def buffer(arr: np.ndarray) -> PixelBuffer:
    return PixelBuffer.from_array(arr)


# Scenario parameters: loose enough that a clean solid square always survives
SCENARIO_PARAMS = AnalysisParams(
    blur_radius=1,
    color_threshold=40,
    min_region_size=50,
    merge_distance=25,
    min_density=0.2,
    min_aspect_ratio=0.1,
    max_aspect_ratio=10,
    max_region_size_percent=0.4,
    circle_radius_multiplier=1.3,
)


@pytest.fixture
def gray_100() -> PixelBuffer:
    return buffer(solid(100, 100))


@pytest.fixture
def red_square_100() -> PixelBuffer:
    return buffer(with_patch(solid(100, 100), 40, 40, 59, 59))


@pytest.fixture
def scenario_params() -> AnalysisParams:
    return SCENARIO_PARAMS
