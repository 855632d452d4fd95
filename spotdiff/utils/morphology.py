"""Connected-component labeling of binary masks."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# (min_x, max_x, min_y, max_y, pixel_count)
ComponentStats = tuple[int, int, int, int, int]

_NEIGHBORS_8 = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


def connected_components(mask: NDArray[np.bool_]) -> list[ComponentStats]:
    """8-connected components of a boolean (H, W) mask in raster discovery order.

    Each set pixel is visited exactly once, so the total work is O(pixels)
    whatever the component shapes.
    """
    height, width = mask.shape
    cells = np.ascontiguousarray(mask, dtype=np.uint8).tobytes()
    visited = bytearray(width * height)
    components: list[ComponentStats] = []

    # flatnonzero yields seeds in raster order
    for seed in np.flatnonzero(mask).tolist():
        if visited[seed]:
            continue
        components.append(_flood_fill(cells, visited, width, height, seed))

    return components


def _flood_fill(
    cells: bytes,
    visited: bytearray,
    width: int,
    height: int,
    seed: int,
) -> ComponentStats:
    """Grow one component from ``seed`` with an explicit stack (no recursion)."""
    start_y, start_x = divmod(seed, width)
    min_x = max_x = start_x
    min_y = max_y = start_y
    size = 0

    stack = [seed]
    visited[seed] = 1

    while stack:
        y, x = divmod(stack.pop(), width)
        size += 1
        if x < min_x:
            min_x = x
        elif x > max_x:
            max_x = x
        if y < min_y:
            min_y = y
        elif y > max_y:
            max_y = y

        for dx, dy in _NEIGHBORS_8:
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height:
                idx = ny * width + nx
                if cells[idx] and not visited[idx]:
                    visited[idx] = 1
                    stack.append(idx)

    return (min_x, max_x, min_y, max_y, size)
