"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math

# (xmin, ymin, xmax, ymax), inclusive pixel bounds
BBox = tuple[float, float, float, float]


def box_gap(a: BBox, b: BBox) -> float:
    """Euclidean gap between two axis-aligned boxes.

    Zero along an axis where the boxes overlap or touch.
    """
    dx = max(0.0, max(a[0], b[0]) - min(a[2], b[2]))
    dy = max(0.0, max(a[1], b[1]) - min(a[3], b[3]))
    return math.sqrt(dx * dx + dy * dy)


def circles_overlap(
    c1: tuple[float, float, float],
    c2: tuple[float, float, float],
) -> bool:
    """True when two (x, y, r) circles share area (tangent circles do not)."""
    distance = math.hypot(c1[0] - c2[0], c1[1] - c2[1])
    return distance < c1[2] + c2[2]
