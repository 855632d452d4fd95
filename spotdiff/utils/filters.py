"""Smoothing and colour-distance helpers over numpy image arrays."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import gaussian_filter


def gaussian_blur_rgb(rgb: NDArray[np.uint8], radius: float) -> NDArray[np.float32]:
    """Gaussian blur of an (H, W, 3) image with standard deviation ``radius``.

    Channels are blurred independently; edges replicate the border pixel.
    Always returns a fresh float32 array, the input is left untouched.
    """
    img = np.array(rgb, dtype=np.float32)
    if radius <= 0:
        return img
    return gaussian_filter(img, sigma=(radius, radius, 0), mode="nearest")


def color_distance(a: NDArray[np.float32], b: NDArray[np.float32]) -> NDArray[np.float32]:
    """Per-pixel Euclidean distance over the last (channel) axis."""
    delta = a - b
    return np.sqrt(np.sum(delta * delta, axis=-1))


def grayscale(rgb: NDArray[np.uint8]) -> NDArray[np.float32]:
    """Brightness as the plain mean of R, G and B."""
    return np.asarray(rgb, dtype=np.float32).mean(axis=-1)
