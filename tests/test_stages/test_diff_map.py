"""Tests for the difference map (D1.01)."""

import numpy as np
import pytest

from spotdiff.engine.context import DetectionContext, PixelBuffer
from spotdiff.engine.errors import AnalysisError, ErrorKind
from spotdiff.engine.stages.d1_01_diff_map import build_diff_mask, diff_map_stage
from tests.conftest import SCENARIO_PARAMS, buffer, solid, with_patch


def test_identical_images_give_empty_mask(gray_100):
    mask, count = build_diff_mask(gray_100, gray_100, 2, 10)
    assert count == 0
    assert not mask.any()


def test_unblurred_square_is_marked_exactly(gray_100, red_square_100):
    mask, count = build_diff_mask(gray_100, red_square_100, 0, 40)
    assert count == 400
    assert mask[40:60, 40:60].all()
    assert mask.shape == (100, 100)


def test_blur_spreads_the_square_evenly(gray_100, red_square_100):
    mask, count = build_diff_mask(gray_100, red_square_100, 1, 40)
    ys, xs = np.nonzero(mask)
    assert count > 400
    assert (xs.min() + xs.max()) / 2 == pytest.approx(49.5)
    assert (ys.min() + ys.max()) / 2 == pytest.approx(49.5)


def test_threshold_is_strict():
    base = buffer(solid(5, 5, (100, 100, 100)))
    at = buffer(solid(5, 5, (140, 100, 100)))
    above = buffer(solid(5, 5, (141, 100, 100)))
    assert build_diff_mask(base, at, 0, 40)[1] == 0
    assert build_diff_mask(base, above, 0, 40)[1] == 25


def test_alpha_is_ignored():
    a = solid(10, 10)
    b = a.copy()
    b[:, :, 3] = 0
    assert build_diff_mask(buffer(a), buffer(b), 0, 0)[1] == 0


def test_raising_threshold_never_adds_pixels(gray_100):
    rng = np.random.default_rng(7)
    noisy = solid(100, 100)
    noisy[:, :, :3] = rng.integers(0, 256, size=(100, 100, 3), dtype=np.uint8)
    modified = buffer(noisy)

    counts = [build_diff_mask(gray_100, modified, 1, t)[1] for t in (0, 20, 40, 80, 160, 255)]
    assert counts == sorted(counts, reverse=True)


def test_inputs_are_not_mutated(gray_100, red_square_100):
    before = (gray_100.data, red_square_100.data)
    build_diff_mask(gray_100, red_square_100, 2, 40)
    assert (gray_100.data, red_square_100.data) == before


def test_dimension_mismatch(gray_100):
    with pytest.raises(AnalysisError) as exc:
        build_diff_mask(gray_100, buffer(solid(100, 101)), 1, 40)
    assert exc.value.kind is ErrorKind.DIMENSION_MISMATCH


def test_zero_dimension(gray_100):
    with pytest.raises(AnalysisError) as exc:
        build_diff_mask(PixelBuffer(0, 0, b""), PixelBuffer(0, 0, b""), 1, 40)
    assert exc.value.kind is ErrorKind.ZERO_DIMENSION


def test_stage_halts_when_nothing_differs(gray_100):
    ctx = DetectionContext(original=gray_100, modified=gray_100, params=SCENARIO_PARAMS)
    diff_map_stage(ctx)
    assert ctx.halted
    assert ctx.diff_mask is None
    assert ctx.diff_pixel_count == 0


def test_stage_keeps_mask(gray_100, red_square_100):
    ctx = DetectionContext(original=gray_100, modified=red_square_100, params=SCENARIO_PARAMS)
    diff_map_stage(ctx)
    assert not ctx.halted
    assert ctx.diff_pixel_count == int(ctx.diff_mask.sum())
