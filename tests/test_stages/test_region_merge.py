"""Tests for region merging (D2.03)."""

import numpy as np

from spotdiff.engine.context import Region
from spotdiff.engine.stages.d2_03_region_merge import merge_regions, should_merge
from spotdiff.utils.geometry import box_gap


def _at(x0: int, x1: int, y0: int = 0, y1: int = 9, size: int = 10) -> Region:
    return Region(min_x=x0, max_x=x1, min_y=y0, max_y=y1, size=size)


def test_box_gap():
    assert box_gap((0, 0, 9, 9), (5, 5, 20, 20)) == 0.0
    assert box_gap((0, 0, 9, 9), (20, 0, 29, 9)) == 11.0
    assert box_gap((0, 0, 9, 9), (12, 13, 20, 20)) == 5.0


def test_merge_threshold_is_strict():
    a, b = _at(0, 9), _at(20, 29)
    assert not should_merge(a, b, 11)
    assert should_merge(a, b, 11.5)


def test_far_regions_stay_apart():
    regions = [_at(0, 9), _at(20, 29)]
    assert merge_regions(regions, 5) == regions


def test_near_regions_become_their_union():
    (merged,) = merge_regions([_at(0, 9, size=30), _at(20, 29, 2, 12, size=40)], 12)
    assert merged == Region(min_x=0, max_x=29, min_y=0, max_y=12, size=70)


def test_growth_enables_later_merges():
    # A and C are only in reach once A has absorbed B
    a, b, c = _at(0, 9), _at(17, 26), _at(34, 43)
    assert len(merge_regions([a, c, b], 10)) == 1
    assert len(merge_regions([a, b, c], 10)) == 1


def test_trivial_inputs():
    assert merge_regions([], 10) == []
    single = [_at(0, 9)]
    assert merge_regions(single, 10) == single


def test_input_list_untouched():
    regions = [_at(0, 9), _at(12, 20)]
    snapshot = list(regions)
    merge_regions(regions, 10)
    assert regions == snapshot


def test_output_is_a_fixpoint():
    rng = np.random.default_rng(11)
    regions = []
    for _ in range(40):
        x, y = (int(v) for v in rng.integers(0, 500, size=2))
        w, h = (int(v) for v in rng.integers(1, 20, size=2))
        regions.append(Region(min_x=x, max_x=x + w, min_y=y, max_y=y + h, size=w * h))

    once = merge_regions(regions, 30)
    assert merge_regions(once, 30) == once
    assert sum(r.size for r in once) == sum(r.size for r in regions)
