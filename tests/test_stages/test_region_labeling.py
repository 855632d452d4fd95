"""Tests for connected-region labeling (D2.01)."""

import numpy as np

from spotdiff.engine.context import Region
from spotdiff.engine.stages.d2_01_region_labeling import label_regions


def test_empty_mask_has_no_regions():
    assert label_regions(np.zeros((10, 10), dtype=bool)) == []


def test_regions_in_raster_discovery_order():
    mask = np.zeros((10, 20), dtype=bool)
    mask[5:7, 10:12] = True
    mask[2, 3] = True
    regions = label_regions(mask)
    assert regions == [
        Region(min_x=3, max_x=3, min_y=2, max_y=2, size=1),
        Region(min_x=10, max_x=11, min_y=5, max_y=6, size=4),
    ]


def test_diagonal_neighbours_are_connected():
    mask = np.zeros((5, 5), dtype=bool)
    for i in range(3):
        mask[i, i] = True
    mask[0, 4] = True
    mask[1, 4] = True
    regions = label_regions(mask)
    assert len(regions) == 2
    assert regions[0].size == 3
    assert (regions[1].min_x, regions[1].max_x, regions[1].size) == (4, 4, 2)


def test_ring_bounding_box():
    mask = np.zeros((10, 10), dtype=bool)
    mask[2:8, 2:8] = True
    mask[3:7, 3:7] = False
    (region,) = label_regions(mask)
    assert region.bbox == (2, 2, 7, 7)
    assert region.size == 36 - 16


def test_large_region_does_not_recurse():
    mask = np.ones((300, 300), dtype=bool)
    (region,) = label_regions(mask)
    assert region.size == 90000
    assert region.bbox == (0, 0, 299, 299)


def test_every_pixel_counted_once():
    rng = np.random.default_rng(3)
    mask = rng.random((60, 80)) > 0.6
    regions = label_regions(mask)
    assert sum(r.size for r in regions) == int(mask.sum())
    for r in regions:
        assert r.min_x <= r.max_x and r.min_y <= r.max_y and r.size >= 1
