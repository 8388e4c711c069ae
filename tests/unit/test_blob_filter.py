"""Tests for blob rejection and mapping to natural space."""

import numpy as np
import pytest

from signature_extractor.config import DetectionConfig
from signature_extractor.geometry import NaturalRect
from signature_extractor.processors import Blob, DensityGrid
from signature_extractor.processors.blob_filter import blob_to_rect, filter_blobs, rejection_reason


def make_grid(width=80, height=60, scale=2.0):
    cells = np.zeros((height, width), dtype=bool)
    return DensityGrid(cells, 10, scale, int(round(width * 10 * scale)), int(round(height * 10 * scale)))


def blob(min_x, max_x, min_y, max_y, label=1):
    return Blob(label, min_x, max_x, min_y, max_y, (max_x - min_x + 1) * (max_y - min_y + 1))


@pytest.mark.parametrize("candidate, reason", [
    (blob(10, 30, 20, 24), None),
    (blob(10, 12, 20, 24), "noise"),
    (blob(10, 30, 20, 20), "noise"),
    (blob(2, 77, 1, 57), "page border"),
    (blob(40, 44, 10, 34), "vertical line"),
    (blob(2, 77, 20, 24), None),
])
def test_rejection_rules(candidate, reason):
    assert rejection_reason(candidate, 80, 60) == reason


def test_blob_maps_to_padded_natural_rect():
    rect = blob_to_rect(blob(10, 30, 20, 24), make_grid())
    assert rect == NaturalRect(180, 380, 460, 140)


def test_rect_clamped_at_right_edge():
    rect = blob_to_rect(blob(60, 79, 10, 14), make_grid(scale=1.0))
    assert rect.x == pytest.approx(590)
    assert rect.width == pytest.approx(210)
    assert rect.x + rect.width <= 800


def test_rect_clamped_at_origin():
    rect = blob_to_rect(blob(0, 9, 0, 4), make_grid(scale=1.0))
    assert (rect.x, rect.y) == (0, 0)
    assert rect.width == pytest.approx(120)


def test_filter_keeps_blob_order_and_drops_rejects():
    grid = make_grid()
    blobs = [
        blob(2, 77, 1, 57, label=1),
        blob(10, 30, 20, 24, label=2),
        blob(40, 44, 10, 34, label=3),
        blob(10, 30, 40, 44, label=4),
    ]
    rects = filter_blobs(grid, blobs)
    assert [r.y for r in rects] == [380, 780]


def test_filter_honours_config():
    config = DetectionConfig(padding_cells=0, min_width_fraction=0.5)
    rects = filter_blobs(make_grid(), [blob(10, 30, 20, 24), blob(0, 49, 20, 24)], config)
    assert rects == [NaturalRect(0, 400, 1000, 100)]
