"""Tests for ink classification."""

import numpy as np
import pytest

from signature_extractor.exceptions import ValidationError
from signature_extractor.processors import ink_mask, is_ink, luminance


def test_luminance_uses_rec709_weights():
    pixel = np.array([[[100, 150, 200, 255]]], dtype=np.uint8)
    expected = 0.2126 * 100 + 0.7152 * 150 + 0.0722 * 200
    assert luminance(pixel)[0, 0] == pytest.approx(expected)


def test_threshold_is_inclusive():
    grey = np.full((1, 1, 4), 128, dtype=np.uint8)
    assert ink_mask(grey, 128)[0, 0]
    assert not ink_mask(grey, 127)[0, 0]


def test_invert_flips_classification():
    light = np.full((1, 1, 4), 230, dtype=np.uint8)
    assert not ink_mask(light, 100)[0, 0]
    assert ink_mask(light, 100, invert=True)[0, 0]


def test_alpha_is_ignored():
    transparent_black = np.array([[[0, 0, 0, 0]]], dtype=np.uint8)
    assert ink_mask(transparent_black, 10)[0, 0]


def test_scalar_and_vector_rules_agree(gradient_raster):
    mask = ink_mask(gradient_raster, 140)
    for y, x in [(0, 0), (3, 20), (7, 7), (8, 8), (39, 49), (12, 27)]:
        r, g, b, _ = gradient_raster[y, x]
        assert mask[y, x] == is_ink(int(r), int(g), int(b), 140)


@pytest.mark.parametrize("threshold", [-1, 256])
def test_out_of_range_threshold_rejected(threshold):
    with pytest.raises(ValidationError):
        ink_mask(np.zeros((2, 2, 4), dtype=np.uint8), threshold)


def test_rejected_threshold_is_reported_in_details():
    with pytest.raises(ValidationError) as excinfo:
        ink_mask(np.zeros((2, 2, 4), dtype=np.uint8), 300)
    assert excinfo.value.details == {"threshold": 300}
    assert "threshold=300" in str(excinfo.value)
