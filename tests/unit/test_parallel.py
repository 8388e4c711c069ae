"""Tests for parallel region cropping."""

from signature_extractor.config import ProcessingSettings
from signature_extractor.crop_pipeline import crop
from signature_extractor.geometry import NaturalRect
from signature_extractor.parallel import extract_regions

RECTS = [
    NaturalRect(380, 580, 480, 100),
    NaturalRect(5000, 0, 10, 10),
    NaturalRect(0, 0, 200, 200),
]


def test_no_rects():
    assert extract_regions(None, []) == []


def test_single_worker_matches_direct_crop(signature_page):
    settings = ProcessingSettings(remove_borders=True)
    results = extract_regions(signature_page, RECTS, settings, max_workers=1)
    assert results == [crop(signature_page, rect, settings) for rect in RECTS]
    assert results[1] == b""


def test_worker_pool_keeps_input_order(signature_page):
    serial = extract_regions(signature_page, RECTS, max_workers=1)
    pooled = extract_regions(signature_page, RECTS, max_workers=2)
    assert pooled == serial
