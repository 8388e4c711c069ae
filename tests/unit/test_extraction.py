"""Tests for extraction records."""

import dataclasses

import cv2
import numpy as np
import pytest

from signature_extractor.config import ProcessingSettings
from signature_extractor.crop_pipeline import crop
from signature_extractor.extraction import (
    create_extraction,
    extract_detected,
    extract_normalized,
)
from signature_extractor.geometry import NaturalRect, NormalizedRect

RECT = NaturalRect(380, 580, 480, 100)


def test_create_extraction(signature_page):
    record = create_extraction(signature_page, RECT)
    assert record.name == "Signature_1"
    assert record.image == crop(signature_page, RECT)
    assert record.settings == ProcessingSettings()
    assert record.mask is None
    assert not record.is_empty
    assert len(record.id) == 8


def test_records_are_immutable(signature_page):
    record = create_extraction(signature_page, RECT)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.name = "Other"


def test_with_settings_reprocesses_from_source(signature_page):
    record = create_extraction(signature_page, RECT)
    updated = record.with_settings(signature_page, enhance=False)
    assert updated is not record
    assert updated.id == record.id
    assert not updated.settings.enhance
    assert record.settings.enhance
    assert updated.image == crop(signature_page, RECT, ProcessingSettings(enhance=False))


def test_mask_survives_settings_change(signature_page):
    mask = np.zeros((100, 480, 4), dtype=np.uint8)
    mask[:, :240, 3] = 255
    record = create_extraction(signature_page, RECT).with_mask(signature_page, mask)
    assert isinstance(record.mask, bytes)

    updated = record.with_settings(signature_page, threshold=90)
    assert updated.mask == record.mask
    assert updated.image == crop(signature_page, RECT, ProcessingSettings(threshold=90), record.mask)


def test_clearing_mask(signature_page):
    plain = create_extraction(signature_page, RECT)
    masked = plain.with_mask(signature_page, np.full((100, 480, 4), 255, dtype=np.uint8))
    assert masked.image != plain.image
    cleared = masked.with_mask(signature_page, None)
    assert cleared.mask is None
    assert cleared.image == plain.image


def test_invalid_settings_update_rejected(signature_page):
    record = create_extraction(signature_page, RECT)
    with pytest.raises(ValueError):
        record.with_settings(signature_page, threshold=300)


def test_empty_region_gives_empty_record(signature_page):
    record = create_extraction(signature_page, NaturalRect(5000, 5000, 10, 10))
    assert record.is_empty


def test_extract_detected_names_records(signature_page):
    records = extract_detected(signature_page, source_index=2, start_number=4)
    assert [r.name for r in records] == ["Auto_Sig_4"]
    assert records[0].source_index == 2
    assert records[0].natural_crop == NaturalRect(340, 560, 560, 140)


def test_extract_normalized_scales_and_drops_tiny(signature_page):
    rects = [NormalizedRect(0.25, 0.5, 0.3, 0.05), NormalizedRect(0.1, 0.1, 0.001, 0.1)]
    records = extract_normalized(signature_page, rects)
    assert [r.name for r in records] == ["Vision_Sig_1"]
    crop_rect = records[0].natural_crop
    assert crop_rect.x == pytest.approx(400)
    assert crop_rect.width == pytest.approx(480)


def test_to_dict(signature_page):
    data = create_extraction(signature_page, RECT, name="Mine").to_dict()
    assert data["name"] == "Mine"
    assert data["natural_crop"] == {"x": 380, "y": 580, "width": 480, "height": 100}
    assert data["settings"]["threshold"] == 160
    assert data["has_mask"] is False
    assert "image" not in data


@pytest.mark.parametrize("mask", [
    np.zeros((100, 480), dtype=bool),
    np.zeros((100, 480), dtype=np.uint8),
    np.zeros((100, 480, 3), dtype=np.uint8),
])
def test_with_mask_accepts_plain_masks(signature_page, mask):
    mask[:, :240] = 1 if mask.dtype == bool else 255
    record = create_extraction(signature_page, RECT).with_mask(signature_page, mask)
    assert isinstance(record.mask, bytes)

    image = cv2.imdecode(np.frombuffer(record.image, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    assert (image[:, :240, 3] == 0).all()
    assert (image[:, 240:, 3] == 255).any()
