"""Tests for end-to-end region detection."""

import cv2
import numpy as np
import pytest

from signature_extractor.config import DetectionConfig
from signature_extractor.detection import detect, detect_file
from signature_extractor.geometry import NaturalRect


def assert_rect(actual, expected):
    assert actual.x == pytest.approx(expected.x)
    assert actual.y == pytest.approx(expected.y)
    assert actual.width == pytest.approx(expected.width)
    assert actual.height == pytest.approx(expected.height)


def test_signature_found_frame_and_divider_rejected(signature_page):
    rects = detect(signature_page)
    assert len(rects) == 1
    assert_rect(rects[0], NaturalRect(340, 560, 560, 140))


def test_rect_covers_every_word(signature_page):
    rect = detect(signature_page)[0]
    assert rect.x <= 400 and rect.x + rect.width >= 840
    assert rect.y <= 600 and rect.y + rect.height >= 660


def test_blank_page_yields_nothing(white_page):
    assert detect(white_page) == []


@pytest.mark.parametrize("source", [None, np.zeros((0, 0, 4), dtype=np.uint8)])
def test_missing_image_yields_nothing(source):
    assert detect(source) == []


def test_detection_is_pure(signature_page):
    before = signature_page.copy()
    assert detect(signature_page) == detect(signature_page)
    np.testing.assert_array_equal(signature_page, before)


def test_separate_lines_stay_separate(white_page):
    white_page[300:360, 400:800, :3] = 0
    white_page[700:760, 400:800, :3] = 0
    rects = detect(white_page)
    assert len(rects) == 2
    assert rects[0].y < rects[1].y


def test_custom_config_changes_result(signature_page):
    # Lower the noise floor above the signature width
    config = DetectionConfig(min_width_fraction=0.5)
    assert detect(signature_page, config) == []


def test_detect_file_from_path(tmp_path, signature_page):
    path = tmp_path / "page.png"
    cv2.imwrite(str(path), cv2.cvtColor(signature_page, cv2.COLOR_RGBA2BGRA))
    rects = detect_file(path)
    assert len(rects) == 1
    assert_rect(rects[0], NaturalRect(340, 560, 560, 140))


def test_detect_file_from_jpeg_bytes(signature_page):
    ok, buffer = cv2.imencode(".jpg", cv2.cvtColor(signature_page, cv2.COLOR_RGBA2BGR))
    assert ok
    assert len(detect_file(buffer.tobytes())) == 1


def test_undecodable_input_yields_nothing(tmp_path):
    assert detect_file(b"definitely not an image") == []
    assert detect_file(tmp_path / "missing.png") == []
