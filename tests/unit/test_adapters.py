"""Tests for detector output adapters."""

import pytest

from ocrmerge import Rect, merge
from ocrmerge.adapters import (
    detections_from_page,
    detections_from_tesseract,
    detections_from_words,
)


class TestPyMuPDFWords:
    """Tests for PyMuPDF word tuples."""

    def test_words_to_detections(self):
        words = [
            (72.0, 100.0, 110.5, 112.0, "Being", 0, 0, 0),
            (114.0, 100.0, 130.0, 112.0, "and", 0, 0, 1),
            (134.0, 100.0, 160.0, 112.0, " ", 0, 0, 2),
        ]
        detections = detections_from_words(words)
        assert [d.text for d in detections] == ["Being", "and"]
        assert detections[0].box == Rect(72.0, 100.0, 110.5, 112.0)
        assert all(d.confidence == 1.0 for d in detections)

    def test_page_uses_word_extraction(self):
        class FakePage:
            def get_text(self, option):
                assert option == "words"
                return [(0, 0, 10, 10, "a", 0, 0, 0), (11, 0, 21, 10, "b", 0, 0, 1)]

        detections = detections_from_page(FakePage())
        assert [m.text for m in merge(detections)] == ["ab"]


class TestTesseractData:
    """Tests for pytesseract image_to_data dictionaries."""

    @pytest.fixture
    def data(self):
        return {
            "level": [5, 5, 5, 5],
            "left": [10, 30, 50, 70],
            "top": [10, 10, 10, 10],
            "width": [10, 10, 10, 10],
            "height": [12, 12, 12, 12],
            "conf": ["-1", "85", "95.5", "40"],
            "text": ["", "Hello", "", "world"],
        }

    def test_filters_empty_and_layout_rows(self, data):
        detections = detections_from_tesseract(data)
        assert [d.text for d in detections] == ["Hello", "world"]
        assert detections[0].box == Rect(30, 10, 40, 22)
        assert detections[0].confidence == pytest.approx(0.85)

    def test_min_confidence(self, data):
        detections = detections_from_tesseract(data, min_confidence=0.5)
        assert [d.text for d in detections] == ["Hello"]

    def test_unparseable_confidence_skipped(self, data):
        data["conf"][1] = "n/a"
        assert [d.text for d in detections_from_tesseract(data)] == ["world"]
