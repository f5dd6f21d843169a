"""
Pytest configuration and fixtures for ocrmerge tests.
"""

import pytest


@pytest.fixture
def make_detection():
    """Return a factory building a Detection from box edges."""
    from ocrmerge import Detection, Rect

    def _make(text, left, top, right, bottom, confidence=0.9, angle=None):
        return Detection(
            text=text,
            box=Rect(left, top, right, bottom),
            confidence=confidence,
            angle=angle,
        )

    return _make


@pytest.fixture(scope="session")
def default_config():
    """Return the default MergingConfig."""
    from ocrmerge import MergingConfig

    return MergingConfig()
