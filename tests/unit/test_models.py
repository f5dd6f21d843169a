"""Tests for ocrmerge data models."""

import dataclasses

import pytest

from ocrmerge.models import (
    Detection,
    MergedText,
    Rect,
    TextDirection,
    merge_by_rows,
)

# =============================================================================
# Rect Tests
# =============================================================================


class TestRect:
    """Tests for Rect geometry."""

    def test_dimensions(self):
        """Width, height, center and area derive from the edges."""
        rect = Rect(10, 20, 50, 80)
        assert rect.width == 40
        assert rect.height == 60
        assert rect.center_x == 30
        assert rect.center_y == 50
        assert rect.area == 2400

    def test_inverted_dimensions_clamp_to_zero(self):
        """Inverted rectangles have zero size rather than negative size."""
        rect = Rect(50, 50, 10, 10)
        assert rect.width == 0
        assert rect.height == 0

    def test_union(self):
        """Union covers both rectangles."""
        assert Rect(0, 0, 10, 10).union(Rect(5, -5, 20, 8)) == Rect(0, -5, 20, 10)

    def test_intersection(self):
        """Intersection is the overlapping region, or None."""
        assert Rect(0, 0, 10, 10).intersection(Rect(5, 5, 20, 20)) == Rect(5, 5, 10, 10)
        assert Rect(0, 0, 10, 10).intersection(Rect(10, 0, 20, 10)) is None

    def test_overlap_height(self):
        """Vertical overlap is measured regardless of horizontal position."""
        assert Rect(0, 0, 10, 40).overlap_height(Rect(100, 30, 110, 60)) == 10
        assert Rect(0, 0, 10, 10).overlap_height(Rect(0, 20, 10, 30)) == 0

    def test_expand_and_scale(self):
        """Expand adds margins; scale multiplies coordinates."""
        assert Rect(10, 10, 20, 20).expand(2, 3) == Rect(8, 7, 22, 23)
        assert Rect(10, 10, 20, 20).scale(2, 0.5) == Rect(20, 5, 40, 10)

    def test_contains(self):
        """Edges are inside the rectangle."""
        rect = Rect(0, 0, 10, 10)
        assert rect.contains(0, 10)
        assert not rect.contains(11, 5)

    def test_to_normalized(self):
        """Normalized coordinates are relative to the image size."""
        assert Rect(50, 25, 100, 50).to_normalized(200, 100) == Rect(0.25, 0.25, 0.5, 0.5)

    def test_to_normalized_rejects_empty_image(self):
        """Non-positive image sizes are rejected."""
        with pytest.raises(ValueError):
            Rect(0, 0, 1, 1).to_normalized(0, 100)

    def test_union_all(self):
        """union_all folds any number of rectangles."""
        rects = [Rect(0, 0, 1, 1), Rect(5, 5, 6, 6), Rect(-1, 2, 0, 3)]
        assert Rect.union_all(rects) == Rect(-1, 0, 6, 6)

    def test_union_all_empty_raises(self):
        """There is no union of zero rectangles."""
        with pytest.raises(ValueError):
            Rect.union_all([])


# =============================================================================
# TextDirection Tests
# =============================================================================


class TestTextDirection:
    """Tests for TextDirection."""

    @pytest.mark.parametrize("angle", [90, 90.0, 270, 270.0])
    def test_vertical_angles(self, angle):
        """90 and 270 degrees are vertical."""
        assert TextDirection.from_angle(angle) is TextDirection.VERTICAL

    @pytest.mark.parametrize("angle", [0, 45, 180, 359.5, None])
    def test_other_angles_horizontal(self, angle):
        """Any other angle (or none) is horizontal."""
        assert TextDirection.from_angle(angle) is TextDirection.HORIZONTAL

    def test_mixed_is_declared(self):
        """MIXED exists as a value."""
        assert TextDirection.MIXED.value == "mixed"


# =============================================================================
# Detection Tests
# =============================================================================


class TestDetection:
    """Tests for Detection validation."""

    def test_valid_detection(self):
        """A well-formed detection keeps its fields."""
        d = Detection("abc", Rect(0, 0, 10, 10), confidence=0.7, angle=90)
        assert d.text == "abc"
        assert d.angle == 90

    def test_default_confidence(self):
        """Confidence defaults to 1.0 and angle to None."""
        d = Detection("abc", Rect(0, 0, 10, 10))
        assert d.confidence == 1.0
        assert d.angle is None

    def test_empty_text_rejected(self):
        with pytest.raises(ValueError):
            Detection("", Rect(0, 0, 10, 10))

    def test_inverted_box_rejected(self):
        with pytest.raises(ValueError):
            Detection("a", Rect(10, 0, 0, 10))
        with pytest.raises(ValueError):
            Detection("a", Rect(0, 10, 10, 0))

    @pytest.mark.parametrize("confidence", [-0.1, 1.01])
    def test_confidence_out_of_range(self, confidence):
        with pytest.raises(ValueError):
            Detection("a", Rect(0, 0, 1, 1), confidence=confidence)

    @pytest.mark.parametrize("angle", [-1, 360, 400])
    def test_angle_out_of_range(self, angle):
        with pytest.raises(ValueError):
            Detection("a", Rect(0, 0, 1, 1), angle=angle)

    def test_quality_flags(self):
        """High and low quality thresholds are exclusive."""
        assert Detection("a", Rect(0, 0, 1, 1), confidence=0.81).is_high_quality
        assert not Detection("a", Rect(0, 0, 1, 1), confidence=0.8).is_high_quality
        assert Detection("a", Rect(0, 0, 1, 1), confidence=0.49).is_low_quality
        assert not Detection("a", Rect(0, 0, 1, 1), confidence=0.5).is_low_quality

    def test_immutable(self):
        """Detections cannot be modified."""
        d = Detection("a", Rect(0, 0, 1, 1))
        with pytest.raises(dataclasses.FrozenInstanceError):
            d.text = "b"


# =============================================================================
# MergedText Tests
# =============================================================================


class TestMergedText:
    """Tests for MergedText."""

    def test_from_detection(self, make_detection):
        """A single detection is wrapped without changes."""
        d = make_detection("hello", 10, 20, 60, 40)
        m = MergedText.from_detection(d, TextDirection.VERTICAL)
        assert m.text == "hello"
        assert m.box == d.box
        assert m.direction is TextDirection.VERTICAL
        assert m.original_box_count == 1
        assert m.original_detections == (d,)
        assert not m.is_multi_box_merged

    def test_from_detections_box_is_union(self, make_detection):
        """The merged box is the exact union of the constituents."""
        a = make_detection("a", 0, 10, 10, 30)
        b = make_detection("b", 12, 5, 20, 25)
        m = MergedText.from_detections([a, b], "ab", TextDirection.HORIZONTAL)
        assert m.box == Rect(0, 5, 20, 30)
        assert m.original_box_count == 2
        assert m.is_multi_box_merged

    def test_from_detections_empty_raises(self):
        with pytest.raises(ValueError):
            MergedText.from_detections([], "x", TextDirection.HORIZONTAL)

    def test_text_metrics(self, make_detection):
        a = make_detection("abc", 0, 0, 10, 10)
        b = make_detection("d", 12, 0, 20, 10)
        m = MergedText.from_detections([a, b], "abcd", TextDirection.HORIZONTAL)
        assert m.text_length == 4
        assert m.avg_text_length_per_box == 2.0

    def test_empty_text_rejected(self):
        with pytest.raises(ValueError):
            MergedText("", Rect(0, 0, 1, 1), TextDirection.HORIZONTAL, 1)

    def test_zero_box_count_rejected(self):
        with pytest.raises(ValueError):
            MergedText("a", Rect(0, 0, 1, 1), TextDirection.HORIZONTAL, 0)


class TestMergeByRows:
    """Tests for merge_by_rows."""

    def test_one_result_per_row(self, make_detection):
        rows = [
            [make_detection("a", 0, 0, 10, 10), make_detection("b", 10, 0, 20, 10)],
            [make_detection("c", 0, 20, 10, 30)],
        ]
        merged = merge_by_rows(rows, separator="-")
        assert [m.text for m in merged] == ["a-b", "c"]
        assert merged[0].box == Rect(0, 0, 20, 10)
        assert [m.original_box_count for m in merged] == [2, 1]
