"""
Data models for ocrmerge.

Detections are the raw input produced by an OCR detector; MergedText
is the output of a merge call. Both are immutable: the engine reads
detections and keeps references to them inside its results, but never
modifies them.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

# =============================================================================
# CONSTANTS
# =============================================================================

HIGH_QUALITY_CONFIDENCE = 0.8
LOW_QUALITY_CONFIDENCE = 0.5

VERTICAL_ANGLES = (90.0, 270.0)


# =============================================================================
# GEOMETRY
# =============================================================================


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in pixel coordinates."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return max(self.right - self.left, 0.0)

    @property
    def height(self) -> float:
        return max(self.bottom - self.top, 0.0)

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2

    @property
    def area(self) -> float:
        return self.width * self.height

    def union(self, other: Rect) -> Rect:
        """Smallest rectangle containing both rectangles."""
        return Rect(
            left=min(self.left, other.left),
            top=min(self.top, other.top),
            right=max(self.right, other.right),
            bottom=max(self.bottom, other.bottom),
        )

    def intersection(self, other: Rect) -> Rect | None:
        """Overlapping region, or None when the rectangles do not overlap."""
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if left >= right or top >= bottom:
            return None
        return Rect(left, top, right, bottom)

    def overlap_height(self, other: Rect) -> float:
        """Length of the vertical overlap between two rectangles (0 if none)."""
        return max(0.0, min(self.bottom, other.bottom) - max(self.top, other.top))

    def expand(self, horizontal: float = 0.0, vertical: float = 0.0) -> Rect:
        return Rect(
            left=self.left - horizontal,
            top=self.top - vertical,
            right=self.right + horizontal,
            bottom=self.bottom + vertical,
        )

    def scale(self, scale_x: float, scale_y: float) -> Rect:
        return Rect(
            left=self.left * scale_x,
            top=self.top * scale_y,
            right=self.right * scale_x,
            bottom=self.bottom * scale_y,
        )

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def to_normalized(self, image_width: int, image_height: int) -> Rect:
        """
        Convert to 0-1 coordinates relative to an image.

        Args:
            image_width: Image width in pixels.
            image_height: Image height in pixels.

        Returns:
            Rect with coordinates divided by the image size.
        """
        if image_width <= 0 or image_height <= 0:
            raise ValueError(
                f"image size must be positive, got {image_width}x{image_height}"
            )
        return Rect(
            left=self.left / image_width,
            top=self.top / image_height,
            right=self.right / image_width,
            bottom=self.bottom / image_height,
        )

    @staticmethod
    def union_all(rects: Iterable[Rect]) -> Rect:
        """Union of a non-empty collection of rectangles."""
        result: Rect | None = None
        for rect in rects:
            result = rect if result is None else result.union(rect)
        if result is None:
            raise ValueError("cannot compute the union of zero rectangles")
        return result


# =============================================================================
# DIRECTION
# =============================================================================


class TextDirection(Enum):
    """Text flow orientation."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    # Reserved for groups mixing orientations; never produced by the classifier
    MIXED = "mixed"

    @classmethod
    def from_angle(cls, angle: float | None) -> TextDirection:
        """Map a rotation angle in degrees to a direction (90/270 are vertical)."""
        if angle in VERTICAL_ANGLES:
            return cls.VERTICAL
        return cls.HORIZONTAL


# =============================================================================
# DETECTIONS & RESULTS
# =============================================================================


@dataclass(frozen=True)
class Detection:
    """
    One raw OCR output.

    Attributes:
        text: Recognized text (non-empty).
        box: Bounding box in pixel space.
        confidence: Recognition confidence in [0, 1].
        angle: Optional rotation in degrees, in [0, 360).
    """

    text: str
    box: Rect
    confidence: float = 1.0
    angle: float | None = None

    def __post_init__(self):
        """Validate detection fields."""
        if not self.text:
            raise ValueError("detection text must be non-empty")
        if self.box.left > self.box.right or self.box.top > self.box.bottom:
            raise ValueError(f"detection box is inverted: {self.box}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be between 0.0 and 1.0, got {self.confidence}")
        if self.angle is not None and not 0.0 <= self.angle < 360.0:
            raise ValueError(f"angle must be in [0, 360), got {self.angle}")

    @property
    def is_high_quality(self) -> bool:
        return self.confidence > HIGH_QUALITY_CONFIDENCE

    @property
    def is_low_quality(self) -> bool:
        return self.confidence < LOW_QUALITY_CONFIDENCE


@dataclass(frozen=True)
class MergedText:
    """
    A logical text unit built from one or more detections.

    The box is always the exact union of the boxes of
    ``original_detections``; use the ``from_detection`` and
    ``from_detections`` factories so that holds.

    Example:
        >>> d = Detection("hi", Rect(0, 0, 20, 10))
        >>> MergedText.from_detection(d).original_box_count
        1
    """

    text: str
    box: Rect
    direction: TextDirection
    original_box_count: int
    original_detections: tuple[Detection, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Validate merged text fields."""
        if not self.text:
            raise ValueError("merged text must be non-empty")
        if self.original_box_count < 1:
            raise ValueError(
                f"original_box_count must be >= 1, got {self.original_box_count}"
            )

    @property
    def is_multi_box_merged(self) -> bool:
        return self.original_box_count > 1

    @property
    def text_length(self) -> int:
        return len(self.text)

    @property
    def avg_text_length_per_box(self) -> float:
        return self.text_length / self.original_box_count

    @classmethod
    def from_detection(
        cls,
        detection: Detection,
        direction: TextDirection = TextDirection.HORIZONTAL,
    ) -> MergedText:
        """Wrap a single detection without merging."""
        return cls(
            text=detection.text,
            box=detection.box,
            direction=direction,
            original_box_count=1,
            original_detections=(detection,),
        )

    @classmethod
    def from_detections(
        cls,
        detections: Sequence[Detection],
        text: str,
        direction: TextDirection,
    ) -> MergedText:
        """
        Build a merged text whose box is the union of the detections' boxes.

        Args:
            detections: Constituent detections, in output order.
            text: Already-joined text.
            direction: Direction of the group.

        Returns:
            MergedText covering all detections.
        """
        if not detections:
            raise ValueError("cannot merge an empty list of detections")
        return cls(
            text=text,
            box=Rect.union_all(d.box for d in detections),
            direction=direction,
            original_box_count=len(detections),
            original_detections=tuple(detections),
        )


def merge_by_rows(
    rows: Sequence[Sequence[Detection]],
    direction: TextDirection = TextDirection.HORIZONTAL,
    separator: str = "",
) -> list[MergedText]:
    """
    Build one MergedText per pre-grouped row, without any spatial analysis.

    Args:
        rows: Rows of detections, each non-empty.
        direction: Direction assigned to every result.
        separator: String placed between texts within a row.

    Returns:
        One MergedText per row, in row order.
    """
    return [
        MergedText.from_detections(row, separator.join(d.text for d in row), direction)
        for row in rows
    ]
