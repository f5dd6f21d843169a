"""
Fixed-tolerance row merging.

Boxes in a row are joined left to right. A gap no wider than
``average box width * tolerance factor`` joins texts directly; a wider
gap inserts a single space.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ocrmerge.merging.direction import detect_direction
from ocrmerge.models import Detection, MergedText

logger = logging.getLogger(__name__)


def gap_threshold(row: Sequence[Detection], tolerance_factor: float) -> float:
    """Gap above which boxes in ``row`` are separated by a space."""
    avg_char_width = max(sum(d.box.width for d in row) / len(row), 1.0)
    return avg_char_width * tolerance_factor


def join_texts(row: Sequence[Detection], threshold: float) -> str:
    """
    Join texts of a left-sorted row, inserting spaces at wide gaps.

    Args:
        row: Detections sorted by left edge.
        threshold: Largest gap joined without a separator.

    Returns:
        Joined text.
    """
    parts = [row[0].text]
    for previous, detection in zip(row, row[1:]):
        gap = detection.box.left - previous.box.right
        if gap > threshold:
            parts.append(" ")
        parts.append(detection.text)
    return "".join(parts)


def merge_row(row: Sequence[Detection], tolerance_factor: float) -> MergedText:
    """
    Merge one row into a single MergedText.

    Args:
        row: Non-empty row of detections (any order).
        tolerance_factor: Gap tolerance relative to the average box width (> 0).

    Returns:
        MergedText covering the whole row.
    """
    if not row:
        raise ValueError("cannot merge an empty row")
    if tolerance_factor <= 0:
        raise ValueError(f"tolerance_factor must be > 0, got {tolerance_factor}")

    ordered = sorted(row, key=lambda d: d.box.left)
    if len(ordered) == 1:
        return MergedText.from_detection(ordered[0], detect_direction(ordered))

    threshold = gap_threshold(ordered, tolerance_factor)
    logger.debug("Row of %d: gap threshold %.1fpx", len(ordered), threshold)

    text = join_texts(ordered, threshold)
    return MergedText.from_detections(ordered, text, detect_direction(ordered))
