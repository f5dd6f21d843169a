"""
Row clustering by vertical proximity.

Detections are sorted by their top edge and walked in order; a new row
starts whenever the top edge jumps by more than a fraction of the
average box height.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ocrmerge.models import Detection

logger = logging.getLogger(__name__)


def cluster_lines(
    detections: Sequence[Detection],
    tolerance: float,
) -> list[list[Detection]]:
    """
    Group detections into rows.

    Each detection is compared with the last detection added to the
    current row, so slowly drifting baselines stay in one row.

    Args:
        detections: Non-empty sequence of detections.
        tolerance: Row tolerance relative to the average box height (> 0).

    Returns:
        Rows ordered by increasing top, each a non-empty list.
    """
    if not detections:
        raise ValueError("cannot cluster an empty list of detections")
    if tolerance <= 0:
        raise ValueError(f"tolerance must be > 0, got {tolerance}")

    avg_height = max(sum(d.box.height for d in detections) / len(detections), 1.0)
    threshold = avg_height * tolerance
    logger.debug(
        "Average height %.1fpx, row threshold %.1fpx (tolerance=%s)",
        avg_height,
        threshold,
        tolerance,
    )

    ordered = sorted(detections, key=lambda d: d.box.top)

    rows: list[list[Detection]] = []
    current = [ordered[0]]
    for detection in ordered[1:]:
        if abs(detection.box.top - current[-1].box.top) > threshold:
            rows.append(current)
            current = [detection]
        else:
            current.append(detection)
    rows.append(current)

    logger.debug("Row sizes: %s", [len(row) for row in rows])
    return rows
