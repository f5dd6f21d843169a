"""
Text direction classification.

Rotation angles reported by the detector take priority. When they are
missing or disagree, the aspect ratio of the boxes decides: text whose
boxes are much taller than wide is vertical.
"""

from __future__ import annotations

from collections.abc import Sequence

from ocrmerge.models import Detection, TextDirection

# Height must exceed width by this factor for vertical text
VERTICAL_ASPECT_RATIO_THRESHOLD = 1.5


def detect_direction(detections: Sequence[Detection]) -> TextDirection:
    """
    Infer the direction of a detection or of a merged group.

    Args:
        detections: One detection, or the constituents of a merged group.

    Returns:
        HORIZONTAL or VERTICAL. MIXED is never returned.
    """
    if not detections:
        return TextDirection.HORIZONTAL

    if len(detections) == 1:
        detection = detections[0]
        if detection.angle is not None:
            return TextDirection.from_angle(detection.angle)
        box = detection.box
        if box.height / max(box.width, 1.0) > VERTICAL_ASPECT_RATIO_THRESHOLD:
            return TextDirection.VERTICAL
        return TextDirection.HORIZONTAL

    angles = {d.angle for d in detections}
    if len(angles) == 1 and None not in angles:
        return TextDirection.from_angle(angles.pop())

    avg_width = sum(d.box.width for d in detections) / len(detections)
    avg_height = sum(d.box.height for d in detections) / len(detections)
    if avg_height > avg_width * VERTICAL_ASPECT_RATIO_THRESHOLD:
        return TextDirection.VERTICAL
    return TextDirection.HORIZONTAL
