"""
Debug overlay for merge results.

Draws merged boxes onto a copy of a page or screen image so thresholds
can be tuned by eye. Horizontal and vertical results use different
colours; constituent detections can be drawn underneath.
"""

from __future__ import annotations

from collections.abc import Sequence

from PIL import Image, ImageDraw

from ocrmerge.models import MergedText, Rect, TextDirection

DIRECTION_COLORS = {
    TextDirection.HORIZONTAL: (220, 40, 40),
    TextDirection.VERTICAL: (40, 90, 220),
    TextDirection.MIXED: (200, 160, 0),
}
DETECTION_COLOR = (150, 150, 150)


def _xy(box: Rect) -> tuple[int, int, int, int]:
    return (round(box.left), round(box.top), round(box.right), round(box.bottom))


def render_overlay(
    image: Image.Image,
    merged: Sequence[MergedText],
    show_detections: bool = False,
    width: int = 2,
) -> Image.Image:
    """
    Draw merge results onto a copy of an image.

    Args:
        image: Source image, in the same pixel space as the boxes.
        merged: Merge results to draw.
        show_detections: Also outline each original detection.
        width: Outline width in pixels.

    Returns:
        New RGB image; the input is left untouched.
    """
    canvas = image.convert("RGB")
    draw = ImageDraw.Draw(canvas)

    if show_detections:
        for text in merged:
            for d in text.original_detections:
                draw.rectangle(_xy(d.box), outline=DETECTION_COLOR, width=1)

    for text in merged:
        draw.rectangle(
            _xy(text.box),
            outline=DIRECTION_COLORS[text.direction],
            width=width,
        )
    return canvas
