"""
Adapters from common detector outputs to Detection objects.

These only reshape data that a detector already produced; no OCR is
performed here. Supported sources:
- PyMuPDF word tuples (``page.get_text("words")``)
- pytesseract ``image_to_data(..., output_type=Output.DICT)`` dictionaries
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import fitz

from ocrmerge.models import Detection, Rect

logger = logging.getLogger(__name__)

# Tesseract reports confidence on a 0-100 scale
TESSERACT_CONFIDENCE_SCALE = 100.0


def detections_from_words(words: Iterable[Sequence[Any]]) -> list[Detection]:
    """
    Convert PyMuPDF word tuples into detections.

    Args:
        words: Tuples of (x0, y0, x1, y1, word, block_no, line_no, word_no).

    Returns:
        Detections with full confidence, blank words dropped.
    """
    detections = []
    for w in words:
        x0, y0, x1, y1, text = w[:5]
        text = str(text).strip()
        if not text:
            continue
        detections.append(
            Detection(text=text, box=Rect(float(x0), float(y0), float(x1), float(y1)))
        )
    return detections


def detections_from_page(page: fitz.Page) -> list[Detection]:
    """
    Extract word detections from a PDF page.

    Args:
        page: PyMuPDF page object.

    Returns:
        One detection per word on the page.
    """
    return detections_from_words(page.get_text("words"))


def detections_from_tesseract(
    data: Mapping[str, Sequence[Any]],
    min_confidence: float = 0.0,
) -> list[Detection]:
    """
    Convert pytesseract ``image_to_data`` output into detections.

    Entries with negative confidence (layout-only rows), blank text or a
    confidence below ``min_confidence`` are dropped.

    Args:
        data: Dict with ``left``, ``top``, ``width``, ``height``, ``conf``
            and ``text`` lists.
        min_confidence: Minimum confidence in [0, 1] to keep a word.

    Returns:
        Word-level detections.
    """
    detections = []
    skipped = 0
    for left, top, width, height, conf, text in zip(
        data["left"], data["top"], data["width"], data["height"], data["conf"], data["text"]
    ):
        text = str(text or "").strip()
        try:
            raw_conf = float(conf)
        except (TypeError, ValueError):
            raw_conf = -1.0
        if not text or raw_conf < 0:
            skipped += 1
            continue

        confidence = min(raw_conf / TESSERACT_CONFIDENCE_SCALE, 1.0)
        if confidence < min_confidence:
            skipped += 1
            continue

        left, top = float(left), float(top)
        detections.append(
            Detection(
                text=text,
                box=Rect(left, top, left + float(width), top + float(height)),
                confidence=confidence,
            )
        )

    logger.debug("Tesseract data: %d detections, %d entries skipped", len(detections), skipped)
    return detections
