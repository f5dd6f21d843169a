"""
Adaptive row merging with Otsu gap thresholding.

A single fixed threshold cannot separate "letters within one word" from
"space between two words" across fonts, scripts and scales. Instead the
gaps of each row are histogrammed and Otsu's method picks the split that
maximizes the between-class variance. Gaps at or below the split join
boxes directly; wider gaps are word boundaries and split the row into
separate results.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from ocrmerge.merging.direction import detect_direction
from ocrmerge.merging.rows import join_texts, merge_row
from ocrmerge.models import Detection, MergedText

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Rows smaller than this always use the fixed merger
MIN_ADAPTIVE_ROW_SIZE = 3

# Gap spread (px) below which the distribution carries no information
MIN_GAP_SPREAD = 1.0

HISTOGRAM_BINS = 256


# =============================================================================
# OTSU THRESHOLD
# =============================================================================


def _otsu_bin(hist: np.ndarray) -> int:
    """Index of the last bin of the lower class under Otsu's criterion."""
    total = float(hist.sum())
    sum_total = float(np.dot(hist, np.arange(len(hist))))
    sum_b = 0.0
    weight_b = 0.0
    best = 0
    max_var = -1.0
    for t in range(len(hist)):
        weight_b += hist[t]
        if weight_b <= 0:
            continue
        weight_f = total - weight_b
        if weight_f <= 0:
            break
        sum_b += float(t * hist[t])
        mean_b = sum_b / weight_b
        mean_f = (sum_total - sum_b) / weight_f
        var_between = weight_b * weight_f * (mean_b - mean_f) ** 2
        if var_between > max_var:
            max_var = var_between
            best = t
    return best


def otsu_gap_threshold(gaps: Sequence[float]) -> float | None:
    """
    Estimate the word-boundary gap threshold of a row.

    Args:
        gaps: Horizontal gaps between consecutive boxes.

    Returns:
        Absolute gap value separating the two classes (the upper edge of
        the selected histogram bin), or None when the gaps are too
        uniform to split.
    """
    if not gaps:
        return None
    values = np.asarray(gaps, dtype=float)
    low, high = float(values.min()), float(values.max())
    if high - low < MIN_GAP_SPREAD:
        return None

    hist, edges = np.histogram(values, bins=HISTOGRAM_BINS, range=(low, high))
    t = _otsu_bin(hist)
    return float(edges[t + 1])


# =============================================================================
# ROW MERGING
# =============================================================================


def merge_row_adaptive(
    row: Sequence[Detection],
    tolerance_factor: float,
) -> list[MergedText]:
    """
    Merge one row using its own gap distribution.

    Falls back to the fixed merger (``tolerance_factor`` applies there)
    when the row is too small or its gaps are nearly uniform.

    Args:
        row: Non-empty row of detections (any order).
        tolerance_factor: Gap tolerance for the fixed-merger fallback.

    Returns:
        One MergedText per gap cluster, left to right.
    """
    if len(row) < MIN_ADAPTIVE_ROW_SIZE:
        return [merge_row(row, tolerance_factor)]

    ordered = sorted(row, key=lambda d: d.box.left)
    gaps = [b.box.left - a.box.right for a, b in zip(ordered, ordered[1:])]
    threshold = otsu_gap_threshold(gaps)
    if threshold is None:
        logger.debug("Row of %d: gaps nearly uniform, using fixed threshold", len(ordered))
        return [merge_row(ordered, tolerance_factor)]

    clusters: list[list[Detection]] = [[ordered[0]]]
    for detection, gap in zip(ordered[1:], gaps):
        if gap <= threshold:
            clusters[-1].append(detection)
        else:
            clusters.append([detection])

    logger.debug(
        "Row of %d: Otsu gap threshold %.2fpx -> clusters %s",
        len(ordered),
        threshold,
        [len(c) for c in clusters],
    )

    results = []
    for cluster in clusters:
        direction = detect_direction(cluster)
        if len(cluster) == 1:
            results.append(MergedText.from_detection(cluster[0], direction))
        else:
            results.append(
                MergedText.from_detections(cluster, join_texts(cluster, threshold), direction)
            )
    return results
