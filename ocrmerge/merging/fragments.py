"""
Second-pass fragment reconciliation.

Per-row merging can leave short, isolated pieces (stray punctuation,
characters the detector split off, titles whose glyphs sit at slightly
different heights) that belong with a neighbour but never shared a row
with it. This pass walks all first-pass results top to bottom and chains
a result into its predecessor when they overlap vertically, sit close
horizontally, and at least one of them looks like a fragment.

Chains are unbounded: a long run of tiny fragments can collapse into a
single result.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ocrmerge.merging.direction import detect_direction
from ocrmerge.models import MergedText

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Fragment size limits, relative to the average result size
FRAGMENT_HEIGHT_FACTOR = 1.2
FRAGMENT_WIDTH_FACTOR = 1.5

# Merge conditions
MIN_VERTICAL_OVERLAP = 0.5
MAX_GAP_FACTOR = 0.5  # of average width
DIRECT_JOIN_GAP_FACTOR = 0.2  # below this, no space is inserted


@dataclass
class FragmentStats:
    """Statistics for fragment reconciliation."""

    fragments_found: int = 0
    merges: int = 0


def is_fragment(
    text: MergedText,
    avg_height: float,
    avg_width: float,
    text_threshold: int,
) -> bool:
    """Whether a result is short and small enough to be an OCR split artifact."""
    return (
        len(text.text) <= text_threshold
        and text.box.height < avg_height * FRAGMENT_HEIGHT_FACTOR
        and text.box.width < avg_width * FRAGMENT_WIDTH_FACTOR
    )


def _vertical_overlap(a: MergedText, b: MergedText) -> float:
    shorter = max(min(a.box.height, b.box.height), 1.0)
    return a.box.overlap_height(b.box) / shorter


def _join(acc: MergedText, following: MergedText, x_gap: float, avg_width: float) -> MergedText:
    separator = "" if x_gap < avg_width * DIRECT_JOIN_GAP_FACTOR else " "
    detections = acc.original_detections + following.original_detections
    return MergedText(
        text=acc.text + separator + following.text,
        box=acc.box.union(following.box),
        direction=detect_direction(detections),
        original_box_count=acc.original_box_count + following.original_box_count,
        original_detections=detections,
    )


def reconcile_fragments(
    texts: Sequence[MergedText],
    fragment_text_threshold: int,
) -> tuple[list[MergedText], FragmentStats]:
    """
    Chain adjacent fragments left over from row merging.

    Args:
        texts: First-pass results.
        fragment_text_threshold: Max text length for a fragment.

    Returns:
        Tuple of (results ordered by top, statistics).
    """
    stats = FragmentStats()
    if len(texts) < 2:
        return list(texts), stats

    avg_height = sum(t.box.height for t in texts) / len(texts)
    avg_width = sum(t.box.width for t in texts) / len(texts)

    def fragment(text: MergedText) -> bool:
        return is_fragment(text, avg_height, avg_width, fragment_text_threshold)

    stats.fragments_found = sum(1 for t in texts if fragment(t))
    logger.debug(
        "Second pass: %d results, %d fragments (avg %.1fx%.1fpx)",
        len(texts),
        stats.fragments_found,
        avg_width,
        avg_height,
    )

    ordered = sorted(texts, key=lambda t: t.box.top)
    results: list[MergedText] = []
    acc = ordered[0]
    for following in ordered[1:]:
        x_gap = following.box.left - acc.box.right
        if (
            _vertical_overlap(acc, following) > MIN_VERTICAL_OVERLAP
            and x_gap < avg_width * MAX_GAP_FACTOR
            and (fragment(acc) or fragment(following))
        ):
            acc = _join(acc, following, x_gap, avg_width)
            stats.merges += 1
        else:
            results.append(acc)
            acc = following
    results.append(acc)

    return results, stats
