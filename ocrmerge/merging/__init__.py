"""
Merge stages used by the engine.

- Row clustering by vertical proximity
- Fixed-tolerance and adaptive (Otsu) row merging
- Direction classification
- Second-pass fragment reconciliation
- Merge statistics

Example:
    >>> from ocrmerge.merging import cluster_lines, merge_row
    >>> rows = cluster_lines(detections, tolerance=0.4)
    >>> [merge_row(row, tolerance_factor=1.5).text for row in rows]
    ['Hello world', 'Second line']
"""

from ocrmerge.merging.adaptive import (
    MIN_ADAPTIVE_ROW_SIZE,
    merge_row_adaptive,
    otsu_gap_threshold,
)
from ocrmerge.merging.direction import detect_direction
from ocrmerge.merging.fragments import (
    FragmentStats,
    is_fragment,
    reconcile_fragments,
)
from ocrmerge.merging.lines import cluster_lines
from ocrmerge.merging.rows import gap_threshold, join_texts, merge_row
from ocrmerge.merging.stats import MergeStats, MergeStatsCollector, log_merge_stats

__all__ = [
    # Rows
    "cluster_lines",
    "merge_row",
    "merge_row_adaptive",
    "gap_threshold",
    "join_texts",
    "otsu_gap_threshold",
    "MIN_ADAPTIVE_ROW_SIZE",
    # Direction
    "detect_direction",
    # Second pass
    "reconcile_fragments",
    "is_fragment",
    "FragmentStats",
    # Statistics
    "MergeStats",
    "MergeStatsCollector",
    "log_merge_stats",
]
