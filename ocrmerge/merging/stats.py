"""
Merge statistics.

Purely observational: counts are collected while the engine runs and
summarized once at the end. Nothing here influences merge results.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from ocrmerge.models import Detection, MergedText

logger = logging.getLogger(__name__)


@dataclass
class MergeStats:
    """Statistics for a single merge call."""

    original_count: int = 0
    merged_count: int = 0
    rows: int = 0
    adaptive_rows: int = 0
    fragment_merges: int = 0
    multi_box_merges: int = 0
    total_text_length: int = 0
    average_confidence: float = 0.0
    elapsed_ms: float = 0.0
    fell_back: bool = False

    @property
    def compression_rate(self) -> float:
        """Merged results per input detection (1.0 for empty input)."""
        if self.original_count == 0:
            return 1.0
        return self.merged_count / self.original_count

    @property
    def merge_efficiency(self) -> float:
        """Input detections per merged result (1.0 when nothing was produced)."""
        if self.merged_count == 0:
            return 1.0
        return self.original_count / self.merged_count


@dataclass
class MergeStatsCollector:
    """
    Collects counters during one merge call.

    Example:
        >>> collector = MergeStatsCollector()
        >>> collector.record_rows(3)
        >>> stats = collector.finish(detections, results)
    """

    start_time: float = field(default_factory=time.time)
    rows: int = 0
    adaptive_rows: int = 0
    fragment_merges: int = 0
    fell_back: bool = False

    def record_rows(self, count: int) -> None:
        self.rows = count

    def record_adaptive_row(self) -> None:
        self.adaptive_rows += 1

    def record_fragment_merges(self, count: int) -> None:
        self.fragment_merges += count

    def record_fallback(self) -> None:
        self.fell_back = True

    def finish(
        self,
        detections: Sequence[Detection],
        results: Sequence[MergedText],
    ) -> MergeStats:
        """
        Summarize the call.

        Args:
            detections: Input detections.
            results: Returned results.

        Returns:
            MergeStats for the call.
        """
        if detections:
            average_confidence = sum(d.confidence for d in detections) / len(detections)
        else:
            average_confidence = 0.0

        return MergeStats(
            original_count=len(detections),
            merged_count=len(results),
            rows=self.rows,
            adaptive_rows=self.adaptive_rows,
            fragment_merges=self.fragment_merges,
            multi_box_merges=sum(1 for r in results if r.is_multi_box_merged),
            total_text_length=sum(r.text_length for r in results),
            average_confidence=average_confidence,
            elapsed_ms=(time.time() - self.start_time) * 1000,
            fell_back=self.fell_back,
        )


def log_merge_stats(stats: MergeStats) -> None:
    """Log a one-line summary of a merge call."""
    logger.info(
        "Merged %d -> %d (compression %.2f, %d multi-box, %d chars, %.1fms)",
        stats.original_count,
        stats.merged_count,
        stats.compression_rate,
        stats.multi_box_merges,
        stats.total_text_length,
        stats.elapsed_ms,
    )
