"""
Detection merging engine.

Sequences the merge stages:
1. Row clustering (vertical proximity)
2. Per-row merging (fixed tolerance, or Otsu when enabled)
3. Fragment reconciliation (optional second pass)

The public entry points are total: a fault in any stage is logged and
the call degrades to one unmerged result per detection, so downstream
translation always gets text to work with.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from ocrmerge.config import DEFAULT_CONFIG, MergingConfig
from ocrmerge.exceptions import MergeError
from ocrmerge.merging.adaptive import MIN_ADAPTIVE_ROW_SIZE, merge_row_adaptive
from ocrmerge.merging.direction import detect_direction
from ocrmerge.merging.fragments import reconcile_fragments
from ocrmerge.merging.lines import cluster_lines
from ocrmerge.merging.rows import merge_row
from ocrmerge.merging.stats import MergeStats, MergeStatsCollector, log_merge_stats
from ocrmerge.models import Detection, MergedText

logger = logging.getLogger(__name__)


@contextmanager
def _stage(name: str) -> Iterator[None]:
    """Re-raise any fault inside the block as a MergeError for ``name``."""
    try:
        yield
    except MergeError:
        raise
    except Exception as exc:
        raise MergeError(name, f"{type(exc).__name__}: {exc}") from exc


def _unmerged(detections: Sequence[Detection]) -> list[MergedText]:
    return [MergedText.from_detection(d, detect_direction([d])) for d in detections]


class TextMergerEngine:
    """
    Merges raw OCR detections into rows of text.

    The engine holds no state, so one instance can be shared freely,
    including across threads.

    Example:
        >>> engine = TextMergerEngine()
        >>> merged = engine.merge(detections, MergingConfig(enable_second_pass=True))
        >>> [m.text for m in merged]
        ['Hello world', 'Press START']
    """

    def merge(
        self,
        detections: Sequence[Detection],
        config: MergingConfig | None = None,
    ) -> list[MergedText]:
        """
        Merge detections into logical text units.

        Args:
            detections: Raw detections from one OCR pass.
            config: Merging configuration (defaults to DEFAULT_CONFIG).

        Returns:
            Merged texts ordered by the top of their bounding box.
        """
        results, _stats = self.merge_with_stats(detections, config)
        return results

    def merge_with_stats(
        self,
        detections: Sequence[Detection],
        config: MergingConfig | None = None,
    ) -> tuple[list[MergedText], MergeStats]:
        """
        Merge detections and report statistics.

        Args:
            detections: Raw detections from one OCR pass.
            config: Merging configuration (defaults to DEFAULT_CONFIG).

        Returns:
            Tuple of (merged texts, statistics).
        """
        if config is None:
            config = DEFAULT_CONFIG
        detections = list(detections)
        collector = MergeStatsCollector()

        if not detections:
            logger.warning("No detections to merge, returning empty result")
            results: list[MergedText] = []
        elif len(detections) == 1:
            logger.debug("Single detection, nothing to merge")
            results = _unmerged(detections)
        else:
            try:
                results = self._run_stages(detections, config, collector)
            except MergeError as e:
                logger.warning(
                    "Merge failed at stage %r for %d detections (%s), "
                    "returning unmerged detections: %s",
                    e.stage,
                    len(detections),
                    config,
                    e,
                )
                logger.debug("Merge failure traceback", exc_info=True)
                collector.record_fallback()
                results = _unmerged(detections)

        stats = collector.finish(detections, results)
        log_merge_stats(stats)
        return results, stats

    def _run_stages(
        self,
        detections: list[Detection],
        config: MergingConfig,
        collector: MergeStatsCollector,
    ) -> list[MergedText]:
        logger.debug("Merging %d detections with %s", len(detections), config)

        # Stage 1: rows
        with _stage("cluster_lines"):
            rows = cluster_lines(detections, config.y_tolerance)
        collector.record_rows(len(rows))

        # Stage 2: per-row merge
        with _stage("merge_rows"):
            results: list[MergedText] = []
            for row in rows:
                if config.enable_smart_clustering and len(row) >= MIN_ADAPTIVE_ROW_SIZE:
                    collector.record_adaptive_row()
                    results.extend(merge_row_adaptive(row, config.x_tolerance_factor))
                else:
                    results.append(merge_row(row, config.x_tolerance_factor))
        logger.debug("Row merge: %d rows -> %d results", len(rows), len(results))

        # Stage 3: second pass
        if config.enable_second_pass:
            with _stage("reconcile_fragments"):
                results, fragment_stats = reconcile_fragments(
                    results, config.fragment_text_threshold
                )
            collector.record_fragment_merges(fragment_stats.merges)

        with _stage("order_results"):
            results.sort(key=lambda m: m.box.top)
        return results


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_ENGINE = TextMergerEngine()


def merge(
    detections: Sequence[Detection],
    config: MergingConfig | None = None,
) -> list[MergedText]:
    """
    Merge detections with a shared engine.

    Args:
        detections: Raw detections from one OCR pass.
        config: Merging configuration (defaults to DEFAULT_CONFIG).

    Returns:
        Merged texts ordered by the top of their bounding box.
    """
    return _ENGINE.merge(detections, config)


def merge_with_stats(
    detections: Sequence[Detection],
    config: MergingConfig | None = None,
) -> tuple[list[MergedText], MergeStats]:
    """Merge detections with a shared engine and report statistics."""
    return _ENGINE.merge_with_stats(detections, config)
