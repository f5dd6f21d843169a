"""
ocrmerge: Merge raw OCR detections into coherent text units.

OCR detectors report many small boxes per screen: single glyphs, word
pieces, stray punctuation. This library clusters them into rows, joins
each row with a spacing-aware rule (fixed or adaptive), optionally chains
leftover fragments, and infers text direction, producing the units that
translation and overlay rendering work with.

Example:
    >>> import ocrmerge
    >>> detections = [
    ...     ocrmerge.Detection("Hel", ocrmerge.Rect(0, 0, 30, 20)),
    ...     ocrmerge.Detection("lo", ocrmerge.Rect(32, 0, 52, 20)),
    ... ]
    >>> [m.text for m in ocrmerge.merge(detections)]
    ['Hello']

    >>> merged, stats = ocrmerge.merge_with_stats(detections, ocrmerge.MANGA_CONFIG)
    >>> stats.compression_rate
    0.5
"""

from ocrmerge.config import (
    DEFAULT_CONFIG,
    DOCUMENT_CONFIG,
    GAME_CONFIG,
    MANGA_CONFIG,
    PRESETS,
    MergingConfig,
    MergingPreset,
    get_preset_config,
    preset_for_config,
)
from ocrmerge.engine import TextMergerEngine, merge, merge_with_stats
from ocrmerge.exceptions import (
    ConfigurationError,
    MergeError,
    OcrMergeError,
)
from ocrmerge.merging.stats import MergeStats
from ocrmerge.models import (
    Detection,
    MergedText,
    Rect,
    TextDirection,
    merge_by_rows,
)

__version__ = "0.1.0"
__all__ = [
    # Main API
    "merge",
    "merge_with_stats",
    "TextMergerEngine",
    # Configuration
    "MergingConfig",
    "MergingPreset",
    "DEFAULT_CONFIG",
    "DOCUMENT_CONFIG",
    "GAME_CONFIG",
    "MANGA_CONFIG",
    "PRESETS",
    "get_preset_config",
    "preset_for_config",
    # Models
    "Detection",
    "MergedText",
    "Rect",
    "TextDirection",
    "merge_by_rows",
    # Statistics
    "MergeStats",
    # Exceptions
    "OcrMergeError",
    "ConfigurationError",
    "MergeError",
]
