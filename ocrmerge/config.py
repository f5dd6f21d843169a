"""
Configuration for OCR detection merging.

MergingConfig is a frozen value object validated at construction time.
Named presets are pre-built configs for common content types: looser
tolerances for game UIs, tighter ones for comic panels.

Example:
    >>> config = MergingConfig(enable_second_pass=True)
    >>> merged = ocrmerge.merge(detections, config)

    >>> # Variants re-run validation
    >>> looser = dataclasses.replace(GAME_CONFIG, enable_smart_clustering=True)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ocrmerge.exceptions import ConfigurationError

# Accepted ranges (inclusive)
Y_TOLERANCE_RANGE = (0.1, 1.0)
X_TOLERANCE_FACTOR_RANGE = (0.5, 3.0)
FRAGMENT_TEXT_THRESHOLD_RANGE = (1, 10)


@dataclass(frozen=True)
class MergingConfig:
    """
    Configuration for detection merging.

    All options have sensible defaults. Out-of-range values raise
    ConfigurationError; nothing is clamped.

    Attributes:
        y_tolerance: Row clustering tolerance, relative to average box height.
        x_tolerance_factor: In-row gap tolerance, relative to average box width.
        enable_smart_clustering: Use Otsu gap thresholding for rows of 3+ boxes.
        enable_second_pass: Chain short adjacent fragments after row merging.
        fragment_text_threshold: Max text length for a result to count as a fragment.
    """

    y_tolerance: float = 0.4
    x_tolerance_factor: float = 1.5
    enable_smart_clustering: bool = False
    enable_second_pass: bool = False
    fragment_text_threshold: int = 3

    def __post_init__(self):
        """Validate configuration."""
        low, high = Y_TOLERANCE_RANGE
        if not low <= self.y_tolerance <= high:
            raise ConfigurationError(
                f"y_tolerance must be between {low} and {high}, got {self.y_tolerance}"
            )

        low, high = X_TOLERANCE_FACTOR_RANGE
        if not low <= self.x_tolerance_factor <= high:
            raise ConfigurationError(
                f"x_tolerance_factor must be between {low} and {high}, "
                f"got {self.x_tolerance_factor}"
            )

        low, high = FRAGMENT_TEXT_THRESHOLD_RANGE
        if isinstance(self.fragment_text_threshold, bool) or not isinstance(
            self.fragment_text_threshold, int
        ):
            raise ConfigurationError(
                f"fragment_text_threshold must be an integer, "
                f"got {self.fragment_text_threshold!r}"
            )
        if not low <= self.fragment_text_threshold <= high:
            raise ConfigurationError(
                f"fragment_text_threshold must be between {low} and {high}, "
                f"got {self.fragment_text_threshold}"
            )


# =============================================================================
# PRESETS
# =============================================================================

DEFAULT_CONFIG = MergingConfig()

# Game UIs: looser merging
GAME_CONFIG = MergingConfig(y_tolerance=0.5, x_tolerance_factor=2.0)

# Comic panels: stricter merging
MANGA_CONFIG = MergingConfig(y_tolerance=0.3, x_tolerance_factor=1.0)

# Dense documents: balanced
DOCUMENT_CONFIG = MergingConfig(y_tolerance=0.4, x_tolerance_factor=1.5)


class MergingPreset(Enum):
    """Named merging presets."""

    GAME = "game"
    MANGA = "manga"
    DOCUMENT = "document"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


# Preset lookup dictionary; CUSTOM has no fixed config
PRESETS: dict[MergingPreset, MergingConfig] = {
    MergingPreset.GAME: GAME_CONFIG,
    MergingPreset.MANGA: MANGA_CONFIG,
    MergingPreset.DOCUMENT: DOCUMENT_CONFIG,
}


def get_preset_config(preset: MergingPreset) -> MergingConfig:
    """
    Get the config for a preset.

    Args:
        preset: Preset to look up.

    Returns:
        The preset's MergingConfig; DEFAULT_CONFIG for CUSTOM.
    """
    return PRESETS.get(preset, DEFAULT_CONFIG)


def preset_for_config(config: MergingConfig) -> MergingPreset:
    """
    Identify which preset a config corresponds to.

    Presets are matched by value, so DEFAULT_CONFIG reports as DOCUMENT.

    Args:
        config: Config to classify.

    Returns:
        Matching preset, or CUSTOM if no preset has the same values.
    """
    for preset, preset_config in PRESETS.items():
        if preset_config == config:
            return preset
    return MergingPreset.CUSTOM
