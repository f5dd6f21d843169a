#!/usr/bin/env python3
"""
Basic ocrmerge Usage Example

This example demonstrates the core workflow:
1. Build detections (by hand, or from a detector's output)
2. Merge with the default configuration
3. Pick a preset or a custom configuration
4. Inspect merge statistics
5. Render a debug overlay
"""

import logging

from ocrmerge import (
    Detection,
    MergingConfig,
    MergingPreset,
    Rect,
    get_preset_config,
    merge,
    merge_with_stats,
)


def sample_detections():
    """A game dialogue box split by the detector into several pieces."""
    return [
        Detection("Press", Rect(10, 10, 60, 30), confidence=0.95),
        Detection("ST", Rect(64, 12, 84, 32), confidence=0.91),
        Detection("ART", Rect(86, 11, 116, 31), confidence=0.93),
        Detection("to", Rect(10, 60, 30, 80), confidence=0.70),
        Detection("play", Rect(80, 61, 120, 81), confidence=0.88),
        Detection("!", Rect(122, 64, 128, 80), confidence=0.40),
    ]


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    detections = sample_detections()

    # ─────────────────────────────────────────────────────────────────────────
    # 1. Default merge
    # ─────────────────────────────────────────────────────────────────────────

    for text in merge(detections):
        print(f"{text.text!r:20} {text.direction.value:10} boxes={text.original_box_count}")

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Presets and custom configuration
    # ─────────────────────────────────────────────────────────────────────────

    game = get_preset_config(MergingPreset.GAME)
    print(f"\n{MergingPreset.GAME.display_name}: {[t.text for t in merge(detections, game)]}")

    config = MergingConfig(
        y_tolerance=0.4,
        x_tolerance_factor=1.5,
        enable_smart_clustering=True,  # Split rows at large gaps
        enable_second_pass=True,  # Rejoin stray fragments
        fragment_text_threshold=2,
    )

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Statistics
    # ─────────────────────────────────────────────────────────────────────────

    results, stats = merge_with_stats(detections, config)
    print(f"\nCustom: {[t.text for t in results]}")
    print(f"  {stats.original_count} -> {stats.merged_count} boxes")
    print(f"  Rows: {stats.rows} (adaptive: {stats.adaptive_rows})")
    print(f"  Fragment merges: {stats.fragment_merges}")
    print(f"  Average confidence: {stats.average_confidence:.2f}")


def overlay_example():
    """Draw merged boxes over a screenshot for threshold tuning."""
    from PIL import Image

    from ocrmerge.overlay import render_overlay

    image = Image.new("RGB", (200, 100), (255, 255, 255))
    results = merge(sample_detections())
    render_overlay(image, results, show_detections=True).save("overlay.png")


def tesseract_example():
    """Merge words from pytesseract.image_to_data output."""
    from ocrmerge.adapters import detections_from_tesseract

    # data = pytesseract.image_to_data(image, output_type=pytesseract.Output.DICT)
    data = {
        "left": [10, 48],
        "top": [10, 11],
        "width": [34, 40],
        "height": [14, 14],
        "conf": ["91", "87"],
        "text": ["Hello", "world"],
    }
    print([t.text for t in merge(detections_from_tesseract(data, min_confidence=0.5))])


if __name__ == "__main__":
    main()
    tesseract_example()
