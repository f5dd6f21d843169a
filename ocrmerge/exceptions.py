"""
Exception classes for ocrmerge.

All ocrmerge exceptions inherit from OcrMergeError,
making it easy to catch all library errors.

Example:
    >>> try:
    ...     config = ocrmerge.MergingConfig(y_tolerance=5.0)
    ... except ocrmerge.ConfigurationError as e:
    ...     print(f"Bad config: {e}")
"""


class OcrMergeError(Exception):
    """
    Base exception for all ocrmerge errors.

    Catch this to handle any ocrmerge-specific error.
    """

    pass


class ConfigurationError(OcrMergeError, ValueError):
    """
    Raised for invalid merging configuration.

    Example:
        >>> MergingConfig(x_tolerance_factor=10.0)
        ConfigurationError: x_tolerance_factor must be between 0.5 and 3.0, got 10.0
    """

    pass


class MergeError(OcrMergeError):
    """
    Raised when a merge stage fails.

    Never escapes ``merge()``: the engine catches it and falls back
    to one unmerged result per detection.
    """

    def __init__(self, stage: str, message: str):
        super().__init__(f"{stage}: {message}")
        self.stage = stage
