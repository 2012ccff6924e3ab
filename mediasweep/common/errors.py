"""
Exceptions raised while looking for duplicate media.

Per-pair errors (probe, extraction, comparison) never end a run; callers
turn them into a "not a duplicate" verdict. Only FatalSetupError aborts.
"""


class MediaSweepError(Exception):
    """Base class for all mediasweep errors."""


class ProbeError(MediaSweepError):
    """Duration or stream metadata could not be read from a video."""


class ExtractionError(MediaSweepError):
    """A still frame could not be pulled out of a video."""


class ComparisonToolUnavailable(MediaSweepError):
    """No perceptual pixel-difference function is configured."""


class DeletionError(MediaSweepError):
    """A duplicate file could not be removed."""


class FatalSetupError(MediaSweepError):
    """The run cannot start: tools are missing or the input is unusable."""
