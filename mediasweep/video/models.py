"""
Video-specific data models.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from ..common.errors import ProbeError
from ..common.models import MediaFile

logger = logging.getLogger(__name__)

@dataclass
class VideoFile(MediaFile):
    """A video on disk and its duration, probed at most once per run."""
    duration: Optional[float] = None
    probe_error: Optional[str] = field(default=None, repr=False)

    @property
    def unreadable(self) -> bool:
        return self.probe_error is not None

    def load_duration(self, tools) -> float:
        """Duration in seconds, probing with ``tools`` on first use.

        A failed probe is remembered: later calls raise the same ProbeError
        without running the probe again.
        """
        if self.duration is not None:
            return self.duration
        if self.probe_error is not None:
            raise ProbeError(self.probe_error)

        try:
            self.duration = tools.probe_duration(self.path)
        except ProbeError as e:
            self.probe_error = str(e)
            logger.error(f"Failed to get duration for {self.path}: {e}")
            raise
        return self.duration
