"""
External tools used to read videos.

The analysis code only talks to a VideoTools object, so the ffmpeg
command-line tools can be replaced by a library binding or a test double.
"""

import json
import math
import subprocess
import logging
from pathlib import Path

from ..common.errors import ExtractionError, ProbeError

logger = logging.getLogger(__name__)

class VideoTools:
    """Interface for probing videos and pulling still frames out of them."""

    def probe_duration(self, path: Path) -> float:
        """Duration of ``path`` in seconds. Raises ProbeError."""
        raise NotImplementedError("Subclasses must implement probe_duration")

    def extract_frame(self, path: Path, timestamp: float, output_path: Path) -> None:
        """Write the frame at ``timestamp`` seconds to ``output_path``. Raises ExtractionError."""
        raise NotImplementedError("Subclasses must implement extract_frame")

class FFmpegTools(VideoTools):
    """VideoTools backed by the ffprobe and ffmpeg executables."""

    def __init__(self, ffmpeg: str = "ffmpeg", ffprobe: str = "ffprobe"):
        self.ffmpeg = ffmpeg
        self.ffprobe = ffprobe

    def probe_duration(self, path: Path) -> float:
        cmd = [
            self.ffprobe,
            "-v", "error",
            "-show_entries", "format=duration",
            "-of", "json",
            str(path)
        ]
        logger.debug(f"Retrieving duration for {path}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise ProbeError(f"Could not run {self.ffprobe}: {e}") from e

        if result.returncode != 0:
            raise ProbeError(f"Could not probe video file {path}: {result.stderr.strip()}")

        try:
            probe_data = json.loads(result.stdout)
            duration = float(probe_data['format']['duration'])
        except (ValueError, KeyError, TypeError) as e:
            raise ProbeError(f"No duration found for {path}: {e}") from e

        if not math.isfinite(duration) or duration <= 0:
            raise ProbeError(f"Invalid duration for {path}: {duration}")

        logger.debug(f"Duration of {path}: {duration} seconds")
        return duration

    def extract_frame(self, path: Path, timestamp: float, output_path: Path) -> None:
        cmd = [
            self.ffmpeg,
            "-i", str(path),
            "-ss", f"{timestamp:.6f}",
            "-vframes", "1",
            str(output_path),
            "-y"
        ]
        try:
            subprocess.run(cmd, check=True, capture_output=True)
        except (subprocess.CalledProcessError, OSError) as e:
            raise ExtractionError(f"Failed to extract keyframe at {timestamp}s from {path}: {e}") from e

        if not output_path.exists():
            raise ExtractionError(f"ffmpeg produced no frame at {timestamp}s for {path}")
