"""
Video duplicate detection functionality.
"""

from ..common.utils import VIDEO_EXTENSIONS

# Check if ffmpeg and ffprobe are installed
import subprocess
import logging

logger = logging.getLogger(__name__)

def check_ffmpeg() -> bool:
    """Check if ffmpeg and ffprobe are installed."""
    logger.debug("Checking for FFmpeg and ffprobe installation")
    try:
        for tool in ("ffmpeg", "ffprobe"):
            result = subprocess.run([tool, "-version"], capture_output=True, text=True, check=True)
            logger.info(f"{tool} detected: {result.stdout.splitlines()[0] if result.stdout else tool}")
        return True
    except (subprocess.SubprocessError, FileNotFoundError) as e:
        logger.debug(f"FFmpeg/ffprobe check failed: {e}")
        return False

# Export constants and functions
__all__ = [
    'VIDEO_EXTENSIONS',
    'check_ffmpeg',
]
