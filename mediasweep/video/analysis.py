"""
Core video analysis functionality.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PIL import Image, UnidentifiedImageError
from tqdm import tqdm

from ..common.errors import ExtractionError, ProbeError
from ..common.grouping import find_duplicates
from ..common.imaging import KeyframeComparator
from ..common.models import ComparisonConfig, DuplicateGroup
from ..common.tempdir import temporary_file
from ..common.utils import find_files, VIDEO_EXTENSIONS
from .models import VideoFile
from .tools import VideoTools

logger = logging.getLogger(__name__)

def find_video_files(directory: Path) -> List[VideoFile]:
    """Find all video files in the directory, in listing order."""
    paths = find_files(directory, VIDEO_EXTENSIONS, logger)
    return [VideoFile(path) for path in paths]

class KeyframeExtractor:
    """Pulls decoded still frames out of a video at fractions of its length."""

    def __init__(self, tools: VideoTools, temp_dir: Path,
                 config: Optional[ComparisonConfig] = None):
        self.tools = tools
        self.temp_dir = temp_dir
        self.config = config or ComparisonConfig()

    def sample_positions(self, duration: float) -> Tuple[float, ...]:
        """Beginning, middle and end for longer clips, just the middle otherwise."""
        if duration > self.config.short_video_seconds:
            return self.config.long_positions
        return self.config.short_positions

    def extract_keyframes(self, video: Path, duration: float) -> List[Image.Image]:
        """Decode one frame per sample position.

        Raises ExtractionError if any position fails; partial results are
        never returned.
        """
        positions = self.sample_positions(duration)
        logger.debug(f"Extracting keyframes for {video} at positions: "
                     f"{', '.join(str(p) for p in positions)}")
        return [self.extract_keyframe(video, duration * pos) for pos in positions]

    def extract_keyframe(self, video: Path, timestamp: float) -> Image.Image:
        with temporary_file(self.temp_dir) as frame_path:
            self.tools.extract_frame(video, timestamp, frame_path)
            try:
                with Image.open(frame_path) as img:
                    img.load()
                    return img.copy()
            except FileNotFoundError as e:
                raise ExtractionError(f"No keyframe written at {timestamp}s for {video}") from e
            except (UnidentifiedImageError, OSError) as e:
                raise ExtractionError(f"Could not decode keyframe at {timestamp}s "
                                      f"from {video}: {e}") from e

class VideoMatcher:
    """Decides whether two videos are duplicates of each other."""

    def __init__(self, tools: VideoTools, extractor: KeyframeExtractor,
                 comparator: Optional[KeyframeComparator] = None,
                 config: Optional[ComparisonConfig] = None):
        self.tools = tools
        self.extractor = extractor
        self.config = config or ComparisonConfig()
        self.comparator = comparator or KeyframeComparator(self.config)

    def are_identical(self, video1: VideoFile, video2: VideoFile) -> bool:
        """True when durations agree and every sampled keyframe matches.

        Any probe, extraction or comparison failure gives False.
        """
        logger.debug(f"Comparing videos: {video1.path} vs {video2.path}")

        try:
            duration1 = video1.load_duration(self.tools)
            duration2 = video2.load_duration(self.tools)
        except ProbeError:
            logger.debug("Duration retrieval failed for one or both videos")
            return False

        if abs(duration1 - duration2) > self.config.duration_tolerance:
            logger.debug(f"Videos have different durations: {duration1}s vs {duration2}s")
            return False
        logger.debug(f"Durations match: {duration1}s")

        try:
            keyframes1 = self.extractor.extract_keyframes(video1.path, duration1)
            keyframes2 = self.extractor.extract_keyframes(video2.path, duration2)
        except ExtractionError as e:
            logger.error(str(e))
            logger.debug("Keyframe extraction failed")
            return False

        if len(keyframes1) != len(keyframes2):
            logger.debug(f"Mismatched keyframe count: {len(keyframes1)} vs {len(keyframes2)}")
            return False

        for i, (frame1, frame2) in enumerate(zip(keyframes1, keyframes2)):
            if not self.comparator.are_equivalent(frame1, frame2, label=f"Keyframe {i + 1}"):
                logger.debug(f"Keyframes {i + 1} differ")
                return False

        logger.debug("All keyframes match, videos are identical")
        return True

def analyze_videos(video_files: Sequence[VideoFile],
                   matcher: VideoMatcher,
                   show_progress: bool = True) -> List[DuplicateGroup]:
    """Main analysis pipeline to find duplicate videos."""
    logger.info(f"Processing {len(video_files)} video files for duplicates")

    with tqdm(total=len(video_files), desc="Comparing videos", disable=not show_progress) as pbar:
        duplicate_groups = find_duplicates(
            video_files,
            matcher.are_identical,
            strict=matcher.config.strict_groups,
            progress_callback=lambda: pbar.update(1)
        )

    unreadable = [v.path for v in video_files if v.unreadable]
    if unreadable:
        logger.info(f"Skipped {len(unreadable)} videos whose duration could not be read")

    logger.debug(f"Analysis complete: {len(duplicate_groups)} duplicate groups found")
    return duplicate_groups
