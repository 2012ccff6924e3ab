"""
Main entry point for video duplicate detection.
"""

import sys
from typing import Optional, Sequence

from .common.utils import setup_logging
from .common.cli import (VideoArgumentParser, build_config,
                         resolve_deletion_policy, resolve_input_dir)
from .common.actions import handle_duplicates
from .common.errors import FatalSetupError
from .common.imaging import KeyframeComparator
from .common.prompts import ConsolePrompter
from .common.tempdir import RunTempDir
from .video import check_ffmpeg
from .video.analysis import (KeyframeExtractor, VideoMatcher,
                             analyze_videos, find_video_files)
from .video.tools import FFmpegTools, VideoTools

def main(argv: Optional[Sequence[str]] = None,
         tools: Optional[VideoTools] = None,
         prompter=None) -> int:
    """Main entry point for the script."""
    # Parse command line arguments
    parser = VideoArgumentParser()
    args = parser.parse_args(argv)

    # Set up logging
    logger = setup_logging(args.verbose, args.log_dir)
    parser.log_unknown()
    logger.info("Starting Find Duplicate Videos")

    if prompter is None:
        prompter = ConsolePrompter()

    # Check dependencies
    if tools is None:
        if not check_ffmpeg():
            logger.error("ffmpeg and ffprobe are required but not found in the system PATH.")
            logger.error("Please install them and make sure they are available in your PATH.")
            return 1
        tools = FFmpegTools()

    try:
        input_dir = resolve_input_dir(args, prompter, 'videos')
        if input_dir is None:
            return 1
        policy = resolve_deletion_policy(args, prompter, 'videos')
        if policy is None:
            return 1
    except (FatalSetupError, ValueError) as e:
        logger.error(str(e))
        return 1

    config = build_config(args)

    try:
        with RunTempDir() as temp_dir:
            video_files = find_video_files(input_dir)
            if not video_files:
                logger.info(f"No video files found in {input_dir}")
                duplicate_groups = []
            else:
                extractor = KeyframeExtractor(tools, temp_dir, config)
                matcher = VideoMatcher(tools, extractor, KeyframeComparator(config), config)
                duplicate_groups = analyze_videos(video_files, matcher, args.progress)

            handle_duplicates(
                duplicate_groups,
                policy,
                input_dir,
                args.output_dir,
                prompter=prompter,
                force_delete=args.force_delete,
                kind='videos'
            )
    except Exception as e:
        logger.error(f"Unexpected error in Find Duplicate Videos: {e}")
        logger.debug("Error details", exc_info=True)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
