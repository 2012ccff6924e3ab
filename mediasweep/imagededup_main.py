"""
Main entry point for image duplicate detection.
"""

import sys
from typing import Optional, Sequence

from .common.utils import setup_logging
from .common.cli import (ImageArgumentParser, build_config,
                         resolve_deletion_policy, resolve_input_dir)
from .common.actions import handle_duplicates
from .common.errors import FatalSetupError
from .common.imaging import KeyframeComparator
from .common.prompts import ConsolePrompter
from .image.analysis import ImageMatcher, analyze_images, find_image_files

def main(argv: Optional[Sequence[str]] = None, prompter=None) -> int:
    """Main entry point for the script."""
    # Parse command line arguments
    parser = ImageArgumentParser()
    args = parser.parse_args(argv)

    # Set up logging
    logger = setup_logging(args.verbose, args.log_dir)
    parser.log_unknown()
    logger.info("Starting Find Duplicate Images")

    if prompter is None:
        prompter = ConsolePrompter()

    try:
        input_dir = resolve_input_dir(args, prompter, 'images')
        if input_dir is None:
            return 1
        policy = resolve_deletion_policy(args, prompter, 'images')
        if policy is None:
            return 1
    except (FatalSetupError, ValueError) as e:
        logger.error(str(e))
        return 1

    config = build_config(args)

    try:
        image_files = find_image_files(input_dir)
        if not image_files:
            logger.info(f"No image files found in {input_dir}")
            duplicate_groups = []
        else:
            matcher = ImageMatcher(KeyframeComparator(config), config)
            duplicate_groups = analyze_images(image_files, matcher, args.progress)

        handle_duplicates(
            duplicate_groups,
            policy,
            input_dir,
            args.output_dir,
            prompter=prompter,
            force_delete=args.force_delete,
            kind='images'
        )
    except Exception as e:
        logger.error(f"Unexpected error in Find Duplicate Images: {e}")
        logger.debug("Error details", exc_info=True)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
