"""
Common CLI argument handling for duplicate detection.
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from . import utils
from .errors import FatalSetupError
from .models import ComparisonConfig, DeletionPolicy
from .prompts import directory_validator

logger = logging.getLogger(__name__)

class CustomHelpFormatter(argparse.RawTextHelpFormatter):
    """Custom formatter to improve the display of argument choices."""

    def _format_action_invocation(self, action):
        if not action.option_strings or action.nargs == 0:
            return super()._format_action_invocation(action)

        default = self._get_default_metavar_for_optional(action)
        args_string = self._format_args(action, default)

        # Format choices with proper spacing
        if action.choices:
            args_string = '{' + ', '.join(str(c) for c in action.choices) + '}'

        return ', '.join(action.option_strings) + ' ' + args_string

class BaseArgumentParser:
    """Base argument parser with common options."""

    kind = 'files'

    def __init__(self, description: str):
        """Initialize parser with description."""
        self.parser = argparse.ArgumentParser(
            description=description,
            formatter_class=CustomHelpFormatter
        )
        self.unknown: List[str] = []
        self._add_common_arguments()

    def _add_common_arguments(self):
        """Add arguments common to all duplicate detection tools."""
        # Input
        self.parser.add_argument(
            '--input',
            type=str,
            help=f'Directory containing {self.kind} to check (prompted for when omitted)'
        )

        # Analysis options
        analysis_group = self.parser.add_argument_group('Analysis Options')
        analysis_group.add_argument(
            '--pixel-threshold',
            type=int,
            default=ComparisonConfig.pixel_threshold,
            help='Number of differing pixels per frame below which frames match '
                 f'(default: {ComparisonConfig.pixel_threshold})'
        )
        analysis_group.add_argument(
            '--color-threshold',
            type=float,
            default=ComparisonConfig.color_threshold,
            help='Per-pixel colour tolerance on a 0-1 scale '
                 f'(default: {ComparisonConfig.color_threshold})'
        )
        analysis_group.add_argument(
            '--strict-groups',
            action='store_true',
            help='Only add a file to a group when it matches every member,\n'
                 'not just the first one'
        )

        # Action options
        action_group = self.parser.add_argument_group('Action Options')
        action_group.add_argument(
            '--delete',
            type=str,
            help='What to do with duplicates. Options:\n' +
                 '  no  - List duplicates only\n' +
                 '  yes - Prompt to keep one file of each duplicate group\n' +
                 '  all - Keep the first file of each group, delete the rest\n' +
                 '(prompted for when omitted)'
        )
        action_group.add_argument(
            '--force-delete',
            action='store_true',
            help="Do not ask for confirmation before '--delete all'"
        )

        # Output options
        output_group = self.parser.add_argument_group('Output Options')
        output_group.add_argument(
            '--output-dir',
            type=str,
            default=str(Path('bin') / 'cleanup-files' / f'duplicate-{self.kind}'),
            help='Directory the JSON report is written to\n'
                 f'(default: bin/cleanup-files/duplicate-{self.kind})'
        )
        output_group.add_argument(
            '--no-progress',
            dest='progress',
            action='store_false',
            help='Do not show progress bars'
        )

        # Misc options
        misc_group = self.parser.add_argument_group('Miscellaneous')
        misc_group.add_argument(
            '-v', '--verbose',
            action='count',
            default=0,
            help='Increase verbosity level (-v for detailed, -vv for debug)'
        )
        misc_group.add_argument(
            '--log-dir',
            type=str,
            help='Also append log records to a daily file in this directory'
        )
        misc_group.add_argument(
            '--version',
            action='version',
            version=f'mediasweep {utils.VERSION}'
        )

    def parse_args(self, argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
        """Parse command line arguments.

        Unrecognised flags are kept in ``self.unknown`` and otherwise
        ignored; call ``log_unknown`` once logging is set up.
        """
        args, self.unknown = self.parser.parse_known_args(argv)

        # Convert paths to Path objects
        args.output_dir = Path(args.output_dir).resolve()
        if args.log_dir:
            args.log_dir = Path(args.log_dir).resolve()

        return args

    def log_unknown(self) -> None:
        for arg in self.unknown:
            logger.debug(f"Ignoring unrecognized argument: {arg}")

class VideoArgumentParser(BaseArgumentParser):
    """Argument parser for video duplicate detection."""

    kind = 'videos'

    def __init__(self):
        super().__init__(
            description="""videodedup - Find Duplicate Videos

Compares videos of equal duration by sampling still frames from each one
(10%, 50% and 90% in, or just the middle for clips of 3 seconds or less)
and grouping files whose frames match. Optionally deletes the extra copies
and always writes a JSON report."""
        )
        self._add_video_arguments()

    def _add_video_arguments(self):
        """Add video-specific arguments."""
        video_group = self.parser.add_argument_group('Video Options')
        video_group.add_argument(
            '--duration-tolerance',
            type=float,
            default=ComparisonConfig.duration_tolerance,
            help='Largest duration difference in seconds between duplicates '
                 f'(default: {ComparisonConfig.duration_tolerance})'
        )

class ImageArgumentParser(BaseArgumentParser):
    """Argument parser for image duplicate detection."""

    kind = 'images'

    def __init__(self):
        super().__init__(
            description="""imagededup - Find Duplicate Images

Compares images pixel by pixel after shrinking them to a common size and
groups files that match. Optionally deletes the extra copies and always
writes a JSON report."""
        )

def build_config(args: argparse.Namespace) -> ComparisonConfig:
    """Comparison thresholds from parsed arguments."""
    config = ComparisonConfig(
        pixel_threshold=args.pixel_threshold,
        color_threshold=args.color_threshold,
        strict_groups=args.strict_groups,
    )
    if getattr(args, 'duration_tolerance', None) is not None:
        config.duration_tolerance = args.duration_tolerance
    return config

def resolve_input_dir(args: argparse.Namespace, prompter, kind: str) -> Optional[Path]:
    """Input directory from ``--input`` or a prompt.

    Returns ``None`` when the user cancels the prompt. Raises
    FatalSetupError when the directory does not exist.
    """
    if args.input:
        input_dir = Path(args.input)
        if not input_dir.is_dir():
            raise FatalSetupError(f"Input directory not found: {input_dir}")
        logger.debug(f"Input directory from args: {input_dir}")
        return input_dir.resolve()

    logger.debug("Prompting for input directory")
    answer = prompter.text(
        f"Enter the directory containing {kind} to check for duplicates "
        "(or press Enter to cancel):",
        validate=directory_validator,
    )
    logger.debug(f"Input directory provided: {answer}")
    if not answer:
        logger.info("No input directory provided, cancelling...")
        return None
    input_dir = Path(answer)
    if not input_dir.is_dir():
        raise FatalSetupError(f"Input directory not found: {input_dir}")
    return input_dir.resolve()

def resolve_deletion_policy(args: argparse.Namespace, prompter, kind: str) -> Optional[DeletionPolicy]:
    """Deletion policy from ``--delete`` or a prompt.

    Returns ``None`` when the user cancels. Raises ValueError for an
    unknown policy name.
    """
    if args.delete:
        policy = DeletionPolicy.parse(args.delete)
        logger.debug(f"Delete option from args: {policy.value}")
        return policy

    logger.debug("Prompting for delete option")
    singular = kind[:-1]
    answer = prompter.select(
        f"Do you want to delete duplicate {kind}? (No: List duplicates only, "
        f"Yes: Prompt to keep one of each duplicate group, "
        f"All: Keep first {singular} of each group without prompting)",
        [('No', DeletionPolicy.NO), ('Yes', DeletionPolicy.YES), ('All', DeletionPolicy.ALL)],
        default=0,
    )
    logger.debug(f"Delete option provided: {answer.value if answer else None}")
    if answer is None:
        logger.info("No delete option provided, cancelling...")
    return answer
