"""
Common utilities and shared functionality for media duplicate detection.
"""

from .models import MediaFile, DuplicateGroup, DeletionPolicy, ComparisonConfig, Report
from .utils import setup_logging, format_size, find_files, VERSION
from .actions import handle_duplicates, apply_deletion_policy, write_report
from .imaging import KeyframeComparator, normalize_image, count_different_pixels
from .grouping import find_duplicates
from .cli import BaseArgumentParser, VideoArgumentParser, ImageArgumentParser

__all__ = [
    'MediaFile',
    'DuplicateGroup',
    'DeletionPolicy',
    'ComparisonConfig',
    'Report',
    'setup_logging',
    'format_size',
    'find_files',
    'VERSION',
    'handle_duplicates',
    'apply_deletion_policy',
    'write_report',
    'KeyframeComparator',
    'normalize_image',
    'count_different_pixels',
    'find_duplicates',
    'BaseArgumentParser',
    'VideoArgumentParser',
    'ImageArgumentParser',
]
