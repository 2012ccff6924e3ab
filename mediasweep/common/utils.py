"""
Common utilities for media duplicate detection.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Set

# Add custom VERBOSE level between INFO and DEBUG
VERBOSE = 15  # Between INFO (20) and DEBUG (10)
logging.addLevelName(VERBOSE, "VERBOSE")

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_logging(verbose_level: int = 0, log_dir: Optional[Path] = None) -> logging.Logger:
    """Set up logging with configurable verbosity.

    When ``log_dir`` is given, records are also appended to a daily
    ``app-log-YYYY-MM-DD.log`` file in that directory.
    """
    # Set up basic logging format
    logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # Create logger
    logger = logging.getLogger('mediasweep')

    # Set log level based on verbosity
    if verbose_level == 0:
        log_level = logging.INFO
    elif verbose_level == 1:
        log_level = VERBOSE
    else:
        log_level = logging.DEBUG

    logger.setLevel(log_level)

    if log_dir is not None:
        ensure_dir(log_dir)
        log_file = log_dir / f"app-log-{datetime.now():%Y-%m-%d}.log"
        if not any(getattr(h, 'baseFilename', None) == str(log_file.absolute())
                   for h in logger.handlers):
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
            logger.addHandler(file_handler)

    if verbose_level >= 1:
        logger.log(VERBOSE, "Verbose logging enabled")
        if verbose_level >= 2:
            logger.debug("Debug logging enabled")

    return logger

def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024:
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.2f} PB"

def find_files(directory: Path,
               extensions: Set[str],
               logger: logging.Logger = None) -> List[Path]:
    """Find files with the given extensions directly inside ``directory``.

    Files are returned in directory-listing order, which is what the
    duplicate grouping pass iterates over.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info(f"Scanning directory: {directory}")

    found_files = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_file() and Path(entry.name).suffix.lower() in extensions:
                found_files.append(Path(entry.path))

    logger.debug(f"Found {len(found_files)} files in {directory}: "
                 f"{', '.join(str(p) for p in found_files)}")
    return found_files

def ensure_dir(path: Path) -> Path:
    """Ensure directory exists, create if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path

def get_timestamp(now: Optional[datetime] = None) -> str:
    """Timestamp used in report file names (``YYYYMMDD-HHMMSS``)."""
    return (now or datetime.now()).strftime('%Y%m%d-%H%M%S')

def relative_to(path: Path, base: Path) -> str:
    """Path relative to ``base`` with forward slashes, or the path itself."""
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return str(path)

# Constants
VERSION = "1.0.0"

# Common file extensions
IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.webp', '.gif'}

VIDEO_EXTENSIONS = {'.mp4', '.webm'}
