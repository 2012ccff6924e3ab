"""
Temporary storage for extracted keyframes.
"""

import secrets
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional
import logging

logger = logging.getLogger(__name__)

class RunTempDir:
    """A temporary directory that lives for one run.

    Each run gets its own randomly named directory, so concurrent runs
    never share keyframe files. The directory and everything in it is
    removed when the context exits, whether or not the run failed.
    """

    def __init__(self, parent: Optional[Path] = None, prefix: str = 'mediasweep_'):
        """Initialize the manager.

        Args:
            parent: Directory to create the run directory in. Defaults to the
                system temp directory.
            prefix: Prefix of the generated directory name.
        """
        self.parent = parent
        self.prefix = prefix
        self.path: Optional[Path] = None

    def create(self) -> Path:
        """Create the run directory."""
        if self.path is not None:
            return self.path

        if self.parent is not None:
            self.parent.mkdir(parents=True, exist_ok=True)
        self.path = Path(tempfile.mkdtemp(prefix=self.prefix,
                                          dir=str(self.parent) if self.parent else None))
        logger.debug(f"Created temporary directory: {self.path}")
        return self.path

    def cleanup(self) -> bool:
        """Remove the run directory recursively. Failures are only logged."""
        if self.path is None:
            return True

        try:
            shutil.rmtree(self.path)
            logger.debug(f"Removed temporary directory: {self.path}")
            return True
        except FileNotFoundError:
            return True
        except OSError as e:
            logger.debug(f"Failed to delete temp dir {self.path}: {e}")
            return False
        finally:
            self.path = None

    def __enter__(self) -> Path:
        """Context manager entry."""
        return self.create()

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.cleanup()

@contextmanager
def temporary_file(directory: Path, prefix: str = 'keyframe-', suffix: str = '.png') -> Iterator[Path]:
    """Yield a fresh file path in ``directory`` and remove the file afterwards.

    The file itself is not created; whatever ends up at the path is deleted
    on exit. A failed deletion is logged and does not raise.
    """
    path = directory / f"{prefix}{secrets.token_hex(8)}{suffix}"
    try:
        yield path
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.debug(f"Failed to delete temp file {path}: {e}")
