"""
Common data models for media duplicate detection.
"""

from pathlib import Path
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple, Any
import logging

from . import utils

logger = logging.getLogger(__name__)

class DeletionPolicy(Enum):
    """What to do with the redundant members of each duplicate group."""
    NO = 'no'    # list only
    YES = 'yes'  # ask which member of each group to keep
    ALL = 'all'  # keep the first member of each group, delete the rest

    @classmethod
    def parse(cls, value: str) -> 'DeletionPolicy':
        """Parse a policy name case-insensitively."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid delete option: {value}. Must be 'yes', 'no', or 'all'."
            ) from None

@dataclass
class ComparisonConfig:
    """Thresholds used when deciding whether two files are duplicates."""
    duration_tolerance: float = 0.01  # seconds
    pixel_threshold: int = 200  # differing pixels allowed per keyframe
    color_threshold: float = 0.1  # per-pixel colour tolerance, 0..1
    max_width: int = 800
    max_height: int = 533
    short_video_seconds: float = 3.0
    long_positions: Tuple[float, ...] = (0.1, 0.5, 0.9)
    short_positions: Tuple[float, ...] = (0.5,)
    strict_groups: bool = False

@dataclass
class MediaFile:
    """Base class for media files (images and videos)."""
    path: Path
    size: int = 0

    def __post_init__(self):
        """Initialize size from path if not provided."""
        self.path = Path(self.path)
        if self.size == 0 and self.path.exists():
            self.size = self.path.stat().st_size

    def __str__(self):
        return str(self.path)

@dataclass
class DuplicateGroup:
    """Represents a group of duplicate media files.

    The first member is the seed the others were matched against.
    """
    files: List[MediaFile] = field(default_factory=list)

    def add_file(self, file: MediaFile):
        """Add a file to the duplicate group."""
        self.files.append(file)

    @property
    def seed(self) -> MediaFile:
        return self.files[0]

    @property
    def paths(self) -> List[Path]:
        return [f.path for f in self.files]

    def __len__(self):
        return len(self.files)

    def to_list(self, base_dir: Path) -> List[str]:
        """Member paths relative to ``base_dir`` for serialization."""
        return [utils.relative_to(f.path, base_dir) for f in self.files]

@dataclass
class Report:
    """The JSON document written once at the end of every run."""
    duplicate_groups: List[List[str]] = field(default_factory=list)
    deleted_files: List[str] = field(default_factory=list)
    timestamp: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'duplicateGroups': self.duplicate_groups,
            'deletedFiles': self.deleted_files,
            'timestamp': self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Report':
        """Create a Report instance from dictionary data."""
        return cls(
            duplicate_groups=[list(g) for g in data.get('duplicateGroups', [])],
            deleted_files=list(data.get('deletedFiles', [])),
            timestamp=data.get('timestamp', ''),
        )
