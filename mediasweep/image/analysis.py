"""
Core image analysis functionality.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from tqdm import tqdm

from ..common.grouping import find_duplicates
from ..common.imaging import KeyframeComparator, NormalizedImage
from ..common.models import ComparisonConfig, DuplicateGroup
from ..common.utils import find_files, IMAGE_EXTENSIONS
from .models import ImageFile

logger = logging.getLogger(__name__)

def find_image_files(directory: Path) -> List[ImageFile]:
    """Find all image files in the directory, in listing order."""
    paths = find_files(directory, IMAGE_EXTENSIONS, logger)
    return [ImageFile(path) for path in paths]

class ImageMatcher:
    """Decides whether two image files show the same picture.

    The normalised pixels of the most recent seed are kept so that a seed
    is decoded once per grouping round instead of once per comparison.
    """

    def __init__(self, comparator: Optional[KeyframeComparator] = None,
                 config: Optional[ComparisonConfig] = None):
        self.config = config or ComparisonConfig()
        self.comparator = comparator or KeyframeComparator(self.config)
        self._cache: Dict[Path, NormalizedImage] = {}

    def _normalized(self, image: ImageFile, keep: bool) -> Optional[NormalizedImage]:
        if image.path in self._cache:
            return self._cache[image.path]
        try:
            normalized = self.comparator.normalize(image.load())
        except OSError as e:
            logger.error(f"Image comparison failed for {image.path}: {e}")
            return None
        if keep:
            self._cache.clear()
            self._cache[image.path] = normalized
        return normalized

    def are_identical(self, image1: ImageFile, image2: ImageFile) -> bool:
        logger.debug(f"Comparing images: {image1.path} vs {image2.path}")
        normalized1 = self._normalized(image1, keep=True)
        if normalized1 is None:
            return False
        normalized2 = self._normalized(image2, keep=False)
        if normalized2 is None:
            return False
        return self.comparator.compare_normalized(normalized1, normalized2)

def analyze_images(image_files: Sequence[ImageFile],
                   matcher: ImageMatcher,
                   show_progress: bool = True) -> List[DuplicateGroup]:
    """Main analysis pipeline to find duplicate images."""
    logger.info(f"Processing {len(image_files)} image files for duplicates")

    with tqdm(total=len(image_files), desc="Comparing images", disable=not show_progress) as pbar:
        duplicate_groups = find_duplicates(
            image_files,
            matcher.are_identical,
            strict=matcher.config.strict_groups,
            progress_callback=lambda: pbar.update(1)
        )

    logger.debug(f"Analysis complete: {len(duplicate_groups)} duplicate groups found")
    return duplicate_groups
