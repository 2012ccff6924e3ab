"""
Keyframe normalisation and comparison.

Two stills are compared by first shrinking both into the same bounding box
with an alpha channel, then checking an md5 of the raw buffers, and only
when those differ counting perceptually different pixels.
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from PIL import Image
from pixelmatch import pixelmatch

from .errors import ComparisonToolUnavailable
from .models import ComparisonConfig

logger = logging.getLogger(__name__)

@dataclass
class NormalizedImage:
    """Raw pixel buffer of a normalised image."""
    data: bytes
    width: int
    height: int
    channels: int
    digest: str

    @property
    def shape(self):
        return (self.width, self.height, self.channels)

def normalize_image(image: Image.Image,
                    max_width: int = 800,
                    max_height: int = 533) -> NormalizedImage:
    """Fit ``image`` inside ``max_width`` x ``max_height`` as raw RGBA.

    Aspect ratio is preserved and images are never enlarged.
    """
    normalized = image.convert('RGBA')
    normalized.thumbnail((max_width, max_height), Image.LANCZOS)
    data = normalized.tobytes()
    return NormalizedImage(
        data=data,
        width=normalized.width,
        height=normalized.height,
        channels=len(normalized.getbands()),
        digest=hashlib.md5(data).hexdigest(),
    )

def count_different_pixels(image1: NormalizedImage,
                           image2: NormalizedImage,
                           threshold: float = 0.1) -> int:
    """Count perceptually different pixels with pixelmatch.

    ``threshold`` is on a 0..1 scale; smaller values are stricter.
    Anti-aliased pixels are not counted. Both images must be RGBA buffers
    of the same size.
    """
    if image1.shape != image2.shape:
        raise ValueError(f"Image sizes do not match: {image1.shape} vs {image2.shape}")
    if image1.channels != 4:
        raise ValueError(f"Expected 4 channels, got {image1.channels}")

    return pixelmatch(image1.data, image2.data, image1.width, image1.height,
                      threshold=threshold)

PixelDiff = Callable[[NormalizedImage, NormalizedImage, float], int]

class KeyframeComparator:
    """Decides whether two still images show the same content."""

    def __init__(self,
                 config: Optional[ComparisonConfig] = None,
                 pixel_diff: Optional[PixelDiff] = count_different_pixels):
        self.config = config or ComparisonConfig()
        self.pixel_diff = pixel_diff

    def normalize(self, image: Image.Image) -> NormalizedImage:
        return normalize_image(image, self.config.max_width, self.config.max_height)

    def are_equivalent(self, image1: Image.Image, image2: Image.Image, label: str = "") -> bool:
        """Normalise both images and compare them."""
        return self.compare_normalized(self.normalize(image1), self.normalize(image2), label)

    def compare_normalized(self, image1: NormalizedImage, image2: NormalizedImage,
                           label: str = "") -> bool:
        """Compare two already normalised images, cheapest check first."""
        prefix = f"{label}: " if label else ""
        logger.debug(f"{prefix}{image1.width}x{image1.height}x{image1.channels} vs "
                     f"{image2.width}x{image2.height}x{image2.channels}")

        if image1.shape != image2.shape:
            logger.debug(f"{prefix}images differ in dimensions or channels")
            return False

        logger.debug(f"{prefix}hashes {image1.digest} vs {image2.digest}")
        if image1.digest == image2.digest:
            logger.debug(f"{prefix}identical by hash")
            return True

        try:
            diff_pixels = self._count_differences(image1, image2)
        except ComparisonToolUnavailable as e:
            logger.error(f"{prefix}{e}, treating images as different")
            return False

        logger.debug(f"{prefix}{diff_pixels} differing pixels "
                     f"(limit {self.config.pixel_threshold})")
        return diff_pixels < self.config.pixel_threshold

    def _count_differences(self, image1: NormalizedImage, image2: NormalizedImage) -> int:
        if self.pixel_diff is None:
            raise ComparisonToolUnavailable("No perceptual pixel diff function available")
        return self.pixel_diff(image1, image2, self.config.color_threshold)
