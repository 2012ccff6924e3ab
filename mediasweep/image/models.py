"""
Image-specific data models.
"""

import logging
from dataclasses import dataclass

from PIL import Image

from ..common.models import MediaFile

logger = logging.getLogger(__name__)

@dataclass
class ImageFile(MediaFile):
    """Represents an image file on disk."""

    def load(self) -> Image.Image:
        """Decode the image fully into memory.

        Raises OSError (including PIL.UnidentifiedImageError) when the file
        cannot be read.
        """
        with Image.open(self.path) as img:
            img.load()
            return img.copy()
