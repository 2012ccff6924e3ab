"""
Image duplicate detection functionality.
"""

from ..common.utils import IMAGE_EXTENSIONS

__all__ = [
    'IMAGE_EXTENSIONS',
]
