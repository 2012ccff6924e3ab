"""
mediasweep - Duplicate Media Cleanup Tools

Finds videos and images that are copies of each other, even when they
were renamed or re-encoded, and optionally removes the extra copies.
"""

from .common.utils import VERSION

__version__ = VERSION
