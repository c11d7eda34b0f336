"""
Image sources.

This module provides the pieces that find images and remember what is known
about them:
- Local directory walking (junk-aware, MIME-filtered)
- The on-disk metadata cache

Each source yields plain paths or ImageMetadata records for the scan pipeline.
"""

from .cache import CacheStore, default_cache_dir
from .junk import is_junk
from .local import is_image_path, iter_image_paths

__all__ = [
    "CacheStore",
    "default_cache_dir",
    "is_junk",
    "is_image_path",
    "iter_image_paths",
]
