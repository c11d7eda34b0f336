"""
Core data types for slideshow image selection.

This module defines the metadata record produced for every scanned image and
the cache key derived from an image path. Other modules reference these as
the "anchor" types of the pipeline.
"""

from __future__ import annotations

import hashlib
import os
from datetime import date, datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


def compute_cache_key(path: str | Path) -> str:
    """Compute the cache key for an image path.

    The key depends on the path string only, never on the file contents or
    timestamps, so an edited or replaced file keeps its old cache entry.

    Args:
        path: Image file path, as produced by the directory walker

    Returns:
        32-character hex string (MD5 of the path's filesystem bytes)
    """
    return hashlib.md5(os.fsencode(path)).hexdigest()


class ImageMetadata(BaseModel):
    """Resolved metadata for a single image.

    Instances are immutable. They are either computed fresh by the resolver
    or reconstituted from a cache entry, and serialize to the cache entry
    format with ``model_dump_json()``.

    Attributes:
        path: Image file path (identity key for caching)
        width: Decoded pixel width
        height: Decoded pixel height
        creation_date_time: Earliest known creation moment, naive local time
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    creation_date_time: datetime

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def creation_date(self) -> date:
        return self.creation_date_time.date()
