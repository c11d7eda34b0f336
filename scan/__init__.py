"""Scanning service package."""

from .pipeline import iter_metadata
from .resolver import MetadataResolver
from .service import build_all, build_slideshow, run_build, run_scan, scan_directories

__all__ = [
    "MetadataResolver",
    "build_all",
    "build_slideshow",
    "iter_metadata",
    "run_build",
    "run_scan",
    "scan_directories",
]
