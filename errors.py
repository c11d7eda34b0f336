"""Error definitions for metadata resolution, caching and configuration."""

from __future__ import annotations

from pathlib import Path


class SlidepickError(Exception):
    """Base class for all slidepick errors."""


# ============================================================================
#                       Metadata resolution errors
# ============================================================================


class ExifValueError(SlidepickError):
    """Raised when an EXIF date tag is present but carries no usable value."""

    def __init__(self, path: Path, tag: str) -> None:
        super().__init__(f"Failed to get exif value: {path} {tag}")
        self.path = path
        self.tag = tag


class ExifTimeError(SlidepickError):
    """Raised when an EXIF date tag value cannot be parsed as a date-time."""

    def __init__(self, path: Path, tag: str, raw_value: str) -> None:
        super().__init__(f"Failed to get exif time: {path} {tag} {raw_value!r}")
        self.path = path
        self.tag = tag
        self.raw_value = raw_value


class NoCreationDateError(SlidepickError):
    """Raised when no creation date candidate exists for a file."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"No creation date found: {path}")
        self.path = path


class SystemTimeConversionError(SlidepickError):
    """Raised when a filesystem timestamp cannot be expressed as local time."""

    def __init__(self, timestamp: float) -> None:
        super().__init__(f"Failed to convert system time to local time: {timestamp}")
        self.timestamp = timestamp


class ImageDecodeError(SlidepickError):
    """Raised when an image cannot be decoded to read its dimensions."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Failed to decode image: {path}")
        self.path = path


# ============================================================================
#                       Cache and configuration errors
# ============================================================================


class CacheDirectoryUnavailableError(SlidepickError):
    """Raised when the cache directory cannot be determined or created."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to get cache dir: {reason}")
        self.reason = reason


class ConfigError(SlidepickError):
    """Raised when the slideshow configuration is missing or invalid."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid config {path}: {reason}")
        self.path = path
        self.reason = reason
