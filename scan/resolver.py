"""Creation date and dimension resolution for a single image.

The creation date of an image is the earliest of every timestamp known for
it: the filesystem birth time (where the platform records one), the
modification time, and the EXIF DateTimeOriginal, CreateDate and ModifyDate
tags. Copies and edits tend to reset filesystem times while cameras that
lack a clock leave EXIF dates out, so the oldest value wins.
"""

from __future__ import annotations

import asyncio
import logging
import re
from concurrent.futures import Executor
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import aiofiles.os
from PIL import ExifTags, Image

import config
from errors import (
    ExifTimeError,
    ExifValueError,
    ImageDecodeError,
    NoCreationDateError,
    SystemTimeConversionError,
)
from photo import ImageMetadata
from sources.cache import CacheStore

logger = logging.getLogger(__name__)

# "2020:01:01 12:00:00", optionally with fractional seconds and an offset.
# Dashes are accepted in the date part for files written by lenient tools.
EXIF_DATETIME_PATTERN = re.compile(
    r"^(\d{4})[:-](\d{2})[:-](\d{2})[ T](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.\d+)?"
    r"(Z|[+-]\d{2}:?\d{2})?$"
)

EXIF_OFFSET_PATTERN = re.compile(r"^(Z|[+-]\d{2}:?\d{2})$")

# Pillow decode failures; OSError also covers truncated data and unknown formats
DECODE_ERRORS = (OSError, SyntaxError, ValueError, Image.DecompressionBombError)

# Raised unchanged rather than reported as EXIF or decode problems
FILE_ACCESS_ERRORS = (FileNotFoundError, PermissionError)


# =============================================================================
# Filesystem timestamps
# =============================================================================


def local_datetime_from_timestamp(timestamp: float) -> datetime:
    """Convert a POSIX timestamp to a naive local date-time.

    Raises:
        SystemTimeConversionError: If the platform cannot represent it.
    """
    try:
        return datetime.fromtimestamp(timestamp)
    except (OverflowError, OSError, ValueError) as exc:
        raise SystemTimeConversionError(timestamp) from exc


def filesystem_candidates(stat_result: Any) -> list[datetime]:
    """Creation date candidates from a stat result.

    Birth time is only reported by some platforms (macOS, BSD, Windows);
    elsewhere the modification time is the only filesystem candidate.
    """
    candidates = []
    birthtime = getattr(stat_result, "st_birthtime", None)
    if birthtime is not None:
        candidates.append(local_datetime_from_timestamp(birthtime))
    candidates.append(local_datetime_from_timestamp(stat_result.st_mtime))
    return candidates


# =============================================================================
# EXIF timestamps
# =============================================================================


def _exif_text(value: Any) -> str | None:
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="replace")
    if isinstance(value, (tuple, list)) and len(value) == 1:
        value = value[0]
    if value is None:
        return None
    text = str(value).strip("\x00").strip()
    return text or None


def _parse_offset(offset: str) -> timezone:
    if offset == "Z":
        return timezone.utc
    sign = -1 if offset[0] == "-" else 1
    digits = offset[1:].replace(":", "")
    delta = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
    return timezone(sign * delta)


def parse_exif_datetime(
    path: Path,
    tag: str,
    value: Any,
    offset: Any = None,
) -> datetime:
    """Parse an EXIF date tag value into a naive local date-time.

    Values without an offset are camera wall-clock time and are taken as
    local time unchanged. With an offset (inline or from the matching
    OffsetTime* tag) the value is converted to the local timezone.

    Args:
        path: Image path, for error reporting
        tag: Tag name, for error reporting
        value: Raw tag value as returned by Pillow
        offset: Raw value of the matching offset tag, if any

    Raises:
        ExifValueError: If the tag carries no value.
        ExifTimeError: If the value is not a valid EXIF date-time.
    """
    text = _exif_text(value)
    if text is None:
        raise ExifValueError(path, tag)

    match = EXIF_DATETIME_PATTERN.match(text)
    if not match:
        raise ExifTimeError(path, tag, text)
    try:
        parsed = datetime(*(int(group) for group in match.groups()[:6]))
    except ValueError as exc:
        raise ExifTimeError(path, tag, text) from exc

    offset_text = match.group(7) or _exif_text(offset)
    if offset_text is None:
        return parsed
    if not EXIF_OFFSET_PATTERN.match(offset_text):
        logger.warning(
            "Ignoring malformed exif offset for %s in %s: %r", tag, path, offset_text
        )
        return parsed
    aware = parsed.replace(tzinfo=_parse_offset(offset_text))
    return aware.astimezone().replace(tzinfo=None)


def exif_candidates(path: Path, exif: Image.Exif) -> list[datetime]:
    """Creation date candidates from every date tag present in the EXIF data."""
    exif_ifd = exif.get_ifd(ExifTags.IFD.Exif)
    candidates = []
    for tag_id, tag_name in config.EXIF_DATE_TAG_NAMES.items():
        offset_id = config.EXIF_OFFSET_TAGS[tag_id]
        for ifd in (exif, exif_ifd):
            if tag_id not in ifd:
                continue
            offset = exif_ifd.get(offset_id, ifd.get(offset_id))
            candidates.append(parse_exif_datetime(path, tag_name, ifd[tag_id], offset))
    return candidates


def read_exif_dates(path: Path) -> list[datetime]:
    """Read EXIF date candidates from an image file.

    A file whose EXIF block cannot be parsed at all yields no candidates and
    a warning; individual bad date tags raise.
    """
    try:
        with Image.open(path) as image:
            # JPEG open already tries (and silently gives up on) the EXIF
            # block, so parse the raw bytes on a fresh Exif to see failures.
            raw_exif = image.info.get("exif")
            if raw_exif:
                exif = Image.Exif()
                exif.load(raw_exif)
            else:
                exif = image.getexif()
            exif.get_ifd(ExifTags.IFD.Exif)
    except FILE_ACCESS_ERRORS:
        raise
    except Exception as exc:
        logger.warning("Failed to parse exif, ignore exif info: %s: %s", path, exc)
        return []
    return exif_candidates(path, exif)


# =============================================================================
# Dimensions
# =============================================================================


def read_image_size(path: Path) -> tuple[int, int]:
    """Fully decode an image and return its (width, height)."""
    try:
        with Image.open(path) as image:
            image.load()
            return image.size
    except FILE_ACCESS_ERRORS:
        raise
    except DECODE_ERRORS as exc:
        raise ImageDecodeError(path) from exc


def earliest_candidate(path: Path, candidates: list[datetime]) -> datetime:
    """Pick the resolved creation date-time from the gathered candidates."""
    if not candidates:
        raise NoCreationDateError(path)
    return min(candidates)


class MetadataResolver:
    """Resolve ImageMetadata for image paths, backed by a CacheStore.

    Decoding is CPU-bound and runs on ``executor`` (the event loop's default
    executor when None); file reads run in worker threads. A cache hit
    returns the stored record without touching the image file.
    """

    def __init__(self, cache: CacheStore, executor: Executor | None = None):
        self.cache = cache
        self.executor = executor

    async def resolve(self, path: str | Path) -> ImageMetadata:
        """Return metadata for one image, computing and caching it on a miss.

        Raises:
            ExifValueError, ExifTimeError: For unusable EXIF date tags.
            NoCreationDateError: If no timestamp candidate exists.
            SystemTimeConversionError: If a file time has no local equivalent.
            ImageDecodeError: If the image cannot be decoded.
            OSError: If the file cannot be read or the cache entry written.
        """
        path = Path(path)
        cached = await self.cache.get(path)
        if cached is not None:
            logger.debug("Cache hit: %s", path)
            return cached

        stat_result = await aiofiles.os.stat(path)
        candidates = filesystem_candidates(stat_result)
        candidates.extend(await asyncio.to_thread(read_exif_dates, path))
        creation_date_time = earliest_candidate(path, candidates)

        loop = asyncio.get_running_loop()
        width, height = await loop.run_in_executor(self.executor, read_image_size, path)

        metadata = ImageMetadata(
            path=path,
            width=width,
            height=height,
            creation_date_time=creation_date_time,
        )
        await self.cache.put(metadata)
        logger.debug(
            "Resolved %s: %sx%s created %s",
            path, width, height, creation_date_time.isoformat(),
        )
        return metadata
