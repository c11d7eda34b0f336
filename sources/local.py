"""
Local directory image scanning.

Walks directory trees depth-first and yields every file that is not junk and
looks like an image by its MIME type.
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import os
from pathlib import Path
from typing import AsyncIterator, Iterable

from .junk import is_junk

logger = logging.getLogger(__name__)

# Image types missing from some platforms' MIME tables
EXTRA_IMAGE_TYPES = {
    ".webp": "image/webp",
    ".heic": "image/heic",
    ".heif": "image/heif",
    ".avif": "image/avif",
}

for _ext, _mime in EXTRA_IMAGE_TYPES.items():
    mimetypes.add_type(_mime, _ext)


def is_image_path(path: str | Path) -> bool:
    """Check if a path's guessed MIME type is in the ``image`` category."""
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type is not None and mime_type.split("/", 1)[0] == "image"


def _list_directory(directory: Path) -> list[tuple[Path, bool]]:
    """Read one directory, returning (path, is_directory) for each entry.

    Symlinked directories are reported as non-directories so that link
    cycles cannot make the walk endless.
    """
    with os.scandir(directory) as entries:
        return [
            (Path(entry.path), entry.is_dir(follow_symlinks=False))
            for entry in entries
        ]


async def iter_image_paths(roots: Iterable[str | Path]) -> AsyncIterator[Path]:
    """Yield image files found under the given root directories.

    Directories are expanded lazily from an explicit stack, so only the
    pending directories and the entries of the one being read are held in
    memory. Traversal order is unspecified.

    Args:
        roots: Directories to scan recursively.

    Yields:
        Paths of non-junk files with an ``image/*`` MIME type.

    Raises:
        OSError: If any directory cannot be read. The walk stops there.
    """
    dir_stack = [Path(root) for root in roots]
    while dir_stack:
        directory = dir_stack.pop()
        logger.debug("Reading directory %s", directory)
        entries = await asyncio.to_thread(_list_directory, directory)
        for entry_path, is_dir in entries:
            if is_junk(entry_path):
                continue
            if is_dir:
                dir_stack.append(entry_path)
            elif is_image_path(entry_path):
                yield entry_path
