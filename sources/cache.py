"""
Image metadata cache.

One JSON file per image path, named after the MD5 of the path, under the
platform cache directory. Entries are written once and never updated,
evicted or validated against the file they describe.
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles
from platformdirs import user_cache_dir
from pydantic import ValidationError

from config import APP_NAME, CACHE_EXTENSION
from errors import CacheDirectoryUnavailableError
from photo import ImageMetadata, compute_cache_key

logger = logging.getLogger(__name__)


def default_cache_dir(app_name: str = APP_NAME) -> Path:
    """Return the platform cache directory for the application."""
    return Path(user_cache_dir(app_name, appauthor=False))


class CacheStore:
    """Persistent map from image path to ImageMetadata.

    Construct with an existing directory, or use ``CacheStore.open()`` to
    resolve and create the platform cache directory. There is no teardown.

    Concurrent writers to the same key are not coordinated; the pipeline
    resolves each path at most once per run.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    @classmethod
    def open(cls, root: Path | None = None, app_name: str = APP_NAME) -> CacheStore:
        """Create the cache directory if needed and return a store for it.

        Args:
            root: Explicit cache directory (default: platform cache dir)
            app_name: Application name used for the platform directory

        Raises:
            CacheDirectoryUnavailableError: If the directory cannot be
                determined or created.
        """
        try:
            cache_root = Path(root) if root is not None else default_cache_dir(app_name)
        except Exception as exc:
            raise CacheDirectoryUnavailableError(str(exc)) from exc
        try:
            cache_root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheDirectoryUnavailableError(f"{cache_root}: {exc}") from exc
        logger.debug("Using metadata cache at %s", cache_root)
        return cls(cache_root)

    def cache_path(self, path: str | Path) -> Path:
        """Location of the cache entry for an image path."""
        return self.root / f"{compute_cache_key(path)}{CACHE_EXTENSION}"

    async def get(self, path: str | Path) -> ImageMetadata | None:
        """Load cached metadata for a path.

        Returns:
            The cached record, or None on a miss. Unreadable or malformed
            entries are logged and treated as a miss.
        """
        cache_path = self.cache_path(path)
        try:
            async with aiofiles.open(cache_path, "rb") as f:
                data = await f.read()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Failed to read cache file %s: %s", cache_path, exc)
            return None

        try:
            return ImageMetadata.model_validate_json(data)
        except ValidationError as exc:
            logger.warning("Failed to parse cache file %s: %s", cache_path, exc)
            return None

    async def put(self, metadata: ImageMetadata) -> None:
        """Write the cache entry for a record, replacing any existing file."""
        cache_path = self.cache_path(metadata.path)
        async with aiofiles.open(cache_path, "w", encoding="utf-8") as f:
            await f.write(metadata.model_dump_json())
