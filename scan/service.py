"""Scan service entrypoints for reuse across CLI commands."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import aclosing
from pathlib import Path
from typing import AsyncIterator, Callable, Iterable

import config
from photo import ImageMetadata
from playlist import PlaylistWriter
from settings import Config, SlideshowConfig
from sources import CacheStore, iter_image_paths

from .pipeline import iter_metadata
from .resolver import MetadataResolver

logger = logging.getLogger(__name__)


async def scan_directories(
    image_dirs: Iterable[str | Path],
    cache: CacheStore,
    concurrency: int = config.DEFAULT_CONCURRENCY,
    executor: Executor | None = None,
) -> AsyncIterator[ImageMetadata]:
    """Yield metadata for every image under ``image_dirs``, in completion order."""
    resolver = MetadataResolver(cache, executor=executor)
    records = iter_metadata(iter_image_paths(image_dirs), resolver.resolve, concurrency)
    async with aclosing(records):
        async for metadata in records:
            yield metadata


async def build_slideshow(
    slideshow: SlideshowConfig,
    cache: CacheStore,
    concurrency: int = config.DEFAULT_CONCURRENCY,
    executor: Executor | None = None,
) -> dict:
    """Write one playlist with every image accepted by the slideshow's filters.

    The first resolution error aborts the slideshow; the playlist is left
    with whatever was written before it.
    """
    stats = {
        "path": str(slideshow.path),
        "images_found": 0,
        "images_selected": 0,
    }
    logger.info("Building slideshow %s", slideshow.path)
    with PlaylistWriter(slideshow.path) as writer:
        writer.write_header(slideshow.width, slideshow.height)
        records = scan_directories(slideshow.image_dirs, cache, concurrency, executor)
        async with aclosing(records):
            async for metadata in records:
                stats["images_found"] += 1
                if slideshow.accepts(metadata):
                    writer.write_image_path(metadata.path)
        stats["images_selected"] = writer.count

    logger.info(
        "Wrote %s: %s of %s images selected",
        slideshow.path, stats["images_selected"], stats["images_found"],
    )
    return stats


async def build_all(
    settings: Config,
    cache: CacheStore,
    concurrency: int = config.DEFAULT_CONCURRENCY,
) -> list[dict]:
    """Build every configured slideshow in turn, sharing one decode pool."""
    results = []
    with ThreadPoolExecutor(thread_name_prefix="decode") as executor:
        for slideshow in settings.slideshows:
            results.append(await build_slideshow(slideshow, cache, concurrency, executor))
    return results


def run_build(
    settings: Config,
    cache: CacheStore,
    concurrency: int = config.DEFAULT_CONCURRENCY,
) -> list[dict]:
    """Synchronous wrapper around build_all for the CLI."""
    if not settings.slideshows:
        logger.warning("No slideshows configured.")
        return []
    return asyncio.run(build_all(settings, cache, concurrency))


def run_scan(
    image_dirs: Iterable[str | Path],
    cache: CacheStore,
    on_record: Callable[[ImageMetadata], None],
    concurrency: int = config.DEFAULT_CONCURRENCY,
) -> int:
    """Resolve every image under ``image_dirs``, passing each record to ``on_record``.

    Returns:
        Number of records produced.
    """

    async def _scan() -> int:
        count = 0
        with ThreadPoolExecutor(thread_name_prefix="decode") as executor:
            records = scan_directories(image_dirs, cache, concurrency, executor)
            async with aclosing(records):
                async for metadata in records:
                    on_record(metadata)
                    count += 1
        return count

    return asyncio.run(_scan())
