"""Bounded-concurrency metadata pipeline.

Feeds image paths through a resolver with at most ``concurrency``
resolutions in flight and yields the records as they complete.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, Awaitable, Callable

import config
from photo import ImageMetadata

logger = logging.getLogger(__name__)

ResolveFunc = Callable[[Path], Awaitable[ImageMetadata]]


async def _drain(pending: set[asyncio.Task]) -> None:
    """Wait for in-flight resolutions to finish, discarding their results."""
    if not pending:
        return
    logger.debug("Waiting for %s in-flight resolutions", len(pending))
    results = await asyncio.gather(*pending, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            logger.debug("Discarded failed resolution: %s", result)


async def iter_metadata(
    paths: AsyncIterator[Path],
    resolve: ResolveFunc,
    concurrency: int = config.DEFAULT_CONCURRENCY,
) -> AsyncIterator[ImageMetadata]:
    """Resolve paths concurrently, yielding records in completion order.

    A new path is pulled from ``paths`` only when a slot is free, so at most
    ``concurrency`` resolutions (and open files) exist at any time however
    large the tree is. Output order has no relation to input order.

    The first failure is raised from the iterator. No further paths are
    pulled after that, and resolutions already running are awaited to
    completion (their cache writes included) before the error propagates.
    The same drain happens when the consumer stops iterating early or when
    ``paths`` itself raises.

    Args:
        paths: Async iterator of image paths (e.g. from iter_image_paths)
        resolve: Coroutine function producing metadata for one path
        concurrency: Maximum number of resolutions in flight

    Yields:
        ImageMetadata records as their resolutions complete.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")

    pending: set[asyncio.Task] = set()
    exhausted = False
    try:
        while True:
            while not exhausted and len(pending) < concurrency:
                try:
                    path = await paths.__anext__()
                except StopAsyncIteration:
                    exhausted = True
                    break
                pending.add(asyncio.ensure_future(resolve(path)))

            if not pending:
                return

            done, pending = await asyncio.wait(
                pending, return_when=asyncio.FIRST_COMPLETED
            )
            errors = [task.exception() for task in done]
            failures = [error for error in errors if error is not None]
            if failures:
                raise failures[0]
            for task in done:
                yield task.result()
    finally:
        await _drain(pending)
        aclose = getattr(paths, "aclose", None)
        if aclose is not None:
            await aclose()
