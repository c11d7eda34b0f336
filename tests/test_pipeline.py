"""Tests for the bounded-concurrency metadata pipeline."""

from __future__ import annotations

import asyncio
from contextlib import aclosing
from datetime import datetime
from pathlib import Path

import pytest

from photo import ImageMetadata
from scan.pipeline import iter_metadata


def _metadata(path: Path) -> ImageMetadata:
    return ImageMetadata(
        path=path, width=4, height=3, creation_date_time=datetime(2020, 1, 1)
    )


class PathSource:
    """Async path iterator that records how many paths were pulled."""

    def __init__(self, count: int, fail_at: int | None = None):
        self.count = count
        self.fail_at = fail_at
        self.pulled = 0
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self) -> Path:
        if self.fail_at is not None and self.pulled == self.fail_at:
            raise PermissionError("walk failed")
        if self.pulled >= self.count:
            raise StopAsyncIteration
        self.pulled += 1
        return Path(f"img{self.pulled - 1}.jpg")

    async def aclose(self) -> None:
        self.closed = True


class Tracker:
    """Fake resolver recording concurrency and completion."""

    def __init__(self, delay: float = 0.01):
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0
        self.finished: list[Path] = []

    async def resolve(self, path: Path) -> ImageMetadata:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1
        self.finished.append(path)
        return _metadata(path)


async def _collect(records) -> list[ImageMetadata]:
    return [record async for record in records]


class TestIterMetadata:
    """Ordering, bounding and completeness."""

    @pytest.mark.asyncio
    async def test_yields_every_path_once(self):
        tracker = Tracker(delay=0)
        results = await _collect(iter_metadata(PathSource(10), tracker.resolve, 4))
        assert sorted(r.path.name for r in results) == sorted(f"img{i}.jpg" for i in range(10))

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self):
        tracker = Tracker()
        results = await _collect(iter_metadata(PathSource(20), tracker.resolve, 3))
        assert len(results) == 20
        assert tracker.max_in_flight == 3

    @pytest.mark.asyncio
    async def test_concurrency_of_one_is_sequential(self):
        tracker = Tracker(delay=0)
        results = await _collect(iter_metadata(PathSource(5), tracker.resolve, 1))
        assert [r.path.name for r in results] == [f"img{i}.jpg" for i in range(5)]
        assert tracker.max_in_flight == 1

    @pytest.mark.asyncio
    async def test_completion_order(self):
        """Fast resolutions are yielded before slow ones started earlier."""
        delays = {"img0.jpg": 0.2, "img1.jpg": 0.0}

        async def resolve(path):
            await asyncio.sleep(delays[path.name])
            return _metadata(path)

        results = await _collect(iter_metadata(PathSource(2), resolve, 2))
        assert [r.path.name for r in results] == ["img1.jpg", "img0.jpg"]

    @pytest.mark.asyncio
    async def test_empty_source(self):
        tracker = Tracker()
        assert await _collect(iter_metadata(PathSource(0), tracker.resolve, 2)) == []

    @pytest.mark.asyncio
    async def test_rejects_non_positive_concurrency(self):
        tracker = Tracker()
        with pytest.raises(ValueError):
            await _collect(iter_metadata(PathSource(1), tracker.resolve, 0))


class TestBackpressure:
    @pytest.mark.asyncio
    async def test_pulls_only_when_slot_free(self):
        release = asyncio.Event()
        source = PathSource(100)

        async def resolve(path):
            await release.wait()
            return _metadata(path)

        records = iter_metadata(source, resolve, 4)
        first = asyncio.ensure_future(records.__anext__())
        await asyncio.sleep(0.05)
        assert source.pulled == 4
        assert not first.done()

        release.set()
        await first
        await records.aclose()
        assert source.pulled < 100


class TestFailures:
    """The first error ends the stream after in-flight work settles."""

    @pytest.mark.asyncio
    async def test_first_error_stops_pulling(self):
        source = PathSource(50)
        finished = []

        async def resolve(path):
            if path.name == "img0.jpg":
                raise OSError("unreadable")
            await asyncio.sleep(0.05)
            finished.append(path)
            return _metadata(path)

        with pytest.raises(OSError, match="unreadable"):
            await _collect(iter_metadata(source, resolve, 3))

        # Only the initial window was pulled, and it ran to completion
        assert source.pulled == 3
        assert sorted(p.name for p in finished) == ["img1.jpg", "img2.jpg"]
        assert source.closed

    @pytest.mark.asyncio
    async def test_results_before_error_are_delivered(self):
        async def resolve(path):
            if path.name == "img2.jpg":
                await asyncio.sleep(0.05)
                raise OSError("late failure")
            return _metadata(path)

        seen = []
        with pytest.raises(OSError):
            async for record in iter_metadata(PathSource(3), resolve, 1):
                seen.append(record.path.name)
        assert seen == ["img0.jpg", "img1.jpg"]

    @pytest.mark.asyncio
    async def test_source_error_propagates(self):
        tracker = Tracker()
        source = PathSource(10, fail_at=5)
        with pytest.raises(PermissionError):
            await _collect(iter_metadata(source, tracker.resolve, 2))
        assert tracker.in_flight == 0

    @pytest.mark.asyncio
    async def test_consumer_stop_drains_in_flight(self):
        tracker = Tracker(delay=0.05)
        source = PathSource(20)
        records = iter_metadata(source, tracker.resolve, 4)
        async with aclosing(records):
            async for _ in records:
                break

        assert tracker.in_flight == 0
        assert source.closed
        assert source.pulled < 20
