"""Shared fixtures: synthetic JPEGs with EXIF dates and an isolated cache."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import piexif
import pytest
from PIL import Image

from sources import CacheStore


def exif_bytes(
    original: str | None = None,
    digitized: str | None = None,
    modified: str | None = None,
) -> bytes:
    """Build an EXIF block with the given date tags ("YYYY:MM:DD HH:MM:SS")."""
    exif = {"0th": {}, "Exif": {}}
    if modified is not None:
        exif["0th"][piexif.ImageIFD.DateTime] = modified.encode()
    if original is not None:
        exif["Exif"][piexif.ExifIFD.DateTimeOriginal] = original.encode()
    if digitized is not None:
        exif["Exif"][piexif.ExifIFD.DateTimeDigitized] = digitized.encode()
    return piexif.dump(exif)


def make_jpeg(
    path: Path,
    size: tuple[int, int] = (64, 48),
    exif: bytes | None = None,
    mtime: datetime | None = None,
) -> Path:
    """Write a solid-color JPEG, optionally with EXIF and a fixed mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.new("RGB", size, color=(200, 120, 40))
    if exif is not None:
        image.save(path, "JPEG", exif=exif)
    else:
        image.save(path, "JPEG")
    if mtime is not None:
        timestamp = mtime.timestamp()
        os.utime(path, (timestamp, timestamp))
    return path


@pytest.fixture
def cache(tmp_path) -> CacheStore:
    return CacheStore.open(tmp_path / "cache")


@pytest.fixture
def photos_dir(tmp_path) -> Path:
    directory = tmp_path / "photos"
    directory.mkdir()
    return directory


@pytest.fixture(name="make_jpeg")
def make_jpeg_fixture():
    return make_jpeg


@pytest.fixture(name="exif_bytes")
def exif_bytes_fixture():
    return exif_bytes
