"""Slideshow playlist writer ("Slide Show Sequence v2" format)."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from config import EFFECT_DURATION_MS, SLIDE_TIMER_SECONDS

HEADER_TEMPLATE = """# Slide Show Sequence v2
UseTimer = 1
Timer = {timer}
Loop = 1
FullScreen = 0
WinWidth = {width}
WinHeight = {height}
Stretch = 1
RandomOrder = 1
ShowInfo = 1
Info = {{Filename}}
TitleBar = 1
OnTop = 1
CursorAutoHide = 0
BackgroundColor = 0 0 0 255
TextColor = 255 255 255 255
UseTextBackColor = 0
TextPosition = 0
TextBackColor = 128 128 128 255
Opacity = 100
Font = Sans Serif,9,-1,5,50,0,0,0,0,0
EffectDuration = {effect_duration}
"""


def format_header(width: int, height: int) -> str:
    """Render the playlist header for a window of the given size."""
    return HEADER_TEMPLATE.format(
        timer=SLIDE_TIMER_SECONDS,
        width=width,
        height=height,
        effect_duration=EFFECT_DURATION_MS,
    )


def format_image_line(path: str | Path) -> str:
    """Quote an image path, escaping backslashes and double quotes."""
    text = str(path).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"\n'


class PlaylistWriter:
    """Writes one playlist file, truncating any previous content.

    Use as a context manager::

        with PlaylistWriter(path) as writer:
            writer.write_header(1920, 1080)
            writer.write_image_path(image_path)
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._file: TextIO | None = None
        self.count = 0

    def __enter__(self) -> PlaylistWriter:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "w", encoding="utf-8", newline="\n")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def _require_open(self) -> TextIO:
        if self._file is None:
            raise RuntimeError(f"Playlist {self.path} is not open")
        return self._file

    def write_header(self, width: int, height: int) -> None:
        self._require_open().write(format_header(width, height))

    def write_image_path(self, path: str | Path) -> None:
        self._require_open().write(format_image_line(path))
        self.count += 1
