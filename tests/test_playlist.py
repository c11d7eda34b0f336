"""Tests for the playlist writer."""

from pathlib import Path

import pytest

from playlist import PlaylistWriter, format_header, format_image_line


class TestFormatHeader:
    def test_starts_with_format_marker(self):
        assert format_header(1920, 1080).startswith("# Slide Show Sequence v2\n")

    def test_window_size_and_timing(self):
        header = format_header(1280, 720)
        lines = header.splitlines()
        assert "WinWidth = 1280" in lines
        assert "WinHeight = 720" in lines
        assert "Timer = 2" in lines
        assert "EffectDuration = 1000" in lines
        assert "Info = {Filename}" in lines
        assert header.endswith("\n")


class TestFormatImageLine:
    def test_plain_path(self):
        assert format_image_line(Path("/photos/a.jpg")) == '"/photos/a.jpg"\n'

    def test_escapes_quotes_and_backslashes(self):
        assert format_image_line('/photos/say "hi"\\x.jpg') == '"/photos/say \\"hi\\"\\\\x.jpg"\n'

    def test_unicode_kept(self):
        assert format_image_line("/photos/été.jpg") == '"/photos/été.jpg"\n'


class TestPlaylistWriter:
    def test_writes_header_then_paths(self, tmp_path):
        target = tmp_path / "out" / "show.sls"
        with PlaylistWriter(target) as writer:
            writer.write_header(800, 600)
            writer.write_image_path(Path("/photos/a.jpg"))
            writer.write_image_path(Path("/photos/b.jpg"))

        text = target.read_text(encoding="utf-8")
        assert text.startswith(format_header(800, 600))
        assert text.endswith('"/photos/a.jpg"\n"/photos/b.jpg"\n')
        assert writer.count == 2

    def test_truncates_existing_file(self, tmp_path):
        target = tmp_path / "show.sls"
        target.write_text("old content\n" * 10)
        with PlaylistWriter(target) as writer:
            writer.write_header(800, 600)

        assert target.read_text(encoding="utf-8") == format_header(800, 600)

    def test_write_outside_context_fails(self, tmp_path):
        writer = PlaylistWriter(tmp_path / "show.sls")
        with pytest.raises(RuntimeError):
            writer.write_image_path(Path("/photos/a.jpg"))
