"""Tests for cursor_replay.utils — time formatting and file classification."""

import pytest

from cursor_replay.utils import classify_path, fmt_clock, fmt_size_mb, fmt_time


class TestFmtTime:
    def test_zero(self) -> None:
        assert fmt_time(0) == "00:00"

    def test_under_one_minute(self) -> None:
        assert fmt_time(5.9) == "00:05"

    def test_multi_minute(self) -> None:
        assert fmt_time(125) == "02:05"

    @pytest.mark.parametrize("value", [float("nan"), -3.0, None])
    def test_invalid(self, value) -> None:
        assert fmt_time(value) == "00:00"  # type: ignore[arg-type]


class TestFmtClock:
    def test_format(self) -> None:
        assert fmt_clock(61, 3600) == "01:01 / 60:00"


class TestClassifyPath:
    @pytest.mark.parametrize("path, kind", [
        ("clip.mp4", "video"),
        ("/a/b/CLIP.MOV", "video"),
        ("clip.webm", "video"),
        ("clip.input-events.json", "events"),
        ("events.txt", "events"),
        ("notes.md", ""),
        ("noext", ""),
    ])
    def test_classify(self, path: str, kind: str) -> None:
        assert classify_path(path) == kind


class TestFmtSizeMb:
    def test_existing(self, tmp_path) -> None:
        f = tmp_path / "x.bin"
        f.write_bytes(b"\0" * (1024 * 1024 * 2))
        assert fmt_size_mb(str(f)) == "2.0MB"

    def test_missing(self, tmp_path) -> None:
        assert fmt_size_mb(str(tmp_path / "missing.mp4")) == ""
