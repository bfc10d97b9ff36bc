"""Tests for cursor_replay.settings — validation, dict conversion, persistence."""

import pytest
from PySide6.QtCore import QSettings

from cursor_replay.settings import (
    DEFAULT_SETTINGS,
    RANGES,
    OverlaySettings,
    load_settings,
    save_settings,
)


class TestValidated:
    def test_defaults_unchanged(self) -> None:
        assert DEFAULT_SETTINGS.validated() is DEFAULT_SETTINGS

    def test_default_values(self) -> None:
        s = DEFAULT_SETTINGS
        assert (s.zoom, s.margin, s.smoothing) == (0.8, 0.4, 0.08)
        assert (s.opacity, s.point_size, s.trail_length) == (0.8, 8.0, 20)
        assert s.fade_timeout == 1.0
        assert s.follow_cursor and not s.hide_when_still

    @pytest.mark.parametrize("name", sorted(RANGES))
    def test_clamps_each_field(self, name: str) -> None:
        lo, hi = RANGES[name]
        low = OverlaySettings(**{name: lo - 100}).validated()
        high = OverlaySettings(**{name: hi + 100}).validated()
        assert getattr(low, name) == lo
        assert getattr(high, name) == hi

    def test_trail_length_rounded(self) -> None:
        s = OverlaySettings(trail_length=3.6).validated()  # type: ignore[arg-type]
        assert s.trail_length == 4
        assert isinstance(s.trail_length, int)

    def test_logs_warning(self, caplog) -> None:
        with caplog.at_level("WARNING"):
            OverlaySettings(opacity=2.0).validated()
        assert "opacity" in caplog.text


class TestDictConversion:
    def test_round_trip(self) -> None:
        s = OverlaySettings(opacity=0.5, zoom=2.0, follow_cursor=False)
        assert OverlaySettings.from_dict(s.to_dict()) == s

    def test_unknown_keys_ignored(self) -> None:
        s = OverlaySettings.from_dict({"zoom": 1.5, "futureField": 42})
        assert s.zoom == 1.5

    def test_from_dict_validates(self) -> None:
        assert OverlaySettings.from_dict({"margin": 1.5}).margin == 0.95


class TestPersistence:
    def test_empty_store_gives_defaults(self, tmp_path, qt_app) -> None:
        qs = QSettings(str(tmp_path / "empty.ini"), QSettings.Format.IniFormat)
        assert load_settings(qs) == DEFAULT_SETTINGS

    def test_save_and_load(self, tmp_path, qt_app) -> None:
        path = str(tmp_path / "overlay.ini")
        saved = OverlaySettings(
            opacity=0.5, trail_length=42, hide_when_still=True,
            time_offset=-1.5, zoom=2.0, follow_cursor=False,
        )
        qs = QSettings(path, QSettings.Format.IniFormat)
        save_settings(qs, saved)
        qs.sync()

        loaded = load_settings(QSettings(path, QSettings.Format.IniFormat))
        assert loaded == saved
