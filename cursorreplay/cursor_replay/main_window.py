"""Main application window — wires the video source, session and widgets."""

import logging
import os
from typing import List, Optional

logger = logging.getLogger(__name__)

from PySide6.QtCore import Qt, QTimer, QSettings, QByteArray
from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QPushButton,
    QLabel,
    QFileDialog,
    QSlider,
)

from .event_loader import EventFileError, load_events
from .media_source import VideoSource
from .playback import PlaybackSession
from .settings import OverlaySettings, load_settings, save_settings
from .debug_overlay import format_debug_info
from .surface import QImageSurface
from .theme import DARK_THEME
from .utils import classify_path, fmt_clock, fmt_size_mb
from .widgets.control_panel import ControlPanel
from .widgets.overlay_view import OverlayView


FRAME_INTERVAL_MS = 16   # ~60 fps frame loop
SEEK_STEPS = 1000        # seek slider resolution


class MainWindow(QMainWindow):
    """Top-level window: file loading, transport controls, preview, settings.

    Owns the single :class:`PlaybackSession`; the frame loop is a
    single-shot ``QTimer`` re-armed only while the video is playing.
    Persists window geometry and overlay settings via ``QSettings``.
    """

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("CursorReplay")
        self.setMinimumSize(900, 600)
        self.resize(1280, 800)
        self.setStyleSheet(DARK_THEME)

        # ── persistent settings ─────────────────────────────────────
        self._settings_store = QSettings("CursorReplay", "CursorReplay")
        self._last_dir: str = self._settings_store.value("lastDir", "")
        self._restore_geometry()
        overlay_settings = load_settings(self._settings_store)

        # ── core objects ────────────────────────────────────────────
        self._video = VideoSource(self)
        self._session = PlaybackSession(settings=overlay_settings)
        self._surface = QImageSurface()
        self._video_loaded = False
        self._events_loaded = False
        self._show_debug = False

        self._frame_timer = QTimer(self)
        self._frame_timer.setSingleShot(True)
        self._frame_timer.timeout.connect(self._animate)

        # ── build UI ────────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        root.addWidget(self._build_file_bar())

        content = QHBoxLayout()
        content.setContentsMargins(0, 0, 0, 0)
        content.setSpacing(0)

        center = QVBoxLayout()
        center.setContentsMargins(0, 0, 0, 0)
        center.setSpacing(0)
        self._view = OverlayView()
        self._view.set_overlay(self._surface.image)
        self._view.files_dropped.connect(self.open_paths)
        center.addWidget(self._view, 1)
        center.addWidget(self._build_control_bar())
        content.addLayout(center, 1)

        self._panel = ControlPanel(overlay_settings)
        self._panel.settings_changed.connect(self._on_settings_changed)
        self._panel.reset_camera_requested.connect(self._reset_camera)
        self._panel.debug_toggled.connect(self._on_debug_toggled)
        content.addWidget(self._panel)

        root.addLayout(content, 1)
        root.addWidget(self._build_status_bar())

        # ── connections ─────────────────────────────────────────────
        self._video.metadata_ready.connect(self._on_metadata_ready)
        self._video.frame_ready.connect(self._view.set_frame)
        self._video.ended.connect(self._on_video_ended)
        self._video.error.connect(self._show_video_error)

        self._video.set_playback_rate(overlay_settings.playback_rate)
        self._set_transport_enabled(False)

    # ════════════════════════════════════════════════════════════════
    #  UI builders
    # ════════════════════════════════════════════════════════════════

    def _build_file_bar(self) -> QWidget:
        bar = QWidget()
        bar.setObjectName("ControlBar")
        layout = QHBoxLayout(bar)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(10)

        btn_video = QPushButton("🎬 Open video…")
        btn_video.setObjectName("CtrlBtn")
        btn_video.clicked.connect(self._choose_video)
        layout.addWidget(btn_video)

        self._video_status = QLabel("No video loaded")
        self._video_status.setObjectName("Secondary")
        layout.addWidget(self._video_status)

        layout.addSpacing(16)

        btn_events = QPushButton("🖱 Open events…")
        btn_events.setObjectName("CtrlBtn")
        btn_events.clicked.connect(self._choose_events)
        layout.addWidget(btn_events)

        self._events_status = QLabel("No cursor data loaded")
        self._events_status.setObjectName("Secondary")
        layout.addWidget(self._events_status)

        layout.addStretch()
        return bar

    def _build_control_bar(self) -> QWidget:
        bar = QWidget()
        bar.setObjectName("ControlBar")
        layout = QHBoxLayout(bar)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(10)

        self._btn_play = QPushButton("▶ Play")
        self._btn_play.setObjectName("PlayBtn")
        self._btn_play.clicked.connect(self._toggle_play_pause)
        layout.addWidget(self._btn_play)

        self._btn_reset = QPushButton("⟲ Reset")
        self._btn_reset.setObjectName("CtrlBtn")
        self._btn_reset.clicked.connect(self._reset_playback)
        layout.addWidget(self._btn_reset)

        self._seek_slider = QSlider(Qt.Orientation.Horizontal)
        self._seek_slider.setRange(0, SEEK_STEPS)
        self._seek_slider.valueChanged.connect(self._on_seek_slider)
        layout.addWidget(self._seek_slider, 1)

        self._time_display = QLabel(fmt_clock(0, 0))
        self._time_display.setObjectName("TimeDisplay")
        layout.addWidget(self._time_display)
        return bar

    def _build_status_bar(self) -> QWidget:
        bar = QWidget()
        bar.setObjectName("StatusBar")
        layout = QHBoxLayout(bar)
        layout.setContentsMargins(12, 4, 12, 4)

        self._status_label = QLabel("Load a video and its cursor data to begin")
        self._status_label.setObjectName("StatusLabel")
        layout.addWidget(self._status_label)
        layout.addStretch()

        self._error_label = QLabel("")
        self._error_label.setObjectName("ErrorLabel")
        self._error_label.setVisible(False)
        layout.addWidget(self._error_label)
        return bar

    # ════════════════════════════════════════════════════════════════
    #  Loading
    # ════════════════════════════════════════════════════════════════

    def open_paths(self, paths: List[str]) -> None:
        """Open each path as a video or event file by extension."""
        for path in paths:
            kind = classify_path(path)
            if kind == "video":
                self.open_video(path)
            elif kind == "events":
                self.open_events(path)
            else:
                self._show_error(f"Unsupported file type: {os.path.basename(path)}")

    def _choose_video(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Open video", self._last_dir,
            "Videos (*.mp4 *.mov *.m4v *.avi *.mkv *.webm);;All files (*)",
        )
        if path:
            self.open_video(path)

    def _choose_events(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Open input events", self._last_dir,
            "Input events (*.json *.txt);;All files (*)",
        )
        if path:
            self.open_events(path)

    def open_video(self, path: str) -> None:
        self._pause_playback()
        self._video_loaded = False
        self._show_error("")
        if not self._video.open(path):
            return
        self._remember_dir(path)
        self._video_status.setText(f"{os.path.basename(path)} ({fmt_size_mb(path)})")

    def open_events(self, path: str) -> None:
        self._show_error("")
        try:
            store = load_events(path)
        except (EventFileError, OSError) as exc:
            logger.warning("Failed to load events from %s: %s", path, exc)
            self._show_error(f"Error parsing file: {exc}")
            return
        self._remember_dir(path)
        self._session.load_events(store)
        self._events_loaded = True
        self._events_status.setText(f"{len(store)} events loaded")
        self._check_ready()

    def _remember_dir(self, path: str) -> None:
        self._last_dir = os.path.dirname(path)
        self._settings_store.setValue("lastDir", self._last_dir)

    def _on_metadata_ready(self, width: int, height: int) -> None:
        self._surface.resize(width, height)
        self._view.set_overlay(self._surface.image)
        self._video_loaded = True
        self._check_ready()

    def _check_ready(self) -> None:
        ready = self._video_loaded and self._events_loaded
        self._set_transport_enabled(ready)
        if not ready:
            return
        self._status_label.setText(self._session.status_summary(self._video.duration))
        self._reset_playback()
        self._reset_camera()

    def _set_transport_enabled(self, enabled: bool) -> None:
        self._btn_play.setEnabled(enabled)
        self._btn_reset.setEnabled(enabled)
        self._seek_slider.setEnabled(enabled)

    # ════════════════════════════════════════════════════════════════
    #  Playback
    # ════════════════════════════════════════════════════════════════

    def _toggle_play_pause(self) -> None:
        if not (self._video_loaded and self._events_loaded):
            return
        if self._video.is_playing:
            self._pause_playback()
        else:
            self._start_playback()

    def _start_playback(self) -> None:
        self._video.play()
        self._update_play_button()
        self._animate()

    def _pause_playback(self) -> None:
        self._video.pause()
        self._frame_timer.stop()
        self._update_play_button()

    def _reset_playback(self) -> None:
        self._pause_playback()
        self._video.seek(0.0)
        self._session.reset()
        self._surface.clear()
        self._view.update()
        self._update_time_display()

    def _on_video_ended(self) -> None:
        self._pause_playback()

    def _update_play_button(self) -> None:
        self._btn_play.setText("⏸ Pause" if self._video.is_playing else "▶ Play")

    def _animate(self) -> None:
        """One iteration of the frame loop; re-arms itself while playing."""
        if not self._video.is_playing:
            return
        self._render(self._video.current_time)
        self._update_time_display()
        self._frame_timer.start(FRAME_INTERVAL_MS)

    def _render(self, video_time: float, seek: bool = False) -> None:
        w, h = self._view.container_size()
        if seek:
            result = self._session.seek(video_time, self._surface, w, h)
        else:
            result = self._session.render_frame(video_time, self._surface, w, h)
        self._view.set_transform(result.transform)
        if self._show_debug:
            self._panel.set_debug_text(format_debug_info(
                result.sample, self._session.camera, self._session.settings,
                self._surface.width, self._surface.height,
            ))

    def _on_seek_slider(self, value: int) -> None:
        duration = self._video.duration
        if not duration:
            return
        t = value / SEEK_STEPS * duration
        self._video.seek(t)
        self._render(t, seek=True)
        self._update_time_display(update_slider=False)

    def _update_time_display(self, update_slider: bool = True) -> None:
        current = self._video.current_time
        duration = self._video.duration
        self._time_display.setText(fmt_clock(current, duration))
        if update_slider and duration:
            self._seek_slider.blockSignals(True)
            self._seek_slider.setValue(round(current / duration * SEEK_STEPS))
            self._seek_slider.blockSignals(False)

    # ════════════════════════════════════════════════════════════════
    #  Settings
    # ════════════════════════════════════════════════════════════════

    def _on_settings_changed(self, settings: OverlaySettings) -> None:
        self._session.apply_settings(settings)
        self._video.set_playback_rate(self._session.settings.playback_rate)
        self._refresh_paused()

    def _reset_camera(self) -> None:
        self._session.reset_camera()
        self._panel.set_settings(self._session.settings)
        self._refresh_paused()

    def _on_debug_toggled(self, enabled: bool) -> None:
        self._show_debug = enabled
        self._session.show_debug = enabled
        self._refresh_paused()

    def _refresh_paused(self) -> None:
        """Redraw the current frame when the frame loop is not running."""
        if self._video.is_playing or not (self._video_loaded and self._events_loaded):
            return
        self._render(self._video.current_time)

    # ════════════════════════════════════════════════════════════════
    #  Status / errors
    # ════════════════════════════════════════════════════════════════

    def _show_error(self, message: str) -> None:
        self._error_label.setText(message)
        self._error_label.setVisible(bool(message))

    def _show_video_error(self, message: str) -> None:
        self._video_status.setText("No video loaded")
        self._show_error(message)

    # ════════════════════════════════════════════════════════════════
    #  Window lifecycle
    # ════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._pause_playback()
        self._video.close()
        save_settings(self._settings_store, self._session.settings)
        self._settings_store.setValue("geometry", self.saveGeometry())
        super().closeEvent(event)

    def _restore_geometry(self) -> None:
        geometry: Optional[QByteArray] = self._settings_store.value("geometry")
        if geometry:
            self.restoreGeometry(geometry)
