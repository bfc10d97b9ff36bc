"""Right-hand control panel: trail, sync and camera settings."""

import logging
from dataclasses import replace
from typing import Callable, Dict

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from ..camera_engine import ZOOM_PRESETS
from ..settings import RANGES, OverlaySettings

logger = logging.getLogger(__name__)


# slider field → (caption, steps per unit, value formatter)
_SLIDERS: Dict[str, tuple] = {
    "opacity":       ("Opacity",        100, lambda v: f"{v:.2f}"),
    "point_size":    ("Point size",     1,   lambda v: f"{v:.0f}px"),
    "trail_length":  ("Trail length",   1,   lambda v: f"{v:.0f}"),
    "fade_timeout":  ("Fade time",      10,  lambda v: f"{v:.1f}s"),
    "playback_rate": ("Speed",          4,   lambda v: f"{v:g}x"),
    "time_offset":   ("Time offset",    10,  lambda v: f"{v:+.1f}s"),
    "zoom":          ("Zoom",           10,  lambda v: f"{v:.1f}x"),
    "margin":        ("Safe-zone margin", 100, lambda v: f"{v * 100:.0f}%"),
    "smoothing":     ("Smoothing",      100, lambda v: f"{v:.2f}"),
}


class _LabeledSlider(QWidget):
    """Horizontal float slider with a caption and live value label."""

    def __init__(self, caption: str, lo: float, hi: float, steps: int,
                 fmt: Callable[[float], str], parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._steps = steps
        self._fmt = fmt

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)

        row = QHBoxLayout()
        cap = QLabel(caption)
        cap.setObjectName("Secondary")
        row.addWidget(cap)
        row.addStretch()
        self._value = QLabel()
        self._value.setObjectName("ValueLabel")
        row.addWidget(self._value)
        layout.addLayout(row)

        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(round(lo * steps), round(hi * steps))
        self.slider.valueChanged.connect(lambda _: self._value.setText(self._fmt(self.value())))
        layout.addWidget(self.slider)

    def value(self) -> float:
        return self.slider.value() / self._steps

    def set_value(self, v: float) -> None:
        self.slider.blockSignals(True)
        self.slider.setValue(round(v * self._steps))
        self.slider.blockSignals(False)
        self._value.setText(self._fmt(self.value()))


class ControlPanel(QWidget):
    """Sidebar with trail appearance, sync, and camera controls.

    Every change emits a full, validated :class:`OverlaySettings`.
    """

    settings_changed = Signal(object)   # OverlaySettings
    reset_camera_requested = Signal()
    debug_toggled = Signal(bool)

    def __init__(self, settings: OverlaySettings, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("ControlPanel")
        self.setFixedWidth(280)
        self._settings = settings
        self._sliders: Dict[str, _LabeledSlider] = {}

        self._container = QVBoxLayout(self)
        self._container.setContentsMargins(16, 20, 16, 16)
        self._container.setSpacing(10)

        # ── Trail ────────────────────────────────────────────────────
        self._add_title("TRAIL")
        for name in ("opacity", "point_size", "trail_length", "fade_timeout"):
            self._add_slider(name)
        self._hide_check = QCheckBox("Hide cursor when still")
        self._hide_check.toggled.connect(lambda _: self._emit())
        self._container.addWidget(self._hide_check)

        self._add_separator()

        # ── Sync ─────────────────────────────────────────────────────
        self._add_title("PLAYBACK & SYNC")
        for name in ("playback_rate", "time_offset"):
            self._add_slider(name)

        self._add_separator()

        # ── Camera ───────────────────────────────────────────────────
        self._add_title("CAMERA")
        self._add_slider("zoom")

        preset_row = QHBoxLayout()
        preset_row.setSpacing(6)
        self._preset_btns: Dict[float, QPushButton] = {}
        for label, level in ZOOM_PRESETS.items():
            btn = QPushButton(label)
            btn.setObjectName("ToggleBtn")
            btn.setCheckable(True)
            btn.clicked.connect(lambda _=False, z=level: self.set_zoom_preset(z))
            preset_row.addWidget(btn)
            self._preset_btns[level] = btn
        self._container.addLayout(preset_row)

        for name in ("margin", "smoothing"):
            self._add_slider(name)

        self._follow_check = QCheckBox("Follow cursor")
        self._follow_check.toggled.connect(lambda _: self._emit())
        self._container.addWidget(self._follow_check)

        btn_row = QHBoxLayout()
        reset_btn = QPushButton("Reset camera")
        reset_btn.setObjectName("CtrlBtn")
        reset_btn.clicked.connect(self.reset_camera_requested.emit)
        btn_row.addWidget(reset_btn)
        self._debug_btn = QPushButton("Debug")
        self._debug_btn.setObjectName("ToggleBtn")
        self._debug_btn.setCheckable(True)
        self._debug_btn.toggled.connect(self._on_debug_toggled)
        btn_row.addWidget(self._debug_btn)
        self._container.addLayout(btn_row)

        self._debug_info = QLabel("")
        self._debug_info.setObjectName("DebugInfo")
        self._debug_info.setWordWrap(True)
        self._debug_info.setVisible(False)
        self._container.addWidget(self._debug_info)

        self._container.addStretch()
        self.set_settings(settings)

    # ── builders ────────────────────────────────────────────────────

    def _add_title(self, text: str) -> None:
        title = QLabel(text)
        title.setObjectName("PanelTitle")
        self._container.addWidget(title)

    def _add_separator(self) -> None:
        sep = QFrame()
        sep.setFrameShape(QFrame.Shape.HLine)
        sep.setStyleSheet("background-color: #2d2b45; max-height: 1px;")
        self._container.addWidget(sep)

    def _add_slider(self, name: str) -> None:
        caption, steps, fmt = _SLIDERS[name]
        lo, hi = RANGES[name]
        s = _LabeledSlider(caption, lo, hi, steps, fmt)
        s.slider.valueChanged.connect(lambda _: self._emit())
        self._sliders[name] = s
        self._container.addWidget(s)

    # ── public ──────────────────────────────────────────────────────

    @property
    def settings(self) -> OverlaySettings:
        return self._settings

    def set_settings(self, settings: OverlaySettings) -> None:
        """Show *settings* in the widgets without emitting ``settings_changed``."""
        self._settings = settings
        for name, s in self._sliders.items():
            s.set_value(getattr(settings, name))
        for w, value in ((self._hide_check, settings.hide_when_still),
                         (self._follow_check, settings.follow_cursor)):
            w.blockSignals(True)
            w.setChecked(value)
            w.blockSignals(False)
        self._highlight_preset(settings.zoom)

    def set_zoom_preset(self, zoom: float) -> None:
        logger.debug("Zoom preset %.1fx", zoom)
        self._sliders["zoom"].set_value(zoom)
        self._emit()

    def set_debug_text(self, text: str) -> None:
        if self._debug_info.isVisible():
            self._debug_info.setText(text)

    # ── internal ────────────────────────────────────────────────────

    def _highlight_preset(self, zoom: float) -> None:
        for level, btn in self._preset_btns.items():
            btn.setChecked(abs(level - zoom) < 1e-6)

    def _on_debug_toggled(self, enabled: bool) -> None:
        self._debug_info.setVisible(enabled)
        self.debug_toggled.emit(enabled)

    def _emit(self) -> None:
        values = {name: s.value() for name, s in self._sliders.items()}
        values["trail_length"] = int(values["trail_length"])
        settings = replace(
            self._settings,
            hide_when_still=self._hide_check.isChecked(),
            follow_cursor=self._follow_check.isChecked(),
            **values,
        ).validated()
        self._settings = settings
        self._highlight_preset(settings.zoom)
        self.settings_changed.emit(settings)
