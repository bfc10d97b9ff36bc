"""Dark theme QSS stylesheet."""

DARK_THEME = """
/* ── Global ─────────────────────────────────────────── */
QWidget {
    background-color: #1b1a2e;
    color: #e4e4ed;
    font-family: "Segoe UI Variable", "Segoe UI", sans-serif;
    font-size: 13px;
    border: none;
}
QWidget:focus { outline: none; }

/* ── Transport bar ──────────────────────────────────── */
#ControlBar {
    background-color: #131221;
    border-top: 1px solid #2d2b45;
}
QPushButton#CtrlBtn {
    height: 30px;
    padding: 0 14px;
    border-radius: 6px;
    background-color: #28263e;
    color: #e4e4ed;
}
QPushButton#CtrlBtn:hover { background-color: #343150; }
QPushButton#CtrlBtn:disabled { color: #5a5873; }
QPushButton#PlayBtn {
    height: 30px;
    padding: 0 18px;
    border-radius: 6px;
    background-color: #8b5cf6;
    color: white;
    font-weight: 600;
}
QPushButton#PlayBtn:hover { background-color: #7c4ddf; }
QPushButton#PlayBtn:disabled { background-color: #3d3a58; color: #8886a0; }
#TimeDisplay {
    color: #e4e4ed;
    font-family: "Cascadia Mono", "Consolas", monospace;
    font-size: 12px;
    background: transparent;
}

/* ── Preview ────────────────────────────────────────── */
#OverlayView {
    background-color: #0e0d19;
}

/* ── Control panel ──────────────────────────────────── */
#ControlPanel {
    background-color: #131221;
    border-left: 1px solid #2d2b45;
}
#PanelTitle {
    color: #8886a0;
    font-size: 11px;
    font-weight: 600;
    letter-spacing: 1px;
    background: transparent;
}
#ValueLabel {
    color: #e4e4ed;
    font-size: 12px;
    background: transparent;
}
#ToggleBtn {
    height: 26px;
    border-radius: 6px;
    background-color: #28263e;
    color: #e4e4ed;
}
#ToggleBtn:hover { background-color: #343150; }
#ToggleBtn:checked { background-color: #8b5cf6; color: white; }
#DebugInfo {
    color: #c4c2d8;
    font-family: "Cascadia Mono", "Consolas", monospace;
    font-size: 11px;
    background-color: #1b1a2e;
    border: 1px solid #2d2b45;
    border-radius: 6px;
    padding: 6px;
}

QSlider::groove:horizontal {
    height: 4px;
    background: #2d2b45;
    border-radius: 2px;
}
QSlider::handle:horizontal {
    width: 12px;
    margin: -5px 0;
    border-radius: 6px;
    background: #8b5cf6;
}
QSlider::sub-page:horizontal { background: #6d4bd0; border-radius: 2px; }

/* ── Status bar ─────────────────────────────────────── */
#StatusBar {
    background-color: #131221;
    border-top: 1px solid #2d2b45;
}
#StatusLabel { color: #8886a0; font-size: 12px; background: transparent; }
#ErrorLabel { color: #ef4444; font-size: 12px; background: transparent; }

QToolTip {
    background-color: #28263e;
    color: #e4e4ed;
    border: 1px solid #3d3a58;
    padding: 4px 8px;
}
QLabel { background: transparent; }
QLabel#Secondary { color: #8886a0; font-size: 12px; }
"""
