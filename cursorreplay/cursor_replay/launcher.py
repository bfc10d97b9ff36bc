"""Application launcher: logging, crash handler, theme palette and MainWindow."""

import argparse
import logging
import sys
from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QPalette, QColor
from PySide6.QtCore import qInstallMessageHandler, QtMsgType
from .main_window import MainWindow
from .version import __version__

_logger = logging.getLogger(__name__)


def _global_exception_handler(exc_type, exc_value, exc_tb):
    """Log unhandled exceptions instead of crashing silently."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return
    _logger.critical("Unhandled exception", exc_info=(exc_type, exc_value, exc_tb))


# Qt's stylesheet engine emits "QFont::setPointSize: Point size <= 0"
# while recalculating fonts on DPI changes; all our fonts are pixel sized.
_original_handler = None


def _message_handler(msg_type, context, message):
    """Custom Qt message handler that suppresses harmless DPI warnings."""
    if "QFont::setPointSize" in message:
        return
    if _original_handler:
        _original_handler(msg_type, context, message)
    elif msg_type != QtMsgType.QtDebugMsg:
        print(message, file=sys.stderr)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cursor-replay",
        description="Replay recorded pointer events as a trail over a video.",
    )
    parser.add_argument("paths", nargs="*",
                        help="video (.mp4, .mov, ...) and/or input-events (.json, .txt) files")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    # Qt consumes its own flags (-style, -platform ...) from the remainder
    args, _ = parser.parse_known_args(argv)
    return args


def main() -> None:
    """Application entry point: builds the QApplication, applies the theme, shows MainWindow."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s | %(levelname)s | %(message)s",
    )
    sys.excepthook = _global_exception_handler

    global _original_handler
    _original_handler = qInstallMessageHandler(_message_handler)

    args = _parse_args(sys.argv[1:])

    app = QApplication(sys.argv)
    app.setApplicationName("CursorReplay")
    app.setApplicationVersion(__version__)

    # dark palette base (QSS handles the rest)
    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor("#1b1a2e"))
    palette.setColor(QPalette.ColorRole.WindowText, QColor("#e4e4ed"))
    palette.setColor(QPalette.ColorRole.Base, QColor("#131221"))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor("#201f34"))
    palette.setColor(QPalette.ColorRole.Text, QColor("#e4e4ed"))
    palette.setColor(QPalette.ColorRole.Button, QColor("#28263e"))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor("#e4e4ed"))
    palette.setColor(QPalette.ColorRole.Highlight, QColor("#8b5cf6"))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor("#ffffff"))
    app.setPalette(palette)

    window = MainWindow()
    window.show()
    if args.paths:
        _logger.info("Opening %d file(s) from the command line", len(args.paths))
        window.open_paths(args.paths)

    sys.exit(app.exec())
