"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from chessreel.config import AppSettings

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: AppSettings) -> None:
    """Route ``chessreel`` loggers to stderr at the configured level."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def _configure_application(app: QApplication, settings: AppSettings) -> None:
    """Apply app-wide settings and theme."""
    from chessreel.ui.i18n import set_language
    from chessreel.ui.styles.theme import APP_STYLE

    app.setApplicationName("Chessreel")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)
    set_language(settings.language)


def run_application(
    argv: list[str] | None = None,
    settings: AppSettings | None = None,
) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from chessreel.ui.main_window import MainWindow

    settings = settings or AppSettings.from_env()
    configure_logging(settings)
    _LOGGER.info("Starting chessreel against %s", settings.api_base)

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app, settings)

    window = MainWindow(settings)
    window.show()

    return app.exec()
