"""LungScan: lung X-ray upload and simulated screening demo.

Entry point for the desktop application.
"""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

import i18n
from core.analysis_session import AnalysisSession
from core.analysis_simulator import AnalysisSimulator
from core.auth_gate import AppController
from core.logger import setup_logging
from core.utils import get_log_dir
from ui.theme import ThemeManager
from workers.qt_scheduler import QtTimerScheduler

logger = logging.getLogger(__name__)


def main():
    """Application entry point."""
    # Handle PyInstaller frozen app
    if getattr(sys, "frozen", False):
        os.chdir(os.path.dirname(sys.executable))

    setup_logging(log_file=get_log_dir() / "lungscan.log")

    app = QApplication(sys.argv)
    app.setApplicationName("LungScan")
    app.setApplicationVersion("1.0.0")
    app.setOrganizationName("LungScan")

    # Initialize i18n before any UI
    i18n.init()

    theme_manager = ThemeManager(app)
    theme_manager.apply_theme()

    simulator = AnalysisSimulator(QtTimerScheduler(app))
    controller = AppController(AnalysisSession(simulator))

    from ui.main_window import MainWindow

    window = MainWindow(controller, theme_manager)
    window.show()
    logger.info("LungScan started")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
