"""Main window switching between the login view and the analysis view."""

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QApplication,
    QLabel,
    QMainWindow,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from core.auth_gate import AppController
from i18n import t
from ui.analysis_widget import AnalysisWidget
from ui.login_widget import LoginWidget
from ui.theme import ThemeManager

LOGIN_PAGE = 0
ANALYSIS_PAGE = 1


class MainWindow(QMainWindow):
    """Top-level window. The visible page follows controller.is_authenticated."""

    def __init__(self, controller: AppController, theme_manager: ThemeManager):
        super().__init__()
        self._controller = controller
        self._theme_manager = theme_manager
        self.setWindowTitle(t("app.title"))
        self.setMinimumSize(960, 680)
        self.resize(1180, 780)
        self._setup_ui()
        self._setup_menu_bar()
        self._controller.add_listener(self._on_auth_changed)
        self._theme_manager.add_listener(self._analysis_widget.set_dark)
        self._analysis_widget.set_dark(self._theme_manager.is_dark)
        self._on_auth_changed(self._controller.is_authenticated)

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)

        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        # Header
        header = QWidget()
        header.setObjectName("appHeader")
        header_layout = QVBoxLayout(header)
        header_layout.setContentsMargins(24, 16, 24, 16)
        header_title = QLabel(t("app.title"))
        header_title.setObjectName("headerTitle")
        header_subtitle = QLabel(t("app.subtitle"))
        header_subtitle.setObjectName("headerSubtitle")
        header_layout.addWidget(header_title)
        header_layout.addWidget(header_subtitle)

        self._stack = QStackedWidget()
        self._stack.setObjectName("contentArea")

        self._login_widget = LoginWidget(self._controller)
        self._analysis_widget = AnalysisWidget(self._controller.session)

        self._stack.addWidget(self._login_widget)      # 0
        self._stack.addWidget(self._analysis_widget)   # 1

        layout.addWidget(header)
        layout.addWidget(self._stack, 1)

    def _setup_menu_bar(self):
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu(t("menu.file"))
        quit_action = QAction(t("menu.quit"), self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        view_menu = menu_bar.addMenu(t("menu.view"))
        toggle_theme = QAction(t("menu.toggle_dark_mode"), self)
        toggle_theme.setShortcut("Ctrl+D")
        toggle_theme.triggered.connect(self._theme_manager.toggle_theme)
        view_menu.addAction(toggle_theme)

        account_menu = menu_bar.addMenu(t("menu.account"))
        self._logout_action = QAction(t("menu.logout"), self)
        self._logout_action.setShortcut("Ctrl+L")
        self._logout_action.triggered.connect(self._controller.logout)
        account_menu.addAction(self._logout_action)

    def _on_auth_changed(self, authenticated: bool):
        self._stack.setCurrentIndex(ANALYSIS_PAGE if authenticated else LOGIN_PAGE)
        self._logout_action.setEnabled(authenticated)
        if not authenticated:
            self._login_widget.clear()

    def closeEvent(self, event):
        """Stop any running analysis before closing."""
        self._analysis_widget.cleanup()
        QApplication.processEvents()
        event.accept()
