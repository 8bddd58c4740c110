"""Login and sign-up view shown before the analysis screen."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QFormLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from core.auth_gate import AppController
from i18n import t


class LoginWidget(QWidget):
    """Two-tab form. Any request with all fields filled in is accepted."""

    def __init__(self, controller: AppController, parent=None):
        super().__init__(parent)
        self._controller = controller
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.setSpacing(16)

        card = QWidget()
        card.setObjectName("loginCard")
        card.setMaximumWidth(440)
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(32, 28, 32, 24)
        card_layout.setSpacing(12)

        icon = QLabel("\U0001fa7a")
        icon.setStyleSheet("font-size: 48px;")
        icon.setAlignment(Qt.AlignmentFlag.AlignCenter)

        title = QLabel(t("auth.welcome"))
        title.setProperty("class", "sectionTitle")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)

        subtitle = QLabel(t("auth.subtitle"))
        subtitle.setProperty("class", "sectionSubtitle")
        subtitle.setWordWrap(True)
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._tabs = QTabWidget()
        self._tabs.addTab(self._create_login_page(), t("auth.login_tab"))
        self._tabs.addTab(self._create_signup_page(), t("auth.signup_tab"))
        self._tabs.currentChanged.connect(lambda _: self._error_label.hide())

        self._error_label = QLabel(t("auth.missing_fields"))
        self._error_label.setProperty("class", "formError")
        self._error_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._error_label.hide()

        card_layout.addWidget(icon)
        card_layout.addWidget(title)
        card_layout.addWidget(subtitle)
        card_layout.addWidget(self._tabs)
        card_layout.addWidget(self._error_label)

        layout.addWidget(card)

    @staticmethod
    def _line_edit(placeholder_key: str, password: bool = False) -> QLineEdit:
        field = QLineEdit()
        field.setPlaceholderText(t(placeholder_key))
        if password:
            field.setEchoMode(QLineEdit.EchoMode.Password)
        return field

    def _create_login_page(self) -> QWidget:
        page = QWidget()
        form = QFormLayout(page)
        form.setSpacing(10)

        self._login_email = self._line_edit("auth.email_placeholder")
        self._login_password = self._line_edit("auth.password_placeholder", password=True)
        self._login_password.returnPressed.connect(self._submit_login)

        login_btn = QPushButton(t("auth.login_button"))
        login_btn.setObjectName("primaryButton")
        login_btn.clicked.connect(self._submit_login)

        form.addRow(t("auth.email"), self._login_email)
        form.addRow(t("auth.password"), self._login_password)
        form.addRow(login_btn)
        return page

    def _create_signup_page(self) -> QWidget:
        page = QWidget()
        form = QFormLayout(page)
        form.setSpacing(10)

        self._signup_name = self._line_edit("auth.name_placeholder")
        self._signup_email = self._line_edit("auth.email_placeholder")
        self._signup_password = self._line_edit("auth.password_placeholder", password=True)
        self._signup_password.returnPressed.connect(self._submit_signup)

        signup_btn = QPushButton(t("auth.signup_button"))
        signup_btn.setObjectName("primaryButton")
        signup_btn.clicked.connect(self._submit_signup)

        form.addRow(t("auth.name"), self._signup_name)
        form.addRow(t("auth.email"), self._signup_email)
        form.addRow(t("auth.password"), self._signup_password)
        form.addRow(signup_btn)
        return page

    def _submit_login(self):
        accepted = self._controller.login(
            self._login_email.text(), self._login_password.text()
        )
        self._after_submit(accepted)

    def _submit_signup(self):
        accepted = self._controller.signup(
            self._signup_name.text(),
            self._signup_email.text(),
            self._signup_password.text(),
        )
        self._after_submit(accepted)

    def _after_submit(self, accepted: bool):
        self._error_label.setVisible(not accepted)
        if accepted:
            self.clear()

    def clear(self):
        """Empty every field, e.g. after logout."""
        for field in (
            self._login_email,
            self._login_password,
            self._signup_name,
            self._signup_email,
            self._signup_password,
        ):
            field.clear()
        self._error_label.hide()
