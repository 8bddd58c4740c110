"""Chest X-ray upload and simulated analysis view."""

from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from core.analysis_session import AnalysisSession, InvalidStateError
from core.image_loader import load_image_ref
from core.utils import SessionState
from i18n import t
from ui.components.banner import Banner
from ui.components.image_drop_zone import ImageDropZone
from ui.components.progress_widget import ProgressWidget
from ui.components.result_card import ResultCard


class AnalysisWidget(QWidget):
    """Upload panel and results panel, both rendered from an AnalysisSession."""

    def __init__(self, session: AnalysisSession, parent=None):
        super().__init__(parent)
        self._session = session
        self._setup_ui()
        self._connect_signals()
        self._session.add_listener(self._render)
        self._render(self._session)

    def _setup_ui(self):
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        self._disclaimer = Banner(t("disclaimer.banner"))

        columns = QHBoxLayout()
        columns.setSpacing(24)

        # Upload column
        upload_panel = QWidget()
        upload_panel.setObjectName("uploadPanel")
        upload_layout = QVBoxLayout(upload_panel)
        upload_layout.setSpacing(12)

        title = QLabel(t("upload.title"))
        title.setProperty("class", "sectionTitle")
        subtitle = QLabel(t("upload.subtitle"))
        subtitle.setProperty("class", "sectionSubtitle")
        subtitle.setWordWrap(True)

        self._drop_zone = ImageDropZone()

        self._analyze_btn = QPushButton(t("upload.analyze_button"))
        self._analyze_btn.setObjectName("primaryButton")

        self._progress = ProgressWidget()

        upload_layout.addWidget(title)
        upload_layout.addWidget(subtitle)
        upload_layout.addWidget(self._drop_zone)
        upload_layout.addWidget(self._analyze_btn)
        upload_layout.addWidget(self._progress)
        upload_layout.addStretch()

        # Results column
        self._result_card = ResultCard()

        columns.addWidget(upload_panel, 1)
        columns.addWidget(self._result_card, 1)

        layout.addWidget(self._disclaimer)
        layout.addLayout(columns)
        layout.addStretch()

        scroll.setWidget(container)
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.addWidget(scroll)

    def _connect_signals(self):
        self._drop_zone.file_chosen.connect(self._on_file_chosen)
        self._analyze_btn.clicked.connect(self._on_analyze)
        self._progress.cancel_clicked.connect(self._on_cancel)
        self._result_card.analyze_another.connect(self._session.reset)

    def _on_file_chosen(self, path: str):
        try:
            image = load_image_ref(path)
        except ValueError as e:
            QMessageBox.warning(self, t("common.error"), str(e))
            return
        self._session.stage_image(image)

    def _on_analyze(self):
        try:
            self._session.start_analysis()
        except InvalidStateError:
            # The button is disabled outside STAGED; a stray click is harmless.
            self._render(self._session)

    def _on_cancel(self):
        # Re-staging the same image cancels the run but keeps the upload
        if self._session.is_analyzing:
            self._session.stage_image(self._session.image)

    def _render(self, session: AnalysisSession):
        state = session.state
        analyzing = state == SessionState.ANALYZING

        self._drop_zone.show_image(session.image)
        self._drop_zone.set_locked(analyzing)

        self._analyze_btn.setVisible(state in (SessionState.STAGED, SessionState.ANALYZING))
        self._analyze_btn.setEnabled(session.can_start)
        self._analyze_btn.setText(
            t("upload.analyzing_button") if analyzing else t("upload.analyze_button")
        )

        if analyzing:
            self._progress.set_progress(session.progress)
        else:
            self._progress.reset()

        if state == SessionState.RESULTED and session.result is not None:
            self._result_card.show_result(session.result)
        else:
            self._result_card.reset()

    def set_dark(self, dark: bool):
        self._result_card.set_dark(dark)

    def cleanup(self):
        self._session.remove_listener(self._render)
        if self._session.is_analyzing:
            self._session.reset()
