"""Progress bar shown while a simulated analysis is running."""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from i18n import t


class ProgressWidget(QWidget):
    """Percentage bar with a status line and a cancel button."""

    cancel_clicked = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("progressPanel")
        self._setup_ui()
        self.hide()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        self._status_label = QLabel(t("progress.analyzing"))
        self._status_label.setProperty("class", "progressStatus")

        bar_row = QHBoxLayout()
        bar_row.setSpacing(12)

        self._bar = QProgressBar()
        self._bar.setRange(0, 100)
        self._bar.setValue(0)
        self._bar.setTextVisible(False)
        self._bar.setFixedHeight(8)

        self._pct_label = QLabel("0%")
        self._pct_label.setProperty("class", "progressPercent")
        self._pct_label.setFixedWidth(45)

        self._cancel_btn = QPushButton(t("progress.cancel"))
        self._cancel_btn.setProperty("class", "cancelButton")
        self._cancel_btn.setFixedWidth(80)
        self._cancel_btn.clicked.connect(self.cancel_clicked.emit)

        bar_row.addWidget(self._bar, 1)
        bar_row.addWidget(self._pct_label)
        bar_row.addWidget(self._cancel_btn)

        layout.addWidget(self._status_label)
        layout.addLayout(bar_row)

    def set_progress(self, percent: int):
        """Show the widget at the given percentage."""
        percent = max(0, min(percent, 100))
        self._bar.setValue(percent)
        self._pct_label.setText(f"{percent}%")
        self._status_label.setText(
            t("progress.complete") if percent >= 100 else t("progress.analyzing")
        )
        self.show()

    def reset(self):
        """Hide and zero the widget."""
        self._bar.setValue(0)
        self._pct_label.setText("0%")
        self.hide()
