"""Analysis result card: prediction, risk badge, metrics, and precautions."""

from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.utils import AnalysisResult
from i18n import t
from ui.components.banner import Banner
from ui.components.metric_bar import MetricBar
from ui.components.recommendation_list import RecommendationList
from ui.theme import badge_stylesheet, panel_stylesheet


class ResultCard(QWidget):
    """Displays a classified AnalysisResult. Hidden until a result exists."""

    analyze_another = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("resultCard")
        self._result: Optional[AnalysisResult] = None
        self._dark = False
        self._setup_ui()
        self.reset()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(16)

        title = QLabel(t("results.title"))
        title.setProperty("class", "sectionTitle")
        title.setStyleSheet("font-size: 18px;")
        subtitle = QLabel(t("results.subtitle"))
        subtitle.setProperty("class", "sectionSubtitle")

        self._empty_label = QLabel(t("results.empty"))
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label.setProperty("class", "emptyState")

        self._prediction = Banner(object_name="predictionBanner")

        # Risk level
        self._risk_panel = QWidget()
        risk_layout = QVBoxLayout(self._risk_panel)
        risk_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        risk_caption = QLabel(t("results.risk_level").upper())
        risk_caption.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._badge = QLabel("")
        self._badge.setObjectName("riskBadge")
        self._badge.setAlignment(Qt.AlignmentFlag.AlignCenter)
        risk_layout.addWidget(risk_caption)
        risk_layout.addWidget(self._badge)

        self._accuracy = MetricBar(t("results.accuracy"))
        self._confidence = MetricBar(t("results.confidence"))

        self._recommendations = RecommendationList()

        self._disclaimer = Banner(icon="ℹ")

        self._another_btn = QPushButton(t("upload.analyze_new"))
        self._another_btn.setObjectName("primaryButton")
        self._another_btn.clicked.connect(self.analyze_another.emit)

        self._result_widgets = [
            self._prediction,
            self._risk_panel,
            self._accuracy,
            self._confidence,
            self._disclaimer,
            self._another_btn,
        ]

        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addWidget(self._empty_label)
        layout.addWidget(self._prediction)
        layout.addWidget(self._risk_panel)
        layout.addWidget(self._accuracy)
        layout.addWidget(self._confidence)
        layout.addWidget(self._recommendations)
        layout.addWidget(self._disclaimer)
        layout.addWidget(self._another_btn)

    @property
    def result(self) -> Optional[AnalysisResult]:
        return self._result

    def disclaimer_text(self) -> str:
        return self._disclaimer.text()

    def show_result(self, result: AnalysisResult):
        """Render a result using its tier's presentation style."""
        if result is self._result:
            return
        self._result = result
        style = result.style

        self._prediction.set_text(result.prediction_text)
        self._prediction.apply_tier_style(style)

        self._badge.setText(f"⚠ {style.label} ⚠")
        self._badge.setStyleSheet(badge_stylesheet(style))
        self._risk_panel.setStyleSheet(panel_stylesheet(style, self._dark))

        self._accuracy.set_value(result.accuracy_pct)
        self._confidence.set_value(result.confidence_pct)
        self._recommendations.set_recommendations(result.recommendations, style)
        self._disclaimer.set_text(result.disclaimer)

        self._empty_label.hide()
        for widget in self._result_widgets:
            widget.show()

    def set_dark(self, dark: bool):
        """Re-color the tier-styled parts for a theme change."""
        self._dark = dark
        self._prediction.set_dark(dark)
        self._recommendations.set_dark(dark)
        if self._result is not None:
            self._risk_panel.setStyleSheet(panel_stylesheet(self._result.style, dark))

    def reset(self):
        """Return to the empty placeholder."""
        self._result = None
        self._accuracy.reset()
        self._confidence.reset()
        self._recommendations.reset()
        self._disclaimer.set_text("")
        for widget in self._result_widgets:
            widget.hide()
        self._empty_label.show()
