"""List of tier-specific precautions with category icons."""

from typing import Optional, Sequence

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget

from core.utils import RecommendationIcon, RecommendationItem, TierStyle
from i18n import t
from ui.theme import recommendation_icon_stylesheet, recommendation_list_stylesheet

ICON_GLYPHS = {
    RecommendationIcon.HEART: "❤",
    RecommendationIcon.APPLE: "\U0001f34e",
    RecommendationIcon.CIGARETTE: "\U0001f6ad",
    RecommendationIcon.STETHOSCOPE: "\U0001fa7a",
    RecommendationIcon.WIND: "\U0001f32c",
    RecommendationIcon.DUMBBELL: "\U0001f3cb",
    RecommendationIcon.ALERT: "⚠",
    RecommendationIcon.ACTIVITY: "\U0001f4c8",
}


class RecommendationList(QWidget):
    """Titled list of recommendation rows, colored for the current tier."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("recommendationList")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self._rows = []
        self._icons = []
        self._tier_style: Optional[TierStyle] = None
        self._dark = False
        self._setup_ui()
        self.hide()

    def _setup_ui(self):
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(16, 16, 16, 16)
        self._layout.setSpacing(8)

        title = QLabel(t("results.precautions"))
        title.setProperty("class", "sectionTitle")
        title.setStyleSheet("font-size: 16px;")

        subtitle = QLabel(t("results.precautions_subtitle"))
        subtitle.setProperty("class", "sectionSubtitle")

        self._layout.addWidget(title)
        self._layout.addWidget(subtitle)

    def row_count(self) -> int:
        return len(self._rows)

    def set_recommendations(self, items: Sequence[RecommendationItem], style: TierStyle):
        """Replace the rows with the given items."""
        self._clear_rows()
        self._tier_style = style
        for item in items:
            row = QWidget()
            row_layout = QHBoxLayout(row)
            row_layout.setContentsMargins(8, 6, 8, 6)
            row_layout.setSpacing(12)

            icon = QLabel(ICON_GLYPHS.get(item.icon, "•"))
            icon.setFixedWidth(28)
            icon.setAlignment(Qt.AlignmentFlag.AlignCenter)

            text = QLabel(item.text)
            text.setWordWrap(True)

            row_layout.addWidget(icon)
            row_layout.addWidget(text, 1)
            self._layout.addWidget(row)
            self._rows.append(row)
            self._icons.append(icon)

        self._apply_style()
        self.show()

    def set_dark(self, dark: bool):
        self._dark = dark
        self._apply_style()

    def _apply_style(self):
        if self._tier_style is None:
            return
        icon_qss = recommendation_icon_stylesheet(self._tier_style, self._dark)
        for icon in self._icons:
            icon.setStyleSheet(icon_qss)
        self.setStyleSheet(recommendation_list_stylesheet(self._tier_style, self._dark))

    def _clear_rows(self):
        for row in self._rows:
            self._layout.removeWidget(row)
            row.deleteLater()
        self._rows = []
        self._icons = []

    def reset(self):
        self._clear_rows()
        self._tier_style = None
        self.setStyleSheet("")
        self.hide()
