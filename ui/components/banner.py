"""Icon-and-text banner used for the disclaimers and the prediction alert."""

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QWidget

from core.utils import TierStyle
from ui.theme import banner_stylesheet

STATUS_GLYPHS = {
    "check": "✔",
    "alert": "⚠",
}


class Banner(QWidget):
    """A one-line notice. The disclaimer variant cannot be dismissed."""

    def __init__(self, text: str = "", icon: str = "⚠", object_name: str = "disclaimerBanner", parent=None):
        super().__init__(parent)
        self.setObjectName(object_name)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self._tier_style: Optional[TierStyle] = None
        self._dark = False
        self._setup_ui(text, icon)

    def _setup_ui(self, text: str, icon: str):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(10)

        self._icon_label = QLabel(icon)
        self._icon_label.setProperty("class", "bannerIcon")
        self._icon_label.setFixedWidth(24)
        self._icon_label.setAlignment(Qt.AlignmentFlag.AlignTop)

        self._text_label = QLabel(text)
        self._text_label.setProperty("class", "bannerText")
        self._text_label.setWordWrap(True)

        layout.addWidget(self._icon_label)
        layout.addWidget(self._text_label, 1)

    def text(self) -> str:
        return self._text_label.text()

    def set_text(self, text: str):
        self._text_label.setText(text)

    def apply_tier_style(self, style: TierStyle):
        """Color the banner with a risk tier's palette and status icon."""
        self._tier_style = style
        self._icon_label.setText(STATUS_GLYPHS.get(style.status_icon, "⚠"))
        self.setStyleSheet(banner_stylesheet(self.objectName(), style, self._dark))

    def set_dark(self, dark: bool):
        """Rebuild the tier stylesheet, if any, for the new theme."""
        self._dark = dark
        if self._tier_style is not None:
            self.setStyleSheet(banner_stylesheet(self.objectName(), self._tier_style, dark))
