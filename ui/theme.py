"""Theme manager for LungScan, light/dark QSS plus risk-tier palettes.

The application stylesheet comes from ui/styles/. Tier-colored widgets
(prediction banner, risk badge and panel, recommendation list) carry their
own stylesheets built here from a TierStyle, so they are rebuilt whenever
the theme changes.
"""

import logging
import sys
from pathlib import Path
from typing import Callable, List

from PyQt6.QtCore import QSettings
from PyQt6.QtGui import QColor, QFont
from PyQt6.QtWidgets import QApplication

from core.utils import TierStyle

logger = logging.getLogger(__name__)

STYLES_DIR = Path(__file__).parent / "styles"

ThemeListener = Callable[[bool], None]  # receives is_dark


class ThemeManager:
    """Applies light or dark stylesheets and remembers the choice."""

    LIGHT = "light"
    DARK = "dark"

    def __init__(self, app: QApplication):
        self._app = app
        self._settings = QSettings("LungScan", "LungScan")
        theme = self._settings.value("theme", self.LIGHT)
        self._current_theme = theme if theme in (self.LIGHT, self.DARK) else self.LIGHT
        self._listeners: List[ThemeListener] = []
        self._setup_font()

    def _setup_font(self):
        if sys.platform == "darwin":
            font = QFont(".AppleSystemUIFont", 13)
        elif sys.platform == "win32":
            font = QFont("Segoe UI", 10)
        else:
            font = QFont("Ubuntu", 10)
        self._app.setFont(font)

    def add_listener(self, listener: ThemeListener):
        """Register a callback run with is_dark after every apply_theme()."""
        self._listeners.append(listener)

    def apply_theme(self, theme: str = None):
        """Load and apply a QSS theme file, then notify listeners."""
        if theme in (self.LIGHT, self.DARK):
            self._current_theme = theme
        self._app.setStyleSheet(load_qss(self._current_theme))
        self._settings.setValue("theme", self._current_theme)
        logger.debug("Theme applied: %s", self._current_theme)
        for listener in list(self._listeners):
            listener(self.is_dark)

    def toggle_theme(self) -> str:
        """Switch between light and dark themes."""
        new_theme = self.DARK if self._current_theme == self.LIGHT else self.LIGHT
        self.apply_theme(new_theme)
        return new_theme

    @property
    def current_theme(self) -> str:
        return self._current_theme

    @property
    def is_dark(self) -> bool:
        return self._current_theme == self.DARK


def load_qss(theme: str) -> str:
    """Read ui/styles/<theme>.qss, or return "" when it is missing."""
    qss_path = STYLES_DIR / f"{theme}.qss"
    try:
        with open(qss_path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        logger.warning("Stylesheet not found: %s", qss_path)
        return ""


# --- Tier palettes ---

def _rgba(color: str, alpha: float) -> str:
    c = QColor(color)
    return f"rgba({c.red()}, {c.green()}, {c.blue()}, {int(alpha * 255)})"


def tier_colors(style: TierStyle, dark: bool = False) -> dict:
    """Background, border and text colors of a tier for the given theme.

    Light mode uses the tier's pastel palette as-is. Dark mode tints the
    surface with the badge color and uses the pale border shade for text.
    """
    if not dark:
        return {
            "background": style.background_color,
            "border": style.border_color,
            "text": style.text_color,
        }
    return {
        "background": _rgba(style.badge_color, 0.15),
        "border": style.badge_color,
        "text": style.border_color,
    }


def banner_stylesheet(object_name: str, style: TierStyle, dark: bool = False) -> str:
    colors = tier_colors(style, dark)
    return (
        f"#{object_name} {{ background-color: {colors['background']};"
        f" border: 2px solid {colors['border']}; border-radius: 8px; }}"
        f" QLabel {{ color: {colors['text']}; }}"
    )


def badge_stylesheet(style: TierStyle) -> str:
    # The solid badge reads the same on both themes
    return (
        f"#riskBadge {{ background-color: {style.badge_color}; color: white;"
        f" font-size: 20px; padding: 10px 32px; border-radius: 8px; }}"
        f" #riskBadge:hover {{ background-color: {style.badge_hover_color}; }}"
    )


def panel_stylesheet(style: TierStyle, dark: bool = False) -> str:
    colors = tier_colors(style, dark)
    return (
        f"background-color: {colors['background']};"
        f" border: 4px solid {colors['border']}; border-radius: 12px;"
    )


def recommendation_list_stylesheet(style: TierStyle, dark: bool = False) -> str:
    colors = tier_colors(style, dark)
    return (
        f"#recommendationList {{ background-color: {colors['background']};"
        f" border: 3px solid {colors['border']}; border-radius: 10px; }}"
    )


def recommendation_icon_stylesheet(style: TierStyle, dark: bool = False) -> str:
    colors = tier_colors(style, dark)
    return (
        f"background-color: {colors['border']}; border-radius: 14px;"
        f" color: {style.text_color if not dark else 'white'};"
    )
