"""Internationalization for LungScan.

Usage: from i18n import t; t("key", name=value)
"""

import json
from collections import OrderedDict
from pathlib import Path

from PyQt6.QtCore import QSettings

LANGUAGES = OrderedDict([
    ("en", {"name": "English", "native_name": "English"}),
])

_translations: dict = {}
_fallback: dict = {}
_current_lang: str = "en"


def _get_i18n_dir() -> Path:
    """Get the directory containing translation JSON files."""
    import sys
    if getattr(sys, "frozen", False):
        return Path(sys._MEIPASS) / "i18n"
    return Path(__file__).parent


def _load_json(lang_code: str) -> dict:
    """Load a translation JSON file."""
    path = _get_i18n_dir() / f"{lang_code}.json"
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def init():
    """Initialize the translation system. Call once at app startup."""
    global _translations, _fallback, _current_lang
    settings = QSettings("LungScan", "LungScan")
    _current_lang = settings.value("language", "en")
    if _current_lang not in LANGUAGES:
        _current_lang = "en"

    _fallback = _load_json("en")
    if _current_lang != "en":
        _translations = _load_json(_current_lang)
    else:
        _translations = _fallback


def t(key: str, **kwargs) -> str:
    """Translate a key with optional format arguments.

    Falls back: current language -> English -> raw key.
    """
    text = _translations.get(key) or _fallback.get(key) or key
    if kwargs:
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return text
    return text
