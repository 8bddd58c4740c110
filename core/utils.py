"""Shared utilities, dataclasses, enums, and platform-specific paths."""

import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Tuple


# --- Type aliases ---

ProgressCallback = Callable[[int], None]  # percent 0-100
CompleteCallback = Callable[["RawAnalysisOutput"], None]


# --- Enums ---

class RiskTier(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SessionState(Enum):
    IDLE = "idle"
    STAGED = "staged"
    ANALYZING = "analyzing"
    RESULTED = "resulted"


class RecommendationIcon(Enum):
    HEART = "heart"
    APPLE = "apple"
    CIGARETTE = "cigarette"
    STETHOSCOPE = "stethoscope"
    WIND = "wind"
    DUMBBELL = "dumbbell"
    ALERT = "alert"
    ACTIVITY = "activity"


# --- Dataclasses ---

@dataclass(frozen=True)
class ImageRef:
    """A user-selected image, encoded as a data URI."""
    data_uri: str
    file_name: str = ""
    size_bytes: int = 0
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class RawAnalysisOutput:
    """Numbers produced by one completed simulated run."""
    accuracy_pct: float
    confidence_pct: float
    is_positive: bool


@dataclass(frozen=True)
class RecommendationItem:
    icon: RecommendationIcon
    text: str


@dataclass(frozen=True)
class TierStyle:
    """Colors and badge styling used to present a risk tier."""
    label: str
    text_color: str
    background_color: str
    border_color: str
    badge_color: str
    badge_hover_color: str
    status_icon: str


@dataclass(frozen=True)
class Classification:
    risk_tier: RiskTier
    prediction_text: str
    recommendations: Tuple[RecommendationItem, ...]


@dataclass(frozen=True)
class AnalysisResult:
    """View-model for a completed analysis."""
    accuracy_pct: float
    confidence_pct: float
    prediction_text: str
    risk_tier: RiskTier
    recommendations: Tuple[RecommendationItem, ...]
    style: TierStyle
    disclaimer: str = (
        "This is a simulated screening aid, NOT a diagnostic tool. "
        "Always consult a qualified healthcare professional."
    )


@dataclass
class SimulationConfig:
    """Timing of a simulated analysis run, in milliseconds."""
    tick_interval_ms: int = 200
    progress_step: int = 10
    result_delay_ms: int = 2000


@dataclass
class ValidationResult:
    """Result of image file validation."""
    valid: bool
    error_message: str = ""
    image_width: int = 0
    image_height: int = 0
    file_size_bytes: int = 0
    mime_type: str = ""


# --- Platform-specific paths ---

def get_data_dir() -> Path:
    """Get the platform-specific application data directory."""
    if sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support" / "LungScan"
    elif sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home())) / "LungScan"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "lungscan"
    base.mkdir(parents=True, exist_ok=True)
    return base


def get_log_dir() -> Path:
    """Get the directory for application log files."""
    log_dir = get_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


# --- Formatting ---

def format_file_size(size_bytes: int) -> str:
    """Format byte count as human-readable string."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"


def format_percent(value: float) -> str:
    """Format a 0-100 percentage with two decimals."""
    return f"{value:.2f}%"
