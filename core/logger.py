"""Root logging configuration for the desktop app."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
LOG_LEVEL_ENV = "LUNGSCAN_LOG_LEVEL"


def _level_from_env(default: int = logging.INFO) -> int:
    raw = os.getenv(LOG_LEVEL_ENV)
    if not raw:
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Configure the root logger once. Later calls return it unchanged."""
    root = logging.getLogger()
    if getattr(root, "_lungscan_configured", False):
        return root

    root.setLevel(level if level is not None else _level_from_env())
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root._lungscan_configured = True
    return root
