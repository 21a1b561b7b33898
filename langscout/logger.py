"""Logging setup with optional file output and input-text truncation."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

MAX_LOGGED_TEXT = 80


def preview(text: str, limit: int = MAX_LOGGED_TEXT) -> str:
    """Single-line, length-capped rendering of *text* for log messages."""
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: limit - 3] + "..."


class TruncatingFormatter(logging.Formatter):
    """Formatter that caps overly long log lines (input text can be large)."""

    def __init__(self, *args, max_length: int = 2000, **kwargs):
        super().__init__(*args, **kwargs)
        self.max_length = max_length

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        if len(msg) > self.max_length:
            msg = msg[: self.max_length] + f" ... [{len(msg) - self.max_length} chars truncated]"
        return msg


def setup_logger(
    name: str = "langscout",
    verbosity: int = 1,
    log_dir: Optional[str] = None,
    run_id: Optional[str] = None,
) -> logging.Logger:
    """Create or retrieve a configured logger."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logger.setLevel(level)

    fmt = TruncatingFormatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    if log_dir:
        logs = Path(log_dir)
        logs.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(logs / f"{run_id or generate_run_id()}.log", encoding="utf-8")
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


def generate_run_id() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
