"""Configuration management for langscout."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from langscout.model_store import DEFAULT_SMOOTHING, DEFAULT_UNSEEN_LOG_PROB
from langscout.scorer import DEFAULT_ORDER_WEIGHTS

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class DetectorSettings:
    models_dir: str = ""  # empty: profiles bundled with langdetect
    smoothing: float = DEFAULT_SMOOTHING
    unseen_log_prob: float = DEFAULT_UNSEEN_LOG_PROB
    order_weights: dict[int, float] = field(
        default_factory=lambda: dict(DEFAULT_ORDER_WEIGHTS)
    )
    max_input_chars: int = 100_000
    default_minimum_relative_distance: float = 0.0
    preload: bool = False
    verbosity: int = 1
    log_dir: str = ""

    @property
    def orders(self) -> tuple[int, ...]:
        return tuple(sorted(self.order_weights))

    @classmethod
    def load(
        cls,
        config_path: str | Path | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> "DetectorSettings":
        """Load settings from JSON file, env vars, and optional overrides."""
        raw: dict[str, Any] = {}

        if config_path:
            p = Path(config_path)
            if p.exists():
                raw = json.loads(p.read_text(encoding="utf-8"))

        cfg = cls._from_dict(raw)

        models_dir = os.getenv("LANGSCOUT_MODELS_DIR", "")
        if models_dir and not cfg.models_dir:
            cfg.models_dir = models_dir

        verbosity = os.getenv("LANGSCOUT_VERBOSITY", "")
        if verbosity.isdigit():
            cfg.verbosity = int(verbosity)

        preload = os.getenv("LANGSCOUT_PRELOAD", "")
        if preload:
            cfg.preload = preload.strip().lower() in _TRUTHY

        if overrides:
            cfg._apply_overrides(overrides)

        cfg.validate()
        return cfg

    @classmethod
    def _from_dict(cls, d: dict[str, Any]) -> "DetectorSettings":
        cfg = cls()
        simple = {
            "models_dir", "smoothing", "unseen_log_prob", "max_input_chars",
            "default_minimum_relative_distance", "preload",
            "verbosity", "log_dir",
        }
        for k in simple:
            if k in d:
                setattr(cfg, k, d[k])

        weights = d.get("order_weights")
        if weights:
            cfg.order_weights = {int(n): float(w) for n, w in weights.items()}
        return cfg

    def _apply_overrides(self, ov: dict[str, Any]) -> None:
        for k, v in ov.items():
            if k == "order_weights" and isinstance(v, dict):
                self.order_weights = {int(n): float(w) for n, w in v.items()}
            elif hasattr(self, k) and not isinstance(v, dict):
                setattr(self, k, v)

    def validate(self) -> None:
        """Raise ValueError on settings the engine cannot run with."""
        if self.smoothing <= 0:
            raise ValueError(f"smoothing must be positive (got {self.smoothing})")
        if self.unseen_log_prob >= 0:
            raise ValueError(f"unseen_log_prob must be negative (got {self.unseen_log_prob})")
        if not self.order_weights:
            raise ValueError("order_weights must name at least one n-gram order")
        if any(n < 1 for n in self.order_weights):
            raise ValueError(f"n-gram orders must be >= 1 (got {sorted(self.order_weights)})")
        if all(w <= 0 for w in self.order_weights.values()):
            raise ValueError("at least one order weight must be positive")
        if not 0.0 <= self.default_minimum_relative_distance <= 0.99:
            raise ValueError(
                "default_minimum_relative_distance must be within [0.0, 0.99] "
                f"(got {self.default_minimum_relative_distance})"
            )
        if self.max_input_chars < 1:
            raise ValueError("max_input_chars must be positive")

    def to_dict(self) -> dict:
        return {
            "models_dir": self.models_dir,
            "smoothing": self.smoothing,
            "unseen_log_prob": self.unseen_log_prob,
            "order_weights": {str(n): w for n, w in sorted(self.order_weights.items())},
            "max_input_chars": self.max_input_chars,
            "default_minimum_relative_distance": self.default_minimum_relative_distance,
            "preload": self.preload,
            "verbosity": self.verbosity,
            "log_dir": self.log_dir,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
