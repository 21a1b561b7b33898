"""Detector facade: the operations callers use to run detection."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Optional

from langscout import catalog
from langscout.candidates import build_candidate_set
from langscout.config import DetectorSettings
from langscout.errors import InputTooLongError
from langscout.logger import preview
from langscout.model_store import LanguageModelStore, shared_store
from langscout.models import CandidateSet, DetectionConfiguration, DetectionResult
from langscout.ranker import rank
from langscout.scorer import Scorer

logger = logging.getLogger("langscout")


class LanguageDetector:
    """
    Runs candidate selection, scoring and ranking for one text at a time.

    Holds no per-call state, so a single instance can serve concurrent
    callers. The model store is injected; without one the process-wide
    store matching the settings is used.
    """

    def __init__(
        self,
        settings: Optional[DetectorSettings] = None,
        store: Optional[LanguageModelStore] = None,
    ):
        self.settings = settings or DetectorSettings()
        self.store = store or shared_store(self.settings)
        weights = {
            n: w for n, w in self.settings.order_weights.items() if n in self.store.orders
        }
        self.scorer = Scorer(self.store, weights)

    def initialize(self, configuration: Optional[DetectionConfiguration] = None) -> None:
        """
        Load models eagerly, for every catalog language or only those the
        given configuration selects.

        Raises:
            ModelLoadError: If any model asset is missing or corrupt.
        """
        if configuration is None:
            languages = catalog.all_languages()
        else:
            languages = build_candidate_set(configuration.strategy).languages
        self.store.warm_up(languages)

    def configuration(self, **options: Any) -> DetectionConfiguration:
        """Build a configuration from flat options, applying settings defaults."""
        options.setdefault(
            "minimum_relative_distance",
            self.settings.default_minimum_relative_distance,
        )
        return DetectionConfiguration.from_options(**options)

    def candidates(self, configuration: DetectionConfiguration) -> CandidateSet:
        return build_candidate_set(configuration.strategy)

    def detect(
        self,
        text: str,
        configuration: Optional[DetectionConfiguration] = None,
        **options: Any,
    ) -> DetectionResult:
        """
        Detect the language of *text*.

        Args:
            text: Input text.
            configuration: Full configuration; when omitted it is built
                from *options* (strategy, languages,
                minimum_relative_distance, return_distribution).

        Returns:
            A single language, a ranked distribution, or no-match.

        Raises:
            UnrecognizedLanguageError, InsufficientLanguagesError: Invalid
                candidate configuration.
            InputTooLongError: Text longer than max_input_chars.
            ModelLoadError: A candidate model could not be loaded.
        """
        if configuration is None:
            configuration = self.configuration(**options)
        elif options:
            raise TypeError("Pass either a configuration or options, not both.")

        # Validation happens before any scoring.
        candidates = self.candidates(configuration)

        if len(text) > self.settings.max_input_chars:
            raise InputTooLongError(len(text), self.settings.max_input_chars)

        t0 = time.monotonic()
        scores = self.scorer.score(text, candidates)
        result = rank(
            scores,
            minimum_relative_distance=configuration.minimum_relative_distance,
            want_distribution=configuration.return_distribution,
        )

        logger.debug(
            "detect(%r) over %d candidates -> %s%s in %.1f ms",
            preview(text), len(candidates), result.kind.value,
            f" {result.language.name}" if result.language else "",
            (time.monotonic() - t0) * 1000,
        )
        return result


_default_detector: Optional[LanguageDetector] = None
_default_detector_lock = threading.Lock()


def default_detector() -> LanguageDetector:
    global _default_detector
    if _default_detector is not None:
        return _default_detector
    with _default_detector_lock:
        if _default_detector is None:
            _default_detector = LanguageDetector(DetectorSettings.load())
        return _default_detector


def initialize() -> None:
    """Load every catalog language's model for the default detector."""
    default_detector().initialize()


def detect(text: str, **options: Any) -> DetectionResult:
    """Detect with the default detector; see LanguageDetector.detect."""
    return default_detector().detect(text, **options)
