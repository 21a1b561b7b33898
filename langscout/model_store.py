"""Per-language n-gram models with a process-wide, init-once cache."""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, NamedTuple, Optional, Protocol

from langscout.errors import ModelLoadError
from langscout.models import Language

logger = logging.getLogger("langscout")

DEFAULT_ORDERS: tuple[int, ...] = (1, 2, 3)
DEFAULT_SMOOTHING = 1.0
# Log-probability of an n-gram a model has never seen. Shared by every
# language so that corpus size does not bias the score of unseen n-grams.
DEFAULT_UNSEEN_LOG_PROB = -14.0


class NgramCounts(NamedTuple):
    """Raw n-gram counts for one language as read from a model asset.

    ``totals`` holds the corpus token count per order; when an order is
    missing from it, the sum of that order's counts is used instead.
    """

    counts: dict[int, dict[str, int]]
    totals: dict[int, int]


class ModelSource(Protocol):
    def load(self, language: Language) -> NgramCounts: ...


@dataclass(frozen=True)
class LanguageModel:
    """Smoothed log-probabilities per n-gram order. Read-only."""

    language: Language
    log_probs: Mapping[int, Mapping[str, float]]
    floors: Mapping[int, float]

    @property
    def orders(self) -> tuple[int, ...]:
        return tuple(sorted(self.log_probs))

    def log_probability(self, ngram: str) -> float:
        order = len(ngram)
        return self.log_probs[order].get(ngram, self.floors[order])

    def __contains__(self, ngram: object) -> bool:
        if not isinstance(ngram, str):
            return False
        table = self.log_probs.get(len(ngram))
        return table is not None and ngram in table

    def size(self) -> int:
        return sum(len(t) for t in self.log_probs.values())


def build_language_model(
    language: Language,
    raw: NgramCounts,
    orders: Iterable[int] = DEFAULT_ORDERS,
    smoothing: float = DEFAULT_SMOOTHING,
    unseen_log_prob: Optional[float] = None,
) -> LanguageModel:
    """
    Apply additive smoothing to raw counts.

    For an order with total N and V distinct n-grams, a seen n-gram gets
    (c + a) / (N + a * (V + 1)). Unseen n-grams get *unseen_log_prob* when
    given, otherwise the additive floor a / (N + a * (V + 1)). The additive
    floor shrinks as N grows, so models compared against each other should
    share one *unseen_log_prob*.

    Raises:
        ModelLoadError: If a requested order is absent or empty.
    """
    if smoothing <= 0:
        raise ValueError("smoothing must be positive")
    if unseen_log_prob is not None and unseen_log_prob >= 0:
        raise ValueError("unseen_log_prob must be negative")

    log_probs: dict[int, dict[str, float]] = {}
    floors: dict[int, float] = {}

    for n in orders:
        table = raw.counts.get(n)
        if not table:
            raise ModelLoadError(language, f"no {n}-grams in model asset")

        total = raw.totals.get(n) or sum(table.values())
        denom = total + smoothing * (len(table) + 1)
        log_denom = math.log(denom)

        log_probs[n] = {
            gram: math.log(count + smoothing) - log_denom
            for gram, count in table.items()
        }
        if unseen_log_prob is None:
            floors[n] = math.log(smoothing) - log_denom
        else:
            floors[n] = unseen_log_prob

    return LanguageModel(language=language, log_probs=log_probs, floors=floors)


class _LoadSlot:
    """Guards the first load of one language."""

    __slots__ = ("lock", "error")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.error: Optional[ModelLoadError] = None


@dataclass
class LoadStatistics:
    loads: dict[Language, int] = field(default_factory=dict)
    failures: int = 0
    total_ms: float = 0.0


class LanguageModelStore:
    """
    Owns every loaded LanguageModel for the life of the process.

    Loaded models are read without locking. The first request for a
    language takes that language's slot lock, so concurrent first callers
    wait for the same in-flight load and exactly one load executes. A
    failed load is reported to every caller waiting on it and is not
    cached, so a later call starts a fresh attempt.
    """

    def __init__(
        self,
        source: ModelSource,
        orders: Iterable[int] = DEFAULT_ORDERS,
        smoothing: float = DEFAULT_SMOOTHING,
        unseen_log_prob: float = DEFAULT_UNSEEN_LOG_PROB,
        on_load: Optional[Callable[[Language], None]] = None,
    ):
        self.source = source
        self.orders = tuple(sorted(set(orders)))
        self.smoothing = smoothing
        self.unseen_log_prob = unseen_log_prob
        self.on_load = on_load
        self.statistics = LoadStatistics()
        self._models: dict[Language, LanguageModel] = {}
        self._slots: dict[Language, _LoadSlot] = {}
        self._lock = threading.Lock()

        if not self.orders or self.orders[0] < 1:
            raise ValueError(f"Invalid n-gram orders: {orders!r}")
        if unseen_log_prob >= 0:
            raise ValueError(f"unseen_log_prob must be negative (got {unseen_log_prob})")

    @property
    def load_counts(self) -> dict[Language, int]:
        """Number of executed loads per language."""
        with self._lock:
            return dict(self.statistics.loads)

    def model_for(self, language: Language) -> LanguageModel:
        model = self._models.get(language)
        if model is not None:
            return model

        with self._lock:
            slot = self._slots.get(language)
            if slot is None:
                slot = self._slots[language] = _LoadSlot()

        with slot.lock:
            model = self._models.get(language)
            if model is not None:
                return model
            if slot.error is not None:
                raise slot.error

            try:
                model = self._load(language)
            except ModelLoadError as e:
                slot.error = e
                with self._lock:
                    self.statistics.failures += 1
                    if self._slots.get(language) is slot:
                        del self._slots[language]
                raise

            self._models[language] = model
            with self._lock:
                self._slots.pop(language, None)
            return model

    def warm_up(self, languages: Iterable[Language]) -> None:
        """Load every model in *languages* now instead of on first use."""
        t0 = time.monotonic()
        count = 0
        for lang in languages:
            self.model_for(lang)
            count += 1
        logger.info(
            "Warm-up complete: %d languages ready in %.1f ms",
            count, (time.monotonic() - t0) * 1000,
        )

    def is_loaded(self, language: Language) -> bool:
        return language in self._models

    def loaded_languages(self) -> list[Language]:
        return list(self._models)

    def _load(self, language: Language) -> LanguageModel:
        t0 = time.monotonic()
        with self._lock:
            self.statistics.loads[language] = self.statistics.loads.get(language, 0) + 1

        try:
            raw = self.source.load(language)
            model = build_language_model(
                language, raw, orders=self.orders, smoothing=self.smoothing,
                unseen_log_prob=self.unseen_log_prob,
            )
        except ModelLoadError:
            logger.error("Model load failed for %s", language.name)
            raise
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Model load failed for %s: %s", language.name, e)
            raise ModelLoadError(language, str(e)) from e

        duration = (time.monotonic() - t0) * 1000
        with self._lock:
            self.statistics.total_ms += duration
        logger.info(
            "Loaded model for %s: %d n-grams in %.1f ms",
            language.name, model.size(), duration,
        )

        if self.on_load:
            self.on_load(language)
        return model


_shared_stores: dict[tuple, LanguageModelStore] = {}
_shared_stores_lock = threading.Lock()


def shared_store(settings) -> LanguageModelStore:
    """
    The process-wide store for the asset, orders and probabilities named by
    *settings* (a DetectorSettings). Detectors built from equivalent
    settings share one store and so load each model once.
    """
    key = (
        settings.models_dir or "",
        settings.orders,
        float(settings.smoothing),
        float(settings.unseen_log_prob),
    )
    store = _shared_stores.get(key)
    if store is not None:
        return store

    with _shared_stores_lock:
        store = _shared_stores.get(key)
        if store is None:
            from langscout.sources import source_for_settings

            store = LanguageModelStore(
                source_for_settings(settings),
                orders=settings.orders,
                smoothing=settings.smoothing,
                unseen_log_prob=settings.unseen_log_prob,
            )
            _shared_stores[key] = store
        return store
