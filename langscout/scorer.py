"""Character n-gram extraction and per-language log-likelihood scoring."""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Iterable, Mapping, Optional

from langdetect.utils.ngram import NGram

from langscout.model_store import LanguageModelStore
from langscout.models import Language

logger = logging.getLogger("langscout")

DEFAULT_ORDER_WEIGHTS: dict[int, float] = {1: 0.25, 2: 0.5, 3: 1.0}

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Map *text* onto the alphabet the n-gram tables are keyed by.

    Punctuation and digits become spaces, CJK ideographs are folded to their
    class representative, Vietnamese combining marks are composed, and the
    result is lower-cased with whitespace collapsed.
    """
    if not text:
        return ""
    text = NGram.normalize_vi(text)
    chars = "".join(NGram.normalize(ch) for ch in text)
    return _WHITESPACE.sub(" ", chars.lower()).strip()


def extract_ngrams(normalized: str, order: int) -> Counter:
    """
    Count overlapping n-grams of each word padded with one space per side.

    No n-gram spans a word boundary. Words shorter than the window
    contribute nothing at that order.
    """
    grams: Counter = Counter()
    for word in normalized.split(" "):
        if not word:
            continue
        padded = f" {word} "
        for i in range(len(padded) - order + 1):
            gram = padded[i:i + order]
            if gram.strip():
                grams[gram] += 1
    return grams


def extract_all(normalized: str, orders: Iterable[int]) -> dict[int, Counter]:
    """N-gram counts for every order the text is long enough for."""
    out: dict[int, Counter] = {}
    for n in sorted(orders):
        grams = extract_ngrams(normalized, n)
        if grams:
            out[n] = grams
    return out


class Scorer:
    """
    Scores text against candidate languages.

    The raw score of a language is the weighted sum over orders of the
    count-weighted log-probabilities of the text's n-grams. Scores only
    compare within a single call.
    """

    def __init__(
        self,
        store: LanguageModelStore,
        order_weights: Optional[Mapping[int, float]] = None,
    ):
        self.store = store
        weights = dict(order_weights or DEFAULT_ORDER_WEIGHTS)
        unknown = set(weights) - set(store.orders)
        if unknown:
            raise ValueError(
                f"Weights given for orders {sorted(unknown)} the store does not load"
            )
        if any(w < 0 for w in weights.values()):
            raise ValueError("Order weights must be non-negative")
        self.order_weights = {n: w for n, w in weights.items() if w > 0}
        if not self.order_weights:
            raise ValueError("At least one n-gram order needs a positive weight")

    def score(self, text: str, candidates: Iterable[Language]) -> dict[Language, float]:
        """
        Raw score per candidate language.

        Returns an empty mapping when there is nothing to discriminate on:
        blank text, no extractable n-gram at any weighted order, or no
        n-gram known to any candidate model.

        Raises:
            ModelLoadError: If a candidate's model cannot be loaded.
        """
        if not text or not text.strip():
            return {}

        normalized = normalize_text(text)
        ngrams = extract_all(normalized, self.order_weights)
        if not ngrams:
            logger.debug("No n-grams extracted from input; nothing to score")
            return {}

        scores: dict[Language, float] = {}
        covered = False

        for lang in candidates:
            model = self.store.model_for(lang)
            total = 0.0
            for n, grams in ngrams.items():
                table = model.log_probs[n]
                floor = model.floors[n]
                order_sum = 0.0
                for gram, count in grams.items():
                    logp = table.get(gram)
                    if logp is None:
                        logp = floor
                    else:
                        covered = True
                    order_sum += count * logp
                total += self.order_weights[n] * order_sum
            scores[lang] = total

        if not covered:
            logger.debug("No candidate model knows any n-gram of the input")
            return {}

        return scores
