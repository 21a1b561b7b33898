"""Turns raw scores into confidences and applies the relative-distance rule."""

from __future__ import annotations

import math
from typing import Callable, Mapping, Optional

from langscout import catalog
from langscout.models import DetectionResult, Language, LanguageConfidence, ResultKind


def normalize_scores(scores: Mapping[Language, float]) -> dict[Language, float]:
    """Soft-max over raw log-likelihood scores; values sum to 1."""
    if not scores:
        return {}
    top = max(scores.values())
    weights = {lang: math.exp(s - top) for lang, s in scores.items()}
    total = math.fsum(weights.values())
    return {lang: w / total for lang, w in weights.items()}


def relative_distance(ranked: list[LanguageConfidence]) -> float:
    """(c0 - c1) / c0 for the top two entries; 1.0 with a single candidate."""
    if len(ranked) < 2:
        return 1.0
    first, second = ranked[0].value, ranked[1].value
    if first <= 0.0:
        return 0.0
    return (first - second) / first


def rank_confidences(
    scores: Mapping[Language, float],
    order_key: Optional[Callable[[Language], int]] = None,
) -> list[LanguageConfidence]:
    """Confidences sorted descending, ties broken by catalog order."""
    key = order_key or catalog.catalog_index
    confidences = normalize_scores(scores)
    ordered = sorted(confidences.items(), key=lambda item: (-item[1], key(item[0])))
    return [LanguageConfidence(language=lang, value=value) for lang, value in ordered]


def rank(
    scores: Mapping[Language, float],
    minimum_relative_distance: float = 0.0,
    want_distribution: bool = False,
    order_key: Optional[Callable[[Language], int]] = None,
) -> DetectionResult:
    """
    Decide the detection outcome from raw scores.

    Args:
        scores: Raw per-language scores from the Scorer; empty means there
            was nothing to score.
        minimum_relative_distance: Required separation of the top two
            confidences for a single winner.
        want_distribution: Return the whole ranked list regardless of the
            distance.
        order_key: Tie-break key; defaults to catalog order.
    """
    if not scores:
        return DetectionResult.no_match()

    ranked = rank_confidences(scores, order_key)
    distance = relative_distance(ranked)

    if want_distribution:
        return DetectionResult(
            kind=ResultKind.distribution,
            distribution=ranked,
            relative_distance=distance,
        )

    if distance >= minimum_relative_distance:
        return DetectionResult(
            kind=ResultKind.language,
            language=ranked[0].language,
            relative_distance=distance,
        )

    return DetectionResult(kind=ResultKind.no_match, relative_distance=distance)
