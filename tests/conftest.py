"""Shared fixtures: small in-memory n-gram models built from toy corpora."""

import logging
import threading
import time

import pytest

from langscout import catalog
from langscout.config import DetectorSettings
from langscout.detector import LanguageDetector
from langscout.model_store import LanguageModelStore, NgramCounts
from langscout.scorer import extract_ngrams, normalize_text

ORDERS = (1, 2, 3)

CORPORA = {
    "ENGLISH": (
        "The quick brown fox jumps over the lazy dog. This is the house that "
        "Jack built. Where there is a will there is a way. The weather is nice "
        "and the people are friendly. They thought that it would rain."
    ),
    "GERMAN": (
        "Der schnelle braune Fuchs springt über den faulen Hund. Das ist das "
        "Haus vom Nikolaus. Wo ein Wille ist, ist auch ein Weg. Die Leute sind "
        "freundlich und das Wetter ist schön. Ich glaube nicht, dass es regnet."
    ),
    "FRENCH": (
        "Le renard brun rapide saute par dessus le chien paresseux. C'est la "
        "maison que Jacques a construite. Quand on veut, on peut. Les gens sont "
        "sympathiques et le temps est beau. Je pense qu'il va pleuvoir."
    ),
}

# Every other catalog language gets this same neutral model.
FILLER = "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod"


def counts_for(text: str) -> NgramCounts:
    normalized = normalize_text(text)
    counts = {n: dict(extract_ngrams(normalized, n)) for n in ORDERS}
    return NgramCounts(counts=counts, totals={})


class ToySource:
    """Builds counts from the toy corpora and records every load."""

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def load(self, language):
        with self._lock:
            self.calls.append(language.name)
        if self.delay:
            time.sleep(self.delay)
        return counts_for(CORPORA.get(language.name, FILLER))


@pytest.fixture
def english():
    return catalog.language_for_iso_code("en")


@pytest.fixture
def german():
    return catalog.language_for_iso_code("de")


@pytest.fixture
def french():
    return catalog.language_for_iso_code("fr")


@pytest.fixture
def toy_source():
    return ToySource()


@pytest.fixture
def toy_store(toy_source):
    return LanguageModelStore(toy_source, orders=ORDERS)


@pytest.fixture
def detector(toy_store):
    return LanguageDetector(DetectorSettings(), store=toy_store)


@pytest.fixture(autouse=True)
def reset_logger_handlers():
    """Drop handlers setup_logger attached so captured streams are not reused."""
    yield
    logger = logging.getLogger("langscout")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
