"""Readers for n-gram model assets.

Two formats are supported:

* the language profiles shipped inside the ``langdetect`` distribution
  (one JSON file per language with ``freq``, ``n_words`` and ``name``);
* a versioned directory format, one ``<iso639_3>.json`` file per language::

      {"format_version": 1, "language": "eng",
       "orders": {"1": {"e": 1200, ...}, "2": {...}, "3": {...}},
       "totals": {"1": 90000, ...}}

  ``totals`` is optional.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

import langdetect

from langscout.errors import ModelLoadError
from langscout.model_store import ModelSource, NgramCounts
from langscout.models import Language

logger = logging.getLogger("langscout")

LANGDETECT_PROFILES_DIR = Path(langdetect.__file__).resolve().parent / "profiles"

FORMAT_VERSION = 1

# Profile names that differ from the ISO 639-1 code, keyed by ISO 639-3.
_PROFILE_NAMES: dict[str, tuple[str, ...]] = {
    "zho": ("zh-cn", "zh-tw"),
}


def profile_names_for(language: Language) -> tuple[str, ...]:
    names = _PROFILE_NAMES.get(language.iso_code_639_3)
    if names:
        return names
    if language.iso_code_639_1:
        return (language.iso_code_639_1,)
    return (language.iso_code_639_3,)


def _read_json(language: Language, path: Path) -> dict:
    if not path.is_file():
        raise ModelLoadError(language, f"model asset not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ModelLoadError(language, f"unreadable model asset {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ModelLoadError(language, f"model asset {path.name} is not a JSON object")
    return data


class LangdetectProfileSource:
    """Counts from langdetect's bundled profiles, case-folded."""

    def __init__(self, profiles_dir: Union[str, Path, None] = None):
        self.profiles_dir = Path(profiles_dir) if profiles_dir else LANGDETECT_PROFILES_DIR

    def load(self, language: Language) -> NgramCounts:
        counts: dict[int, dict[str, int]] = {}
        totals: dict[int, int] = {}

        for name in profile_names_for(language):
            data = _read_json(language, self.profiles_dir / name)
            freq = data.get("freq")
            n_words = data.get("n_words")
            if not isinstance(freq, dict) or not isinstance(n_words, list):
                raise ModelLoadError(language, f"profile {name} lacks freq/n_words")

            for gram, count in freq.items():
                folded = gram.lower()
                if len(folded) == len(gram):
                    gram = folded
                table = counts.setdefault(len(gram), {})
                table[gram] = table.get(gram, 0) + int(count)

            for i, total in enumerate(n_words):
                totals[i + 1] = totals.get(i + 1, 0) + int(total)

        logger.debug(
            "Read langdetect profile(s) %s for %s",
            ",".join(profile_names_for(language)), language.name,
        )
        return NgramCounts(counts=counts, totals=totals)


class JsonModelSource:
    """Counts from a directory of versioned ``<iso639_3>.json`` assets."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, language: Language) -> Path:
        return self.directory / f"{language.iso_code_639_3}.json"

    def load(self, language: Language) -> NgramCounts:
        path = self.path_for(language)
        data = _read_json(language, path)

        version = data.get("format_version")
        if version != FORMAT_VERSION:
            raise ModelLoadError(
                language, f"unsupported format_version {version!r} in {path.name}"
            )
        if data.get("language") != language.iso_code_639_3:
            raise ModelLoadError(
                language,
                f"{path.name} holds language {data.get('language')!r}",
            )

        orders = data.get("orders")
        if not isinstance(orders, dict):
            raise ModelLoadError(language, f"{path.name} has no 'orders' table")

        counts: dict[int, dict[str, int]] = {}
        try:
            for key, table in orders.items():
                n = int(key)
                counts[n] = {}
                for gram, count in table.items():
                    if len(gram) != n:
                        raise ModelLoadError(
                            language, f"{gram!r} listed under order {n} in {path.name}"
                        )
                    counts[n][gram] = int(count)
            totals = {int(k): int(v) for k, v in (data.get("totals") or {}).items()}
        except (AttributeError, TypeError, ValueError) as e:
            raise ModelLoadError(language, f"malformed counts in {path.name}: {e}") from e

        return NgramCounts(counts=counts, totals=totals)


def source_for_settings(settings) -> ModelSource:
    """Pick the asset reader named by *settings* (a DetectorSettings)."""
    models_dir: Optional[str] = settings.models_dir or None
    if models_dir:
        logger.info("Using n-gram models from %s", models_dir)
        return JsonModelSource(models_dir)
    return LangdetectProfileSource()
