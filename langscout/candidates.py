"""Candidate set construction from a selection strategy."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from langscout import catalog
from langscout.errors import InsufficientLanguagesError
from langscout.models import (
    AllLanguages,
    AllSpokenLanguages,
    AllWithScript,
    CandidateSet,
    Language,
    LanguageToken,
    Script,
    SelectionStrategy,
    WithLanguages,
    WithoutLanguages,
)

logger = logging.getLogger("langscout")

_SCRIPT_STRATEGY = re.compile(r"^all_languages_with_([a-z]+)_script$")

MIN_LANGUAGES = 2


def parse_strategy(name: str, languages: Iterable[LanguageToken] = ()) -> SelectionStrategy:
    """
    Turn a strategy name plus an explicit language list into a strategy.

    Shortcut strategies ignore *languages*.

    Raises:
        ValueError: If *name* is not a known strategy.
    """
    key = name.strip().lower()
    tokens = tuple(languages)

    if key == "all_languages":
        return AllLanguages()
    if key == "all_spoken_languages":
        return AllSpokenLanguages()
    if key == "with_languages":
        return WithLanguages(languages=tokens)
    if key == "without_languages":
        return WithoutLanguages(languages=tokens)

    m = _SCRIPT_STRATEGY.match(key)
    if m:
        try:
            return AllWithScript(script=Script(m.group(1)))
        except ValueError:
            pass

    raise ValueError(f"Unknown selection strategy: {name!r}")


def _resolve_distinct(tokens: Iterable[LanguageToken]) -> list[Language]:
    """Resolve every token, failing on the first unknown one, and dedupe."""
    seen: set[Language] = set()
    out: list[Language] = []
    for token in tokens:
        lang = catalog.resolve_language(token)
        if lang not in seen:
            seen.add(lang)
            out.append(lang)
    return out


def _in_catalog_order(languages: Iterable[Language]) -> tuple[Language, ...]:
    return tuple(sorted(languages, key=catalog.catalog_index))


def build_candidate_set(strategy: SelectionStrategy) -> CandidateSet:
    """
    Build the validated set of languages to score.

    Raises:
        UnrecognizedLanguageError: An explicit token is not in the catalog.
        InsufficientLanguagesError: Fewer than two languages listed, fewer
            than two remaining after exclusion, or an empty shortcut.
    """
    if isinstance(strategy, AllLanguages):
        languages = catalog.all_languages()
    elif isinstance(strategy, AllSpokenLanguages):
        languages = catalog.all_spoken_languages()
    elif isinstance(strategy, AllWithScript):
        languages = catalog.all_with_script(strategy.script)
    elif isinstance(strategy, WithLanguages):
        chosen = _resolve_distinct(strategy.languages)
        if len(chosen) < MIN_LANGUAGES:
            raise InsufficientLanguagesError(
                f"with_languages requires at least {MIN_LANGUAGES} distinct "
                f"languages (got {len(chosen)})."
            )
        languages = _in_catalog_order(chosen)
    elif isinstance(strategy, WithoutLanguages):
        excluded = set(_resolve_distinct(strategy.languages))
        if len(excluded) < MIN_LANGUAGES:
            raise InsufficientLanguagesError(
                f"without_languages requires at least {MIN_LANGUAGES} distinct "
                f"languages to exclude (got {len(excluded)})."
            )
        languages = tuple(lang for lang in catalog.all_languages() if lang not in excluded)
        if len(languages) < MIN_LANGUAGES:
            raise InsufficientLanguagesError(
                f"without_languages leaves only {len(languages)} candidate language(s)."
            )
    else:
        raise TypeError(f"Unsupported selection strategy: {type(strategy).__name__}")

    if not languages:
        raise InsufficientLanguagesError(
            f"Strategy {strategy.kind} selects no supported language."
        )

    logger.debug("Candidate set (%s): %d languages", strategy.kind, len(languages))
    return CandidateSet(languages=tuple(languages))
