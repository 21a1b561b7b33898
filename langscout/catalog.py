"""Static registry of supported languages and ISO 639 lookups."""

from __future__ import annotations

from typing import NamedTuple, Optional, Union

from langscout.errors import UnrecognizedIsoCodeError, UnrecognizedLanguageError
from langscout.models import Language, Script

S = Script

# (name, ISO 639-1, ISO 639-3, scripts, spoken), alphabetical by name.
_TABLE: tuple[tuple[str, Optional[str], str, tuple[Script, ...], bool], ...] = (
    ("AFRIKAANS", "af", "afr", (S.latin,), True),
    ("ALBANIAN", "sq", "sqi", (S.latin,), True),
    ("ARABIC", "ar", "ara", (S.arabic,), True),
    ("BENGALI", "bn", "ben", (S.bengali,), True),
    ("BULGARIAN", "bg", "bul", (S.cyrillic,), True),
    ("CATALAN", "ca", "cat", (S.latin,), True),
    ("CHINESE", "zh", "zho", (S.han,), True),
    ("CROATIAN", "hr", "hrv", (S.latin,), True),
    ("CZECH", "cs", "ces", (S.latin,), True),
    ("DANISH", "da", "dan", (S.latin,), True),
    ("DUTCH", "nl", "nld", (S.latin,), True),
    ("ENGLISH", "en", "eng", (S.latin,), True),
    ("ESTONIAN", "et", "est", (S.latin,), True),
    ("FINNISH", "fi", "fin", (S.latin,), True),
    ("FRENCH", "fr", "fra", (S.latin,), True),
    ("GERMAN", "de", "deu", (S.latin,), True),
    ("GREEK", "el", "ell", (S.greek,), True),
    ("GUJARATI", "gu", "guj", (S.gujarati,), True),
    ("HEBREW", "he", "heb", (S.hebrew,), True),
    ("HINDI", "hi", "hin", (S.devanagari,), True),
    ("HUNGARIAN", "hu", "hun", (S.latin,), True),
    ("INDONESIAN", "id", "ind", (S.latin,), True),
    ("ITALIAN", "it", "ita", (S.latin,), True),
    ("JAPANESE", "ja", "jpn", (S.han, S.hiragana, S.katakana), True),
    ("KANNADA", "kn", "kan", (S.kannada,), True),
    ("KOREAN", "ko", "kor", (S.hangul,), True),
    ("LATVIAN", "lv", "lav", (S.latin,), True),
    ("LITHUANIAN", "lt", "lit", (S.latin,), True),
    ("MACEDONIAN", "mk", "mkd", (S.cyrillic,), True),
    ("MALAYALAM", "ml", "mal", (S.malayalam,), True),
    ("MARATHI", "mr", "mar", (S.devanagari,), True),
    ("NEPALI", "ne", "nep", (S.devanagari,), True),
    ("NORWEGIAN", "no", "nor", (S.latin,), True),
    ("PERSIAN", "fa", "fas", (S.arabic,), True),
    ("POLISH", "pl", "pol", (S.latin,), True),
    ("PORTUGUESE", "pt", "por", (S.latin,), True),
    ("PUNJABI", "pa", "pan", (S.gurmukhi,), True),
    ("ROMANIAN", "ro", "ron", (S.latin,), True),
    ("RUSSIAN", "ru", "rus", (S.cyrillic,), True),
    ("SLOVAK", "sk", "slk", (S.latin,), True),
    ("SLOVENE", "sl", "slv", (S.latin,), True),
    ("SOMALI", "so", "som", (S.latin,), True),
    ("SPANISH", "es", "spa", (S.latin,), True),
    ("SWAHILI", "sw", "swa", (S.latin,), True),
    ("SWEDISH", "sv", "swe", (S.latin,), True),
    ("TAGALOG", "tl", "tgl", (S.latin,), True),
    ("TAMIL", "ta", "tam", (S.tamil,), True),
    ("TELUGU", "te", "tel", (S.telugu,), True),
    ("THAI", "th", "tha", (S.thai,), True),
    ("TURKISH", "tr", "tur", (S.latin,), True),
    ("UKRAINIAN", "uk", "ukr", (S.cyrillic,), True),
    ("URDU", "ur", "urd", (S.arabic,), True),
    ("VIETNAMESE", "vi", "vie", (S.latin,), True),
    ("WELSH", "cy", "cym", (S.latin,), True),
)

_LANGUAGES: tuple[Language, ...] = tuple(
    Language(
        name=name,
        iso_code_639_1=iso1,
        iso_code_639_3=iso3,
        scripts=frozenset(scripts),
        spoken=spoken,
    )
    for name, iso1, iso3, scripts, spoken in _TABLE
)


class _Indexes(NamedTuple):
    by_name: dict[str, Language]
    by_iso_639_1: dict[str, Language]
    by_iso_639_3: dict[str, Language]
    order: dict[Language, int]


def _build_indexes(languages: tuple[Language, ...]) -> _Indexes:
    """
    Lookup tables for *languages*. Languages without an ISO 639-1 code are
    left out of that table only.

    Raises:
        RuntimeError: If a name or code is claimed by two languages.
    """
    by_name: dict[str, Language] = {}
    by_iso1: dict[str, Language] = {}
    by_iso3: dict[str, Language] = {}

    for lang in languages:
        entries = [(by_name, lang.name), (by_iso3, lang.iso_code_639_3)]
        if lang.iso_code_639_1:
            entries.append((by_iso1, lang.iso_code_639_1))
        for table, key in entries:
            if key in table:
                raise RuntimeError(
                    f"{key!r} is claimed by both {table[key].name} and {lang.name}"
                )
            table[key] = lang

    shared = set(by_iso1) & set(by_iso3)
    if shared:
        raise RuntimeError(f"Codes used as both ISO 639-1 and 639-3: {sorted(shared)}")

    order = {lang: i for i, lang in enumerate(languages)}
    return _Indexes(by_name, by_iso1, by_iso3, order)


_BY_NAME, _BY_ISO_639_1, _BY_ISO_639_3, _ORDER = _build_indexes(_LANGUAGES)


# ── Collections ──────────────────────────────────────────────────────────

def all_languages() -> tuple[Language, ...]:
    return _LANGUAGES


def all_spoken_languages() -> tuple[Language, ...]:
    return tuple(lang for lang in _LANGUAGES if lang.spoken)


def all_with_script(script: Union[Script, str]) -> tuple[Language, ...]:
    """Languages written in *script*, in catalog order."""
    script = Script(script.lower() if isinstance(script, str) else script)
    return tuple(lang for lang in _LANGUAGES if script in lang.scripts)


def catalog_index(language: Language) -> int:
    """Position of *language* in catalog order, used for tie-breaking."""
    try:
        return _ORDER[language]
    except KeyError:
        raise UnrecognizedLanguageError(language) from None


# ── ISO code lookups ─────────────────────────────────────────────────────

def _clean_code(code: object) -> str:
    if not isinstance(code, str):
        raise UnrecognizedIsoCodeError(code)
    return code.strip().lower()


def language_for_iso_code_639_1(code: str) -> Language:
    lang = _BY_ISO_639_1.get(_clean_code(code))
    if lang is None:
        raise UnrecognizedIsoCodeError(code)
    return lang


def language_for_iso_code_639_3(code: str) -> Language:
    lang = _BY_ISO_639_3.get(_clean_code(code))
    if lang is None:
        raise UnrecognizedIsoCodeError(code)
    return lang


def language_for_iso_code(code: str) -> Language:
    """Look up a language by either its ISO 639-1 or ISO 639-3 code."""
    cleaned = _clean_code(code)
    lang = _BY_ISO_639_1.get(cleaned) or _BY_ISO_639_3.get(cleaned)
    if lang is None:
        raise UnrecognizedIsoCodeError(code)
    return lang


def _known(language: Union[Language, str]) -> Language:
    if isinstance(language, Language):
        if language in _ORDER:
            return language
        raise UnrecognizedLanguageError(language)
    if isinstance(language, str):
        lang = _BY_NAME.get(language.strip().upper())
        if lang is not None:
            return lang
    raise UnrecognizedLanguageError(language)


def iso_code_639_1_for(language: Union[Language, str]) -> Optional[str]:
    """ISO 639-1 code of *language*, or None when the language has none."""
    return _known(language).iso_code_639_1


def iso_code_639_3_for(language: Union[Language, str]) -> str:
    return _known(language).iso_code_639_3


def resolve_language(token: Union[Language, str]) -> Language:
    """
    Resolve a language token from an explicit list.

    Accepts a Language, a language name in any case, or an ISO 639-1/639-3
    code.
    """
    try:
        return _known(token)
    except UnrecognizedLanguageError:
        if isinstance(token, str):
            cleaned = token.strip().lower()
            lang = _BY_ISO_639_1.get(cleaned) or _BY_ISO_639_3.get(cleaned)
            if lang is not None:
                return lang
        raise
