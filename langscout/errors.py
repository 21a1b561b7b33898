"""Exception types raised by the detection engine.

Validation failures subclass ValueError and model asset failures subclass
RuntimeError, so callers that only catch the builtin types keep working.
"""

from __future__ import annotations


class LangScoutError(Exception):
    """Base class for all langscout errors."""


class UnrecognizedIsoCodeError(LangScoutError, ValueError):
    def __init__(self, code: object):
        self.code = code
        super().__init__(f"Unrecognized ISO 639 code: {code!r}")


class UnrecognizedLanguageError(LangScoutError, ValueError):
    def __init__(self, language: object):
        self.language = language
        super().__init__(f"Unrecognized language: {language!r}")


class InsufficientLanguagesError(LangScoutError, ValueError):
    """Fewer than two candidate languages to choose between."""


class InputTooLongError(LangScoutError, ValueError):
    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(
            f"Input text exceeds maximum of {limit} characters (got {length})."
        )


class ModelLoadError(LangScoutError, RuntimeError):
    """The n-gram model asset for a language is missing or corrupt."""

    def __init__(self, language: object, reason: str):
        self.language = language
        self.reason = reason
        super().__init__(f"Failed to load language model for {language}: {reason}")
