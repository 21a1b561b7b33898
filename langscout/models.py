"""Pydantic data models for the langscout detection engine."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ── Enums ────────────────────────────────────────────────────────────────

class Script(str, Enum):
    latin = "latin"
    cyrillic = "cyrillic"
    arabic = "arabic"
    devanagari = "devanagari"
    greek = "greek"
    hebrew = "hebrew"
    bengali = "bengali"
    gurmukhi = "gurmukhi"
    gujarati = "gujarati"
    tamil = "tamil"
    telugu = "telugu"
    kannada = "kannada"
    malayalam = "malayalam"
    thai = "thai"
    han = "han"
    hiragana = "hiragana"
    katakana = "katakana"
    hangul = "hangul"


class ResultKind(str, Enum):
    language = "language"
    distribution = "distribution"
    no_match = "no_match"


# ── Catalog models ───────────────────────────────────────────────────────

class Language(BaseModel):
    """A supported language. Hashable; compared by value."""

    model_config = ConfigDict(frozen=True)

    name: str
    iso_code_639_1: Optional[str] = None
    iso_code_639_3: str
    scripts: frozenset[Script] = Field(default_factory=frozenset)
    spoken: bool = True

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Language({self.name})"


# ── Selection strategies ─────────────────────────────────────────────────

LanguageToken = Union[Language, str]


class AllLanguages(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["all_languages"] = "all_languages"


class AllSpokenLanguages(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["all_spoken_languages"] = "all_spoken_languages"


class AllWithScript(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["all_with_script"] = "all_with_script"
    script: Script


class WithLanguages(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["with_languages"] = "with_languages"
    languages: tuple[LanguageToken, ...] = ()


class WithoutLanguages(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["without_languages"] = "without_languages"
    languages: tuple[LanguageToken, ...] = ()


SelectionStrategy = Annotated[
    Union[AllLanguages, AllSpokenLanguages, AllWithScript, WithLanguages, WithoutLanguages],
    Field(discriminator="kind"),
]


class CandidateSet(BaseModel):
    """Validated, duplicate-free languages to score, in catalog order."""

    model_config = ConfigDict(frozen=True)

    languages: tuple[Language, ...]

    def __iter__(self):
        return iter(self.languages)

    def __len__(self) -> int:
        return len(self.languages)

    def __contains__(self, language: object) -> bool:
        return language in self.languages


class DetectionConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    strategy: SelectionStrategy = Field(default_factory=AllLanguages)
    minimum_relative_distance: float = Field(default=0.0, ge=0.0, le=0.99)
    return_distribution: bool = False

    @classmethod
    def from_options(
        cls,
        strategy: str = "all_languages",
        languages: Optional[list[LanguageToken]] = None,
        minimum_relative_distance: float = 0.0,
        return_distribution: bool = False,
    ) -> "DetectionConfiguration":
        """Build a configuration from the flat option names used by callers."""
        from langscout.candidates import parse_strategy

        return cls(
            strategy=parse_strategy(strategy, languages or []),
            minimum_relative_distance=minimum_relative_distance,
            return_distribution=return_distribution,
        )


# ── Results ──────────────────────────────────────────────────────────────

class LanguageConfidence(BaseModel):
    model_config = ConfigDict(frozen=True)

    language: Language
    value: float


class DetectionResult(BaseModel):
    kind: ResultKind = ResultKind.no_match
    language: Optional[Language] = None
    distribution: list[LanguageConfidence] = Field(default_factory=list)
    relative_distance: Optional[float] = None

    @classmethod
    def no_match(cls) -> "DetectionResult":
        return cls(kind=ResultKind.no_match)

    @property
    def is_match(self) -> bool:
        return self.kind != ResultKind.no_match

    def to_payload(self) -> dict:
        """Compact JSON-friendly form used by the CLI and web API."""
        if self.kind == ResultKind.language:
            return {"result": "language", "language": self.language.name.lower()}
        if self.kind == ResultKind.distribution:
            return {
                "result": "distribution",
                "distribution": [
                    {"language": c.language.name.lower(), "confidence": c.value}
                    for c in self.distribution
                ],
            }
        return {"result": "no_match"}
