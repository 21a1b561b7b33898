"""Contract tests for data models."""

import json

import pytest
from pydantic import ValidationError

from langscout import catalog
from langscout.models import (
    AllLanguages,
    AllWithScript,
    CandidateSet,
    DetectionConfiguration,
    DetectionResult,
    Language,
    LanguageConfidence,
    ResultKind,
    Script,
    WithLanguages,
    WithoutLanguages,
)


class TestLanguage:
    def test_frozen_and_hashable(self):
        english = catalog.language_for_iso_code("en")
        with pytest.raises(ValidationError):
            english.name = "ANGLAIS"
        assert {english: 1}[catalog.language_for_iso_code("eng")] == 1

    def test_value_equality(self):
        a = Language(name="X", iso_code_639_3="xxx", scripts=frozenset({Script.latin}))
        b = Language(name="X", iso_code_639_3="xxx", scripts=frozenset({Script.latin}))
        assert a == b
        assert hash(a) == hash(b)

    def test_optional_iso_639_1(self):
        lang = Language(name="X", iso_code_639_3="xxx")
        assert lang.iso_code_639_1 is None

    def test_str(self):
        assert str(catalog.language_for_iso_code("fr")) == "FRENCH"


class TestDetectionConfiguration:
    def test_defaults(self):
        cfg = DetectionConfiguration()
        assert cfg.strategy == AllLanguages()
        assert cfg.minimum_relative_distance == 0.0
        assert cfg.return_distribution is False

    @pytest.mark.parametrize("value", [-0.1, 1.0, 0.995])
    def test_distance_out_of_range(self, value):
        with pytest.raises(ValidationError):
            DetectionConfiguration(minimum_relative_distance=value)

    def test_distance_bounds(self):
        assert DetectionConfiguration(minimum_relative_distance=0.99).minimum_relative_distance == 0.99

    def test_from_options(self):
        cfg = DetectionConfiguration.from_options(
            strategy="without_languages",
            languages=["en", "de"],
            minimum_relative_distance=0.2,
            return_distribution=True,
        )
        assert cfg.strategy == WithoutLanguages(languages=("en", "de"))
        assert cfg.minimum_relative_distance == 0.2
        assert cfg.return_distribution is True

    def test_from_options_script(self):
        cfg = DetectionConfiguration.from_options("all_languages_with_latin_script")
        assert cfg.strategy == AllWithScript(script=Script.latin)

    def test_strategy_from_json(self):
        cfg = DetectionConfiguration.model_validate({
            "strategy": {"kind": "with_languages", "languages": ["en", "ru"]},
            "return_distribution": True,
        })
        assert isinstance(cfg.strategy, WithLanguages)
        assert cfg.strategy.languages == ("en", "ru")

    def test_strategy_unknown_kind(self):
        with pytest.raises(ValidationError):
            DetectionConfiguration.model_validate({"strategy": {"kind": "some_languages"}})

    def test_script_strategy_requires_known_script(self):
        with pytest.raises(ValidationError):
            AllWithScript(script="runic")


class TestCandidateSet:
    def test_container_protocol(self):
        en = catalog.language_for_iso_code("en")
        de = catalog.language_for_iso_code("de")
        cs = CandidateSet(languages=(en, de))
        assert len(cs) == 2
        assert en in cs
        assert list(cs) == [en, de]


class TestDetectionResult:
    def test_no_match(self):
        result = DetectionResult.no_match()
        assert result.kind == ResultKind.no_match
        assert not result.is_match
        assert result.to_payload() == {"result": "no_match"}

    def test_language_payload(self):
        result = DetectionResult(
            kind=ResultKind.language, language=catalog.language_for_iso_code("he"),
        )
        assert result.is_match
        assert result.to_payload() == {"result": "language", "language": "hebrew"}

    def test_distribution_serialization(self):
        en = catalog.language_for_iso_code("en")
        ru = catalog.language_for_iso_code("ru")
        result = DetectionResult(
            kind=ResultKind.distribution,
            distribution=[
                LanguageConfidence(language=en, value=0.9),
                LanguageConfidence(language=ru, value=0.1),
            ],
        )
        payload = result.to_payload()
        assert payload["distribution"][0] == {"language": "english", "confidence": 0.9}

        data = json.loads(result.model_dump_json())
        assert data["kind"] == "distribution"
        assert data["distribution"][1]["language"]["iso_code_639_3"] == "rus"
