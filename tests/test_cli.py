"""Tests for the command-line entry point."""

import json

import pytest

import main as cli
from langscout.config import DetectorSettings
from langscout.detector import LanguageDetector
from langscout.model_store import LanguageModelStore

from conftest import ToySource


@pytest.fixture
def toy_cli(monkeypatch):
    """Route the CLI's detector onto the toy models."""
    store = LanguageModelStore(ToySource())

    def make(settings: DetectorSettings) -> LanguageDetector:
        return LanguageDetector(settings, store=store)

    monkeypatch.setattr(cli, "LanguageDetector", make)
    return store


def run(capsys, *argv):
    code = cli.main(["-c", "/nonexistent/config.json", *argv])
    out, err = capsys.readouterr()
    return code, out, err


class TestDetectCommand:
    def test_plain(self, capsys, toy_cli):
        code, out, _ = run(capsys, "detect", "the weather is nice",
                           "--strategy", "with_languages", "-l", "en,de,fr")
        assert code == 0
        assert out.strip() == "english"

    def test_json(self, capsys, toy_cli):
        code, out, _ = run(capsys, "detect", "das Wetter ist schön", "--json",
                           "--strategy", "with_languages", "-l", "en,de,fr")
        assert code == 0
        assert json.loads(out) == {"result": "language", "language": "german"}

    def test_distribution(self, capsys, toy_cli):
        code, out, _ = run(capsys, "detect", "the weather is nice", "--distribution",
                           "--strategy", "with_languages", "-l", "en,de,fr")
        assert code == 0
        lines = out.strip().splitlines()
        assert len(lines) == 3
        assert lines[0].startswith("english")

    def test_no_match(self, capsys, toy_cli):
        code, out, _ = run(capsys, "detect", "   ")
        assert code == 0
        assert out.strip() == "no_match"

    def test_source_file(self, capsys, toy_cli, tmp_path):
        src = tmp_path / "in.txt"
        src.write_text("Quand on veut, on peut", encoding="utf-8")
        code, out, _ = run(capsys, "detect", "-s", str(src),
                           "--strategy", "with_languages", "-l", "en,fr")
        assert code == 0
        assert out.strip() == "french"

    def test_missing_source_file(self, capsys, toy_cli):
        code, _, err = run(capsys, "detect", "-s", "/nonexistent/in.txt")
        assert code == 1
        assert "not found" in err

    def test_insufficient_languages(self, capsys, toy_cli):
        code, _, err = run(capsys, "detect", "hello", "--strategy", "with_languages", "-l", "en")
        assert code == 1
        assert "Error" in err

    def test_bad_distance(self, capsys, toy_cli):
        code, _, err = run(capsys, "detect", "hello", "-d", "2.0")
        assert code == 1
        assert "Input error" in err


class TestCatalogCommands:
    def test_languages(self, capsys):
        code, out, _ = run(capsys, "languages", "--script", "cyrillic")
        assert code == 0
        assert [line.split()[0] for line in out.strip().splitlines()] == [
            "bulgarian", "macedonian", "russian", "ukrainian",
        ]

    def test_languages_json(self, capsys):
        code, out, _ = run(capsys, "languages", "--spoken", "--json")
        rows = json.loads(out)
        assert code == 0
        assert {"name": "english", "iso_code_639_1": "en", "iso_code_639_3": "eng",
                "scripts": ["latin"], "spoken": True} in rows

    def test_iso(self, capsys):
        code, out, _ = run(capsys, "iso", "lit")
        assert code == 0
        assert json.loads(out)["name"] == "lithuanian"

    def test_iso_unknown(self, capsys):
        code, _, err = run(capsys, "iso", "xyz")
        assert code == 1
        assert "Unrecognized" in err


class TestWarmup:
    def test_warmup(self, capsys, toy_cli):
        code, out, _ = run(capsys, "warmup")
        assert code == 0
        assert out.startswith("Loaded 54 language models")
