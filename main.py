#!/usr/bin/env python3
"""CLI entry point for langscout."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

from langscout import catalog
from langscout.config import DetectorSettings
from langscout.detector import LanguageDetector
from langscout.errors import LangScoutError
from langscout.logger import setup_logger
from langscout.models import Language, ResultKind


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="langscout",
        description="Offline n-gram language identification.",
    )
    parser.add_argument(
        "-c", "--config",
        default="config.json",
        help="Path to config file (default: config.json)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=None,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    det = sub.add_parser("detect", help="Detect the language of a text")
    det.add_argument("text", nargs="?", default=None, help="Text to analyze")
    det.add_argument(
        "-s", "--source",
        default="",
        help="Read the text from this file instead ('-' for stdin)",
    )
    det.add_argument(
        "--strategy",
        default="all_languages",
        help="all_languages, all_spoken_languages, all_languages_with_<script>_script, "
             "with_languages or without_languages (default: all_languages)",
    )
    det.add_argument(
        "-l", "--languages",
        default="",
        help="Comma-separated language names or ISO codes for with/without_languages",
    )
    det.add_argument(
        "-d", "--min-distance",
        type=float,
        default=None,
        help="Minimum relative distance (0.0 - 0.99)",
    )
    det.add_argument(
        "--distribution",
        action="store_true",
        help="Print confidence values for every candidate",
    )
    det.add_argument("--json", action="store_true", help="Print JSON output")

    langs = sub.add_parser("languages", help="List supported languages")
    langs.add_argument("--spoken", action="store_true", help="Only spoken languages")
    langs.add_argument("--script", default="", help="Only languages written in this script")
    langs.add_argument("--json", action="store_true", help="Print JSON output")

    iso = sub.add_parser("iso", help="Look up a language by ISO code or name")
    iso.add_argument("query", help="ISO 639-1/639-3 code or language name")

    sub.add_parser("warmup", help="Load every language model and report timing")
    return parser


def _language_row(lang: Language) -> dict:
    return {
        "name": lang.name.lower(),
        "iso_code_639_1": lang.iso_code_639_1,
        "iso_code_639_3": lang.iso_code_639_3,
        "scripts": sorted(s.value for s in lang.scripts),
        "spoken": lang.spoken,
    }


def _read_text(args: argparse.Namespace) -> Optional[str]:
    if args.source == "-":
        return sys.stdin.read()
    if args.source:
        path = Path(args.source)
        if not path.exists():
            print(f"Error: source file not found: {path}", file=sys.stderr)
            return None
        return path.read_text(encoding="utf-8")
    if args.text is None:
        print("Error: provide text or --source.", file=sys.stderr)
        return None
    return args.text


def cmd_detect(args: argparse.Namespace, detector: LanguageDetector) -> int:
    text = _read_text(args)
    if text is None:
        return 1

    options = {
        "strategy": args.strategy,
        "languages": [t.strip() for t in args.languages.split(",") if t.strip()],
        "return_distribution": args.distribution,
    }
    if args.min_distance is not None:
        options["minimum_relative_distance"] = args.min_distance

    result = detector.detect(text, **options)

    if args.json:
        print(json.dumps(result.to_payload(), ensure_ascii=False))
    elif result.kind == ResultKind.language:
        print(result.language.name.lower())
    elif result.kind == ResultKind.distribution:
        for entry in result.distribution:
            print(f"{entry.language.name.lower():<12} {entry.value:.4f}")
    else:
        print("no_match")
    return 0


def cmd_languages(args: argparse.Namespace) -> int:
    if args.script:
        languages = catalog.all_with_script(args.script)
    else:
        languages = catalog.all_languages()

    if args.spoken:
        languages = tuple(lang for lang in languages if lang.spoken)

    if args.json:
        print(json.dumps([_language_row(lang) for lang in languages], ensure_ascii=False))
    else:
        for lang in languages:
            print(f"{lang.name.lower():<12} {lang.iso_code_639_1 or '-':<3} {lang.iso_code_639_3}")
    return 0


def cmd_iso(args: argparse.Namespace) -> int:
    lang = catalog.resolve_language(args.query)
    print(json.dumps(_language_row(lang), ensure_ascii=False))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {}
    if args.verbose is not None:
        overrides["verbosity"] = args.verbose + 1

    try:
        settings = DetectorSettings.load(config_path=args.config, overrides=overrides)
    except ValueError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    setup_logger("langscout", verbosity=settings.verbosity, log_dir=settings.log_dir or None)

    try:
        if args.command == "languages":
            return cmd_languages(args)
        if args.command == "iso":
            return cmd_iso(args)

        detector = LanguageDetector(settings)
        if args.command == "warmup":
            detector.initialize()
            stats = detector.store.statistics
            print(f"Loaded {len(stats.loads)} language models in {stats.total_ms:.1f} ms")
            return 0
        return cmd_detect(args, detector)
    except LangScoutError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
