"""Flask JSON API for langscout."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from flask import Blueprint, Flask, current_app, jsonify, request
from pydantic import ValidationError
from werkzeug.middleware.proxy_fix import ProxyFix

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv
load_dotenv()

from langscout import catalog
from langscout.config import DetectorSettings
from langscout.detector import LanguageDetector
from langscout.errors import LangScoutError, ModelLoadError, UnrecognizedIsoCodeError
from langscout.logger import setup_logger
from langscout.models import Language

bp = Blueprint("main", __name__)

URL_PREFIX = os.getenv("URL_PREFIX", "")

logger = logging.getLogger("langscout")


def _detector() -> LanguageDetector:
    return current_app.extensions["langscout"]


def _language_row(lang: Language) -> dict:
    return {
        "name": lang.name.lower(),
        "iso_code_639_1": lang.iso_code_639_1,
        "iso_code_639_3": lang.iso_code_639_3,
        "scripts": sorted(s.value for s in lang.scripts),
        "spoken": lang.spoken,
    }


@bp.route("/api/health", methods=["GET"])
def health():
    store = _detector().store
    return jsonify({
        "status": "ok",
        "languages": len(catalog.all_languages()),
        "loaded_models": len(store.loaded_languages()),
    })


@bp.route("/api/languages", methods=["GET"])
def list_languages():
    script = request.args.get("script", "")
    spoken = request.args.get("spoken", "").lower() in {"1", "true", "yes"}

    try:
        languages = catalog.all_with_script(script) if script else catalog.all_languages()
    except ValueError:
        return jsonify({"error": f"Unknown script: {script}"}), 400

    if spoken:
        languages = tuple(lang for lang in languages if lang.spoken)
    return jsonify([_language_row(lang) for lang in languages])


@bp.route("/api/languages/<code>", methods=["GET"])
def get_language(code: str):
    try:
        lang = catalog.language_for_iso_code(code)
    except UnrecognizedIsoCodeError as e:
        return jsonify({"error": str(e)}), 404
    return jsonify(_language_row(lang))


@bp.route("/api/detect", methods=["POST"])
def detect():
    data = request.get_json(silent=True) or {}
    text = data.get("text")
    if not isinstance(text, str):
        return jsonify({"error": "Field 'text' (string) is required."}), 400

    return_distribution = data.get("return_distribution", False)
    if not isinstance(return_distribution, bool):
        return jsonify({"error": "Field 'return_distribution' must be a boolean."}), 400

    options = {
        "strategy": data.get("strategy", "all_languages"),
        "languages": data.get("languages") or [],
        "return_distribution": return_distribution,
    }
    if "minimum_relative_distance" in data:
        options["minimum_relative_distance"] = data["minimum_relative_distance"]

    try:
        result = _detector().detect(text, **options)
    except ModelLoadError as e:
        logger.error("Detection aborted: %s", e)
        return jsonify({"error": str(e)}), 500
    except ValidationError as e:
        return jsonify({
            "error": "Invalid options.",
            "details": e.errors(include_url=False, include_context=False),
        }), 400
    except (LangScoutError, ValueError, TypeError) as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(result.to_payload())


def create_app(
    settings: Optional[DetectorSettings] = None,
    detector: Optional[LanguageDetector] = None,
) -> Flask:
    settings = settings or DetectorSettings.load(config_path="config.json")
    setup_logger("langscout", verbosity=settings.verbosity, log_dir=settings.log_dir or None)

    app = Flask(__name__)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)
    app.json.ensure_ascii = False

    detector = detector or LanguageDetector(settings)
    if settings.preload:
        detector.initialize()
    app.extensions["langscout"] = detector

    if URL_PREFIX:
        app.register_blueprint(bp, url_prefix=URL_PREFIX)
    else:
        app.register_blueprint(bp)

    return app


def main():
    parser = argparse.ArgumentParser(description="langscout JSON API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8020)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    app = create_app()
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
