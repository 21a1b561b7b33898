"""Tests for settings loading and validation."""

import json
import os
import tempfile

import pytest

from langscout.config import DetectorSettings
from langscout.model_store import shared_store
from langscout.sources import JsonModelSource, LangdetectProfileSource


class TestDetectorSettings:
    def test_defaults(self):
        cfg = DetectorSettings()
        assert cfg.models_dir == ""
        assert cfg.smoothing == 1.0
        assert cfg.unseen_log_prob == -14.0
        assert cfg.order_weights == {1: 0.25, 2: 0.5, 3: 1.0}
        assert cfg.orders == (1, 2, 3)
        assert cfg.default_minimum_relative_distance == 0.0
        assert cfg.preload is False
        assert cfg.verbosity == 1

    def test_load_from_dict(self):
        d = {
            "smoothing": 0.5,
            "order_weights": {"1": 0.1, "2": 0.3},
            "max_input_chars": 500,
            "preload": True,
        }
        cfg = DetectorSettings._from_dict(d)
        assert cfg.smoothing == 0.5
        assert cfg.order_weights == {1: 0.1, 2: 0.3}
        assert cfg.orders == (1, 2)
        assert cfg.max_input_chars == 500
        assert cfg.preload is True

    def test_load_from_file(self):
        d = {"default_minimum_relative_distance": 0.25, "verbosity": 2}
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump(d, f)
            f.flush()
            cfg = DetectorSettings.load(config_path=f.name)

        os.unlink(f.name)
        assert cfg.default_minimum_relative_distance == 0.25
        assert cfg.verbosity == 2

    def test_load_missing_file(self):
        cfg = DetectorSettings.load(config_path="/nonexistent/path.json")
        assert cfg.max_input_chars == 100_000  # defaults

    def test_overrides(self):
        cfg = DetectorSettings()
        cfg._apply_overrides({"verbosity": 2, "order_weights": {"3": 2.0}})
        assert cfg.verbosity == 2
        assert cfg.order_weights == {3: 2.0}

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("LANGSCOUT_MODELS_DIR", "/opt/models")
        monkeypatch.setenv("LANGSCOUT_VERBOSITY", "0")
        monkeypatch.setenv("LANGSCOUT_PRELOAD", "yes")
        cfg = DetectorSettings.load(config_path=None)
        assert cfg.models_dir == "/opt/models"
        assert cfg.verbosity == 0
        assert cfg.preload is True

    def test_file_models_dir_wins_over_env(self, monkeypatch, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"models_dir": "/from/file"}), encoding="utf-8")
        monkeypatch.setenv("LANGSCOUT_MODELS_DIR", "/from/env")
        assert DetectorSettings.load(config_path=path).models_dir == "/from/file"

    @pytest.mark.parametrize("overrides", [
        {"smoothing": 0},
        {"unseen_log_prob": 0.0},
        {"unseen_log_prob": 2.5},
        {"order_weights": {}},
        {"order_weights": {"0": 1.0}},
        {"order_weights": {"1": 0.0}},
        {"default_minimum_relative_distance": 1.0},
        {"max_input_chars": 0},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ValueError):
            DetectorSettings.load(config_path=None, overrides=overrides)

    def test_to_dict_round_trip(self):
        cfg = DetectorSettings(smoothing=0.5)
        d = json.loads(cfg.to_json())
        assert d["order_weights"] == {"1": 0.25, "2": 0.5, "3": 1.0}
        assert DetectorSettings._from_dict(d) == cfg


class TestSharedStore:
    def test_same_settings_share_store(self):
        assert shared_store(DetectorSettings()) is shared_store(DetectorSettings())

    def test_unseen_log_prob_reaches_store(self):
        store = shared_store(DetectorSettings(unseen_log_prob=-11.0))
        assert store.unseen_log_prob == -11.0
        assert store is not shared_store(DetectorSettings())
        assert shared_store(DetectorSettings()).unseen_log_prob == -14.0

    def test_source_follows_settings(self, tmp_path):
        assert isinstance(shared_store(DetectorSettings()).source, LangdetectProfileSource)
        store = shared_store(DetectorSettings(models_dir=str(tmp_path)))
        assert isinstance(store.source, JsonModelSource)
        assert store is not shared_store(DetectorSettings())
