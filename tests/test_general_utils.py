# tests/test_general_utils.py
"""Tests for general utils (load_config, log) and the scorer's config fallback."""

from __future__ import annotations

import json
import os
from importlib import import_module

import pytest

SC = import_module("snippet_expander.expansion.general.fuzzy.scoring")
LC = import_module("snippet_expander.expansion.general.utils.load_config")
LOG = import_module("snippet_expander.expansion.general.utils.log")

DataDirNotFound = LC.DataDirNotFound
ConfigFileNotFound = LC.ConfigFileNotFound
ConfigParseError = LC.ConfigParseError
ConfigTypeError = LC.ConfigTypeError
load_config = LC.load_config
clear_config_cache = LC.clear_config_cache


# ---------- Fixtures ----------
@pytest.fixture
def tmp_data_dir(tmp_path, monkeypatch):
    """Provide an isolated data/ dir and point loader via SNIPPET_EXPANDER_DATA_DIR."""
    data = tmp_path / "data"
    data.mkdir()
    monkeypatch.setenv("SNIPPET_EXPANDER_DATA_DIR", str(data))
    clear_config_cache()
    return data


@pytest.fixture(autouse=True)
def _reset_env_and_cache(monkeypatch):
    """Reset debug topics, data dir env and caches between tests."""
    monkeypatch.delenv("SNIPPET_DEBUG_TOPICS", raising=False)
    monkeypatch.delenv("SNIPPET_EXPANDER_DATA_DIR", raising=False)
    monkeypatch.delenv("DATA_DIR", raising=False)
    clear_config_cache()
    SC.clear_scoring_cache()
    LOG.reload_topics()
    yield
    SC.clear_scoring_cache()


# ---------- load_config tests ----------
def test_packaged_scoring_config_is_discovered():
    assert LC.resolve_data_dir().parts[-2:] == ("snippet_expander", "data")
    cfg = load_config("scoring")
    assert cfg["weights"] == {"alias": 1.6, "text": 1.0}
    assert cfg["subsequence"]["density_short"] == 0.66


def test_base_dir_is_used_without_env(tmp_path):
    (tmp_path / "limits.json").write_text(json.dumps({"max": 3}), encoding="utf-8")
    assert load_config("limits", base_dir=tmp_path) == {"max": 3}


def test_env_wins_over_base_dir(tmp_data_dir, tmp_path):
    (tmp_data_dir / "limits.json").write_text(json.dumps({"src": "env"}), encoding="utf-8")
    other = tmp_path / "other"
    other.mkdir()
    (other / "limits.json").write_text(json.dumps({"src": "base"}), encoding="utf-8")
    assert load_config("limits", base_dir=other) == {"src": "env"}


def test_load_config_cache_hit_and_clear(tmp_data_dir):
    p = tmp_data_dir / "limits.json"
    p.write_text(json.dumps({"max": 3}), encoding="utf-8")

    out1 = load_config("limits")
    out2 = load_config("limits")
    assert out2 is out1  # cached

    p.write_text(json.dumps({"max": 9}), encoding="utf-8")
    clear_config_cache()
    assert load_config("limits") == {"max": 9}


def test_validator_shapes_result_and_is_part_of_cache_key(tmp_data_dir):
    (tmp_data_dir / "limits.json").write_text(json.dumps({"max": 3}), encoding="utf-8")

    def doubled(d: dict) -> dict:
        return {"max": d["max"] * 2}

    assert load_config("limits", validator=doubled) == {"max": 6}
    assert load_config("limits") == {"max": 3}


def test_validator_errors_become_parse_errors(tmp_data_dir):
    (tmp_data_dir / "limits.json").write_text(json.dumps({"max": 3}), encoding="utf-8")

    def needs_min(d: dict) -> dict:
        return {"min": d["min"]}

    with pytest.raises(ConfigParseError):
        load_config("limits", validator=needs_min)


def test_non_object_and_missing_files(tmp_data_dir):
    (tmp_data_dir / "listy.json").write_text(json.dumps(["a", "b"]), encoding="utf-8")
    with pytest.raises(ConfigTypeError):
        load_config("listy")

    with pytest.raises(ConfigFileNotFound):
        load_config("does_not_exist")


def test_load_config_invalid_json(tmp_data_dir):
    (tmp_data_dir / "broken.json").write_text("{nope", encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_config("broken")


def test_load_config_refuses_escape_from_data_dir(tmp_data_dir):
    outside = tmp_data_dir.parent / "secret.json"
    outside.write_text(json.dumps({"x": 1}), encoding="utf-8")
    with pytest.raises(ConfigFileNotFound):
        load_config("../secret")


def test_load_config_missing_env_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("SNIPPET_EXPANDER_DATA_DIR", str(tmp_path / "nowhere"))
    with pytest.raises(DataDirNotFound):
        load_config("scoring")


def test_temp_data_dir_restores_env(tmp_path, monkeypatch):
    monkeypatch.setenv("SNIPPET_EXPANDER_DATA_DIR", "/before")
    with LC.temp_data_dir(tmp_path):
        assert os.environ["SNIPPET_EXPANDER_DATA_DIR"] == str(tmp_path)
    assert os.environ["SNIPPET_EXPANDER_DATA_DIR"] == "/before"


# ---------- scoring config ----------
def test_scoring_falls_back_to_defaults_without_config_file(tmp_data_dir, caplog):
    with caplog.at_level("WARNING"):
        cfg = SC.load_scoring_config()
    assert cfg["weights"] == SC.DEFAULT_WEIGHTS
    assert SC.default_thresholds() == SC.SubsequenceThresholds()
    assert "built-in defaults" in caplog.text


def test_scoring_falls_back_to_defaults_when_data_dir_is_missing(tmp_path, monkeypatch, caplog):
    monkeypatch.setenv("SNIPPET_EXPANDER_DATA_DIR", str(tmp_path / "gone"))
    with caplog.at_level("WARNING"):
        cfg = SC.load_scoring_config()
    assert cfg == {"subsequence": {}, "weights": SC.DEFAULT_WEIGHTS}
    assert SC.score("catalog", "cat") == 1003
    assert "built-in defaults" in caplog.text


def test_scoring_config_overrides_thresholds(tmp_data_dir):
    (tmp_data_dir / "scoring.json").write_text(
        json.dumps({"subsequence": {"density_short": 0.5}}), encoding="utf-8"
    )
    assert SC.default_thresholds().density_short == 0.5
    assert SC.score("ccaatt", "cat") == pytest.approx(420.0)


@pytest.mark.parametrize(
    "payload",
    [
        {"subsequence": {"bogus": 1}},
        {"subsequence": {"density_short": "high"}},
        {"weights": {"alias": -1}},
        {"weights": {"title": 2.0}},
    ],
)
def test_scoring_config_is_validated(tmp_data_dir, payload):
    (tmp_data_dir / "scoring.json").write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ConfigParseError):
        SC.load_scoring_config()


# ---------- log.debug tests ----------
def test_log_debug_respects_topics_env(monkeypatch, capsys):
    monkeypatch.setenv("SNIPPET_DEBUG_TOPICS", "cli")
    LOG.reload_topics()

    LOG.debug("hello on cli", topic="cli")
    LOG.debug("should be silent", topic="other")

    captured = capsys.readouterr()
    assert "hello on cli" in captured.err
    assert "[cli][DEBUG]" in captured.err
    assert "should be silent" not in captured.err


def test_log_debug_all_topics(monkeypatch, capsys):
    monkeypatch.setenv("SNIPPET_DEBUG_TOPICS", "all")
    LOG.reload_topics()

    LOG.debug("m1", topic="foo")
    LOG.debug("m2", topic="bar", level="info")

    captured = capsys.readouterr()
    assert "m1" in captured.err and "[bar][INFO] m2" in captured.err


def test_log_debug_formats_args_only_when_printed(monkeypatch, capsys):
    monkeypatch.setenv("SNIPPET_DEBUG_TOPICS", "*")
    LOG.reload_topics()
    LOG.debug("%d result(s) for %r", 2, "sig", topic="cli")
    assert "[cli][DEBUG] 2 result(s) for 'sig'" in capsys.readouterr().err

    monkeypatch.setenv("SNIPPET_DEBUG_TOPICS", "rank")
    LOG.reload_topics()
    # a mismatched format would raise if it were rendered
    LOG.debug("%d %d", "not-a-number", topic="cli")
    assert capsys.readouterr().err == ""
