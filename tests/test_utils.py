# tests/test_utils.py
"""load_config (cache, modes, validation, errors, data-dir override), picker
settings on top of it, and the topic-gated debug printer."""

from __future__ import annotations

import io
import json
import os
from importlib import import_module

import pytest

LC = import_module("palette_studio.utils.load_config")
LOG = import_module("palette_studio.utils.log")
ST = import_module("palette_studio.picker.settings")


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _fresh_caches():
    LC.clear_config_cache()
    ST.reload_picker_settings()
    yield
    LC.clear_config_cache()
    ST.reload_picker_settings()


# ──────────────────────────────────────────────────────────────────────────────
# load_config
# ──────────────────────────────────────────────────────────────────────────────
def test_raw_load_is_cached(tmp_path):
    _write(tmp_path / "things.json", {"a": [1, 2]})
    first = LC.load_config("things", base_dir=tmp_path)
    second = LC.load_config("things.json", base_dir=tmp_path)
    assert first == {"a": [1, 2]}
    assert first is second


def test_validator_gets_a_fresh_copy_each_call(tmp_path):
    _write(tmp_path / "cfg.json", {"x": 1})

    def validator(d):
        assert "added" not in d
        d["added"] = True
        return d

    a = LC.load_config("cfg", mode="validated_dict", base_dir=tmp_path, validator=validator)
    b = LC.load_config("cfg", mode="validated_dict", base_dir=tmp_path, validator=validator)
    assert a == b == {"x": 1, "added": True}
    assert a is not b


def test_validated_dict_requires_an_object(tmp_path):
    _write(tmp_path / "list.json", [1, 2, 3])
    with pytest.raises(LC.ConfigTypeError):
        LC.load_config("list", mode="validated_dict", base_dir=tmp_path)


def test_validator_errors_become_parse_errors(tmp_path):
    _write(tmp_path / "cfg.json", {"x": 1})

    def validator(d):
        raise KeyError("y")

    with pytest.raises(LC.ConfigParseError):
        LC.load_config("cfg", mode="validated_dict", base_dir=tmp_path, validator=validator)


def test_missing_file_and_path_escape(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    _write(tmp_path / "secret.json", {"k": "v"})
    with pytest.raises(LC.ConfigFileNotFound):
        LC.load_config("absent", base_dir=data_dir)
    with pytest.raises(LC.ConfigFileNotFound):
        LC.load_config("../secret", base_dir=data_dir)


def test_invalid_json_and_unknown_mode(tmp_path):
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(LC.ConfigParseError):
        LC.load_config("broken", base_dir=tmp_path)
    with pytest.raises(ValueError):
        LC.load_config("broken", mode="yaml", base_dir=tmp_path)  # type: ignore[call-overload]


def test_comments_need_json5(tmp_path):
    (tmp_path / "c.json").write_text('{"a": 1, // note\n}', encoding="utf-8")
    if LC._json5 is None:
        with pytest.raises(LC.ConfigParseError):
            LC.load_config("c", base_dir=tmp_path, allow_comments=True)
    else:
        assert LC.load_config("c", base_dir=tmp_path, allow_comments=True) == {"a": 1}


def test_temp_data_dir_overrides_and_restores(tmp_path):
    _write(tmp_path / "only_here.json", {"ok": True})
    before = os.environ.get("PALETTE_DATA_DIR")
    with LC.temp_data_dir(tmp_path):
        assert LC.load_config("only_here") == {"ok": True}
    assert os.environ.get("PALETTE_DATA_DIR") == before


def test_packaged_data_dir_is_discovered():
    raw = LC.load_config("picker_settings")
    assert raw["defaults"]["color_space"] == "hsl"


# ──────────────────────────────────────────────────────────────────────────────
# Picker settings
# ──────────────────────────────────────────────────────────────────────────────
def test_default_picker_settings():
    s = ST.get_picker_settings()
    assert s.default_space == "hsl"
    assert s.default_mode == "shared_lightness"
    assert s.fallback_color == "#ff0000"
    assert s.tolerance("hsl") == ST.Tolerance(lightness=0.05, hue=0.03, saturation=0.10)
    assert s.tolerance("okhsl") == ST.Tolerance(lightness=0.02, hue=0.01, saturation=0.05)
    assert s.random_ranges["lightness"] == (0.2, 0.8)
    assert s.min_spread == pytest.approx(0.1)
    assert ST.get_picker_settings() is s


def _settings_doc(**overrides):
    doc = {
        "defaults": {"color_space": "okhsl", "mode": "slider", "fallback_color": "#00FF00"},
        "tolerances": {
            "hsl": {"lightness": 0.05, "hue": 0.03, "saturation": 0.1},
            "okhsl": {"lightness": 0.02, "hue": 0.01, "saturation": 0.05},
        },
        "random_ranges": {"hue": [0, 1], "saturation": [0.3, 1], "lightness": [0.2, 0.8]},
        "spread": {"min_range": 0.2},
        "names": {"fuzzy_cutoff": 90},
    }
    doc.update(overrides)
    return doc


def test_settings_override_via_data_dir(tmp_path):
    _write(tmp_path / "picker_settings.json", _settings_doc())
    with LC.temp_data_dir(tmp_path):
        ST.reload_picker_settings()
        s = ST.get_picker_settings()
    assert s.default_space == "okhsl"
    assert s.default_mode == "shared_hue_saturation"
    assert s.fallback_color == "#00ff00"
    assert s.min_spread == pytest.approx(0.2)


@pytest.mark.parametrize(
    "override,exc",
    [
        ({"tolerances": {"hsl": {"lightness": 0.05, "hue": 0.03, "saturation": 0.1}}}, LC.ConfigTypeError),
        ({"tolerances": "loose"}, LC.ConfigTypeError),
        ({"random_ranges": {"hue": [0.9, 0.1], "saturation": [0, 1], "lightness": [0, 1]}}, LC.ConfigParseError),
        ({"defaults": {"color_space": "lab"}}, LC.ConfigParseError),
        ({"spread": {"min_range": "wide"}}, LC.ConfigTypeError),
    ],
)
def test_invalid_settings_raise(tmp_path, override, exc):
    _write(tmp_path / "picker_settings.json", _settings_doc(**override))
    with LC.temp_data_dir(tmp_path):
        ST.reload_picker_settings()
        with pytest.raises(exc):
            ST.get_picker_settings()


# ──────────────────────────────────────────────────────────────────────────────
# Debug topics
# ──────────────────────────────────────────────────────────────────────────────
@pytest.fixture
def topics(monkeypatch):
    def _set(value):
        if value is None:
            monkeypatch.delenv("PALETTE_DEBUG_TOPICS", raising=False)
        else:
            monkeypatch.setenv("PALETTE_DEBUG_TOPICS", value)
        LOG.reload_topics()

    yield _set
    monkeypatch.delenv("PALETTE_DEBUG_TOPICS", raising=False)
    LOG.reload_topics()


def test_debug_is_quiet_without_topics(topics):
    topics(None)
    buf = io.StringIO()
    LOG.debug("hidden", topic="constraints", stream=buf)
    assert buf.getvalue() == ""
    assert LOG.topic_enabled("constraints") is False


def test_debug_prints_enabled_topic_only(topics):
    topics("Constraints, cli")
    buf = io.StringIO()
    LOG.debug("shown", topic="constraints", stream=buf)
    LOG.debug("hidden", topic="picker", stream=buf)
    out = buf.getvalue()
    assert "[constraints][DEBUG] shown" in out
    assert "hidden" not in out
    assert LOG.topic_enabled(" CLI ") is True
    assert LOG.topic_enabled("picker") is False


def test_debug_all_topics(topics):
    topics("all")
    buf = io.StringIO()
    LOG.debug("anything", topic="whatever", level="info", stream=buf)
    assert "[whatever][INFO] anything" in buf.getvalue()
