# tests/test_color_names.py
"""Free-text color resolution (hex, CSS, XKCD, fuzzy) and nearest-name lookup."""

from __future__ import annotations

from importlib import import_module

import pytest

nm = import_module("palette_studio.color.names")

SMALL = {
    "green": "#008000",
    "red": "#ff0000",
    "navy blue": "#001146",
    "dusty rose": "#c0737a",
}


@pytest.fixture
def small_names(monkeypatch):
    monkeypatch.setattr(nm, "named_colors", lambda: dict(SMALL))
    return SMALL


@pytest.mark.parametrize(
    "raw,norm",
    [("Dusty_Rose", "dusty rose"), ("  navy-blue ", "navy blue"), ("a   b", "a b"), ("", "")],
)
def test_normalize_name(raw, norm):
    assert nm.normalize_name(raw) == norm


def test_hex_input_is_canonicalized(small_names):
    assert nm.resolve_color_input("#F00") == "#ff0000"
    assert nm.resolve_color_input("00FF00") == "#00ff00"
    assert nm.resolve_color_input("  #0000FF \n") == "#0000ff"


def test_css_name_via_webcolors(small_names):
    assert nm.resolve_color_input("navy") == "#000080"
    assert nm.resolve_color_input("Dark Slate Gray") == "#2f4f4f"


def test_exact_name_from_named_map(small_names):
    assert nm.resolve_color_input("dusty-rose") == "#c0737a"


def test_fuzzy_match_and_cutoff(small_names):
    assert nm.resolve_color_input("greeen") == "#008000"
    assert nm.resolve_color_input("greeen", fuzzy=False) is None
    assert nm.resolve_color_input("zzzzzz") is None


@pytest.mark.parametrize("bad", [None, "", "   ", 42])
def test_empty_or_non_string_input(bad):
    assert nm.resolve_color_input(bad) is None


def test_nearest_color_name_with_custom_map():
    known = {"red": "#ff0000", "blue": "#0000ff", "broken": "xyz"}
    assert nm.nearest_color_name("#fe0101", known) == "red"
    assert nm.nearest_color_name("#1010f0", known) == "blue"
    assert nm.nearest_color_name("not a color", known) is None


def test_oklab_distance_zero_for_same_color():
    assert nm.oklab_distance((10, 20, 30), (10, 20, 30)) == 0.0
    assert nm.oklab_distance((0, 0, 0), (255, 255, 255)) == pytest.approx(1.0, abs=1e-3)


def test_xkcd_names_through_matplotlib():
    pytest.importorskip("matplotlib")
    names = nm.named_colors()
    assert names["acid green"] == "#8ffe09"
    assert names["red"] == "#ff0000"  # CSS wins over XKCD
    assert nm.resolve_color_input("acid green") == "#8ffe09"
