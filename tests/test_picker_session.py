# tests/test_picker_session.py
"""PickerSession: initialization, consent-gated switches, edits and undo/redo."""

from __future__ import annotations

import asyncio
import random
from importlib import import_module

import pytest

ss = import_module("palette_studio.picker.session")
cv = import_module("palette_studio.picker.convert")
cmp = import_module("palette_studio.picker.compare")

PRIMARIES = ("#ff0000", "#00ff00", "#0000ff")
RED_SHADES = ("#ff0000", "#800000", "#ff8080")
MIXED = ("#ff0000", "#203040", "#eeeeee")


def _confirm(answer: bool, calls: list):
    async def confirm(context):
        calls.append(context)
        return answer

    return confirm


def _session(colors, answer=True, calls=None, **kw):
    calls = [] if calls is None else calls
    return ss.PickerSession(colors, confirm=_confirm(answer, calls), rng=random.Random(0), **kw)


# ──────────────────────────────────────────────────────────────────────────────
# Initialization
# ──────────────────────────────────────────────────────────────────────────────
def test_initialize_conforming_set_keeps_colors():
    calls: list = []
    s = _session(PRIMARIES, calls=calls)
    assert asyncio.run(s.initialize()) is True
    assert (s.space, s.mode) == ("hsl", "shared_lightness")
    assert s.colors == PRIMARIES
    assert calls == []
    assert not s.can_undo


def test_initialize_detects_shared_hue_saturation():
    s = _session(RED_SHADES)
    asyncio.run(s.initialize())
    assert s.mode == "shared_hue_saturation"
    assert s.picker_mode == "slider"
    assert len(s.lightnesses) == 3
    assert len(s.hue_saturations) == 1


def test_initialize_nonconforming_set_resets_history():
    calls: list = []
    s = _session(MIXED, calls=calls)
    assert asyncio.run(s.initialize()) is True
    assert calls == ["initialization"]
    assert s.colors[0] == MIXED[0]
    assert cmp.all_same_lightness(s.colors, "hsl")
    assert not s.can_undo
    assert s.history.present == s.colors


def test_initialize_declined_leaves_everything():
    s = _session(MIXED, answer=False, default_space="okhsl")
    assert asyncio.run(s.initialize()) is False
    assert s.colors == MIXED
    assert s.space == "okhsl"


def test_input_colors_are_canonicalized():
    s = ss.PickerSession(["#FF0000", "0f0", "nope"])
    assert s.colors == ("#ff0000", "#00ff00", "nope")
    assert s.history.present == s.colors
    s.reset_selection(["ABC"])
    assert s.colors == ("#aabbcc",)


def test_empty_colors_fall_back_to_default_color():
    s = ss.PickerSession([])
    assert s.colors == ("#ff0000",)
    assert asyncio.run(s.initialize()) is True


# ──────────────────────────────────────────────────────────────────────────────
# Mode / space switches
# ──────────────────────────────────────────────────────────────────────────────
def test_change_mode_declined_keeps_mode_and_colors():
    calls: list = []
    s = _session(PRIMARIES, answer=False, calls=calls)
    assert asyncio.run(s.change_mode("shared_hue_saturation")) is False
    assert calls == ["modeChange"]
    assert s.mode == "shared_lightness"
    assert s.colors == PRIMARIES


def test_change_mode_accepted_randomizes_and_can_be_undone():
    s = _session(PRIMARIES)
    assert asyncio.run(s.change_mode("slider")) is True
    assert s.mode == "shared_hue_saturation"
    assert s.colors[0] == "#ff0000"
    assert cmp.all_same_hue_and_saturation(s.colors, "hsl")
    assert s.can_undo
    s.undo()
    assert s.colors == PRIMARIES


def test_change_color_space_asks_with_its_context():
    calls: list = []
    s = _session(PRIMARIES, calls=calls)
    assert asyncio.run(s.change_color_space("okhsl")) is True
    assert calls == ["colorSpaceChange"]
    assert s.space == "okhsl"
    assert cmp.all_same_lightness(s.colors, "okhsl")


# ──────────────────────────────────────────────────────────────────────────────
# Edits
# ──────────────────────────────────────────────────────────────────────────────
def test_wheel_in_shared_lightness_moves_one_color():
    s = _session(PRIMARIES)
    s.set_wheel_color(240, 1.0, 1)
    assert s.colors == ("#ff0000", "#0000ff", "#0000ff")
    assert s.selected_index == 1


def test_wheel_in_shared_hue_saturation_moves_all_colors():
    s = _session(RED_SHADES)
    asyncio.run(s.initialize())
    s.set_wheel_color(120, 1.0, 0)
    assert s.colors[0] == "#00ff00"
    for c in s.colors:
        h, sat, _ = cv.hex_to_hsl(c)
        assert cmp.hue_distance(h, 1 / 3) < 0.01
        assert sat == pytest.approx(1.0, abs=0.01)


def test_slider_in_shared_lightness_moves_all_colors():
    s = _session(PRIMARIES)
    s.set_lightness(0.25, 0)
    assert s.colors == ("#800000", "#008000", "#000080")


def test_slider_in_shared_hue_saturation_moves_one_color():
    s = _session(RED_SHADES)
    asyncio.run(s.initialize())
    s.set_lightness(0.5, 2)
    assert s.colors == ("#ff0000", "#800000", "#ff0000")
    assert s.selected_index == 2


def test_set_hex_ignores_malformed_and_canonicalizes():
    s = _session(PRIMARIES)
    assert s.set_hex("zzz") is False
    assert s.colors == PRIMARIES
    assert s.set_hex("0F0") is True
    assert s.colors[0] == "#00ff00"


def test_set_hsl_and_selected_hsl():
    s = _session(PRIMARIES)
    s.select(2)
    s.set_hsl(120, 1.0, 0.5)
    assert s.selected_color == "#00ff00"
    h, sat, l = s.selected_hsl
    assert h == pytest.approx(120.0)
    assert (sat, l) == pytest.approx((1.0, 0.5))


def test_select_out_of_range():
    s = _session(PRIMARIES)
    with pytest.raises(IndexError):
        s.select(3)


def test_spread_pushes_history():
    s = _session(PRIMARIES)
    s.spread("lightness")
    ls = [cv.hex_to_hsl(c)[2] for c in s.colors]
    assert ls == pytest.approx([0.45, 0.5, 0.55], abs=0.005)
    assert s.can_undo


def test_undo_redo_and_reset_selection():
    s = _session(PRIMARIES)
    s.set_hex("#123456")
    s.set_hex("#abcdef")
    s.undo()
    assert s.colors[0] == "#123456"
    assert s.can_redo
    s.redo()
    assert s.colors[0] == "#abcdef"
    assert not s.can_redo

    s.reset_selection(["#000000", "#ffffff"])
    assert s.colors == ("#000000", "#ffffff")
    assert not s.can_undo and not s.can_redo
