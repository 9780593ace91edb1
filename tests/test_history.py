# tests/test_history.py
"""Color history: push/undo/redo transitions and branch discard."""

from __future__ import annotations

from importlib import import_module

hist = import_module("palette_studio.history.color_history")

A = ("#ff0000",)
B = ("#00ff00",)
C = ("#0000ff",)
D = ("#ffffff",)


def test_create_history_is_empty_around_present():
    h = hist.create_history(list(A))
    assert h.past == () and h.future == ()
    assert h.present == A
    assert not hist.can_undo(h) and not hist.can_redo(h)


def test_push_undo_redo_walkthrough():
    h = hist.create_history(A)
    h = hist.push_colors(h, B)
    h = hist.push_colors(h, C)
    assert h.past == (A, B) and h.present == C

    h = hist.undo(h)
    assert (h.past, h.present, h.future) == ((A,), B, (C,))

    h = hist.redo(h)
    assert (h.past, h.present, h.future) == ((A, B), C, ())


def test_push_after_undo_discards_redo_branch():
    h = hist.push_colors(hist.push_colors(hist.create_history(A), B), C)
    h = hist.undo(h)
    h = hist.push_colors(h, D)
    assert h.present == D
    assert h.past == (A, B)
    assert not hist.can_redo(h)


def test_push_identical_colors_is_noop():
    h = hist.push_colors(hist.create_history(A), B)
    assert hist.push_colors(h, list(B)) is h


def test_undo_and_redo_at_the_ends_are_noops():
    h = hist.create_history(A)
    assert hist.undo(h) is h
    assert hist.redo(h) is h


def test_reset_history_forgets_everything():
    h = hist.push_colors(hist.create_history(A), B)
    h = hist.reset_history(C)
    assert (h.past, h.present, h.future) == ((), C, ())
