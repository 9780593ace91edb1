"""
color_history.py
================

Does: Undo/redo history for the colors of the current selection only.
      A new push after an undo discards the redo branch; there is no size cap.
Used By: PickerSession (every applied edit) and the surrounding UI, which
         resets the history whenever the selection changes.
Returns: New ColorHistoryState values; states are frozen and never mutated.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

__all__ = [
    "ColorHistoryState",
    "create_history",
    "push_colors",
    "undo",
    "redo",
    "can_undo",
    "can_redo",
    "reset_history",
]
__docformat__ = "google"

Colors = tuple[str, ...]


@dataclass(frozen=True)
class ColorHistoryState:
    past: tuple[Colors, ...] = ()
    present: Colors = ()
    future: tuple[Colors, ...] = ()


def create_history(initial_colors: Sequence[str]) -> ColorHistoryState:
    return ColorHistoryState(past=(), present=tuple(initial_colors), future=())


def push_colors(history: ColorHistoryState, new_colors: Sequence[str]) -> ColorHistoryState:
    """Does: Record `new_colors` as the present; identical colors are a no-op."""
    new_colors = tuple(new_colors)
    if new_colors == history.present:
        return history
    return ColorHistoryState(
        past=(*history.past, history.present),
        present=new_colors,
        future=(),
    )


def undo(history: ColorHistoryState) -> ColorHistoryState:
    if not history.past:
        return history
    return ColorHistoryState(
        past=history.past[:-1],
        present=history.past[-1],
        future=(history.present, *history.future),
    )


def redo(history: ColorHistoryState) -> ColorHistoryState:
    if not history.future:
        return history
    return ColorHistoryState(
        past=(*history.past, history.present),
        present=history.future[0],
        future=history.future[1:],
    )


def can_undo(history: ColorHistoryState) -> bool:
    return len(history.past) > 0


def can_redo(history: ColorHistoryState) -> bool:
    return len(history.future) > 0


def reset_history(colors: Sequence[str]) -> ColorHistoryState:
    """Does: Start over for a new working set (same as create_history)."""
    return create_history(colors)
