"""
history.
========

Does: Expose the per-selection color history (undo/redo with branch discard).
Used By: PickerSession and UI collaborators driving undo/redo buttons.
"""

from .color_history import (
    ColorHistoryState,
    can_redo,
    can_undo,
    create_history,
    push_colors,
    redo,
    reset_history,
    undo,
)

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
