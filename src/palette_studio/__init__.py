"""
palette_studio
==============

Does: Root package for the palette designer's color core.
Returns: Exposes `picker` (color math, constraint engine, session), `history`
         (per-selection undo/redo), `color` (contrast, named colors) and `utils`.
Used by: UI collaborators and the `palette-demo` CLI.
"""

__all__: list[str] = []
__docformat__ = "google"
