"""
session.py
==========

Does: Hold the state of one multi-color picker (colors, selected index,
      color space, axis mode, color history) and translate picker edits
      (wheel, lightness slider, hex field, HSL fields, spread buttons,
      mode/space toggles, undo/redo) into new color sets.
Used By: UI collaborators; they render from the session's properties and
         supply the async confirmation callback.
Returns: Updated session state; async switches return whether they applied.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from palette_studio.history import color_history
from palette_studio.history.color_history import ColorHistoryState
from palette_studio.picker.constraints import (
    NormalizationOutcome,
    initialize_colors,
    request_normalization,
    spread_axis,
)
from palette_studio.picker.convert import get_converter, hex_to_rgb, hex_to_space, rgb_to_hex
from palette_studio.picker.settings import get_picker_settings
from palette_studio.picker.types import (
    SHARED_LIGHTNESS,
    AxisMode,
    ColorModeConverter,
    ColorSet,
    ColorSpace,
    ConfirmNormalization,
    PickerMode,
    SpreadAxis,
    as_axis_mode,
    as_color_space,
    picker_mode_for,
)

__all__ = ["PickerSession"]

logger = logging.getLogger(__name__)


def _clamp01(x: float) -> float:
    return min(max(float(x), 0.0), 1.0)


class PickerSession:
    """Multi-color picker state with consent-gated normalization.

    Colors are replaced wholesale on every change. While a confirmation is
    pending nothing on the session changes; the proposed colors are applied
    only once the callback resolves to True.
    """

    def __init__(
        self,
        colors: Sequence[str],
        *,
        default_space: ColorSpace | None = None,
        default_mode: AxisMode | None = None,
        confirm: ConfirmNormalization | None = None,
        rng: random.Random | None = None,
    ) -> None:
        settings = get_picker_settings()
        self.default_space: ColorSpace = (
            as_color_space(default_space) if default_space else settings.default_space
        )
        self.default_mode: AxisMode = (
            as_axis_mode(default_mode) if default_mode else settings.default_mode
        )
        self.space: ColorSpace = self.default_space
        self.mode: AxisMode = self.default_mode
        self.confirm = confirm
        self.rng = rng or random.Random()
        self.selected_index = 0
        self._colors: ColorSet = self._safe(colors)
        self.history: ColorHistoryState = color_history.create_history(self._colors)

    # ── State ────────────────────────────────────────────────────────────────
    @staticmethod
    def _canonical(color: str) -> str:
        rgb = hex_to_rgb(color)
        return rgb_to_hex(*rgb) if rgb is not None else color

    @classmethod
    def _safe(cls, colors: Sequence[str]) -> ColorSet:
        """Lowercase '#rrggbb' for decodable colors; malformed ones pass through."""
        if not colors:
            return (get_picker_settings().fallback_color,)
        return tuple(cls._canonical(c) for c in colors)

    @property
    def colors(self) -> ColorSet:
        return self._colors

    @property
    def selected_color(self) -> str:
        return self._colors[self.selected_index]

    @property
    def converter(self) -> ColorModeConverter:
        return get_converter(self.space)

    @property
    def picker_mode(self) -> PickerMode:
        return picker_mode_for(self.mode)

    @property
    def can_undo(self) -> bool:
        return color_history.can_undo(self.history)

    @property
    def can_redo(self) -> bool:
        return color_history.can_redo(self.history)

    def _decode(self, color: str) -> tuple[float, float, float]:
        values = hex_to_space(color, self.space)
        return values if values is not None else (0.0, 0.0, 0.0)

    @property
    def selected_hsl(self) -> tuple[float, float, float]:
        """(hue in degrees, saturation, lightness) of the selected color."""
        h, s, l = self._decode(self.selected_color)
        return (h * 360.0, s, l)

    @property
    def hue_saturations(self) -> list[tuple[float, float]]:
        """Wheel handles: one per color when lightness is shared, else one."""
        if self.mode == SHARED_LIGHTNESS:
            return [(h * 360.0, s) for h, s, _ in map(self._decode, self._colors)]
        h, s, _ = self.selected_hsl
        return [(h, s)]

    @property
    def lightnesses(self) -> list[float]:
        """Slider handles: one per color when hue/saturation is shared, else one."""
        if self.mode == SHARED_LIGHTNESS:
            return [self.selected_hsl[2]]
        return [l for _, _, l in map(self._decode, self._colors)]

    def _apply(self, new_colors: Sequence[str], *, reset_history: bool = False) -> None:
        self._colors = self._safe(new_colors)
        if self.selected_index >= len(self._colors):
            self.selected_index = 0
        if reset_history:
            self.history = color_history.reset_history(self._colors)
        else:
            self.history = color_history.push_colors(self.history, self._colors)

    def select(self, index: int) -> None:
        if not 0 <= index < len(self._colors):
            raise IndexError(f"color index {index} out of range for {len(self._colors)} colors")
        self.selected_index = index

    def reset_selection(self, colors: Sequence[str]) -> None:
        """Does: Start editing a different working set with a fresh history."""
        self._colors = self._safe(colors)
        self.selected_index = 0
        self.history = color_history.reset_history(self._colors)

    # ── Normalization triggers ───────────────────────────────────────────────
    def _settle(self, outcome: NormalizationOutcome) -> bool:
        if not outcome.accepted:
            return False
        self.space, self.mode = outcome.space, outcome.mode
        if outcome.changed:
            self._apply(outcome.colors, reset_history=outcome.reset_history)
        return True

    async def initialize(self) -> bool:
        """Does: Detect the working set's constraint and normalize onto it."""
        if len(self._colors) <= 1:
            return True
        outcome = await initialize_colors(
            self._colors,
            self.selected_index,
            self.default_space,
            self.default_mode,
            confirm=self.confirm,
        )
        return self._settle(outcome)

    async def change_mode(self, new_mode: AxisMode) -> bool:
        """Does: Switch axis mode; the new free axis is randomized for other colors."""
        outcome = await request_normalization(
            self._colors,
            self.selected_index,
            as_axis_mode(new_mode),
            self.space,
            "modeChange",
            confirm=self.confirm,
            randomize=True,
            rng=self.rng,
        )
        return self._settle(outcome)

    async def change_color_space(self, new_space: ColorSpace) -> bool:
        outcome = await request_normalization(
            self._colors,
            self.selected_index,
            self.mode,
            as_color_space(new_space),
            "colorSpaceChange",
            confirm=self.confirm,
        )
        return self._settle(outcome)

    # ── Edits ────────────────────────────────────────────────────────────────
    def set_wheel_color(self, hue: float, saturation: float, index: int) -> None:
        """Does: Apply a wheel drag (hue in degrees) to color `index`.

        With shared lightness only that color moves; with shared hue/saturation
        every color takes the new hue and saturation.
        """
        to_hex = self.converter.to_hex
        h, s = (hue % 360.0) / 360.0, _clamp01(saturation)
        if self.mode == SHARED_LIGHTNESS:
            new = list(self._colors)
            new[index] = to_hex(h, s, self.lightnesses[0])
            self.select(index)
        else:
            new = [to_hex(h, s, l) for l in self.lightnesses]
        self._apply(new)

    def set_lightness(self, lightness: float, index: int) -> None:
        """Does: Apply a slider drag to color `index` (or to all, with shared lightness)."""
        to_hex = self.converter.to_hex
        l = _clamp01(lightness)
        if self.mode == SHARED_LIGHTNESS:
            new = [to_hex(h / 360.0, s, l) for h, s in self.hue_saturations]
        else:
            h, s = self.hue_saturations[0]
            new = list(self._colors)
            new[index] = to_hex(h / 360.0, s, l)
            self.select(index)
        self._apply(new)

    def set_hex(self, value: str) -> bool:
        """Does: Replace the selected color from hex text; malformed text is ignored."""
        rgb = hex_to_rgb(value)
        if rgb is None:
            logger.debug("Ignoring malformed hex input %r", value)
            return False
        new = list(self._colors)
        new[self.selected_index] = rgb_to_hex(*rgb)
        self._apply(new)
        return True

    def set_hsl(self, hue: float, saturation: float, lightness: float) -> None:
        """Does: Replace the selected color from the numeric fields (hue in degrees)."""
        new = list(self._colors)
        new[self.selected_index] = self.converter.to_hex(
            (hue % 360.0) / 360.0, _clamp01(saturation), _clamp01(lightness)
        )
        self._apply(new)

    def spread(self, axis: SpreadAxis) -> None:
        self._apply(spread_axis(self._colors, axis, self.selected_index, self.space))

    def undo(self) -> None:
        self.history = color_history.undo(self.history)
        self._colors = self._safe(self.history.present)
        if self.selected_index >= len(self._colors):
            self.selected_index = 0

    def redo(self) -> None:
        self.history = color_history.redo(self.history)
        self._colors = self._safe(self.history.present)
        if self.selected_index >= len(self._colors):
            self.selected_index = 0
