"""Palettes mapping escape counts to characters or RGB colors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np
from matplotlib import colormaps
from matplotlib.colors import to_hex

CHAR_PALETTE = "  ,.'\"~:;o-!|?/<>X+={^0#%&@8*$"

DEFAULT_COLORMAP = "OrRd"
DEFAULT_RAMP_STEPS = 9


class Palette(ABC):
    @abstractmethod
    def get(self) -> np.ndarray:
        """Return the non-empty ordered palette items."""

    def __len__(self) -> int:
        return len(self.get())


class CharPalette(Palette):
    """Glyphs ordered from sparsest to densest."""

    def __init__(self, ramp: str = CHAR_PALETTE):
        if not ramp:
            raise ValueError("character ramp must not be empty")
        self._chars = np.array(list(ramp), dtype="<U1")

    def get(self) -> np.ndarray:
        return self._chars


def decode_hex(color: str) -> tuple[int, int, int]:
    """Decode ``#rrggbb`` into three 8-bit channels."""

    digits = color[1:] if color.startswith("#") else color
    if len(digits) != 6:
        raise ValueError(f"color {color!r} must be in the form #RRGGBB.")
    try:
        return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError as exc:
        raise ValueError(f"color {color!r} must contain only hexadecimal digits.") from exc


def color_ramp(name: str = DEFAULT_COLORMAP, steps: int = DEFAULT_RAMP_STEPS) -> list[str]:
    """Sample ``steps`` evenly spaced colors of a matplotlib colormap as hex strings."""

    if steps < 1:
        raise ValueError(f"ramp needs at least one step, got {steps}")
    try:
        cmap = colormaps[name]
    except KeyError as exc:
        raise ValueError(f"unknown colormap {name!r}") from exc
    sampled = cmap.resampled(steps)
    return [to_hex(sampled(i)) for i in range(steps)]


class RGBPalette(Palette):
    """A color ramp followed by its reverse.

    The mirrored half walks back to the starting color, so saturated points
    far outside the set do not land on a hard color seam.
    """

    def __init__(
        self,
        ramp: Sequence[str] | None = None,
        *,
        colormap: str = DEFAULT_COLORMAP,
        steps: int = DEFAULT_RAMP_STEPS,
    ):
        if ramp is None:
            ramp = color_ramp(colormap, steps)
        ramp = list(ramp)
        if not ramp:
            raise ValueError("color ramp must not be empty")
        decoded = [decode_hex(color) for color in ramp]
        self._colors = np.array(decoded + decoded[::-1], dtype=np.uint8)

    def get(self) -> np.ndarray:
        return self._colors
