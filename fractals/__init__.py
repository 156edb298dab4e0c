"""Public API for escape-time fractal rendering."""

from .canvas import PixelBuffer
from .controller import (
    HIGHLIGHT_COLOR,
    Button,
    ButtonPressed,
    ButtonReleased,
    CursorMoved,
    Done,
    Dragging,
    Position,
    Recalc,
    SurfaceInfo,
    ZoomController,
    zoom_box,
)
from .generator import Generator, Julia, Mandelbrot, Point, choose_color
from .grid import Grid
from .palette import CHAR_PALETTE, CharPalette, Palette, RGBPalette, color_ramp, decode_hex
from .renderer import PixelRenderer, Renderer, TextRenderer
from .sampler import draw, escape_counts, sample

__all__ = [
    "Button",
    "ButtonPressed",
    "ButtonReleased",
    "CHAR_PALETTE",
    "CharPalette",
    "CursorMoved",
    "Done",
    "Dragging",
    "Generator",
    "Grid",
    "HIGHLIGHT_COLOR",
    "Julia",
    "Mandelbrot",
    "Palette",
    "PixelBuffer",
    "PixelRenderer",
    "Point",
    "Position",
    "RGBPalette",
    "Recalc",
    "Renderer",
    "SurfaceInfo",
    "TextRenderer",
    "ZoomController",
    "choose_color",
    "color_ramp",
    "decode_hex",
    "draw",
    "escape_counts",
    "sample",
    "zoom_box",
]
