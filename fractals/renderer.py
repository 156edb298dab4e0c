"""Renderers presenting a color grid on an output surface."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

import numpy as np

from .canvas import PixelBuffer
from .grid import Grid


class Renderer(ABC):
    @abstractmethod
    def render(self, grid: Grid) -> None:
        """Present ``grid`` on this renderer's surface."""


class TextRenderer(Renderer):
    """Print one line of characters per grid row."""

    def __init__(self, sink: Optional[TextIO] = None):
        self.sink = sink

    def render(self, grid: Grid) -> None:
        sink = self.sink if self.sink is not None else sys.stdout
        for row in grid:
            sink.write("".join(row) + "\n")
        sink.flush()


class PixelRenderer(Renderer):
    """Write each grid cell into the matching pixel of a buffer."""

    def __init__(self, buffer: PixelBuffer):
        self.buffer = buffer

    def render(self, grid: Grid) -> None:
        if grid.shape != self.buffer.shape:
            raise ValueError(
                f"grid of {grid.columns}x{grid.rows} does not match buffer of {self.buffer.width}x{self.buffer.height}"
            )
        self.buffer.pixels[...] = np.asarray(grid.cells, dtype=np.uint8)
