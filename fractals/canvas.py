"""RGB pixel surface shared by the renderer and the zoom controller."""

from __future__ import annotations

import numpy as np
import PIL.Image
import PIL.ImageDraw


class PixelBuffer:
    """A ``width`` x ``height`` RGB surface.

    Row 0 is the bottom of the displayed picture, so row indices grow with
    the imaginary axis like the sampling grid does.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"buffer size must be positive, got {width}x{height}")
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width

    def copy(self) -> PixelBuffer:
        clone = PixelBuffer(self.width, self.height)
        self.copy_onto(clone)
        return clone

    def copy_onto(self, other: PixelBuffer) -> None:
        if other.shape != self.shape:
            raise ValueError(f"cannot copy a {self.width}x{self.height} buffer onto {other.width}x{other.height}")
        np.copyto(other.pixels, self.pixels)

    def draw_outline(self, start: tuple[int, int], end: tuple[int, int], color: tuple[int, int, int]) -> None:
        """Draw a one pixel rectangle outline between two ``(x, y)`` corners."""

        x0, x1 = sorted((start[0], end[0]))
        y0, y1 = sorted((start[1], end[1]))
        x0, x1 = (min(max(v, 0), self.width - 1) for v in (x0, x1))
        y0, y1 = (min(max(v, 0), self.height - 1) for v in (y0, y1))

        image = PIL.Image.fromarray(self.pixels)
        draw = PIL.ImageDraw.Draw(image)
        draw.rectangle([(x0, y0), (x1, y1)], outline=tuple(color))
        self.pixels[...] = np.asarray(image)

    def to_surface_array(self) -> np.ndarray:
        """``(width, height, 3)`` array with the top row first, as pygame expects."""

        return np.ascontiguousarray(np.transpose(self.pixels[::-1], (1, 0, 2)))
