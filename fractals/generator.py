"""Quadratic-map iteration for Mandelbrot and Julia sets."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, TypeVar

import numpy as np

ESCAPE_RADIUS_SQUARED = 100.0

C = TypeVar("C")


@dataclass(frozen=True)
class Point:
    """A complex number as a pair of floats."""

    real: float
    imag: float

    @staticmethod
    def next(constant: Point, iterate: Point) -> Point:
        x, y = iterate.real, iterate.imag
        return Point(x * x - y * y + constant.real, 2.0 * x * y + constant.imag)

    def fairly_close(self) -> bool:
        # inf and nan compare False, so overflow counts as escape.
        return self.real * self.real + self.imag * self.imag < ESCAPE_RADIUS_SQUARED

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)


class Generator(ABC):
    """Produce the iterate sequence for a sampled point."""

    @abstractmethod
    def seed(self, point: Point) -> tuple[Point, Point]:
        """Return ``(constant, iterate)`` for ``point``."""

    @abstractmethod
    def seeds(self, cells: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Vectorized :meth:`seed` over an array of complex sample points."""

    def generate(self, point: Point) -> Iterator[Point]:
        constant, iterate = self.seed(point)
        while True:
            iterate = Point.next(constant, iterate)
            yield iterate


class Mandelbrot(Generator):
    """The sampled point is the constant; iteration starts from ``z``."""

    def __init__(self, z: Point = Point(0.0, 0.0)):
        self.z = z

    def seed(self, point):
        return point, self.z

    def seeds(self, cells):
        cells = np.asarray(cells, dtype=np.complex128)
        return cells, np.full_like(cells, complex(self.z))


class Julia(Generator):
    """The sampled point starts the iteration; ``c`` is the constant."""

    def __init__(self, c: Point):
        self.c = c

    def seed(self, point):
        return self.c, point

    def seeds(self, cells):
        cells = np.asarray(cells, dtype=np.complex128)
        return np.full_like(cells, complex(self.c)), cells


def choose_color(palette: Sequence[C] | Iterable[C], iterates: Iterable[Point]) -> C:
    """Pick the palette entry for the last iterate still inside the escape radius.

    Palette entries are paired with iterates one to one, so at most
    ``len(palette)`` iterates are consumed and the result saturates at the
    last entry. A point that escapes on its first iterate gets the first
    entry.
    """

    palette = list(palette)
    if not palette:
        raise ValueError("palette must not be empty")

    color = palette[0]
    for candidate, point in zip(palette, iterates):
        if not point.fairly_close():
            break
        color = candidate
    return color
