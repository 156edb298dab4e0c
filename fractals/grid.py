"""Sampling grids over a rectangle of the complex plane."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .generator import Point


@dataclass(frozen=True)
class Grid:
    """Row-major matrix of cells.

    The first two axes of ``cells`` are (rows, columns). Point grids hold
    ``complex128`` values; color grids hold whatever item type the palette
    produces, with any channel axis trailing.
    """

    cells: np.ndarray

    @classmethod
    def new(cls, columns: int, rows: int, minimum: Point, maximum: Point) -> Grid:
        if not minimum.real < maximum.real:
            raise ValueError(f"minimum real {minimum.real} must be below maximum real {maximum.real}")
        if not minimum.imag < maximum.imag:
            raise ValueError(f"minimum imag {minimum.imag} must be below maximum imag {maximum.imag}")
        if columns < 2 or rows < 2:
            raise ValueError(f"grid needs at least 2 columns and 2 rows, got {columns}x{rows}")

        x_step = np.float64(maximum.real - minimum.real) / np.float64(columns - 1)
        y_step = np.float64(maximum.imag - minimum.imag) / np.float64(rows - 1)
        xs = np.float64(minimum.real) + np.arange(columns, dtype=np.float64) * x_step
        ys = np.float64(minimum.imag) + np.arange(rows, dtype=np.float64) * y_step
        X, Y = np.meshgrid(xs, ys)

        cells = np.empty((rows, columns), dtype=np.complex128)
        cells.real = X
        cells.imag = Y
        return cls(cells)

    @property
    def rows(self) -> int:
        return int(self.cells.shape[0])

    @property
    def columns(self) -> int:
        return int(self.cells.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.columns

    def __getitem__(self, index: tuple[int, int]):
        value = self.cells[index]
        if np.iscomplexobj(value) and np.ndim(value) == 0:
            return Point(float(value.real), float(value.imag))
        return value

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self.cells)

    def __len__(self) -> int:
        return self.rows
