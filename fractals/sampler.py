"""Data-parallel escape classification over a whole grid."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

from .generator import ESCAPE_RADIUS_SQUARED, Generator
from .grid import Grid
from .palette import Palette


@tf.function
def _escape_step(
    cx: tf.Tensor, cy: tf.Tensor, x: tf.Tensor, y: tf.Tensor, ns: tf.Tensor, active: tf.Tensor
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every point that is still inside the escape radius by one step."""

    x_new = x * x - y * y + cx
    y_new = 2.0 * x * y + cy
    x = tf.where(active, x_new, x)
    y = tf.where(active, y_new, y)
    radius = tf.constant(ESCAPE_RADIUS_SQUARED, dtype=x.dtype)
    # A nan magnitude compares False and drops out like any escaping point.
    active = tf.logical_and(active, x * x + y * y < radius)
    ns = ns + tf.cast(active, tf.int32)
    return x, y, ns, active


@tf.function
def _escape_run(
    cx: tf.Tensor, cy: tf.Tensor, x: tf.Tensor, y: tf.Tensor, limit: tf.Tensor
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Count leading in-radius iterates per point, capped at ``limit``."""

    limit = tf.cast(limit, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    ns = tf.zeros_like(x, tf.int32)
    active = tf.ones_like(x, tf.bool)

    def cond(i, x, y, ns, active):
        return tf.logical_and(tf.less(i, limit), tf.reduce_any(active))

    def body(i, x, y, ns, active):
        x, y, ns, active = _escape_step(cx, cy, x, y, ns, active)
        return i + 1, x, y, ns, active

    return tf.while_loop(cond, body, (i, x, y, ns, active))


def escape_counts(grid: Grid, generator: Generator, limit: int, *, device: Optional[str] = None) -> np.ndarray:
    """Number of leading iterates inside the escape radius for each cell, at most ``limit``."""

    constants, iterates = generator.seeds(grid.cells)

    with tf.device(device if device is not None else "/CPU:0"):
        cx = tf.convert_to_tensor(constants.real, dtype=tf.float64)
        cy = tf.convert_to_tensor(constants.imag, dtype=tf.float64)
        x = tf.convert_to_tensor(iterates.real, dtype=tf.float64)
        y = tf.convert_to_tensor(iterates.imag, dtype=tf.float64)
        _, _, _, ns, _ = _escape_run(cx, cy, x, y, tf.constant(limit, dtype=tf.int32))

    return ns.numpy()


def sample(grid: Grid, generator: Generator, palette: Palette, *, device: Optional[str] = None) -> Grid:
    """Classify every cell of ``grid`` into a palette item.

    Cell by cell this matches ``choose_color(palette.get(), generator.generate(point))``.
    """

    colors = palette.get()
    if len(colors) == 0:
        raise ValueError("palette must not be empty")

    counts = escape_counts(grid, generator, len(colors), device=device)
    indices = np.maximum(counts - 1, 0)
    return Grid(np.take(colors, indices, axis=0))


def draw(generator: Generator, palette: Palette, renderer, points: Grid, *, device: Optional[str] = None) -> None:
    renderer.render(sample(points, generator, palette, device=device))
