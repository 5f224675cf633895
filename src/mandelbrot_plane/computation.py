from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numba import njit

from .config import RenderConfig

__all__ = ["escape_time", "pixel_to_point", "escape_grid", "NO_ESCAPE"]

# Grid value for pixels that did not escape within the limit
NO_ESCAPE = -1


@njit
def _escape_time(c_re: float, c_im: float, limit: int) -> int:
    c = complex(c_re, c_im)
    z = 0.0 + 0.0j
    for i in range(limit):
        z = z * z + c
        if z.real * z.real + z.imag * z.imag > 4.0:
            return i
    return NO_ESCAPE


@njit
def _pixel_to_point(
    width: int,
    height: int,
    column: int,
    row: int,
    ul_re: float,
    ul_im: float,
    lr_re: float,
    lr_im: float,
) -> Tuple[float, float]:
    plane_width = lr_re - ul_re
    plane_height = ul_im - lr_im
    re = ul_re + column * plane_width / width
    im = ul_im - row * plane_height / height
    return re, im


@njit
def _escape_grid(
    width: int,
    height: int,
    ul_re: float,
    ul_im: float,
    lr_re: float,
    lr_im: float,
    limit: int,
) -> np.ndarray:
    grid = np.empty((width, height), dtype=np.int64)
    for column in range(width):
        for row in range(height):
            re, im = _pixel_to_point(width, height, column, row, ul_re, ul_im, lr_re, lr_im)
            grid[column, row] = _escape_time(re, im, limit)
    return grid


def _check_limit(limit: int) -> int:
    limit = int(limit)
    if limit < 0:
        raise ValueError(f"Iteration limit must be non-negative, got {limit}")
    return limit


def _check_bounds(bounds: Tuple[int, int]) -> Tuple[int, int]:
    width, height = int(bounds[0]), int(bounds[1])
    if width <= 0 or height <= 0:
        raise ValueError(f"Image bounds must be positive, got {width}x{height}")
    return width, height


def escape_time(c: complex, limit: int) -> Optional[int]:
    """Return the iteration at which ``c`` escapes radius 2, or ``None``.

    ``None`` means ``limit`` iterations were not enough to prove that ``c``
    lies outside the Mandelbrot set. A larger limit may still reveal escape.
    """
    c = complex(c)
    n = _escape_time(c.real, c.imag, _check_limit(limit))
    if n == NO_ESCAPE:
        return None
    return int(n)


def pixel_to_point(
    bounds: Tuple[int, int],
    pixel: Tuple[int, int],
    upper_left: complex,
    lower_right: complex,
) -> complex:
    """Map a ``(column, row)`` pixel of a ``(width, height)`` image onto the plane.

    Row 0 lies on ``upper_left.imag`` and the imaginary part decreases as the
    row grows. Pixels outside the bounds are extrapolated.
    """
    width, height = _check_bounds(bounds)
    upper_left, lower_right = complex(upper_left), complex(lower_right)
    re, im = _pixel_to_point(
        width,
        height,
        int(pixel[0]),
        int(pixel[1]),
        upper_left.real,
        upper_left.imag,
        lower_right.real,
        lower_right.imag,
    )
    return complex(re, im)


def escape_grid(config: RenderConfig) -> np.ndarray:
    """Escape iteration for every pixel, indexed ``[column, row]``.

    Pixels that stay bounded for ``config.limit`` iterations hold ``NO_ESCAPE``.
    """
    width, height = _check_bounds(config.bounds)
    return _escape_grid(
        width,
        height,
        float(config.upper_left.real),
        float(config.upper_left.imag),
        float(config.lower_right.real),
        float(config.lower_right.imag),
        _check_limit(config.limit),
    )
