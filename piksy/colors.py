"""Colour comparison and in-place colour replacement on RGBA pixel arrays."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0


@dataclass(frozen=True)
class Color:
    """An 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255

    def __iter__(self):
        return iter((self.r, self.g, self.b, self.a))


def is_color_close(a: Color, b: Color, threshold: int) -> bool:
    """True when the RGBA distance between two colours is at most ``threshold``."""
    distance = sum((p - q) ** 2 for p, q in zip(a, b))
    return distance <= threshold * threshold


def _check_pixels(pixels: np.ndarray) -> None:
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError("pixels must be an array of shape (height, width, 4)")


def swap_color(
    pixels: np.ndarray, source: Color, target: Color, threshold: int = DEFAULT_THRESHOLD
) -> int:
    """Replace every pixel close to ``source`` with ``target`` in place.

    Returns the number of pixels replaced.
    """
    _check_pixels(pixels)
    if not 0 <= threshold <= 255:
        raise ValueError("threshold must be between 0 and 255")
    diff = pixels.astype(np.int32) - np.array(tuple(source), dtype=np.int32)
    close = (diff * diff).sum(axis=2) <= threshold * threshold
    pixels[close] = tuple(target)
    replaced = int(close.sum())
    logger.debug("Number of pixels replaced: %d", replaced)
    logger.info("Replaced the color %s with the color %s", tuple(source), tuple(target))
    return replaced


def pixel_color(pixels: np.ndarray, x: int, y: int) -> Color:
    """Return the colour of the pixel at column ``x``, row ``y``."""
    _check_pixels(pixels)
    height, width = pixels.shape[:2]
    if not (0 <= x < width and 0 <= y < height):
        raise IndexError(f"pixel ({x}, {y}) is outside a {width}x{height} image")
    r, g, b, a = (int(v) for v in pixels[y, x])
    return Color(r, g, b, a)