"""Sprite frame geometry and automatic frame extraction from pixel data."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Callable, Iterable

import numpy as np
from scipy import ndimage

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 5
_GRAY_THRESHOLD = 1
_DILATION_SIZE = 2
_SORT_PASSES = 3


@dataclass(frozen=True)
class Rect:
    """An axis-aligned integer rectangle."""

    x: int
    y: int
    w: int
    h: int

    @property
    def empty(self) -> bool:
        return self.w <= 0 or self.h <= 0

    def intersection(self, other: Rect) -> Rect | None:
        """Return the overlapping area, or None when there is none."""
        if self.empty or other.empty:
            return None
        x0 = max(self.x, other.x)
        y0 = max(self.y, other.y)
        x1 = min(self.x + self.w, other.x + other.w)
        y1 = min(self.y + self.h, other.y + other.h)
        if x1 <= x0 or y1 <= y0:
            return None
        return Rect(x0, y0, x1 - x0, y1 - y0)

    def intersects(self, other: Rect) -> bool:
        return self.intersection(other) is not None


@dataclass
class Frame:
    """A rectangle on a sprite sheet plus arbitrary extra metadata."""

    x: int
    y: int
    w: int
    h: int
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.w, self.h)


def frames_are_equal(a: Frame, b: Frame, tolerance: int = DEFAULT_TOLERANCE) -> bool:
    """True when every coordinate of the two frames differs by at most ``tolerance``."""
    return (
        abs(a.x - b.x) <= tolerance
        and abs(a.y - b.y) <= tolerance
        and abs(a.w - b.w) <= tolerance
        and abs(a.h - b.h) <= tolerance
    )


def _row_major(tolerance: int) -> Callable[[Frame, Frame], int]:
    def compare(a: Frame, b: Frame) -> int:
        if abs(a.y - b.y) <= tolerance:
            return (a.x > b.x) - (a.x < b.x)
        return -1 if a.y < b.y else 1

    return compare


def sort_frames(frames: Iterable[Frame]) -> list[Frame]:
    """Order frames in reading order, treating nearby rows as one row."""
    ordered = list(frames)
    tolerance = DEFAULT_TOLERANCE
    for _ in range(_SORT_PASSES):
        ordered.sort(key=cmp_to_key(_row_major(tolerance)))
        tolerance *= 2
    return ordered


def _detect(region: np.ndarray) -> list[tuple[int, int, int, int]]:
    rgb = region[..., :3].astype(np.uint32)
    gray = (rgb[..., 0] * 4899 + rgb[..., 1] * 9617 + rgb[..., 2] * 1868 + 8192) >> 14
    mask = gray > _GRAY_THRESHOLD
    size = 2 * _DILATION_SIZE + 1
    mask = ndimage.binary_dilation(mask, structure=np.ones((size, size), dtype=bool))
    # Only outer outlines count: anything inside a hole belongs to its enclosing shape.
    mask = ndimage.binary_fill_holes(mask)
    labels, _ = ndimage.label(mask, structure=np.ones((3, 3), dtype=bool))
    boxes = []
    for rows, cols in filter(None, ndimage.find_objects(labels)):
        boxes.append((cols.start, rows.start, cols.stop - cols.start, rows.stop - rows.start))
    return boxes


def extract_frames(
    pixels: np.ndarray,
    rect: Rect,
    existing: Iterable[Frame] = (),
    append: bool = False,
    preview_mode: bool = False,
) -> list[Frame]:
    """Find the shapes inside ``rect`` of an RGBA image and return the updated frame list.

    In preview mode, or when not appending, the detected frames replace ``existing``;
    otherwise they are added after it. Outside preview mode, detected frames that match
    one of ``existing`` are dropped.
    """
    image = np.asarray(pixels)
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError("pixels must be an array of shape (height, width, 4)")
    current = list(existing)
    height, width = image.shape[:2]
    area = rect.intersection(Rect(0, 0, width, height))
    if area is None:
        return current

    region = image[area.y : area.y + area.h, area.x : area.x + area.w]
    found = []
    for bx, by, bw, bh in _detect(region):
        frame = Frame(bx + area.x, by + area.y, bw, bh)
        if not preview_mode and any(frames_are_equal(frame, old) for old in current):
            continue
        found.append(frame)

    found = sort_frames(found)
    logger.debug("Extracted %d frames", len(found))
    if preview_mode or not append:
        return found
    return current + found