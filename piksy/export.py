"""Writing texture pixels to PNG files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Raised when a texture cannot be exported."""


def export_texture(pixels: np.ndarray | None, output_path: str | os.PathLike) -> Path:
    """Save an RGBA pixel array as a PNG, creating parent directories as needed."""
    path = Path(output_path)
    logger.info("Exporting texture to file: %s", path)
    if pixels is None:
        raise ExportError("No texture loaded, cannot export.")
    image = np.asarray(pixels)
    if image.ndim != 3 or image.shape[2] != 4:
        raise ExportError("Texture must be an array of shape (height, width, 4)")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise ExportError("Texture has no pixels")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ExportError(f"Failed to create directories for export: {exc}") from exc

    try:
        Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8)).save(path, format="PNG")
    except OSError as exc:
        raise ExportError(f"Saving PNG failed: {exc}") from exc
    logger.info("Texture exported successfully to: %s", path)
    return path