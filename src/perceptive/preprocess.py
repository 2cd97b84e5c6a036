"""Image normalization ahead of hashing."""

from __future__ import annotations

from typing import Optional

import numpy as np
from PIL import Image

from perceptive.errors import NilImageError


def to_8bit(image: Image.Image) -> Image.Image:
    """Scale 16-bit grayscale images (``I;16*`` and ``I``) down to 8-bit ``L``.

    Pillow clips these modes at 255 when converting, so they are shifted
    by 8 bits first. Other modes are returned unchanged.
    """
    if image.mode != "I" and not image.mode.startswith("I;16"):
        return image
    arr = np.asarray(image).astype(np.int64) >> 8
    return Image.fromarray(np.clip(arr, 0, 255).astype(np.uint8))


def grayscale(image: Image.Image) -> Image.Image:
    """Return a new RGB image whose three channels all hold the luminance."""
    return to_8bit(image).convert("L").convert("RGB")


def resize(image: Image.Image, width: int, height: int) -> Image.Image:
    return image.resize((width, height), Image.Resampling.LANCZOS)


def sum_pixels(r: int, g: int, b: int) -> int:
    return int(r) + int(g) + int(b)


def reduce_pixels(grid: np.ndarray) -> np.ndarray:
    """Sum the R, G, B channels of an (H, W, C) grid into an (H, W) uint64 array."""
    return grid[:, :, :3].astype(np.uint64).sum(axis=2, dtype=np.uint64)


def normalized_grid(image: Optional[Image.Image], width: int, height: int) -> np.ndarray:
    """Grayscale, resize and reduce an image to a (height, width) grid of 0..765 values.

    Raises NilImageError before touching the image when it is None. The
    caller's image is never modified.
    """
    if image is None:
        raise NilImageError()

    small = resize(grayscale(image), width, height)
    pixels = np.asarray(small)
    return reduce_pixels(pixels)
