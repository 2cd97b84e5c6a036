"""Image discovery and loading."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Generator, Iterator, Tuple

from PIL import Image, UnidentifiedImageError

from perceptive.preprocess import to_8bit

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".webp", ".gif"}


def iter_image_paths(root: str) -> Iterator[str]:
    for path in sorted(Path(root).rglob("*")):
        if path.is_file() and path.suffix.lower() in ALLOWED_EXTENSIONS:
            yield str(path)


def load_image(path: str) -> Image.Image:
    with Image.open(path) as img:
        img.load()
        return to_8bit(img).convert("RGB")


def iter_images(root: str) -> Generator[Tuple[str, Image.Image], None, None]:
    for path in iter_image_paths(root):
        try:
            img = load_image(path)
        except (OSError, UnidentifiedImageError) as exc:
            logger.warning("Failed to load %s: %s", path, exc)
            continue
        yield path, img
