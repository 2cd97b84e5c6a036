"""Batch hashing and near-duplicate search."""

from __future__ import annotations

import itertools
import logging
from typing import Dict, Iterable, List, Sequence, Tuple, Union

from PIL import UnidentifiedImageError
from tqdm import tqdm

from perceptive.errors import PerceptiveError
from perceptive.features.phash import PerceptualHash, compute_hash, hamming_distance, parse_kind
from perceptive.io import load_image
from perceptive.similarity import INVALID_DISTANCE, compare_images
from perceptive.utils import batch_iter

logger = logging.getLogger(__name__)

Kind = Union[PerceptualHash, int, str]


def hash_images(paths: Iterable[str], kind: Kind, batch_size: int = 64) -> Dict[str, int]:
    kind = parse_kind(kind)
    hashes: Dict[str, int] = {}
    for batch_paths in tqdm(batch_iter(paths, batch_size), desc="Hashing", unit="batch"):
        for path in batch_paths:
            try:
                img = load_image(path)
                hashes[path] = compute_hash(img, kind)
            except (OSError, UnidentifiedImageError, PerceptiveError) as exc:
                logger.warning("Skipping %s: %s", path, exc)
    logger.info("Hashed %d images with %s", len(hashes), kind.name.lower())
    return hashes


def compare_pairs(pairs: Sequence[Tuple[object, object]], kind: Kind) -> List[int]:
    """Distance per image pair; a pair that fails to hash gets INVALID_DISTANCE."""
    kind = parse_kind(kind)
    distances: List[int] = []
    for index, (img_a, img_b) in enumerate(pairs):
        try:
            distances.append(compare_images(img_a, img_b, kind))
        except PerceptiveError as exc:
            logger.warning("Pair %d not compared: %s", index, exc)
            distances.append(INVALID_DISTANCE)
    return distances


def find_duplicates(hashes: Dict[str, int], threshold: int) -> List[Tuple[str, str, int]]:
    """Every unordered pair of paths whose fingerprints are within ``threshold`` bits."""
    matches: List[Tuple[str, str, int]] = []
    for (path_a, hash_a), (path_b, hash_b) in itertools.combinations(sorted(hashes.items()), 2):
        dist = hamming_distance(hash_a, hash_b)
        if dist <= threshold:
            matches.append((path_a, path_b, dist))
    matches.sort(key=lambda item: (item[2], item[0], item[1]))
    return matches
