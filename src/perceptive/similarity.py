"""Image comparison built on perceptual hashes."""

from __future__ import annotations

from typing import Final, Optional, Union

from PIL import Image

from perceptive.features.phash import (
    HASH_BITS,
    PerceptualHash,
    compute_hash,
    hamming_distance,
    parse_kind,
)

INVALID_DISTANCE: Final[int] = -1


def compare_images(
    img1: Optional[Image.Image],
    img2: Optional[Image.Image],
    kind: Union[PerceptualHash, int, str] = PerceptualHash.DIFFERENCE,
) -> int:
    """Hash both images with the same algorithm and return their Hamming distance.

    The kind is validated before any hashing (InvalidHashError). The left image
    is hashed first and its NilImageError propagates before the right image is
    looked at.

    - A distance of 0 indicates the same hash and likely a similar image.
    - A distance between 1 and 10 means the image is potentially a variation.
    - A distance greater than 10 means the image is likely a different image.
    """
    kind = parse_kind(kind)
    a = compute_hash(img1, kind)
    b = compute_hash(img2, kind)
    return hamming_distance(a, b)


def phash_similarity(hash_a: int, hash_b: int) -> float:
    dist = hamming_distance(hash_a, hash_b)
    return 1.0 - (dist / HASH_BITS)


def classify_distance(distance: int, variant_threshold: int = 10) -> str:
    if distance < 0:
        raise ValueError(f"Invalid distance: {distance}")
    if distance == 0:
        return "identical"
    if distance <= variant_threshold:
        return "variant"
    return "different"
