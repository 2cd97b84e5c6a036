"""Perceptual hashes (average hash and difference hash)."""

from __future__ import annotations

import string
from enum import IntEnum
from typing import Final, Optional, Union

from PIL import Image

from perceptive.errors import InvalidHashError
from perceptive.preprocess import normalized_grid

HASH_SIZE: Final[int] = 8
HASH_BITS: Final[int] = HASH_SIZE * HASH_SIZE

_U64_MASK: Final[int] = (1 << 64) - 1
_I64_MAX: Final[int] = (1 << 63) - 1
_U64_MOD: Final[int] = 1 << 64


class PerceptualHash(IntEnum):
    AVERAGE = 0
    DIFFERENCE = 1


_KIND_ALIASES: Final[dict] = {
    "average": PerceptualHash.AVERAGE,
    "ahash": PerceptualHash.AVERAGE,
    "difference": PerceptualHash.DIFFERENCE,
    "dhash": PerceptualHash.DIFFERENCE,
}


def parse_kind(kind: Union[PerceptualHash, int, str]) -> PerceptualHash:
    """Resolve a hash kind given as enum member, integer value or name."""
    if isinstance(kind, PerceptualHash):
        return kind
    if isinstance(kind, str):
        try:
            return _KIND_ALIASES[kind.strip().lower()]
        except KeyError:
            raise InvalidHashError() from None
    # bool is an int subclass but never a valid kind
    if isinstance(kind, int) and not isinstance(kind, bool):
        try:
            return PerceptualHash(kind)
        except ValueError:
            raise InvalidHashError() from None
    raise InvalidHashError()


def average_hash(image: Optional[Image.Image]) -> int:
    """Return the 64-bit average hash of ``image``.

    The image is reduced to an 8x8 grid of channel sums. Bit ``i`` (row-major,
    bit 0 = top-left cell) is set when that cell is strictly greater than the
    truncated integer mean of all 64 cells. Cells equal to the mean give 0.
    """
    grid = normalized_grid(image, HASH_SIZE, HASH_SIZE)

    total = sum(int(v) for v in grid.flat)
    avg = total // HASH_BITS

    value = 0
    for pos, cell in enumerate(grid.flat):
        if int(cell) > avg:
            value |= 1 << pos
    return value


def difference_hash(image: Optional[Image.Image]) -> int:
    """Return the 64-bit difference hash of ``image``.

    The image is reduced to a 9x8 grid. Bit ``row * 8 + col`` is set when the
    pixel at ``col`` is strictly brighter than its right neighbour.
    """
    grid = normalized_grid(image, HASH_SIZE + 1, HASH_SIZE)
    diff = grid[:, :-1] > grid[:, 1:]

    value = 0
    for pos, bit in enumerate(diff.flatten()):
        if bit:
            value |= 1 << pos
    return value


ahash = average_hash
dhash = difference_hash


def compute_hash(image: Optional[Image.Image], kind: Union[PerceptualHash, int, str]) -> int:
    kind = parse_kind(kind)
    if kind is PerceptualHash.AVERAGE:
        return average_hash(image)
    if kind is PerceptualHash.DIFFERENCE:
        return difference_hash(image)
    raise InvalidHashError()


def hamming_distance(a: int, b: int) -> int:
    """Count differing bits of two fingerprints.

    Inputs are masked to 64 bits, so signed-stored hashes and ``~a`` work.
    """
    x = (a & _U64_MASK) ^ (b & _U64_MASK)
    dist = 0
    while x:
        x &= x - 1
        dist += 1
    return dist


def to_signed64(value: int) -> int:
    """Map an unsigned 64-bit fingerprint into SQLite's signed INTEGER range."""
    value &= _U64_MASK
    if value > _I64_MAX:
        value -= _U64_MOD
    return int(value)


def from_signed64(value: int) -> int:
    return int(value) & _U64_MASK


def format_hash(value: int) -> str:
    return f"{value & _U64_MASK:016x}"


def parse_hash(text: str) -> int:
    text = text.strip().lower()
    if text.startswith("0x"):
        text = text[2:]
    if not text or len(text) > 16 or not all(c in string.hexdigits for c in text):
        raise ValueError(f"Not a 64-bit hex fingerprint: {text!r}")
    return int(text, 16)
