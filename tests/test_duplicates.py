import numpy as np
from PIL import Image

from perceptive.duplicates import compare_pairs, find_duplicates, hash_images
from perceptive.features.phash import PerceptualHash
from perceptive.similarity import INVALID_DISTANCE

DECREASING = [240, 210, 180, 150, 120, 90, 60, 30, 0]


def _gray(values):
    arr = np.asarray(values, dtype=np.uint8)
    return Image.fromarray(np.stack([arr, arr, arr], axis=2))


def _write(tmp_path, name, img):
    path = tmp_path / name
    img.save(path)
    return str(path)


def test_hash_images_skips_unreadable(tmp_path):
    good = _write(tmp_path, "a.png", _gray([DECREASING] * 8))
    bad = tmp_path / "broken.png"
    bad.write_bytes(b"not an image")
    missing = str(tmp_path / "missing.png")

    hashes = hash_images([good, str(bad), missing], PerceptualHash.DIFFERENCE, batch_size=2)
    assert hashes == {good: (1 << 64) - 1}


def test_find_duplicates(tmp_path):
    a = _write(tmp_path, "a.png", _gray([DECREASING] * 8))
    b = _write(tmp_path, "b.png", _gray([[v + 5 for v in DECREASING]] * 8))
    c = _write(tmp_path, "c.png", _gray([list(reversed(DECREASING))] * 8))

    hashes = hash_images([a, b, c], "difference")
    matches = find_duplicates(hashes, threshold=10)
    assert matches == [(a, b, 0)]

    everything = find_duplicates(hashes, threshold=64)
    assert len(everything) == 3
    assert everything[0] == (a, b, 0)
    assert [m[2] for m in everything] == [0, 64, 64]


def test_find_duplicates_empty():
    assert find_duplicates({}, threshold=10) == []
    assert find_duplicates({"only.png": 1}, threshold=10) == []


def test_compare_pairs_records_sentinel():
    img = _gray([DECREASING] * 8)
    flipped = _gray([list(reversed(DECREASING))] * 8)
    distances = compare_pairs([(img, img), (None, img), (img, flipped)], PerceptualHash.DIFFERENCE)
    assert distances == [0, INVALID_DISTANCE, 64]
