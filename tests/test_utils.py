import pytest

from perceptive.utils import batch_iter


def test_batch_iter():
    assert list(batch_iter(range(5), 2)) == [[0, 1], [2, 3], [4]]
    assert list(batch_iter([], 3)) == []


def test_batch_iter_rejects_zero():
    with pytest.raises(ValueError):
        list(batch_iter([1], 0))
