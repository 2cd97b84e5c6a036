"""General utilities."""

from __future__ import annotations

from typing import Iterable, Iterator, List, TypeVar

T = TypeVar("T")


def batch_iter(items: Iterable[T], batch_size: int) -> Iterator[List[T]]:
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    batch: List[T] = []
    for item in items:
        batch.append(item)
        if len(batch) >= batch_size:
            yield batch
            batch = []
    if batch:
        yield batch
