"""Ordered per-file execution, sequential or on a thread pool."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


def ordered_map(
    fn: Callable[[T], R], items: Sequence[T], jobs: int = 1
) -> Iterator[R]:
    """Yield ``fn(item)`` for each item, always in *items* order.

    With ``jobs <= 1`` each call runs only when the previous result has
    been consumed, so an exception stops the remaining items from being
    processed at all.  With a pool, results still come back in order and
    pending work is cancelled once the consumer stops iterating.
    """
    if jobs <= 1 or len(items) <= 1:
        for item in items:
            yield fn(item)
        return

    with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="minforge") as pool:
        futures = [pool.submit(fn, item) for item in items]
        try:
            for future in futures:
                yield future.result()
        finally:
            for future in futures:
                future.cancel()
