from __future__ import annotations

import concurrent.futures
from typing import Callable, Iterable, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def chunked(seq: Sequence[T], size: int, *, exact: bool = False) -> list[Sequence[T]]:
    """Split *seq* into consecutive pieces of *size*.

    With exact=True a trailing partial piece is discarded.
    """
    if size <= 0:
        raise ValueError("Chunk size must be positive.")
    stop = len(seq) - (len(seq) % size) if exact else len(seq)
    return [seq[i : i + size] for i in range(0, stop, size)]


def ordered_map(fn: Callable[[T], R], items: Iterable[T], workers: int = 1) -> list[R]:
    """map() that optionally fans out over a thread pool.

    Output order always follows input order, so results do not depend on
    the number of workers.
    """
    if workers <= 1:
        return list(map(fn, items))
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(fn, items))
