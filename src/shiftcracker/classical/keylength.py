from __future__ import annotations

import logging
from functools import partial
from typing import Sequence

from shiftcracker.core.alphabet import SYMBOL_BITS, as_symbols
from shiftcracker.core.errors import InsufficientData, UnsupportedKeyLength
from shiftcracker.core.results import KeyLengthCandidate
from shiftcracker.core.utils import chunked, ordered_map

log = logging.getLogger(__name__)

MIN_KEY_LENGTH = 3
MAX_KEY_LENGTH = 120


def pairwise_bit_differences(chunks: Sequence[Sequence[int]]) -> int:
    """Sum of bitwise Hamming distances over every unordered pair of chunks.

    Counted per column and bit: a bit set in `ones` of the chunks differs in
    exactly ones * (len(chunks) - ones) pairs. Same total as comparing every
    pair directly, in linear time.
    """
    n = len(chunks)
    total = 0
    for column in zip(*chunks):
        for bit in range(SYMBOL_BITS):
            ones = sum((sym >> bit) & 1 for sym in column)
            total += ones * (n - ones)
    return total


def score_key_length(ciphertext: Sequence[int], key_length: int) -> float:
    """Mean pairwise bit difference between full chunks, per symbol. Lower is better."""
    chunks = chunked(ciphertext, key_length, exact=True)
    if len(chunks) < 2:
        raise InsufficientData(f"Key length {key_length} leaves fewer than two full chunks.")
    pairs = len(chunks) * (len(chunks) - 1) // 2
    return pairwise_bit_differences(chunks) / pairs / key_length


def candidate_range(n: int, min_len: int, max_len: int) -> range:
    if min_len < 1:
        raise UnsupportedKeyLength(min_len, 1, max_len)
    if max_len < min_len:
        raise UnsupportedKeyLength(max_len, min_len, MAX_KEY_LENGTH)
    return range(min_len, min(max_len, n // 2) + 1)


def estimate_key_length(
    ciphertext: str | Sequence[int],
    min_len: int = MIN_KEY_LENGTH,
    max_len: int = MAX_KEY_LENGTH,
    *,
    workers: int = 1,
) -> list[KeyLengthCandidate]:
    """Rank candidate key lengths by normalized chunk Hamming distance.

    Chunks aligned with the true key repeat the same per-position shift, so
    equal plaintext symbols give equal ciphertext symbols and the average
    bit difference drops. Multiples of the key length are aligned too.

    Returns candidates ascending by score (best first).
    """
    symbols = as_symbols(ciphertext)
    lengths = candidate_range(len(symbols), min_len, max_len)
    if not lengths:
        raise InsufficientData(
            f"Ciphertext of {len(symbols)} symbols cannot form two chunks for any key length "
            f"in [{min_len}, {max_len}]."
        )

    scores = ordered_map(partial(score_key_length, symbols), lengths, workers)
    ranked = sorted(KeyLengthCandidate(length, score) for length, score in zip(lengths, scores))

    log.debug(
        "key length ranking (top 5): %s",
        ", ".join(f"{c.length}:{c.score:.4f}" for c in ranked[:5]),
    )
    return ranked
