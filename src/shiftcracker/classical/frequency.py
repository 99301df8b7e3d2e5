from __future__ import annotations

import logging
from functools import partial
from typing import Sequence

from shiftcracker.core.alphabet import ALPHABET_SIZE, as_symbols
from shiftcracker.core.dictionary import Histogram
from shiftcracker.core.errors import UnsupportedKeyLength
from shiftcracker.core.results import CrackResult
from shiftcracker.core.utils import ordered_map

from .common import unshift_symbols
from .keylength import MAX_KEY_LENGTH, MIN_KEY_LENGTH

log = logging.getLogger(__name__)


def slice_text(text: Sequence[int], key_length: int) -> list[tuple[int, ...]]:
    """Slice i holds the symbols at positions i, i+L, i+2L, ... in order."""
    if key_length < 1:
        raise UnsupportedKeyLength(key_length, 1, max(1, len(text)))
    return [tuple(text[i::key_length]) for i in range(key_length)]


def combine(slices: Sequence[Sequence[int]], key_length: int, text_length: int) -> tuple[int, ...]:
    """Inverse of slice_text: position p comes from slice p % L, element p // L."""
    if key_length < 1:
        raise UnsupportedKeyLength(key_length, 1, max(1, text_length))
    if len(slices) != key_length:
        raise ValueError(f"Expected {key_length} slices, got {len(slices)}.")
    for i, s in enumerate(slices):
        expected = len(range(i, text_length, key_length))
        if len(s) != expected:
            raise ValueError(f"Slice {i} has {len(s)} symbols, expected {expected}.")
    return tuple(slices[p % key_length][p // key_length] for p in range(text_length))


def rank_shifts(cipher_slice: Sequence[int], histogram: Histogram) -> list[tuple[int, float]]:
    """Every shift with the distance of its decoding to *histogram*.

    Ordered by (distance, shift): closest first, smallest shift on ties.
    Distances are compared exactly before being reported as floats.
    """
    histogram.require_weight()
    if not cipher_slice:
        return [(s, 0.0) for s in range(ALPHABET_SIZE)]

    # a shift only relabels symbols, so rotate the slice counts instead of
    # decoding the slice 27 times
    counts = Histogram.from_symbols(cipher_slice).counts
    exact = []
    for shift in range(ALPHABET_SIZE):
        rotated = tuple(counts[(i + shift) % ALPHABET_SIZE] for i in range(ALPHABET_SIZE))
        exact.append((Histogram(rotated).exact_distance(histogram), shift))
    exact.sort()
    return [(shift, float(dist)) for dist, shift in exact]


def crack_slice(cipher_slice: Sequence[int], histogram: Histogram) -> CrackResult:
    """Crack one slice as a single-shift cipher."""
    shift, distance = rank_shifts(cipher_slice, histogram)[0]
    return CrackResult(
        plaintext=unshift_symbols(cipher_slice, shift),
        confidence=-distance,
        shifts=(shift,),
    )


def check_key_length(
    key_length: int,
    text_length: int,
    min_key_length: int = MIN_KEY_LENGTH,
    max_key_length: int = MAX_KEY_LENGTH,
) -> None:
    low = max(1, min_key_length)
    high = min(max_key_length, text_length)
    if not low <= key_length <= high:
        raise UnsupportedKeyLength(key_length, low, high)


def apply_shifts(ciphertext: Sequence[int], shifts: Sequence[int]) -> tuple[int, ...]:
    """Undo shifts[i] on slice i; the key length is len(shifts)."""
    key_length = len(shifts)
    slices = [unshift_symbols(s, shift) for s, shift in zip(slice_text(ciphertext, key_length), shifts)]
    return combine(slices, key_length, len(ciphertext))


def crack(
    ciphertext: str | Sequence[int],
    key_length: int,
    histogram: Histogram,
    *,
    min_key_length: int = MIN_KEY_LENGTH,
    max_key_length: int = MAX_KEY_LENGTH,
    workers: int = 1,
) -> CrackResult:
    """Crack the ciphertext assuming a repeating key of *key_length*.

    Slices, cracks every slice against the reference histogram, combines the
    per-slice plaintexts. Confidence is the sum of slice confidences (higher
    is better, 0.0 is a perfect frequency match).
    """
    symbols = as_symbols(ciphertext)
    check_key_length(key_length, len(symbols), min_key_length, max_key_length)
    histogram.require_weight()

    results = ordered_map(partial(crack_slice, histogram=histogram), slice_text(symbols, key_length), workers)
    plaintext = combine([r.plaintext for r in results], key_length, len(symbols))
    shifts = tuple(r.shifts[0] for r in results)

    log.debug("key length %d: shifts %s", key_length, shifts)
    return CrackResult(
        plaintext=plaintext,
        confidence=sum(r.confidence for r in results),
        shifts=shifts,
    )
