from __future__ import annotations

from typing import Iterable, Sequence

from shiftcracker.core.alphabet import ALPHABET, ALPHABET_SIZE, symbol_index


def shift_symbol(n: int, shift: int) -> int:
    """Shift one symbol index by 'shift' (can be negative), wrapping mod the alphabet."""
    return (n + shift) % ALPHABET_SIZE


def unshift_symbols(symbols: Iterable[int], shift: int) -> tuple[int, ...]:
    """Undo a shift: subtract and wrap."""
    return tuple((n - shift) % ALPHABET_SIZE for n in symbols)


def reduce_key(key: Sequence[int]) -> list[int]:
    """Normalize arbitrary (possibly negative) shift amounts to [0, 27)."""
    return [k % ALPHABET_SIZE for k in key]


def parse_key(key: str) -> list[int]:
    """
    Parse keys like: "2,5,1" or "2 5 1" or "2:5:1" (shift amounts),
    or a word like "cab" (each letter/space is its alphabet index).
    Returns the reduced list of shifts.
    """
    raw = key.strip()
    if not raw:
        raise ValueError("Empty key.")

    sep_form = raw.replace(":", ",").replace(" ", ",")
    parts = [p for p in sep_form.split(",") if p]
    if parts and all(p.lstrip("-").isdigit() for p in parts):
        return reduce_key([int(p) for p in parts])

    if all(ch in ALPHABET for ch in key):
        return [symbol_index(ch, i) for i, ch in enumerate(key)]

    raise ValueError("Expected key format like '2,5,1' or a lowercase word like 'key'.")


def format_key(shifts: Sequence[int]) -> str:
    return ",".join(str(s) for s in shifts)
