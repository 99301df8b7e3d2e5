from __future__ import annotations

from typing import Iterable, Sequence

from .errors import InvalidSymbol

# index 0 => 'a', ..., 25 => 'z', 26 => ' '
ALPHABET = "abcdefghijklmnopqrstuvwxyz "
ALPHABET_SIZE = len(ALPHABET)
SEPARATOR = " "
SEPARATOR_INDEX = ALPHABET.index(SEPARATOR)

# widest symbol index is 26 -> 5 bits
SYMBOL_BITS = (ALPHABET_SIZE - 1).bit_length()

_INDEX = {ch: i for i, ch in enumerate(ALPHABET)}


def symbol_index(ch: str, position: int = 0) -> int:
    try:
        return _INDEX[ch]
    except KeyError:
        raise InvalidSymbol(ch, position) from None


def encode(text: str) -> tuple[int, ...]:
    """Map every character of *text* to its alphabet index.

    Anything outside the alphabet (uppercase, digits, newlines, ...) raises
    InvalidSymbol; nothing is dropped or remapped.
    """
    return tuple(symbol_index(ch, pos) for pos, ch in enumerate(text))


def decode(symbols: Iterable[int]) -> str:
    out = []
    for pos, n in enumerate(symbols):
        if not 0 <= n < ALPHABET_SIZE:
            raise InvalidSymbol(n, pos)
        out.append(ALPHABET[n])
    return "".join(out)


def is_word(text: str) -> bool:
    """True when *text* is non-empty and made only of alphabet letters."""
    return bool(text) and all(ch in _INDEX and ch != SEPARATOR for ch in text)


def as_symbols(text: str | Sequence[int]) -> tuple[int, ...]:
    """Accept either a plain string or an already-encoded sequence."""
    if isinstance(text, str):
        return encode(text)
    symbols = tuple(text)
    for pos, n in enumerate(symbols):
        if not isinstance(n, int) or not 0 <= n < ALPHABET_SIZE:
            raise InvalidSymbol(n, pos)
    return symbols
