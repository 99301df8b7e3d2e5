from __future__ import annotations

from typing import Any


class CrackError(ValueError):
    """Base class for every failure raised by the cryptanalysis stages."""


class InsufficientData(CrackError):
    """Ciphertext too short for any key length in the requested range."""


class EmptyDictionary(CrackError):
    """A word set or histogram with nothing in it was supplied."""


class InvalidSymbol(CrackError):
    def __init__(self, symbol: Any, position: int) -> None:
        self.symbol = symbol
        self.position = position
        super().__init__(f"Symbol {symbol!r} at position {position} is not in the alphabet.")


class UnsupportedKeyLength(CrackError):
    def __init__(self, key_length: int, low: int, high: int) -> None:
        self.key_length = key_length
        self.low = low
        self.high = high
        super().__init__(f"Key length {key_length} is outside the supported range [{low}, {high}].")
