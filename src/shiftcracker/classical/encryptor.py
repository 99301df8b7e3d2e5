from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Protocol, Sequence

from shiftcracker.core.alphabet import as_symbols, decode

from .common import reduce_key, shift_symbol


class KeySchedule(Protocol):
    """Pick the key slot used at one ciphertext position.

    Arguments are the position, the key length and the plaintext length.
    Must be deterministic and must not depend on the key values.
    """

    def __call__(self, index: int, key_length: int, plaintext_length: int) -> int:
        ...


def repeating_key(index: int, key_length: int, plaintext_length: int) -> int:
    """Cycle through the key start to finish.

    Key HEADCRAB over RISE AND SHINE MISTER FREEMAN::

        RISE AND SHINE MISTER FREEMAN
        HEADCRABHEADCRABHEADCRABHEADC
    """
    return index % key_length


def length_mod(index: int, key_length: int, plaintext_length: int) -> int:
    """Slot derived from the plaintext length as well as the position."""
    if plaintext_length < index * key_length:
        return plaintext_length % key_length
    return (plaintext_length * index) % key_length


SCHEDULES: dict[str, Callable[[int, int, int], int]] = {
    "repeating": repeating_key,
    "lengthmod": length_mod,
}


@dataclass(frozen=True)
class Encryptor:
    """Shift cipher with a pluggable key schedule.

    Each ciphertext symbol is the plaintext symbol shifted by the key entry
    chosen by the schedule. Only the repeating schedule is a target for the
    cracking stages.
    """

    key: tuple[int, ...]
    schedule: KeySchedule = field(default=repeating_key)
    name: str = "repeating_shift"

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("Key must contain at least one shift.")
        object.__setattr__(self, "key", tuple(reduce_key(self.key)))

    @classmethod
    def repeating(cls, key: Sequence[int]) -> "Encryptor":
        return cls(tuple(key), repeating_key)

    def _slots(self, length: int):
        for i in range(length):
            slot = self.schedule(i, len(self.key), length)
            if not 0 <= slot < len(self.key):
                raise ValueError(f"Key schedule returned slot {slot} for a key of length {len(self.key)}.")
            yield i, self.key[slot]

    def encrypt_symbols(self, plaintext: str | Sequence[int]) -> tuple[int, ...]:
        symbols = as_symbols(plaintext)
        return tuple(shift_symbol(symbols[i], k) for i, k in self._slots(len(symbols)))

    def decrypt_symbols(self, ciphertext: str | Sequence[int]) -> tuple[int, ...]:
        # one plaintext symbol per ciphertext symbol, so the lengths agree
        symbols = as_symbols(ciphertext)
        return tuple(shift_symbol(symbols[i], -k) for i, k in self._slots(len(symbols)))

    def encrypt(self, plaintext: str) -> str:
        return decode(self.encrypt_symbols(plaintext))

    def decrypt(self, ciphertext: str) -> str:
        return decode(self.decrypt_symbols(ciphertext))
