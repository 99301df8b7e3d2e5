from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from functools import reduce
from importlib import resources
from pathlib import Path
from typing import Iterable

from .alphabet import ALPHABET, ALPHABET_SIZE, SEPARATOR_INDEX, encode, is_word
from .errors import EmptyDictionary

log = logging.getLogger(__name__)

_EMPTY_COUNTS = (0,) * ALPHABET_SIZE


def _add_symbols(counts: tuple[int, ...], symbols: Iterable[int]) -> tuple[int, ...]:
    acc = list(counts)
    for s in symbols:
        acc[s] += 1
    return tuple(acc)


@dataclass(frozen=True)
class Histogram:
    """Symbol counts over the fixed alphabet.

    counts[0] => 'a', ..., counts[25] => 'z', counts[26] => ' '
    """

    counts: tuple[int, ...] = _EMPTY_COUNTS

    def __post_init__(self) -> None:
        if len(self.counts) != ALPHABET_SIZE:
            raise ValueError(f"Histogram needs exactly {ALPHABET_SIZE} counts.")
        if any(c < 0 for c in self.counts):
            raise ValueError("Histogram counts must be non-negative.")

    @classmethod
    def from_symbols(cls, symbols: Iterable[int]) -> "Histogram":
        return cls(_add_symbols(_EMPTY_COUNTS, symbols))

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "Histogram":
        """Fold every word's letters into one table.

        Each word is taken to be followed by one separator, so the
        separator weight equals the number of words.
        """
        return cls(
            reduce(
                lambda acc, word: _add_symbols(acc, encode(word) + (SEPARATOR_INDEX,)),
                words,
                _EMPTY_COUNTS,
            )
        )

    @property
    def total(self) -> int:
        return sum(self.counts)

    def require_weight(self) -> None:
        if self.total <= 0:
            raise EmptyDictionary("Reference histogram has zero total weight.")

    def exact_distance(self, other: "Histogram") -> Fraction:
        """Sum of absolute differences between the two normalized histograms.

        Computed on integers so equal distances compare equal.
        """
        self.require_weight()
        other.require_weight()
        t1, t2 = self.total, other.total
        num = sum(abs(a * t2 - b * t1) for a, b in zip(self.counts, other.counts))
        return Fraction(num, t1 * t2)

    def distance(self, other: "Histogram") -> float:
        """Lower is closer; 0.0 for identical profiles, at most 2.0."""
        return float(self.exact_distance(other))

    def as_dict(self) -> dict[str, int]:
        return {ch: c for ch, c in zip(ALPHABET, self.counts)}


@dataclass(frozen=True)
class Dictionary:
    """Immutable set of valid plaintext words plus their histogram."""

    words: tuple[str, ...] = ()
    lookup: frozenset[str] = field(init=False, repr=False, compare=False)
    histogram: Histogram = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        unique = tuple(sorted(set(self.words)))
        for w in unique:
            if not is_word(w):
                raise ValueError(f"Dictionary word {w!r} must be lowercase a-z only.")
        object.__setattr__(self, "words", unique)
        object.__setattr__(self, "lookup", frozenset(unique))
        object.__setattr__(self, "histogram", Histogram.from_words(unique))

    @classmethod
    def from_string(cls, source: str) -> "Dictionary":
        """Build from whitespace separated words.

        Works for both space separated and newline separated word lists.
        Words are lowercased; anything that is not purely a-z is rejected
        with a warning.
        """
        kept: list[str] = []
        for raw in source.split():
            word = raw.lower()
            if not is_word(word):
                log.warning("word %r is non-alphabetic, skipping", raw)
                continue
            kept.append(word)
        return cls(tuple(kept))

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word: object) -> bool:
        return word in self.lookup

    def require_words(self) -> None:
        if not self.words:
            raise EmptyDictionary("Dictionary has no words.")


def load_dictionary(path: str | Path) -> Dictionary:
    """Read a word list file. Raises EmptyDictionary if nothing usable is in it."""
    text = Path(path).read_text(encoding="utf-8")
    d = Dictionary.from_string(text)
    d.require_words()
    log.debug("loaded %d words from %s", len(d), path)
    return d


def load_default_dictionary(filename: str = "default_words.txt") -> Dictionary:
    """Load the word list shipped in shiftcracker.data."""
    text = resources.files("shiftcracker.data").joinpath(filename).read_text(encoding="utf-8")
    d = Dictionary.from_string(text)
    d.require_words()
    return d
