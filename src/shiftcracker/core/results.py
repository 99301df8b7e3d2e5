from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .alphabet import decode


@dataclass(frozen=True, order=True)
class KeyLengthCandidate:
    # sort_index comes first so ordering is (score, length): lower score wins,
    # smaller length breaks ties
    sort_index: tuple[float, int] = field(init=False, repr=False)

    length: int
    # Lower is better
    score: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "sort_index", (self.score, self.length))

    def to_dict(self) -> dict[str, Any]:
        return {"length": self.length, "score": self.score}


@dataclass(frozen=True)
class CrackResult:
    plaintext: tuple[int, ...]

    # Higher is better (negated histogram distance, summed over slices)
    confidence: float

    # Shift removed from each slice, in slice order
    shifts: tuple[int, ...] = ()

    @property
    def text(self) -> str:
        return decode(self.plaintext)

    def to_dict(self) -> dict[str, Any]:
        return {
            "plaintext": self.text,
            "confidence": self.confidence,
            "shifts": list(self.shifts),
        }


@dataclass(frozen=True, order=True)
class Guess:
    sort_index: tuple[float, float, int] = field(init=False, repr=False)

    plaintext: str
    # Higher is better; 0.0 means the spell checker had nothing to fix
    confidence: float
    key_length: int
    key_length_score: float = 0.0
    key_length_rank: int = 0
    shifts: tuple[int, ...] = ()

    # Before spell checking
    rough_plaintext: str = ""
    frequency_confidence: float = 0.0
    correction_cost: int = 0

    notes: str = ""

    def __post_init__(self) -> None:
        # dataclass(order=True) sorts ascending; confidence descending first,
        # then the frequency fit, then the shorter key (a divisor of an aligned
        # length is aligned too).
        object.__setattr__(
            self,
            "sort_index",
            (-self.confidence, -self.frequency_confidence, self.key_length),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "plaintext": self.plaintext,
            "confidence": self.confidence,
            "key_length": self.key_length,
            "key_length_score": self.key_length_score,
            "key_length_rank": self.key_length_rank,
            "shifts": list(self.shifts),
            "rough_plaintext": self.rough_plaintext,
            "frequency_confidence": self.frequency_confidence,
            "correction_cost": self.correction_cost,
            "notes": self.notes,
        }
