from __future__ import annotations

import random
from dataclasses import dataclass, field

from .alphabet import ALPHABET_SIZE
from .dictionary import Dictionary


@dataclass
class Generator:
    """Deterministic plaintext generator.

    Picks words from a dictionary so that a known plaintext can be
    encrypted and the cracking result checked against it.
    """

    dictionary: Dictionary
    seed: int = 0
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.dictionary.require_words()
        self.rng = random.Random(self.seed)

    def generate_words(self, num_words: int) -> str:
        """num_words random dictionary words joined by single spaces."""
        if num_words < 0:
            raise ValueError("num_words must be non-negative.")
        return " ".join(self.rng.choice(self.dictionary.words) for _ in range(num_words))

    def generate_key(self, length: int) -> list[int]:
        if length < 1:
            raise ValueError("Key length must be at least 1.")
        return [self.rng.randrange(ALPHABET_SIZE) for _ in range(length)]
