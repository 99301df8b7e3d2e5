from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Sequence

from shiftcracker.core.alphabet import ALPHABET_SIZE, decode
from shiftcracker.core.dictionary import Dictionary, Histogram
from shiftcracker.core.scoring import coverage_cost

from .common import unshift_symbols
from .frequency import slice_text

log = logging.getLogger(__name__)

DEFAULT_BUDGET = 4096
DEFAULT_ROUNDS = 4


@dataclass(frozen=True)
class Refinement:
    shifts: tuple[int, ...]
    plaintext: str
    # coverage_cost of plaintext; 0 means all dictionary words
    cost: int
    evaluated: int


def refine_width(key_length: int, budget: int) -> int:
    """Largest number of shifts per slice whose combinations fit the budget."""
    if budget < 1 or key_length < 1:
        return 0
    width = 1
    while width < ALPHABET_SIZE and (width + 1) ** key_length <= budget:
        width += 1
    return width


class _Candidates:
    """Decoded slices for every shift, interleaved on demand."""

    def __init__(self, ciphertext: Sequence[int], key_length: int, dictionary: Dictionary) -> None:
        self.length = len(ciphertext)
        self.key_length = key_length
        self.words = dictionary.lookup
        self.reference = dictionary.histogram
        self.decoded = []
        self.counts = []
        for s in slice_text(ciphertext, key_length):
            plains = [unshift_symbols(s, shift) for shift in range(ALPHABET_SIZE)]
            self.decoded.append([decode(p) for p in plains])
            self.counts.append([Histogram.from_symbols(p).counts for p in plains])
        self.evaluated = 0

    def text(self, shifts: Sequence[int]) -> str:
        out = [""] * self.length
        for i, shift in enumerate(shifts):
            out[i :: self.key_length] = self.decoded[i][shift]
        return "".join(out)

    def misfit(self, shifts: Sequence[int]) -> int:
        """L1 distance of the decoded text's histogram to the reference, scaled to an integer."""
        totals = [sum(col) for col in zip(*(self.counts[i][shift] for i, shift in enumerate(shifts)))]
        n, t = self.length, self.reference.total
        return sum(abs(a * t - b * n) for a, b in zip(totals, self.reference.counts))

    def cost(self, shifts: Sequence[int]) -> int:
        self.evaluated += 1
        return coverage_cost(self.text(shifts), self.words)

    def score(self, shifts: Sequence[int], bound: tuple[int, int] | None = None) -> tuple[int, int] | None:
        """(coverage cost, misfit), or None when the cost already exceeds *bound*."""
        cost = self.cost(shifts)
        if bound is not None and cost > bound[0]:
            return None
        return cost, self.misfit(shifts)


def refine_shifts(
    ciphertext: Sequence[int],
    rankings: Sequence[Sequence[tuple[int, float]]],
    dictionary: Dictionary,
    *,
    budget: int = DEFAULT_BUDGET,
    rounds: int = DEFAULT_ROUNDS,
) -> Refinement:
    """Pick per-slice shifts that make the plaintext read as dictionary words.

    rankings[i] is slice i's output of rank_shifts(). Unless the
    frequency-only choice already reads as dictionary words, every
    combination of the best-ranked shifts is scored by coverage cost, and
    equal costs by how well the whole decoded text matches the dictionary
    histogram. A short ciphertext can often be decoded into some string of
    dictionary words; the histogram keeps the reading that uses the words
    in their usual proportions. Then each slice in turn tries every shift
    while the others stay fixed, keeping only lower coverage costs.
    """
    key_length = len(rankings)
    cands = _Candidates(ciphertext, key_length, dictionary)

    best = tuple(r[0][0] for r in rankings)
    best_score = cands.score(best)

    width = refine_width(key_length, budget)
    if best_score[0] and width > 1:
        options = [[shift for shift, _ in r[:width]] for r in rankings]
        # the first product is the frequency-only choice, already scored
        for combo in itertools.islice(itertools.product(*options), 1, None):
            s = cands.score(combo, best_score)
            if s is not None and s < best_score:
                best, best_score = combo, s

    current, best_cost = list(best), best_score[0]
    for _ in range(rounds if width else 0):
        if best_cost == 0:
            break
        improved = False
        for i in range(key_length):
            for shift in range(ALPHABET_SIZE):
                if shift == current[i]:
                    continue
                trial = current.copy()
                trial[i] = shift
                c = cands.cost(trial)
                if c < best_cost:
                    current, best_cost = trial, c
                    improved = True
        if not improved:
            break

    best = tuple(current)
    log.debug(
        "key length %d: refined shifts %s, coverage cost %d after %d evaluations",
        key_length,
        best,
        best_cost,
        cands.evaluated,
    )
    return Refinement(shifts=best, plaintext=cands.text(best), cost=best_cost, evaluated=cands.evaluated)
