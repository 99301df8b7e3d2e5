from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Sequence

from shiftcracker.core.alphabet import as_symbols, decode, encode
from shiftcracker.core.dictionary import Dictionary, Histogram
from shiftcracker.core.errors import UnsupportedKeyLength
from shiftcracker.core.results import Guess, KeyLengthCandidate
from shiftcracker.core.utils import ordered_map

from .frequency import apply_shifts, check_key_length, rank_shifts, slice_text
from .keylength import MAX_KEY_LENGTH, MIN_KEY_LENGTH, estimate_key_length
from .refine import DEFAULT_BUDGET, DEFAULT_ROUNDS, refine_shifts
from .spellcheck import DEFAULT_MAX_TOKEN_LENGTH, SpellChecker

log = logging.getLogger(__name__)

# Short ciphertexts rank the true key length poorly, so several are tried
DEFAULT_GUESSES = 10


@dataclass(frozen=True)
class PipelineOptions:
    min_len: int = MIN_KEY_LENGTH
    max_len: int = MAX_KEY_LENGTH
    # Key lengths attempted, best estimator scores first; 1 = single-guess mode
    num_guesses: int = DEFAULT_GUESSES
    refine_budget: int = DEFAULT_BUDGET
    refine_rounds: int = DEFAULT_ROUNDS
    max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.min_len < 1:
            raise UnsupportedKeyLength(self.min_len, 1, self.max_len)
        if self.max_len < self.min_len:
            raise UnsupportedKeyLength(self.max_len, self.min_len, MAX_KEY_LENGTH)
        if self.num_guesses < 1:
            raise ValueError("num_guesses must be at least 1.")
        if self.refine_budget < 0 or self.refine_rounds < 0:
            raise ValueError("refine_budget and refine_rounds must be non-negative.")


def crack_candidate(
    symbols: Sequence[int],
    candidate: KeyLengthCandidate,
    rank: int,
    dictionary: Dictionary,
    checker: SpellChecker,
    options: PipelineOptions,
) -> Guess:
    """Frequency-crack, refine and spell check for one key length."""
    key_length = candidate.length
    check_key_length(key_length, len(symbols), options.min_len, options.max_len)
    histogram = dictionary.histogram

    rankings = ordered_map(
        partial(rank_shifts, histogram=histogram),
        slice_text(symbols, key_length),
        options.max_workers,
    )
    frequency_shifts = tuple(r[0][0] for r in rankings)

    if options.refine_budget:
        refined = refine_shifts(
            symbols,
            rankings,
            dictionary,
            budget=options.refine_budget,
            rounds=options.refine_rounds,
        )
        shifts, rough = refined.shifts, refined.plaintext
    else:
        shifts, rough = frequency_shifts, decode(apply_shifts(symbols, frequency_shifts))

    correction = checker.check(rough)
    notes = "fallback segmentation" if correction.used_fallback else ""
    if shifts != frequency_shifts:
        changed = sum(1 for a, b in zip(shifts, frequency_shifts) if a != b)
        notes = "; ".join(n for n in (notes, f"refined {changed} slice shift(s)") if n)

    return Guess(
        plaintext=correction.text,
        confidence=-correction.cost / len(symbols),
        key_length=key_length,
        key_length_score=candidate.score,
        key_length_rank=rank,
        shifts=shifts,
        rough_plaintext=rough,
        # whole-text fit, comparable between key lengths
        frequency_confidence=-Histogram.from_symbols(encode(rough)).distance(histogram),
        correction_cost=correction.cost,
        notes=notes,
    )


def run_pipeline(
    ciphertext: str | Sequence[int],
    dictionary: Dictionary,
    options: PipelineOptions | None = None,
) -> list[Guess]:
    """Estimate key lengths, crack the best num_guesses of them, rank the results.

    Returns one Guess per attempted key length, best first: highest
    confidence, then the rough plaintext closest to the dictionary
    histogram, then the shorter key length. Nothing attempted is dropped.
    """
    options = options or PipelineOptions()
    dictionary.require_words()
    dictionary.histogram.require_weight()
    symbols = as_symbols(ciphertext)

    candidates = estimate_key_length(symbols, options.min_len, options.max_len, workers=options.max_workers)
    attempts = candidates[: options.num_guesses]

    checker = SpellChecker(dictionary, max_token_length=options.max_token_length, workers=options.max_workers)
    guesses = [
        crack_candidate(symbols, cand, rank, dictionary, checker, options)
        for rank, cand in enumerate(attempts)
    ]
    guesses.sort()

    for g in guesses:
        log.debug(
            "key length %d (rank %d): confidence %.4f, correction cost %d",
            g.key_length,
            g.key_length_rank,
            g.confidence,
            g.correction_cost,
        )
    return guesses
