"""Turn a nearly right plaintext into one made only of dictionary words.

The frequency attack gets most symbols right but a wrongly guessed shift
garbles every L-th symbol. Since the source dictionary is known, every
token is replaced with its closest dictionary word by edit distance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from shiftcracker.core.alphabet import SEPARATOR, encode
from shiftcracker.core.dictionary import Dictionary
from shiftcracker.core.scoring import levenshtein, split_tokens
from shiftcracker.core.utils import chunked, ordered_map

log = logging.getLogger(__name__)

DEFAULT_MAX_TOKEN_LENGTH = 20


@dataclass(frozen=True)
class Correction:
    text: str
    # Symbol edits needed: token distances plus separator edits
    cost: int
    # Tokens that were not already dictionary words
    replaced: int
    used_fallback: bool = False


class SpellChecker:
    """Nearest-word correction against one immutable dictionary.

    Best matches are memoized per token. Ties between equally distant words
    go to the lexicographically smallest word.
    """

    def __init__(
        self,
        dictionary: Dictionary,
        *,
        max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH,
        workers: int = 1,
    ) -> None:
        dictionary.require_words()
        if max_token_length < 1:
            raise ValueError("max_token_length must be at least 1.")
        self.dictionary = dictionary
        self.max_token_length = max_token_length
        self.workers = workers
        self._cache: dict[str, tuple[str, int]] = {}

    def best_match(self, token: str) -> tuple[str, int]:
        """Closest dictionary word and its edit distance."""
        hit = self._cache.get(token)
        if hit is not None:
            return hit
        if token in self.dictionary:
            best = (token, 0)
        else:
            # words are sorted, so a strict < keeps the smallest word on ties
            best = ("", -1)
            for word in self.dictionary.words:
                # length difference is a lower bound on the distance
                if best[1] >= 0 and abs(len(word) - len(token)) >= best[1]:
                    continue
                d = levenshtein(token, word)
                if best[1] < 0 or d < best[1]:
                    best = (word, d)
                    if d == 0:
                        break
        self._cache[token] = best
        return best

    def tokenize(self, text: str) -> tuple[list[str], int, bool]:
        """(tokens, separator edits, used_fallback).

        Separator edits are the separators dropped by the split, or in the
        fallback the separators inserted between fixed-width tokens.
        """
        if SEPARATOR not in text and len(text) > self.max_token_length:
            log.warning(
                "no separators in %d symbols of rough plaintext; falling back to %d-symbol tokens",
                len(text),
                self.max_token_length,
            )
            pieces = [str(c) for c in chunked(text, self.max_token_length)]
            return pieces, len(pieces) - 1, True
        tokens, surplus = split_tokens(text)
        return tokens, surplus, False

    def check(self, text: str) -> Correction:
        encode(text)  # rejects anything outside the alphabet
        tokens, surplus, fallback = self.tokenize(text)
        matches = ordered_map(self.best_match, tokens, self.workers)
        return Correction(
            text=SEPARATOR.join(word for word, _ in matches),
            cost=surplus + sum(d for _, d in matches),
            replaced=sum(1 for _, d in matches if d > 0),
            used_fallback=fallback,
        )

    def correct(self, text: str) -> str:
        return self.check(text).text


def correct(text: str, dictionary: Dictionary, *, max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH) -> str:
    """Replace every token of *text* with its nearest dictionary word."""
    return SpellChecker(dictionary, max_token_length=max_token_length).correct(text)
