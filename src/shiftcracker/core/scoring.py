from __future__ import annotations

from typing import Collection

from .alphabet import SEPARATOR


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance: insertion, deletion and substitution all cost 1.

    Two-row dynamic programming, O(len(a) * len(b)) time.
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i]
        for j, cb in enumerate(b, start=1):
            cur.append(
                min(
                    prev[j] + 1,  # deletion
                    cur[j - 1] + 1,  # insertion
                    prev[j - 1] + (ca != cb),  # substitution
                )
            )
        prev = cur
    return prev[-1]


def split_tokens(text: str) -> tuple[list[str], int]:
    """Split on the separator.

    Returns (non-empty tokens, surplus separators). Leading, trailing and
    repeated separators are surplus: they disappear when the tokens are
    joined back with single separators.
    """
    parts = text.split(SEPARATOR)
    tokens = [p for p in parts if p]
    surplus = text.count(SEPARATOR) - max(0, len(tokens) - 1)
    return tokens, surplus


def coverage_cost(text: str, words: Collection[str]) -> int:
    """Symbols not accounted for by exact dictionary words.

    Each token that is not a dictionary word costs its length plus one, each
    surplus separator costs one, so turning a symbol of a garbled token into
    a separator never lowers the cost. Zero means text is dictionary words
    joined by single separators. Lower is better.
    """
    tokens, surplus = split_tokens(text)
    return surplus + sum(len(t) + 1 for t in tokens if t not in words)
