import itertools

import pytest

from shiftcracker.core.scoring import coverage_cost, levenshtein, split_tokens

SAMPLES = ["", "a", "abc", "acb", "abcd", "kitten", "sitting", "sunday", "saturday", "fox"]


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("", "", 0),
        ("abc", "", 3),
        ("acb", "abc", 2),
        ("de", "def", 1),
        (" jkl ", "jkl", 2),
        ("abc def", "abc", 4),
        ("kitten", "sitting", 3),
        ("sunday", "saturday", 3),
    ],
)
def test_levenshtein(a, b, expected):
    assert levenshtein(a, b) == expected


def test_levenshtein_identity_and_symmetry():
    for a, b in itertools.product(SAMPLES, repeat=2):
        d = levenshtein(a, b)
        assert d == levenshtein(b, a)
        assert (d == 0) == (a == b)


def test_levenshtein_triangle_inequality():
    for a, b, c in itertools.product(SAMPLES, repeat=3):
        assert levenshtein(a, c) <= levenshtein(a, b) + levenshtein(b, c)


@pytest.mark.parametrize(
    "text, tokens, surplus",
    [
        ("the fox", ["the", "fox"], 0),
        ("  the   fox ", ["the", "fox"], 5),
        ("", [], 0),
        ("   ", [], 3),
        ("fox", ["fox"], 0),
    ],
)
def test_split_tokens(text, tokens, surplus):
    assert split_tokens(text) == (tokens, surplus)


def test_coverage_cost():
    words = {"the", "fox"}
    assert coverage_cost("the fox", words) == 0
    assert coverage_cost("the fox ", words) == 1
    assert coverage_cost("thx fox", words) == 4
    # splitting garbage does not pay off
    assert coverage_cost("t x fox", words) == coverage_cost("thx fox", words)
    assert coverage_cost("", words) == 0
