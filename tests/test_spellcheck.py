import logging

import pytest

from shiftcracker.classical.spellcheck import SpellChecker, correct
from shiftcracker.core.dictionary import Dictionary
from shiftcracker.core.errors import EmptyDictionary, InvalidSymbol

WORDS = (
    "words wards wishes that pig the quick brown fox jumped over the lazy dog cat lion seal fish "
    "canary sf f a fosh carp shark pie sandle counter keyboard airplane fresh wishes"
)


@pytest.fixture
def words():
    return Dictionary.from_string(WORDS)


def test_corrects_a_garbled_sentence(words):
    rough = (
        "wordss wishes this pig the quics brown fox jumpede over the lazy dog "
        "cat lion seal fish canary sf f a fash carp sharks"
    )
    result = SpellChecker(words).check(rough)
    assert result.text == (
        "words wishes that pig the quick brown fox jumped over the lazy dog "
        "cat lion seal fish canary sf f a fish carp shark"
    )
    assert result.cost == 7
    assert result.replaced == 6
    assert not result.used_fallback


def test_dictionary_words_are_left_alone(words):
    checker = SpellChecker(words)
    for word in words.words:
        assert checker.best_match(word) == (word, 0)
    sentence = " ".join(words.words)
    assert checker.correct(sentence) == sentence


def test_idempotent_on_default_dictionary(default_dictionary):
    sentence = " ".join(default_dictionary.words[::7])
    result = SpellChecker(default_dictionary).check(sentence)
    assert result.text == sentence
    assert result.cost == 0


def test_ties_go_to_the_smallest_word():
    d = Dictionary(("cat", "bat"))
    assert SpellChecker(d).best_match("at") == ("bat", 1)


def test_matches_are_memoized(words):
    checker = SpellChecker(words)
    first = checker.best_match("quics")
    assert checker.best_match("quics") is first


def test_separators_are_normalized(words):
    result = SpellChecker(words).check("  the   fox ")
    assert result.text == "the fox"
    assert result.cost == 5


def test_empty_text(words):
    result = SpellChecker(words).check("")
    assert result.text == ""
    assert result.cost == 0


def test_fallback_segmentation(caplog):
    d = Dictionary(("brownfox", "thequick"))
    with caplog.at_level(logging.WARNING, logger="shiftcracker"):
        result = SpellChecker(d, max_token_length=8).check("thequickbrownfox")
    assert result.text == "thequick brownfox"
    assert result.used_fallback
    assert result.cost == 1
    assert "falling back" in caplog.text


def test_short_unseparated_text_is_one_token():
    d = Dictionary(("thequick",))
    result = SpellChecker(d).check("thequick")
    assert result.text == "thequick"
    assert not result.used_fallback


def test_empty_dictionary():
    with pytest.raises(EmptyDictionary):
        correct("abc", Dictionary())


def test_rejects_symbols_outside_the_alphabet(words):
    with pytest.raises(InvalidSymbol):
        correct("The fox", words)


def test_bad_token_length(words):
    with pytest.raises(ValueError):
        SpellChecker(words, max_token_length=0)


def test_workers_do_not_change_the_result(words):
    rough = "wordss wishes this pig the quics brown fox"
    assert SpellChecker(words, workers=4).check(rough) == SpellChecker(words).check(rough)
