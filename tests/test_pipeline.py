import pytest

from shiftcracker.classical.encryptor import Encryptor
from shiftcracker.classical.pipeline import PipelineOptions, run_pipeline
from shiftcracker.core.dictionary import Dictionary
from shiftcracker.core.errors import EmptyDictionary, InsufficientData, InvalidSymbol, UnsupportedKeyLength
from shiftcracker.core.generator import Generator
from shiftcracker.core.results import Guess

FOX_PLAINTEXT = "the quick brown fox"


@pytest.mark.parametrize(
    "key",
    [
        [2, 5, 1],
        [0, 0, 0],
        [26, 13, 4],
        [1, 2, 3],
        [9, 9, 1],
        [20, 3, 17],
        [5, 5, 5],
        [3, 1, 4],
        [10, 20, 0],
    ],
)
def test_recovers_short_plaintext_with_default_options(fox_dictionary, key):
    ciphertext = Encryptor.repeating(key).encrypt(FOX_PLAINTEXT)
    best = run_pipeline(ciphertext, fox_dictionary)[0]
    assert best.plaintext == FOX_PLAINTEXT
    assert best.key_length == 3
    assert best.shifts == tuple(key)
    assert best.correction_cost == 0
    assert best.confidence == 0.0


def test_recovers_unspaced_plaintext():
    # 16 symbols leave five or six per slice, too few for the histogram
    # alone; the word list settles the shifts
    ciphertext = Encryptor.repeating([2, 5, 1]).encrypt("thequickbrownfox")
    best = run_pipeline(ciphertext, Dictionary(("thequickbrownfox",)))[0]
    assert best.plaintext == "thequickbrownfox"
    assert best.key_length == 3
    assert best.shifts == (2, 5, 1)


def test_equal_guesses_prefer_the_shorter_key():
    longer = Guess(plaintext="abc", confidence=0.0, key_length=6, frequency_confidence=-0.5)
    shorter = Guess(plaintext="abc", confidence=0.0, key_length=3, frequency_confidence=-0.5)
    assert sorted([longer, shorter])[0] is shorter


def test_closer_frequency_fit_wins_a_confidence_tie():
    garbage = Guess(plaintext="abc", confidence=0.0, key_length=3, frequency_confidence=-0.9)
    english = Guess(plaintext="abc", confidence=0.0, key_length=6, frequency_confidence=-0.2)
    assert sorted([garbage, english])[0] is english


def test_guesses_are_ranked_best_first(fox_dictionary, fox_ciphertext):
    guesses = run_pipeline(fox_ciphertext, fox_dictionary, PipelineOptions(num_guesses=5))
    confidences = [g.confidence for g in guesses]
    assert confidences == sorted(confidences, reverse=True)
    assert sorted(g.key_length_rank for g in guesses) == list(range(5))
    assert len({g.key_length for g in guesses}) == 5


def test_every_guess_is_made_of_dictionary_words(fox_dictionary, fox_ciphertext):
    for guess in run_pipeline(fox_ciphertext, fox_dictionary, PipelineOptions(num_guesses=4)):
        assert all(word in fox_dictionary for word in guess.plaintext.split(" "))
        assert len(guess.rough_plaintext) == len(fox_ciphertext)


def test_single_guess_mode(fox_dictionary, fox_ciphertext):
    guesses = run_pipeline(fox_ciphertext, fox_dictionary, PipelineOptions(num_guesses=1))
    assert len(guesses) == 1
    assert guesses[0].key_length_rank == 0


def test_more_guesses_than_candidates(fox_dictionary, fox_ciphertext):
    # 19 symbols leave key lengths 3..9
    guesses = run_pipeline(fox_ciphertext, fox_dictionary, PipelineOptions(num_guesses=50))
    assert sorted(g.key_length for g in guesses) == list(range(3, 10))


def test_recovers_generated_plaintext(default_dictionary):
    plaintext = Generator(default_dictionary, seed=11).generate_words(150)
    ciphertext = Encryptor.repeating([7, 1, 19, 4, 12]).encrypt(plaintext)
    guesses = run_pipeline(ciphertext, default_dictionary, PipelineOptions(max_len=20, num_guesses=4))
    assert guesses[0].plaintext == plaintext
    assert guesses[0].key_length % 5 == 0


def test_workers_do_not_change_the_result(fox_dictionary, fox_ciphertext):
    sequential = run_pipeline(fox_ciphertext, fox_dictionary, PipelineOptions(num_guesses=3))
    threaded = run_pipeline(fox_ciphertext, fox_dictionary, PipelineOptions(num_guesses=3, max_workers=4))
    assert threaded == sequential


def test_refinement_can_be_disabled(fox_dictionary, fox_ciphertext):
    guesses = run_pipeline(fox_ciphertext, fox_dictionary, PipelineOptions(num_guesses=3, refine_budget=0))
    assert len(guesses) == 3
    assert all("refined" not in g.notes for g in guesses)


def test_empty_dictionary(fox_ciphertext):
    with pytest.raises(EmptyDictionary):
        run_pipeline(fox_ciphertext, Dictionary())


def test_invalid_ciphertext(fox_dictionary):
    with pytest.raises(InvalidSymbol):
        run_pipeline("The Quick Brown Fox", fox_dictionary)


def test_short_ciphertext(fox_dictionary):
    with pytest.raises(InsufficientData):
        run_pipeline("abcde", fox_dictionary)


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"min_len": 0}, UnsupportedKeyLength),
        ({"min_len": 10, "max_len": 5}, UnsupportedKeyLength),
        ({"num_guesses": 0}, ValueError),
        ({"refine_budget": -1}, ValueError),
    ],
)
def test_option_validation(kwargs, error):
    with pytest.raises(error):
        PipelineOptions(**kwargs)
