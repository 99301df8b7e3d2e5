from __future__ import annotations

import logging

import pytest

from shiftcracker.classical.encryptor import Encryptor
from shiftcracker.core.dictionary import Dictionary, load_default_dictionary

FOX_WORDS = ("the", "quick", "brown", "fox")
FOX_PLAINTEXT = "the quick brown fox"


@pytest.fixture(autouse=True)
def _reset_package_logger():
    # the CLI attaches its own handlers and stops propagation; undo that so
    # caplog keeps working in later tests
    yield
    logger = logging.getLogger("shiftcracker")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def fox_dictionary() -> Dictionary:
    return Dictionary(FOX_WORDS)


@pytest.fixture
def fox_ciphertext() -> str:
    return Encryptor.repeating([2, 5, 1]).encrypt(FOX_PLAINTEXT)


@pytest.fixture(scope="session")
def default_dictionary() -> Dictionary:
    return load_default_dictionary()
