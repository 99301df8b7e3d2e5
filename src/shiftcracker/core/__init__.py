from .alphabet import ALPHABET, ALPHABET_SIZE, SEPARATOR, decode, encode
from .dictionary import Dictionary, Histogram, load_default_dictionary, load_dictionary
from .errors import CrackError, EmptyDictionary, InsufficientData, InvalidSymbol, UnsupportedKeyLength
from .results import CrackResult, Guess, KeyLengthCandidate

__all__ = [
    "ALPHABET",
    "ALPHABET_SIZE",
    "SEPARATOR",
    "encode",
    "decode",
    "Dictionary",
    "Histogram",
    "load_dictionary",
    "load_default_dictionary",
    "CrackError",
    "EmptyDictionary",
    "InsufficientData",
    "InvalidSymbol",
    "UnsupportedKeyLength",
    "CrackResult",
    "Guess",
    "KeyLengthCandidate",
]
