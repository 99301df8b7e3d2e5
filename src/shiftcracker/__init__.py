"""Cryptanalysis of repeating-key shift ciphers over a-z plus space."""

from shiftcracker.classical import (
    Encryptor,
    PipelineOptions,
    SpellChecker,
    combine,
    correct,
    crack,
    crack_slice,
    estimate_key_length,
    run_pipeline,
    slice_text,
)
from shiftcracker.core import (
    CrackError,
    CrackResult,
    Dictionary,
    EmptyDictionary,
    Guess,
    Histogram,
    InsufficientData,
    InvalidSymbol,
    KeyLengthCandidate,
    UnsupportedKeyLength,
    decode,
    encode,
    load_default_dictionary,
    load_dictionary,
)

__version__ = "0.1.0"

__all__ = [
    "Encryptor",
    "PipelineOptions",
    "SpellChecker",
    "combine",
    "correct",
    "crack",
    "crack_slice",
    "estimate_key_length",
    "run_pipeline",
    "slice_text",
    "CrackError",
    "CrackResult",
    "Dictionary",
    "EmptyDictionary",
    "Guess",
    "Histogram",
    "InsufficientData",
    "InvalidSymbol",
    "KeyLengthCandidate",
    "UnsupportedKeyLength",
    "decode",
    "encode",
    "load_default_dictionary",
    "load_dictionary",
]
