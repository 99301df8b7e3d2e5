from __future__ import annotations

from .encryptor import Encryptor, length_mod, repeating_key
from .frequency import combine, crack, crack_slice, rank_shifts, slice_text
from .keylength import estimate_key_length
from .pipeline import PipelineOptions, run_pipeline
from .spellcheck import SpellChecker, correct

__all__ = [
    "Encryptor",
    "repeating_key",
    "length_mod",
    "combine",
    "crack",
    "crack_slice",
    "rank_shifts",
    "slice_text",
    "estimate_key_length",
    "PipelineOptions",
    "run_pipeline",
    "SpellChecker",
    "correct",
]
