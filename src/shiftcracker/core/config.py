"""
shiftcracker configuration
==========================

Dataclass configuration with optional TOML persistence.

Example ``shiftcracker.toml``::

    [global]
    log_level = "INFO"
    max_workers = 4

    [crack]
    max_key_length = 60
    num_guesses = 5
    dictionary = "words/default.txt"

Missing keys fall back to the dataclass defaults, unknown keys are ignored.
"""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from shiftcracker.classical.pipeline import PipelineOptions

# Resolved against the working directory at load time
_DEFAULT_CONFIG_PATH: Path = Path("shiftcracker.toml")


@dataclass(slots=True)
class GlobalConfig:
    """Logging and execution settings shared by every command."""

    log_level: str = "WARNING"
    log_file: str = ""
    log_json: bool = False
    # 1 runs every stage sequentially
    max_workers: int = 1


@dataclass(slots=True)
class CrackConfig:
    """Parameters of the cryptanalysis pipeline."""

    min_key_length: int = 3
    max_key_length: int = 120
    # Key lengths attempted per ciphertext; 1 is single-guess mode
    num_guesses: int = 10
    # Combinations of per-slice shifts tried during refinement; 0 disables it
    refine_budget: int = 4096
    refine_rounds: int = 4
    # Token width used when the rough plaintext has no separators at all
    max_token_length: int = 20
    # Empty means the packaged word list
    dictionary: str = ""


@dataclass(slots=True)
class Config:
    """Master configuration.

    Usage:
        >>> config = Config.load()                      # ./shiftcracker.toml or defaults
        >>> config = Config.load("custom.toml")
        >>> config.crack.max_key_length
        120
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    crack: CrackConfig = field(default_factory=CrackConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> Config:
        """Load configuration from a TOML file.

        Raises:
            FileNotFoundError: If *path* was given explicitly and does not exist.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            crack=cls._build_section(CrackConfig, raw.get("crack", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def pipeline_options(self) -> PipelineOptions:
        from shiftcracker.classical.pipeline import PipelineOptions

        c = self.crack
        return PipelineOptions(
            min_len=c.min_key_length,
            max_len=c.max_key_length,
            num_guesses=c.num_guesses,
            refine_budget=c.refine_budget,
            refine_rounds=c.refine_rounds,
            max_token_length=c.max_token_length,
            max_workers=self.global_settings.max_workers,
        )

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate dataclass *cls* from only the keys it declares."""
        valid_keys = {f for f in cls.__dataclass_fields__}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)
