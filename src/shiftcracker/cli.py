from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from shiftcracker.classical.common import format_key, parse_key
from shiftcracker.classical.encryptor import SCHEDULES, Encryptor
from shiftcracker.classical.keylength import estimate_key_length
from shiftcracker.classical.pipeline import PipelineOptions, run_pipeline
from shiftcracker.core.config import Config
from shiftcracker.core.dictionary import Dictionary, load_default_dictionary, load_dictionary
from shiftcracker.core.errors import CrackError
from shiftcracker.core.generator import Generator
from shiftcracker.core.logger import configure_logging

app = typer.Typer(help="shiftcracker: recover plaintext from repeating-key shift ciphers.")

_state: dict = {"config": Config()}


@app.callback()
def _init(
    config: Optional[Path] = typer.Option(None, "--config", help="TOML configuration file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
):
    try:
        cfg = Config.load(config)
    except FileNotFoundError as e:
        raise typer.BadParameter(str(e), param_hint="--config")
    _state["config"] = cfg

    g = cfg.global_settings
    configure_logging(
        "DEBUG" if verbose else g.log_level,
        log_file=g.log_file or None,
        json_logs=g.log_json,
    )


def _read_text(text: Optional[str]) -> str:
    # ciphertext may contain spaces, so only line endings are stripped
    if text is None or text == "-":
        text = sys.stdin.read()
    return text.rstrip("\r\n")


def _dictionary(path: Optional[Path]) -> Dictionary:
    configured = _state["config"].crack.dictionary
    if path is None and configured:
        path = Path(configured)
    try:
        return load_dictionary(path) if path is not None else load_default_dictionary()
    except (OSError, CrackError) as e:
        raise typer.BadParameter(str(e), param_hint="--dict")


@app.command()
def crack(
    text: Optional[str] = typer.Argument(None, help="Ciphertext (reads stdin when omitted or '-')."),
    dict_path: Optional[Path] = typer.Option(None, "--dict", "-d", help="Whitespace separated word list."),
    min_len: Optional[int] = typer.Option(None, "--min-len", help="Smallest key length to try."),
    max_len: Optional[int] = typer.Option(None, "--max-len", help="Largest key length to try."),
    guesses: Optional[int] = typer.Option(None, "--guesses", "-g", help="Number of key lengths to attempt."),
    show: int = typer.Option(1, "--show", help="Number of ranked guesses to print."),
):
    """Crack a ciphertext without the key."""
    cfg = _state["config"]
    base = cfg.pipeline_options()
    dictionary = _dictionary(dict_path)
    ciphertext = _read_text(text)

    try:
        options = PipelineOptions(
            min_len=min_len if min_len is not None else base.min_len,
            max_len=max_len if max_len is not None else base.max_len,
            num_guesses=guesses if guesses is not None else base.num_guesses,
            refine_budget=base.refine_budget,
            refine_rounds=base.refine_rounds,
            max_token_length=base.max_token_length,
            max_workers=base.max_workers,
        )
        results = run_pipeline(ciphertext, dictionary, options)
    except ValueError as e:
        raise typer.BadParameter(str(e))

    if show <= 1:
        typer.echo(results[0].plaintext)
        return

    for i, r in enumerate(results[:show], start=1):
        typer.echo(
            f"#{i}  keylen={r.key_length}  conf={r.confidence:.4f}  "
            f"fixes={r.correction_cost}  key={format_key(r.shifts)}"
        )
        if r.notes:
            typer.echo(f"    notes: {r.notes}")
        typer.echo(r.plaintext)
        typer.echo("-" * 60)


@app.command()
def keylen(
    text: Optional[str] = typer.Argument(None, help="Ciphertext (reads stdin when omitted or '-')."),
    top: int = typer.Option(10, "--top", "-t"),
    min_len: int = typer.Option(3, "--min-len"),
    max_len: int = typer.Option(120, "--max-len"),
):
    """Show the key length ranking (lower score is better)."""
    try:
        ranked = estimate_key_length(_read_text(text), min_len, max_len)
    except CrackError as e:
        raise typer.BadParameter(str(e))
    for c in ranked[:top]:
        typer.echo(f"  k={c.length:3d}  score={c.score:.5f}")


def _encryptor(key: str, schedule: str) -> Encryptor:
    if schedule not in SCHEDULES:
        raise typer.BadParameter(
            f"Unknown schedule '{schedule}'. Available: {', '.join(sorted(SCHEDULES))}",
            param_hint="--schedule",
        )
    try:
        return Encryptor(tuple(parse_key(key)), SCHEDULES[schedule])
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--key")


@app.command()
def encrypt(
    key: str = typer.Option(..., "--key", "-k", help="Shifts like '2,5,1' or a lowercase word."),
    schedule: str = typer.Option("repeating", "--schedule", "-s"),
    text: Optional[str] = typer.Argument(None, help="Plaintext (reads stdin when omitted or '-')."),
):
    """Encrypt with a known key."""
    enc = _encryptor(key, schedule)
    try:
        typer.echo(enc.encrypt(_read_text(text)))
    except CrackError as e:
        raise typer.BadParameter(str(e))


@app.command()
def decrypt(
    key: str = typer.Option(..., "--key", "-k", help="Shifts like '2,5,1' or a lowercase word."),
    schedule: str = typer.Option("repeating", "--schedule", "-s"),
    text: Optional[str] = typer.Argument(None, help="Ciphertext (reads stdin when omitted or '-')."),
):
    """Decrypt when you already have the key."""
    enc = _encryptor(key, schedule)
    try:
        typer.echo(enc.decrypt(_read_text(text)))
    except CrackError as e:
        raise typer.BadParameter(str(e))


@app.command()
def generate(
    words: int = typer.Option(50, "--words", "-n"),
    seed: int = typer.Option(0, "--seed"),
    dict_path: Optional[Path] = typer.Option(None, "--dict", "-d"),
    key_length: int = typer.Option(0, "--key-length", "-k", help="Encrypt with a random key of this length."),
):
    """Print random dictionary words (test plaintext).

    With --key-length the words are encrypted with a random repeating key;
    the key goes to stderr and the ciphertext to stdout.
    """
    gen = Generator(_dictionary(dict_path), seed=seed)
    plaintext = gen.generate_words(words)
    if key_length < 1:
        typer.echo(plaintext)
        return

    key = gen.generate_key(key_length)
    typer.echo(f"key={format_key(key)}", err=True)
    typer.echo(Encryptor.repeating(key).encrypt(plaintext))


def main():
    app()


if __name__ == "__main__":
    main()
