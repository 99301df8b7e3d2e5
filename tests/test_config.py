import pytest

from shiftcracker.classical.pipeline import PipelineOptions
from shiftcracker.core.config import Config


def test_defaults():
    cfg = Config()
    assert cfg.global_settings.log_level == "WARNING"
    assert cfg.crack.min_key_length == 3
    assert cfg.crack.max_key_length == 120
    assert cfg.pipeline_options() == PipelineOptions()


def test_missing_default_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert Config.load() == Config()


def test_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load(tmp_path / "nope.toml")


def test_load_toml(tmp_path):
    path = tmp_path / "shiftcracker.toml"
    path.write_text(
        """
[global]
log_level = "DEBUG"
max_workers = 4
colour = "blue"

[crack]
max_key_length = 60
num_guesses = 5
dictionary = "words.txt"
""",
        encoding="utf-8",
    )
    cfg = Config.load(path)
    assert cfg.global_settings.log_level == "DEBUG"
    assert cfg.global_settings.max_workers == 4
    assert cfg.crack.max_key_length == 60
    assert cfg.crack.num_guesses == 5
    assert cfg.crack.dictionary == "words.txt"
    # untouched keys keep their defaults
    assert cfg.crack.refine_budget == 4096

    options = cfg.pipeline_options()
    assert options.max_len == 60
    assert options.num_guesses == 5
    assert options.max_workers == 4


def test_default_file_in_working_directory(tmp_path, monkeypatch):
    (tmp_path / "shiftcracker.toml").write_text("[crack]\nnum_guesses = 2\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert Config.load().crack.num_guesses == 2


def test_to_dict():
    data = Config().to_dict()
    assert data["crack"]["refine_rounds"] == 4
    assert data["global_settings"]["log_json"] is False
