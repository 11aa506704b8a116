import os

import pytest

from setgame.config import GameConfig, load_config

ENV_VARS = [
    "SET_SEED", "SET_TABLE_SIZE", "SET_REQUIRE_INITIAL_SET", "SET_PUZZLE_OPTIONS",
    "SET_ENABLE_LOGGING", "SET_LOG_LEVEL", "SET_LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    # load_dotenv writes straight into os.environ
    for name in ENV_VARS:
        os.environ.pop(name, None)


def test_defaults():
    assert load_config(dotenv=False) == GameConfig()


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SET_SEED", "42")
    monkeypatch.setenv("SET_TABLE_SIZE", "15")
    monkeypatch.setenv("SET_REQUIRE_INITIAL_SET", "yes")
    monkeypatch.setenv("SET_PUZZLE_OPTIONS", "6")
    monkeypatch.setenv("SET_ENABLE_LOGGING", "off")
    monkeypatch.setenv("SET_LOG_LEVEL", "debug")
    monkeypatch.setenv("SET_LOG_FILE", "set.log")
    config = load_config(dotenv=False)
    assert config == GameConfig(
        seed=42, table_size=15, require_initial_set=True, puzzle_options=6,
        enable_logging=False, log_level="DEBUG", log_file="set.log",
    )


def test_overrides_win_and_none_is_ignored(monkeypatch):
    monkeypatch.setenv("SET_SEED", "1")
    config = load_config(dotenv=False, seed=2, table_size=None)
    assert config.seed == 2
    assert config.table_size == 12


def test_unknown_override():
    with pytest.raises(TypeError):
        load_config(dotenv=False, colour="red")


@pytest.mark.parametrize("name,value", [
    ("SET_SEED", "abc"),
    ("SET_TABLE_SIZE", "1.5"),
    ("SET_REQUIRE_INITIAL_SET", "maybe"),
])
def test_malformed_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        load_config(dotenv=False)


def test_dotenv_file(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("SET_SEED=99\nSET_TABLE_SIZE=18\n")
    monkeypatch.chdir(tmp_path)
    config = load_config()
    assert config.seed == 99
    assert config.table_size == 18
