import pytest

from gd_regression.config import CONFIG_ENV_VAR, EngineConfig, load_config, parse_config
from gd_regression.exceptions import InvalidInputError


def test_defaults_without_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert load_config() == EngineConfig()


def test_load_config_from_file(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text(
        "training:\n"
        "  learning_rate: 0.05\n"
        "  batch_size: 4\n"
        "logging:\n"
        "  level: debug\n"
        "server:\n"
        "  port: 8080\n"
    )

    config = load_config(path)

    assert config.training.learning_rate == 0.05
    assert config.training.batch_size == 4
    assert config.training.max_iterations == 1000
    assert config.log_level == "DEBUG"
    assert config.port == 8080


def test_load_config_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "engine.yaml"
    path.write_text("training:\n  max_iterations: 10\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert load_config().training.max_iterations == 10


@pytest.mark.parametrize(
    "raw",
    [
        {"unknown": {}},
        {"training": {"momentum": 0.9}},
        {"training": {"learning_rate": -1.0}},
        {"server": ["not", "a", "mapping"]},
    ],
)
def test_parse_config_rejects_invalid(raw):
    with pytest.raises(InvalidInputError):
        parse_config(raw)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(InvalidInputError):
        load_config(tmp_path / "missing.yaml")
