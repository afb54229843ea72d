"""Tests for config/config_loader.py."""

from pathlib import Path

import pytest
import yaml

from config.config_loader import (
    SETTINGS_PATH_ENV,
    WORD_BANK_URL_ENV,
    AppConfig,
    StorageConfig,
    WordBankConfig,
    load_config,
)


@pytest.fixture
def minimal_settings(tmp_path: Path) -> Path:
    """Write a minimal valid settings.yaml to a temp path."""
    settings = {
        "word_bank": {
            "url": "https://example.com/word-bank/es.yaml",
            "timeout_sec": 5,
        },
        "storage": {
            "path": "~/.impostor-test/settings.json",
            "key": "imposter-game-settings",
        },
    }
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.dump(settings), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clear_overrides(monkeypatch):
    monkeypatch.delenv(WORD_BANK_URL_ENV, raising=False)
    monkeypatch.delenv(SETTINGS_PATH_ENV, raising=False)


def test_load_config_returns_app_config(minimal_settings):
    config = load_config(minimal_settings)
    assert isinstance(config, AppConfig)
    assert isinstance(config.word_bank, WordBankConfig)
    assert isinstance(config.storage, StorageConfig)


def test_load_config_word_bank(minimal_settings):
    config = load_config(minimal_settings)
    assert config.word_bank.url == "https://example.com/word-bank/es.yaml"
    assert config.word_bank.timeout_sec == 5.0


def test_load_config_storage_path_expands_home(minimal_settings):
    config = load_config(minimal_settings)
    assert isinstance(config.storage.path, Path)
    assert "~" not in str(config.storage.path)
    assert config.storage.path.name == "settings.json"
    assert config.storage.key == "imposter-game-settings"


def test_load_config_timeout_defaults_when_missing(tmp_path: Path):
    settings = {
        "word_bank": {"url": "https://example.com/bank.yaml"},
        "storage": {"path": "./settings.json", "key": "k"},
    }
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.dump(settings), encoding="utf-8")
    config = load_config(path)
    assert config.word_bank.timeout_sec == 10.0


def test_word_bank_url_env_override(minimal_settings, monkeypatch):
    monkeypatch.setenv(WORD_BANK_URL_ENV, "https://mirror.example.com/en.yaml")
    config = load_config(minimal_settings)
    assert config.word_bank.url == "https://mirror.example.com/en.yaml"


def test_settings_path_env_override(minimal_settings, monkeypatch, tmp_path: Path):
    target = tmp_path / "elsewhere.json"
    monkeypatch.setenv(SETTINGS_PATH_ENV, str(target))
    config = load_config(minimal_settings)
    assert config.storage.path == target


def test_blank_env_override_is_ignored(minimal_settings, monkeypatch):
    monkeypatch.setenv(WORD_BANK_URL_ENV, "   ")
    config = load_config(minimal_settings)
    assert config.word_bank.url == "https://example.com/word-bank/es.yaml"


def test_load_config_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config(Path("/nonexistent/settings.yaml"))


def test_bundled_settings_load():
    config = load_config()
    assert config.word_bank.url.startswith("https://")
    assert config.storage.key == "imposter-game-settings"
