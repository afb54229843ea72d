"""Load settings.yaml into typed dataclasses. Environment variables override paths and URLs."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"

WORD_BANK_URL_ENV = "IMPOSTOR_WORD_BANK_URL"
SETTINGS_PATH_ENV = "IMPOSTOR_SETTINGS_PATH"


@dataclass
class WordBankConfig:
    url: str
    timeout_sec: float


@dataclass
class StorageConfig:
    path: Path
    key: str


@dataclass
class AppConfig:
    word_bank: WordBankConfig
    storage: StorageConfig


def load_config(settings_path: Path = _SETTINGS_PATH) -> AppConfig:
    """Load configuration from settings.yaml.

    Raises FileNotFoundError if settings file missing.
    IMPOSTOR_WORD_BANK_URL and IMPOSTOR_SETTINGS_PATH win over the file values.
    """
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with settings_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    word_bank_raw = raw["word_bank"]
    url = os.environ.get(WORD_BANK_URL_ENV, "").strip() or str(word_bank_raw["url"])
    word_bank = WordBankConfig(
        url=url,
        timeout_sec=float(word_bank_raw.get("timeout_sec", 10)),
    )

    storage_raw = raw["storage"]
    storage_path = os.environ.get(SETTINGS_PATH_ENV, "").strip() or str(storage_raw["path"])
    storage = StorageConfig(
        path=Path(storage_path).expanduser(),
        key=str(storage_raw["key"]),
    )

    logger.debug("Word bank source: %s", word_bank.url)
    logger.debug("Settings file: %s", storage.path)

    return AppConfig(word_bank=word_bank, storage=storage)
