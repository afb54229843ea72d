"""Shared pytest fixtures."""

import random
import textwrap
from pathlib import Path

import pytest

from impostor.models import RoundConfiguration, Topic, TopicWords
from impostor.settings_store import SettingsStore
from impostor.storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from impostor.word_bank import WordBank

SAMPLE_YAML = textwrap.dedent("""\
    topics:
      daily-life:
        title: "Objetos de la vida diaria"
        words:
          - "mesa"
          - "silla"
          - "puerta"
      food:
        title: "Comida y bebida"
        words:
          - "manzana"
          - "pan"
      transportation:
        title: "Medios de transporte"
        words:
          - "coche"
          - "bicicleta"
""")


class FailingStorage(KeyValueStorage):
    """Test double storage whose every call raises."""

    def __init__(self, exc: Exception | None = None) -> None:
        self._exc = exc or OSError("storage unavailable")
        self.calls = 0

    def get(self, key: str) -> str | None:
        self.calls += 1
        raise self._exc

    def set(self, key: str, value: str) -> None:
        self.calls += 1
        raise self._exc


@pytest.fixture
def sample_catalog() -> dict[str, TopicWords]:
    return {
        "daily-life": TopicWords("Objetos de la vida diaria", ["mesa", "silla", "puerta"]),
        "food": TopicWords("Comida y bebida", ["manzana", "pan", "queso"]),
        "transportation": TopicWords("Medios de transporte", ["coche", "bicicleta", "autobús"]),
    }


@pytest.fixture
def sample_topics() -> list[Topic]:
    return [
        Topic("daily-life", "Objetos de la vida diaria"),
        Topic("food", "Comida y bebida"),
        Topic("transportation", "Medios de transporte"),
    ]


@pytest.fixture
def word_bank(sample_catalog: dict[str, TopicWords]) -> WordBank:
    return WordBank(sample_catalog, rng=random.Random(1234))


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def settings_store(memory_storage: MemoryStorage) -> SettingsStore:
    return SettingsStore(memory_storage)


@pytest.fixture
def file_settings_store(tmp_path: Path) -> SettingsStore:
    return SettingsStore(JsonFileStorage(tmp_path / "state" / "settings.json"))


@pytest.fixture
def sample_round() -> RoundConfiguration:
    return RoundConfiguration(participant_count=5, impostor_count=2, topic_id="food")
