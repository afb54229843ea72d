"""Key/value storage backends used by the settings store."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """Abstract text key/value storage."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored text for key, or None when nothing is stored.

        Raises:
            OSError: When the backing storage cannot be read.
        """
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store text under key, replacing any previous value.

        Raises:
            OSError: When the backing storage cannot be written.
        """
        ...


class MemoryStorage(KeyValueStorage):
    """Process-local storage. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage(KeyValueStorage):
    """All keys live in one JSON object file. Last writer wins."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        text = self._path.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except (ValueError, RecursionError):
            logger.warning("Storage file %s is not valid JSON, treating as empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s does not hold a JSON object, treating as empty", self._path)
            return {}
        return data

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
