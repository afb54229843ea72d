"""Best-effort persistence of the last committed round configuration."""

import json
import logging

from impostor.models import RoundConfiguration
from impostor.storage import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "imposter-game-settings"


def _to_json(config: RoundConfiguration) -> str:
    return json.dumps(
        {
            "participantCount": config.participant_count,
            "impostorCount": config.impostor_count,
            "topicId": config.topic_id,
        }
    )


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _from_json(text: str) -> RoundConfiguration | None:
    """Decode stored text. Returns None when it is not the expected shape.

    Values are not range-checked: negative or oversized counts pass through.
    """
    try:
        raw = json.loads(text)
    except (ValueError, RecursionError):
        return None
    if not isinstance(raw, dict):
        return None

    participant_count = raw.get("participantCount")
    impostor_count = raw.get("impostorCount")
    topic_id = raw.get("topicId")
    if not (_is_int(participant_count) and _is_int(impostor_count) and isinstance(topic_id, str)):
        return None

    return RoundConfiguration(
        participant_count=participant_count,
        impostor_count=impostor_count,
        topic_id=topic_id,
    )


class SettingsStore:
    """Round-trips a RoundConfiguration under one fixed key.

    Never raises: write failures are logged and dropped, and unreadable or
    corrupt data loads as None, the same as missing data.
    """

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def save(self, config: RoundConfiguration) -> None:
        try:
            self._storage.set(self._key, _to_json(config))
        except Exception as exc:
            logger.warning("Could not save game settings: %s", exc)
            return
        logger.debug("Saved game settings under %r", self._key)

    def load(self) -> RoundConfiguration | None:
        try:
            stored = self._storage.get(self._key)
        except Exception as exc:
            logger.warning("Could not read game settings: %s", exc)
            return None
        if not stored:
            return None

        config = _from_json(stored)
        if config is None:
            logger.warning("Ignoring corrupt game settings under %r", self._key)
        return config
