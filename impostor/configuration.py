"""Round setup state: roster, impostor count and topic, kept mutually consistent."""

import logging
from collections.abc import Sequence

from impostor.models import Participant, RoundConfiguration, Topic
from impostor.settings_store import SettingsStore

logger = logging.getLogger(__name__)

MIN_PARTICIPANTS = 3
MAX_PARTICIPANTS = 10
_MIN_PARTICIPANTS_FOR_COUNTER = 2


def max_impostors(participant_count: int) -> int:
    """Largest impostor count allowed for a roster size. Never below 1."""
    return max(1, participant_count // 2)


def clamp_impostors(requested: int, participant_count: int) -> int:
    return min(max(1, requested), max_impostors(participant_count))


class ConfigurationState:
    """Mutable setup record owned by a single session.

    The requested impostor count is kept as given; the live value is
    clamped against the current roster size on every read. No operation
    raises for out-of-range input.
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        participant_count: int = 0,
        impostor_count: int = 1,
        topic_id: str = "",
    ) -> None:
        self._settings_store = settings_store
        count = min(max(0, participant_count), MAX_PARTICIPANTS)
        self._roster: list[int] = list(range(1, count + 1))
        self._next_id = count + 1
        self._requested_impostors = impostor_count
        self._topic_id = topic_id

    @classmethod
    def initialize(cls, topics: Sequence[Topic], settings_store: SettingsStore) -> "ConfigurationState":
        """Seed from the last saved configuration, or from empty defaults.

        Only the saved participant count survives, not the identities. A saved
        topic missing from topics falls back to the first topic.
        """
        default_topic = topics[0].id if topics else ""
        saved = settings_store.load()
        if saved is None:
            logger.debug("No saved settings, starting from defaults")
            return cls(settings_store, topic_id=default_topic)

        known = {t.id for t in topics}
        topic_id = saved.topic_id if saved.topic_id in known else default_topic
        if topic_id != saved.topic_id:
            logger.info("Saved topic %r not available, using %r", saved.topic_id, topic_id)

        state = cls(
            settings_store,
            participant_count=saved.participant_count,
            impostor_count=saved.impostor_count,
            topic_id=topic_id,
        )
        logger.info(
            "Restored settings: %d participants, %d impostors requested, topic %r",
            state.participant_count,
            state.requested_impostor_count,
            state.topic_id,
        )
        return state

    @property
    def participants(self) -> list[Participant]:
        return [Participant(id=pid, rank=i) for i, pid in enumerate(self._roster, start=1)]

    @property
    def participant_count(self) -> int:
        return len(self._roster)

    @property
    def requested_impostor_count(self) -> int:
        return self._requested_impostors

    @property
    def max_impostors(self) -> int:
        return max_impostors(len(self._roster))

    @property
    def impostor_count(self) -> int:
        return clamp_impostors(self._requested_impostors, len(self._roster))

    @property
    def topic_id(self) -> str:
        return self._topic_id

    @property
    def can_add(self) -> bool:
        return len(self._roster) < MAX_PARTICIPANTS

    @property
    def can_start(self) -> bool:
        """Commit gate for callers. commit() itself does not check it."""
        return len(self._roster) >= MIN_PARTICIPANTS

    @property
    def shows_impostor_counter(self) -> bool:
        return len(self._roster) >= _MIN_PARTICIPANTS_FOR_COUNTER

    def add_participant(self) -> Participant | None:
        """Append a participant with a fresh id. Returns None when the roster is full."""
        if not self.can_add:
            return None
        self._roster.append(self._next_id)
        self._next_id += 1
        return Participant(id=self._roster[-1], rank=len(self._roster))

    def remove_participant(self, participant_id: int) -> bool:
        """Remove a participant by id. Unknown ids are ignored.

        A requested impostor count above the new maximum is lowered to it;
        growing the roster again does not raise it back.
        """
        if participant_id not in self._roster:
            return False
        self._roster.remove(participant_id)

        new_max = max_impostors(len(self._roster))
        if self._requested_impostors > new_max:
            self._requested_impostors = new_max
        return True

    def set_impostor_count(self, count: int) -> None:
        self._requested_impostors = count

    def set_topic(self, topic_id: str) -> None:
        self._topic_id = topic_id

    def commit(self) -> RoundConfiguration:
        """Finalize and persist the current setup.

        Always succeeds; callers gate on can_start before treating the result
        as a playable round.
        """
        config = RoundConfiguration(
            participant_count=len(self._roster),
            impostor_count=self.impostor_count,
            topic_id=self._topic_id,
        )
        self._settings_store.save(config)
        logger.info(
            "Committed round: %d participants, %d impostors, topic %r",
            config.participant_count,
            config.impostor_count,
            config.topic_id,
        )
        return config
