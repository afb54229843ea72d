"""Pure dataclasses for round setup. No logic, no deps."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Participant:
    id: int      # allocator identity, never reused
    rank: int    # 1-based position in the roster, shown as "Player {rank}"


@dataclass(frozen=True)
class Topic:
    id: str
    title: str


@dataclass
class TopicWords:
    title: str
    words: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RoundConfiguration:
    participant_count: int
    impostor_count: int
    topic_id: str
