"""Topic catalog fetched from a remote YAML document, and word selection."""

import logging
import random
import re

import httpx
import yaml

from impostor.models import Topic, TopicWords

logger = logging.getLogger(__name__)

_BOOL_TAG = "tag:yaml.org,2002:bool"


class _CatalogLoader(yaml.SafeLoader):
    """SafeLoader where only true/false are booleans, as in YAML 1.2.

    Plain words such as on, off, yes and no stay strings.
    """


_CatalogLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_CatalogLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


class WordBankError(Exception):
    """Raised when the word bank cannot be fetched or parsed."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"[{source}] {message}")


def parse_catalog(text: str, source: str = "<text>") -> dict[str, TopicWords]:
    """Parse a `{topics: {<id>: {title, words[]}}}` document.

    YAML and JSON are both accepted. Word order and duplicates are kept.
    A topic without `words` has no words; one without a `title` (or with a
    null one) uses its id. Only true/false are booleans, so on, no and yes
    stay words. Null, true/false and nested words are rejected and must be
    quoted; other scalars such as numbers are converted with str().

    Raises:
        WordBankError: If the text is not YAML or does not have that shape.
    """
    try:
        raw = yaml.load(text, Loader=_CatalogLoader)
    except yaml.YAMLError as exc:
        raise WordBankError(source, f"Invalid YAML: {exc}") from exc

    if not isinstance(raw, dict) or not isinstance(raw.get("topics"), dict):
        raise WordBankError(source, "Expected a mapping with a 'topics' mapping")

    catalog: dict[str, TopicWords] = {}
    for topic_id, data in raw["topics"].items():
        if not isinstance(data, dict):
            raise WordBankError(source, f"Topic {topic_id!r} must be a mapping")
        words = data.get("words") or []
        if not isinstance(words, list):
            raise WordBankError(source, f"Words of topic {topic_id!r} must be a list")
        for word in words:
            if word is None or isinstance(word, (bool, dict, list)):
                raise WordBankError(source, f"Word {word!r} of topic {topic_id!r} must be a quoted string")
        title = data.get("title")
        catalog[str(topic_id)] = TopicWords(
            title=str(title) if title is not None else str(topic_id),
            words=[str(w) for w in words],
        )
    return catalog


class WordBank:
    """Read-only view over a parsed catalog."""

    def __init__(self, catalog: dict[str, TopicWords], rng: random.Random | None = None) -> None:
        self._catalog = catalog
        self._rng = rng

    @property
    def topics(self) -> list[Topic]:
        return [Topic(id=topic_id, title=data.title) for topic_id, data in self._catalog.items()]

    def get_words_for_topic(self, topic_id: str) -> list[str]:
        data = self._catalog.get(topic_id)
        return list(data.words) if data else []

    def select_word_from_topic(self, topic_id: str, last_word: str | None = None) -> str:
        """Draw one word uniformly at random.

        Every occurrence of last_word is left out of the draw when the topic
        has more than one word. A single-word topic always returns that word.
        Returns "" for an unknown or empty topic.
        """
        words = self.get_words_for_topic(topic_id)
        if not words:
            return ""

        pool = words
        if last_word and len(words) > 1:
            # Every entry equals last_word: draw from the full list.
            pool = [w for w in words if w != last_word] or words

        choice = self._rng.choice if self._rng is not None else random.choice
        return choice(pool)

    def draw_words(self, topic_id: str, count: int, last_word: str | None = None) -> list[str]:
        """Draw a feed of count words, none equal to the draw right before it.

        last_word is the draw that preceded the feed, if any.
        """
        feed: list[str] = []
        for _ in range(max(0, count)):
            last_word = self.select_word_from_topic(topic_id, last_word)
            feed.append(last_word)
        return feed


class WordBankCache:
    """Fetches the catalog once and hands out the same WordBank afterwards.

    No lock: two concurrent first calls may both fetch. A failed fetch
    caches nothing.
    """

    def __init__(
        self,
        url: str,
        timeout_sec: float = 10.0,
        client: httpx.AsyncClient | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._url = url
        self._timeout_sec = timeout_sec
        self._client = client
        self._rng = rng
        self._word_bank: WordBank | None = None

    async def _fetch(self) -> str:
        try:
            if self._client is not None:
                response = await self._client.get(self._url)
            else:
                async with httpx.AsyncClient(timeout=self._timeout_sec) as client:
                    response = await client.get(self._url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise WordBankError(self._url, f"Fetch failed: {exc}") from exc
        return response.text

    async def ensure_loaded(self) -> WordBank:
        if self._word_bank is None:
            text = await self._fetch()
            catalog = parse_catalog(text, source=self._url)
            logger.info("Word bank loaded: %d topics from %s", len(catalog), self._url)
            self._word_bank = WordBank(catalog, rng=self._rng)
        return self._word_bank
