"""Click CLI: drives round setup, settings persistence and word draws."""

import asyncio
import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from config.config_loader import AppConfig, load_config
from impostor.configuration import MAX_PARTICIPANTS, MIN_PARTICIPANTS, ConfigurationState
from impostor.output import print_configuration, print_topics, print_word_feed
from impostor.settings_store import SettingsStore
from impostor.storage import JsonFileStorage
from impostor.word_bank import WordBank, WordBankCache, WordBankError

logger = logging.getLogger(__name__)

console = Console(legacy_windows=False)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _build_settings_store(config: AppConfig) -> SettingsStore:
    return SettingsStore(JsonFileStorage(config.storage.path), key=config.storage.key)


def _load_word_bank(config: AppConfig) -> WordBank:
    """Fetch the word bank or exit. Without words there is no game."""
    cache = WordBankCache(config.word_bank.url, timeout_sec=config.word_bank.timeout_sec)
    try:
        return asyncio.run(cache.ensure_loaded())
    except WordBankError as exc:
        console.print(f"[bold red]Word bank error:[/bold red] {exc}")
        sys.exit(1)


def _resize_roster(state: ConfigurationState, players: int) -> None:
    """Add participants or remove the last ones until the roster has `players` entries."""
    target = min(max(0, players), MAX_PARTICIPANTS)
    while state.participant_count < target:
        state.add_participant()
    while state.participant_count > target:
        state.remove_participant(state.participants[-1].id)


def _topic_title(word_bank: WordBank, topic_id: str) -> str | None:
    return next((t.title for t in word_bank.topics if t.id == topic_id), None)


@click.group()
@click.option("--settings-path", default=None, type=click.Path(dir_okay=False, path_type=Path),
              help="Where the last round is remembered (default: from config)")
@click.option("--verbose", is_flag=True, help="Enable DEBUG-level logging")
@click.pass_context
def main(ctx: click.Context, settings_path: Path | None, verbose: bool) -> None:
    """Impostor -- set up a round of the party game.

    \b
    Examples:
      impostor topics
      impostor start --players 5 --impostors 2 --topic food
      impostor start --words 3
      impostor draw food --last pan --count 5
      impostor show
    """
    load_dotenv()
    _setup_logging(verbose)

    try:
        config = load_config()
    except FileNotFoundError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        sys.exit(1)

    if settings_path is not None:
        config.storage.path = settings_path

    ctx.obj = config


@main.command()
@click.pass_obj
def topics(config: AppConfig) -> None:
    """List the topics in the word bank."""
    print_topics(_load_word_bank(config))


@main.command()
@click.pass_obj
def show(config: AppConfig) -> None:
    """Show the last saved round configuration."""
    saved = _build_settings_store(config).load()
    if saved is None:
        click.echo("No saved settings.")
        return
    print_configuration(saved, title="Last round")


@main.command()
@click.option("--players", default=None, type=int, help="Number of participants (default: last round)")
@click.option("--impostors", default=None, type=int, help="Requested impostors, clamped to the roster")
@click.option("--topic", "topic_id", default=None, help="Topic id (default: last round or first topic)")
@click.option("--words", "word_count", default=0, show_default=True, type=int,
              help="Also draw this many words for the round")
@click.pass_obj
def start(
    config: AppConfig,
    players: int | None,
    impostors: int | None,
    topic_id: str | None,
    word_count: int,
) -> None:
    """Commit a round, starting from the last saved configuration."""
    word_bank = _load_word_bank(config)
    state = ConfigurationState.initialize(word_bank.topics, _build_settings_store(config))

    if players is not None:
        _resize_roster(state, players)
    if impostors is not None:
        state.set_impostor_count(impostors)
    if topic_id is not None:
        if topic_id not in {t.id for t in word_bank.topics}:
            console.print(f"[bold red]Error:[/bold red] Unknown topic '{topic_id}'. Run 'impostor topics'.")
            sys.exit(1)
        state.set_topic(topic_id)

    if not state.can_start:
        console.print(
            f"[bold red]Error:[/bold red] Need at least {MIN_PARTICIPANTS} participants, "
            f"got {state.participant_count}. Use --players."
        )
        sys.exit(1)

    round_config = state.commit()
    logger.info(
        "Starting game with %d participants and %d impostors",
        round_config.participant_count,
        round_config.impostor_count,
    )
    print_configuration(round_config, topic_title=_topic_title(word_bank, round_config.topic_id))

    if word_count > 0:
        print_word_feed(round_config.topic_id, word_bank.draw_words(round_config.topic_id, word_count))


@main.command()
@click.argument("topic_id")
@click.option("--last", "last_word", default=None, help="Word drawn just before; it will not repeat")
@click.option("--count", default=1, show_default=True, type=int, help="Number of words to draw")
@click.pass_obj
def draw(config: AppConfig, topic_id: str, last_word: str | None, count: int) -> None:
    """Draw words from a topic without immediate repeats."""
    if count <= 0:
        click.echo("Nothing to draw.")
        return
    word_bank = _load_word_bank(config)
    print_word_feed(topic_id, word_bank.draw_words(topic_id, count, last_word=last_word))


if __name__ == "__main__":
    main()
