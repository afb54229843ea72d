"""Rich console output for topics, round configurations and word feeds."""

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from impostor.models import RoundConfiguration
from impostor.word_bank import WordBank

console = Console(legacy_windows=False)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def print_topics(word_bank: WordBank) -> None:
    """Print every topic with its title and word count."""
    table = Table(title="Topics", show_lines=False)
    table.add_column("Id", style="cyan")
    table.add_column("Title")
    table.add_column("Words", justify="right", style="dim")
    for topic in word_bank.topics:
        table.add_row(topic.id, topic.title, str(len(word_bank.get_words_for_topic(topic.id))))
    console.print(table)


def print_configuration(config: RoundConfiguration, topic_title: str | None = None, title: str = "Round") -> None:
    topic_label = config.topic_id or "(none)"
    if topic_title and topic_title != config.topic_id:
        topic_label += f" ({topic_title})"
    body = Text.assemble(
        (_plural(config.participant_count, "participant"), "bold"),
        " | ",
        (_plural(config.impostor_count, "impostor"), "bold red"),
        " | topic: ",
        (topic_label, "cyan"),
    )
    console.print(Panel(body, title=f"[bold]{title}[/bold]", border_style="green"))


def print_word_feed(topic_id: str, words: list[str]) -> None:
    console.print(Rule(f"[bold cyan]Words from {topic_id}[/bold cyan]"))
    if not words or not any(words):
        console.print(Text("No words available for this topic.", style="yellow"))
        return
    for number, word in enumerate(words, start=1):
        console.print(f"  [dim]{number:>2}.[/dim] {word}")
