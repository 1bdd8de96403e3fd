"""Journal CLI commands."""

from datetime import date, datetime
from typing import Optional

import click
import structlog
from rich.console import Console
from rich.table import Table
from rich.text import Text

from cli.utils import MOOD_STYLE, get_components, mood_markup
from diary.keywords import highlight_keywords
from diary.sentiment import as_number, label_to_emoji, label_to_text, score_to_percent

console = Console()
logger = structlog.get_logger()


def parse_day(value: Optional[str]) -> Optional[date]:
    """Parse YYYY-MM-DD, or return None for an empty value."""
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Expected YYYY-MM-DD, got '{value}'")


def resolve_entry(store, entry_id: str) -> Optional[dict]:
    """Find an entry by full id or unique id prefix."""
    entry = store.get_entry(entry_id)
    if entry:
        return entry
    matches = [e for e in store.get_entries() if str(e.get("id", "")).startswith(entry_id)]
    return matches[0] if len(matches) == 1 else None


def entry_mood(entry: dict) -> tuple[str, float]:
    """Label and score of a stored entry, tolerating malformed sentiment."""
    sentiment = entry.get("sentiment")
    if not isinstance(sentiment, dict):
        return "neutral", 0.0
    label = sentiment.get("label")
    return (label if isinstance(label, str) else "neutral"), as_number(sentiment.get("score"))


def render_highlighted(text: str, keywords: list[str], dictionary, label: str) -> Text:
    style = MOOD_STYLE.get(label, "bold")
    rendered = Text()
    for seg in highlight_keywords(text, keywords, dictionary):
        rendered.append(seg.text, style=f"{style} underline" if seg.is_keyword else None)
    return rendered


@click.group()
def journal():
    """Write and browse diary entries."""
    pass


@journal.command("write")
@click.option("-d", "--date", "day", help="Entry day (YYYY-MM-DD), defaults to today")
@click.argument("text", required=False)
def journal_write(day: Optional[str], text: Optional[str]):
    """Write a diary entry. Opens editor if no text provided."""
    entry_day = parse_day(day)
    c = get_components()

    if not text:
        text = click.edit("\n")
        if not text or not text.strip():
            console.print("[yellow]No text provided, cancelled.[/]")
            return

    try:
        entry = c["writer"].write(text, entry_day)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1)

    sentiment = entry["sentiment"]
    console.print(
        f"[green]Saved[/] {entry['id'][:8]}  "
        f"{label_to_emoji(sentiment['label'])} "
        f"{mood_markup(sentiment['label'], label_to_text(sentiment['label']))} "
        f"({score_to_percent(sentiment['score'])}%)"
    )
    if entry["keywords"]:
        console.print(f"[dim]Keywords:[/] {', '.join(entry['keywords'])}")
    console.print(f"\n{entry['botReply']}")


@journal.command("analyze")
@click.argument("text")
def journal_analyze(text: str):
    """Analyze text without saving it."""
    c = get_components()
    analysis = c["analyzer"].analyze(text)
    matches = analysis.matches
    sentiment = analysis.sentiment

    console.print(render_highlighted(text, matches.keywords, c["dictionary"], sentiment.label))
    console.print()

    table = Table(show_header=True)
    table.add_column("Keyword")
    table.add_column("Count", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Polarity")
    for keyword in matches.keywords:
        table.add_row(
            keyword,
            str(matches.counts[keyword]),
            f"{matches.weighted[keyword]:.2f}",
            str(c["dictionary"].polarity(keyword) or "?"),
        )
    if matches.keywords:
        console.print(table)
    else:
        console.print("[yellow]No dictionary keywords found.[/]")

    console.print(
        f"\n{label_to_emoji(sentiment.label)} "
        f"{mood_markup(sentiment.label, label_to_text(sentiment.label))}  "
        f"score={sentiment.score:+.3f}  raw={sentiment.raw_score:+.3f}  "
        f"confidence={sentiment.confidence:.0%}  "
        f"match rate={matches.match_rate:.0%}"
    )


@journal.command("list")
@click.option("-d", "--date", "day", help="Only entries on this day (YYYY-MM-DD)")
@click.option("-n", "--limit", default=10, help="Max entries to show")
def journal_list(day: Optional[str], limit: int):
    """List recent diary entries."""
    c = get_components()
    store = c["store"]
    parsed = parse_day(day)
    entries = store.get_entries_by_date(parsed.isoformat()) if parsed else store.get_entries()

    if not entries:
        console.print("[yellow]No entries found.[/]")
        return

    table = Table(show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Mood")
    table.add_column("Score", justify="right")
    table.add_column("Text")

    for e in entries[:limit]:
        label, score = entry_mood(e)
        table.add_row(
            str(e.get("id", ""))[:8],
            str(e.get("date", "?"))[:16].replace("T", " "),
            f"{label_to_emoji(label)} {mood_markup(label)}",
            f"{score:+.2f}",
            str(e.get("text") or "")[:40].replace("\n", " "),
        )

    console.print(table)


@journal.command("show")
@click.argument("entry_id")
def journal_show(entry_id: str):
    """Show an entry with its keywords highlighted."""
    c = get_components()
    entry = resolve_entry(c["store"], entry_id)
    if not entry:
        console.print(f"[red]Entry not found:[/] {entry_id}")
        raise SystemExit(1)

    label, score = entry_mood(entry)
    keywords = entry.get("keywords")
    if not isinstance(keywords, list):
        keywords = []

    console.print(f"[cyan]{str(entry.get('date', ''))[:16].replace('T', ' ')}[/]  [dim]{entry['id']}[/]")
    console.print(render_highlighted(entry.get("text", ""), keywords, c["dictionary"], label))
    console.print(
        f"\n{label_to_emoji(label)} {mood_markup(label, label_to_text(label))} "
        f"({score_to_percent(score)}%)"
    )
    if entry.get("botReply"):
        console.print(f"\n[dim]{entry['botReply']}[/]")


@journal.command("delete")
@click.argument("entry_id")
@click.confirmation_option(prompt="Delete this entry?")
def journal_delete(entry_id: str):
    """Delete an entry."""
    c = get_components()
    entry = resolve_entry(c["store"], entry_id)
    if not entry or not c["store"].delete_entry(entry["id"]):
        console.print(f"[red]Entry not found:[/] {entry_id}")
        raise SystemExit(1)
    console.print(f"[green]Deleted[/] {entry['id'][:8]}")
