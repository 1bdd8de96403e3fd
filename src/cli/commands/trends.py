"""Time-series CLI command."""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from cli.config_models import VALID_WINDOWS
from cli.utils import get_components
from diary.stats import compute_sentiment_time_series, compute_word_time_series, mood_trend

console = Console()

TREND_STYLE = {
    "improving": "[green]improving[/]",
    "declining": "[red]declining[/]",
    "stable": "[dim]stable[/]",
}


def score_bar(score: float, width: int = 10) -> str:
    """Bar centred on zero: left red for negative, right green for positive."""
    filled = round(abs(score) * width)
    if score > 0:
        return " " * width + "|" + f"[green]{'█' * filled}[/]"
    if score < 0:
        return " " * (width - filled) + f"[red]{'█' * filled}[/]" + "|"
    return " " * width + "|"


@click.command()
@click.option("-d", "--days", type=click.Choice([str(d) for d in VALID_WINDOWS]), help="Window in days")
@click.option("-w", "--words", is_flag=True, help="Show keyword counts instead of sentiment")
def series(days: Optional[str], words: bool):
    """Show daily mood or keyword series for a trailing window."""
    c = get_components()
    window = int(days) if days else c["config"].stats.default_days
    entries = c["store"].get_entries()

    if words:
        _print_word_series(entries, window)
        return

    data = compute_sentiment_time_series(entries, window)

    table = Table(title=f"Mood series (past {window} days)", show_header=True)
    table.add_column("Date", style="dim")
    table.add_column("+", justify="right", style="green")
    table.add_column("-", justify="right", style="red")
    table.add_column("=", justify="right")
    table.add_column("Avg", justify="right")
    table.add_column("", min_width=21)

    for i, day in enumerate(data["dates"]):
        count = data["positive"][i] + data["negative"][i] + data["neutral"][i]
        avg = data["avgScores"][i]
        table.add_row(
            day,
            str(data["positive"][i] or ""),
            str(data["negative"][i] or ""),
            str(data["neutral"][i] or ""),
            f"{avg:+.2f}" if count else "",
            score_bar(avg) if count else "",
        )
    console.print(table)

    trend = mood_trend(data)
    console.print(
        f"\n[bold]Trend:[/] {TREND_STYLE[trend['direction']]} "
        f"(slope {trend['slope']:+.3f}/day over {trend['days']} day(s) with entries)"
    )


def _print_word_series(entries: list[dict], window: int) -> None:
    data = compute_word_time_series(entries, window)
    if not data["words"]:
        console.print("[yellow]No keywords recorded yet.[/]")
        return

    table = Table(title=f"Keyword series (past {window} days)", show_header=True)
    table.add_column("Date", style="dim")
    for word in data["words"]:
        table.add_column(word, justify="right")

    for i, day in enumerate(data["dates"]):
        table.add_row(day, *(str(data["data"][w][i] or "") for w in data["words"]))
    console.print(table)
