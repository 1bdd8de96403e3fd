"""Mood statistics and calendar CLI commands."""

import calendar
from datetime import date
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from cli.config_models import VALID_WINDOWS
from cli.utils import get_components, mood_markup
from diary.colors import label_to_color
from diary.sentiment import label_to_emoji, label_to_text, score_to_percent
from diary.stats import get_stats_by_date_range

console = Console()

WEEKDAYS = ["월", "화", "수", "목", "금", "토", "일"]


@click.command()
@click.option("-d", "--days", type=click.Choice([str(d) for d in VALID_WINDOWS]), help="Lookback days")
def stats(days: Optional[str]):
    """Show mood statistics for a recent window."""
    c = get_components()
    window = int(days) if days else c["config"].stats.default_days
    result = get_stats_by_date_range(c["store"].get_entries(), window)

    if not result["total"]:
        console.print(f"[yellow]No entries in the last {window} days.[/]")
        return

    table = Table(show_header=True, title=f"Mood - last {window} days")
    table.add_column("Mood")
    table.add_column("Entries", justify="right")
    rows = [
        ("very_positive", result["veryPositive"]),
        ("positive", result["positive"] - result["veryPositive"]),
        ("neutral", result["neutral"]),
        ("negative", result["negative"] - result["veryNegative"]),
        ("very_negative", result["veryNegative"]),
    ]
    for label, count in rows:
        table.add_row(f"{label_to_emoji(label)} {mood_markup(label, label_to_text(label))}", str(count))
    console.print(table)

    avg = result["avgScore"]
    console.print(
        f"\n[bold]Average:[/] {avg:+.2f} ({score_to_percent(avg)}%)  |  Entries: {result['total']}"
    )
    if result["topKeywords"]:
        top = ", ".join(f"{k} ({v})" for k, v in result["topKeywords"].items())
        console.print(f"[bold]Top keywords:[/] {top}")


@click.command("calendar")
@click.option("-m", "--month", help="Month to show (YYYY-MM), defaults to current")
def mood_calendar(month: Optional[str]):
    """Show a month calendar coloured by daily mood."""
    today = date.today()
    if month:
        try:
            year, mon = (int(p) for p in month.split("-"))
            date(year, mon, 1)
        except ValueError:
            raise click.BadParameter(f"Expected YYYY-MM, got '{month}'")
    else:
        year, mon = today.year, today.month

    c = get_components()
    colors = c["store"].get_mood_colors()

    table = Table(title=f"{year}년 {mon}월", show_header=True, show_lines=True)
    for name in WEEKDAYS:
        table.add_column(name, justify="center", width=4)

    for week in calendar.Calendar().monthdayscalendar(year, mon):
        cells = []
        for day in week:
            if not day:
                cells.append("")
                continue
            label = colors.get(f"{year:04d}-{mon:02d}-{day:02d}")
            if label:
                cells.append(f"[black on {label_to_color(label)}]{day:>2}[/]")
            else:
                cells.append(f"[dim]{day:>2}[/]")
        table.add_row(*cells)

    console.print(table)

    legend = "  ".join(
        f"[black on {label_to_color(label)}]  [/] {label_to_text(label)}"
        for label in ("very_positive", "positive", "neutral", "negative", "very_negative")
    )
    console.print(legend)
