"""Data export and import CLI commands."""

from pathlib import Path

import click
from rich.console import Console

from cli.utils import get_components
from diary.export import DiaryExporter

console = Console()


@click.group()
def export():
    """Export diary data."""
    pass


@export.command("json")
@click.option("-o", "--output", required=True, type=click.Path(), help="Output file")
def export_json(output: str):
    """Export entries and mood colours as a JSON backup."""
    c = get_components()
    with console.status("Exporting..."):
        count = DiaryExporter(c["store"]).export_json(Path(output))
    console.print(f"[green]Exported {count} entries to {output}[/]")


@export.command("markdown")
@click.option("-o", "--output", required=True, type=click.Path(), help="Output directory")
def export_markdown(output: str):
    """Export one Markdown file per entry."""
    c = get_components()
    with console.status("Exporting..."):
        count = DiaryExporter(c["store"]).export_markdown(Path(output))
    console.print(f"[green]Wrote {count} files to {output}[/]")


@click.command("import")
@click.argument("backup", type=click.Path(exists=True, dir_okay=False))
@click.confirmation_option(prompt="Replace all stored entries with this backup?")
def import_backup(backup: str):
    """Restore entries and mood colours from a JSON backup."""
    c = get_components()
    try:
        count = DiaryExporter(c["store"]).import_json(Path(backup))
    except ValueError as e:
        console.print(f"[red]Import failed:[/] {e}")
        raise SystemExit(1)
    console.print(f"[green]Imported {count} entries[/]")
