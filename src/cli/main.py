"""mood-diary command-line entry point."""

import sys

import click
from rich.console import Console

from cli.commands import export, import_backup, journal, mood_calendar, series, stats
from cli.config import load_config_model
from cli.logging_config import setup_logging

console = Console()


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
def cli(verbose: bool, json_logs: bool):
    """Mood diary - write entries, track how you feel."""
    try:
        config = load_config_model()
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    setup_logging(
        json_mode=json_logs or config.logging.json_mode,
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.paths.log_file,
    )


cli.add_command(journal)
cli.add_command(stats)
cli.add_command(mood_calendar)
cli.add_command(series)
cli.add_command(export)
cli.add_command(import_backup)


if __name__ == "__main__":
    cli()
