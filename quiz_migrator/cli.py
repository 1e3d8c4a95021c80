"""
CLI Interface
=============
Command-line interface for the quiz migrator.

Usage:
    python -m quiz_migrator migrate [options]
    python -m quiz_migrator schema [options]
"""

from __future__ import annotations

import json
import sys

import click
from notion_client import APIResponseError
from notion_client.errors import HTTPResponseError, RequestTimeoutError
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import MigrationConfig, load_config
from .engine import MigrationEngine
from .errors import QuizMigratorError

console = Console()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.version_option(version=__version__, prog_name="quiz-migrator")
def cli():
    """Notion Quiz Migrator — copy quiz questions from a page into a database."""
    pass


def _load_config_or_exit(env_file: str, **overrides) -> MigrationConfig:
    try:
        return load_config(env_file=env_file, **overrides)
    except ValidationError as e:
        console.print("[red]Invalid configuration:[/]")
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"  • {field}: {error['msg']}")
        sys.exit(1)


@cli.command()
@click.option(
    "--env-file",
    default=".env",
    help="Path to the .env file holding the Notion settings",
)
@click.option(
    "--page-size",
    default=None,
    type=click.IntRange(1, 100),
    help="Blocks requested per page (overrides PAGE_SIZE)",
)
@click.option(
    "--workers", "-j",
    default=None,
    type=click.IntRange(min=1),
    help="Questions migrated in parallel (1 = sequential, in page order)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Build the rows and log them without writing to the database",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(LOG_LEVELS),
    help="Logging level",
)
@click.option(
    "--log-file",
    default=None,
    help="Path to log file",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only the JSON report to stdout (for programmatic use)",
)
def migrate(
    env_file: str,
    page_size: int,
    workers: int,
    dry_run: bool,
    log_level: str,
    log_file: str,
    json_output: bool,
):
    """Migrate every question on the source page into the destination database."""

    if json_output:
        # Suppress console output for JSON mode
        log_level = "ERROR"

    config = _load_config_or_exit(
        env_file,
        page_size=page_size,
        max_workers=workers,
        dry_run=dry_run or None,
        log_level=log_level,
        log_file=log_file,
    )

    if not json_output:
        console.print()
        console.print(
            Panel.fit(
                f"[bold cyan]Notion Quiz Migrator v{__version__}[/]\n"
                f"[dim]Source page: {config.source_page_id}[/]\n"
                f"[dim]Destination database: {config.dest_database_id}[/]",
                border_style="cyan",
            )
        )
        console.print()

    try:
        engine = MigrationEngine(config)

        if json_output:
            report = engine.run()
            print(json.dumps(report.model_dump(), indent=2, ensure_ascii=False))
        else:
            with console.status("Migrating questions..."):
                report = engine.run()
            _display_report(report)

    except QuizMigratorError as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)
    except APIResponseError as e:
        console.print(f"[red]Notion API error ({e.code}):[/] {e}")
        sys.exit(1)
    except (HTTPResponseError, RequestTimeoutError) as e:
        console.print(f"[red]Notion API error:[/] {e}")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Unexpected error:[/] {e}")
        if config.log_level.upper() == "DEBUG":
            console.print_exception()
        sys.exit(1)

    if report.rows_failed:
        sys.exit(2)


@cli.command()
@click.option(
    "--env-file",
    default=".env",
    help="Path to the .env file holding the Notion settings",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Print the raw database object as JSON",
)
def schema(env_file: str, json_output: bool):
    """Display the destination database's columns."""

    config = _load_config_or_exit(
        env_file,
        log_level="ERROR" if json_output else None,
    )

    try:
        database = MigrationEngine(config).describe_destination()
    except QuizMigratorError as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)
    except APIResponseError as e:
        console.print(f"[red]Notion API error ({e.code}):[/] {e}")
        sys.exit(1)
    except (HTTPResponseError, RequestTimeoutError) as e:
        console.print(f"[red]Notion API error:[/] {e}")
        sys.exit(1)

    if json_output:
        print(json.dumps(database, indent=2, ensure_ascii=False))
        return

    title = "".join(
        run.get("plain_text", "") for run in database.get("title", [])
    )

    console.print()
    table = Table(
        title=f"Destination Database: {title or config.dest_database_id}",
        border_style="cyan",
    )
    table.add_column("Column", style="bold")
    table.add_column("Type")

    for name, prop in sorted(database.get("properties", {}).items()):
        table.add_row(name, prop.get("type", "?"))

    console.print(table)
    console.print()


# ─── Display Helpers ──────────────────────────────────────────────────────────


def _display_report(report):
    """Display the migration report as a rich table."""
    console.print()

    table = Table(
        title="Migration Report" + (" (dry run)" if report.dry_run else ""),
        border_style="green",
    )
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Status", justify="center")

    table.add_row("Blocks Seen", str(report.blocks_seen), "")
    table.add_row(
        "Questions Detected",
        str(report.questions_detected),
        "[green]✓[/]" if report.questions_detected > 0 else "[red]✗[/]",
    )
    table.add_row(
        "Rows Written",
        f"{report.rows_written} ({report.success_rate}%)",
        "[green]✓[/]" if report.rows_failed == 0 else "[yellow]⚠[/]",
    )
    table.add_row(
        "Rows Failed",
        str(report.rows_failed),
        "[green]✓[/]" if report.rows_failed == 0 else "[red]✗[/]",
    )

    console.print(table)

    if report.failed_question_numbers:
        console.print(
            f"[red]Failed questions:[/] "
            f"{', '.join(str(n) for n in report.failed_question_numbers)}"
        )

    console.print(f"[dim]Elapsed: {report.elapsed_seconds:.2f}s[/]")
    console.print()


# ─── Entry point (for python -m quiz_migrator.cli) ────────────────────────────


if __name__ == "__main__":
    cli()
