"""Fetch command implementation."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..models import Category
from ..pipeline import AggregationOptions, AggregationOrchestrator, print_aggregation_summary
from ..ranking import print_ranking_summary

console = Console()


def fetch_command(
    category: Optional[Category] = typer.Option(
        None,
        "--category",
        "-c",
        help="Fetch a single category (default: all)",
        case_sensitive=False,
    ),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Articles per category"),
    days: Optional[int] = typer.Option(None, "--days", "-d", help="Look-back window in days"),
    skip_backup: bool = typer.Option(False, "--skip-backup", help="Never call the backup search"),
    use_backup: bool = typer.Option(
        False, "--use-backup", help="Also query the backup search (single category)"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write results as JSON"),
) -> None:
    """Fetch, rank and print San Francisco news by category."""
    try:
        config = Config()
        defaults = config.config.defaults

        options = AggregationOptions.for_days(
            days if days is not None else defaults.days,
            limit=limit if limit is not None else defaults.limit,
            skip_backup=skip_backup,
            use_backup=use_backup,
        )

        orchestrator = AggregationOrchestrator.from_config(config)
        if category is None:
            result = asyncio.run(orchestrator.fetch_all_categories(options))
        else:
            result = asyncio.run(orchestrator.fetch_category(category, options))

    except KeyboardInterrupt:
        console.print("\n[yellow]Fetch interrupted by user[/yellow]")
        raise typer.Exit(1)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)

    print_ranking_summary(result)
    print_aggregation_summary(result)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        console.print(f"✅ Wrote {result.total} articles to {output}")

    if result.total == 0:
        console.print("[yellow]No articles found for the requested window.[/yellow]")
