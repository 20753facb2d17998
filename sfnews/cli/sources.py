"""Sources commands."""

import asyncio
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..ingestion import SourceAdapter
from ..pipeline import AggregationOrchestrator

console = Console()
sources_app = typer.Typer(help="Inspect and probe news sources")


def _load_config() -> Config:
    config = Config()
    try:
        config.sources
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    return config


@sources_app.command("list")
def sources_list() -> None:
    """List all configured sources."""
    config = _load_config()
    sources = config.sources

    if not sources:
        console.print("[yellow]No sources configured.[/yellow]")
        return

    table = Table(title="Configured Sources")
    table.add_column("Name", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Category", style="magenta")
    table.add_column("Type", style="green")
    table.add_column("Priority", style="green", justify="right")
    table.add_column("Enabled", style="yellow")
    table.add_column("URL", style="blue")

    for source in sources:
        table.add_row(
            source.name,
            source.kind.value,
            source.category.value if source.category else "auto",
            source.source_type.value,
            str(source.priority),
            "✓" if source.enabled else "✗",
            source.url,
        )

    console.print(table)


async def _probe_all(adapters: List[SourceAdapter]) -> List[Tuple[SourceAdapter, bool]]:
    results = await asyncio.gather(*(adapter.is_available() for adapter in adapters))
    return list(zip(adapters, results))


@sources_app.command("test")
def sources_test(
    kind: Optional[str] = typer.Argument(None, help="Adapter kind to test (or test all)"),
) -> None:
    """Probe each enabled adapter for reachability."""
    config = _load_config()
    orchestrator = AggregationOrchestrator.from_config(config)

    adapters: List[SourceAdapter] = list(orchestrator.adapters)
    if orchestrator.backup is not None:
        adapters.append(orchestrator.backup)

    if kind:
        adapters = [a for a in adapters if a.kind == kind]
        if not adapters:
            console.print(f"[red]No enabled adapter of kind '{kind}'.[/red]")
            raise typer.Exit(1)

    for adapter, available in asyncio.run(_probe_all(adapters)):
        if available:
            console.print(f"[green]✅ {adapter.name}: OK[/green]")
        else:
            console.print(f"[red]❌ {adapter.name}: Unavailable[/red]")
