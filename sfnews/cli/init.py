"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, default_sources, save_config, save_sources

console = Console()


def init_command(
    config_dir: Path = typer.Option(
        Path.home() / ".config" / "sfnews",
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    seed_sources: bool = typer.Option(
        True,
        "--seed-sources/--no-seed-sources",
        help="Seed the built-in San Francisco sources",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing files"),
) -> None:
    """Write the default configuration and source list."""
    console.print(Panel.fit("SF News - Initialization", style="bold blue"))

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"
    sources_path = config_dir / "sources.yaml"

    if not force and (config_path.exists() or sources_path.exists()):
        console.print(
            f"[red]Configuration already exists in {config_dir}. Use --force to overwrite.[/red]"
        )
        raise typer.Exit(1)

    config = ConfigModel()
    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    sources = default_sources() if seed_sources else []
    save_sources(sources, sources_path)
    console.print(f"✅ Created sources: {sources_path} ({len(sources)} sources)")

    console.print(
        Panel(
            f"[green]✅ SF News initialized![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Sources: {sources_path}\n\n"
            f"Next steps:\n"
            f"1. Optional backup search key: [bold]export {config.backup.api_key_env}=your_key[/bold]\n"
            f"2. Check sources: [bold]sfnews sources test[/bold]\n"
            f"3. Run: [bold]sfnews fetch[/bold]",
            style="green",
        )
    )
