"""Main CLI application."""

import logging

import typer
from dotenv import load_dotenv
from rich.logging import RichHandler

# Load .env file if it exists
load_dotenv()

from .fetch import fetch_command
from .init import init_command
from .sources import sources_app

app = typer.Typer(
    name="sfnews",
    help="SF News - San Francisco news aggregator",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
    )
    # Per-request lines from the HTTP stack are noise outside debug runs.
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


# Register commands
app.command("init")(init_command)
app.command("fetch")(fetch_command)
app.add_typer(sources_app, name="sources", help="Inspect and probe news sources")


if __name__ == "__main__":
    app()
