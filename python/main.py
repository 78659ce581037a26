#!/usr/bin/env python3
"""Geography Quiz.

Usage::

    python main.py                    # interactive menu (Rich)
    python main.py -f vanilla -m locate
    python main.py -n 6 --delay 1     # six options, faster pacing
    python main.py --list             # catalog summary
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import DEFAULT_ADVANCE_DELAY, GameConfig  # noqa: E402
from backend.engine.gamegenerator import DEFAULT_OPTION_COUNT  # noqa: E402
from backend.models.catalog import Catalog, CatalogError  # noqa: E402
from backend.models.question import GameMode  # noqa: E402

logger = logging.getLogger("geo-quiz")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _print_summary(catalog: Catalog) -> None:
    summary = catalog.summary()
    table = Table(title="Catalog", title_style="bold cyan")
    table.add_column("Entities")
    table.add_column("Count", justify="right", style="yellow")
    for label, count in summary.items():
        table.add_row(label.capitalize(), str(count))
    Console().print(table)


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Frontend = typer.Option(
        Frontend.rich, "-f", "--frontend",
        help="Terminal frontend to launch.",
    ),
    mode: Optional[GameMode] = typer.Option(
        None, "-m", "--mode",
        help="Start directly in this mode. Omit for the menu.",
    ),
    options: int = typer.Option(
        DEFAULT_OPTION_COUNT, "-n", "--options",
        min=2, max=9,
        help="Choices offered per identify question.",
    ),
    delay: float = typer.Option(
        DEFAULT_ADVANCE_DELAY, "--delay",
        min=0.0,
        help="Seconds feedback stays up before the next question.",
    ),
    cities: Path = typer.Option(
        DATA_DIR / "cities.json", "--cities",
        help="JSON list of city records.",
    ),
    regions: Path = typer.Option(
        DATA_DIR / "provinces.geojson", "--regions",
        help="GeoJSON or TopoJSON boundary file.",
    ),
    list_catalog: bool = typer.Option(
        False, "--list",
        help="Show the catalog summary and exit.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log debug output to stderr.",
    ),
) -> None:
    """Geography Quiz."""
    _configure_logging(verbose)

    try:
        catalog = Catalog.load(cities_path=cities, regions_path=regions)
    except CatalogError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    if list_catalog:
        _print_summary(catalog)
        return

    if catalog.is_empty:
        typer.echo("Error: the catalog has no regions or cities.", err=True)
        raise typer.Exit(code=1)

    config = GameConfig(option_count=options, advance_delay=delay)
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(catalog=catalog, config=config, mode=mode)


if __name__ == "__main__":
    app()
