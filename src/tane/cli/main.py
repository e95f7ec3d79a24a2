"""
Tane CLI

Command-line interface for previewing generators.

Usage:
    tane generators                     List the named generators
    tane sample <name>                  Print samples of a generator
    tane sample <name> --seed 42        Reproducible samples
    tane config                         Show effective settings
"""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tane import __version__
from tane.core.config import get_settings
from tane.gen import (
    Gen,
    GenContext,
    alpha_numeric_string,
    ascii_string,
    boolean,
    char,
    choose_double,
    choose_int,
    float64,
    int32,
    int64,
    lower_string,
    numeric_string,
    string,
    upper_string,
)

# Create the main app
app = typer.Typer(
    name="tane",
    help="Tane (種) - seeded value generation for property-based testing",
    add_completion=False,
)

# Console for rich output
console = Console()

# Generators available by name from the command line
NAMED_GENERATORS: dict[str, tuple[Gen, str]] = {
    "int32": (int32, "Any signed 32-bit integer"),
    "int64": (int64, "Any signed 64-bit integer"),
    "float64": (float64, "Double in [0, 1)"),
    "boolean": (boolean, "True or False"),
    "char": (char, "Any non-surrogate code point"),
    "digit": (choose_int(0, 9), "Integer in [0, 9]"),
    "percent": (choose_double(0.0, 100.0), "Double in [0, 100]"),
    "string": (string(), "Unicode string"),
    "ascii_string": (ascii_string(), "Printable ASCII string"),
    "upper_string": (upper_string(), "A-Z string"),
    "lower_string": (lower_string(), "a-z string"),
    "numeric_string": (numeric_string(), "0-9 string"),
    "alpha_numeric_string": (alpha_numeric_string(), "A-Z, a-z, 0-9 string"),
    "int_list": (choose_int(-100, 100).list(), "List of integers in [-100, 100]"),
    "word_counts": (
        choose_int(0, 1000).map_by(lower_string((1, 6)), (0, 5)),
        "Dict of short words to counts",
    ),
}


@app.callback()
def main() -> None:
    """Configure logging from settings before any command runs."""
    logging.basicConfig(level=get_settings().log_level.upper())


# =============================================================================
# Commands
# =============================================================================


@app.command()
def generators() -> None:
    """List the generators available to 'tane sample'."""
    table = Table(title="Generators")
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    for name, (_, description) in NAMED_GENERATORS.items():
        table.add_row(name, description)

    console.print(table)


@app.command()
def sample(
    name: str = typer.Argument(..., help="Generator name (see 'tane generators')"),
    count: int = typer.Option(10, "--count", "-n", min=1, help="Number of samples"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed (default: TANE_SEED or random)"),
    size: Optional[int] = typer.Option(None, "--size", min=0, help="Size budget for collections"),
) -> None:
    """Print samples from a named generator.

    The same seed always prints the same samples.
    """
    if name not in NAMED_GENERATORS:
        console.print(f"[red]Unknown generator:[/red] {name}")
        console.print("Run [cyan]tane generators[/cyan] to list them.")
        raise typer.Exit(1)

    gen, description = NAMED_GENERATORS[name]
    if seed is not None:
        ctx = GenContext.with_seed(seed, size)
    else:
        ctx = GenContext.from_env_or_random(size=size)

    table = Table(title=f"{name} - {description}")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Value")

    for index, value in enumerate(gen.sample(ctx, count)):
        table.add_row(str(index), Text(repr(value)))

    console.print(table)
    console.print(f"[dim]seed={ctx.rnd.seed} size={ctx.size}[/dim]")


@app.command()
def config() -> None:
    """Show effective settings (TANE_* environment variables)."""
    settings = get_settings()

    console.print()
    console.print(
        Panel.fit(
            f"[bold blue]Tane (種) {__version__}[/bold blue]",
            border_style="blue",
        )
    )

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("seed", str(settings.seed) if settings.seed is not None else "[dim]random[/dim]")
    table.add_row("size", str(settings.size))
    table.add_row("fill_warn_count", str(settings.fill_warn_count))
    table.add_row("samples_count", str(settings.samples_count))
    table.add_row("log_level", settings.log_level)

    console.print(table)


if __name__ == "__main__":
    app()
