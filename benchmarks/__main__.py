"""Entry point for benchmarks CLI."""

from typing import Annotated

import typer

from . import benchs  # pyright: ignore[reportUnusedImport] # noqa: F401
from ._pipeline import run_pipeline, to_table
from ._registery import BENCHMARKS, CONSOLE

app = typer.Typer(help="Benchmarks for lazyseq developments.")


@app.command(name="list")
def list_benchmarks() -> None:
    """List the registered benchmarks."""
    for b in BENCHMARKS:
        CONSOLE.print(f"{b.category}: {b.name} ({b.source})")


@app.command()
def run(
    *,
    category: Annotated[
        str | None,
        typer.Option("--category", help="Only run the benchmarks of this class."),
    ] = None,
) -> None:
    """Run benchmarks and print their median timings."""
    CONSOLE.print("Running benchmarks...", style="bold blue")
    stats = run_pipeline(category)
    CONSOLE.print()
    CONSOLE.print(to_table(stats))
    CONSOLE.print("✓ Benchmarks complete", style="bold green")


if __name__ == "__main__":
    app()
