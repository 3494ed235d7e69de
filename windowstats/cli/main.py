"""
windowstats CLI.

Commands:
- feed: Read numbers from stdin and report the trailing-window percentiles
- bench: Simulated load test with a manual clock
- config: Configuration management
- version: Show version
"""

import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..clock import ManualClock, unix_timestamp
from ..config import StatsConfig, load_config, generate_default_config
from ..core.errors import WindowStatsError, EmptyWindowError
from ..window import WindowStats

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="windowstats",
    help="Percentiles over a trailing time window",
    add_completion=False,
)
console = Console()


def _setup(config_path: Optional[Path]) -> StatsConfig:
    """Load and validate config, then configure logging from it."""
    try:
        cfg = load_config(config_path).raise_if_invalid()
    except WindowStatsError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    logging.basicConfig(
        level=cfg.logging.level_no,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return cfg


def _parse_values(text: str) -> List[float]:
    """Parse whitespace-separated numbers, skipping bad tokens."""
    values = []
    for token in text.split():
        try:
            values.append(float(token))
        except ValueError:
            logger.warning(f"Skipping non-numeric input: {token!r}")
    return values


def _format_pair(timestamp: int, value) -> str:
    return f"({timestamp}, {value})"


# === FEED COMMAND ===

@app.command()
def feed(
    width: Optional[int] = typer.Option(None, "-w", "--width", help="Window width in seconds"),
    percentile: Optional[List[int]] = typer.Option(
        None, "-p", "--percentile", help="Percentile to report (repeatable)"
    ),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only print percentiles"),
):
    """Read numbers from stdin, then print live samples and percentiles."""
    cfg = _setup(config_path)
    qs = percentile or cfg.query.percentiles

    try:
        stats = WindowStats(
            width=width if width is not None else cfg.window.width_seconds,
            clock=unix_timestamp,
        )
    except WindowStatsError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    stats.extend(_parse_values(sys.stdin.read()))

    if not quiet:
        line = " ".join(_format_pair(ts, value) for ts, value in stats)
        console.print(line, soft_wrap=True, markup=False)

    try:
        results = stats.percentiles(qs)
    except EmptyWindowError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)
    except WindowStatsError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(2)

    for q, value in results.items():
        console.print(f"P{q}: {value}", markup=False)


# === BENCH COMMAND ===

@app.command()
def bench(
    seconds: int = typer.Option(90, "-s", "--seconds", help="Simulated seconds"),
    samples: int = typer.Option(1000, "-n", "--samples", help="Samples added per second"),
    width: Optional[int] = typer.Option(None, "-w", "--width", help="Window width in seconds"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
):
    """Fill the window for N simulated seconds and time the P70 query."""
    cfg = _setup(config_path)

    clock = ManualClock(now=unix_timestamp())
    try:
        stats = WindowStats(
            width=width if width is not None else cfg.window.width_seconds,
            clock=clock,
        )
    except WindowStatsError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    start = time.perf_counter()
    for second in range(seconds):
        for _ in range(samples):
            stats.add(second)
        clock.advance(1)
    insert_duration = time.perf_counter() - start

    start = time.perf_counter()
    try:
        p70 = stats.p70()
    except EmptyWindowError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)
    query_duration = time.perf_counter() - start

    table = Table(title="Benchmark")
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    total = seconds * samples
    table.add_row("Width", f"{stats.width}s")
    table.add_row("Added", f"{total:,}")
    table.add_row("Stored", f"{stats.size():,}")
    table.add_row("Live", f"{stats.live_count():,}")
    table.add_row("P70", str(p70))
    table.add_row("Insert time", f"{insert_duration:.3f}s")
    if insert_duration > 0:
        table.add_row("Insert rate", f"{total / insert_duration:,.0f}/s")
    table.add_row("P70 time", f"{query_duration:.3f}s")

    console.print(table)


# === CONFIG COMMAND ===

@app.command("config")
def config_cmd(
    action: str = typer.Argument(..., help="Action: init|validate|dump"),
    path: Optional[Path] = typer.Argument(None, help="Config file path"),
):
    """Configuration management."""
    if action == "init":
        console.print(generate_default_config(), markup=False)

    elif action == "validate":
        if not path:
            console.print("[red]Path required for validate[/]")
            raise typer.Exit(1)
        try:
            cfg = StatsConfig.load(path)
        except WindowStatsError as e:
            console.print(f"[red]Error:[/] {escape(str(e))}")
            raise typer.Exit(1)
        errors = cfg.validate()
        if errors:
            console.print("[red]Invalid configuration:[/]")
            for e in errors:
                console.print(f"  - {escape(e)}")
            raise typer.Exit(1)
        console.print(f"[green]Valid:[/] {path}")

    elif action == "dump":
        try:
            cfg = load_config(path)
        except WindowStatsError as e:
            console.print(f"[red]Error:[/] {escape(str(e))}")
            raise typer.Exit(1)
        console.print(cfg.to_yaml(), markup=False)

    else:
        console.print(f"[red]Unknown action:[/] {action}")
        console.print("Valid actions: init, validate, dump")
        raise typer.Exit(1)


# === VERSION COMMAND ===

@app.command()
def version():
    """Show version information."""
    console.print(f"[bold blue]windowstats v{__version__}[/]")


def main():
    app()


if __name__ == "__main__":
    main()
