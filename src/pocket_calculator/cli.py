"""CLI interface for the pocket calculator."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from pocket_calculator import __version__
from pocket_calculator.core.engine import CalcError, CalculatorEngine
from pocket_calculator.core.session import KeyResult, first_error, run_keys, split_keys
from pocket_calculator.logging_config import setup_logging
from pocket_calculator.schemas.config import CalculatorConfig

console = Console()

DEFAULT_CONFIG = "pocket-calc.yaml"
QUIT_WORDS = {"q", "quit", "exit"}


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Pocket Calculator.

    Drive a four-function keypad calculator from the command line.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _load_config(config: str | None) -> CalculatorConfig:
    """Load config, exiting with a message when it is invalid."""
    config_path = Path(config) if config else Path(DEFAULT_CONFIG)
    try:
        return CalculatorConfig.load(config_path)
    except (ValidationError, yaml.YAMLError) as e:
        console.print(f"[red]✗[/red] Invalid config {config_path}: {escape(str(e))}")
        sys.exit(2)


def _build_engine(ctx: click.Context, config: str | None, seed: int | None) -> CalculatorEngine:
    cfg = _load_config(config)
    level = "DEBUG" if ctx.obj.get("verbose") else cfg.logging.level
    setup_logging(level=level, json_format=cfg.logging.json_format)
    try:
        return CalculatorEngine(config=cfg.engine, initial_value=seed)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--seed") from None


def _error_style(error: CalcError) -> str:
    """Get Rich style for an error code."""
    styles = {
        CalcError.NO_ERROR: "green",
        CalcError.INPUT_OVERFLOW: "yellow",
        CalcError.UNRECOGNIZED_TOKEN: "yellow",
        CalcError.NEGATIVE_VALUE: "red",
        CalcError.CALCULATE_OVERFLOW: "red",
        CalcError.FATAL: "red bold",
    }
    return styles.get(error, "white")


def _trace_table(results: list[KeyResult]) -> Table:
    table = Table(title="Keys")
    table.add_column("#", style="dim")
    table.add_column("Key", style="cyan")
    table.add_column("Result")
    table.add_column("Display", justify="right")

    for i, result in enumerate(results, start=1):
        style = _error_style(result.error)
        table.add_row(
            str(i),
            escape(result.key),
            f"[{style}]{result.error.value}[/{style}]",
            result.display,
        )
    return table


def _render_display(engine: CalculatorEngine) -> Panel:
    marker = " [dim](op)[/dim]" if engine.in_operation() else ""
    return Panel(f"[bold]{engine.display_string()}[/bold]{marker}", expand=False)


@main.command()
@click.argument("keys")
@click.option("--seed", type=int, default=None, help="Initial integer on the display")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help=f"Path to config file ({DEFAULT_CONFIG})",
)
@click.option("--trace", is_flag=True, help="Show the display after every key")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def press(
    ctx: click.Context,
    keys: str,
    seed: int | None,
    config: str | None,
    trace: bool,
    as_json: bool,
) -> None:
    """Press KEYS and show the result.

    KEYS is read one character per key, or split on whitespace when it
    contains spaces (use "1 00 + 2 =" to send the double-zero key).
    """
    engine = _build_engine(ctx, config, seed)
    results = run_keys(engine, split_keys(keys))
    error = first_error(results)

    if as_json:
        data = {
            "error": error.value,
            "state": engine.snapshot().model_dump(mode="json"),
        }
        if trace:
            data["keys"] = [
                {"key": r.key, "error": r.error.value, "display": r.display}
                for r in results
            ]
        click.echo(json.dumps(data, indent=2))
    else:
        if trace:
            console.print(_trace_table(results))
        console.print(_render_display(engine))
        if error != CalcError.NO_ERROR:
            style = _error_style(error)
            console.print(f"[{style}]Error:[/{style}] {error.value}")

    if error != CalcError.NO_ERROR:
        sys.exit(1)


@main.command()
@click.option("--seed", type=int, default=None, help="Initial integer on the display")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help=f"Path to config file ({DEFAULT_CONFIG})",
)
@click.pass_context
def repl(ctx: click.Context, seed: int | None, config: str | None) -> None:
    """Interactive calculator session.

    Type keys and press Enter; "q" quits.
    """
    engine = _build_engine(ctx, config, seed)
    console.print(_render_display(engine))

    while True:
        line = click.prompt("keys", default="", show_default=False)
        if line.strip().lower() in QUIT_WORDS:
            break

        for result in run_keys(engine, split_keys(line)):
            if not result.ok:
                style = _error_style(result.error)
                console.print(f"[{style}]{escape(result.key)}: {result.error.value}[/{style}]")
        console.print(_render_display(engine))


@main.command()
@click.argument("output", type=click.Path(), default=DEFAULT_CONFIG)
def init(output: str) -> None:
    """Initialize a new configuration file."""
    output_path = Path(output)

    if output_path.exists():
        if not click.confirm(f"{output} already exists. Overwrite?"):
            return

    config = CalculatorConfig()
    config.save(output_path)
    console.print(f"[green]Created:[/green] {output}")


@main.command()
def version() -> None:
    """Show version information."""
    console.print(f"Pocket Calculator v{__version__}")


if __name__ == "__main__":
    main()
