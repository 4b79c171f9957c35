"""
tick-median CLI.

Commands:
- run: Replay price files and write the running median
- config: init|validate|dump configuration
- version: Show version

Exit codes: 0=ok, 2=config error, 3=input read error,
4=output directory error, 5=output file error, 10=unhandled error
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..config import MedianConfig, load_config, generate_default_config
from ..core.errors import ConfigError, ExitCode, TickMedianError
from ..core.pipeline import MedianPipeline, PipelineResult
from ..streaming.base import EstimatorStrategy


logger = logging.getLogger(__name__)

app = typer.Typer(
    name="tick-median",
    help="Running median over timestamped price files",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _setup_logging(level: str, verbose: bool = False, quiet: bool = False) -> None:
    if verbose:
        level = 'DEBUG'
    elif quiet:
        level = 'WARNING'
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(error: TickMedianError) -> typer.Exit:
    err_console.print(f"[red]Error {error.code.value}:[/] {escape(error.message)}")
    return typer.Exit(int(error.exit_code))


def _print_summary(result: PipelineResult) -> None:
    """Print summary table."""
    table = Table(title="Summary")
    table.add_column("Metric", no_wrap=True)
    table.add_column("Value", justify="right")

    table.add_row("Strategy", result.strategy)
    table.add_row("Files", str(result.files_read))
    table.add_row("Observations", f"{result.observations:,}")
    table.add_row("Rows emitted", f"{result.rows_emitted:,}")
    table.add_row("Last median", result.last_median or "-")
    table.add_row("Output", result.output_path)

    if result.duration_seconds > 0:
        table.add_row("Duration", f"{result.duration_seconds:.2f}s")
        table.add_row("Throughput", f"{result.observations / result.duration_seconds:,.0f}/s")

    console.print(table)


# === RUN COMMAND ===

@app.command()
def run(
    config_path: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file path"),
    input_dir: Optional[Path] = typer.Option(None, "-i", "--input", help="Override main.input"),
    output_dir: Optional[Path] = typer.Option(None, "-o", "--output", help="Override main.output"),
    strategy: Optional[EstimatorStrategy] = typer.Option(None, "--strategy", help="Median estimator"),
    seed_threshold: Optional[int] = typer.Option(
        None, "--seed-threshold", min=0, help="Hybrid estimator buffer size",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON"),
    verbose: bool = typer.Option(False, "-v", "--verbose"),
    quiet: bool = typer.Option(False, "-q", "--quiet"),
):
    """Replay price files and write the running median."""
    try:
        cfg = load_config(config_path)
        if input_dir is not None:
            cfg.main.input = str(input_dir)
        if output_dir is not None:
            cfg.main.output = str(output_dir)
        if strategy is not None:
            cfg.estimator.strategy = strategy.value
        if seed_threshold is not None:
            cfg.estimator.seed_threshold = seed_threshold
        cfg.ensure_valid()
    except ConfigError as e:
        raise _fail(e)

    _setup_logging(cfg.logging.level, verbose=verbose, quiet=quiet)
    logger.debug(f"tick-median v{__version__}, input: {cfg.main.input_dir}")

    try:
        result = MedianPipeline(cfg).run()
    except TickMedianError as e:
        logger.debug(f"Run failed: {e.to_dict()}")
        raise _fail(e)
    except Exception as e:
        logger.exception(f"Unhandled error: {e}")
        raise typer.Exit(int(ExitCode.UNHANDLED))

    if as_json:
        typer.echo(result.to_json())
    elif not quiet:
        _print_summary(result)


# === CONFIG COMMAND ===

@app.command("config")
def config_cmd(
    action: str = typer.Argument(..., help="Action: init|validate|dump"),
    path: Optional[Path] = typer.Argument(None, help="Config file path"),
):
    """Configuration management."""
    if action == "init":
        typer.echo(generate_default_config())

    elif action == "validate":
        if not path:
            err_console.print("[red]Path required for validate[/]")
            raise typer.Exit(int(ExitCode.CONFIG_ERROR))
        try:
            cfg = MedianConfig.load(path)
        except ConfigError as e:
            raise _fail(e)
        errors = cfg.validate()
        if errors:
            err_console.print("[red]Invalid configuration:[/]")
            for e in errors:
                err_console.print(f"  - {escape(e)}")
            raise typer.Exit(int(ExitCode.CONFIG_ERROR))
        console.print(f"[green]Valid:[/] {path}")

    elif action == "dump":
        try:
            cfg = load_config(path)
        except ConfigError as e:
            raise _fail(e)
        typer.echo(cfg.to_yaml())

    else:
        err_console.print(f"[red]Unknown action:[/] {escape(action)}")
        err_console.print("Valid actions: init, validate, dump")
        raise typer.Exit(int(ExitCode.CONFIG_ERROR))


# === VERSION COMMAND ===

@app.command()
def version():
    """Show version information."""
    console.print(f"[bold blue]tick-median v{__version__}[/]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
