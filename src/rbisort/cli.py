# src/rbisort/cli.py

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from typing_extensions import Annotated

from . import __version__
from .core.config import Config, find_config, get_default_config, load_config
from .core.errors import RbisortError
from .core.logging import get_debug_logger, setup_logging
from .core.processor import FileProcessor
from .core.types import SortResult

# CLI argument/option definitions
PATHS = typer.Argument(None, help="Files or directories to sort")
CHECK = typer.Option(
    False, "--check", "-c", "--check-only", help="Report unsorted files without modifying them"
)
DIFF = typer.Option(False, "--diff", help="Show a diff of changes without modifying files")
ATOMIC = typer.Option(
    False, "--atomic", help="Validate Ruby syntax before and after sorting; never save broken files"
)
QUIET = typer.Option(False, "--quiet", "-q", help="Suppress all output except errors")
VERBOSE = typer.Option(False, "--verbose", help="Show detailed output")
DEBUG = typer.Option(False, "--debug", "-d", help="Show debug information")
LOG_DIR = typer.Option(None, "--log-dir", help="Directory for audit and debug logs")
CONFIG_FILE = typer.Option(None, "--config", help="Path to a .rbisort.yaml file")

app = typer.Typer(name="rbisort", help="Sort Ruby require/include/extend statements")
console = Console()
error_console = Console(stderr=True)
debug_log = get_debug_logger()


@dataclass
class RunSummary:
    """Per-run counters."""

    total: int = 0
    changed: int = 0
    skipped: int = 0
    errors: List[str] = field(default_factory=list)


def _version_callback(value: bool):
    if value:
        console.print(f"rbisort {__version__}")
        raise typer.Exit()


def collect_files(paths: List[Path], config: Config) -> Tuple[List[Path], List[Path]]:
    """Expand directories into source files. Returns (files, missing paths)."""
    files = []
    missing = []
    extensions = tuple(config.extensions)

    for path in paths:
        if path.is_dir():
            found = []
            for root, dirs, names in os.walk(path):
                dirs[:] = sorted(d for d in dirs if d not in config.exclude)
                found.extend(Path(root) / name for name in names if name.endswith(extensions))
            files.extend(sorted(found))
        elif path.is_file():
            files.append(path)
        else:
            missing.append(path)

    return files, missing


def resolve_config(
    paths: List[Path], config_file: Optional[Path], **overrides
) -> Config:
    """Load the config file (explicit or discovered) and apply CLI overrides."""
    if config_file is None and paths:
        config_file = find_config(paths[0])

    config = load_config(config_file) if config_file else get_default_config()

    updates = {key: value for key, value in overrides.items() if value}
    return config.model_copy(update=updates)


def process_one(file: Path, config: Config, summary: RunSummary) -> None:
    """Check, diff or sort one file and report the outcome."""
    processor = FileProcessor(file, config)
    summary.total += 1

    try:
        if config.check:
            if processor.check():
                summary.changed += 1
                if not config.quiet:
                    console.print(f"[yellow]{file} - imports are not sorted[/yellow]")
            elif config.verbose:
                console.print(f"{file} - imports are sorted")

        elif config.diff:
            diff_output = processor.diff()
            if diff_output:
                summary.changed += 1
                console.print(diff_output, markup=False, highlight=False, soft_wrap=True, end="")
            elif config.verbose:
                console.print(f"{file} - no changes")

        else:
            result = processor.process()
            if result == SortResult.CHANGED:
                summary.changed += 1
                if not config.quiet:
                    console.print(f"[green]Imports sorted in {file}[/green]")
            elif result == SortResult.SKIPPED:
                summary.skipped += 1
                if config.verbose:
                    console.print(f"{file} skipped due to isort:skip_file directive")
            elif config.verbose:
                console.print(f"{file} - no changes needed")

    except (OSError, RbisortError) as e:
        summary.errors.append(f"{file}: {e}")
        if not config.quiet:
            error_console.print(f"[red]ERROR: {e}[/red]")


def print_summary(summary: RunSummary, config: Config) -> None:
    if config.quiet:
        return
    if config.check:
        console.print(
            f"Checked {summary.total} files: {summary.changed} need sorting"
        )
    elif config.diff:
        console.print(f"Checked {summary.total} files: {summary.changed} would change")
    else:
        console.print(f"Sorted imports in {summary.changed} of {summary.total} files")


@app.command()
def main(
    paths: Optional[List[Path]] = PATHS,
    check: bool = CHECK,
    diff: bool = DIFF,
    atomic: bool = ATOMIC,
    quiet: bool = QUIET,
    verbose: bool = VERBOSE,
    debug: bool = DEBUG,
    log_dir: Optional[Path] = LOG_DIR,
    config_file: Optional[Path] = CONFIG_FILE,
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=_version_callback, is_eager=True, help="Show version"),
    ] = False,
):
    """Sort imports in Ruby files and directories."""
    paths = paths or []
    if not paths:
        error_console.print("[red]Error: no files or directories given[/red]")
        raise typer.Exit(1)

    try:
        config = resolve_config(
            paths,
            config_file,
            check=check,
            diff=diff,
            atomic=atomic,
            quiet=quiet,
            verbose=verbose,
            debug=debug,
            log_dir=str(log_dir) if log_dir else None,
        )
    except Exception as e:
        error_console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(1) from e

    setup_logging(Path(config.log_dir) if config.log_dir else None, debug=config.debug)

    files, missing = collect_files(paths, config)
    summary = RunSummary()

    for path in missing:
        summary.errors.append(f"{path}: not found")
        if not config.quiet:
            error_console.print(f"[red]Error: {path} is not a valid file or directory[/red]")

    for file in files:
        debug_log.debug(f"Processing {file}")
        process_one(file, config, summary)

    if len(files) > 1 or any(path.is_dir() for path in paths):
        print_summary(summary, config)

    if summary.errors:
        raise typer.Exit(1)
    if (config.check or config.diff) and summary.changed:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
