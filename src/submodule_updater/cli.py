"""
Command-line interface for the submodule update tool.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from pathlib import Path
from typing import NoReturn, Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .cli_reporter import CliReporter
from .command_runner import CommandRunner
from .git_client import GitClient
from .models import GitRepositoryError, SubmoduleError, UpdatePlan, UpdateSummary
from .ref_parser import parse_ref_token, split_ref_args
from .updater import SubmoduleUpdater
from . import __version__ as PACKAGE_VERSION


console = Console(soft_wrap=True)
logger = logging.getLogger(__name__)

SEPARATOR = "---------------------------------"


def _print_version(ctx, param, value):
    """Eager option callback to print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"submodule-updater {PACKAGE_VERSION}")
    ctx.exit()


def _default_log_path() -> Path:
    """Determine default log file path (~/.submodule-updater/submodule-updater.log)."""
    env_path = os.environ.get("SUBMODULE_UPDATER_LOG")
    if env_path:
        p = Path(env_path).expanduser()
        p.parent.mkdir(parents=True, exist_ok=True)
        return p
    base = Path.home() / ".submodule-updater"
    base.mkdir(parents=True, exist_ok=True)
    return base / "submodule-updater.log"


def setup_logging(verbose: bool = False, console_level: Optional[str] = None, log_file: Optional[Path] = None) -> Path:
    """Setup logging: a rotating file log always, console logging only when requested.

    Returns the path of the log file.
    """
    log_path = Path(log_file) if log_file else _default_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    # Clear existing handlers to avoid duplication in tests / repeated invocations
    root.handlers.clear()
    root.setLevel(logging.DEBUG)

    file_handler = RotatingFileHandler(
        str(log_path), maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(file_handler)

    if verbose or console_level:
        level_map = {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR,
        }
        console_handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
        console_handler.setLevel(level_map.get((console_level or "info").lower(), logging.INFO))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(console_handler)

    return log_path


def _fatal(message: str, error: Exception) -> NoReturn:
    console.print(f"{escape(message)} {escape(str(error))}", style="bold red")
    logger.debug(message, exc_info=True)
    sys.exit(1)


def _display_plan(plan: UpdatePlan) -> None:
    """Display the planned updates as a table."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Submodule", style="cyan")
    table.add_column("Target", style="green")
    table.add_column("Strategy", style="yellow")

    for path, ref in plan.explicit:
        table.add_row(escape(path), escape(ref), "fetch + checkout")
    for path in plan.track_latest:
        table.add_row(escape(path), "latest", "update --remote")

    console.print(table)


def _display_failures(summary: UpdateSummary) -> None:
    """Display failed submodules as a table."""
    table = Table(title="Failed Updates", show_header=True, header_style="bold red")
    table.add_column("Submodule", style="cyan")
    table.add_column("Target", style="green")
    table.add_column("Stage", style="yellow")

    for result in summary.failed:
        table.add_row(escape(result.path), escape(result.target), result.stage or "")

    console.print(table)


@click.command()
@click.option(
    "--version",
    "-V",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option(
    "-v",
    "--v",
    "--verbose",
    "verbose",
    is_flag=True,
    help="Show the git commands being run and stream their output.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Console log level. By default, console logging is disabled.",
)
@click.option(
    "--repo-path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory to start repository discovery from (defaults to current directory)",
)
@click.option("--dry-run", is_flag=True, help="Show the update plan without changing anything")
@click.argument("ref_args", metavar="[SUBMODULE=REF]...", nargs=-1)
def cli(
    verbose: bool,
    log_level: Optional[str],
    repo_path: Optional[Path],
    dry_run: bool,
    ref_args: Tuple[str, ...],
) -> None:
    """Update git submodules to their latest commit or to a specific ref.

    By default every submodule is moved to the latest commit of its tracked
    branch. Pass SUBMODULE=REF (e.g. libs/foo=v1.2.3) to check out a commit,
    tag or branch for a submodule instead.
    """
    log_path = setup_logging(verbose, console_level=log_level)
    logger.debug(f"CLI init: cwd={Path.cwd()} repo_path={repo_path} log={log_path}")

    try:
        refs, _ = split_ref_args(ref_args)
        if ref_args:
            # Report in the order the tokens were given
            console.print("Specific submodule updates:")
            for token in ref_args:
                parsed = parse_ref_token(token)
                if parsed is None:
                    console.print(f"Warning: Ignoring invalid argument: {escape(token)}", style="yellow")
                else:
                    console.print(f"  - {escape(parsed[0])} -> {escape(parsed[1])}")
            console.print(SEPARATOR)

        runner = CommandRunner(verbose=verbose)
        client = GitClient(runner, repo_path.resolve() if repo_path else None)
        updater = SubmoduleUpdater(client, CliReporter(console))

        try:
            root_dir = updater.resolve_root()
        except GitRepositoryError as e:
            _fatal("Error: Not a git repository or git command not found.", e)

        if not dry_run:
            console.print("Initializing and cloning any missing submodules...")
            try:
                updater.initialize(root_dir)
            except SubmoduleError as e:
                _fatal("Error initializing submodules:", e)
            console.print("Initialization complete.")
            console.print(SEPARATOR)

        try:
            submodules = updater.discover(root_dir)
        except SubmoduleError as e:
            _fatal("Error getting submodules:", e)

        if not submodules:
            console.print("No submodules found.")
            return

        console.print(f"Found {len(submodules)} submodules. Starting update...\n")
        plan = updater.plan(refs, submodules)

        if dry_run:
            for path in plan.unknown:
                console.print(
                    f"Warning: {escape(path)} is not a registered submodule; ignoring its ref",
                    style="yellow",
                )
            _display_plan(plan)
            console.print("\n🔍 Dry Run Complete - No changes made")
            return

        summary = updater.apply(root_dir, plan)
        if summary.failed:
            _display_failures(summary)

        console.print("Submodule update process complete.", style="bold green")

    except (click.Abort, KeyboardInterrupt):
        console.print("\n\n🚫 Operation cancelled by user", style="bold yellow")
        logger.debug("Operation cancelled by user", exc_info=True)
        sys.exit(130)
    except Exception as e:
        console.print(f"\n💥 Unexpected Error: {escape(str(e))}", style="bold red")
        if verbose:
            console.print_exception()
        logger.debug("Unexpected error during submodule update", exc_info=True)
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
