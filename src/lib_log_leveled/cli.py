"""Command line interface: metadata banner, severity table, and log demo.

Contents
--------
* :func:`cli` - click group carrying ``--traceback`` and ``--use-dotenv``.
* ``info`` / ``levels`` / ``logdemo`` subcommands.
* :func:`main` - entry point running the group through ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

import click
import lib_cli_exit_tools
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __init__conf__
from . import config as config_module
from .domain.levels import LogLevel
from .domain.palettes import level_color
from .lib_log_leveled import logdemo as _logdemo
from .lib_log_leveled import summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_LEVEL_CHOICES = click.Choice([level.name for level in LogLevel], case_sensitive=False)


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help="Load environment variables from the nearest .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Root command storing global flags; prints the banner without a subcommand."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if config_module.should_use_dotenv(explicit=use_dotenv, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(summary_info(), nl=False)


@cli.command("levels", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_levels() -> None:
    """Show the severity scale with ranks and colour samples."""

    table = Table(title="Severity scale")
    table.add_column("Rank", justify="right")
    table.add_column("Name")
    table.add_column("Sample")
    for level in LogLevel:
        color = level_color(level)
        table.add_row(str(int(level)), level.name, Text.from_ansi(f"{color.start}{level.name:>8}{color.clear}"))
    Console().print(table)


@cli.command("logdemo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--level", type=_LEVEL_CHOICES, default=None, help="Logger minimum level (default DEBUG or LOG_LEVEL).")
@click.option(
    "--file",
    "file_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the demo messages to this file.",
)
@click.option("--file-level", type=_LEVEL_CHOICES, default=None, help="Minimum level for the file handler.")
@click.option(
    "--color",
    type=click.Choice(list(config_module.COLOR_MODES), case_sensitive=False),
    default=None,
    help="Colour mode for console output.",
)
def cli_logdemo(level: str | None, file_path: Path | None, file_level: str | None, color: str | None) -> None:
    """Emit one sample message per severity through a configured logger."""

    result = _logdemo(
        level=level,
        file_path=file_path,
        file_level=file_level,
        color=color,
    )
    summary = f"emitted {result['emitted']} of {len(LogLevel)} messages"
    if result["file"]:
        summary += f" (file: {result['file']})"
    if result["errors"]:
        summary += f", {result['errors']} handler errors"
    click.echo(summary)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and restore traceback preferences afterwards.

    Returns
    -------
    int
        Exit code reported by ``lib_cli_exit_tools.run_cli``.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
