"""Definition of the command line interface."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from opencov import __version__
from opencov.cli.errors import EXIT_CONFIG, EXIT_DATAERR, EXIT_GENERIC, EXIT_NOINPUT, EXIT_OK
from opencov.cli.util import (
    FORMATS,
    OpencovOptions,
    _configure_runtime,
    as_paths,
    collect_coverage,
    color_enabled,
    determine_format,
    render_output,
    write_output,
)
from opencov.errors import ConfigError, OpencovError, ParseError, ReportNotFoundError
from opencov.output.summary import SORT_KEYS

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence


# --------------------------------------------------------------------------- #
# CLI - root command group                                                    #
# --------------------------------------------------------------------------- #
@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
)
@click.option("--version", is_flag=True, is_eager=True, help="Show the version and exit")
@click.option("--debug", is_flag=True, help="Show full tracebacks for errors")
@click.option("-q", "--quiet", is_flag=True, help="Suppress INFO logs, emit only errors")
@click.option("-v", "--verbose", is_flag=True, help="Emit diagnostic logging")
@click.pass_context
def cli(ctx: click.Context, *, version: bool, debug: bool, quiet: bool, verbose: bool) -> None:
    """Opencov - summarize line coverage from OpenCover XML reports."""
    ctx.obj = OpencovOptions(debug=debug, quiet=quiet, verbose=verbose)

    if version and ctx.invoked_subcommand is None:
        click.echo(__version__)
        ctx.exit(EXIT_OK)

    if ctx.invoked_subcommand is None:
        # no sub-command given → behave as if `show`
        ctx.invoke(show)


# --------------------------------------------------------------------------- #
# Sub-command: version                                                        #
# --------------------------------------------------------------------------- #
@cli.command()
def version() -> None:
    """Print the version and exit."""
    click.echo(__version__)


# --------------------------------------------------------------------------- #
# Sub-command: show (default)                                                 #
# --------------------------------------------------------------------------- #
@cli.command(name="show")
@click.argument("reports", nargs=-1, type=click.Path())
@click.option(
    "--format",
    "format_",
    default="auto",
    show_default=True,
    type=click.Choice(FORMATS, case_sensitive=False),
    help="Output format",
)
@click.option(
    "--sort",
    default="file",
    show_default=True,
    type=click.Choice(SORT_KEYS, case_sensitive=False),
    help="Row order",
)
@click.option("--keep-going", is_flag=True, help="Skip unreadable reports instead of failing")
@click.option("--color", "force_color", is_flag=True, help="Force ANSI color codes in output")
@click.option("--no-color", is_flag=True, help="Disable ANSI color codes in output")
@click.option("--output", type=click.Path(path_type=Path), help="Write output to FILE instead of stdout")
@click.pass_obj
def show(
    opts: OpencovOptions,
    *,
    reports: Sequence[str] = (),
    format_: str = "auto",
    sort: str = "file",
    keep_going: bool = False,
    force_color: bool = False,
    no_color: bool = False,
    output: Path | None = None,
) -> None:
    """Show per-file line coverage (default command)."""
    opts.reports = as_paths(reports)
    opts.output_format = format_
    opts.sort = sort.lower()
    opts.keep_going = keep_going
    opts.output = output
    opts.use_color = color_enabled(force_color=force_color, no_color=no_color, output=output)

    _configure_runtime(quiet=opts.quiet, verbose=opts.verbose, debug=opts.debug)

    try:
        result = collect_coverage(opts)
    except ReportNotFoundError as e:
        click.echo(f"ERROR: {e}", err=True)
        if opts.debug:
            raise
        sys.exit(EXIT_NOINPUT)
    except ParseError as e:
        click.echo(f"ERROR: {e}", err=True)
        if opts.debug:
            raise
        sys.exit(EXIT_DATAERR)
    except ConfigError as e:
        click.echo(f"ERROR: {e}", err=True)
        if opts.debug:
            raise
        sys.exit(EXIT_CONFIG)
    except OpencovError as e:
        click.echo(f"ERROR: {e}", err=True)
        if opts.debug:
            raise
        sys.exit(EXIT_GENERIC)

    fmt = determine_format(opts, is_tty=sys.stdout.isatty())
    write_output(render_output(result, opts, fmt), opts)
    if not result.reports:
        sys.exit(EXIT_DATAERR)
