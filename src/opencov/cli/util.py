"""Utilities and helper functions for implementing CLI-specific functionality."""

from __future__ import annotations

import dataclasses
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from opencov import logger
from opencov.config import LOG_FORMAT
from opencov.coverage import aggregate_reports, resolve_report_paths
from opencov.output import render_human, render_json, sort_rows, summarize

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from opencov.coverage import AggregateResult

FORMATS = ("auto", "human", "json")


@dataclasses.dataclass(slots=True)
class OpencovOptions:
    """Collected CLI options after parsing."""

    # --- global flags --------------------------------------------------- #
    debug: bool = False
    quiet: bool = False
    verbose: bool = False

    # --- input ---------------------------------------------------------- #
    reports: list[Path] = dataclasses.field(default_factory=list)
    keep_going: bool = False

    # --- output --------------------------------------------------------- #
    output_format: str = "auto"
    sort: str = "file"
    output: Path | None = None  # stdout if None
    use_color: bool = True


def _configure_runtime(*, quiet: bool, verbose: bool, debug: bool) -> None:
    """Configure logging based on *quiet*/*verbose*."""
    level = logging.ERROR if quiet else (logging.DEBUG if (verbose or debug) else logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    if debug:
        logger.debug("debug mode active")


def collect_coverage(opts: OpencovOptions, *, cwd: Path | None = None) -> AggregateResult:
    paths = resolve_report_paths(opts.reports, cwd=cwd or Path.cwd())
    return aggregate_reports(paths, keep_going=opts.keep_going)


def determine_format(opts: OpencovOptions, *, is_tty: bool) -> str:
    fmt = opts.output_format.lower()
    if fmt not in FORMATS:
        msg = f"Unsupported format: {opts.output_format!r}"
        raise click.BadParameter(msg, param_hint="--format")
    if fmt == "auto":
        fmt = "human" if is_tty else "json"

    if opts.verbose:
        logger.info("output format: %s", fmt)
        logger.info("destination: %s", opts.output or "stdout")
    return fmt


def render_output(result: AggregateResult, opts: OpencovOptions, fmt: str, *, cwd: Path | None = None) -> str:
    rows, totals = summarize(result.coverage)
    sort_rows(rows, key=opts.sort)
    if fmt == "json":
        return render_json(result.coverage, rows, totals, reports=result.reports)
    return render_human(rows, totals, rel_to=cwd or Path.cwd(), color=opts.use_color)


def write_output(output_text: str, opts: OpencovOptions) -> None:
    if opts.output and opts.output != Path("-"):
        opts.output.write_text(output_text, encoding="utf-8")
        return
    click.echo(output_text)


def color_enabled(*, force_color: bool, no_color: bool, output: Path | None) -> bool:
    if force_color and no_color:
        msg = "--color/--no-color"
        raise click.BadOptionUsage(msg, "Cannot combine --color and --no-color")
    if force_color:
        return True
    return not no_color and output is None and sys.stdout.isatty()


def as_paths(values: Sequence[str]) -> list[Path]:
    return [Path(v) for v in values]
