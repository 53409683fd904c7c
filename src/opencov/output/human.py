from __future__ import annotations

from pathlib import PurePath
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Iterable

    from opencov.output.summary import FileSummary


# --------------------------- Formatting --------------------------------------
def _style_percent(pct: float | None, green: float, yellow: float) -> str:
    if pct is None:
        return "n/a"
    v = round(pct)
    if v >= green:
        return f"[green]{v}%[/green]"
    if v >= yellow:
        return f"[yellow]{v}%[/yellow]"
    return f"[red]{v}%[/red]"


def _style_miss(n: int) -> str:
    return f"[red]{n}[/red]" if n else f"[green]{n}[/green]"


def _display_path(path: str, rel_to: PurePath | None) -> str:
    if rel_to is None:
        return path
    try:
        return PurePath(path).relative_to(rel_to).as_posix()
    except ValueError:
        return path


# --------------------------- Table -------------------------------------------
def render_human(
    rows: Iterable[FileSummary],
    totals: FileSummary,
    *,
    rel_to: PurePath | None = None,
    color: bool = True,
    green: float = 90.0,
    yellow: float = 75.0,
) -> str:
    """Return a Rich-rendered per-file line coverage table as text.

    Paths under *rel_to* are shown relative to it; report paths from other
    machines (e.g. ``C:\\src\\Foo.cs``) are shown verbatim.
    """
    table = Table(title="OpenCover Line Coverage", box=box.SIMPLE_HEAVY, header_style="bold")
    table.add_column("File", style="cyan", overflow="fold")
    table.add_column("Lines", justify="right")
    table.add_column("Hit", justify="right")
    table.add_column("Miss", justify="right")
    table.add_column("Cov.", justify="right")

    for r in rows:
        table.add_row(
            _display_path(r.path, rel_to),
            str(r.lines),
            str(r.covered),
            _style_miss(r.missed),
            _style_percent(r.percent, green, yellow),
        )

    table.add_section()
    table.add_row(
        f"[bold]{totals.path}[/bold]",
        f"[bold]{totals.lines}[/bold]",
        f"[bold]{totals.covered}[/bold]",
        f"[bold]{totals.missed}[/bold]",
        f"[bold]{_style_percent(totals.percent, green, yellow)}[/bold]",
    )

    console = Console(force_terminal=color, no_color=not color, highlight=False, width=120)
    with console.capture() as cap:
        console.print(table)
    return cap.get()


__all__ = ["render_human"]
