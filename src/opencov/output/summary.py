"""Per-file line coverage summaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from opencov.coverage.model import Coverage

OVERALL = "Overall"


@dataclass(frozen=True, slots=True)
class FileSummary:
    path: str
    lines: int  # instrumented lines
    covered: int  # lines with at least one hit

    @property
    def missed(self) -> int:
        return self.lines - self.covered

    @property
    def percent(self) -> float | None:
        return (100.0 * self.covered / self.lines) if self.lines else None


def summarize(coverage: Coverage) -> tuple[list[FileSummary], FileSummary]:
    """Return per-file rows (sorted by path) and the overall totals."""
    rows: list[FileSummary] = []
    for path in sorted(coverage.files()):
        hits = coverage.hits(path)
        rows.append(FileSummary(path, len(hits), sum(1 for n in hits.values() if n > 0)))
    totals = FileSummary(OVERALL, sum(r.lines for r in rows), sum(r.covered for r in rows))
    return rows, totals


SORT_KEYS = ("file", "cov", "miss")


def sort_rows(rows: list[FileSummary], *, key: str = "file") -> None:
    """Sort *rows* in-place by one of: file | cov | miss."""
    keyfuncs = {
        "file": lambda r: r.path,
        "cov": lambda r: (r.percent if r.percent is not None else 101.0, r.path),
        "miss": lambda r: (-r.missed, r.path),
    }
    try:
        keyfunc = keyfuncs[key]
    except KeyError as exc:
        msg = f"Unsupported sort key: {key!r}. Available keys: {', '.join(SORT_KEYS)}"
        raise ValueError(msg) from exc
    rows.sort(key=keyfunc)


__all__ = ["OVERALL", "SORT_KEYS", "FileSummary", "sort_rows", "summarize"]
