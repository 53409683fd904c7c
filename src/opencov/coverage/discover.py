from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opencov.config import DEFAULT_REPORT_PATTERNS, read_report_patterns
from opencov.errors import ReportNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


def _find_project_root(start: Path) -> Path:
    """Heuristic project root finder: walks upward looking for pyproject.toml or .git."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if (p / "pyproject.toml").exists():
            return p
        if (p / ".git").exists():
            return p
    return cur


def find_report_paths(root: Path, patterns: Sequence[str]) -> list[Path]:
    """Return a de-duplicated list of report files under *root* matching *patterns*."""
    seen: set[Path] = set()
    out: list[Path] = []
    for pat in patterns:
        for p in sorted(root.glob(pat)) if "/" in pat else sorted(root.rglob(pat)):
            rp = p.resolve()
            if rp.is_file() and rp not in seen:
                seen.add(rp)
                out.append(rp)
    return out


def _dedupe(paths: Iterable[Path]) -> tuple[Path, ...]:
    seen: set[Path] = set()
    out: list[Path] = []
    for p in paths:
        if p not in seen:
            seen.add(p)
            out.append(p)
    return tuple(out)


def discover_report_paths(*, cwd: Path) -> tuple[Path, ...]:
    """Discover OpenCover reports from ``[tool.opencov]`` or the default patterns."""
    root = _find_project_root(cwd)

    configured = read_report_patterns(root / "pyproject.toml")
    if configured:
        found = find_report_paths(root, configured)
        if found:
            logger.info("Using %d OpenCover report(s) from %s", len(found), root / "pyproject.toml")
            return tuple(found)
        logger.warning("no report matches the configured patterns: %s", ", ".join(configured))

    found = find_report_paths(cwd, DEFAULT_REPORT_PATTERNS)
    if found:
        return tuple(found)

    msg = (
        "no OpenCover report provided and none discovered.\n"
        "Tried: pyproject.toml [tool.opencov].reports, "
        f"{', '.join(DEFAULT_REPORT_PATTERNS)} under {cwd}"
    )
    raise ReportNotFoundError(msg)


def resolve_report_paths(paths: Sequence[Path] | None, *, cwd: Path) -> tuple[Path, ...]:
    """Resolve explicit reports or discover them if none are provided.

    Rules
    -----
    - Explicit paths must exist; directories are searched recursively with the
      default patterns.
    - Else: discovery via :func:`discover_report_paths`.
    """
    given = tuple(paths or ())
    if not given:
        return discover_report_paths(cwd=cwd)

    resolved = [p if p.is_absolute() else cwd / p for p in given]
    missing = [p for p in resolved if not p.exists()]
    if missing:
        msg = f"OpenCover report not found: {', '.join(str(p) for p in missing)}"
        raise ReportNotFoundError(msg)

    out: list[Path] = []
    for p in resolved:
        if p.is_dir():
            found = find_report_paths(p, DEFAULT_REPORT_PATTERNS)
            logger.debug("found %d report(s) under %s", len(found), p)
            out.extend(found)
        else:
            out.append(p.resolve())
    if not out:
        msg = f"no OpenCover report found under: {', '.join(str(p) for p in resolved)}"
        raise ReportNotFoundError(msg)
    return _dedupe(out)


__all__ = ["discover_report_paths", "find_report_paths", "resolve_report_paths"]
