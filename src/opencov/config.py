"""Central configuration and constants for ``opencov``."""

from __future__ import annotations

import logging
import tomllib
from typing import TYPE_CHECKING

from opencov.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

# Local name of the document element of every OpenCover report.
ROOT_ELEMENT = "CoverageSession"

# Glob patterns tried when no report path is given explicitly.
DEFAULT_REPORT_PATTERNS: tuple[str, ...] = ("opencover.xml", "*.opencover.xml")

# Bytes handed to the XML parser per read.
READ_CHUNK_SIZE = 64 * 1024


def _split_patterns(raw: object, source: Path) -> tuple[str, ...]:
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, list) and all(isinstance(x, str) for x in raw):
        items = raw
    else:
        msg = f"{source}: [tool.opencov] reports must be a string or a list of strings"
        raise ConfigError(msg)
    return tuple(p.strip() for p in items if p.strip())


def read_report_patterns(pyproject: Path) -> tuple[str, ...]:
    """Return report patterns from ``[tool.opencov] reports`` in *pyproject*.

    Patterns may be given as a comma-separated string (the classic
    ``reportsPaths`` style) or as a TOML list. A missing file or section yields
    an empty tuple.
    """
    if not pyproject.exists():
        return ()
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        msg = f"failed to read {pyproject}: {e}"
        raise ConfigError(msg) from e

    section = data.get("tool", {}).get("opencov", {})
    if not isinstance(section, dict):
        msg = f"{pyproject}: [tool.opencov] must be a table"
        raise ConfigError(msg)
    raw = section.get("reports")
    if raw is None:
        return ()
    patterns = _split_patterns(raw, pyproject)
    logger.debug("report patterns from %s: %s", pyproject, ", ".join(patterns))
    return patterns


__all__ = [
    "DEFAULT_REPORT_PATTERNS",
    "LOG_FORMAT",
    "READ_CHUNK_SIZE",
    "ROOT_ELEMENT",
    "read_report_patterns",
]
