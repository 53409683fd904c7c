"""Merge the coverage of several OpenCover reports."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from opencov.coverage.model import Coverage
from opencov.coverage.opencover import parse
from opencov.errors import ParseError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AggregateResult:
    coverage: Coverage = field(default_factory=Coverage)
    reports: list[Path] = field(default_factory=list)  # successfully parsed
    failures: list[ParseError] = field(default_factory=list)


def aggregate_reports(paths: Iterable[Path], *, keep_going: bool = False) -> AggregateResult:
    """Parse every report in *paths* and sum their hit counts.

    Without *keep_going* the first ``ParseError`` propagates. With it, the
    failing report is logged, recorded in ``failures`` and contributes nothing.
    """
    result = AggregateResult()
    for path in paths:
        try:
            cov = parse(path)
        except ParseError as e:
            if not keep_going:
                raise
            logger.warning("Skipping report: %s", e)
            result.failures.append(e)
            continue
        result.coverage.merge_with(cov)
        result.reports.append(path)
    logger.debug("aggregated %d report(s) into %r", len(result.reports), result.coverage)
    return result


__all__ = ["AggregateResult", "aggregate_reports"]
