from opencov.coverage.aggregate import AggregateResult, aggregate_reports
from opencov.coverage.discover import resolve_report_paths
from opencov.coverage.model import Coverage
from opencov.coverage.opencover import OpenCoverReportParser, ParserState, parse

__all__ = [
    "AggregateResult",
    "Coverage",
    "OpenCoverReportParser",
    "ParserState",
    "aggregate_reports",
    "parse",
    "resolve_report_paths",
]
