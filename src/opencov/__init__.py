import logging
from importlib.metadata import version

from opencov.coverage import Coverage, OpenCoverReportParser, aggregate_reports, parse
from opencov.errors import OpencovError, ParseError, ReportNotFoundError

__version__ = version("opencov")

logger = logging.getLogger(__name__)

__all__ = [
    "Coverage",
    "OpenCoverReportParser",
    "OpencovError",
    "ParseError",
    "ReportNotFoundError",
    "__version__",
    "aggregate_reports",
    "logger",
    "parse",
]
