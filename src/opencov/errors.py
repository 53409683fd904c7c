"""Centralised exception hierarchy for opencov."""

from __future__ import annotations


class OpencovError(Exception):
    """Base class for all custom opencov exceptions."""


class ConfigError(OpencovError):
    """The ``[tool.opencov]`` configuration could not be used."""


class CoverageReportError(OpencovError):
    """Base class for errors related to coverage report handling."""


class ReportNotFoundError(CoverageReportError):
    """Coverage report file could not be located on disk."""


class ParseError(CoverageReportError):
    """A coverage report could not be read.

    The message names the offending construct, the report and the XML line at
    which the problem was detected.
    """

    def __init__(self, reason: str, report: str, line: int) -> None:
        self.reason = reason
        self.report = report
        self.line = line
        super().__init__(f"{reason} in {report} at line {line}")


__all__ = [
    "ConfigError",
    "CoverageReportError",
    "OpencovError",
    "ParseError",
    "ReportNotFoundError",
]
