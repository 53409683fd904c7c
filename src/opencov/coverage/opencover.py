"""Streaming reader for OpenCover XML coverage reports.

Only three elements matter::

    <File uid="1" fullPath="C:\\src\\Foo.cs"/>   defines a file id
    <FileRef uid="1"/>                           selects the file for what follows
    <SequencePoint sl="10" vc="3" .../>          adds ``vc`` hits to line ``sl``

Everything else (modules, classes, methods, branch points, summaries) is
skipped. ``<File>`` definitions must come before the ``<FileRef>`` that uses
them; an unresolved reference silently drops the sequence points under it.
"""

from __future__ import annotations

import enum
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError as XMLParseError

from opencov.config import ROOT_ELEMENT
from opencov.coverage.model import Coverage
from opencov.coverage.reader import EventKind, XmlPullReader
from opencov.errors import ParseError

if TYPE_CHECKING:
    from opencov.coverage.reader import XmlEvent

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")

# Visit counts and line numbers are 32-bit signed values in OpenCover output.
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class ParserState(enum.Enum):
    INIT = "init"
    ROOT_SEEN = "root_seen"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


class OpenCoverReportParser:
    """Parse one OpenCover report into a :class:`Coverage`.

    A parser instance handles a single report; ``parse`` may be called again
    and starts from scratch each time.
    """

    def __init__(self, report: Path | str) -> None:
        self.report = Path(report)
        self.state = ParserState.INIT
        self._files: dict[str, str] = {}
        self._file_ref: str | None = None
        self._coverage = Coverage()
        self._reader: XmlPullReader | None = None

    # ------------------------------------------------------------------ #
    # driver                                                             #
    # ------------------------------------------------------------------ #
    def parse(self) -> Coverage:
        report = self.report.absolute()
        logger.info("Parsing the OpenCover report %s", report)

        self.state = ParserState.INIT
        self._files = {}
        self._file_ref = None
        self._coverage = Coverage()

        try:
            with report.open("rb") as stream, XmlPullReader(stream) as reader:
                self._reader = reader
                self._check_root()
                self.state = ParserState.RUNNING
                self._walk()
        except ParseError:
            self.state = ParserState.FAILED
            raise
        except XMLParseError as e:
            self.state = ParserState.FAILED
            line = e.position[0] if getattr(e, "position", None) else self._line()
            raise self._error(f"Invalid XML ({e})", line=line) from e
        except DefusedXmlException as e:
            self.state = ParserState.FAILED
            raise self._error(f"Forbidden XML construct ({e})") from e
        except OSError as e:
            self.state = ParserState.FAILED
            raise self._error(f"Unable to read the report ({e.strerror or e})") from e
        finally:
            self._reader = None
            self._files = {}
            self._file_ref = None

        self.state = ParserState.DONE
        return self._coverage

    def _check_root(self) -> None:
        event = self._require_reader().next_start()
        if event is None or event.name != ROOT_ELEMENT:
            msg = f"Missing root element <{ROOT_ELEMENT}>"
            raise self._error(msg)
        self.state = ParserState.ROOT_SEEN

    def _walk(self) -> None:
        handlers = {
            "File": self._handle_file,
            "FileRef": self._handle_file_ref,
            "SequencePoint": self._handle_sequence_point,
        }
        for event in self._require_reader():
            if event.kind is not EventKind.START:
                continue
            handler = handlers.get(event.name)
            if handler is not None:
                handler(event)

    # ------------------------------------------------------------------ #
    # element handlers                                                   #
    # ------------------------------------------------------------------ #
    def _handle_file(self, event: XmlEvent) -> None:
        uid = self._required_attribute(event, "uid")
        full_path = self._required_attribute(event, "fullPath")
        self._files[uid] = full_path

    def _handle_file_ref(self, event: XmlEvent) -> None:
        self._file_ref = self._required_attribute(event, "uid")

    def _handle_sequence_point(self, event: XmlEvent) -> None:
        line = self._required_int_attribute(event, "sl")
        visits = self._required_int_attribute(event, "vc")

        path = self._files.get(self._file_ref) if self._file_ref is not None else None
        if path is not None:
            self._coverage.add_hits(path, line, visits)

    # ------------------------------------------------------------------ #
    # attribute access                                                   #
    # ------------------------------------------------------------------ #
    def _required_attribute(self, event: XmlEvent, name: str) -> str:
        value = event.attribute(name)
        if value is None:
            msg = f'Missing attribute "{name}" in element <{event.name}>'
            raise self._error(msg, line=event.line)
        return value

    def _required_int_attribute(self, event: XmlEvent, name: str) -> int:
        value = self._required_attribute(event, name)
        if not _INT_RE.fullmatch(value) or not _INT_MIN <= int(value) <= _INT_MAX:
            msg = f'Expected an integer instead of "{value}" for the attribute "{name}"'
            raise self._error(msg, line=event.line)
        return int(value)

    # ------------------------------------------------------------------ #
    # helpers                                                            #
    # ------------------------------------------------------------------ #
    def _require_reader(self) -> XmlPullReader:
        if self._reader is None:
            msg = "parser is not running"
            raise RuntimeError(msg)
        return self._reader

    def _line(self) -> int:
        return self._reader.line if self._reader is not None else 0

    def _error(self, reason: str, *, line: int | None = None) -> ParseError:
        return ParseError(reason, str(self.report.absolute()), self._line() if line is None else line)


def parse(report: Path | str) -> Coverage:
    """Parse the OpenCover report at *report* and return its coverage."""
    return OpenCoverReportParser(report).parse()


__all__ = ["OpenCoverReportParser", "ParserState", "parse"]
