"""Forward-only XML pull-reader over a byte stream.

The reader feeds the input to defusedxml's hardened expat parser chunk by
chunk and hands out start/end element events one at a time. No element tree
is built; only the events produced by the current chunk are buffered. Each
event carries the source line of its tag so callers can report precise
locations.
"""

from __future__ import annotations

import contextlib
import enum
from collections import deque
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import DefusedXMLParser, ParseError

from opencov.config import READ_CHUNK_SIZE

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType


class EventKind(enum.Enum):
    START = "start"
    END = "end"


def local_name(name: str) -> str:
    """Strip an ``{namespace}`` prefix (as produced by ElementTree) from *name*."""
    return name.rsplit("}", 1)[-1]


@dataclass(frozen=True, slots=True)
class XmlEvent:
    kind: EventKind
    name: str  # local name
    attributes: tuple[tuple[str, str], ...] = ()  # (local name, value), document order
    line: int = 0

    def attribute(self, name: str) -> str | None:
        """Return the first attribute value whose local name is *name*."""
        for key, value in self.attributes:
            if key == name:
                return value
        return None


class _EventCollector:
    """Parser target turning expat callbacks into queued ``XmlEvent``s."""

    def __init__(self, pending: deque[XmlEvent]) -> None:
        self._pending = pending
        self._expat = None

    def bind(self, expat_parser: object) -> None:
        self._expat = expat_parser

    def _line(self) -> int:
        return getattr(self._expat, "CurrentLineNumber", 0)

    def start(self, tag: str, attrib: dict[str, str]) -> None:
        attrs = tuple((local_name(k), v) for k, v in attrib.items())
        self._pending.append(XmlEvent(EventKind.START, local_name(tag), attrs, self._line()))

    def end(self, tag: str) -> None:
        self._pending.append(XmlEvent(EventKind.END, local_name(tag), (), self._line()))

    def close(self) -> None:
        return None


class XmlPullReader:
    """Iterate start/end element events of an XML document on demand.

    Parameters
    ----------
    stream:
        Binary file-like object positioned at the start of the document.
    encoding:
        Encoding forced onto the parser, overriding the XML declaration.
    chunk_size:
        Number of bytes read from *stream* per parser feed.

    Well-formedness problems surface as ``defusedxml.ElementTree.ParseError``;
    forbidden constructs (entity declarations, external references) as
    ``defusedxml.DefusedXmlException``.
    """

    def __init__(
        self,
        stream: IO[bytes],
        *,
        encoding: str = "utf-8",
        chunk_size: int = READ_CHUNK_SIZE,
    ) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self._pending: deque[XmlEvent] = deque()
        collector = _EventCollector(self._pending)
        self._parser = DefusedXMLParser(target=collector, encoding=encoding)
        self._expat = self._parser.parser
        collector.bind(self._expat)
        self._exhausted = False
        self._closed = False
        self._error: Exception | None = None
        self._last: XmlEvent | None = None

    # ------------------------------------------------------------------ #
    # iteration                                                          #
    # ------------------------------------------------------------------ #
    def __iter__(self) -> Iterator[XmlEvent]:
        return self

    def __next__(self) -> XmlEvent:
        while not self._pending:
            if self._error is not None:
                error, self._error = self._error, None
                raise error
            if self._exhausted:
                raise StopIteration
            self._fill()
        self._last = self._pending.popleft()
        return self._last

    def _fill(self) -> None:
        # A parser error is held back until the events preceding it are consumed.
        try:
            chunk = self._stream.read(self._chunk_size)
            if chunk:
                self._parser.feed(chunk)
                return
            # end of input: let expat flush and verify the document is complete
            self._exhausted = True
            self._closed = True
            self._parser.close()
        except (ParseError, DefusedXmlException) as e:
            self._exhausted = True
            self._error = e

    def next_start(self) -> XmlEvent | None:
        """Advance to the next start element, or return ``None`` at end of input."""
        for event in self:
            if event.kind is EventKind.START:
                return event
        return None

    @property
    def line(self) -> int:
        """Line of the last event handed out, or the parser's current line."""
        if self._last is not None:
            return self._last.line
        return self._expat.CurrentLineNumber

    # ------------------------------------------------------------------ #
    # resource handling                                                  #
    # ------------------------------------------------------------------ #
    def close(self) -> None:
        """Release the parser. Errors raised while closing are ignored."""
        if self._closed:
            return
        self._closed = True
        self._exhausted = True
        self._pending.clear()
        with contextlib.suppress(ParseError, DefusedXmlException):
            self._parser.close()

    def __enter__(self) -> XmlPullReader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["EventKind", "XmlEvent", "XmlPullReader", "local_name"]
