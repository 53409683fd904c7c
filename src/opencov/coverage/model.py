"""In-memory coverage model: source path -> line number -> hit count."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping


class Coverage:
    """Accumulated per-line hit counts keyed by source file path.

    Paths are kept exactly as the report spells them. Updates are additive, so
    the order in which they arrive does not affect the final state.
    """

    __slots__ = ("_hits",)

    def __init__(self) -> None:
        self._hits: dict[str, dict[int, int]] = {}

    def add_hits(self, path: str, line: int, count: int) -> None:
        """Add *count* hits to *line* of *path*.

        ``line >= 1`` and ``count >= 0`` are expected but not checked. A zero
        count still records the line as instrumented.
        """
        lines = self._hits.setdefault(path, {})
        lines[line] = lines.get(line, 0) + count

    def files(self) -> set[str]:
        """Return every path that has at least one line record."""
        return set(self._hits)

    def hits(self, path: str) -> Mapping[int, int]:
        """Return a read-only ``line -> count`` view for *path* (empty if unknown)."""
        return MappingProxyType(self._hits.get(path, {}))

    def merge_with(self, other: Coverage) -> Coverage:
        """Add every record of *other* into this coverage and return ``self``."""
        for path, lines in other._hits.items():
            for line, count in lines.items():
                self.add_hits(path, line, count)
        return self

    def to_dict(self) -> dict[str, dict[int, int]]:
        """Return a sorted plain-dict copy."""
        return {path: dict(sorted(self._hits[path].items())) for path in sorted(self._hits)}

    def __contains__(self, path: object) -> bool:
        return path in self._hits

    def __iter__(self) -> Iterator[str]:
        return iter(self._hits)

    def __len__(self) -> int:
        return len(self._hits)

    def __repr__(self) -> str:
        n_lines = sum(len(v) for v in self._hits.values())
        return f"Coverage(files={len(self._hits)}, lines={n_lines})"


__all__ = ["Coverage"]
