from __future__ import annotations

import json
from typing import TYPE_CHECKING

from opencov import __version__

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from opencov.coverage.model import Coverage
    from opencov.output.summary import FileSummary


def _summary_dict(row: FileSummary) -> dict[str, object]:
    pct = None if row.percent is None else round(row.percent, 2)
    return {"lines": row.lines, "covered": row.covered, "missed": row.missed, "percent": pct}


def render_json(
    coverage: Coverage,
    rows: Sequence[FileSummary],
    totals: FileSummary,
    *,
    reports: Sequence[Path],
) -> str:
    """Render coverage and its summary as indented JSON.

    Line numbers become string keys, as JSON objects require.
    """
    data = coverage.to_dict()
    payload = {
        "version": __version__,
        "reports": [str(p) for p in reports],
        "files": [
            {
                "path": r.path,
                **_summary_dict(r),
                "hits": {str(line): n for line, n in data.get(r.path, {}).items()},
            }
            for r in rows
        ],
        "totals": _summary_dict(totals),
    }
    return json.dumps(payload, indent=2)


__all__ = ["render_json"]
