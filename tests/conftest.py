from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

import pytest
from click.testing import CliRunner

# file path -> {line: visit count}
ReportSpec = Mapping[str, Mapping[int, int]]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


def build_opencover_xml(files: ReportSpec) -> str:
    """Build a realistic OpenCover document, one module/class/method per file."""
    file_defs = "".join(
        f'<File uid="{uid}" fullPath="{path}" />' for uid, path in enumerate(files, start=1)
    )
    methods: list[str] = []
    for uid, lines in enumerate(files.values(), start=1):
        points = "".join(
            f'<SequencePoint vc="{vc}" uspid="{ln}" ordinal="0" offset="0" sl="{ln}" sc="9" el="{ln}" ec="10" />'
            for ln, vc in lines.items()
        )
        methods.append(
            f'<Method visited="true" cyclomaticComplexity="1">'
            f"<Summary numSequencePoints=\"{len(lines)}\" />"
            f"<MetadataToken>100663297</MetadataToken>"
            f"<Name>System.Void Foo::Bar{uid}()</Name>"
            f'<FileRef uid="{uid}" />'
            f"<SequencePoints>{points}</SequencePoints>"
            f"<BranchPoints />"
            f"</Method>"
        )
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<CoverageSession xmlns:xsd="http://www.w3.org/2001/XMLSchema">\n'
        '  <Summary numSequencePoints="0" visitedSequencePoints="0" />\n'
        "  <Modules>\n"
        '    <Module hash="00-11">\n'
        "      <ModulePath>C:\\bin\\Foo.dll</ModulePath>\n"
        f"      <Files>{file_defs}</Files>\n"
        f"      <Classes><Class><FullName>Foo</FullName><Methods>{''.join(methods)}</Methods></Class></Classes>\n"
        "    </Module>\n"
        "  </Modules>\n"
        "</CoverageSession>\n"
    )


@pytest.fixture
def opencover_report(tmp_path: Path) -> Callable[..., Path]:
    """Write an OpenCover report built from a ``{path: {line: vc}}`` mapping."""

    def write(files: ReportSpec, *, filename: str = "opencover.xml") -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(build_opencover_xml(files), encoding="utf-8")
        return path

    return write


@pytest.fixture
def raw_report(tmp_path: Path) -> Callable[..., Path]:
    """Write raw XML text (or bytes) to a report file."""

    def write(content: str | bytes | Iterable[str], *, filename: str = "report.xml") -> Path:
        path = tmp_path / filename
        if isinstance(content, bytes):
            path.write_bytes(content)
        elif isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text("\n".join(content), encoding="utf-8")
        return path

    return write
