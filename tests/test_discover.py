from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from opencov.coverage.discover import discover_report_paths, find_report_paths, resolve_report_paths
from opencov.errors import ConfigError, ReportNotFoundError


def test_explicit_missing(tmp_path: Path) -> None:
    with pytest.raises(ReportNotFoundError, match="nope.xml"):
        resolve_report_paths([tmp_path / "nope.xml"], cwd=tmp_path)


def test_explicit_relative_paths_resolve_against_cwd(opencover_report: Callable[..., Path], tmp_path: Path) -> None:
    report = opencover_report({"/a.cs": {1: 1}}, filename="custom.xml")
    assert resolve_report_paths([Path("custom.xml")], cwd=tmp_path) == (report.resolve(),)


def test_explicit_directory_is_searched(opencover_report: Callable[..., Path], tmp_path: Path) -> None:
    nested = opencover_report({"/a.cs": {1: 1}}, filename="out/unit.opencover.xml")
    opencover_report({"/a.cs": {1: 1}}, filename="out/ignored.xml")
    assert resolve_report_paths([tmp_path / "out"], cwd=tmp_path) == (nested.resolve(),)


def test_explicit_directory_without_reports(tmp_path: Path) -> None:
    (tmp_path / "empty").mkdir()
    with pytest.raises(ReportNotFoundError):
        resolve_report_paths([tmp_path / "empty"], cwd=tmp_path)


def test_duplicates_are_dropped(opencover_report: Callable[..., Path], tmp_path: Path) -> None:
    report = opencover_report({"/a.cs": {1: 1}})
    got = resolve_report_paths([report, tmp_path / "." / "opencover.xml"], cwd=tmp_path)
    assert got == (report.resolve(),)


def test_default_patterns(opencover_report: Callable[..., Path], tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    top = opencover_report({"/a.cs": {1: 1}})
    sub = opencover_report({"/a.cs": {1: 1}}, filename="tests/x.opencover.xml")
    assert set(discover_report_paths(cwd=tmp_path)) == {top.resolve(), sub.resolve()}


def test_configured_patterns_win(opencover_report: Callable[..., Path], tmp_path: Path) -> None:
    opencover_report({"/a.cs": {1: 1}})
    configured = opencover_report({"/a.cs": {1: 1}}, filename="reports/cov.xml")
    (tmp_path / "pyproject.toml").write_text('[tool.opencov]\nreports = "reports/*.xml"\n', encoding="utf-8")
    assert resolve_report_paths(None, cwd=tmp_path) == (configured.resolve(),)


def test_configured_patterns_without_match_fall_back(opencover_report: Callable[..., Path], tmp_path: Path) -> None:
    default = opencover_report({"/a.cs": {1: 1}})
    (tmp_path / "pyproject.toml").write_text('[tool.opencov]\nreports = ["missing/*.xml"]\n', encoding="utf-8")
    assert resolve_report_paths(None, cwd=tmp_path) == (default.resolve(),)


def test_invalid_configuration(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.opencov]\nreports = 3\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        resolve_report_paths(None, cwd=tmp_path)


def test_nothing_found(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    with pytest.raises(ReportNotFoundError, match="opencover.xml"):
        resolve_report_paths(None, cwd=tmp_path)


def test_find_report_paths_is_sorted(tmp_path: Path) -> None:
    for name in ("b.opencover.xml", "a.opencover.xml"):
        (tmp_path / name).write_text("<CoverageSession/>", encoding="utf-8")
    got = find_report_paths(tmp_path, ["*.opencover.xml"])
    assert [p.name for p in got] == ["a.opencover.xml", "b.opencover.xml"]
