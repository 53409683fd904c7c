from __future__ import annotations

import pytest

from opencov.coverage.model import Coverage


def test_empty() -> None:
    cov = Coverage()
    assert cov.files() == set()
    assert dict(cov.hits("/nope.cs")) == {}
    assert not cov
    assert len(cov) == 0


def test_add_hits_sums_per_line() -> None:
    cov = Coverage()
    cov.add_hits("/a.cs", 1, 2)
    cov.add_hits("/a.cs", 1, 3)
    cov.add_hits("/a.cs", 2, 0)
    cov.add_hits("/b.cs", 1, 1)
    assert cov.files() == {"/a.cs", "/b.cs"}
    assert dict(cov.hits("/a.cs")) == {1: 5, 2: 0}
    assert "/a.cs" in cov
    assert "/c.cs" not in cov


def test_paths_are_kept_verbatim() -> None:
    cov = Coverage()
    cov.add_hits(r"C:\src\Foo.cs", 1, 1)
    cov.add_hits("c:/src/foo.cs", 1, 1)
    assert len(cov.files()) == 2


def test_hits_view_is_read_only() -> None:
    cov = Coverage()
    cov.add_hits("/a.cs", 1, 1)
    with pytest.raises(TypeError):
        cov.hits("/a.cs")[1] = 5  # type: ignore[index]


def test_merge_with_adds_counts() -> None:
    left = Coverage()
    left.add_hits("/a.cs", 1, 1)
    right = Coverage()
    right.add_hits("/a.cs", 1, 2)
    right.add_hits("/b.cs", 3, 0)
    assert left.merge_with(right) is left
    assert left.to_dict() == {"/a.cs": {1: 3}, "/b.cs": {3: 0}}
    # other side untouched
    assert right.to_dict() == {"/a.cs": {1: 2}, "/b.cs": {3: 0}}


def test_update_order_does_not_matter() -> None:
    updates = [("/a.cs", 1, 1), ("/b.cs", 2, 4), ("/a.cs", 1, 7), ("/a.cs", 3, 0)]
    forward, backward = Coverage(), Coverage()
    for u in updates:
        forward.add_hits(*u)
    for u in reversed(updates):
        backward.add_hits(*u)
    assert forward.to_dict() == backward.to_dict()


def test_repr() -> None:
    cov = Coverage()
    cov.add_hits("/a.cs", 1, 1)
    cov.add_hits("/a.cs", 2, 1)
    assert repr(cov) == "Coverage(files=1, lines=2)"
