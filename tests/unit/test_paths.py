"""Tests for path normalisation and target lists."""

from __future__ import annotations

from pathlib import Path

import pytest

from basketcase.paths import TargetList, normalize_path


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("a.txt", "a.txt"),
        ("./a.txt", "a.txt"),
        (".\\dir\\a.txt", "dir/a.txt"),
        ("././a.txt", "a.txt"),
        (".", "."),
        ("./", "."),
        ("dir/sub/", "dir/sub"),
    ],
)
def test_normalize_path(raw, expected):
    assert normalize_path(raw) == Path(expected)


@pytest.mark.parametrize("raw", ["./a.txt", "dir\\a", "x/./y", "."])
def test_normalize_is_idempotent(raw):
    once = normalize_path(raw)
    assert normalize_path(once) == once
    assert normalize_path(str(once)) == once


def test_target_list_normalises_and_keeps_order():
    targets = TargetList(["./b", "a", "dir\\c"])
    assert list(targets) == [Path("b"), Path("a"), Path("dir/c")]
    assert targets.as_args() == ["b", "a", "dir/c"]
    assert str(targets) == "'b' 'a' 'dir/c'"
    assert len(targets) == 3


def test_parents_are_deduplicated():
    targets = TargetList(["a.txt", "./b.txt", "dir/c.txt", "dir/d.txt", "other/e"])
    parents = targets.parents()
    assert list(parents) == [Path("."), Path("dir"), Path("other")]
    assert len(set(parents)) == len(parents)


def test_parents_of_deduplicated_set_has_no_duplicates():
    parents = TargetList([".", ".", "dir"]).parents()
    assert list(parents) == [Path(".")]
    assert list(parents.parents()) == list(parents)


def test_empty_target_list():
    targets = TargetList()
    assert not targets
    assert list(targets.parents()) == []
