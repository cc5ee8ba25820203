from __future__ import annotations

import os
from pathlib import Path

import pytest

from dirzip.models import EntryCandidate, EntryKind
from dirzip.path_matcher import PathMatcher
from dirzip.tree_walker import walk_tree


class RecordingMatcher(PathMatcher):
    def __init__(self, targets_abs: list[Path]) -> None:
        super().__init__(targets_abs)
        self.checked: list[Path] = []

    def matches(self, candidate_abs: Path) -> bool:
        self.checked.append(candidate_abs)
        return super().matches(candidate_abs)


def _build_tree(root: Path) -> None:
    (root / "b_dir" / "nested").mkdir(parents=True)
    (root / "a.txt").write_text("a", encoding="utf-8")
    (root / "b_dir" / "b.txt").write_text("b", encoding="utf-8")
    (root / "b_dir" / "nested" / "c.txt").write_text("c", encoding="utf-8")
    (root / "c_empty").mkdir()


def test_walk_tree_yields_every_node_once_in_pre_order(tmp_path: Path) -> None:
    _build_tree(tmp_path)

    candidates = list(walk_tree(tmp_path, PathMatcher(())))

    assert [(c.path_rel.as_posix(), c.kind) for c in candidates] == [
        ("a.txt", EntryKind.FILE),
        ("b_dir", EntryKind.DIRECTORY),
        ("b_dir/b.txt", EntryKind.FILE),
        ("b_dir/nested", EntryKind.DIRECTORY),
        ("b_dir/nested/c.txt", EntryKind.FILE),
        ("c_empty", EntryKind.DIRECTORY),
    ]
    assert candidates[0].path_abs == tmp_path / "a.txt"


def test_walk_tree_prunes_ignored_directory_without_visiting_it(tmp_path: Path) -> None:
    _build_tree(tmp_path)
    matcher = RecordingMatcher([tmp_path / "b_dir"])
    ignored: list[EntryCandidate] = []

    candidates = list(walk_tree(tmp_path, matcher, on_ignored=ignored.append))

    assert [c.path_rel.as_posix() for c in candidates] == ["a.txt", "c_empty"]
    assert [c.path_rel.as_posix() for c in ignored] == ["b_dir"]
    assert matcher.checked == [
        tmp_path / "a.txt",
        tmp_path / "b_dir",
        tmp_path / "c_empty",
    ]


def test_walk_tree_skips_ignored_file_only(tmp_path: Path) -> None:
    _build_tree(tmp_path)
    ignored: list[EntryCandidate] = []

    candidates = list(
        walk_tree(
            tmp_path,
            PathMatcher([tmp_path / "b_dir" / "b.txt"]),
            on_ignored=ignored.append,
        )
    )

    names = [c.path_rel.as_posix() for c in candidates]
    assert "b_dir/b.txt" not in names
    assert "b_dir/nested/c.txt" in names
    assert [(c.path_rel.as_posix(), c.kind) for c in ignored] == [
        ("b_dir/b.txt", EntryKind.FILE)
    ]


def test_walk_tree_is_stable_between_passes(tmp_path: Path) -> None:
    _build_tree(tmp_path)

    first = list(walk_tree(tmp_path, PathMatcher(())))
    second = list(walk_tree(tmp_path, PathMatcher(())))

    assert first == second


def test_walk_tree_follows_directory_symlinks(tmp_path: Path) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "linked.txt").write_text("x", encoding="utf-8")
    root = tmp_path / "root"
    root.mkdir()
    try:
        (root / "link").symlink_to(outside, target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not available")

    candidates = list(walk_tree(root, PathMatcher(())))

    assert [(c.path_rel.as_posix(), c.kind) for c in candidates] == [
        ("link", EntryKind.DIRECTORY),
        ("link/linked.txt", EntryKind.FILE),
    ]


@pytest.mark.skipif(
    os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="permission bits are not enforced",
)
def test_walk_tree_skips_unreadable_directory(tmp_path: Path) -> None:
    locked = tmp_path / "locked"
    locked.mkdir()
    (locked / "secret.txt").write_text("s", encoding="utf-8")
    (tmp_path / "open.txt").write_text("o", encoding="utf-8")
    locked.chmod(0o000)
    try:
        candidates = list(walk_tree(tmp_path, PathMatcher(())))
    finally:
        locked.chmod(0o755)

    assert [c.path_rel.as_posix() for c in candidates] == ["locked", "open.txt"]
