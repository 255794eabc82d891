from __future__ import annotations

"""
Unit tests for the Capture Engine.

Verifies the disk -> Tree Value mapping, the directory marker invariant,
entry ordering options and the abort-on-first-error failure modes.
"""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from yamltree.core.capture import capture, capture_path
from yamltree.domain.errors import InvalidPathError, NotFoundError, TreeIOError
from yamltree.domain.tree_models import MappingNode, ScalarNode, SequenceNode

IS_ROOT = hasattr(os, "geteuid") and os.geteuid() == 0


def _walk_names(value, out):
    """Collect (name, is_dir_marker) pairs from a captured value."""
    if isinstance(value, ScalarNode):
        out.append(value.name)
    elif isinstance(value, MappingNode):
        for key, child in value.entries:
            out.append(key)
            _walk_names(child, out)
    else:
        for item in value.items:
            _walk_names(item, out)
    return out

# -----------------------------------------------------------------------------
# STRUCTURE
# -----------------------------------------------------------------------------

def test_capture_scenario_file_and_empty_directory(tmp_path: Path, canon) -> None:
    """TC-01: proj/ with a.txt and empty b/ yields the documented shape."""
    proj = tmp_path / "proj"
    proj.mkdir()
    (proj / "a.txt").write_text("x", encoding="utf-8")
    (proj / "b").mkdir()

    value = capture([str(proj)])

    expected = SequenceNode((
        MappingNode((("proj/", SequenceNode((ScalarNode("a.txt"), ScalarNode("b/")))),)),
    ))
    assert canon(value) == canon(expected)


def test_capture_single_file_is_wrapped_in_sequence(tmp_path: Path) -> None:
    f = tmp_path / "solo.txt"
    f.write_text("", encoding="utf-8")

    assert capture([str(f)]) == SequenceNode((ScalarNode("solo.txt"),))


def test_capture_empty_directory(tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()

    assert capture_path(str(empty)) == ScalarNode("empty/")


def test_capture_trailing_separator_is_ignored(tmp_path: Path) -> None:
    d = tmp_path / "dir"
    d.mkdir()

    assert capture_path(str(d) + os.sep) == ScalarNode("dir/")


def test_capture_multiple_paths_keeps_argument_order(tmp_path: Path, sample_tree: Path) -> None:
    other = tmp_path / "other.txt"
    other.write_text("", encoding="utf-8")

    value = capture([str(other), str(sample_tree)])

    assert len(value) == 2
    assert value.items[0] == ScalarNode("other.txt")
    assert isinstance(value.items[1], MappingNode)
    assert value.items[1].entries[0][0] == "proj/"


def test_capture_nested_tree(sample_tree: Path, canon) -> None:
    value = capture([str(sample_tree)])

    expected = SequenceNode((
        MappingNode.directory("proj", SequenceNode((
            ScalarNode("a.txt"),
            ScalarNode("b/"),
            MappingNode.directory("src", SequenceNode((
                ScalarNode("main.py"),
                MappingNode.directory("pkg", SequenceNode((ScalarNode("util.py"),))),
            ))),
        ))),
    ))
    assert canon(value) == canon(expected)


def test_marker_invariant_matches_filesystem(sample_tree: Path) -> None:
    """TC-02: A trailing '/' appears exactly on directory names."""
    names = _walk_names(capture([str(sample_tree)]), [])

    assert sorted(names) == sorted(["proj/", "a.txt", "b/", "src/", "main.py", "pkg/", "util.py"])
    for name in names:
        assert name.endswith("/") == (name.rstrip("/") in {"proj", "b", "src", "pkg"})


def test_capture_is_idempotent(sample_tree: Path, canon) -> None:
    assert canon(capture([str(sample_tree)])) == canon(capture([str(sample_tree)]))


def test_sorted_capture_is_deterministic(tmp_path: Path) -> None:
    d = tmp_path / "d"
    d.mkdir()
    for name in ("zeta", "alpha", "mid"):
        (d / name).write_text("", encoding="utf-8")

    value = capture_path(str(d), sort_entries=True)

    assert [c.name for c in value.entries[0][1].items] == ["alpha", "mid", "zeta"]


def test_capture_does_not_modify_tree(sample_tree: Path, fs_snapshot) -> None:
    before = fs_snapshot(sample_tree)
    capture([str(sample_tree)])
    assert fs_snapshot(sample_tree) == before

# -----------------------------------------------------------------------------
# FAILURE MODES
# -----------------------------------------------------------------------------

def test_capture_nonexistent_path_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        capture([str(tmp_path / "missing")])


def test_capture_aborts_whole_run_on_one_bad_path(sample_tree: Path, tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        capture([str(sample_tree), str(tmp_path / "missing")])


@pytest.mark.parametrize("bad", ["", ".", "..", os.sep])
def test_capture_path_without_name_is_invalid(bad: str) -> None:
    with pytest.raises(InvalidPathError):
        capture([bad])


@pytest.mark.skipif(not hasattr(os, "symlink") or sys.platform == "win32", reason="POSIX symlinks")
def test_dangling_symlink_child_aborts_capture(tmp_path: Path) -> None:
    d = tmp_path / "d"
    d.mkdir()
    os.symlink(str(tmp_path / "nowhere"), str(d / "link"))

    with pytest.raises(NotFoundError):
        capture([str(d)])


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires named pipes")
def test_special_file_is_not_capturable(tmp_path: Path) -> None:
    fifo = tmp_path / "pipe"
    os.mkfifo(str(fifo))

    with pytest.raises(NotFoundError, match="Not a file or directory"):
        capture([str(fifo)])


@pytest.mark.skipif(sys.platform != "linux", reason="needs byte-oriented filenames")
def test_non_text_name_is_invalid(tmp_path: Path) -> None:
    d = tmp_path / "d"
    d.mkdir()
    try:
        fd = os.open(os.path.join(os.fsencode(str(d)), b"bad\xff"), os.O_CREAT | os.O_WRONLY)
    except OSError:
        pytest.skip("filesystem rejects non-UTF-8 names")
    os.close(fd)

    with pytest.raises(InvalidPathError):
        capture([str(d)])


@pytest.mark.skipif(IS_ROOT or os.name == "nt", reason="permission bits are bypassed")
def test_unreadable_directory_raises_io_error(tmp_path: Path) -> None:
    locked = tmp_path / "locked"
    locked.mkdir()
    (locked / "inner.txt").write_text("", encoding="utf-8")
    os.chmod(str(locked), 0)
    try:
        with pytest.raises(TreeIOError):
            capture([str(locked)])
    finally:
        os.chmod(str(locked), 0o755)


def test_enumeration_failure_is_wrapped(tmp_path: Path) -> None:
    d = tmp_path / "d"
    d.mkdir()

    with patch("yamltree.core.capture.os.scandir", side_effect=PermissionError("denied")):
        with pytest.raises(TreeIOError, match="denied") as exc:
            capture([str(d)])

    assert exc.value.path == str(d)
    assert isinstance(exc.value.__cause__, PermissionError)
