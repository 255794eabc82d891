from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared directory-tree fixtures and structural comparison helpers.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from yamltree.domain.tree_models import MappingNode, ScalarNode, SequenceNode  # noqa: E402
from yamltree.infra.logging import shutdown_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def canonical(value: Any) -> Any:
    """
    Order-insensitive canonical form of a Tree Value.

    Sibling order follows filesystem enumeration and is not stable across
    platforms, so sequences are compared as sorted tuples.
    """
    if isinstance(value, ScalarNode):
        return ("scalar", value.name)
    if isinstance(value, MappingNode):
        return ("mapping", tuple(sorted(
            (key, canonical(child)) for key, child in value.entries
        )))
    if isinstance(value, SequenceNode):
        return ("sequence", tuple(sorted(canonical(item) for item in value.items)))
    raise TypeError(value)


def snapshot(root: Path) -> set:
    """Return relative entries under *root*, suffixing directories with '/'."""
    out = set()
    for dirpath, dirnames, filenames in os.walk(root):
        rel = os.path.relpath(dirpath, root)
        for d in dirnames:
            out.add(os.path.normpath(os.path.join(rel, d)).replace(os.sep, "/") + "/")
        for f in filenames:
            out.add(os.path.normpath(os.path.join(rel, f)).replace(os.sep, "/"))
    return out


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    Create a small project tree.

    Structure:
    /proj
      a.txt
      /b          (empty)
      /src
        main.py
        /pkg
          util.py
    """
    proj = tmp_path / "proj"
    proj.mkdir()
    (proj / "a.txt").write_text("alpha", encoding="utf-8")
    (proj / "b").mkdir()
    (proj / "src").mkdir()
    (proj / "src" / "main.py").write_text("print('hi')", encoding="utf-8")
    (proj / "src" / "pkg").mkdir()
    (proj / "src" / "pkg" / "util.py").write_text("", encoding="utf-8")
    return proj


@pytest.fixture
def clean_logging():
    """Detach application log handlers after a test that configured logging."""
    yield
    shutdown_logging()
    logging.getLogger().setLevel(logging.WARNING)


@pytest.fixture
def canon():
    """Order-insensitive Tree Value comparison helper."""
    return canonical


@pytest.fixture
def fs_snapshot():
    """Relative-entry snapshot helper for materialized trees."""
    return snapshot
