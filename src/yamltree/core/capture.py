from __future__ import annotations

"""
Capture Engine.

Walks real directory trees depth-first and builds the equivalent Tree Value.
Read-only: persisting the resulting document is handled by the service layer.
Any failure aborts the whole capture; no partial result is returned.
"""

import logging
import os
from typing import Iterable, List

from yamltree.domain.errors import TreeIOError
from yamltree.domain.tree_models import (
    DIRECTORY_MARKER,
    MappingNode,
    ScalarNode,
    SequenceNode,
    TreeValue,
)
from yamltree.infra.fs import EntryKind, entry_name, require_capturable

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def capture(paths: Iterable[str], *, sort_entries: bool = False) -> SequenceNode:
    """
    Capture one or more filesystem paths into a Tree Value.

    The result is always a SequenceNode holding one node per input path,
    even when a single path is given.

    Args:
        paths: Existing files or directories to capture.
        sort_entries: Sort directory children by name instead of keeping the
            raw (platform-dependent) enumeration order.

    Returns:
        SequenceNode: Top-level sequence of captured roots.

    Raises:
        InvalidPathError: A path has no extractable or representable name.
        NotFoundError: A path is missing, or is neither file nor directory.
        TreeIOError: A directory could not be enumerated.
    """
    roots = [capture_path(p, sort_entries=sort_entries) for p in paths]
    return SequenceNode(tuple(roots))


def capture_path(path: str, *, sort_entries: bool = False) -> TreeValue:
    """
    Capture a single path.

    Returns:
        TreeValue: ScalarNode for a file or empty directory, MappingNode for
        a non-empty directory.
    """
    name = entry_name(path)
    kind = _inspect(path)

    if kind is EntryKind.FILE:
        logger.debug(f"Captured file: {path}")
        return ScalarNode(name)

    children = [
        capture_path(child, sort_entries=sort_entries)
        for child in _list_children(path, sort_entries)
    ]

    if not children:
        logger.debug(f"Captured empty directory: {path}")
        return ScalarNode(name + DIRECTORY_MARKER)

    logger.debug(f"Captured directory: {path} ({len(children)} entries)")
    return MappingNode.directory(name, SequenceNode(tuple(children)))

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _inspect(path: str) -> EntryKind:
    """Classify *path*, translating OS failures into domain errors."""
    try:
        return require_capturable(path)
    except OSError as e:
        raise TreeIOError(f"Cannot inspect '{path}': {e}", path) from e


def _list_children(path: str, sort_entries: bool) -> List[str]:
    """
    Enumerate direct children of a directory.

    The directory handle is scoped to this call and released before any
    recursion into the children takes place.
    """
    try:
        with os.scandir(path) as it:
            entries = [(entry.name, entry.path) for entry in it]
    except OSError as e:
        raise TreeIOError(f"Cannot read directory '{path}': {e}", path) from e

    if sort_entries:
        entries.sort(key=lambda pair: pair[0])

    return [child_path for _, child_path in entries]
