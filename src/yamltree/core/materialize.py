from __future__ import annotations

"""
Materialization Engine.

Consumes a Tree Value top-down and creates the corresponding empty files and
directories on disk. Creation never overwrites: an existing name aborts the
run immediately, leaving already-created entries in place (no rollback).
"""

import logging
import os
from dataclasses import dataclass

from yamltree.domain.errors import EntryExistsError, InvalidPathError, TreeIOError
from yamltree.domain.tree_models import (
    MappingNode,
    ScalarNode,
    SequenceNode,
    TreeValue,
    is_directory_name,
    strip_marker,
)

logger = logging.getLogger(__name__)


@dataclass
class MaterializeStats:
    """Counters of entries created (or planned, in dry-run mode)."""
    files: int = 0
    directories: int = 0

    @property
    def total(self) -> int:
        return self.files + self.directories

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def materialize(value: TreeValue, root: str, *, dry_run: bool = False) -> MaterializeStats:
    """
    Create the filesystem entries described by *value* under *root*.

    Args:
        value: Parsed tree value (see tree_models.from_document).
        root: Existing directory under which entries are created.
        dry_run: Log the planned entries without touching the disk.

    Returns:
        MaterializeStats: Number of files and directories created.

    Raises:
        InvalidPathError: A node name is empty, '.', '..' or contains a separator.
        EntryExistsError: A name already exists in its parent directory.
        TreeIOError: Any other creation failure (permissions, missing parent).
        TypeError: *value* is not a Tree Value.
    """
    stats = MaterializeStats()
    _materialize(value, root, stats, dry_run)
    return stats


def _materialize(value: TreeValue, root: str, stats: MaterializeStats, dry_run: bool) -> None:
    if isinstance(value, ScalarNode):
        if is_directory_name(value.name):
            _create_directory(root, value.name, stats, dry_run)
        else:
            _create_file(root, value.name, stats, dry_run)

    elif isinstance(value, MappingNode):
        for key, children in value.entries:
            if not is_directory_name(key):
                logger.warning(f"Mapping key '{key}' lacks a trailing '/'; treating it as a directory.")
            target = _create_directory(root, key, stats, dry_run)
            _materialize(children, target, stats, dry_run)

    elif isinstance(value, SequenceNode):
        for item in value.items:
            _materialize(item, root, stats, dry_run)

    else:
        raise TypeError(f"Cannot materialize {type(value).__name__}: not a tree value.")

# -----------------------------------------------------------------------------
# ENTRY CREATION
# -----------------------------------------------------------------------------

def _create_directory(root: str, name: str, stats: MaterializeStats, dry_run: bool) -> str:
    target = os.path.join(root, _checked_name(strip_marker(name), name))

    if dry_run:
        logger.info(f"[dry-run] Would create directory {target}")
    else:
        logger.debug(f"Creating directory {target}")
        try:
            os.mkdir(target)
        except FileExistsError as e:
            raise EntryExistsError(f"Entry already exists: {target}", target) from e
        except OSError as e:
            raise TreeIOError(f"Failed to create directory '{target}': {e}", target) from e

    stats.directories += 1
    return target


def _create_file(root: str, name: str, stats: MaterializeStats, dry_run: bool) -> str:
    target = os.path.join(root, _checked_name(name, name))

    if dry_run:
        logger.info(f"[dry-run] Would create file {target}")
    else:
        logger.debug(f"Creating file {target}")
        try:
            with open(target, "x", encoding="utf-8"):
                pass
        except FileExistsError as e:
            raise EntryExistsError(f"Entry already exists: {target}", target) from e
        except OSError as e:
            raise TreeIOError(f"Failed to create file '{target}': {e}", target) from e

    stats.files += 1
    return target


def _checked_name(name: str, original: str) -> str:
    """Reject names that would escape or alias the parent directory."""
    separators = [os.sep] + ([os.altsep] if os.altsep else [])
    if name in ("", ".", "..") or "\x00" in name or any(sep in name for sep in separators + ["/"]):
        raise InvalidPathError(f"Invalid entry name in document: '{original}'", original)
    return name
