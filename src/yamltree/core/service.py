from __future__ import annotations

"""
Push / Pull Orchestration.

Coordinates a complete operation in either direction:
1. pull: capture paths -> convert to document data -> write YAML.
2. push: read YAML -> parse into a Tree Value -> materialize under a root.

Domain errors raised by the engines and the document layer propagate to the
caller unchanged; no partial-failure recovery is attempted.
"""

import logging
import os
from typing import List, Sequence, Tuple

from yamltree.core.capture import capture
from yamltree.core.materialize import materialize
from yamltree.domain.operation_models import OperationResult
from yamltree.domain.tree_models import (
    MappingNode,
    ScalarNode,
    SequenceNode,
    TreeValue,
    from_document,
    to_document,
)
from yamltree.infra.document import dump_document, load_document

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def run_pull(
        paths: Sequence[str],
        dest: str,
        *,
        sort_entries: bool = False,
) -> OperationResult:
    """
    Capture *paths* and overwrite the YAML document at *dest*.

    Args:
        paths: Files or directories to capture.
        dest: Document path to write.
        sort_entries: Sort directory children by name.

    Returns:
        OperationResult: Written document data and entry counts.
    """
    logger.info(f"Pulling from {list(paths)}")

    tree = capture(paths, sort_entries=sort_entries)
    logger.debug(f"Captured tree: {tree}")

    document = to_document(tree)
    dump_document(document, dest)

    files, directories = count_entries(tree)
    return OperationResult(
        command="pull",
        document_path=os.path.abspath(dest),
        paths=list(paths),
        files=files,
        directories=directories,
        document=document,
    )


def run_push(
        root: str,
        src: str,
        *,
        strict: bool = False,
        dry_run: bool = False,
) -> OperationResult:
    """
    Read the YAML document at *src* and create its tree under *root*.

    Args:
        root: Existing directory receiving the new entries.
        src: Document path to read.
        strict: Reject unknown document nodes instead of ignoring them.
        dry_run: Only log what would be created.

    Returns:
        OperationResult: Parsed document data and created entry counts.
    """
    logger.info(f"Pushing to {root}")

    document = load_document(src)
    tree = from_document(document, strict=strict)
    logger.debug(f"Parsed tree: {tree}")

    stats = materialize(tree, root, dry_run=dry_run)
    return OperationResult(
        command="push",
        document_path=os.path.abspath(src),
        paths=[root],
        files=stats.files,
        directories=stats.directories,
        dry_run=dry_run,
        document=document,
    )

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def count_entries(value: TreeValue) -> Tuple[int, int]:
    """
    Count file and directory entries described by a Tree Value.

    Returns:
        Tuple[int, int]: (files, directories).
    """
    if isinstance(value, ScalarNode):
        return (0, 1) if value.is_directory else (1, 0)

    children: List[TreeValue]
    dirs = 0
    if isinstance(value, MappingNode):
        dirs = len(value.entries)
        children = [child for _, child in value.entries]
    elif isinstance(value, SequenceNode):
        children = list(value.items)
    else:
        raise TypeError(f"Not a tree value: {type(value).__name__}")

    files = 0
    for child in children:
        f, d = count_entries(child)
        files += f
        dirs += d
    return files, dirs
