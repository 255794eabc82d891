from __future__ import annotations

"""
Tree Value Data Models.

Provides the closed, recursive value model shared by the capture and
materialization engines, plus the conversion glue between that model and the
plain data structures handled by the YAML layer.

Document shape:
    - root: sequence
    - file: "name"
    - empty directory: "name/"
    - non-empty directory: {"name/": [children...]}
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from yamltree.domain.errors import InvalidDocumentError

logger = logging.getLogger(__name__)

DIRECTORY_MARKER = "/"

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScalarNode:
    """
    Leaf entry: a file, or an empty directory when the name carries the marker.

    Attributes:
        name: Entry name, with a trailing '/' for empty directories.
    """
    name: str

    @property
    def is_directory(self) -> bool:
        return is_directory_name(self.name)


@dataclass(frozen=True)
class SequenceNode:
    """
    Ordered collection of sibling entries.

    Attributes:
        items: Child values in enumeration order.
    """
    items: Tuple["TreeValue", ...] = ()

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class MappingNode:
    """
    Non-empty directory entry.

    Captured mappings always hold exactly one entry: the directory name (with
    marker) bound to a SequenceNode of its children.

    Attributes:
        entries: Ordered (key, value) pairs.
    """
    entries: Tuple[Tuple[str, "TreeValue"], ...]

    @classmethod
    def directory(cls, name: str, children: SequenceNode) -> "MappingNode":
        """Build the single-entry mapping for a directory named *name*."""
        key = name if is_directory_name(name) else name + DIRECTORY_MARKER
        return cls(entries=((key, children),))


TreeValue = Union[ScalarNode, SequenceNode, MappingNode]

# -----------------------------------------------------------------------------
# NAME HELPERS
# -----------------------------------------------------------------------------

def is_directory_name(name: str) -> bool:
    """Return True when *name* carries the trailing directory marker."""
    return name.endswith(DIRECTORY_MARKER)


def strip_marker(name: str) -> str:
    """Remove the trailing directory marker(s) from *name*."""
    return name.rstrip(DIRECTORY_MARKER)

# -----------------------------------------------------------------------------
# DOCUMENT CONVERSION
# -----------------------------------------------------------------------------

def to_document(value: TreeValue) -> Any:
    """
    Convert a Tree Value into plain data ready for YAML serialization.

    Args:
        value: The tree value to convert.

    Returns:
        Any: Nested str / list / dict structure.
    """
    if isinstance(value, ScalarNode):
        return value.name
    if isinstance(value, SequenceNode):
        return [to_document(item) for item in value.items]
    if isinstance(value, MappingNode):
        out: Dict[str, Any] = {}
        for key, child in value.entries:
            out[key] = to_document(child)
        return out
    raise TypeError(f"Not a tree value: {type(value).__name__}")


def from_document(data: Any, *, strict: bool = False) -> TreeValue:
    """
    Parse plain YAML data into a Tree Value.

    Strings, lists and string-keyed mappings map onto the three variants.
    Anything else (numbers, booleans, nulls, dates) is an unknown node: it is
    dropped with a warning in lenient mode and rejected in strict mode.

    Args:
        data: Output of the YAML loader.
        strict: Escalate unknown nodes and non-sequence roots to errors.

    Returns:
        TreeValue: The parsed value. A lenient parse of an unknown root yields
        an empty SequenceNode.

    Raises:
        InvalidDocumentError: On non-string mapping keys, or on any unknown
            shape when strict is enabled.
    """
    if strict and not isinstance(data, list):
        raise InvalidDocumentError(
            f"Document root must be a sequence, found {_describe(data)}."
        )

    value = _convert(data, strict, location="$")
    if value is None:
        return SequenceNode()
    return value


def _convert(data: Any, strict: bool, location: str) -> Optional[TreeValue]:
    """Recursive worker for from_document. Returns None for dropped nodes."""
    if isinstance(data, str):
        return ScalarNode(data)

    if isinstance(data, list):
        items: List[TreeValue] = []
        for index, raw in enumerate(data):
            item = _convert(raw, strict, f"{location}[{index}]")
            if item is not None:
                items.append(item)
        return SequenceNode(tuple(items))

    if isinstance(data, dict):
        entries: List[Tuple[str, TreeValue]] = []
        for key, raw in data.items():
            if not isinstance(key, str):
                raise InvalidDocumentError(
                    f"Mapping key at {location} must be a string, found {_describe(key)}."
                )
            child = _convert(raw, strict, f"{location}.{key}")
            if child is None:
                child = SequenceNode()
            entries.append((key, child))
        return MappingNode(tuple(entries))

    if strict:
        raise InvalidDocumentError(
            f"Unexpected {_describe(data)} at {location}: expected a name, list or mapping."
        )
    logger.warning(f"Ignoring unexpected {_describe(data)} at {location}.")
    return None


def _describe(data: Any) -> str:
    if data is None:
        return "null"
    return f"{type(data).__name__} {data!r}"
