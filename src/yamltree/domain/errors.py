from __future__ import annotations

"""
Domain Error Hierarchy.

Every failure raised by the capture and materialization engines derives from
YamlTreeError. Each error kind carries a distinct process exit code so the
CLI can report what went wrong without parsing messages.
"""

from typing import Optional


class YamlTreeError(Exception):
    """
    Base class for all domain failures.

    Attributes:
        path: Filesystem or document path involved in the failure, if any.
        exit_code: Process exit code the CLI returns for this error kind.
    """
    exit_code: int = 1

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class InvalidPathError(YamlTreeError):
    """A path has no extractable name, or the name is not representable as text."""
    exit_code = 3


class NotFoundError(YamlTreeError):
    """A path is missing, or is neither a regular file nor a directory."""
    exit_code = 4


class TreeIOError(YamlTreeError):
    """Read, write, enumeration or creation failure reported by the OS."""
    exit_code = 5


class EntryExistsError(TreeIOError):
    """Materialization hit a name that already exists in its parent."""


class InvalidDocumentError(YamlTreeError):
    """The document could not be parsed into a Tree Value."""
    exit_code = 6
