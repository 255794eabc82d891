from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation, entry-name extraction and entry
classification utilities shared by the capture and materialization engines.
Acts as an abstraction over the 'os' module to ensure uniform behavior across
Windows and Unix-like systems.
"""

import os
import stat
from enum import Enum
from typing import Optional

from yamltree.domain.errors import InvalidPathError, NotFoundError

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "yamltree"
UNIX_APP_DIR_NAME = ".yamltree"


class EntryKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"
    MISSING = "missing"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir(create: bool = True) -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/yamltree
    - Linux/Mac: ~/.yamltree

    Args:
        create: Create the directory hierarchy if it does not exist.

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    # Windows specific resolution
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    if create:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError:
            pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def resolve_user_path(path: str) -> str:
    """
    Make a command-line path absolute without otherwise rewriting it.

    The shell has already expanded variables, and surrounding whitespace is
    part of the name. Only '~' is expanded.

    Raises:
        InvalidPathError: If *path* is empty.
    """
    if not path:
        raise InvalidPathError("Path has no name component: ''", path)
    return os.path.abspath(os.path.expanduser(path))

# -----------------------------------------------------------------------------
# ENTRY INSPECTION API
# -----------------------------------------------------------------------------

def entry_name(path: str) -> str:
    """
    Extract the final name component of *path* as text.

    Trailing separators are ignored ('proj/' -> 'proj'). Paths whose last
    component is '.', '..' or empty (filesystem roots) have no extractable
    name. Names holding undecodable bytes (surrogate-escaped by the OS layer)
    are not representable.

    Args:
        path: Filesystem path to inspect.

    Returns:
        str: The entry name.

    Raises:
        InvalidPathError: If no representable name can be extracted.
    """
    trimmed = path.rstrip(os.sep)
    if os.altsep:
        trimmed = trimmed.rstrip(os.altsep)

    name = os.path.basename(trimmed)
    if name in ("", ".", "..") or trimmed.endswith(":"):
        raise InvalidPathError(f"Invalid pathname: '{path}' has no name component.", path)

    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidPathError(f"Invalid pathname: {path!r} is not valid text.", path) from e

    return name


def classify_entry(path: str) -> EntryKind:
    """
    Classify a path by following symlinks, mirroring os.path.isfile/isdir.

    Args:
        path: Filesystem path to inspect.

    Returns:
        EntryKind: FILE, DIRECTORY, OTHER (device, FIFO, socket) or MISSING
        (absent path or dangling symlink).
    """
    try:
        mode = os.stat(path).st_mode
    except (FileNotFoundError, NotADirectoryError):
        return EntryKind.MISSING

    if stat.S_ISREG(mode):
        return EntryKind.FILE
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    return EntryKind.OTHER


def require_capturable(path: str) -> EntryKind:
    """
    Ensure *path* is a regular file or a directory.

    Raises:
        NotFoundError: For missing paths, dangling symlinks and special files.
    """
    kind = classify_entry(path)
    if kind is EntryKind.MISSING:
        raise NotFoundError(f"Path not found: {path}", path)
    if kind is EntryKind.OTHER:
        raise NotFoundError(f"Not a file or directory: {path}", path)
    return kind


def ensure_parent_dir(path: str) -> None:
    """
    Create the parent directory hierarchy for a target file if missing.

    Args:
        path: Path to the target file.
    """
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)
