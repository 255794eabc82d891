from __future__ import annotations

"""
Operation Domain Data Models.

Defines the result structure used to communicate push and pull outcomes
between the service layer and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a completed push or pull.

    Attributes:
        command: 'push' or 'pull'.
        document_path: Absolute path of the document read or written.
        paths: Captured input paths (pull) or the materialization root (push).
        files: Number of file entries captured or created.
        directories: Number of directory entries captured or created.
        dry_run: Whether the push only simulated creation.
        document: Plain document data that was written or read.
    """
    command: str
    document_path: str
    paths: List[str]
    files: int = 0
    directories: int = 0
    dry_run: bool = False
    document: Any = field(default=None, compare=False)

    @property
    def total(self) -> int:
        return self.files + self.directories

    def summary(self) -> Dict[str, Any]:
        """Compact statistics mapping for reporting."""
        return {
            "command": self.command,
            "document": self.document_path,
            "paths": list(self.paths),
            "files": self.files,
            "directories": self.directories,
            "dry_run": self.dry_run,
        }
