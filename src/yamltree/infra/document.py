from __future__ import annotations

"""
YAML Document Storage.

Reads and writes tree documents through PyYAML. The document is always read
and written wholesale; loader and OS failures are translated into domain
errors so callers only ever see the YamlTreeError hierarchy.
"""

import logging
from typing import Any

import yaml

from yamltree.domain.errors import InvalidDocumentError, NotFoundError, TreeIOError
from yamltree.infra.fs import ensure_parent_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------

def dumps_document(data: Any) -> str:
    """Render plain tree data as block-style YAML text, preserving key order."""
    return yaml.safe_dump(
        data,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def loads_document(text: str, source: str = "<string>") -> Any:
    """
    Parse YAML text into plain data.

    Raises:
        InvalidDocumentError: If the text is not valid YAML.
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidDocumentError(f"Invalid YAML file '{source}': {e}", source) from e

# -----------------------------------------------------------------------------
# FILE IO
# -----------------------------------------------------------------------------

def load_document(path: str) -> Any:
    """
    Read and parse a YAML document from disk.

    Args:
        path: Document file path.

    Returns:
        Any: Loader output (None for an empty file).

    Raises:
        NotFoundError: The document does not exist.
        TreeIOError: The document could not be read.
        InvalidDocumentError: The document is not valid YAML.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError as e:
        raise NotFoundError(f"Document not found: {path}", path) from e
    except UnicodeDecodeError as e:
        raise InvalidDocumentError(f"Document is not UTF-8 text: {path}", path) from e
    except OSError as e:
        raise TreeIOError(f"Failed to read document '{path}': {e}", path) from e

    logger.debug(f"Loaded document {path} ({len(text)} chars)")
    return loads_document(text, source=path)


def dump_document(data: Any, path: str) -> None:
    """
    Serialize plain tree data and overwrite *path* with it.

    The parent directory is created when missing.

    Raises:
        TreeIOError: The document could not be written.
    """
    text = dumps_document(data)
    try:
        ensure_parent_dir(path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise TreeIOError(f"Failed to write document '{path}': {e}", path) from e

    logger.info(f"Document saved to file: {path}")
