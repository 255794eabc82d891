from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the push/pull command-line schema and translates parsed argparse
namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the yamltree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="yamltree",
        description="Convert between directory trees and YAML documents.",
    )

    # --- Diagnostics (global) ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration file.",
    )

    sub = p.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    # --- push ---
    push = sub.add_parser("push", help="Create directory tree from YAML file")
    push.add_argument("path", help="Directory under which the tree is created.")
    push.add_argument(
        "-s", "--src",
        dest="document_path",
        default=None,
        help="YAML document to read (default: output.yaml).",
    )
    push.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on unexpected document values instead of ignoring them.",
    )
    push.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the entries that would be created without creating them.",
    )

    # --- pull ---
    pull = sub.add_parser("pull", help="Create YAML file from directory tree")
    pull.add_argument("paths", nargs="+", metavar="path", help="Files or directories to capture.")
    pull.add_argument(
        "-d", "--dest",
        dest="document_path",
        default=None,
        help="YAML document to write (default: output.yaml).",
    )
    pull.add_argument(
        "--sort",
        dest="sort_entries",
        action="store_true",
        default=None,
        help="Sort directory entries by name for stable output.",
    )
    pull.add_argument(
        "--print",
        dest="print_document",
        action="store_true",
        help="Also print the YAML document to stdout.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Values left at None do not override the loaded configuration.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "document_path": getattr(args, "document_path", None),
        "sort_entries": getattr(args, "sort_entries", None),
        "strict_documents": getattr(args, "strict", None),
        "log_file": args.log_file,
    }
    if args.debug:
        overrides["log_level"] = "DEBUG"
    return overrides
