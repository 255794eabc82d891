from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, configuration merging
(defaults, persisted file, command-line overrides), logging bootstrap,
push/pull dispatch and result rendering. Domain failures are mapped onto
distinct process exit codes.
"""

import os
import sys
from typing import Any, Dict, List, Optional

from yamltree.core.service import run_pull, run_push
from yamltree.core.validator import validate_config
from yamltree.domain.config import get_default_config, load_config
from yamltree.domain.errors import YamlTreeError
from yamltree.domain.operation_models import OperationResult
from yamltree.infra.document import dumps_document
from yamltree.infra.fs import normalize_path, resolve_user_path
from yamltree.infra.logging import LoggingConfig, configure_logging, get_logger
from yamltree.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve configuration (defaults vs persisted state) and overrides
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(LoggingConfig(
        level=conf["log_level"],
        console=True,
        log_file=conf["log_file"] or None,
    ))

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    cwd = os.getcwd()
    document_path = normalize_path(conf["document_path"], cwd)

    # 4. Execution phase
    try:
        if args.command == "pull":
            paths = [resolve_user_path(p) for p in args.paths]
            result = run_pull(paths, document_path, sort_entries=conf["sort_entries"])
        else:
            root = resolve_user_path(args.path)
            result = run_push(
                root,
                document_path,
                strict=conf["strict_documents"],
                dry_run=bool(args.dry_run),
            )
    except YamlTreeError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        logger.warning("Operation interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Unexpected failure during {args.command}: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    # 5. Output rendering phase
    if args.command == "pull" and args.print_document:
        print(dumps_document(result.document), end="")
    _print_human_summary(result)

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge non-None overrides for known keys into *base*.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: OperationResult) -> None:
    """Print a short report of a successful operation to stdout."""
    if result.command == "pull":
        print(f"Captured {len(result.paths)} path(s) into {result.document_path}")
        print(f"  files: {result.files}")
        print(f"  directories: {result.directories}")
        return

    verb = "Would create" if result.dry_run else "Created"
    print(f"{verb} {result.total} entries under {result.paths[0]}")
    print(f"  files: {result.files}")
    print(f"  directories: {result.directories}")


if __name__ == "__main__":
    sys.exit(main())
