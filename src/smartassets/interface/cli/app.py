from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, resolution of the
configuration hierarchy (defaults, project smartassets.json, CLI
overrides), pipeline execution and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from smartassets.core.pipeline.engine import run_sync
from smartassets.core.pipeline.validator import validate_config
from smartassets.domain.config import get_default_config, load_config, save_config
from smartassets.domain.sync_models import SyncResult
from smartassets.infra.fs import normalize_path
from smartassets.infra.logging import LoggingConfig, configure_logging, get_logger
from smartassets.interface.cli import args as cli_args

logger = get_logger(__name__)

# sysexits.h EX_USAGE
EXIT_USAGE = 64

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    if args.command != cli_args.GENERATE_COMMAND:
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(
        LoggingConfig.for_cli(debug=args.debug, quiet=args.quiet, log_file=args.log_file)
    )

    project_root = normalize_path(args.project_root, os.getcwd())
    logger.info(f"Scanning project at: {project_root}")

    # 3. Resolve base configuration (Default vs project file)
    if args.use_defaults:
        base_conf = get_default_config(project_root)
    else:
        base_conf = load_config(project_root)

    # 4. Map and merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    overrides["project_root"] = project_root
    raw_conf = _merge_config(base_conf, overrides)

    # 5. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        try:
            path = save_config(clean_conf)
            logger.info(f"Configuration saved to {path}")
        except OSError as e:
            logger.error(f"Failed to save configuration: {e}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 6. Pipeline execution phase
    try:
        result = run_sync(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        msg = f"Asset synchronization failed: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    # 7. Output rendering phase
    if args.json_output:
        payload = asdict(result)
        payload["import_path"] = result.import_path
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys with a non-None value are merged.
    """
    out = dict(base)
    keys_to_merge = [
        "project_root", "assets_dir", "fonts_dir", "pubspec_file", "output_file",
        "exclude_patterns", "update_pubspec", "generate_code",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: SyncResult) -> None:
    """
    Format and print the run result to the standard output.
    """
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    print(
        f"Found {result.total_files} asset files across "
        f"{len(result.group_counts)} groups."
    )
    for label, count in result.group_counts.items():
        print(f"  - {label}: {count}")

    if not result.pubspec_enabled:
        print("Skipped pubspec.yaml update (--no-pubspec).")
        _print_generation_footer(result)
        return

    changed = any((
        result.assets_added, result.assets_removed,
        result.fonts_added, result.fonts_removed,
    ))
    if changed:
        verb = "Would update" if result.dry_run else "Updated"
        print(
            f"{verb} pubspec.yaml: "
            f"+{result.assets_added}/-{result.assets_removed} asset entries, "
            f"+{result.fonts_added}/-{result.fonts_removed} font entries."
        )
    else:
        print("No changes required in pubspec.yaml.")

    _print_generation_footer(result)


def _print_generation_footer(result: SyncResult) -> None:
    if result.dry_run:
        print("Dry run: no files were written.")
        return

    if result.code_generated:
        print(f"Generated Dart asset class at {result.output_path}")
    print(f"Done. Import from: {result.import_path}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
