from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the raw
argparse namespace into domain configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

GENERATE_COMMAND = "generate"

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the smartassets CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="smartassets",
        description="Keep pubspec.yaml assets/fonts and a Dart constants file "
                    "in sync with the assets/ directory of a Flutter project.",
    )
    sub = p.add_subparsers(dest="command", metavar="COMMAND")

    g = sub.add_parser(
        GENERATE_COMMAND,
        help="Scan assets, update pubspec.yaml and generate app_assets.dart.",
    )

    # --- Path Management ---
    g.add_argument(
        "-p", "--project",
        dest="project_root",
        default=None,
        help="Flutter project directory (default: current directory).",
    )
    g.add_argument(
        "--assets-dir",
        dest="assets_dir",
        default=None,
        help="Resource root folder name inside the project (default: assets).",
    )
    g.add_argument(
        "--fonts-dir",
        dest="fonts_dir",
        default=None,
        help="Folder under the resource root holding font files (default: fonts).",
    )
    g.add_argument(
        "--pubspec",
        dest="pubspec_file",
        default=None,
        help="Manifest path relative to the project (default: pubspec.yaml).",
    )
    g.add_argument(
        "-o", "--output",
        dest="output_file",
        default=None,
        help="Generated Dart file relative to the project "
             "(default: lib/core/assets/app_assets.dart).",
    )

    # --- Discovery ---
    g.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated regexes matched against file and folder names.",
    )

    # --- Output Selection ---
    g.add_argument(
        "--no-pubspec",
        action="store_true",
        help="Do not modify pubspec.yaml.",
    )
    g.add_argument(
        "--no-code",
        action="store_true",
        help="Do not generate the Dart constants file.",
    )

    # --- Runtime Constraints ---
    g.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing any file.",
    )

    # --- Configuration and Diagnostic Tools ---
    g.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the project's smartassets.json.",
    )
    g.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective options to the project's smartassets.json.",
    )
    g.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    g.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    g.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )
    g.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file (rotated).",
    )

    # --- Format Selection ---
    g.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a domain configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["project_root"] = args.project_root
    overrides["assets_dir"] = args.assets_dir
    overrides["fonts_dir"] = args.fonts_dir
    overrides["pubspec_file"] = args.pubspec_file
    overrides["output_file"] = args.output_file

    if args.exclude_patterns:
        overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)

    if args.no_pubspec:
        overrides["update_pubspec"] = False
    if args.no_code:
        overrides["generate_code"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
