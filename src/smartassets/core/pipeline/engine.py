from __future__ import annotations

"""
Synchronization Pipeline.

Coordinates one generation run, strictly in sequence:
1. Validates configuration and resolves project paths.
2. Scans the resource root.
3. Loads pubspec.yaml and reconciles its declarations.
4. Synthesizes identifiers and renders the Dart source.
5. Persists the generated file, then the document.

Everything that can fail is computed in memory before the first write.
The generated file is written before the document; if the document write
fails, the generated file is put back as it was.
"""

import logging
import os
from typing import Any, Dict, Optional

from smartassets.core.codegen.dart_writer import group_summary, render_dart_source
from smartassets.core.codegen.identifiers import build_generation_model
from smartassets.core.pipeline.validator import validate_config
from smartassets.core.reconcile.engine import reconcile
from smartassets.core.services.scanner import build_fresh_scan, scan_assets
from smartassets.domain.errors import MissingDocumentError, SmartAssetsError
from smartassets.domain.manifest_models import ChangeCounts
from smartassets.domain.sync_models import (
    SyncResult,
    create_error_result,
    create_success_result,
)
from smartassets.infra.fs import (
    normalize_path,
    read_text,
    resolve_in_project,
    write_text_atomic,
)
from smartassets.infra.pubspec import PubspecDocument

logger = logging.getLogger(__name__)


def run_sync(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
) -> SyncResult:
    """
    Execute a full synchronization run.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, compute everything but write nothing.

    Returns:
        SyncResult: Status, change counts and generation summary.
    """
    logger.info("Asset synchronization started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    project_root = normalize_path(cfg.get("project_root", ""), os.getcwd())
    if not os.path.isdir(project_root):
        msg = f"Invalid project directory: {project_root}"
        logger.error(msg)
        return create_error_result(msg, cfg, project_root, dry_run=dry_run)

    pubspec_path = resolve_in_project(project_root, cfg["pubspec_file"])
    output_path = resolve_in_project(project_root, cfg["output_file"])
    assets_dir = cfg["assets_dir"]
    fonts_dir = cfg["fonts_dir"]
    exclude_patterns = cfg["exclude_patterns"]

    # -------------------------------------------------------------------------
    # 2) Discovery
    # -------------------------------------------------------------------------
    scan = scan_assets(project_root, assets_dir, exclude_patterns)
    fresh = build_fresh_scan(project_root, assets_dir, fonts_dir, exclude_patterns)
    logger.info(
        f"Found {scan.total_files} asset files across {len(scan.groups)} groups."
    )

    # -------------------------------------------------------------------------
    # 3) Reconciliation & 4) Generation (in memory)
    # -------------------------------------------------------------------------
    update_pubspec = cfg["update_pubspec"]
    document: Optional[PubspecDocument] = None
    counts = ChangeCounts()
    try:
        try:
            document = PubspecDocument.load(pubspec_path)
        except MissingDocumentError:
            if update_pubspec:
                raise
            logger.info(f"No pubspec.yaml at {pubspec_path}; generating code only.")

        if document is not None and update_pubspec:
            if document.ensure_flutter_section():
                logger.info("Created flutter: section in pubspec.yaml")
            merged, counts = reconcile(document.fragment(), fresh)
            document.apply(merged)

        model = build_generation_model(scan, fonts_dir)
        source = render_dart_source(model, assets_dir) if cfg["generate_code"] else ""
    except SmartAssetsError as e:
        logger.error(str(e))
        return create_error_result(
            str(e), cfg, project_root, pubspec_path, output_path, dry_run=dry_run
        )

    pubspec_dirty = bool(update_pubspec and document is not None and document.changed)

    # -------------------------------------------------------------------------
    # 5) Persistence (generated code first, manifest last)
    # -------------------------------------------------------------------------
    if dry_run:
        logger.info("Dry run: no files written.")
    else:
        previous_source = _read_previous(output_path) if cfg["generate_code"] else None
        code_written = False
        try:
            if cfg["generate_code"]:
                write_text_atomic(output_path, source)
                code_written = True
                logger.info(f"Generated {output_path}")
            if pubspec_dirty:
                document.save(pubspec_path)
                logger.info(f"Updated {pubspec_path}")
        except OSError as e:
            msg = f"Failed to write project files: {e}"
            logger.critical(msg)
            if code_written:
                _restore_output(output_path, previous_source)
            return create_error_result(
                msg, cfg, project_root, pubspec_path, output_path, dry_run=dry_run
            )

    return create_success_result(
        project_root,
        pubspec_path,
        output_path,
        counts,
        dry_run=dry_run,
        pubspec_enabled=update_pubspec,
        pubspec_updated=bool(pubspec_dirty and not dry_run),
        code_generated=bool(cfg["generate_code"] and not dry_run),
        package_name=document.package_name if document is not None else None,
        group_counts=group_summary(model),
        font_families=[f.family for f in model.font_families],
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _read_previous(path: str) -> Optional[str]:
    """Current content of the generated file, or None if there is none."""
    if not os.path.isfile(path):
        return None
    try:
        return read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot keep a copy of {path}: {e}")
        return None


def _restore_output(path: str, previous: Optional[str]) -> None:
    """Put the generated file back as it was before this run."""
    try:
        if previous is None:
            os.remove(path)
        else:
            write_text_atomic(path, previous)
        logger.info(f"Restored {path} after failed update.")
    except OSError as e:
        logger.error(f"Could not restore {path}: {e}")
