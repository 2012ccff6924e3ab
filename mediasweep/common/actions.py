"""
Common actions for handling duplicate media files.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from . import utils
from .errors import DeletionError
from .models import DeletionPolicy, DuplicateGroup, Report

logger = logging.getLogger(__name__)

KEEP_ALL = 'keep'

def handle_duplicates(duplicate_groups: List[DuplicateGroup],
                      policy: DeletionPolicy,
                      input_dir: Path,
                      output_dir: Path,
                      prompter=None,
                      force_delete: bool = False,
                      kind: str = 'videos') -> Path:
    """Apply the deletion policy to the groups, then write the report."""
    if not duplicate_groups:
        logger.info(f"No duplicate {kind} found.")
        deleted_files = []
    elif policy is DeletionPolicy.NO:
        logger.info(f"Found {len(duplicate_groups)} duplicate {kind[:-1]} groups. "
                    "No files deleted as per user selection.")
        deleted_files = []
    else:
        deleted_files = apply_deletion_policy(duplicate_groups, policy, prompter, force_delete)
        logger.info(f"Found {len(duplicate_groups)} duplicate {kind[:-1]} groups, "
                    f"deleted {len(deleted_files)} files.")

    return write_report(duplicate_groups, deleted_files, input_dir, output_dir, kind)

def apply_deletion_policy(duplicate_groups: List[DuplicateGroup],
                          policy: DeletionPolicy,
                          prompter=None,
                          force_delete: bool = False) -> List[Path]:
    """Delete redundant group members according to ``policy``.

    Returns the files that were actually removed.
    """
    if policy is DeletionPolicy.NO or not duplicate_groups:
        return []

    if policy is DeletionPolicy.ALL:
        to_delete = [path for group in duplicate_groups for path in group.paths[1:]]
        if not force_delete:
            if prompter is None:
                logger.error("Deleting all duplicates requires confirmation or --force-delete")
                return []
            confirmed = prompter.confirm(
                f"Delete {len(to_delete)} duplicate files, keeping the first file "
                f"of each of {len(duplicate_groups)} groups?"
            )
            if not confirmed:
                logger.info("Deletion cancelled, no files deleted.")
                return []
        for group in duplicate_groups:
            logger.debug(f"Auto-keeping {group.seed.path} and deleting "
                         f"{', '.join(str(p) for p in group.paths[1:])}")
        return delete_files(to_delete)

    # DeletionPolicy.YES
    if prompter is None:
        raise ValueError("Interactive deletion needs a prompter")

    deleted = []
    for group in duplicate_groups:
        keep = choose_file_to_keep(group, prompter)
        if keep is None:
            logger.debug(f"Keeping all files of group {', '.join(str(p) for p in group.paths)}")
            continue
        logger.debug(f"User chose to keep {keep} for group {', '.join(str(p) for p in group.paths)}")
        deleted.extend(delete_files([p for p in group.paths if p != keep]))
    return deleted

def choose_file_to_keep(group: DuplicateGroup, prompter) -> Optional[Path]:
    """Ask which member of ``group`` to keep. ``None`` means keep them all."""
    choices = [(f"Keep {path}", path) for path in group.paths]
    choices.append(("Keep all", KEEP_ALL))
    answer = prompter.select(
        f"Duplicate files found: {', '.join(str(p) for p in group.paths)}. Choose one to keep:",
        choices,
    )
    if answer is None or answer == KEEP_ALL:
        return None
    return answer

def delete_file(path: Path) -> None:
    """Remove one file, raising DeletionError on failure."""
    try:
        size = path.stat().st_size
        logger.debug(f"Deleting file {path}, size: {utils.format_size(size)}")
        path.unlink()
    except OSError as e:
        raise DeletionError(f"Failed to delete {path}: {e}") from e

def delete_files(paths: List[Path]) -> List[Path]:
    """Remove every path it can; failures are logged and skipped."""
    deleted = []
    for path in paths:
        try:
            delete_file(path)
        except DeletionError as e:
            logger.error(str(e))
            continue
        logger.info(f"Deleted duplicate: {path}")
        deleted.append(path)
    return deleted

def build_report(duplicate_groups: List[DuplicateGroup],
                 deleted_files: List[Path],
                 input_dir: Path) -> Report:
    """Build the report with paths relative to ``input_dir``."""
    return Report(
        duplicate_groups=[group.to_list(input_dir) for group in duplicate_groups],
        deleted_files=[utils.relative_to(Path(p), input_dir) for p in deleted_files],
        timestamp=datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
    )

def report_path_for(output_dir: Path, kind: str, timestamp: Optional[str] = None) -> Path:
    """First free ``duplicate-<kind>-report-<timestamp>.json`` path."""
    timestamp = timestamp or utils.get_timestamp()
    report_path = output_dir / f"duplicate-{kind}-report-{timestamp}.json"
    counter = 1
    while report_path.exists():
        report_path = output_dir / f"duplicate-{kind}-report-{timestamp}-{counter}.json"
        counter += 1
    return report_path

def write_report(duplicate_groups: List[DuplicateGroup],
                 deleted_files: List[Path],
                 input_dir: Path,
                 output_dir: Path,
                 kind: str = 'videos') -> Path:
    """Write the JSON report for this run and return its path."""
    report = build_report(duplicate_groups, deleted_files, input_dir)

    logger.debug(f"Creating output directory: {output_dir}")
    utils.ensure_dir(output_dir)
    report_path = report_path_for(output_dir, kind)

    logger.debug(f"Writing report to {report_path}")
    with open(report_path, 'w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, indent=2)

    logger.info(f"Duplicate {kind} report saved to: {report_path}")
    return report_path
