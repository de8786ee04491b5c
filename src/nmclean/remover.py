"""Batch deletion of scanned directories for nmclean."""

import logging
import os
import shutil
from collections.abc import Sequence
from pathlib import Path

from nmclean.exclusions import ExcludedPaths, default_excluded_paths
from nmclean.models import DeleteOutcome
from nmclean.sizer import get_directory_size

logger = logging.getLogger(__name__)

NOT_FOUND_OR_EXCLUDED = "Path not found or excluded"
NOT_ABSOLUTE = "Path must be absolute"


def delete_path(path: Path, dry_run: bool = False) -> tuple[int, str | None]:
    """
    Delete a directory tree, file or symlink.

    Args:
        path: Path to delete
        dry_run: If True, measure but don't delete

    Returns:
        Tuple of (bytes_freed, error_message)
    """
    try:
        if path.is_dir() and not path.is_symlink():
            size = get_directory_size(path)
            if not dry_run:
                shutil.rmtree(path)
        else:
            size = path.lstat().st_size
            if not dry_run:
                path.unlink()
        return size, None
    except OSError as e:
        return 0, str(e)


def remove_one(path: str, excluded: ExcludedPaths, dry_run: bool = False) -> DeleteOutcome:
    """Validate and delete a single path, never raising."""
    target = Path(path)

    if not target.is_absolute():
        return DeleteOutcome(path=path, success=False, message=NOT_ABSOLUTE, dry_run=dry_run)

    if not os.path.exists(target) or excluded.is_excluded(target):
        logger.info("Refusing to delete %s: not found or excluded", path)
        return DeleteOutcome(
            path=path, success=False, message=NOT_FOUND_OR_EXCLUDED, dry_run=dry_run
        )

    bytes_freed, error = delete_path(target, dry_run)
    if error:
        logger.warning("Failed to delete %s: %s", path, error)
        return DeleteOutcome(path=path, success=False, message=error, dry_run=dry_run)

    if dry_run:
        logger.info("Dry-run: would delete %s", path)
        message = "Would delete"
    else:
        logger.info("Deleted %s", path)
        message = "Deleted successfully"

    return DeleteOutcome(
        path=path,
        success=True,
        message=message,
        bytes_freed=bytes_freed,
        dry_run=dry_run,
    )


def remove(
    paths: Sequence[str | os.PathLike],
    excluded: ExcludedPaths | None = None,
    *,
    dry_run: bool = False,
) -> list[DeleteOutcome]:
    """
    Delete each path independently and report one outcome per path.

    Paths are processed in order. A missing, excluded or relative path,
    or a failed deletion, yields a failure outcome and the batch moves on.
    Confirmation is the caller's job; this performs exactly what it is
    told.

    Args:
        paths: Absolute paths to delete (usually findings from a scan)
        excluded: Protected paths (defaults to the standard set)
        dry_run: If True, report what would be deleted without deleting

    Returns:
        List of DeleteOutcome in input order
    """
    if excluded is None:
        excluded = default_excluded_paths()

    return [remove_one(os.fspath(path), excluded, dry_run) for path in paths]
