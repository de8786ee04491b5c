"""Directory size aggregation for nmclean."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def _entry_size(entry: os.DirEntry) -> int:
    """Size of a non-directory entry, 0 if it cannot be stat-ed."""
    try:
        return entry.stat(follow_symlinks=False).st_size
    except OSError as e:
        logger.debug("Skipping %s: %s", entry.path, e)
        return 0


def get_directory_size(path: str | os.PathLike) -> int:
    """
    Calculate the total size of a directory tree in bytes.

    Walks with os.scandir and an explicit stack, so arbitrarily deep trees
    do not hit the recursion limit. Symlinks are counted by their own size
    and never followed. Anything that cannot be listed or stat-ed counts as
    zero and the walk carries on with its siblings.

    Args:
        path: Directory to measure

    Returns:
        Total size in bytes (0 if the path cannot be listed)
    """
    total_size = 0
    pending = [Path(path)]

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            pending.append(Path(entry.path))
                            continue
                    except OSError as e:
                        logger.debug("Skipping %s: %s", entry.path, e)
                        continue
                    total_size += _entry_size(entry)
        except OSError as e:
            logger.debug("Cannot list %s: %s", current, e)
            continue

    return total_size
