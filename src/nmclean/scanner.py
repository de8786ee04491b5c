"""Depth-bounded discovery of node_modules directories.

The walk starts at a root, prunes excluded, hidden and OS bookkeeping
directories, and treats each matched node_modules directory as a leaf.
Matches are then sized and collected into a ScanResult.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Generator

from nmclean.exclusions import (
    TARGET_NAME,
    ExcludedPaths,
    default_excluded_paths,
    is_target_name,
    should_descend,
)
from nmclean.models import Finding, ScanResult
from nmclean.sizer import get_directory_size

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 3


def resolve_root(root: str | os.PathLike) -> Path:
    """Expand ~ and make ``root`` absolute against the current directory."""
    return Path(os.path.abspath(os.path.expanduser(os.fspath(root))))


def iter_target_directories(
    root: Path,
    excluded: ExcludedPaths,
    max_depth: int = DEFAULT_MAX_DEPTH,
    target: str = TARGET_NAME,
    depth: int = 0,
) -> Generator[tuple[Path, Path], None, None]:
    """
    Find target directories beneath ``root``.

    Directory listings are sorted by name so discovery order is stable.
    Symlinks are never followed, and a matched directory is not descended
    into.

    Args:
        root: Directory to scan
        excluded: Protected paths that are neither scanned nor matched
        max_depth: Deepest level (root is 0) whose entries are listed
        target: Directory name to match
        depth: Current depth (internal)

    Yields:
        (match, parent) pairs, where parent is the directory being scanned
    """
    if depth > max_depth or excluded.is_excluded(root):
        return

    try:
        if not root.is_dir():
            return
        logger.debug("Scanning depth %d: %s", depth, root)
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.debug("Skipping %s: %s", root, e)
        return

    for entry in entries:
        try:
            if not entry.is_dir(follow_symlinks=False):
                continue
        except OSError as e:
            logger.debug("Skipping %s: %s", entry.path, e)
            continue

        entry_path = Path(entry.path)

        if is_target_name(entry.name, target) and not excluded.is_excluded(entry_path):
            logger.debug("Found %s: %s", target, entry_path)
            yield entry_path, root
        elif should_descend(entry.name, target):
            yield from iter_target_directories(
                entry_path,
                excluded,
                max_depth,
                target,
                depth + 1,
            )


def scan(
    root: str | os.PathLike,
    max_depth: int = DEFAULT_MAX_DEPTH,
    excluded: ExcludedPaths | None = None,
    *,
    target: str = TARGET_NAME,
    workers: int = 1,
    progress_callback: Callable[[str, int], None] | None = None,
) -> ScanResult:
    """
    Scan ``root`` for target directories and measure them.

    A missing or non-directory root yields an empty result rather than an
    error; callers wanting to report "not found" should check first.

    Args:
        root: Directory to scan (relative paths resolve against the cwd)
        max_depth: Maximum walk depth (default: 3)
        excluded: Protected paths (defaults to the standard set)
        target: Directory name to match
        workers: Threads used for sizing matches (1 = sequential)
        progress_callback: Optional callback(path, size_bytes) per finding

    Returns:
        ScanResult with findings in discovery order
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")
    if excluded is None:
        excluded = default_excluded_paths()

    root_path = resolve_root(root)
    logger.info("Starting scan from: %s", root_path)

    matches: list[tuple[Path, Path]] = []
    seen_paths: set[str] = set()
    for match, parent in iter_target_directories(root_path, excluded, max_depth, target):
        key = str(match)
        if key in seen_paths:
            continue
        seen_paths.add(key)
        matches.append((match, parent))

    paths = [match for match, _ in matches]
    if workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            sizes = list(executor.map(get_directory_size, paths))
    else:
        sizes = [get_directory_size(p) for p in paths]

    findings = []
    for (match, parent), size in zip(matches, sizes):
        findings.append(Finding(path=str(match), size=size, parent_project=str(parent)))
        if progress_callback:
            progress_callback(str(match), size)

    result = ScanResult(scanned_root=str(root_path), findings=tuple(findings))
    logger.info(
        "Scan completed. Found %d %s directories (%s)",
        result.count,
        target,
        result.total_size_formatted,
    )
    return result
