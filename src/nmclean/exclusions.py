"""Path classification rules for nmclean.

Decides which paths are off-limits for scanning and deletion, which
directory names are scan targets, and which names are never worth
descending into.
"""

import os
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

# Directory name the scanner looks for
TARGET_NAME = "node_modules"

# OS bookkeeping directories that never hold projects
NOISE_DIRECTORIES = frozenset(
    {
        "System Volume Information",
        "$Recycle.Bin",
    }
)

# Case-insensitive name fragments that mark OS/program install trees
NOISE_FRAGMENTS = ("windows", "program files")

_SEPARATORS = re.compile(r"[\\/]+")


def normalize_path(path: str | os.PathLike) -> str:
    """
    Normalize a path for case-insensitive containment checks.

    Both separator styles fold to "/", runs of separators collapse and a
    trailing separator is dropped. The result is lower-cased.

    Args:
        path: Path to normalize

    Returns:
        Normalized, lower-cased path string
    """
    text = _SEPARATORS.sub("/", os.fsdecode(path))
    if len(text) > 1:
        text = text.rstrip("/")
    return text.lower()


@dataclass(frozen=True, slots=True)
class ExcludedPaths:
    """Immutable, ordered set of protected path prefixes.

    Attributes:
        entries: Absolute paths in the order they were configured.
    """

    entries: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Empty entries would match every path
        cleaned = tuple(str(entry) for entry in self.entries if str(entry).strip())
        object.__setattr__(self, "entries", cleaned)

    def is_excluded(self, path: str | os.PathLike) -> bool:
        """
        Check whether a path falls under any protected entry.

        Matching is case-insensitive substring containment on the
        normalized forms, so a path anywhere under (or merely mentioning)
        a protected location is excluded.

        Args:
            path: Path to check

        Returns:
            True if the path must not be scanned or deleted
        """
        try:
            candidate = normalize_path(path)
        except (TypeError, ValueError):
            return False
        return any(normalize_path(entry) in candidate for entry in self.entries)

    def with_extra(self, extra: Iterable[str]) -> "ExcludedPaths":
        """Return a new set with ``extra`` entries appended."""
        additions = [
            os.path.abspath(os.path.expanduser(entry)) for entry in extra if entry.strip()
        ]
        return ExcludedPaths(self.entries + tuple(additions))

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def default_excluded_paths(
    env: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> ExcludedPaths:
    """
    Build the default exclusion set.

    Covers editor and package-manager caches under the home directory
    plus Windows program and system directories. Unset or empty
    environment variables fall back to the standard install locations.

    Args:
        env: Environment mapping (defaults to os.environ)
        home: Home directory (defaults to Path.home())

    Returns:
        ExcludedPaths in their fixed order
    """
    env = os.environ if env is None else env
    home_dir = str(home if home is not None else Path.home())

    return ExcludedPaths(
        (
            os.path.join(home_dir, ".vscode"),
            os.path.join(home_dir, "AppData"),
            env.get("PROGRAMFILES") or "C:\\Program Files",
            env.get("PROGRAMFILES(X86)") or "C:\\Program Files (x86)",
            "C:\\Windows",
            "C:\\System32",
            os.path.join(home_dir, ".npm"),
            os.path.join(home_dir, ".node-gyp"),
            os.path.join(home_dir, ".cache"),
        )
    )


def is_excluded_path(path: str | os.PathLike, excluded: ExcludedPaths | None = None) -> bool:
    """Check a path against ``excluded``, or the default set when omitted."""
    if excluded is None:
        excluded = default_excluded_paths()
    return excluded.is_excluded(path)


def is_target_name(name: str, target: str = TARGET_NAME) -> bool:
    """Exact, case-sensitive match on the target directory name."""
    return name == target


def is_noise_directory(name: str) -> bool:
    """Check for recycle-bin, volume metadata and OS/program install directories."""
    if name in NOISE_DIRECTORIES:
        return True
    lowered = name.lower()
    return any(fragment in lowered for fragment in NOISE_FRAGMENTS)


def should_descend(name: str, target: str = TARGET_NAME) -> bool:
    """
    Decide whether the scanner should walk into a directory.

    Hidden directories, the target itself and noise directories are
    skipped.

    Args:
        name: Directory name (not a full path)
        target: Target directory name

    Returns:
        True if the directory should be scanned
    """
    if name.startswith("."):
        return False
    if name == target:
        return False
    return not is_noise_directory(name)
