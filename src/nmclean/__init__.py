"""nmclean - find and delete node_modules directories."""

__version__ = "0.1.0"

from nmclean.exclusions import ExcludedPaths, default_excluded_paths, is_excluded_path
from nmclean.formatting import format_bytes
from nmclean.models import DeleteOutcome, Finding, ScanResult
from nmclean.remover import remove
from nmclean.scanner import scan

__all__ = [
    "DeleteOutcome",
    "ExcludedPaths",
    "Finding",
    "ScanResult",
    "default_excluded_paths",
    "format_bytes",
    "is_excluded_path",
    "remove",
    "scan",
]
