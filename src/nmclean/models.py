"""Data models for nmclean."""

from pydantic import BaseModel, ConfigDict, Field, computed_field

from nmclean.formatting import format_bytes


class Finding(BaseModel):
    """A matched node_modules directory and its size."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute path of the matched directory")
    size: int = Field(..., ge=0, description="Total size in bytes")
    parent_project: str = Field(..., description="Directory that contains the match")

    @computed_field
    @property
    def size_formatted(self) -> str:
        """Human-readable size (binary units)."""
        return format_bytes(self.size)

    def to_envelope(self) -> dict:
        """Render with camelCase keys for JSON clients."""
        return {
            "path": self.path,
            "size": self.size,
            "sizeFormatted": self.size_formatted,
            "parentProject": self.parent_project,
        }


class ScanResult(BaseModel):
    """Result of scanning one root."""

    model_config = ConfigDict(frozen=True)

    scanned_root: str = Field(..., description="Root path that was scanned")
    findings: tuple[Finding, ...] = Field(
        default=(), description="Matches in discovery order"
    )

    @computed_field
    @property
    def total_size(self) -> int:
        """Sum of all finding sizes in bytes."""
        return sum(f.size for f in self.findings)

    @computed_field
    @property
    def total_size_formatted(self) -> str:
        """Human-readable total size."""
        return format_bytes(self.total_size)

    @property
    def count(self) -> int:
        """Number of findings."""
        return len(self.findings)

    def largest(self, limit: int | None = None) -> list[Finding]:
        """Findings sorted by size, largest first."""
        ordered = sorted(self.findings, key=lambda f: f.size, reverse=True)
        return ordered if limit is None else ordered[:limit]

    def to_envelope(self) -> dict:
        """Render the scan response envelope."""
        return {
            "success": True,
            "directories": [f.to_envelope() for f in self.findings],
            "totalSize": self.total_size_formatted,
            "count": self.count,
            "scannedPath": self.scanned_root,
        }


class DeleteOutcome(BaseModel):
    """Result of deleting a single path."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path that was requested")
    success: bool = Field(..., description="Whether the path was removed")
    message: str = Field(..., description="Human-readable reason")
    bytes_freed: int = Field(0, ge=0, description="Bytes freed (measured before deletion)")
    dry_run: bool = Field(False, description="Whether this was a dry run")

    def to_envelope(self) -> dict:
        """Render for JSON clients."""
        return {"path": self.path, "success": self.success, "message": self.message}


def delete_envelope(outcomes: list[DeleteOutcome]) -> dict:
    """Render the delete response envelope."""
    return {"success": True, "results": [o.to_envelope() for o in outcomes]}
