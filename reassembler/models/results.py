"""Result models produced by discovery, reassembly and verification."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class DiscoveryResult(BaseModel):
    """Chunk files found under a root directory.

    ``base_paths`` holds the distinct files to rebuild, sorted
    lexicographically, which is also the order they are processed in.
    """

    root: Path
    chunk_files: list[Path] = Field(default_factory=list)
    base_paths: list[Path] = Field(default_factory=list)

    @property
    def chunks_found(self) -> bool:
        return bool(self.chunk_files)

    @property
    def chunk_count(self) -> int:
        return len(self.chunk_files)


class ReassemblyStatus(str, Enum):
    """Terminal state of one base path."""

    REASSEMBLED = "reassembled"
    SKIPPED = "skipped"  # No parts collected
    INVALID = "invalid"  # A part was missing or unreadable
    CONCAT_FAILED = "concat_failed"
    SIZE_MISMATCH = "size_mismatch"
    CHECKSUM_MISMATCH = "checksum_mismatch"


class ReassemblyOutcome(BaseModel):
    """What happened to a single base path."""

    base_path: Path
    status: ReassemblyStatus
    part_count: int = 0
    expected_size: int = 0
    actual_size: int = 0
    removed_parts: list[Path] = Field(default_factory=list)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ReassemblyStatus.REASSEMBLED


class RunSummary(BaseModel):
    """Run-wide totals, folded over the per-base-path outcomes.

    Instances are never mutated: ``record`` returns a new summary.
    """

    chunks_found: bool = False
    chunk_count: int = 0
    files_reassembled: int = 0
    total_bytes: int = 0
    outcomes: list[ReassemblyOutcome] = Field(default_factory=list)

    @classmethod
    def from_discovery(cls, discovery: DiscoveryResult) -> RunSummary:
        return cls(chunks_found=discovery.chunks_found, chunk_count=discovery.chunk_count)

    def record(self, outcome: ReassemblyOutcome) -> RunSummary:
        """Return a new summary that includes ``outcome``."""
        update: dict[str, object] = {"outcomes": [*self.outcomes, outcome]}
        if outcome.ok:
            update["files_reassembled"] = self.files_reassembled + 1
            update["total_bytes"] = self.total_bytes + outcome.actual_size
        return self.model_copy(update=update)

    @property
    def failed(self) -> list[ReassemblyOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def succeeded(self) -> bool:
        """False only when chunks were found but nothing was rebuilt."""
        return not self.chunks_found or self.files_reassembled > 0


class CategoryCount(BaseModel):
    """Matches for one expected output category."""

    name: str
    pattern: str
    count: int = 0

    @property
    def present(self) -> bool:
        return self.count > 0


class StructureReport(BaseModel):
    """Outcome of the advisory structure check."""

    categories: list[CategoryCount] = Field(default_factory=list)
    min_categories: int = 3

    @property
    def found(self) -> int:
        return sum(1 for c in self.categories if c.present)

    @property
    def total(self) -> int:
        return len(self.categories)

    @property
    def complete(self) -> bool:
        return self.found >= self.min_categories
