"""Data models for the chunk reassembler."""

from reassembler.models.part import ChunkSet, PartFile
from reassembler.models.results import (
    CategoryCount,
    DiscoveryResult,
    ReassemblyOutcome,
    ReassemblyStatus,
    RunSummary,
    StructureReport,
)

__all__ = [
    "CategoryCount",
    "ChunkSet",
    "DiscoveryResult",
    "PartFile",
    "ReassemblyOutcome",
    "ReassemblyStatus",
    "RunSummary",
    "StructureReport",
]
