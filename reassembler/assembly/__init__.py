"""Chunk reassembly: discovery, joining and structure verification."""

from reassembler.assembly.discovery import (
    collect_parts,
    find_chunk_files,
    part_index,
    strip_part_suffix,
)
from reassembler.assembly.reassembler import ChunkReassembler
from reassembler.assembly.verification import StructureVerifier

__all__ = [
    "ChunkReassembler",
    "StructureVerifier",
    "collect_parts",
    "find_chunk_files",
    "part_index",
    "strip_part_suffix",
]
