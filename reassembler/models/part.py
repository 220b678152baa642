"""Part file and chunk set data models."""

from pathlib import Path

from pydantic import BaseModel, Field


class PartFile(BaseModel):
    """A single numbered slice of an original file."""

    path: Path
    index: int  # Parsed from the trailing ".part<N>"
    size_bytes: int = 0


class ChunkSet(BaseModel):
    """All parts needed to rebuild one original file.

    ``parts`` is kept in ascending numeric ``index`` order, which is the
    order the parts are concatenated in. Indices need not be contiguous
    or start at zero.
    """

    base_path: Path
    parts: list[PartFile] = Field(default_factory=list)

    @property
    def total_size(self) -> int:
        return sum(part.size_bytes for part in self.parts)

    @property
    def part_count(self) -> int:
        return len(self.parts)
