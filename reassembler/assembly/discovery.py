"""Chunk file discovery and part collection."""

import glob
import logging
import re
from pathlib import Path

from reassembler.models.part import ChunkSet, PartFile
from reassembler.models.results import DiscoveryResult

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".data", ".wasm")

# Trailing ".part<N>"; N is a decimal of any width.
PART_SUFFIX = re.compile(r"\.part(\d+)$")

MATCH_SCOPES: tuple[str, ...] = ("path", "name")


def part_index(path: str | Path) -> int | None:
    """Return the numeric part suffix of ``path``, or None if it has none."""
    match = PART_SUFFIX.search(Path(path).name)
    if not match:
        return None
    return int(match.group(1))


def strip_part_suffix(path: str | Path) -> Path:
    """Derive the base path by dropping a trailing ``.part<digits>``."""
    path = Path(path)
    return path.with_name(PART_SUFFIX.sub("", path.name))


def find_chunk_files(
    root: str | Path, extensions: list[str] | tuple[str, ...] = DEFAULT_EXTENSIONS
) -> DiscoveryResult:
    """Recursively scan ``root`` for chunk files of the given extensions.

    A file counts as a chunk file when its name matches ``*<ext>.part*``.
    Names whose suffix is not numeric are still reported; they produce a
    base path that later collects no parts.

    Args:
        root: Directory to scan.
        extensions: Original-file extensions that may be chunked.

    Returns:
        DiscoveryResult with chunk files and distinct base paths, both sorted.
    """
    root_path = Path(root)
    found: set[Path] = set()
    for ext in extensions:
        for candidate in root_path.rglob(f"*{glob.escape(ext)}.part*"):
            if candidate.is_file():
                found.add(candidate)

    chunk_files = sorted(found, key=str)
    base_paths = sorted({strip_part_suffix(p) for p in chunk_files}, key=str)

    if chunk_files:
        logger.info("Found %d chunk file(s) under %s", len(chunk_files), root_path)
        for base in base_paths:
            logger.info("Base file to reassemble: %s", base)
    else:
        logger.info("No chunk files found under %s", root_path)

    return DiscoveryResult(root=root_path, chunk_files=chunk_files, base_paths=base_paths)


def collect_parts(
    root: str | Path, base_path: str | Path, scope: str = "path"
) -> ChunkSet:
    """Gather the parts of one base path, ordered by numeric suffix.

    With ``scope="path"`` only files next to ``base_path`` are considered.
    With ``scope="name"`` any file under ``root`` whose name is
    ``<basename>.part<N>`` is taken, regardless of its directory.

    Sizes are read here; their sum is what the rebuilt file must match.

    Args:
        root: Tree root, used for name-scoped matching.
        base_path: Path of the file to rebuild.
        scope: "path" or "name".

    Returns:
        ChunkSet with parts sorted by ascending index.

    Raises:
        ValueError: If scope is not a known match scope.
    """
    if scope not in MATCH_SCOPES:
        raise ValueError(
            f"Unknown match scope: '{scope}'. Supported: {', '.join(MATCH_SCOPES)}"
        )

    base = Path(base_path)
    pattern = f"{glob.escape(base.name)}.part*"

    if scope == "path":
        candidates = base.parent.glob(pattern)
    else:
        candidates = Path(root).rglob(pattern)

    parts: list[PartFile] = []
    for candidate in candidates:
        index = part_index(candidate)
        if index is None or strip_part_suffix(candidate).name != base.name:
            continue
        if not candidate.is_file():
            continue
        try:
            size = candidate.stat().st_size
        except OSError:
            logger.warning("Could not stat part %s", candidate)
            size = 0
        parts.append(PartFile(path=candidate, index=index, size_bytes=size))

    parts.sort(key=lambda p: (p.index, str(p.path)))
    return ChunkSet(base_path=base, parts=parts)
