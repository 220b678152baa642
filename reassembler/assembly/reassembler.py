"""Rebuilds original files from their numbered chunk parts."""

import hashlib
import logging
import os
import shutil
import tempfile
from pathlib import Path

from reassembler.assembly.discovery import collect_parts, find_chunk_files
from reassembler.config import ReassemblyConfig
from reassembler.models.part import ChunkSet, PartFile
from reassembler.models.results import (
    DiscoveryResult,
    ReassemblyOutcome,
    ReassemblyStatus,
    RunSummary,
)
from reassembler.reporting import format_size

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 1024 * 1024


class ChunkReassembler:
    """Reassembles every chunked file under a directory tree.

    Each base path is handled on its own: a failure leaves that base
    path's parts on disk and the run moves on to the next one. Only a
    run that found chunks but rebuilt nothing is reported as failed.

    Args:
        config: ReassemblyConfig with extensions, match_scope,
                temp_suffix and verify_checksum settings.
    """

    def __init__(self, config: ReassemblyConfig | None = None) -> None:
        self._config = config or ReassemblyConfig()

    def discover(self, root: str | Path) -> DiscoveryResult:
        return find_chunk_files(root, self._config.extensions)

    def run(self, root: str | Path, discovery: DiscoveryResult | None = None) -> RunSummary:
        """Reassemble all chunk sets under ``root``.

        Args:
            root: Directory tree to process.
            discovery: Pre-computed discovery result. Scanned if None.

        Returns:
            RunSummary folded over every processed base path.
        """
        if discovery is None:
            discovery = self.discover(root)

        summary = RunSummary.from_discovery(discovery)
        if not discovery.chunks_found:
            return summary

        logger.info("Starting chunk reassembly: %d chunk file(s)", discovery.chunk_count)
        for base_path in discovery.base_paths:
            chunk_set = collect_parts(root, base_path, self._config.match_scope)
            summary = summary.record(self.reassemble(chunk_set))

        self._log_summary(summary)
        return summary

    def reassemble(self, chunk_set: ChunkSet) -> ReassemblyOutcome:
        """Concatenate one chunk set into its base path and drop the parts.

        The output is written to a freshly created temporary sibling first and only moved
        onto the base path once its size (and checksum, if enabled) match.

        Args:
            chunk_set: Parts to join, already in concatenation order.

        Returns:
            ReassemblyOutcome describing what happened.
        """
        base_path = chunk_set.base_path
        logger.info("Processing: %s", base_path)

        if not chunk_set.parts:
            logger.warning("No parts found for %s", base_path)
            return ReassemblyOutcome(
                base_path=base_path,
                status=ReassemblyStatus.SKIPPED,
                message="no parts found",
            )

        logger.info("Found %d part(s) for %s:", chunk_set.part_count, base_path.name)
        for part in chunk_set.parts:
            logger.info("  - %s", part.path)

        unreadable = self._find_unreadable(chunk_set.parts)
        if unreadable is not None:
            logger.error("Part not accessible: %s", unreadable)
            logger.error("Skipping %s due to missing/invalid parts", base_path)
            return ReassemblyOutcome(
                base_path=base_path,
                status=ReassemblyStatus.INVALID,
                part_count=chunk_set.part_count,
                expected_size=chunk_set.total_size,
                message=f"part not accessible: {unreadable}",
            )

        expected = chunk_set.total_size
        logger.info("Total size of parts: %s", format_size(expected))

        logger.info("Reassembling %s", base_path)
        try:
            tmp_path, source_digest = self._concatenate(chunk_set.parts, base_path)
        except OSError as exc:
            logger.exception("Failed to concatenate parts for %s", base_path)
            return ReassemblyOutcome(
                base_path=base_path,
                status=ReassemblyStatus.CONCAT_FAILED,
                part_count=chunk_set.part_count,
                expected_size=expected,
                message=str(exc),
            )

        actual = self._size_of(tmp_path)
        if actual != expected:
            logger.error(
                "Size mismatch for %s (expected: %d, got: %d)", base_path, expected, actual
            )
            self._discard(tmp_path)
            return ReassemblyOutcome(
                base_path=base_path,
                status=ReassemblyStatus.SIZE_MISMATCH,
                part_count=chunk_set.part_count,
                expected_size=expected,
                actual_size=actual,
                message=f"expected {expected} bytes, got {actual}",
            )

        if source_digest is not None and source_digest != self._digest_of(tmp_path):
            logger.error("Checksum mismatch for %s", base_path)
            self._discard(tmp_path)
            return ReassemblyOutcome(
                base_path=base_path,
                status=ReassemblyStatus.CHECKSUM_MISMATCH,
                part_count=chunk_set.part_count,
                expected_size=expected,
                actual_size=actual,
                message="sha256 of output differs from parts",
            )

        try:
            os.replace(tmp_path, base_path)
        except OSError as exc:
            logger.exception("Failed to move %s into place", tmp_path)
            self._discard(tmp_path)
            return ReassemblyOutcome(
                base_path=base_path,
                status=ReassemblyStatus.CONCAT_FAILED,
                part_count=chunk_set.part_count,
                expected_size=expected,
                actual_size=actual,
                message=str(exc),
            )

        logger.info("Successfully reassembled %s (%s)", base_path, format_size(actual))
        removed = self._remove_parts(chunk_set.parts)

        return ReassemblyOutcome(
            base_path=base_path,
            status=ReassemblyStatus.REASSEMBLED,
            part_count=chunk_set.part_count,
            expected_size=expected,
            actual_size=actual,
            removed_parts=removed,
        )

    def _find_unreadable(self, parts: list[PartFile]) -> Path | None:
        """Return the first part that is not a readable regular file."""
        for part in parts:
            if not part.path.is_file() or not os.access(part.path, os.R_OK):
                return part.path
        return None

    def _concatenate(self, parts: list[PartFile], base_path: Path) -> tuple[Path, str | None]:
        """Write ``parts`` back to back into a new temporary file next to ``base_path``.

        The temporary file gets a unique name, so no existing file is
        reused. It takes the permission bits of the first part. On failure
        it is removed before the error propagates.

        Returns:
            Path of the temporary file, and the hex SHA-256 of the bytes read
            when checksums are enabled (else None).
        """
        digest = hashlib.sha256() if self._config.verify_checksum else None
        with tempfile.NamedTemporaryFile(
            dir=base_path.parent,
            prefix=f"{base_path.name}.",
            suffix=self._config.temp_suffix,
            delete=False,
        ) as out:
            tmp_path = Path(out.name)
            try:
                for part in parts:
                    with open(part.path, "rb") as src:
                        if digest is None:
                            shutil.copyfileobj(src, out, COPY_BUFFER_SIZE)
                            continue
                        for block in iter(lambda: src.read(COPY_BUFFER_SIZE), b""):
                            digest.update(block)
                            out.write(block)
                out.flush()
                shutil.copymode(parts[0].path, tmp_path)
            except OSError:
                out.close()
                self._discard(tmp_path)
                raise
        return tmp_path, digest.hexdigest() if digest is not None else None

    def _digest_of(self, path: Path) -> str:
        digest = hashlib.sha256()
        with open(path, "rb") as f:
            for block in iter(lambda: f.read(COPY_BUFFER_SIZE), b""):
                digest.update(block)
        return digest.hexdigest()

    def _size_of(self, path: Path) -> int:
        try:
            return path.stat().st_size
        except OSError:
            return 0

    def _discard(self, tmp_path: Path) -> None:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            logger.exception("Failed to remove temporary file %s", tmp_path)

    def _remove_parts(self, parts: list[PartFile]) -> list[Path]:
        """Delete consumed parts. A part that cannot be deleted is only logged."""
        removed: list[Path] = []
        for part in parts:
            try:
                part.path.unlink()
            except OSError:
                logger.exception("Failed to remove chunk %s", part.path)
                continue
            removed.append(part.path)
            logger.info("Removed chunk: %s", part.path.name)
        return removed

    def _log_summary(self, summary: RunSummary) -> None:
        logger.info("Reassembly summary:")
        logger.info("   Files reassembled: %d", summary.files_reassembled)
        logger.info("   Total size: %s", format_size(summary.total_bytes))
        for outcome in summary.failed:
            logger.warning(
                "   Not reassembled: %s (%s)", outcome.base_path, outcome.status.value
            )
        if not summary.succeeded:
            logger.error("No files were reassembled - check logs for errors")
