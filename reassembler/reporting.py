"""Human-readable sizes and CI step outputs."""

import logging
from pathlib import Path

from reassembler.models.results import DiscoveryResult

logger = logging.getLogger(__name__)


def format_size(size_bytes: int) -> str:
    """Format a byte count as megabytes with two decimals, e.g. "1.50 MB"."""
    return f"{size_bytes / 1024 / 1024:.2f} MB"


def write_step_outputs(output_path: str | Path | None, discovery: DiscoveryResult) -> bool:
    """Append discovery results to a CI step-output file.

    Writes ``chunks_found=<true|false>`` and, when chunks were found,
    ``chunk_count=<n>``.

    Args:
        output_path: Step-output file (``$GITHUB_OUTPUT``). None disables output.
        discovery: Result of chunk discovery.

    Returns:
        True if the outputs were written.
    """
    if not output_path:
        return False

    lines = [f"chunks_found={'true' if discovery.chunks_found else 'false'}"]
    if discovery.chunks_found:
        lines.append(f"chunk_count={discovery.chunk_count}")

    with open(output_path, "a", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")

    logger.debug("Wrote step outputs to %s", output_path)
    return True
