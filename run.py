"""Entry point for the chunk reassembler."""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from reassembler.assembly import ChunkReassembler, StructureVerifier
from reassembler.config import LOG_LEVELS, load_config
from reassembler.reporting import write_step_outputs

logger = logging.getLogger("reassembler")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BAD_ROOT = 2
EXIT_BAD_CONFIG = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reassemble chunked Unity WebGL files (*.data.partN, *.wasm.partN)."
    )
    parser.add_argument("root", nargs="?", default=".", help="Tree to process (default: .)")
    parser.add_argument("--config", default="config.yaml", help="Path to config YAML.")
    parser.add_argument(
        "--match-scope",
        choices=["path", "name"],
        default=None,
        help="Match parts next to their base file (path) or by file name anywhere (name).",
    )
    parser.add_argument(
        "--verify-checksum",
        action="store_true",
        help="Also compare SHA-256 of the parts with the rebuilt file.",
    )
    parser.add_argument(
        "--check-only",
        action="store_true",
        help="Only report whether chunk files exist; do not reassemble.",
    )
    parser.add_argument(
        "--skip-structure-check",
        action="store_true",
        help="Skip the advisory Unity WebGL structure check.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Override the configured log level.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Discover and reassemble chunks, then run the structure check.

    Returns:
        Process exit status: 0 on success, 1 when chunks were found but
        none could be reassembled, 2 when the root is not a directory, 3 when
        the configuration is invalid.
    """
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
    except ValidationError as exc:
        logging.basicConfig()
        logger.error("Invalid configuration in %s or environment:\n%s", args.config, exc)
        return EXIT_BAD_CONFIG

    if args.match_scope:
        config.reassembly.match_scope = args.match_scope
    if args.verify_checksum:
        config.reassembly.verify_checksum = True
    if args.log_level:
        config.logging.level = args.log_level

    logging.basicConfig(level=config.logging.level, format=config.logging.format)

    root = Path(args.root)
    if not root.is_dir():
        logger.error("Not a directory: %s", root)
        return EXIT_BAD_ROOT

    reassembler = ChunkReassembler(config.reassembly)
    discovery = reassembler.discover(root)
    write_step_outputs(config.github_output, discovery)

    if args.check_only:
        return EXIT_OK

    summary = reassembler.run(root, discovery=discovery)

    if config.verification.enabled and not args.skip_structure_check:
        StructureVerifier(config.verification).verify(root)

    return EXIT_OK if summary.succeeded else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
