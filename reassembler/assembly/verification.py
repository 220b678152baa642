"""Advisory check that a tree looks like a complete Unity WebGL build."""

import logging
from pathlib import Path

from reassembler.config import VerificationConfig
from reassembler.models.results import CategoryCount, StructureReport

logger = logging.getLogger(__name__)


class StructureVerifier:
    """Counts which expected output categories are present under a root.

    The configured glob patterns are matched anywhere in the tree; the
    entry point only counts when it sits directly in the root. The
    result is informational and never fails a run.
    """

    def __init__(self, config: VerificationConfig | None = None) -> None:
        self._config = config or VerificationConfig()

    def verify(self, root: str | Path) -> StructureReport:
        """Scan ``root`` and report how many categories are present.

        Args:
            root: Directory tree to inspect.

        Returns:
            StructureReport with one CategoryCount per category.
        """
        root_path = Path(root)
        logger.info("Verifying Unity WebGL file structure in %s", root_path)

        categories: list[CategoryCount] = []
        for name, pattern in self._config.patterns.items():
            count = sum(1 for p in root_path.rglob(pattern) if p.is_file())
            categories.append(CategoryCount(name=name, pattern=pattern, count=count))

        entry_point = self._config.entry_point
        categories.append(
            CategoryCount(
                name="entry_point",
                pattern=entry_point,
                count=1 if (root_path / entry_point).is_file() else 0,
            )
        )

        for category in categories:
            if category.present:
                logger.info("Found %d %s file(s)", category.count, category.pattern)
            else:
                logger.warning("No %s files found", category.pattern)

        report = StructureReport(
            categories=categories, min_categories=self._config.min_categories
        )
        logger.info("Unity WebGL files found: %d/%d", report.found, report.total)
        if report.complete:
            logger.info("Unity WebGL structure appears complete")
        else:
            logger.warning("Unity WebGL structure may be incomplete")
        return report
