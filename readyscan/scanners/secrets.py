"""Secret and credential detection scanner."""

import logging
from collections.abc import Sequence
from pathlib import Path

from readyscan.models import Category, DetectorResult, Rule
from readyscan.rules.secrets import SECRET_EXTENSIONS, SECRET_RULES
from readyscan.scanners.base import BaseScanner, match_lines
from readyscan.walker import SKIP_DIRS, SKIP_SUFFIXES, extension_filter, read_lines, relative_path, walk_files

logger = logging.getLogger(__name__)


class SecretScanner(BaseScanner):
    """Reports every credential occurrence, including repeats on one line."""

    name = "secrets"
    category = Category.SECRETS

    def __init__(self, rules: Sequence[Rule] = SECRET_RULES, skip_dirs: frozenset[str] = SKIP_DIRS):
        super().__init__(skip_dirs)
        self.rules = tuple(rules)

    def scan(self, target: str) -> DetectorResult:
        result = DetectorResult(category=self.category, target=target)
        root = Path(target)
        if not root.exists():
            return result

        accept = extension_filter(SECRET_EXTENSIONS, env_files=True, skip_suffixes=SKIP_SUFFIXES)
        for filepath in walk_files(root, accept, self.skip_dirs):
            self._scan_file(filepath, root, result)

        logger.debug("Secret scan of %s found %d issue(s)", target, result.count)
        return result

    def _scan_file(self, filepath: Path, root: Path, result: DetectorResult) -> None:
        lines = read_lines(filepath)
        if lines is None:
            return
        result.issues.extend(
            match_lines(lines, self.rules, relative_path(filepath, root), every_match=True)
        )
