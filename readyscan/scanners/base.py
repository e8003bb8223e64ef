"""Abstract base scanner and the shared line-matching loop."""

import time
from abc import ABC, abstractmethod
from collections.abc import Sequence

from readyscan.models import Category, DetectorResult, Issue, Rule, make_snippet
from readyscan.walker import SKIP_DIRS


class BaseScanner(ABC):
    name: str = "base"
    category: Category

    def __init__(self, skip_dirs: frozenset[str] = SKIP_DIRS):
        self.skip_dirs = skip_dirs

    @abstractmethod
    def scan(self, target: str) -> DetectorResult:
        ...

    def _timed_scan(self, target: str) -> DetectorResult:
        start = time.monotonic()
        result = self.scan(target)
        result.duration_seconds = round(time.monotonic() - start, 3)
        return result


def match_lines(
    lines: Sequence[str],
    rules: Sequence[Rule],
    relpath: str,
    every_match: bool = False,
) -> list[Issue]:
    """Apply ``rules`` to each line in order.

    By default a rule yields at most one issue per line. With ``every_match``
    each occurrence on the line becomes its own issue, so two tokens on one
    line count twice.
    """
    issues: list[Issue] = []
    for line_num, line in enumerate(lines, start=1):
        for rule in rules:
            if every_match:
                hits = sum(1 for _ in rule.pattern.finditer(line))
            else:
                hits = 1 if rule.pattern.search(line) else 0
            if hits:
                snippet = make_snippet(line)
                issues.extend(Issue.from_rule(rule, relpath, line_num, snippet) for _ in range(hits))
    return issues
