"""AI prompt-injection vulnerability scanner."""

from collections.abc import Sequence
from pathlib import Path

from readyscan.models import Category, DetectorResult, Rule
from readyscan.rules.prompt_injection import INJECTION_EXTENSIONS, INJECTION_RULES
from readyscan.scanners.base import BaseScanner, match_lines
from readyscan.walker import SKIP_DIRS, extension_filter, read_lines, relative_path, walk_files


class PromptInjectionScanner(BaseScanner):
    name = "prompt-injection"
    category = Category.PROMPT_INJECTION

    def __init__(self, rules: Sequence[Rule] = INJECTION_RULES, skip_dirs: frozenset[str] = SKIP_DIRS):
        super().__init__(skip_dirs)
        self.rules = tuple(rules)

    def scan(self, target: str) -> DetectorResult:
        result = DetectorResult(category=self.category, target=target)
        root = Path(target)
        if not root.exists():
            return result

        for filepath in walk_files(root, extension_filter(INJECTION_EXTENSIONS), self.skip_dirs):
            lines = read_lines(filepath)
            if lines is None:
                continue
            result.issues.extend(match_lines(lines, self.rules, relative_path(filepath, root)))

        return result
