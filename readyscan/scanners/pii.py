"""PII exposure and GDPR / SOC 2 compliance scanner."""

import logging
from collections.abc import Sequence
from pathlib import Path

from readyscan.models import Category, DetectorResult, Issue, PresenceRule, Rule
from readyscan.rules.pii import PII_EXTENSIONS, PII_PRESENCE_RULES, PII_RULES, PRESENCE_DOC_EXTENSIONS
from readyscan.scanners.base import BaseScanner, match_lines
from readyscan.walker import SKIP_DIRS, extension_filter, read_lines, relative_path, walk_files

logger = logging.getLogger(__name__)


class _PresenceState:
    """Tracks, across all scanned lines, whether a presence check triggered or passed."""

    def __init__(self, rule: PresenceRule, root: Path):
        self.rule = rule
        self.triggered = any((root / name).exists() for name in rule.trigger_files)
        self.satisfied = any((root / name).exists() for name in rule.satisfied_by_files)

    def observe(self, lines: Sequence[str], can_trigger: bool = True) -> None:
        rule = self.rule
        for line in lines:
            if self.satisfied or (self.triggered and rule.satisfied_by is None):
                return
            if can_trigger and not self.triggered and rule.trigger is not None and rule.trigger.search(line):
                self.triggered = True
            if not self.satisfied and rule.satisfied_by is not None and rule.satisfied_by.search(line):
                self.satisfied = True

    def issue(self) -> Issue | None:
        if self.triggered and not self.satisfied:
            return Issue.from_rule(self.rule, self.rule.file, None, self.rule.snippet)
        return None


class PIIScanner(BaseScanner):
    name = "pii"
    category = Category.PII

    def __init__(
        self,
        rules: Sequence[Rule] = PII_RULES,
        presence_rules: Sequence[PresenceRule] = PII_PRESENCE_RULES,
        skip_dirs: frozenset[str] = SKIP_DIRS,
    ):
        super().__init__(skip_dirs)
        self.rules = tuple(rules)
        self.presence_rules = tuple(presence_rules)

    def scan(self, target: str) -> DetectorResult:
        result = DetectorResult(category=self.category, target=target)
        root = Path(target)
        if not root.exists():
            return result

        presence = [_PresenceState(rule, root) for rule in self.presence_rules]

        accept = extension_filter(PII_EXTENSIONS | PRESENCE_DOC_EXTENSIONS)
        for filepath in walk_files(root, accept, self.skip_dirs):
            lines = read_lines(filepath)
            if lines is None:
                continue
            is_doc = filepath.suffix in PRESENCE_DOC_EXTENSIONS
            if not is_doc:
                result.issues.extend(match_lines(lines, self.rules, relative_path(filepath, root)))
            for state in presence:
                state.observe(lines, can_trigger=not is_doc)

        # Scan-wide checks: at most one issue each, after every file was seen.
        for state in presence:
            issue = state.issue()
            if issue is not None:
                logger.debug("Presence check failed: %s", state.rule.name)
                result.issues.append(issue)

        return result
