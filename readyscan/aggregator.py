"""Merge detector output into one issue corpus and a per-file risk ranking."""

from dataclasses import dataclass
from pathlib import Path

from readyscan.models import CATEGORY_ORDER, Category, DetectorResult, FileEntry, Issue, Severity, severity_rank
from readyscan.walker import SKIP_DIRS, count_files


@dataclass
class Aggregation:
    total_files: int
    all_issues: list[Issue]
    file_breakdown: list[FileEntry]
    categories: dict[Category, DetectorResult]


def risk_level(issues: list[Issue]) -> Severity:
    """Highest severity among ``issues``; unknown severities count as LOW."""
    level = Severity.LOW
    for issue in issues:
        if isinstance(issue.severity, Severity) and issue.severity > level:
            level = issue.severity
    return level


def build_file_breakdown(all_issues: list[Issue]) -> list[FileEntry]:
    """Group issues by file, riskiest files first.

    Files keep their first-seen order within a risk level.
    """
    entries: dict[str, FileEntry] = {}
    for issue in all_issues:
        entry = entries.get(issue.file)
        if entry is None:
            entry = entries[issue.file] = FileEntry(file=issue.file)
        entry.issues.append(issue)

    for entry in entries.values():
        entry.risk_level = risk_level(entry.issues)

    return sorted(entries.values(), key=lambda e: severity_rank(e.risk_level), reverse=True)


def aggregate(
    secrets: DetectorResult,
    dependencies: DetectorResult,
    pii: DetectorResult,
    prompt_injection: DetectorResult,
    root: str,
    skip_dirs: frozenset[str] = SKIP_DIRS,
) -> Aggregation:
    categories = dict(zip(CATEGORY_ORDER, (secrets, dependencies, pii, prompt_injection)))
    all_issues: list[Issue] = []
    for category in CATEGORY_ORDER:
        all_issues.extend(categories[category].issues)

    return Aggregation(
        total_files=count_files(Path(root), skip_dirs),
        all_issues=all_issues,
        file_breakdown=build_file_breakdown(all_issues),
        categories=categories,
    )
