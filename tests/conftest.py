"""Shared fixtures for readyscan tests."""

import textwrap
from pathlib import Path

import pytest

from readyscan.aggregator import build_file_breakdown
from readyscan.models import CATEGORY_ORDER, Category, DetectorResult, Issue, ScanReport, Severity
from readyscan.scoring import calculate_score


@pytest.fixture
def tmp_dir_with_files(tmp_path: Path):
    """Create a temp directory with multiple files."""

    def _create(files: dict[str, str]) -> Path:
        for name, content in files.items():
            p = tmp_path / name
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(textwrap.dedent(content))
        return tmp_path

    return _create


@pytest.fixture
def make_issue():
    """Build an Issue with sensible defaults."""

    def _make(
        severity=Severity.HIGH,
        name="Test issue",
        file="app.py",
        line=1,
        category=Category.SECRETS,
    ) -> Issue:
        return Issue(
            type="secret",
            category=category,
            name=name,
            severity=severity,
            file=file,
            line=line,
            snippet="x = 1",
            remediation="Fix it",
            persona=("dev",),
        )

    return _make


@pytest.fixture
def report_for():
    """Build a ScanReport around a fixed list of issues."""

    def _build(issues: list[Issue], target: str = ".") -> ScanReport:
        categories = {c: DetectorResult(category=c, target=target) for c in CATEGORY_ORDER}
        for issue in issues:
            categories[issue.category].issues.append(issue)
        return ScanReport(
            target=target,
            total_files=len({i.file for i in issues}),
            all_issues=list(issues),
            file_breakdown=build_file_breakdown(issues),
            categories=categories,
            score=calculate_score(issues),
        )

    return _build
