"""Report generation - rich terminal tables and JSON output."""

import json
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from readyscan.compliance import COMPLIANCE_FRAMEWORKS, group_by_compliance
from readyscan.models import Category, Issue, ScanReport, ScoreResult, Severity, severity_label, severity_rank
from readyscan.rules import DEPENDENCY_REGISTRY, LINE_RULES, PII_PRESENCE_RULES

SEVERITY_COLORS = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
}

BAND_COLORS = {
    "DANGER": "bold red",
    "RISKY": "bold yellow",
    "PRODUCTION READY": "bold green",
}

TOP_FILES = 10


def _severity_cell(severity) -> str:
    color = SEVERITY_COLORS.get(severity, "dim")
    return f"[{color}]{severity_label(severity)}[/]"


def filter_issues(
    issues: list[Issue], min_severity: Severity = Severity.LOW, persona: str | None = None
) -> list[Issue]:
    return [
        i for i in issues
        if severity_rank(i.severity) >= min_severity.rank and (persona is None or persona in i.persona)
    ]


def render_score(score: ScoreResult, console: Console | None = None) -> None:
    console = console or Console()
    color = BAND_COLORS.get(score.label, "bold")
    console.print(
        Panel(
            f"[{color}]{score.band.emoji} {score.score}/100  {score.label}[/]  verdict: [bold]{score.verdict}[/]\n"
            f"Total deductions: {score.total_deductions}",
            title="Readiness Score",
            expand=False,
        )
    )

    table = Table(title="Category Scores", show_lines=False)
    table.add_column("Category", width=18)
    table.add_column("Score", justify="right", width=8)
    for category, value in score.category_scores.items():
        table.add_row(category, str(value))
    console.print(table)

    if score.recommendations:
        rec_table = Table(title="Top Recommendations", show_lines=True)
        rec_table.add_column("Severity", width=10)
        rec_table.add_column("Issue", width=36)
        rec_table.add_column("Seen", justify="right", width=5)
        rec_table.add_column("Remediation", width=60)
        for rec in score.recommendations:
            rec_table.add_row(_severity_cell(rec.severity), rec.name, str(rec.occurrences), rec.remediation)
        console.print(rec_table)


def render_table(
    report: ScanReport, min_severity: Severity = Severity.LOW, persona: str | None = None
) -> None:
    console = Console()
    issues = filter_issues(report.all_issues, min_severity, persona)
    issues.sort(key=lambda i: severity_rank(i.severity), reverse=True)

    console.print()
    render_score(report.score, console)

    if not issues:
        console.print("\n[bold green]No issues above the severity threshold.[/]")
        _print_summary(console, report, issues)
        return

    table = Table(title="readyscan Issues", show_lines=True)
    table.add_column("Severity", width=10)
    table.add_column("Category", width=16)
    table.add_column("Issue", width=36)
    table.add_column("Location", width=40)

    for issue in issues:
        table.add_row(_severity_cell(issue.severity), issue.category.value, issue.name, issue.location)

    console.print()
    console.print(table)

    files = Table(title="Riskiest Files", show_lines=False)
    files.add_column("Risk", width=10)
    files.add_column("File", width=50)
    files.add_column("Issues", justify="right", width=7)
    for entry in report.file_breakdown[:TOP_FILES]:
        files.add_row(_severity_cell(entry.risk_level), entry.file, str(entry.issue_count))
    console.print(files)

    _print_summary(console, report, issues)


def _print_summary(console: Console, report: ScanReport, issues: list[Issue]) -> None:
    counts = {s: 0 for s in Severity}
    for issue in issues:
        if isinstance(issue.severity, Severity):
            counts[issue.severity] += 1

    parts = []
    for sev in Severity:
        if counts[sev] > 0:
            color = SEVERITY_COLORS[sev]
            parts.append(f"[{color}]{sev.value}: {counts[sev]}[/]")

    total_duration = sum(r.duration_seconds for r in report.categories.values())
    console.print(f"\n[bold]Summary:[/] {len(issues)} issue(s) | {' | '.join(parts) if parts else 'Clean'}")
    console.print(f"Files: {report.total_files} | Duration: {total_duration:.2f}s\n")


def render_json(report: ScanReport) -> str:
    output = {
        "$schema": "readyscan-v1",
        "generatedAt": datetime.now().isoformat(),
        "target": report.target,
        **report.to_dict(),
    }
    return json.dumps(output, indent=2, ensure_ascii=False)


def render_compliance(
    report: ScanReport, framework: str | None = None, min_severity: Severity = Severity.LOW
) -> None:
    """Render issues grouped by GDPR / SOC 2 applicability."""
    console = Console()
    groups = group_by_compliance(report.all_issues, min_severity)
    if framework is not None:
        groups = {k: v for k, v in groups.items() if k == framework}

    if not groups:
        console.print("\n[bold green]No issues mapped to GDPR or SOC 2.[/]\n")
        return

    console.print("\n[bold]Compliance Report[/]\n")

    for name, issues in groups.items():
        info = COMPLIANCE_FRAMEWORKS[name]
        console.print(f"[bold]{info['name']}[/] - {info['description']} ({len(issues)} issue(s))")

        table = Table(show_lines=False, box=None, padding=(0, 2))
        table.add_column("Severity", width=10)
        table.add_column("Issue", width=50)
        table.add_column("Location", width=40)

        for issue in issues:
            table.add_row(_severity_cell(issue.severity), issue.name, issue.location)
        console.print(table)
        console.print()


def load_report_issues(path: str) -> list[Issue]:
    """Load the ``allIssues`` list of a saved JSON report."""
    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict) or not isinstance(data.get("allIssues"), list):
        raise ValueError("report must be a JSON object with an 'allIssues' list")
    issues = []
    for entry in data["allIssues"]:
        if not isinstance(entry, dict):
            raise ValueError("every entry in 'allIssues' must be an object")
        issues.append(Issue.from_dict(entry))
    return issues


def render_rules(category: Category | None = None) -> None:
    """List the built-in detection rules."""
    console = Console()
    table = Table(title="readyscan Rules", show_lines=False)
    table.add_column("Category", width=16)
    table.add_column("Rule", width=48)
    table.add_column("Severity", width=10)
    table.add_column("Compliance", width=12)

    rows: list[tuple] = []
    for cat, rules in LINE_RULES.items():
        for rule in rules:
            rows.append((cat, rule.name, rule.severity, rule.gdpr, rule.soc2))
    for rule in PII_PRESENCE_RULES:
        rows.append((rule.category, rule.name, rule.severity, rule.gdpr, rule.soc2))
    for ecosystem, names in DEPENDENCY_REGISTRY.hallucinated.items():
        rows.append((Category.DEPENDENCIES, f"Hallucinated Package ({ecosystem}, {len(names)} names)",
                     Severity.HIGH, False, False))
    for ecosystem, packages in DEPENDENCY_REGISTRY.deprecated.items():
        worst = max(p.severity for p in packages.values())
        rows.append((Category.DEPENDENCIES, f"Risky Package ({ecosystem}, {len(packages)} packages)",
                     worst, False, False))
    rows.append((Category.DEPENDENCIES, "Unpinned Version", Severity.MEDIUM, False, False))

    for cat, name, severity, gdpr, soc2 in rows:
        if category is not None and cat != category:
            continue
        flags = ", ".join(label for label, on in (("GDPR", gdpr), ("SOC 2", soc2)) if on)
        table.add_row(cat.value, name, _severity_cell(severity), flags)

    console.print(table)
