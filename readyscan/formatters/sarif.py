"""SARIF v2.1.0 output formatter for readyscan issues."""

import json
import re
from datetime import datetime, timezone

from readyscan.models import Issue, ScanReport, Severity, severity_label

SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/main/sarif-2.1/schema/sarif-schema-2.1.0.json"

SEVERITY_TO_SARIF_LEVEL = {
    Severity.CRITICAL: "error",
    Severity.HIGH: "error",
    Severity.MEDIUM: "warning",
    Severity.LOW: "note",
}


def _issue_to_rule_id(issue: Issue) -> str:
    """Generate a stable rule ID from an issue."""
    slug = re.sub(r"[^a-z0-9]+", "-", issue.name.lower()).strip("-")
    return f"{issue.category.value}/{slug}"


def _level(issue: Issue) -> str:
    return SEVERITY_TO_SARIF_LEVEL.get(issue.severity, "note")


def _location(issue: Issue) -> dict:
    physical: dict = {"artifactLocation": {"uri": issue.file}}
    if issue.line is not None:
        physical["region"] = {"startLine": issue.line}
    return {"physicalLocation": physical}


def render_sarif(report: ScanReport, issues: list[Issue] | None = None) -> str:
    """Render a scan report as SARIF v2.1.0 JSON.

    ``issues`` narrows the results (for severity filtering); the score in the
    run properties always reflects the full report.
    """
    if issues is None:
        issues = report.all_issues

    rules_map: dict[str, dict] = {}
    for issue in issues:
        rule_id = _issue_to_rule_id(issue)
        if rule_id not in rules_map:
            tags = ["security", issue.category.value]
            if issue.gdpr:
                tags.append("gdpr")
            if issue.soc2:
                tags.append("soc2")
            rules_map[rule_id] = {
                "id": rule_id,
                "shortDescription": {"text": issue.name},
                "defaultConfiguration": {"level": _level(issue)},
                "help": {
                    "text": issue.remediation,
                    "markdown": f"**Remediation:** {issue.remediation}",
                },
                "properties": {"tags": tags, "severity": severity_label(issue.severity)},
            }

    sarif_results = [
        {
            "ruleId": _issue_to_rule_id(issue),
            "level": _level(issue),
            "message": {"text": f"{issue.name}: {issue.snippet}" if issue.snippet else issue.name},
            "locations": [_location(issue)],
        }
        for issue in issues
    ]

    sarif = {
        "$schema": SARIF_SCHEMA,
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": "readyscan",
                        "version": "0.1.0",
                        "rules": list(rules_map.values()),
                    }
                },
                "results": sarif_results,
                "properties": {
                    "readinessScore": report.score.score,
                    "label": report.score.label,
                    "verdict": report.score.verdict,
                },
                "invocations": [
                    {
                        "executionSuccessful": True,
                        "endTimeUtc": datetime.now(timezone.utc).isoformat(),
                    }
                ],
            }
        ],
    }

    return json.dumps(sarif, indent=2)
