"""GDPR and SOC 2 views over the issue corpus."""

from readyscan.models import Issue, Severity, severity_rank

COMPLIANCE_FRAMEWORKS: dict[str, dict] = {
    "gdpr": {
        "name": "GDPR",
        "description": "EU General Data Protection Regulation (Articles 5, 13, 25, 32)",
        "flag": "gdpr",
    },
    "soc2": {
        "name": "SOC 2",
        "description": "AICPA Trust Services Criteria: security, confidentiality, privacy",
        "flag": "soc2",
    },
}


def issues_for_framework(
    issues: list[Issue], framework: str, min_severity: Severity = Severity.LOW
) -> list[Issue]:
    """Issues flagged for ``framework`` at or above ``min_severity``."""
    flag = COMPLIANCE_FRAMEWORKS[framework]["flag"]
    return [
        i for i in issues
        if getattr(i, flag) and severity_rank(i.severity) >= min_severity.rank
    ]


def group_by_compliance(
    issues: list[Issue], min_severity: Severity = Severity.LOW
) -> dict[str, list[Issue]]:
    """Group issues by framework; an issue may appear under both."""
    groups: dict[str, list[Issue]] = {}
    for framework in COMPLIANCE_FRAMEWORKS:
        matched = issues_for_framework(issues, framework, min_severity)
        if matched:
            groups[framework] = matched
    return groups
