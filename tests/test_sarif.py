"""Tests for SARIF v2.1.0 output."""

import json

from readyscan.formatters.sarif import render_sarif
from readyscan.models import Category, Issue, Severity
from readyscan.scoring import calculate_score


def _dep_issue():
    return Issue(
        type="dependency",
        category=Category.DEPENDENCIES,
        name="Hallucinated Package: lodahs",
        severity=Severity.HIGH,
        file="package.json",
        line=None,
        snippet='"lodahs": "*"',
        remediation="Verify the package exists.",
        persona=("dev", "security"),
    )


class TestSarifOutput:
    def test_basic_structure(self, make_issue, report_for):
        report = report_for([make_issue(Severity.CRITICAL, name="AWS Access Key")])
        data = json.loads(render_sarif(report))
        assert data["version"] == "2.1.0"
        run = data["runs"][0]
        assert run["tool"]["driver"]["name"] == "readyscan"
        assert run["results"][0]["level"] == "error"
        assert run["results"][0]["locations"][0]["physicalLocation"]["region"]["startLine"] == 1
        assert run["properties"]["label"] == "PRODUCTION READY"

    def test_rules_are_deduplicated(self, make_issue, report_for):
        issues = [make_issue(name="JWT Secret", line=n) for n in range(1, 4)]
        data = json.loads(render_sarif(report_for(issues)))
        run = data["runs"][0]
        assert [r["id"] for r in run["tool"]["driver"]["rules"]] == ["secrets/jwt-secret"]
        assert len(run["results"]) == 3

    def test_file_level_issue_has_no_region(self, report_for):
        data = json.loads(render_sarif(report_for([_dep_issue()])))
        location = data["runs"][0]["results"][0]["locations"][0]["physicalLocation"]
        assert location == {"artifactLocation": {"uri": "package.json"}}

    def test_levels(self, make_issue, report_for):
        issues = [make_issue(Severity.MEDIUM, name="m"), make_issue(Severity.LOW, name="l"),
                  make_issue("SEVERE", name="u")]
        results = json.loads(render_sarif(report_for(issues)))["runs"][0]["results"]
        assert [r["level"] for r in results] == ["warning", "note", "note"]

    def test_issue_subset_keeps_full_score(self, make_issue, report_for):
        issues = [make_issue(Severity.CRITICAL, name="a"), make_issue(Severity.LOW, name="b")]
        report = report_for(issues)
        data = json.loads(render_sarif(report, issues=issues[:1]))
        run = data["runs"][0]
        assert len(run["results"]) == 1
        assert run["properties"]["readinessScore"] == calculate_score(issues).score == 78
