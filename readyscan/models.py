"""Data models for readiness scan issues, detector results and reports."""

import re
from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        return {
            Severity.CRITICAL: 4,
            Severity.HIGH: 3,
            Severity.MEDIUM: 2,
            Severity.LOW: 1,
        }[self]

    @classmethod
    def parse(cls, value) -> "Severity | None":
        """Return the matching member, or None for anything unrecognised."""
        if isinstance(value, Severity):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return None

    def __ge__(self, other: "Severity") -> bool:
        return self.rank >= other.rank

    def __gt__(self, other: "Severity") -> bool:
        return self.rank > other.rank

    def __le__(self, other: "Severity") -> bool:
        return self.rank <= other.rank

    def __lt__(self, other: "Severity") -> bool:
        return self.rank < other.rank


class Category(Enum):
    SECRETS = "secrets"
    DEPENDENCIES = "dependencies"
    PII = "pii"
    PROMPT_INJECTION = "promptInjection"


# Corpus order: concatenation and tie-breaks follow this sequence.
CATEGORY_ORDER: tuple[Category, ...] = (
    Category.SECRETS,
    Category.DEPENDENCIES,
    Category.PII,
    Category.PROMPT_INJECTION,
)

ISSUE_TYPES = {
    Category.SECRETS: "secret",
    Category.DEPENDENCIES: "dependency",
    Category.PII: "pii",
    Category.PROMPT_INJECTION: "promptInjection",
}

PERSONAS = ("dev", "security", "compliance")

SNIPPET_LIMIT = 100


def severity_label(severity) -> str:
    """Wire value of a severity, including unrecognised raw strings."""
    if isinstance(severity, Severity):
        return severity.value
    return str(severity)


def severity_rank(severity) -> int:
    """Rank used for ordering; unknown severities share LOW's tier."""
    if isinstance(severity, Severity):
        return severity.rank
    return Severity.LOW.rank


def make_snippet(line: str) -> str:
    return line.strip()[:SNIPPET_LIMIT]


@dataclass(frozen=True)
class Rule:
    """A named line-level detection rule."""

    name: str
    pattern: re.Pattern
    severity: Severity
    category: Category
    remediation: str
    gdpr: bool = False
    soc2: bool = False
    personas: tuple[str, ...] = ()

    def render_remediation(self) -> str:
        return self.remediation.replace("{name}", self.name)


@dataclass(frozen=True)
class PresenceRule:
    """A scan-wide check evaluated once per scan instead of once per line.

    The check is only relevant when ``trigger`` matches a scanned line or one of
    ``trigger_files`` exists at the root. It passes when any of
    ``satisfied_by_files`` exists at the root or ``satisfied_by`` matches a
    scanned line. A failing relevant check yields a single issue on ``file``
    with no line number.
    """

    name: str
    severity: Severity
    category: Category
    remediation: str
    file: str
    trigger: re.Pattern | None = None
    trigger_files: tuple[str, ...] = ()
    satisfied_by: re.Pattern | None = None
    satisfied_by_files: tuple[str, ...] = ()
    snippet: str = "File not found"
    gdpr: bool = False
    soc2: bool = False
    personas: tuple[str, ...] = ()


@dataclass(frozen=True)
class Issue:
    type: str
    category: Category
    name: str
    severity: Severity | str
    file: str
    line: int | None
    snippet: str
    remediation: str
    persona: tuple[str, ...] = ()
    gdpr: bool | None = None
    soc2: bool | None = None

    @classmethod
    def from_rule(cls, rule: "Rule | PresenceRule", file: str, line: int | None, snippet: str) -> "Issue":
        is_pii = rule.category == Category.PII
        remediation = rule.render_remediation() if isinstance(rule, Rule) else rule.remediation
        return cls(
            type=ISSUE_TYPES[rule.category],
            category=rule.category,
            name=rule.name,
            severity=rule.severity,
            file=file,
            line=line,
            snippet=snippet[:SNIPPET_LIMIT],
            remediation=remediation,
            persona=rule.personas,
            gdpr=rule.gdpr if is_pii else None,
            soc2=rule.soc2 if is_pii else None,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "Issue":
        """Rebuild an issue from its wire form.

        Unknown severities are kept verbatim so they can be reported, and
        missing optional fields fall back to empty values. An unknown
        category raises ValueError.
        """
        category_value = data.get("category", data.get("type", ""))
        try:
            category = Category(category_value)
        except ValueError:
            by_type = {v: k for k, v in ISSUE_TYPES.items()}
            if category_value not in by_type:
                raise ValueError(f"Unknown issue category: {category_value!r}") from None
            category = by_type[category_value]
        severity = Severity.parse(data.get("severity"))
        line = data.get("line")
        persona = data.get("persona") or ()
        if isinstance(persona, str):
            persona = (persona,)
        return cls(
            type=data.get("type") or ISSUE_TYPES[category],
            category=category,
            name=str(data.get("name", "")),
            severity=severity if severity is not None else str(data.get("severity")),
            file=str(data.get("file", "")),
            line=line if isinstance(line, int) else None,
            snippet=str(data.get("snippet") or "")[:SNIPPET_LIMIT],
            remediation=str(data.get("remediation") or ""),
            persona=tuple(persona),
            gdpr=data.get("gdpr"),
            soc2=data.get("soc2"),
        )

    @property
    def location(self) -> str:
        return f"{self.file}:{self.line}" if self.line is not None else self.file

    def to_dict(self) -> dict:
        data = {
            "type": self.type,
            "category": self.category.value,
            "name": self.name,
            "severity": severity_label(self.severity),
            "file": self.file,
            "line": self.line,
            "snippet": self.snippet,
            "remediation": self.remediation,
            "persona": list(self.persona),
        }
        if self.gdpr is not None:
            data["gdpr"] = self.gdpr
        if self.soc2 is not None:
            data["soc2"] = self.soc2
        return data


@dataclass
class DetectorResult:
    """Output of a single detector: its issues plus category-specific counts."""

    category: Category
    target: str
    issues: list[Issue] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def count(self) -> int:
        return len(self.issues)

    def extras(self) -> dict[str, int]:
        if self.category in (Category.SECRETS, Category.PROMPT_INJECTION):
            return {"critical": sum(1 for i in self.issues if i.severity == Severity.CRITICAL)}
        if self.category == Category.PII:
            return {
                "gdprIssues": sum(1 for i in self.issues if i.gdpr),
                "soc2Issues": sum(1 for i in self.issues if i.soc2),
            }
        return {}

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            **self.extras(),
            "issues": [i.to_dict() for i in self.issues],
        }


@dataclass
class FileEntry:
    file: str
    issues: list[Issue] = field(default_factory=list)
    risk_level: Severity = Severity.LOW

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "issues": [i.to_dict() for i in self.issues],
            "riskLevel": self.risk_level.value,
            "issueCount": self.issue_count,
        }


@dataclass(frozen=True)
class ScoreBand:
    min: int
    max: int
    label: str
    verdict: str
    color: str
    emoji: str

    def contains(self, score: int) -> bool:
        return self.min <= score <= self.max


@dataclass
class Recommendation:
    severity: Severity | str
    name: str
    remediation: str
    category: Category
    occurrences: int

    def to_dict(self) -> dict:
        return {
            "severity": severity_label(self.severity),
            "name": self.name,
            "remediation": self.remediation,
            "category": self.category.value,
            "occurrences": self.occurrences,
        }


@dataclass
class ScoreResult:
    score: int
    total_deductions: int
    deduction_breakdown: dict[str, int]
    band: ScoreBand
    category_scores: dict[str, int]
    recommendations: list[Recommendation] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.band.label

    @property
    def verdict(self) -> str:
        return self.band.verdict

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "totalDeductions": self.total_deductions,
            "deductionBreakdown": dict(self.deduction_breakdown),
            "label": self.band.label,
            "verdict": self.band.verdict,
            "color": self.band.color,
            "emoji": self.band.emoji,
            "categoryScores": dict(self.category_scores),
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


@dataclass
class ScanReport:
    target: str
    total_files: int
    all_issues: list[Issue]
    file_breakdown: list[FileEntry]
    categories: dict[Category, DetectorResult]
    score: ScoreResult

    def summary(self) -> dict[str, int]:
        counts = {s: 0 for s in Severity}
        for issue in self.all_issues:
            if isinstance(issue.severity, Severity):
                counts[issue.severity] += 1
        return {
            "totalFiles": self.total_files,
            "totalIssues": len(self.all_issues),
            "critical": counts[Severity.CRITICAL],
            "high": counts[Severity.HIGH],
            "medium": counts[Severity.MEDIUM],
            "low": counts[Severity.LOW],
        }

    def to_dict(self) -> dict:
        return {
            "summary": self.summary(),
            "score": self.score.to_dict(),
            "categories": {c.value: self.categories[c].to_dict() for c in CATEGORY_ORDER},
            "fileBreakdown": [entry.to_dict() for entry in self.file_breakdown],
            "allIssues": [i.to_dict() for i in self.all_issues],
        }
