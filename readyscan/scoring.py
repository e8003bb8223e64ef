"""Readiness scoring: weighted deductions, bands, category scores, recommendations.

Every issue deducts a fixed amount from a base of 100 according to its
severity (CRITICAL 20, HIGH 10, MEDIUM 5, LOW 2). Unrecognised severities
deduct nothing but are still counted and listed. Only the final score is
floored at 0; ``totalDeductions`` keeps the unclamped sum.

Category scores apply the same formula to each category on its own, starting
again from 100. They are not shares of the global score, so one category can
sit at 100 while the overall verdict is DANGER.
"""

from collections import Counter
from collections.abc import Iterable

from readyscan.models import (
    CATEGORY_ORDER,
    Issue,
    Recommendation,
    ScoreBand,
    ScoreResult,
    Severity,
)

BASE_SCORE = 100
MAX_RECOMMENDATIONS = 10

DEDUCTIONS = {
    Severity.CRITICAL: 20,
    Severity.HIGH: 10,
    Severity.MEDIUM: 5,
    Severity.LOW: 2,
}

SCORE_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(0, 40, "DANGER", "No-Go", "#ff2d55", "\U0001f534"),
    ScoreBand(41, 70, "RISKY", "Conditional Go", "#ffa500", "\U0001f7e1"),
    ScoreBand(71, 100, "PRODUCTION READY", "Go", "#00ff88", "\U0001f7e2"),
)


def deduction_for(severity) -> int:
    return DEDUCTIONS.get(severity, 0)


def score_issues(issues: Iterable[Issue]) -> int:
    total = sum(deduction_for(issue.severity) for issue in issues)
    return max(0, BASE_SCORE - total)


def band_for(score: int) -> ScoreBand:
    for band in SCORE_BANDS:
        if band.contains(score):
            return band
    return SCORE_BANDS[0]


def _recommendation_order(issue: Issue) -> int:
    # Unknown severities sort after LOW.
    if isinstance(issue.severity, Severity):
        return -issue.severity.rank
    return 0


def build_recommendations(all_issues: list[Issue], limit: int = MAX_RECOMMENDATIONS) -> list[Recommendation]:
    """One recommendation per distinct issue name, most severe first."""
    occurrences = Counter(issue.name for issue in all_issues)
    seen: set[str] = set()
    recommendations: list[Recommendation] = []
    for issue in sorted(all_issues, key=_recommendation_order):
        if len(recommendations) >= limit:
            break
        if issue.name in seen:
            continue
        seen.add(issue.name)
        recommendations.append(
            Recommendation(
                severity=issue.severity,
                name=issue.name,
                remediation=issue.remediation,
                category=issue.category,
                occurrences=occurrences[issue.name],
            )
        )
    return recommendations


def calculate_score(all_issues: list[Issue]) -> ScoreResult:
    breakdown = {severity.value: 0 for severity in DEDUCTIONS}
    total_deductions = 0
    for issue in all_issues:
        deduction = deduction_for(issue.severity)
        total_deductions += deduction
        if deduction:
            breakdown[issue.severity.value] += deduction

    score = max(0, BASE_SCORE - total_deductions)

    category_scores = {
        category.value: score_issues(i for i in all_issues if i.category == category)
        for category in CATEGORY_ORDER
    }

    return ScoreResult(
        score=score,
        total_deductions=total_deductions,
        deduction_breakdown=breakdown,
        band=band_for(score),
        category_scores=category_scores,
        recommendations=build_recommendations(all_issues),
    )
