"""Overall score, issue ordering and summary text for an audit."""

from typing import Iterable

from seo_audit.constants import (
    EXCELLENT_SCORE,
    GOOD_SCORE,
    MAX_SCORE,
    MIN_SCORE,
    MODERATE_SCORE,
)
from seo_audit.models import Issue, Priority


def calculate_score(issues: Iterable[Issue]) -> int:
    """Deduct a fixed penalty per issue from 100, clamped to 0-100.

    Args:
        issues: Every issue found by every analyzer

    Returns:
        Score between 0 and 100
    """
    score = MAX_SCORE
    for issue in issues:
        score -= issue.priority.penalty
    return max(MIN_SCORE, min(MAX_SCORE, score))


def prioritize_issues(issues: Iterable[Issue]) -> list[Issue]:
    """Order issues from critical to low.

    The sort is stable, so issues of equal priority keep the order in which
    the analyzers emitted them.
    """
    return sorted(issues, key=lambda issue: issue.priority.rank)


def count_by_priority(issues: Iterable[Issue]) -> dict[Priority, int]:
    counts = {priority: 0 for priority in Priority}
    for issue in issues:
        counts[issue.priority] += 1
    return counts


def generate_summary(score: int, issues: Iterable[Issue]) -> str:
    """One-sentence verdict for the report.

    Args:
        score: Overall score
        issues: All issues

    Returns:
        Summary text picked by score band
    """
    counts = count_by_priority(issues)
    critical_count = counts[Priority.CRITICAL]
    high_count = counts[Priority.HIGH]

    if score >= EXCELLENT_SCORE:
        return f"Excellent technical SEO ({score}/100). Minor optimizations available."
    elif score >= GOOD_SCORE:
        return (
            f"Good technical SEO ({score}/100). "
            f"{critical_count + high_count} priority issues to address."
        )
    elif score >= MODERATE_SCORE:
        return (
            f"Moderate technical SEO ({score}/100). Focus on {critical_count} critical "
            f"and {high_count} high priority issues."
        )
    else:
        return (
            f"Poor technical SEO ({score}/100). Significant improvements needed - "
            f"{critical_count + high_count} priority issues require immediate attention."
        )
