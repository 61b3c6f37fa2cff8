# tests/test_scoring.py
"""Tests for score aggregation and issue prioritization."""

import pytest

from seo_audit.models import Issue, Priority
from seo_audit.scoring import (
    calculate_score,
    count_by_priority,
    generate_summary,
    prioritize_issues,
)


def issue(priority, message="x", category="Test"):
    return Issue(priority=priority, category=category, message=message)


class TestCalculateScore:
    """Tests for calculate_score."""

    def test_no_issues_is_perfect(self):
        assert calculate_score([]) == 100

    def test_penalties(self):
        assert calculate_score([issue(Priority.CRITICAL)]) == 85
        assert calculate_score([issue(Priority.HIGH)]) == 90
        assert calculate_score([issue(Priority.MEDIUM)]) == 95
        assert calculate_score([issue(Priority.LOW)]) == 98

    def test_penalties_accumulate(self):
        issues = [issue(Priority.HIGH), issue(Priority.HIGH), issue(Priority.MEDIUM), issue(Priority.LOW)]
        assert calculate_score(issues) == 73

    def test_clamped_at_zero(self):
        assert calculate_score([issue(Priority.CRITICAL)] * 10) == 0


class TestPrioritizeIssues:
    """Tests for prioritize_issues."""

    def test_sorted_by_rank(self):
        issues = [issue(Priority.LOW), issue(Priority.CRITICAL), issue(Priority.MEDIUM), issue(Priority.HIGH)]
        ordered = [i.priority for i in prioritize_issues(issues)]
        assert ordered == [Priority.CRITICAL, Priority.HIGH, Priority.MEDIUM, Priority.LOW]

    def test_stable_within_priority(self):
        issues = [
            issue(Priority.MEDIUM, "robots"),
            issue(Priority.HIGH, "first high"),
            issue(Priority.MEDIUM, "sitemap"),
            issue(Priority.HIGH, "second high"),
            issue(Priority.MEDIUM, "content"),
        ]
        messages = [i.message for i in prioritize_issues(issues)]
        assert messages == ["first high", "second high", "robots", "sitemap", "content"]

    def test_input_is_not_modified(self):
        issues = [issue(Priority.LOW), issue(Priority.CRITICAL)]
        prioritize_issues(issues)
        assert issues[0].priority == Priority.LOW

    def test_count_by_priority(self):
        counts = count_by_priority([issue(Priority.HIGH), issue(Priority.HIGH), issue(Priority.LOW)])
        assert counts == {
            Priority.CRITICAL: 0,
            Priority.HIGH: 2,
            Priority.MEDIUM: 0,
            Priority.LOW: 1,
        }


class TestGenerateSummary:
    """Tests for generate_summary."""

    @pytest.mark.parametrize("score,prefix", [
        (100, "Excellent"),
        (90, "Excellent"),
        (89, "Good"),
        (75, "Good"),
        (74, "Moderate"),
        (60, "Moderate"),
        (59, "Poor"),
        (0, "Poor"),
    ])
    def test_bands(self, score, prefix):
        assert generate_summary(score, []).startswith(prefix)

    def test_counts_are_interpolated(self):
        issues = [issue(Priority.CRITICAL), issue(Priority.HIGH), issue(Priority.HIGH)]
        assert generate_summary(65, issues) == (
            "Moderate technical SEO (65/100). Focus on 1 critical and 2 high priority issues."
        )
        assert "3 priority issues to address" in generate_summary(80, issues)
        assert "3 priority issues require immediate attention" in generate_summary(10, issues)
