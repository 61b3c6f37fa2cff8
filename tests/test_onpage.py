# tests/test_onpage.py
"""Tests for the on-page analyzer."""

import pytest

from conftest import GOOD_PAGE, PAGE_URL
from seo_audit.config import AnalysisThresholds
from seo_audit.exceptions import AnalyzerError
from seo_audit.markup import MarkupView
from seo_audit.models import Priority
from seo_audit.onpage import OnPageAnalyzer


def page(head="", body=""):
    return MarkupView(f"<html><head>{head}</head><body>{body}</body></html>", PAGE_URL)


def issues_about(result, word):
    return [issue for issue in result.issues if word.lower() in issue.message.lower()]


class TestOnPageAnalyzer:
    """Test suite for OnPageAnalyzer."""

    @pytest.fixture
    def analyzer(self):
        return OnPageAnalyzer()

    def test_well_formed_page_has_no_issues(self, analyzer):
        result = analyzer.analyze(MarkupView(GOOD_PAGE, PAGE_URL))

        assert result.issues == []
        data = result.data
        assert data.h1_count == 1
        assert data.h2_count == 2
        assert data.indexable and data.followable
        assert data.structured_data_count == 1
        assert data.twitter_card == "summary_large_image"

    @pytest.mark.parametrize("length,expected", [
        (29, [Priority.HIGH]),
        (30, []),
        (60, []),
        (61, [Priority.MEDIUM]),
    ])
    def test_title_length_boundaries(self, analyzer, length, expected):
        result = analyzer.analyze(page(head=f"<title>{'a' * length}</title>"))

        title_issues = issues_about(result, "title is")
        assert [issue.priority for issue in title_issues] == expected
        assert result.data.title_length == length

    def test_missing_title_is_critical(self, analyzer):
        result = analyzer.analyze(page())
        assert issues_about(result, "Missing title tag")[0].priority == Priority.CRITICAL

    def test_meta_description_checks(self, analyzer):
        missing = analyzer.analyze(page())
        assert issues_about(missing, "meta description")[0].priority == Priority.HIGH

        short = analyzer.analyze(page(head='<meta name="description" content="Too short">'))
        assert issues_about(short, "meta description")[0].priority == Priority.MEDIUM

        ok = analyzer.analyze(page(head=f'<meta name="description" content="{"d" * 120}">'))
        assert issues_about(ok, "meta description") == []

    @pytest.mark.parametrize("length,expected", [
        (119, [Priority.MEDIUM]),
        (120, []),
    ])
    def test_meta_description_length_boundary(self, analyzer, length, expected):
        result = analyzer.analyze(page(head=f'<meta name="description" content="{"d" * length}">'))

        description_issues = issues_about(result, "meta description")
        assert [issue.priority for issue in description_issues] == expected
        assert result.data.meta_description_length == length

    def test_charset_is_reported_without_issue(self, analyzer):
        result = analyzer.analyze(page(head='<meta charset="utf-8">'))

        assert result.data.charset == "utf-8"
        assert not issues_about(result, "character set")

    def test_noindex_is_critical(self, analyzer):
        result = analyzer.analyze(page(head='<meta name="robots" content="NOINDEX, nofollow">'))

        assert result.data.indexable is False
        assert result.data.followable is False
        assert issues_about(result, "noindex")[0].priority == Priority.CRITICAL

    def test_missing_head_tags(self, analyzer):
        result = analyzer.analyze(page())
        by_message = {issue.message: issue for issue in result.issues}

        assert by_message["Missing canonical tag"].priority == Priority.MEDIUM
        assert by_message["Missing viewport meta tag"].priority == Priority.CRITICAL
        assert by_message["Missing viewport meta tag"].category == "Mobile"
        assert not issues_about(result, "character set")
        assert result.data.charset is None

    def test_heading_counts(self, analyzer):
        none = analyzer.analyze(page())
        assert issues_about(none, "Missing H1")[0].priority == Priority.HIGH

        many = analyzer.analyze(page(body="<h1>A</h1><h1>B</h1>"))
        assert issues_about(many, "Multiple H1")[0].priority == Priority.MEDIUM

    @pytest.mark.parametrize("missing,expected", [
        (1, Priority.HIGH),
        (4, Priority.HIGH),
        (5, Priority.CRITICAL),
    ])
    def test_missing_alt_escalates(self, analyzer, missing, expected):
        body = '<img src="a.png">' * missing + '<img src="b.png" alt="">'
        result = analyzer.analyze(page(body=body))

        alt_issues = issues_about(result, "alt text")
        assert len(alt_issues) == 1
        assert alt_issues[0].priority == expected
        # An empty alt attribute counts as present
        assert result.data.images_without_alt == missing
        assert result.data.total_images == missing + 1

    def test_escalation_threshold_is_configurable(self):
        analyzer = OnPageAnalyzer(AnalysisThresholds(image_alt_escalation=2))
        result = analyzer.analyze(page(body='<img src="a.png"><img src="b.png">'))
        assert issues_about(result, "alt text")[0].priority == Priority.CRITICAL

    def test_link_classification(self, analyzer):
        body = (
            '<a href="/about">About</a>'
            '<a href="contact">Contact</a>'
            '<a href="https://example.com/x">Same host</a>'
            '<a href="https://other.org/">Other</a>'
            '<a href="//cdn.other.org/file">Protocol relative</a>'
            '<a href="#top">Fragment</a>'
            '<a href="mailto:hi@example.com">Mail</a>'
        )
        result = analyzer.analyze(page(body=body))

        assert result.data.internal_links == 3
        assert result.data.external_links == 2

    def test_social_tags(self, analyzer):
        partial = page(head='<meta property="og:title" content="T"><meta name="twitter:card" content="summary">')
        result = analyzer.analyze(partial)

        assert issues_about(result, "Open Graph")[0].priority == Priority.MEDIUM
        assert issues_about(result, "Twitter") == []

    def test_rejects_non_markup_input(self, analyzer):
        with pytest.raises(AnalyzerError):
            analyzer.analyze("<html></html>")
