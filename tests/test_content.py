# tests/test_content.py
"""Tests for the content analyzer."""

import pytest

from conftest import GOOD_PAGE, PAGE_URL, words
from seo_audit.content import (
    ContentAnalyzer,
    count_syllables,
    flesch_reading_ease,
    readability_band,
)
from seo_audit.markup import MarkupView
from seo_audit.models import Priority


def page(head="", body=""):
    return MarkupView(f"<html><head>{head}</head><body>{body}</body></html>", PAGE_URL)


class TestReadability:
    """Tests for syllable counting and Flesch scoring."""

    def test_short_words_count_one(self):
        assert count_syllables("the") == 1
        assert count_syllables("a") == 1
        assert count_syllables("eye") == 1

    def test_vowel_groups(self):
        assert count_syllables("hello") == 2
        assert count_syllables("beautiful") == 3
        assert count_syllables("rhythm") == 1

    def test_silent_e_is_subtracted(self):
        assert count_syllables("make") == 1
        assert count_syllables("Engine") == 2

    def test_minimum_one_syllable(self):
        assert count_syllables("queue") == 1
        assert count_syllables("xkcd") == 1

    def test_empty_text_scores_zero(self):
        assert flesch_reading_ease([], 0) == 0
        assert flesch_reading_ease(["word"], 0) == 0

    def test_score_is_clamped(self):
        assert flesch_reading_ease(["cat"] * 3, 3) == 100
        long_words = ["internationalization"] * 60
        assert flesch_reading_ease(long_words, 1) == 0

    @pytest.mark.parametrize("score,band,level", [
        (100, "Very Easy", "5th grade"),
        (90, "Very Easy", "5th grade"),
        (89, "Easy", "6th grade"),
        (70, "Fairly Easy", "7th grade"),
        (60, "Standard", "8th-9th grade"),
        (50, "Fairly Difficult", "10th-12th grade"),
        (30, "Difficult", "College"),
        (29, "Very Difficult", "College graduate"),
        (0, "Very Difficult", "College graduate"),
    ])
    def test_readability_bands(self, score, band, level):
        assert readability_band(score) == (band, level)


class TestContentAnalyzer:
    """Test suite for ContentAnalyzer."""

    @pytest.fixture
    def analyzer(self):
        return ContentAnalyzer()

    def test_counts(self, analyzer):
        markup = page(body="<p>One two three. Four five!</p><p>Six seven eight nine?</p>")
        data = analyzer.analyze(markup).data

        assert data.word_count == 9
        assert data.sentence_count == 3
        assert data.paragraph_count == 2
        assert data.avg_sentence_length == 3.0

    def test_good_page(self, analyzer):
        result = analyzer.analyze(MarkupView(GOOD_PAGE, PAGE_URL))
        data = result.data

        assert data.word_count >= 300
        assert data.headings == {"h1": 1, "h2": 2, "h3": 0, "h4": 0, "h5": 0, "h6": 0}
        assert data.headings_sample["h2"] == ["Start with crawlability", "Review the page itself"]
        assert data.quality_checks["hasEnoughContent"] is True
        assert data.quality_checks["hasProperHeadings"] is True
        assert data.quality_checks["hasParagraphs"] is True
        assert not any(issue.priority == Priority.HIGH for issue in result.issues)
        assert data.summary.startswith("Good content quality")

    def test_thin_page_issues(self, analyzer):
        result = analyzer.analyze(page(body="<p>Hello there.</p>"))
        by_message = {issue.message: issue.priority for issue in result.issues}

        assert by_message["Low word count: 2 words (recommended: 300+)"] == Priority.HIGH
        assert by_message["Missing H1 heading"] == Priority.HIGH
        assert by_message["No H2 headings found"] == Priority.MEDIUM
        assert by_message["Only 1 paragraphs found"] == Priority.LOW
        assert all(issue.category == "Content" for issue in result.issues)
        assert result.data.summary.startswith("Content needs improvement: 2 critical")

    @pytest.mark.parametrize("count,flagged", [(299, True), (300, False)])
    def test_word_count_boundary(self, analyzer, count, flagged):
        result = analyzer.analyze(page(body=f"<p>{words(count)}</p>"))

        assert result.data.word_count == count
        assert result.data.quality_checks["hasEnoughContent"] is not flagged
        low_count = [i for i in result.issues if i.message.startswith("Low word count")]
        assert bool(low_count) is flagged

    def test_long_sentences(self, analyzer):
        result = analyzer.analyze(page(body=f"<p>{words(40)}.</p>"))
        assert "Long average sentence length: 40.0 words" in [i.message for i in result.issues]

    def test_multiple_h1_is_left_to_on_page_checks(self, analyzer):
        result = analyzer.analyze(page(body="<h1>A</h1><h1>B</h1>"))
        assert not any("H1" in issue.message for issue in result.issues)

    def test_duplicate_title_and_h1(self, analyzer):
        result = analyzer.analyze(page(head="<title>Same Words</title>", body="<h1> same words </h1>"))
        assert "H1 is identical to title tag" in [i.message for i in result.issues]

    def test_description_equal_to_title(self, analyzer):
        head = '<title>Widgets</title><meta name="description" content="WIDGETS">'
        result = analyzer.analyze(page(head=head))
        assert "Meta description is identical to title" in [i.message for i in result.issues]

    def test_reading_time_uses_main_content(self, analyzer):
        body = f"<nav>{words(50, 'menu')}</nav><main><p>{words(401)}</p></main>"
        data = analyzer.analyze(page(body=body)).data

        assert data.main_content_words == 401
        assert data.reading_time_minutes == 3
        assert data.to_dict()["readingTime"]["text"] == "3 min read"

    def test_empty_page(self, analyzer):
        data = analyzer.analyze(page()).data
        assert data.word_count == 0
        assert data.readability_score == 0
        assert data.readability_level == "Very Difficult"
        assert data.reading_time_minutes == 0
