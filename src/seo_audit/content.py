"""Content analysis - word counts, readability, heading structure."""

import math
import re
from typing import Dict, List, Optional, Tuple

from seo_audit.config import AnalysisThresholds, default_thresholds
from seo_audit.constants import (
    HEADING_SAMPLE_SIZE,
    READABILITY_BANDS,
    SHORT_WORD_LENGTH,
    WORDS_PER_MINUTE,
)
from seo_audit.exceptions import AnalyzerError
from seo_audit.markup import MarkupView
from seo_audit.models import AnalyzerResult, ContentData, Issue, Priority

CATEGORY = "Content"

VOWEL_GROUP = re.compile(r'[aeiouy]+')


def count_syllables(word: str) -> int:
    """Estimate syllables by counting vowel groups.

    Args:
        word: Word to analyze

    Returns:
        Estimated syllable count, at least 1
    """
    word = word.lower()
    if len(word) <= SHORT_WORD_LENGTH:
        return 1

    count = len(VOWEL_GROUP.findall(word)) or 1

    # Silent 'e'
    if word.endswith('e'):
        count -= 1

    return max(1, count)


def flesch_reading_ease(words: List[str], sentence_count: int) -> int:
    """Flesch Reading Ease, rounded and clamped to 0-100.

    Args:
        words: Word tokens
        sentence_count: Number of sentences

    Returns:
        Score where higher means easier to read; 0 for empty text
    """
    word_count = len(words)
    if word_count == 0 or sentence_count == 0:
        return 0

    syllables = sum(count_syllables(word) for word in words)
    words_per_sentence = word_count / sentence_count
    syllables_per_word = syllables / word_count

    score = 206.835 - (1.015 * words_per_sentence) - (84.6 * syllables_per_word)

    # Half-up rounding
    score = math.floor(score + 0.5)
    return max(0, min(100, score))


def readability_band(score: int) -> Tuple[str, str]:
    """Map a Flesch score to (band, reading level)."""
    for minimum, band, level in READABILITY_BANDS:
        if score >= minimum:
            return band, level
    return READABILITY_BANDS[-1][1], READABILITY_BANDS[-1][2]


class ContentAnalyzer:
    """Analyzes body text volume, readability and heading structure."""

    name = "content"

    def __init__(self, thresholds: Optional[AnalysisThresholds] = None):
        """Initialize analyzer with configurable thresholds.

        Args:
            thresholds: Analysis thresholds configuration
        """
        self.thresholds = thresholds or default_thresholds

    def analyze(self, markup: MarkupView) -> AnalyzerResult[ContentData]:
        """Analyze the page's text content.

        Args:
            markup: Parsed page

        Returns:
            AnalyzerResult with ContentData
        """
        if not isinstance(markup, MarkupView):
            raise AnalyzerError(self.name, f"expected MarkupView, got {type(markup).__name__}")

        words = markup.body_text.split()
        word_count = len(words)
        sentence_count = len(self._split_sentences(markup.body_text))
        paragraph_count = len(markup.paragraphs)

        avg_sentence_length = 0.0
        if sentence_count > 0:
            avg_sentence_length = round(word_count / sentence_count, 1)

        main_words = len(markup.main_content_text.split())
        headings = {f"h{level}": len(markup.headings(level)) for level in range(1, 7)}

        score = flesch_reading_ease(words, sentence_count)
        band, level = readability_band(score)

        data = ContentData(
            word_count=word_count,
            sentence_count=sentence_count,
            paragraph_count=paragraph_count,
            avg_sentence_length=avg_sentence_length,
            reading_time_minutes=math.ceil(main_words / WORDS_PER_MINUTE),
            main_content_words=main_words,
            headings=headings,
            headings_sample=self._heading_samples(markup),
            readability_score=score,
            readability_level=band,
            reading_level=level,
            quality_checks=self._quality_checks(
                word_count, avg_sentence_length, headings, paragraph_count
            ),
        )

        issues = self._check(data)
        issues.extend(self._check_duplicates(markup))
        data.summary = self._summarize(data, issues)

        return AnalyzerResult(name=self.name, data=data, issues=issues)

    def _split_sentences(self, text: str) -> List[str]:
        """Split text into sentences on runs of terminal punctuation."""
        sentences = re.split(r'[.!?]+', text)
        return [s.strip() for s in sentences if s.strip()]

    @staticmethod
    def _heading_samples(markup: MarkupView) -> Dict[str, List[str]]:
        return {
            "h1": markup.headings(1),
            "h2": markup.headings(2)[:HEADING_SAMPLE_SIZE],
            "h3": markup.headings(3)[:HEADING_SAMPLE_SIZE],
        }

    def _quality_checks(
        self,
        word_count: int,
        avg_sentence_length: float,
        headings: Dict[str, int],
        paragraph_count: int,
    ) -> Dict[str, bool]:
        t = self.thresholds
        return {
            "hasEnoughContent": word_count >= t.min_word_count,
            "hasGoodReadingLevel": (
                t.ideal_sentence_length_min <= avg_sentence_length <= t.ideal_sentence_length_max
            ),
            "hasProperHeadings": headings["h1"] == 1 and headings["h2"] > 0,
            "hasParagraphs": paragraph_count >= t.min_paragraphs,
        }

    def _check(self, data: ContentData) -> List[Issue]:
        issues = []
        t = self.thresholds

        if data.word_count < t.min_word_count:
            issues.append(Issue(
                priority=Priority.HIGH,
                category=CATEGORY,
                message=f"Low word count: {data.word_count} words (recommended: {t.min_word_count}+)",
                recommendation="Add more comprehensive, valuable content to improve SEO",
            ))

        if data.headings["h1"] == 0:
            issues.append(Issue(
                priority=Priority.HIGH,
                category=CATEGORY,
                message="Missing H1 heading",
                recommendation="Add a single H1 heading that describes the main topic",
            ))

        if data.headings["h2"] == 0:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message="No H2 headings found",
                recommendation="Add H2 headings to structure your content",
            ))

        if data.paragraph_count < t.min_paragraphs:
            issues.append(Issue(
                priority=Priority.LOW,
                category=CATEGORY,
                message=f"Only {data.paragraph_count} paragraphs found",
                recommendation="Break content into more paragraphs for better readability",
            ))

        if data.avg_sentence_length > t.max_avg_sentence_length:
            issues.append(Issue(
                priority=Priority.LOW,
                category=CATEGORY,
                message=f"Long average sentence length: {data.avg_sentence_length} words",
                recommendation="Break up long sentences for better readability",
            ))

        return issues

    @staticmethod
    def _check_duplicates(markup: MarkupView) -> List[Issue]:
        """Title, first H1 and meta description that repeat each other."""
        issues = []
        title = (markup.title or "").lower()
        h1s = markup.headings(1)
        first_h1 = h1s[0].lower() if h1s else ""
        description = (markup.meta_content("description") or "").lower()

        if title and first_h1 and title == first_h1:
            issues.append(Issue(
                priority=Priority.LOW,
                category=CATEGORY,
                message="H1 is identical to title tag",
                recommendation="Differentiate H1 from title tag while keeping them related",
            ))

        if title and description == title:
            issues.append(Issue(
                priority=Priority.LOW,
                category=CATEGORY,
                message="Meta description is identical to title",
                recommendation="Write unique meta description that complements the title",
            ))

        return issues

    @staticmethod
    def _summarize(data: ContentData, issues: List[Issue]) -> str:
        high = sum(1 for issue in issues if issue.priority == Priority.HIGH)
        if high > 0:
            return (
                f"Content needs improvement: {high} critical issues found. "
                "Focus on adding more comprehensive content and proper heading structure."
            )

        if data.quality_checks["hasEnoughContent"] and data.quality_checks["hasProperHeadings"]:
            return f"Good content quality: {data.word_count} words with proper structure and readability."

        return "Content quality is moderate: Some improvements needed for better SEO performance."
