"""On-page SEO analyzer for head tags, headings, images, links and social meta."""

from typing import List, Optional, Tuple
from urllib.parse import urljoin, urlparse

from seo_audit.config import AnalysisThresholds, default_thresholds
from seo_audit.exceptions import AnalyzerError
from seo_audit.markup import MarkupView
from seo_audit.models import AnalyzerResult, Issue, OnPageData, Priority

# Link schemes that never point at a crawlable page
NON_PAGE_SCHEMES = ("mailto:", "tel:", "javascript:", "data:")


class OnPageAnalyzer:
    """Checks the page's markup against on-page SEO thresholds."""

    name = "onPage"

    def __init__(self, thresholds: Optional[AnalysisThresholds] = None):
        """Initialize analyzer with configurable thresholds.

        Args:
            thresholds: Analysis thresholds configuration
        """
        self.thresholds = thresholds or default_thresholds

    def analyze(self, markup: MarkupView) -> AnalyzerResult[OnPageData]:
        """Extract on-page elements and flag issues.

        Args:
            markup: Parsed page

        Returns:
            AnalyzerResult with OnPageData

        Raises:
            AnalyzerError: If ``markup`` is not a MarkupView
        """
        if not isinstance(markup, MarkupView):
            raise AnalyzerError(self.name, f"expected MarkupView, got {type(markup).__name__}")

        meta_robots = markup.meta_content("robots")
        directives = (meta_robots or "").lower()
        internal_links, external_links = self._count_links(markup)

        data = OnPageData(
            title=markup.title,
            meta_description=markup.meta_content("description"),
            meta_robots=meta_robots,
            indexable="noindex" not in directives,
            followable="nofollow" not in directives,
            canonical=markup.link_href("canonical"),
            viewport=markup.meta_content("viewport"),
            charset=markup.charset,
            h1_count=len(markup.find_all("h1")),
            h2_count=len(markup.find_all("h2")),
            total_images=len(markup.images),
            images_without_alt=sum(1 for img in markup.images if img.get("alt") is None),
            internal_links=internal_links,
            external_links=external_links,
            structured_data_count=len(markup.json_ld_scripts),
            og_title=markup.meta_property("og:title"),
            og_description=markup.meta_property("og:description"),
            og_image=markup.meta_property("og:image"),
            twitter_card=markup.meta_content("twitter:card"),
        )

        issues: List[Issue] = []
        self._check_title(data, issues)
        self._check_meta_description(data, issues)
        self._check_indexing(data, issues)
        self._check_head_tags(data, issues)
        self._check_headings(data, issues)
        self._check_images(data, issues)
        self._check_structured_data(data, issues)
        self._check_social(data, issues)

        return AnalyzerResult(name=self.name, data=data, issues=issues)

    def _count_links(self, markup: MarkupView) -> Tuple[int, int]:
        """Count internal and external anchors.

        Relative links are internal; absolute links are internal when they
        point at the page's own host.
        """
        base_host = urlparse(markup.base_url).netloc.lower()
        internal = 0
        external = 0

        for anchor in markup.find_all("a", href=True):
            href = anchor["href"].strip()
            if not href or href.startswith("#") or href.lower().startswith(NON_PAGE_SCHEMES):
                continue

            host = urlparse(urljoin(markup.base_url, href)).netloc.lower()
            if not host or host == base_host:
                internal += 1
            else:
                external += 1

        return internal, external

    def _check_title(self, data: OnPageData, issues: List[Issue]) -> None:
        length = data.title_length
        if not data.title:
            issues.append(Issue(
                priority=Priority.CRITICAL,
                category="On-Page",
                message="Missing title tag",
                recommendation="Add a unique, descriptive title tag (50-60 characters)",
            ))
        elif length < self.thresholds.title_min:
            issues.append(Issue(
                priority=Priority.HIGH,
                category="On-Page",
                message=f"Title is only {length} characters",
                recommendation="Expand title to 50-60 characters for optimal display",
            ))
        elif length > self.thresholds.title_max:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category="On-Page",
                message=f"Title is {length} characters (may be truncated)",
                recommendation="Shorten title to 50-60 characters",
            ))

    def _check_meta_description(self, data: OnPageData, issues: List[Issue]) -> None:
        length = data.meta_description_length
        if not data.meta_description:
            issues.append(Issue(
                priority=Priority.HIGH,
                category="On-Page",
                message="Missing meta description",
                recommendation="Add compelling meta description (150-160 characters)",
            ))
        elif length < self.thresholds.meta_description_min:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category="On-Page",
                message=f"Meta description is only {length} characters",
                recommendation="Expand to 150-160 characters for better SERP display",
            ))

    def _check_indexing(self, data: OnPageData, issues: List[Issue]) -> None:
        if not data.indexable:
            issues.append(Issue(
                priority=Priority.CRITICAL,
                category="Indexing",
                message="Page is blocked from indexing (noindex)",
                recommendation="Remove noindex if page should be indexed by search engines",
            ))

    def _check_head_tags(self, data: OnPageData, issues: List[Issue]) -> None:
        if not data.canonical:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category="On-Page",
                message="Missing canonical tag",
                recommendation="Add canonical tag to specify preferred URL version",
            ))

        if not data.viewport:
            issues.append(Issue(
                priority=Priority.CRITICAL,
                category="Mobile",
                message="Missing viewport meta tag",
                recommendation='Add <meta name="viewport" content="width=device-width, initial-scale=1">',
            ))

    def _check_headings(self, data: OnPageData, issues: List[Issue]) -> None:
        if data.h1_count == 0:
            issues.append(Issue(
                priority=Priority.HIGH,
                category="Content Structure",
                message="Missing H1 heading",
                recommendation="Add a single H1 heading describing the main topic",
            ))
        elif data.h1_count > 1:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category="Content Structure",
                message=f"Multiple H1 headings ({data.h1_count})",
                recommendation="Use only one H1 heading per page",
            ))

    def _check_images(self, data: OnPageData, issues: List[Issue]) -> None:
        missing = data.images_without_alt
        if missing == 0:
            return

        priority = Priority.HIGH
        if missing >= self.thresholds.image_alt_escalation:
            priority = Priority.CRITICAL

        issues.append(Issue(
            priority=priority,
            category="Accessibility",
            message=f"{missing} of {data.total_images} images missing alt text",
            recommendation="Add descriptive alt text to all images",
        ))

    def _check_structured_data(self, data: OnPageData, issues: List[Issue]) -> None:
        if data.structured_data_count == 0:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category="Structured Data",
                message="No JSON-LD structured data found",
                recommendation="Implement schema.org structured data for rich snippets",
            ))

    def _check_social(self, data: OnPageData, issues: List[Issue]) -> None:
        if not (data.og_title and data.og_description and data.og_image):
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category="Social Media",
                message="Incomplete Open Graph tags",
                recommendation="Add og:title, og:description, og:image for social sharing",
            ))

        if not data.twitter_card:
            issues.append(Issue(
                priority=Priority.LOW,
                category="Social Media",
                message="No Twitter Card tags",
                recommendation="Add Twitter Card meta tags for better Twitter sharing",
            ))
