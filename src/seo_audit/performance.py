"""Performance proxies computed from the page markup and fetch latency.

No browser runs during an audit, so everything here is an estimate:
resource counts, inline asset weight, image hygiene and a handful of
best-practice flags.
"""

import logging
from typing import List, Optional
from urllib.parse import urlparse

from seo_audit.config import AnalysisThresholds, default_thresholds
from seo_audit.constants import IMAGE_SAMPLE_SIZE, IMAGE_SRC_MAX_CHARS
from seo_audit.exceptions import AnalyzerError
from seo_audit.markup import MarkupView
from seo_audit.models import (
    AnalyzerResult,
    ImageStats,
    Issue,
    PerformanceData,
    Priority,
    ResourceCounts,
)

logger = logging.getLogger(__name__)

CATEGORY = "Performance"

# HTML size under which a fast page counts as lean in the summary
LEAN_HTML_BYTES = 150000


def _utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


class PerformanceAnalyzer:
    """Estimates page weight and flags render-blocking patterns."""

    name = "performance"

    def __init__(self, thresholds: Optional[AnalysisThresholds] = None):
        """Initialize analyzer with configurable thresholds.

        Args:
            thresholds: Analysis thresholds configuration
        """
        self.thresholds = thresholds or default_thresholds

    def analyze(
        self, markup: MarkupView, load_time_ms: Optional[int] = None
    ) -> AnalyzerResult[PerformanceData]:
        """Analyze resource composition of one page.

        Args:
            markup: Parsed page
            load_time_ms: Fetch latency of the page, None when unknown

        Returns:
            AnalyzerResult with PerformanceData
        """
        if not isinstance(markup, MarkupView):
            raise AnalyzerError(self.name, f"expected MarkupView, got {type(markup).__name__}")

        scripts = markup.scripts
        external_scripts = [s for s in scripts if s.has_attr("src")]
        inline_styles = markup.inline_styles

        data = PerformanceData(
            load_time_ms=load_time_ms,
            html_bytes=markup.html_bytes,
            inline_script_bytes=sum(_utf8_len(s.get_text()) for s in scripts),
            inline_style_bytes=sum(_utf8_len(s.get_text()) for s in inline_styles),
            resources=self._count_resources(markup, len(external_scripts)),
            content_to_code_ratio=self._content_to_code_ratio(markup),
            has_async_scripts=any(
                s.has_attr("async") or s.has_attr("defer") for s in scripts
            ),
            has_critical_css=len(inline_styles) > 0,
            has_preload=bool(markup.find_all("link", rel="preload")),
            has_preconnect=bool(markup.select('link[rel="preconnect"], link[rel="dns-prefetch"]')),
            images=self._analyze_images(markup),
        )

        issues = self._check(data)
        data.summary = self._summarize(data, issues)

        logger.debug(
            f"Performance: {data.html_bytes} bytes HTML, "
            f"{data.resources.total_scripts} scripts, {len(issues)} issues"
        )
        return AnalyzerResult(name=self.name, data=data, issues=issues)

    def _count_resources(self, markup: MarkupView, external_scripts: int) -> ResourceCounts:
        host = urlparse(markup.base_url).netloc.lower()
        external_links = 0
        for anchor in markup.find_all("a", href=True):
            parsed = urlparse(anchor["href"].strip())
            if parsed.scheme in ("http", "https") and parsed.netloc.lower() != host:
                external_links += 1

        fonts = [
            link for link in markup.find_all("link")
            if link.get("as") == "font" or ".woff" in (link.get("href") or "")
        ]

        total_scripts = len(markup.scripts)
        return ResourceCounts(
            total_scripts=total_scripts,
            external_scripts=external_scripts,
            inline_scripts=total_scripts - external_scripts,
            total_stylesheets=len(markup.stylesheets),
            inline_styles=len(markup.inline_styles),
            total_images=len(markup.images),
            images_without_src=sum(1 for img in markup.images if not img.has_attr("src")),
            total_links=len(markup.anchors),
            external_links=external_links,
            total_fonts=len(fonts),
            iframes=len(markup.find_all("iframe")),
            videos=len(markup.find_all("video")),
        )

    @staticmethod
    def _content_to_code_ratio(markup: MarkupView) -> float:
        """Visible text bytes as a percentage of HTML bytes."""
        if markup.html_bytes == 0:
            return 0.0
        return round(_utf8_len(markup.body_text) / markup.html_bytes * 100, 2)

    @staticmethod
    def _analyze_images(markup: MarkupView) -> ImageStats:
        stats = ImageStats(total=len(markup.images))

        for index, img in enumerate(markup.images):
            alt = (img.get("alt") or "").strip()
            has_dimensions = bool(img.get("width") and img.get("height"))
            lazy = img.get("loading") == "lazy"

            if not alt:
                stats.without_alt += 1
            if not has_dimensions:
                stats.without_dimensions += 1
            if lazy:
                stats.lazy_loaded += 1

            if index < IMAGE_SAMPLE_SIZE:
                src = img.get("src")
                stats.sample.append({
                    "src": src[:IMAGE_SRC_MAX_CHARS] if src else "missing",
                    "hasAlt": img.has_attr("alt"),
                    "hasDimensions": has_dimensions,
                    "isLazyLoaded": lazy,
                })

        return stats

    def _check(self, data: PerformanceData) -> List[Issue]:
        issues = []
        load_time = data.load_time_ms

        if load_time is not None and load_time > self.thresholds.slow_load_ms:
            issues.append(Issue(
                priority=Priority.HIGH,
                category=CATEGORY,
                message=f"Page load time is {load_time}ms (target: <{self.thresholds.slow_load_ms}ms)",
                recommendation="Optimize server response time, enable caching, use a CDN",
            ))
        elif load_time is not None and load_time > self.thresholds.moderate_load_ms:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message=f"Page load time is {load_time}ms (target: <{self.thresholds.moderate_load_ms}ms)",
                recommendation="Reduce server response time and page weight",
            ))

        if data.html_bytes > self.thresholds.max_html_bytes:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message=(
                    f"HTML size is {data.html_bytes / 1024:.2f}KB "
                    f"(recommended: <{self.thresholds.max_html_bytes / 1000:g}KB)"
                ),
                recommendation="Minify HTML, remove unnecessary whitespace and comments",
            ))

        scripts = data.resources.total_scripts
        if scripts > self.thresholds.max_script_tags:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message=f"{scripts} script tags found (recommended: <{self.thresholds.max_script_tags})",
                recommendation="Combine and minify JavaScript files, use async/defer attributes",
            ))

        images = data.resources.total_images
        if images > self.thresholds.max_images:
            issues.append(Issue(
                priority=Priority.LOW,
                category=CATEGORY,
                message=f"{images} images on page (recommended: <{self.thresholds.max_images})",
                recommendation="Use lazy loading for images, optimize image sizes",
            ))

        if data.resources.external_scripts > 0 and not data.has_async_scripts:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message="Scripts not using async or defer attributes",
                recommendation="Add async/defer to script tags to prevent render blocking",
            ))

        return issues

    def _summarize(self, data: PerformanceData, issues: List[Issue]) -> str:
        severe = sum(1 for i in issues if i.priority in (Priority.CRITICAL, Priority.HIGH))
        if severe > 0:
            return (
                f"Performance needs improvement: {severe} critical issues detected. "
                "Focus on reducing page load time and resource counts."
            )

        load_time = data.load_time_ms
        if (
            load_time is not None
            and load_time < self.thresholds.moderate_load_ms
            and data.html_bytes < LEAN_HTML_BYTES
        ):
            return "Good performance: Page loads quickly with reasonable resource usage."

        return "Moderate performance: Some optimization opportunities available to improve load times."
