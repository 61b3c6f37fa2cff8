"""Data models for the page audit."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from seo_audit.constants import (
    PRIORITY_PENALTIES,
    PRIORITY_RANKS,
    REPORT_VERSION,
    STATUS_SUCCESS,
)


class Priority(str, Enum):
    """Issue priority, most severe first."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def penalty(self) -> int:
        """Points this priority costs the overall score."""
        return PRIORITY_PENALTIES[self.value]

    @property
    def rank(self) -> int:
        return PRIORITY_RANKS[self.value]


@dataclass(frozen=True)
class Issue:
    """A single audit finding."""
    priority: Priority
    category: str
    message: str
    recommendation: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "priority": self.priority.value,
            "category": self.category,
            "message": self.message,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class PageSnapshot:
    """Result of fetching the audited page. Never mutated."""
    url: str
    final_url: str
    status_code: int
    html: str
    headers: dict[str, str] = field(default_factory=dict)
    fetch_latency_ms: int = 0

    @property
    def is_https(self) -> bool:
        return self.final_url.startswith("https://")


# =============================================================================
# Analyzer payloads
# =============================================================================


@dataclass
class RobotsData:
    """robots.txt findings."""
    url: Optional[str] = None
    exists: bool = False
    allows: bool = True  # No policy means crawling is permitted
    content: Optional[str] = None
    sitemaps: list[str] = field(default_factory=list)
    size: int = 0
    rules_by_user_agent: dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "exists": self.exists,
            "allows": self.allows,
            "content": self.content,
            "sitemaps": list(self.sitemaps),
            "size": self.size,
            "rulesByUserAgent": dict(self.rules_by_user_agent),
            "error": self.error,
        }


@dataclass
class SitemapEntry:
    """One <url> entry of a leaf sitemap."""
    loc: str
    lastmod: Optional[str] = None
    priority: Optional[float] = None
    changefreq: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "loc": self.loc,
            "lastmod": self.lastmod,
            "priority": self.priority,
            "changefreq": self.changefreq,
        }


@dataclass
class SitemapData:
    """XML sitemap findings."""
    exists: bool = False
    location: Optional[str] = None
    is_index: bool = False
    child_sitemaps: list[str] = field(default_factory=list)
    urls: list[SitemapEntry] = field(default_factory=list)  # Sample only
    count: int = 0
    total_size: int = 0
    checked: list[str] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "exists": self.exists,
            "location": self.location,
            "isSitemapIndex": self.is_index,
            "childSitemaps": list(self.child_sitemaps),
            "urls": [entry.to_dict() for entry in self.urls],
            "count": self.count,
            "totalSize": self.total_size,
            "checked": list(self.checked),
            "error": self.error,
        }


@dataclass
class OnPageData:
    """On-page markup findings. Absent elements are None."""
    title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_robots: Optional[str] = None
    indexable: bool = True
    followable: bool = True
    canonical: Optional[str] = None
    viewport: Optional[str] = None
    charset: Optional[str] = None
    h1_count: int = 0
    h2_count: int = 0
    total_images: int = 0
    images_without_alt: int = 0
    internal_links: int = 0
    external_links: int = 0
    structured_data_count: int = 0
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None
    twitter_card: Optional[str] = None
    error: Optional[str] = None

    @property
    def title_length(self) -> int:
        return len(self.title) if self.title else 0

    @property
    def meta_description_length(self) -> int:
        return len(self.meta_description) if self.meta_description else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": {"value": self.title or "", "length": self.title_length},
            "metaDescription": {
                "value": self.meta_description or "",
                "length": self.meta_description_length,
            },
            "headings": {"h1": self.h1_count, "h2": self.h2_count},
            "images": {"total": self.total_images, "withoutAlt": self.images_without_alt},
            "links": {"internal": self.internal_links, "external": self.external_links},
            "structuredData": {"count": self.structured_data_count},
            "openGraph": {
                "title": self.og_title or "",
                "description": self.og_description or "",
                "image": self.og_image or "",
            },
            "twitterCard": {"card": self.twitter_card or ""},
            "error": self.error,
        }

    def meta_robots_dict(self) -> dict[str, Any]:
        return {
            "value": self.meta_robots or "",
            "index": self.indexable,
            "follow": self.followable,
        }

    def canonical_dict(self) -> dict[str, Any]:
        return {"value": self.canonical or "", "exists": bool(self.canonical)}


@dataclass
class ResourceCounts:
    """Resources referenced by the page markup."""
    total_scripts: int = 0
    external_scripts: int = 0
    inline_scripts: int = 0
    total_stylesheets: int = 0
    inline_styles: int = 0
    total_images: int = 0
    images_without_src: int = 0
    total_links: int = 0
    external_links: int = 0
    total_fonts: int = 0
    iframes: int = 0
    videos: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalScripts": self.total_scripts,
            "externalScripts": self.external_scripts,
            "inlineScripts": self.inline_scripts,
            "totalStylesheets": self.total_stylesheets,
            "inlineStyles": self.inline_styles,
            "totalImages": self.total_images,
            "imagesWithoutSrc": self.images_without_src,
            "totalLinks": self.total_links,
            "externalLinks": self.external_links,
            "totalFonts": self.total_fonts,
            "iframes": self.iframes,
            "videos": self.videos,
        }


@dataclass
class ImageStats:
    """Image optimization findings."""
    total: int = 0
    without_alt: int = 0
    without_dimensions: int = 0
    lazy_loaded: int = 0
    sample: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "withoutAlt": self.without_alt,
            "withoutDimensions": self.without_dimensions,
            "lazyLoaded": self.lazy_loaded,
            "sample": [dict(item) for item in self.sample],
        }


@dataclass
class PerformanceData:
    """Performance proxies derived from the markup and fetch latency."""
    load_time_ms: Optional[int] = None
    html_bytes: int = 0
    inline_script_bytes: int = 0
    inline_style_bytes: int = 0
    resources: ResourceCounts = field(default_factory=ResourceCounts)
    content_to_code_ratio: float = 0.0
    has_async_scripts: bool = False
    has_critical_css: bool = False
    has_preload: bool = False
    has_preconnect: bool = False
    images: ImageStats = field(default_factory=ImageStats)
    summary: str = ""
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "loadTime": self.load_time_ms,
            "sizes": {
                "html": self.html_bytes,
                "htmlKB": round(self.html_bytes / 1024, 2),
                "estimatedScripts": self.inline_script_bytes,
                "estimatedScriptsKB": round(self.inline_script_bytes / 1024, 2),
                "estimatedStyles": self.inline_style_bytes,
                "estimatedStylesKB": round(self.inline_style_bytes / 1024, 2),
            },
            "resources": self.resources.to_dict(),
            "metrics": {
                "contentToCodeRatio": self.content_to_code_ratio,
                "hasAsyncScripts": self.has_async_scripts,
                "hasCriticalCSS": self.has_critical_css,
                "hasPreload": self.has_preload,
                "hasPreconnect": self.has_preconnect,
            },
            # Not measured: no browser runs during an audit
            "coreWebVitals": {"lcp": None, "fid": None, "cls": None, "measured": False},
            "images": self.images.to_dict(),
            "summary": self.summary,
            "error": self.error,
        }


@dataclass
class ContentData:
    """Text statistics and readability of the page body."""
    word_count: int = 0
    sentence_count: int = 0
    paragraph_count: int = 0
    avg_sentence_length: float = 0.0
    reading_time_minutes: int = 0
    main_content_words: int = 0
    headings: dict[str, int] = field(default_factory=dict)
    headings_sample: dict[str, list[str]] = field(default_factory=dict)
    readability_score: int = 0
    readability_level: str = "Very Difficult"
    reading_level: str = "College graduate"
    quality_checks: dict[str, bool] = field(default_factory=dict)
    summary: str = ""
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "wordCount": self.word_count,
            "sentenceCount": self.sentence_count,
            "paragraphCount": self.paragraph_count,
            "avgSentenceLength": self.avg_sentence_length,
            "readingTime": {
                "text": f"{self.reading_time_minutes} min read",
                "minutes": self.reading_time_minutes,
                "words": self.main_content_words,
            },
            "headings": dict(self.headings),
            "headingsSample": {k: list(v) for k, v in self.headings_sample.items()},
            "readability": {
                "score": self.readability_score,
                "level": self.readability_level,
                "readingLevel": self.reading_level,
            },
            "qualityChecks": dict(self.quality_checks),
            "summary": self.summary,
            "error": self.error,
        }


# =============================================================================
# Analyzer contract
# =============================================================================

T = TypeVar("T")


@dataclass
class AnalyzerResult(Generic[T]):
    """What every analyzer returns: a payload plus its issues.

    A degraded result carries the analyzer's empty payload, the error text,
    and exactly one synthetic issue describing the failure.
    """
    name: str
    data: T
    issues: list[Issue] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.error is not None

    @classmethod
    def failed(cls, name: str, data: T, error: BaseException) -> "AnalyzerResult[T]":
        """Build a degraded result for an analyzer that raised."""
        message = str(error) or type(error).__name__
        if hasattr(data, "error"):
            data.error = message
        issue = Issue(
            priority=Priority.HIGH,
            category=name,
            message=message,
            recommendation=f"The {name} checks could not complete; re-run the audit once the cause is fixed",
        )
        return cls(name=name, data=data, issues=[issue], error=message)


@dataclass(frozen=True)
class AuditReport:
    """Final artifact of one audit. Built once, never changed."""
    url: str
    score: int
    robots: AnalyzerResult[RobotsData]
    sitemap: AnalyzerResult[SitemapData]
    on_page: AnalyzerResult[OnPageData]
    performance: AnalyzerResult[PerformanceData]
    content: AnalyzerResult[ContentData]
    snapshot: PageSnapshot
    issues: tuple[Issue, ...]
    summary: str
    execution_time_ms: int
    timestamp: datetime
    version: str = REPORT_VERSION
    status: str = STATUS_SUCCESS

    def data_dict(self) -> dict[str, Any]:
        """The ``data`` section of the report."""
        on_page = self.on_page.data
        return {
            "crawling": {
                "robotsTxt": self.robots.data.to_dict(),
                "sitemap": self.sitemap.data.to_dict(),
                "metaRobots": on_page.meta_robots_dict(),
                "canonical": on_page.canonical_dict(),
            },
            "onPage": on_page.to_dict(),
            "performance": self.performance.data.to_dict(),
            "content": self.content.data.to_dict(),
            "technical": {
                "https": self.snapshot.is_https,
                "viewport": {"value": on_page.viewport or "", "exists": bool(on_page.viewport)},
                "charset": {"value": on_page.charset or "", "exists": bool(on_page.charset)},
                "loadTime": self.snapshot.fetch_latency_ms,
                "responseCode": self.snapshot.status_code,
                "finalUrl": self.snapshot.final_url,
            },
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "score": self.score,
            "status": self.status,
            "data": self.data_dict(),
            "issues": [issue.to_dict() for issue in self.issues],
            "summary": self.summary,
            "metadata": {
                "executionTime": self.execution_time_ms,
                "timestamp": self.timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
                "version": self.version,
            },
        }
