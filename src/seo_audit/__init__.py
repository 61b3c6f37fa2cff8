"""Single-page SEO audit: crawlability, on-page, performance and content."""

__version__ = "0.1.0"

from seo_audit.auditor import AuditOrchestrator, AuditStage, run_audit, run_audit_sync
from seo_audit.fetcher import PageFetcher, validate_url
from seo_audit.markup import MarkupView
from seo_audit.robots import RobotsAnalyzer
from seo_audit.sitemap import SitemapAnalyzer
from seo_audit.onpage import OnPageAnalyzer
from seo_audit.performance import PerformanceAnalyzer
from seo_audit.content import ContentAnalyzer
from seo_audit.scoring import calculate_score, generate_summary, prioritize_issues
from seo_audit.models import (
    AnalyzerResult,
    AuditReport,
    ContentData,
    Issue,
    OnPageData,
    PageSnapshot,
    PerformanceData,
    Priority,
    RobotsData,
    SitemapData,
)
from seo_audit.exceptions import AnalyzerError, AuditError, FetchError, FetchErrorKind
from seo_audit.config import AnalysisThresholds, AuditConfig, settings

__all__ = [
    "AuditOrchestrator",
    "AuditStage",
    "run_audit",
    "run_audit_sync",
    "PageFetcher",
    "validate_url",
    "MarkupView",
    "RobotsAnalyzer",
    "SitemapAnalyzer",
    "OnPageAnalyzer",
    "PerformanceAnalyzer",
    "ContentAnalyzer",
    "calculate_score",
    "generate_summary",
    "prioritize_issues",
    "AnalyzerResult",
    "AuditReport",
    "ContentData",
    "Issue",
    "OnPageData",
    "PageSnapshot",
    "PerformanceData",
    "Priority",
    "RobotsData",
    "SitemapData",
    "AnalyzerError",
    "AuditError",
    "FetchError",
    "FetchErrorKind",
    "AnalysisThresholds",
    "AuditConfig",
    "settings",
]
