"""Audit orchestration: fetch once, fan out analyzers, aggregate."""

import asyncio
import logging
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

import httpx

from seo_audit.config import AnalysisThresholds, AuditConfig, default_thresholds
from seo_audit.content import ContentAnalyzer
from seo_audit.fetcher import PageFetcher, build_client
from seo_audit.markup import MarkupView
from seo_audit.models import (
    AnalyzerResult,
    AuditReport,
    ContentData,
    OnPageData,
    PageSnapshot,
    PerformanceData,
    RobotsData,
    SitemapData,
)
from seo_audit.onpage import OnPageAnalyzer
from seo_audit.performance import PerformanceAnalyzer
from seo_audit.robots import RobotsAnalyzer
from seo_audit.scoring import calculate_score, generate_summary, prioritize_issues
from seo_audit.sitemap import SitemapAnalyzer

logger = logging.getLogger(__name__)


class AuditStage(str, Enum):
    """Audit lifecycle, in order. Stages are never revisited."""
    FETCHING = "fetching"
    ANALYZING_INDEPENDENT = "analyzing_independent"
    ANALYZING_DEPENDENT = "analyzing_dependent"
    AGGREGATING = "aggregating"
    DONE = "done"


StageCallback = Callable[[AuditStage], None]


class AuditOrchestrator:
    """Runs a complete single-page audit.

    Only the initial page fetch can fail an audit. Every analyzer is
    isolated: if one raises, its section of the report is degraded and
    the others are unaffected.
    """

    def __init__(
        self,
        config: Optional[AuditConfig] = None,
        thresholds: Optional[AnalysisThresholds] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_stage: Optional[StageCallback] = None,
    ):
        """Initialize the orchestrator.

        Args:
            config: Network configuration
            thresholds: Analysis thresholds shared by every analyzer
            transport: Optional httpx transport (tests use httpx.MockTransport)
            on_stage: Called with each AuditStage as the audit enters it
        """
        self.config = config or AuditConfig()
        self.thresholds = thresholds or default_thresholds
        self.transport = transport
        self.on_stage = on_stage

        self.on_page_analyzer = OnPageAnalyzer(self.thresholds)
        self.performance_analyzer = PerformanceAnalyzer(self.thresholds)
        self.content_analyzer = ContentAnalyzer(self.thresholds)

    def _enter(self, stage: AuditStage) -> None:
        logger.info(f"Audit stage: {stage.value}")
        if self.on_stage is not None:
            self.on_stage(stage)

    async def run(self, url: str) -> AuditReport:
        """Audit one URL.

        Args:
            url: http or https URL of the page to audit

        Returns:
            Completed AuditReport

        Raises:
            FetchError: If the page itself cannot be fetched
        """
        start_time = time.perf_counter()

        async with build_client(self.config, self.transport) as client:
            self._enter(AuditStage.FETCHING)
            snapshot = await PageFetcher(client, self.config).fetch(url)
            return await self.analyze_snapshot(snapshot, client, start_time=start_time)

    async def analyze_snapshot(
        self,
        snapshot: PageSnapshot,
        client: httpx.AsyncClient,
        start_time: Optional[float] = None,
    ) -> AuditReport:
        """Run every analyzer against an already fetched page.

        Args:
            snapshot: The fetched page
            client: HTTP client for robots.txt and sitemap requests
            start_time: perf_counter value the execution time is measured from

        Returns:
            Completed AuditReport
        """
        if start_time is None:
            start_time = time.perf_counter()

        markup = MarkupView.from_snapshot(snapshot)
        page_url = snapshot.final_url
        robots_analyzer = RobotsAnalyzer(client, self.config, self.thresholds)
        sitemap_analyzer = SitemapAnalyzer(client, self.config, self.thresholds)

        self._enter(AuditStage.ANALYZING_INDEPENDENT)
        async with asyncio.TaskGroup() as tg:
            robots_task = tg.create_task(self._guarded(
                robots_analyzer.name,
                RobotsData,
                lambda: robots_analyzer.analyze(page_url),
            ))
            on_page_task = tg.create_task(self._guarded_sync(
                self.on_page_analyzer.name,
                OnPageData,
                lambda: self.on_page_analyzer.analyze(markup),
            ))
            performance_task = tg.create_task(self._guarded_sync(
                self.performance_analyzer.name,
                PerformanceData,
                lambda: self.performance_analyzer.analyze(markup, snapshot.fetch_latency_ms),
            ))
            content_task = tg.create_task(self._guarded_sync(
                self.content_analyzer.name,
                ContentData,
                lambda: self.content_analyzer.analyze(markup),
            ))

        robots = robots_task.result()

        self._enter(AuditStage.ANALYZING_DEPENDENT)
        sitemap = await self._guarded(
            sitemap_analyzer.name,
            SitemapData,
            lambda: sitemap_analyzer.analyze(page_url, robots.data.sitemaps),
        )

        self._enter(AuditStage.AGGREGATING)
        results = [
            robots,
            sitemap,
            on_page_task.result(),
            performance_task.result(),
            content_task.result(),
        ]
        all_issues = [issue for result in results for issue in result.issues]
        score = calculate_score(all_issues)
        issues = prioritize_issues(all_issues)

        report = AuditReport(
            url=snapshot.url,
            score=score,
            robots=robots,
            sitemap=sitemap,
            on_page=results[2],
            performance=results[3],
            content=results[4],
            snapshot=snapshot,
            issues=tuple(issues),
            summary=generate_summary(score, issues),
            execution_time_ms=int((time.perf_counter() - start_time) * 1000),
            timestamp=datetime.now(timezone.utc),
        )

        self._enter(AuditStage.DONE)
        degraded = [result.name for result in results if result.degraded]
        if degraded:
            logger.warning(f"Audit of {snapshot.url} finished with degraded analyzers: {degraded}")
        logger.info(f"Audit of {snapshot.url} complete: score {score}, {len(issues)} issues")
        return report

    async def _guarded(
        self,
        name: str,
        empty: Callable[[], Any],
        call: Callable[[], Awaitable[AnalyzerResult]],
    ) -> AnalyzerResult:
        """Await an analyzer, converting any failure into a degraded result.

        Cancellation is not an Exception subclass and propagates.
        """
        try:
            return await call()
        except Exception as e:
            logger.exception(f"{name} analyzer failed: {e}")
            return AnalyzerResult.failed(name, empty(), e)

    async def _guarded_sync(
        self,
        name: str,
        empty: Callable[[], Any],
        call: Callable[[], AnalyzerResult],
    ) -> AnalyzerResult:
        """Run a synchronous analyzer in a worker thread.

        Parsing work stays off the event loop so the robots.txt fetch and
        other audits keep making progress. Failures become a degraded result.
        """
        try:
            return await asyncio.to_thread(call)
        except Exception as e:
            logger.exception(f"{name} analyzer failed: {e}")
            return AnalyzerResult.failed(name, empty(), e)


async def run_audit(
    url: str,
    config: Optional[AuditConfig] = None,
    thresholds: Optional[AnalysisThresholds] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AuditReport:
    """Audit one URL with a fresh orchestrator."""
    orchestrator = AuditOrchestrator(config=config, thresholds=thresholds, transport=transport)
    return await orchestrator.run(url)


def run_audit_sync(
    url: str,
    config: Optional[AuditConfig] = None,
    thresholds: Optional[AnalysisThresholds] = None,
) -> AuditReport:
    """Blocking wrapper around run_audit for scripts and the CLI."""
    return asyncio.run(run_audit(url, config=config, thresholds=thresholds))
