"""XML sitemap discovery and validation."""

import logging
from typing import List, Optional
from xml.etree import ElementTree as ET

import httpx

from seo_audit.config import AnalysisThresholds, AuditConfig, default_thresholds
from seo_audit.constants import (
    COMMON_SITEMAP_PATHS,
    SITEMAP_NAMESPACE,
    SITEMAP_SAMPLE_SIZE,
)
from seo_audit.fetcher import site_root
from seo_audit.models import AnalyzerResult, Issue, Priority, SitemapData, SitemapEntry

logger = logging.getLogger(__name__)

CATEGORY = "Sitemap"


def _local_name(tag: str) -> str:
    """Tag name without its XML namespace."""
    return tag.split('}')[-1] if '}' in tag else tag


class SitemapAnalyzer:
    """
    Locate the site's XML sitemap and check it against sitemaps.org limits.

    Supports:
    - Sitemap locations declared in robots.txt
    - Conventional locations as a fallback
    - Sitemap index files (reported, children are not fetched)
    """

    name = "sitemap"

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: Optional[AuditConfig] = None,
        thresholds: Optional[AnalysisThresholds] = None,
    ):
        """
        Args:
            client: HTTP client used to fetch candidates
            config: Network configuration (per-candidate timeout)
            thresholds: Analysis thresholds configuration
        """
        self.client = client
        self.config = config or AuditConfig()
        self.thresholds = thresholds or default_thresholds

    def candidates(self, url: str, hints: List[str]) -> List[str]:
        """Declared sitemaps first, then conventional paths, without duplicates."""
        base = site_root(url)
        ordered = list(hints) + [f"{base}{path}" for path in COMMON_SITEMAP_PATHS]
        return list(dict.fromkeys(ordered))

    async def analyze(self, url: str, hints: Optional[List[str]] = None) -> AnalyzerResult[SitemapData]:
        """Find the first reachable sitemap and analyze it.

        Args:
            url: The audited page URL
            hints: Sitemap URLs declared in robots.txt, possibly empty

        Returns:
            AnalyzerResult with SitemapData
        """
        checked = []

        for sitemap_url in self.candidates(url, hints or []):
            logger.info(f"Checking sitemap at: {sitemap_url}")
            checked.append(sitemap_url)

            content = await self._fetch(sitemap_url)
            if content is None:
                continue

            result = self.parse(content, sitemap_url)
            if result is None:
                logger.debug(f"{sitemap_url} is not a sitemap document")
                continue

            result.data.checked = checked
            return result

        data = SitemapData(exists=False, checked=checked)
        issue = Issue(
            priority=Priority.MEDIUM,
            category=CATEGORY,
            message="No sitemap.xml found - create one to improve crawlability",
            recommendation="Publish an XML sitemap and declare it in robots.txt",
        )
        return AnalyzerResult(name=self.name, data=data, issues=[issue])

    async def _fetch(self, sitemap_url: str) -> Optional[bytes]:
        """Body of a candidate that answered 200, else None."""
        try:
            response = await self.client.get(
                sitemap_url,
                timeout=self.config.sitemap_timeout,
                headers={'Accept': 'application/xml, text/xml, */*'},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"Sitemap not found at {sitemap_url}: {e}")
            return None

        if response.status_code != 200:
            logger.debug(f"Sitemap not found at {sitemap_url} (status: {response.status_code})")
            return None
        return response.content

    def parse(self, content: bytes, location: str) -> Optional[AnalyzerResult[SitemapData]]:
        """Parse sitemap XML.

        Args:
            content: Raw sitemap body
            location: URL the body was fetched from

        Returns:
            AnalyzerResult, or None when the body is not a sitemap document
        """
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            logger.debug(f"Failed to parse sitemap XML at {location}: {e}")
            return None

        root_tag = _local_name(root.tag)
        size = len(content)
        data = SitemapData(exists=True, location=location, total_size=size)

        if root_tag == 'sitemapindex':
            data.is_index = True
            data.child_sitemaps = self._parse_sitemap_index(root)
            data.count = len(data.child_sitemaps)
            logger.info(f"Sitemap index {location} lists {data.count} sitemaps")
            return AnalyzerResult(name=self.name, data=data, issues=[])

        if root_tag == 'urlset':
            entries = self._parse_urlset(root)
            data.urls = entries[:SITEMAP_SAMPLE_SIZE]
            data.count = len(entries)
            logger.info(f"Extracted {data.count} URLs from sitemap {location}")
            return AnalyzerResult(
                name=self.name, data=data, issues=self._check_entries(entries, size)
            )

        logger.warning(f"Unknown sitemap root element: {root_tag}")
        return None

    @staticmethod
    def _find_text(element: ET.Element, name: str) -> Optional[str]:
        child = element.find(f'{{{SITEMAP_NAMESPACE}}}{name}')
        if child is None:
            child = element.find(name)
        if child is None or not child.text or not child.text.strip():
            return None
        return child.text.strip()

    def _parse_sitemap_index(self, root: ET.Element) -> List[str]:
        """Child sitemap URLs of a sitemap index."""
        children = []
        for sitemap in root:
            if _local_name(sitemap.tag) != 'sitemap':
                continue
            loc = self._find_text(sitemap, 'loc')
            if loc:
                children.append(loc)
        return children

    def _parse_urlset(self, root: ET.Element) -> List[SitemapEntry]:
        """Page entries of a leaf sitemap."""
        entries = []
        for url_elem in root:
            if _local_name(url_elem.tag) != 'url':
                continue
            loc = self._find_text(url_elem, 'loc')
            if not loc:
                continue

            priority = self._find_text(url_elem, 'priority')
            try:
                priority_value = float(priority) if priority is not None else None
            except ValueError:
                priority_value = None

            entries.append(SitemapEntry(
                loc=loc,
                lastmod=self._find_text(url_elem, 'lastmod'),
                priority=priority_value,
                changefreq=self._find_text(url_elem, 'changefreq'),
            ))
        return entries

    def _check_entries(self, entries: List[SitemapEntry], size: int) -> List[Issue]:
        """Issues for a leaf sitemap."""
        issues = []
        count = len(entries)

        if count > self.thresholds.max_sitemap_urls:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message=f"Sitemap contains {count} URLs (limit: {self.thresholds.max_sitemap_urls})",
                recommendation="Split into multiple sitemaps referenced from a sitemap index",
            ))

        if size > self.thresholds.max_sitemap_bytes:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message=f"Sitemap file is {size / (1024 * 1024):.1f}MB (limit: {self.thresholds.max_sitemap_bytes // (1024 * 1024)}MB)",
                recommendation="Compress or split the sitemap into multiple files",
            ))

        missing_lastmod = sum(1 for entry in entries if not entry.lastmod)
        if missing_lastmod > count * self.thresholds.max_missing_lastmod_ratio:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message=f"{missing_lastmod} of {count} sitemap URLs are missing lastmod dates",
                recommendation="Add lastmod dates so crawlers can prioritize changed pages",
            ))

        if count > 0 and all(entry.priority is None for entry in entries):
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message="No priority values set in sitemap",
                recommendation="Consider adding priorities to guide crawlers",
            ))

        return issues
