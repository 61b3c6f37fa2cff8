"""
robots.txt Analyzer

Fetches the site's robots.txt and reports:
- whether the audit user agent may crawl the page
- the Sitemap: locations it declares
- policies that block the whole site
"""

import logging
from typing import Dict, List, Optional
from urllib.robotparser import RobotFileParser

import httpx

from seo_audit.config import AnalysisThresholds, AuditConfig, default_thresholds
from seo_audit.fetcher import site_root
from seo_audit.models import AnalyzerResult, Issue, Priority, RobotsData

logger = logging.getLogger(__name__)

CATEGORY = "Crawling"


class RobotsAnalyzer:
    """Analyze the robots.txt policy that applies to the audited URL."""

    name = "robots"

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: Optional[AuditConfig] = None,
        thresholds: Optional[AnalysisThresholds] = None,
    ):
        """
        Args:
            client: HTTP client used to fetch robots.txt
            config: Network configuration (timeout, robots user agent)
            thresholds: Analysis thresholds configuration
        """
        self.client = client
        self.config = config or AuditConfig()
        self.thresholds = thresholds or default_thresholds

    async def analyze(self, url: str) -> AnalyzerResult[RobotsData]:
        """Fetch and evaluate robots.txt for the site hosting ``url``.

        A missing or unreachable file never fails the audit: crawling is
        permitted by default when there is no policy.

        Args:
            url: The audited page URL

        Returns:
            AnalyzerResult with RobotsData
        """
        robots_url = f"{site_root(url)}/robots.txt"
        timeout = self.config.robots_timeout
        logger.info(f"Fetching robots.txt from: {robots_url}")

        try:
            response = await self.client.get(robots_url, timeout=timeout)
        except httpx.TimeoutException:
            logger.warning(f"Timeout fetching {robots_url} (>{timeout}s)")
            return self._missing(robots_url, "Timeout fetching robots.txt", error="Timeout")
        except httpx.RequestError as e:
            reason = str(e) or type(e).__name__
            logger.warning(f"Could not load robots.txt: {reason}")
            return self._missing(
                robots_url, f"Error fetching robots.txt: {reason}", error=reason
            )

        if response.status_code == 404:
            logger.info(f"No robots.txt found at {robots_url}")
            return self._missing(
                robots_url,
                "No robots.txt file found - consider adding one for better crawler control",
            )
        if not response.is_success:
            logger.info(f"robots.txt at {robots_url} returned HTTP {response.status_code}")
            return self._missing(
                robots_url,
                f"robots.txt returned HTTP {response.status_code} - crawlers will treat it as missing",
                error=f"HTTP {response.status_code}",
            )

        return self.evaluate(url, response.text, robots_url=robots_url, size=len(response.content))

    def evaluate(
        self,
        url: str,
        content: str,
        robots_url: Optional[str] = None,
        size: Optional[int] = None,
    ) -> AnalyzerResult[RobotsData]:
        """Evaluate robots.txt content that has already been retrieved.

        Args:
            url: The audited page URL
            content: robots.txt body
            robots_url: Where the content came from
            size: Body size in bytes (computed from content when omitted)

        Returns:
            AnalyzerResult with RobotsData
        """
        if size is None:
            size = len(content.encode("utf-8"))

        groups = self._parse_groups(content)
        sitemaps = self.extract_sitemaps(content)
        allows = self._can_fetch(url, content)

        data = RobotsData(
            url=robots_url,
            exists=True,
            allows=allows,
            content=content,
            sitemaps=sitemaps,
            size=size,
            rules_by_user_agent=self._rules_by_user_agent(groups),
        )

        issues = []
        blocks_everything = self._blocks_everything(groups)

        if blocks_everything:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message="Robots.txt blocks all pages - this will prevent indexing",
                recommendation="Remove 'Disallow: /' or add Allow rules for pages that should be indexed",
            ))
        elif not allows:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message="Website blocks crawlers from this URL via robots.txt - this may impact SEO",
                recommendation="Check the Disallow rules that match this page",
            ))

        if not sitemaps:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message="No sitemap declared in robots.txt",
                recommendation="Add a 'Sitemap:' line pointing to your XML sitemap for better indexing",
            ))

        if size > self.thresholds.max_robots_txt_bytes:
            issues.append(Issue(
                priority=Priority.MEDIUM,
                category=CATEGORY,
                message=f"Robots.txt file is very large ({size // 1024}KB) - this may slow down crawlers",
                recommendation="Keep robots.txt under 500KB; crawlers ignore rules past that limit",
            ))

        logger.info(
            f"robots.txt: {len(groups)} groups, {len(sitemaps)} sitemaps, "
            f"allows={allows}"
        )
        return AnalyzerResult(name=self.name, data=data, issues=issues)

    def _missing(
        self,
        robots_url: str,
        message: str,
        error: Optional[str] = None,
    ) -> AnalyzerResult[RobotsData]:
        """Result for a robots.txt that does not exist or could not be read."""
        data = RobotsData(url=robots_url, exists=False, allows=True, error=error)
        issue = Issue(
            priority=Priority.MEDIUM,
            category=CATEGORY,
            message=message,
            recommendation="Create a robots.txt file at your domain root to control crawling",
        )
        return AnalyzerResult(name=self.name, data=data, issues=[issue])

    @classmethod
    def extract_sitemaps(cls, content: str) -> List[str]:
        """Sitemap URLs declared in robots.txt, in file order."""
        sitemaps = []
        for line in content.splitlines():
            directive = cls._directive(line)
            if directive and directive[0] == "sitemap" and directive[1]:
                sitemaps.append(directive[1])
        return sitemaps

    @staticmethod
    def _directive(line: str) -> Optional[tuple]:
        """Split a robots.txt line into (field, value), ignoring comments."""
        line = line.split("#", 1)[0].strip()
        if ":" not in line:
            return None
        key, value = line.split(":", 1)
        return key.strip().lower(), value.strip()

    def _parse_groups(self, content: str) -> List[Dict[str, List[str]]]:
        """Parse directive groups.

        Consecutive User-agent lines share one group. Rules that appear
        before any User-agent line are treated as applying to '*'.

        Returns:
            List of dicts with 'agents', 'allow' and 'disallow' lists
        """
        groups: List[Dict[str, List[str]]] = []
        current = None
        collecting_agents = False

        for line in content.splitlines():
            directive = self._directive(line)
            if directive is None:
                continue
            key, value = directive

            if key == "user-agent":
                if current is None or not collecting_agents:
                    current = {"agents": [], "allow": [], "disallow": []}
                    groups.append(current)
                current["agents"].append(value.lower())
                collecting_agents = True
            elif key in ("allow", "disallow"):
                if current is None:
                    current = {"agents": ["*"], "allow": [], "disallow": []}
                    groups.append(current)
                current[key].append(value)
                collecting_agents = False

        return groups

    def _applies_to_us(self, group: Dict[str, List[str]]) -> bool:
        token = self.config.robots_user_agent.lower()
        return any(agent == "*" or (agent and agent in token) for agent in group["agents"])

    def _blocks_everything(self, groups: List[Dict[str, List[str]]]) -> bool:
        """True when a group that applies to us disallows '/' with no Allow rules."""
        return any(
            self._applies_to_us(group)
            and "/" in group["disallow"]
            and not group["allow"]
            for group in groups
        )

    @staticmethod
    def _rules_by_user_agent(groups: List[Dict[str, List[str]]]) -> Dict[str, int]:
        """Disallow rule count per user agent."""
        rules_by_ua: Dict[str, int] = {}
        for group in groups:
            for agent in group["agents"]:
                rules_by_ua[agent] = rules_by_ua.get(agent, 0) + len(group["disallow"])
        return rules_by_ua

    def _can_fetch(self, url: str, content: str) -> bool:
        """Whether the audit user agent may fetch ``url`` under this policy."""
        lines = content.splitlines()

        # RobotFileParser ignores rules that precede the first User-agent line
        for line in lines:
            directive = self._directive(line)
            if directive is None:
                continue
            if directive[0] == "user-agent":
                break
            if directive[0] in ("allow", "disallow"):
                lines = ["User-agent: *"] + lines
                break

        parser = RobotFileParser()
        parser.parse(lines)
        return parser.can_fetch(self.config.robots_user_agent, url)
