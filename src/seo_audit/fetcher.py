"""Page fetcher: the only place the audited page itself is downloaded."""

import logging
import time
from typing import Optional
from urllib.parse import urlparse

import httpx

from seo_audit.config import AuditConfig
from seo_audit.constants import SNAPSHOT_HEADERS
from seo_audit.exceptions import FetchError
from seo_audit.models import PageSnapshot

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")


def validate_url(url: str) -> str:
    """Check that a URL can be audited.

    Args:
        url: URL supplied by the caller

    Returns:
        The URL with surrounding whitespace removed

    Raises:
        FetchError: If the URL is empty, not http(s), or has no host
    """
    if not url or not isinstance(url, str):
        raise FetchError.invalid_url(str(url), "URL must be a non-empty string")

    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise FetchError.invalid_url(url, "URL must use HTTP or HTTPS protocol")
    if not parsed.netloc:
        raise FetchError.invalid_url(url, "URL has no host")
    return url


def site_root(url: str) -> str:
    """Scheme and host of a URL, e.g. ``https://example.com``."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def build_client(
    config: AuditConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create the HTTP client shared by every network call of one audit.

    Args:
        config: Network configuration
        transport: Optional transport override (tests use httpx.MockTransport)

    Returns:
        Configured httpx.AsyncClient; the caller owns closing it
    """
    return httpx.AsyncClient(
        headers={
            "User-Agent": config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        },
        follow_redirects=True,
        max_redirects=config.max_redirects,
        timeout=config.page_timeout,
        transport=transport,
    )


class PageFetcher:
    """Fetches a single page and captures it as a PageSnapshot."""

    def __init__(self, client: httpx.AsyncClient, config: Optional[AuditConfig] = None):
        """
        Initialize the fetcher.

        Args:
            client: HTTP client to send the request with
            config: Network configuration (timeouts, redirects)
        """
        self.client = client
        self.config = config or AuditConfig()

    async def fetch(self, url: str) -> PageSnapshot:
        """Download a page once, without retries.

        Args:
            url: http or https URL to fetch

        Returns:
            PageSnapshot of the final response

        Raises:
            FetchError: On invalid URL, timeout, network failure, or a
                non-2xx/3xx final status
        """
        url = validate_url(url)
        timeout = self.config.page_timeout

        logger.info(f"Fetching page: {url}")
        start_time = time.perf_counter()
        try:
            response = await self.client.get(url, timeout=timeout)
        except httpx.TimeoutException:
            logger.warning(f"Timeout fetching {url} (>{timeout}s)")
            raise FetchError.timeout(url, timeout)
        except httpx.TooManyRedirects:
            logger.warning(f"Too many redirects fetching {url}")
            raise FetchError.network(
                url, f"more than {self.config.max_redirects} redirects"
            )
        except httpx.RequestError as e:
            reason = str(e) or type(e).__name__
            logger.warning(f"Network error fetching {url}: {reason}")
            raise FetchError.network(url, reason)
        except httpx.InvalidURL as e:
            raise FetchError.invalid_url(url, str(e))
        latency_ms = int((time.perf_counter() - start_time) * 1000)

        if response.status_code >= 400:
            logger.warning(f"{url} returned HTTP {response.status_code}")
            raise FetchError.http_status(url, response.status_code)

        headers = {
            name: response.headers[name]
            for name in SNAPSHOT_HEADERS
            if name in response.headers
        }

        logger.info(
            f"Fetched {url}: status {response.status_code}, {latency_ms}ms, "
            f"{len(response.content)} bytes"
        )

        return PageSnapshot(
            url=url,
            final_url=str(response.url),
            status_code=response.status_code,
            html=response.text,
            headers=headers,
            fetch_latency_ms=latency_ms,
        )
