"""Exceptions raised by the audit pipeline.

Only ``FetchError`` ever reaches callers of ``run_audit``. Everything an
analyzer raises is turned into a degraded result by the orchestrator.
"""

from enum import Enum
from typing import Optional


class AuditError(Exception):
    """Base class for audit errors."""


class FetchErrorKind(str, Enum):
    """Why the page could not be retrieved."""
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    NETWORK = "network"
    INVALID_URL = "invalid_url"


class FetchError(AuditError):
    """The audited page could not be fetched. Fatal for the audit."""

    def __init__(
        self,
        kind: FetchErrorKind,
        url: str,
        message: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.url = url
        self.message = message
        self.status_code = status_code

    @classmethod
    def timeout(cls, url: str, seconds: float) -> "FetchError":
        return cls(
            FetchErrorKind.TIMEOUT,
            url,
            f"Timed out after {seconds:g}s fetching {url}",
        )

    @classmethod
    def http_status(cls, url: str, status_code: int) -> "FetchError":
        return cls(
            FetchErrorKind.HTTP_STATUS,
            url,
            f"Request to {url} failed with HTTP status {status_code}",
            status_code=status_code,
        )

    @classmethod
    def network(cls, url: str, reason: str) -> "FetchError":
        return cls(
            FetchErrorKind.NETWORK,
            url,
            f"Network error fetching {url}: {reason}",
        )

    @classmethod
    def invalid_url(cls, url: str, reason: str) -> "FetchError":
        return cls(FetchErrorKind.INVALID_URL, url, f"Invalid URL {url!r}: {reason}")

    def to_dict(self) -> dict:
        """Error body returned to HTTP clients."""
        return {
            "error": "Audit failed",
            "message": self.message,
        }


class AnalyzerError(AuditError):
    """An analyzer could not process its input."""

    def __init__(self, analyzer: str, message: str):
        super().__init__(message)
        self.analyzer = analyzer
