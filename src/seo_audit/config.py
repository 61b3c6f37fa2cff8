from dotenv import load_dotenv
from dataclasses import dataclass, fields, replace
from typing import Optional
from pathlib import Path
import json
import logging
import os

from seo_audit.constants import DEFAULT_ROBOTS_USER_AGENT, DEFAULT_USER_AGENT

load_dotenv()  # Loads variables from .env file

logger = logging.getLogger(__name__)


class Settings:
    """
    Manages application settings loaded from environment variables.
    """
    USER_AGENT = os.getenv("USER_AGENT", DEFAULT_USER_AGENT)
    ROBOTS_USER_AGENT = os.getenv("ROBOTS_USER_AGENT", DEFAULT_ROBOTS_USER_AGENT)
    PAGE_TIMEOUT = float(os.getenv("PAGE_TIMEOUT", "10"))
    ROBOTS_TIMEOUT = float(os.getenv("ROBOTS_TIMEOUT", "10"))
    SITEMAP_TIMEOUT = float(os.getenv("SITEMAP_TIMEOUT", "8"))
    MAX_REDIRECTS = int(os.getenv("MAX_REDIRECTS", "5"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    THRESHOLDS_FILE = os.getenv("THRESHOLDS_FILE")


settings = Settings()


@dataclass(frozen=True)
class AuditConfig:
    """Network configuration for a single audit."""
    user_agent: str = DEFAULT_USER_AGENT
    robots_user_agent: str = DEFAULT_ROBOTS_USER_AGENT
    page_timeout: float = 10.0
    robots_timeout: float = 10.0
    sitemap_timeout: float = 8.0
    max_redirects: int = 5
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AuditConfig":
        """Build configuration from the environment-backed ``settings``.

        Returns:
            AuditConfig: Configuration instance with values from environment
        """
        return cls(
            user_agent=settings.USER_AGENT,
            robots_user_agent=settings.ROBOTS_USER_AGENT,
            page_timeout=settings.PAGE_TIMEOUT,
            robots_timeout=settings.ROBOTS_TIMEOUT,
            sitemap_timeout=settings.SITEMAP_TIMEOUT,
            max_redirects=settings.MAX_REDIRECTS,
            log_level=settings.LOG_LEVEL,
        )


@dataclass(frozen=True)
class AnalysisThresholds:
    """Configurable thresholds for page analysis."""

    # On-page
    title_min: int = 30
    title_max: int = 60
    meta_description_min: int = 120
    image_alt_escalation: int = 5  # Missing alt count that becomes critical

    # Performance
    slow_load_ms: int = 3000
    moderate_load_ms: int = 2000
    max_html_bytes: int = 200000
    max_script_tags: int = 20
    max_images: int = 50

    # Content
    min_word_count: int = 300
    min_paragraphs: int = 3
    max_avg_sentence_length: float = 30.0
    ideal_sentence_length_min: float = 15.0
    ideal_sentence_length_max: float = 25.0

    # Crawlability
    max_robots_txt_bytes: int = 500000
    max_sitemap_urls: int = 50000
    max_sitemap_bytes: int = 50 * 1024 * 1024  # 50MB
    max_missing_lastmod_ratio: float = 0.5

    @classmethod
    def from_env(cls) -> "AnalysisThresholds":
        """Load thresholds from environment variables.

        Environment variables should be prefixed with SEO_THRESHOLD_
        e.g., SEO_THRESHOLD_SLOW_LOAD_MS=4000

        Returns:
            AnalysisThresholds with values from environment
        """
        overrides = {}
        prefix = "SEO_THRESHOLD_"

        for f in fields(cls):
            env_key = f"{prefix}{f.name.upper()}"
            env_value = os.getenv(env_key)

            if env_value is not None:
                try:
                    if f.type in (int, "int"):
                        overrides[f.name] = int(env_value)
                    elif f.type in (float, "float"):
                        overrides[f.name] = float(env_value)
                except ValueError:
                    logger.warning(f"Ignoring {env_key}={env_value!r}: not a number")

        return cls(**overrides)

    @classmethod
    def from_file(cls, path: str) -> "AnalysisThresholds":
        """Load thresholds from a JSON configuration file.

        Args:
            path: Path to JSON configuration file

        Returns:
            AnalysisThresholds with values from file
        """
        file_path = Path(path)

        if not file_path.exists():
            logger.warning(f"Thresholds file {path} not found, using defaults")
            return cls()

        with open(file_path, 'r') as f:
            config = json.load(f)

        threshold_config = config.get('thresholds', config)
        known = {f.name for f in fields(cls)}

        return cls(**{
            name: value
            for name, value in threshold_config.items()
            if name in known
        })

    def with_overrides(self, **changes) -> "AnalysisThresholds":
        """Return a copy with some thresholds replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert thresholds to dictionary.

        Returns:
            Dictionary of all threshold values
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def save_to_file(self, path: str) -> None:
        """Save current thresholds to a JSON file.

        Args:
            path: Path to save configuration
        """
        with open(path, 'w') as f:
            json.dump({'thresholds': self.to_dict()}, f, indent=2)


def load_thresholds(path: Optional[str] = None) -> AnalysisThresholds:
    """Thresholds from a file when one is given or configured, else the environment."""
    path = path or settings.THRESHOLDS_FILE
    if path:
        return AnalysisThresholds.from_file(path)
    return AnalysisThresholds.from_env()


# Global default thresholds instance
default_thresholds = AnalysisThresholds()
