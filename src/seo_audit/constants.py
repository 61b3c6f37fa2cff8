# src/seo_audit/constants.py
"""Centralized constants for the page auditor.

Fixed tables that never change at runtime. For user-configurable
thresholds, see config.py and AnalysisThresholds.
"""

# =============================================================================
# Report
# =============================================================================

# Version stamped into report metadata
REPORT_VERSION = "2.0"

# Report status for a completed audit
STATUS_SUCCESS = "success"


# =============================================================================
# Scoring
# =============================================================================

# Points deducted from 100 for each issue of a given priority
PRIORITY_PENALTIES = {
    "critical": 15,
    "high": 10,
    "medium": 5,
    "low": 2,
}

# Sort rank for each priority (lower sorts first)
PRIORITY_RANKS = {
    "critical": 0,
    "high": 1,
    "medium": 2,
    "low": 3,
}

MAX_SCORE = 100
MIN_SCORE = 0

# Score bands for the summary sentence
EXCELLENT_SCORE = 90
GOOD_SCORE = 75
MODERATE_SCORE = 60


# =============================================================================
# Network
# =============================================================================

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SEOAgent/1.0)"

# Product token matched against robots.txt User-agent groups
DEFAULT_ROBOTS_USER_AGENT = "SEOAgent"

# Response headers kept on the page snapshot
SNAPSHOT_HEADERS = (
    "content-type",
    "content-length",
    "content-encoding",
    "cache-control",
    "last-modified",
    "server",
    "x-robots-tag",
    "strict-transport-security",
)


# =============================================================================
# Crawlability
# =============================================================================

# Conventional sitemap locations tried after robots.txt declarations
COMMON_SITEMAP_PATHS = (
    "/sitemap.xml",
    "/sitemap_index.xml",
    "/sitemap1.xml",
    "/sitemaps/sitemap.xml",
)

# XML namespace used by sitemaps.org documents
SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"

# Sitemap entries returned in the report payload
SITEMAP_SAMPLE_SIZE = 10


# =============================================================================
# Content
# =============================================================================

# (minimum score, band, reading level), checked top to bottom
READABILITY_BANDS = (
    (90, "Very Easy", "5th grade"),
    (80, "Easy", "6th grade"),
    (70, "Fairly Easy", "7th grade"),
    (60, "Standard", "8th-9th grade"),
    (50, "Fairly Difficult", "10th-12th grade"),
    (30, "Difficult", "College"),
    (0, "Very Difficult", "College graduate"),
)

# Reading speed used for the reading-time estimate
WORDS_PER_MINUTE = 200

# Words of this length or shorter count as one syllable
SHORT_WORD_LENGTH = 3

# Elements stripped before extracting the main content text
BOILERPLATE_SELECTORS = "nav, footer, aside, header, .sidebar, #sidebar, .nav, #nav"

# Containers tried, in order, as the main content area
MAIN_CONTENT_SELECTORS = "main, article, .content, #content, .main, #main"

# Main content shorter than this falls back to the whole body
MIN_MAIN_CONTENT_CHARS = 100

# Heading texts kept per level in the content payload
HEADING_SAMPLE_SIZE = 5


# =============================================================================
# Performance
# =============================================================================

# Images described individually in the performance payload
IMAGE_SAMPLE_SIZE = 5

# Longest image src kept in samples
IMAGE_SRC_MAX_CHARS = 100
