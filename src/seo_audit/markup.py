"""Parsed, read-only view of the audited page's HTML."""

import re
from functools import cached_property
from typing import Optional

from bs4 import BeautifulSoup, Tag

from seo_audit.constants import (
    BOILERPLATE_SELECTORS,
    MAIN_CONTENT_SELECTORS,
    MIN_MAIN_CONTENT_CHARS,
)
from seo_audit.models import PageSnapshot

PARSER = "html.parser"


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return " ".join(text.split())


class MarkupView:
    """Queryable document shared by every analyzer of one audit.

    The tree is parsed once. Analyzers only read from it; anything that
    needs to remove elements works on a private copy.
    """

    def __init__(self, html: str, base_url: str = ""):
        """
        Args:
            html: Raw page HTML
            base_url: Final URL of the page, used to classify links
        """
        self.html = html
        self.base_url = base_url
        self._soup = BeautifulSoup(html, PARSER)

    @classmethod
    def from_snapshot(cls, snapshot: PageSnapshot) -> "MarkupView":
        return cls(snapshot.html, snapshot.final_url)

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    @cached_property
    def html_bytes(self) -> int:
        return len(self.html.encode("utf-8"))

    # ------------------------------------------------------------------
    # Head
    # ------------------------------------------------------------------

    @cached_property
    def title(self) -> Optional[str]:
        """Trimmed <title> text, or None when missing or blank."""
        tag = self._soup.find("title")
        if tag is None:
            return None
        text = tag.get_text(strip=True)
        return text or None

    def meta_content(self, name: str) -> Optional[str]:
        """Content of <meta name="..."> (name matched case-insensitively)."""
        tag = self._soup.find(
            "meta", attrs={"name": re.compile(rf"^{re.escape(name)}$", re.I)}
        )
        return self._content_of(tag)

    def meta_property(self, prop: str) -> Optional[str]:
        """Content of <meta property="..."> such as og:title."""
        tag = self._soup.find(
            "meta", attrs={"property": re.compile(rf"^{re.escape(prop)}$", re.I)}
        )
        return self._content_of(tag)

    def link_href(self, rel: str) -> Optional[str]:
        """href of the first <link rel="..."> element."""
        tag = self._soup.find("link", rel=rel)
        if tag is None:
            return None
        href = (tag.get("href") or "").strip()
        return href or None

    @cached_property
    def charset(self) -> Optional[str]:
        """Declared character set from <meta charset> or http-equiv Content-Type."""
        tag = self._soup.find("meta", charset=True)
        if tag is not None and tag.get("charset", "").strip():
            return tag["charset"].strip()
        tag = self._soup.find(
            "meta", attrs={"http-equiv": re.compile(r"^content-type$", re.I)}
        )
        return self._content_of(tag)

    @staticmethod
    def _content_of(tag: Optional[Tag]) -> Optional[str]:
        if tag is None:
            return None
        content = (tag.get("content") or "").strip()
        return content or None

    # ------------------------------------------------------------------
    # Body elements
    # ------------------------------------------------------------------

    def find_all(self, name: str, **attrs) -> list[Tag]:
        return self._soup.find_all(name, **attrs)

    def select(self, selector: str) -> list[Tag]:
        return self._soup.select(selector)

    def headings(self, level: int) -> list[str]:
        """Trimmed text of every <hN> element."""
        return [
            normalize_whitespace(h.get_text(separator=" "))
            for h in self._soup.find_all(f"h{level}")
        ]

    @cached_property
    def images(self) -> list[Tag]:
        return self._soup.find_all("img")

    @cached_property
    def scripts(self) -> list[Tag]:
        return self._soup.find_all("script")

    @cached_property
    def stylesheets(self) -> list[Tag]:
        """<link rel="stylesheet"> elements."""
        return self._soup.find_all("link", rel="stylesheet")

    @cached_property
    def inline_styles(self) -> list[Tag]:
        return self._soup.find_all("style")

    @cached_property
    def anchors(self) -> list[Tag]:
        return self._soup.find_all("a")

    @cached_property
    def paragraphs(self) -> list[Tag]:
        return self._soup.find_all("p")

    @cached_property
    def json_ld_scripts(self) -> list[Tag]:
        return self._soup.find_all(
            "script", attrs={"type": re.compile(r"^application/ld\+json$", re.I)}
        )

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    @cached_property
    def body_text(self) -> str:
        """Visible body text with whitespace collapsed."""
        root = self._soup.body or self._soup
        return normalize_whitespace(root.get_text(separator=" "))

    @cached_property
    def main_content_text(self) -> str:
        """Body text without navigation, header, footer and sidebars."""
        copy = BeautifulSoup(self.html, PARSER)
        for element in copy.select(BOILERPLATE_SELECTORS):
            element.decompose()

        main = copy.select_one(MAIN_CONTENT_SELECTORS)
        main_text = normalize_whitespace(main.get_text(separator=" ")) if main else ""

        if len(main_text) < MIN_MAIN_CONTENT_CHARS:
            root = copy.body or copy
            main_text = normalize_whitespace(root.get_text(separator=" "))

        return main_text
