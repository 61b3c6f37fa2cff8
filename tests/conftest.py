"""Shared fixtures: canned pages and a routing httpx.MockTransport."""

import httpx
import pytest

SITE = "https://example.com"
PAGE_URL = f"{SITE}/blog/post"


def route_transport(routes, calls=None):
    """MockTransport answering from a {url: answer} table.

    An answer is ``(status, body)``, ``(status, body, headers)``, an
    ``httpx.RequestError`` subclass to raise, or a callable taking the
    request. Unknown URLs answer 404. Requested URLs are appended to
    ``calls`` when given.
    """
    def handler(request):
        url = str(request.url)
        if calls is not None:
            calls.append(url)

        answer = routes.get(url)
        if answer is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(answer, type) and issubclass(answer, Exception):
            raise answer(f"simulated {answer.__name__}", request=request)
        if callable(answer):
            return answer(request)

        status, body, *rest = answer
        headers = rest[0] if rest else {}
        if isinstance(body, bytes):
            return httpx.Response(status, content=body, headers=headers)
        return httpx.Response(status, text=body, headers=headers)

    return httpx.MockTransport(handler)


def words(count, word="content"):
    return " ".join([word] * count)


GOOD_PAGE = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Practical Guide to Technical SEO Audits for Blogs</title>
  <meta name="description" content="Learn how to audit a blog post for technical SEO problems, from crawlability and sitemaps to headings, images and structured data in minutes.">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta name="robots" content="index, follow">
  <link rel="canonical" href="{PAGE_URL}">
  <meta property="og:title" content="Technical SEO Audits">
  <meta property="og:description" content="How to audit a blog post">
  <meta property="og:image" content="{SITE}/og.png">
  <meta name="twitter:card" content="summary_large_image">
  <script type="application/ld+json">{{"@type": "Article"}}</script>
  <script src="/app.js" defer></script>
</head>
<body>
  <nav><a href="/">Home</a> <a href="/about">About</a></nav>
  <main>
    <h1>How to run a technical SEO audit</h1>
    <h2>Start with crawlability</h2>
    <p>{words(120, "Check")}. Crawlers read robots rules first.</p>
    <h2>Review the page itself</h2>
    <p>{words(120, "Review")}. Titles and descriptions matter.</p>
    <p>{words(120, "Measure")}. Fast pages keep readers.</p>
    <img src="/hero.png" alt="Audit checklist" width="800" height="400">
    <a href="https://other.example.org/tool">External tool</a>
  </main>
  <footer>Copyright</footer>
</body>
</html>
"""

BARE_PAGE = "<html><head><title>x</title></head><body><p>Hello there.</p></body></html>"

ROBOTS_TXT = f"""User-agent: *
Disallow: /admin/

Sitemap: {SITE}/sitemap.xml
"""

SITEMAP_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>{SITE}/</loc><lastmod>2024-01-01</lastmod><priority>1.0</priority></url>
  <url><loc>{PAGE_URL}</loc><lastmod>2024-02-01</lastmod><priority>0.8</priority></url>
</urlset>
"""


@pytest.fixture
def good_site_routes():
    """Routes for a healthy site serving GOOD_PAGE."""
    return {
        PAGE_URL: (200, GOOD_PAGE),
        f"{SITE}/robots.txt": (200, ROBOTS_TXT),
        f"{SITE}/sitemap.xml": (200, SITEMAP_XML, {"content-type": "application/xml"}),
    }
