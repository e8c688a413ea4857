"""
Shared fixtures-in-code for the travel-news test suite.

Pages are built from small HTML snippets and served by ``StubFetcher`` so no
test touches the network.
"""

from datetime import datetime, timedelta, timezone

from travel_news.scraper.fetcher import FetchError

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)

# 25 three-letter words plus a full stop: exactly 100 characters
PARAGRAPH_100 = " ".join(["sea"] * 25) + "."

MARKET_SENTENCE = (
    "The morning market opens early and the stalls fill with fresh bread and cheese. "
)


class StubFetcher:
    """Serves canned pages by URL and records every request."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.calls = []
        self.closed = False

    def fetch(self, url):
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            raise FetchError(url, "404 Client Error: Not Found")
        if isinstance(page, Exception):
            raise page
        return page

    def close(self):
        self.closed = True


def page(body, title="Test page", head=""):
    """Wrap a body fragment in a full HTML document."""
    return (
        f"<html><head><title>{title}</title>{head}</head>"
        f"<body>{body}</body></html>"
    )


def article_page(paragraphs, title="Best Beaches in Italy | Travel+Leisure", extra=""):
    """A document whose only structure is one <article> of paragraphs."""
    body = "<article>" + "".join(f"<p>{p}</p>" for p in paragraphs) + "</article>"
    return page(body + extra, title=title)


def headline(title, href, published=None, extra=""):
    """A front-page teaser card, optionally with a <time> element."""
    time_tag = ""
    if published is not None:
        time_tag = f'<time datetime="{published.isoformat()}">{published:%b %d}</time>'
    return f'<article><h2><a href="{href}">{title}</a></h2>{time_tag}{extra}</article>'


def hours_ago(hours):
    return NOW - timedelta(hours=hours)
