"""
Headline scraping across configured travel-news sources.

For every source the front page is fetched and candidate headline links are
picked out with the source's CSS selectors. Candidates are filtered by title
length, topical keywords and recency, deduplicated and finally ranked by
freshness across all sources.
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import List, Optional

from bs4 import BeautifulSoup

from .fetcher import FetchError, PageFetcher
from .freshness import (
    freshness_score, is_stale, parse_datetime,
    published_from_text, published_from_url, utcnow
)
from ..config import Config, DEFAULT_KEYWORDS
from ..models import ArticleLink, ScanReport, SourceConfig, SourceResult
from ..utils import clean_whitespace, is_valid_url, normalize_url, resolve_relative_url

logger = logging.getLogger(__name__)

SEQUENTIAL = "sequential"
PARALLEL = "parallel"

# Only this much of a headline's surrounding text is searched for dates
_CONTEXT_CHARS = 500


class NewsScraper:
    """
    Scans travel-news front pages for recent headlines.

    A failure in one source (network error, bad markup, invalid selector)
    is recorded in that source's ``SourceResult`` and never stops the scan.
    """

    def __init__(self, config: Config, fetcher: Optional[PageFetcher] = None):
        """
        Initialize the scraper.

        Args:
            config: Application configuration
            fetcher: Page fetcher (one is built from ``config`` if None)
        """
        self.config = config
        self.fetcher = fetcher or PageFetcher(config)

        scraper_config = config.get_scraper_config()
        self.mode = scraper_config.get('mode', SEQUENTIAL)
        self.request_delay = float(scraper_config.get('request_delay', 1.0))
        self.max_concurrency = max(1, int(scraper_config.get('max_concurrency', 3)))
        self.max_articles = int(scraper_config.get('max_articles', 20))
        self.per_source_limit = int(scraper_config.get('per_source_limit', 10))
        self.per_source_keep = int(scraper_config.get('per_source_keep', 8))
        self.min_title_length = int(scraper_config.get('min_title_length', 15))
        self.max_title_length = int(scraper_config.get('max_title_length', 200))
        self.max_age_days = scraper_config.get('max_age_days', 7)
        self.keywords = [k.lower() for k in scraper_config.get('keywords', DEFAULT_KEYWORDS)]

    @property
    def sources(self) -> List[SourceConfig]:
        """Enabled sources from the configuration."""
        return self.config.get_sources()

    def scan(self, max_articles: Optional[int] = None,
             mode: Optional[str] = None) -> ScanReport:
        """
        Scan every enabled source and aggregate the headlines.

        Args:
            max_articles: Maximum number of headlines in the aggregate
                (uses config default if None)
            mode: ``sequential`` or ``parallel`` (uses config default if None)

        Returns:
            ScanReport with ranked headlines and a per-source breakdown
        """
        sources = self.sources
        limit = max_articles if max_articles is not None else self.max_articles
        mode = mode or self.mode
        now = utcnow()

        logger.info("Scanning %d sources (%s)", len(sources), mode)

        if mode == PARALLEL and len(sources) > 1:
            workers = min(self.max_concurrency, len(sources))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(lambda s: self.scrape_source(s, now), sources))
        else:
            results = []
            for index, source in enumerate(sources):
                # Courtesy delay between consecutive requests
                if index and self.request_delay > 0:
                    time.sleep(self.request_delay)
                results.append(self.scrape_source(source, now))

        report = ScanReport(
            articles=self.aggregate(results, limit),
            source_results=results,
            sources_checked=len(sources),
            scan_timestamp=utcnow().isoformat()
        )

        logger.info(
            "Scan finished: %d headlines from %d/%d sources",
            len(report.articles), report.successful_sources, report.sources_checked
        )
        return report

    def scrape_source(self, source: SourceConfig,
                      now: Optional[datetime] = None) -> SourceResult:
        """
        Fetch and parse one source, isolating any failure.

        Args:
            source: Source to scan
            now: Reference time for recency checks

        Returns:
            SourceResult for the source
        """
        try:
            html = self.fetcher.fetch(source.url)
            articles = self.parse_headlines(html, source, now)
        except FetchError as e:
            logger.warning("%s: %s", source.name, e)
            return SourceResult(source=source.name, error=str(e))
        except Exception as e:
            logger.exception("%s: unexpected scraping error", source.name)
            return SourceResult(source=source.name, error=str(e))

        logger.debug("%s: %d headlines", source.name, len(articles))
        return SourceResult(
            source=source.name,
            articles=articles[:self.per_source_keep],
            total_found=len(articles),
            success=True
        )

    def parse_headlines(self, html: str, source: SourceConfig,
                        now: Optional[datetime] = None) -> List[ArticleLink]:
        """
        Pick headline links out of a front page.

        Selectors are tried in order; the first selector yielding any
        headline wins and the remaining selectors are skipped.

        Args:
            html: Front page HTML
            source: Source the page belongs to
            now: Reference time for recency checks

        Returns:
            Headlines in page order, at most ``per_source_limit`` of them
        """
        now = now or utcnow()
        scraped_at = now.isoformat()
        soup = BeautifulSoup(html or "", 'html.parser')

        articles: List[ArticleLink] = []
        seen = set()

        for selector in source.selectors:
            try:
                elements = soup.select(selector)
            except Exception as e:
                logger.warning("%s: skipping selector %r: %s", source.name, selector, e)
                continue

            for element in elements:
                if len(articles) >= self.per_source_limit:
                    break

                title = clean_whitespace(element.get_text())
                href = (element.get('href') or '').strip()
                if not title or not href:
                    continue
                if not self.min_title_length < len(title) < self.max_title_length:
                    continue

                link = resolve_relative_url(source.url, href)
                if not is_valid_url(link):
                    continue
                if not self.is_travel_related(title, link):
                    continue

                key = normalize_url(link)
                if key in seen:
                    continue

                published_at = self._find_published(element, link, now)
                if is_stale(published_at, self.max_age_days, now):
                    logger.debug("%s: dropping stale headline %r", source.name, title)
                    continue

                seen.add(key)
                articles.append(ArticleLink(
                    title=title,
                    url=link,
                    source=source.name,
                    scraped_at=scraped_at,
                    published_at=published_at,
                    freshness_score=freshness_score(title, published_at, now)
                ))

            if articles:
                break

        return articles

    def is_travel_related(self, title: str, link: str) -> bool:
        """Check the title or link for a configured travel keyword."""
        title = title.lower()
        link = link.lower()
        return any(keyword in title or keyword in link for keyword in self.keywords)

    def aggregate(self, results: List[SourceResult], max_articles: int) -> List[ArticleLink]:
        """
        Merge headlines from successful sources.

        Duplicates (same normalised URL or same title) keep their first
        occurrence. Headlines are ranked by freshness; ties keep source order.

        Args:
            results: Per-source results in source order
            max_articles: Maximum number of headlines to return

        Returns:
            Ranked, deduplicated headlines
        """
        merged: List[ArticleLink] = []
        seen_urls = set()
        seen_titles = set()

        for result in results:
            if not result.success:
                continue
            for article in result.articles:
                url_key = normalize_url(article.url)
                title_key = article.title.casefold()
                if url_key in seen_urls or title_key in seen_titles:
                    continue
                seen_urls.add(url_key)
                seen_titles.add(title_key)
                merged.append(article)

        ranked = sorted(merged, key=lambda article: article.freshness_score, reverse=True)
        return ranked[:max(0, max_articles)]

    def _find_published(self, element, link: str, now: datetime) -> Optional[datetime]:
        container = element.find_parent(['article', 'li']) or element.parent

        if container is not None:
            time_tag = container.find('time')
            if time_tag is not None:
                published = (
                    parse_datetime(time_tag.get('datetime'))
                    or parse_datetime(time_tag.get_text())
                    or published_from_text(time_tag.get_text(), now)
                )
                if published:
                    return published

            context = clean_whitespace(container.get_text())[:_CONTEXT_CHARS]
            published = published_from_text(context, now)
            if published:
                return published

        return published_from_url(link)
