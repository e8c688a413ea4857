"""
Data models for travel-news.

This module contains the core data structures used throughout the application.
"""

from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field

from .extractors.quality_scorer import clamp_score, passes_success_gate


@dataclass
class ExtractionResult:
    """
    Result of extracting the main article body from one HTML page.

    ``word_count`` and ``success`` are derived from ``full_content`` when the
    result is created, so they can never disagree with the text they describe.
    A result built without content (for example after a failed download) is
    therefore always unsuccessful.
    """

    title: str = ""
    full_content: str = ""
    excerpt: str = ""
    quality_score: int = 0
    url: Optional[str] = None
    strategy: Optional[str] = None
    extractor_used: Optional[str] = None
    error_message: Optional[str] = None
    extraction_time_seconds: Optional[float] = None
    word_count: int = field(init=False, default=0)
    success: bool = field(init=False, default=False)

    def __post_init__(self):
        """Derive word count, clamp the score and apply the success gate."""
        self.full_content = self.full_content or ""
        self.word_count = len(self.full_content.split())
        self.quality_score = clamp_score(self.quality_score)
        self.success = passes_success_gate(self.full_content, self.word_count)

    @property
    def failed(self) -> bool:
        """Check if extraction failed."""
        return not self.success

    @property
    def reading_time_minutes(self) -> int:
        """
        Estimate reading time in minutes (assuming 200 words per minute).

        Returns:
            Estimated reading time in minutes
        """
        if not self.word_count:
            return 0
        return max(1, self.word_count // 200)

    def to_dict(self) -> dict:
        """
        Convert the result to dictionary format.

        Returns:
            Dictionary representation of the result
        """
        return {
            'title': self.title,
            'full_content': self.full_content,
            'excerpt': self.excerpt,
            'word_count': self.word_count,
            'quality_score': self.quality_score,
            'success': self.success,
            'url': self.url,
            'strategy': self.strategy,
            'extractor_used': self.extractor_used,
            'error_message': self.error_message,
            'extraction_time_seconds': self.extraction_time_seconds,
            'reading_time_minutes': self.reading_time_minutes
        }


@dataclass
class SourceConfig:
    """A news site to scan and the CSS selectors that find its headline links."""

    name: str
    url: str
    selectors: List[str] = field(default_factory=list)
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> 'SourceConfig':
        """
        Create SourceConfig from a configuration mapping.

        Args:
            data: Dictionary with ``name``, ``url`` and ``selectors`` keys

        Returns:
            SourceConfig instance
        """
        selectors = data.get('selectors') or []
        if isinstance(selectors, str):
            selectors = [selectors]

        return cls(
            name=data['name'],
            url=data['url'],
            selectors=list(selectors),
            enabled=data.get('enabled', True)
        )

    def to_dict(self) -> dict:
        """Convert source to dictionary."""
        return {
            'name': self.name,
            'url': self.url,
            'selectors': self.selectors,
            'enabled': self.enabled
        }


@dataclass
class ArticleLink:
    """A headline found on a source's front page."""

    title: str
    url: str
    source: str
    scraped_at: str
    published_at: Optional[datetime] = None
    freshness_score: int = 0

    def to_dict(self) -> dict:
        """Convert the headline to dictionary format."""
        return {
            'title': self.title,
            'url': self.url,
            'source': self.source,
            'scraped_at': self.scraped_at,
            'published_at': self.published_at.isoformat() if self.published_at else None,
            'freshness_score': self.freshness_score
        }


@dataclass
class SourceResult:
    """Outcome of scanning a single source."""

    source: str
    articles: List[ArticleLink] = field(default_factory=list)
    total_found: int = 0
    success: bool = False
    error: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert the source outcome to dictionary format."""
        data = {
            'source': self.source,
            'articles': [article.to_dict() for article in self.articles],
            'total_found': self.total_found,
            'success': self.success
        }
        if self.error:
            data['error'] = self.error
        return data


@dataclass
class ScanReport:
    """
    Aggregated result of scanning every configured source.

    ``articles`` holds the deduplicated, freshness-ranked headlines across all
    successful sources; ``source_results`` keeps the per-source breakdown.
    """

    articles: List[ArticleLink] = field(default_factory=list)
    source_results: List[SourceResult] = field(default_factory=list)
    sources_checked: int = 0
    scan_timestamp: str = ""

    @property
    def successful_sources(self) -> int:
        """Number of sources that were fetched and parsed without error."""
        return sum(1 for result in self.source_results if result.success)

    def to_dict(self) -> dict:
        """
        Convert the report to the response format served by the API.

        Returns:
            Dictionary with ``latest_travel_news``, ``summary`` and
            ``source_breakdown`` keys
        """
        return {
            'latest_travel_news': [article.to_dict() for article in self.articles],
            'summary': {
                'total_articles': len(self.articles),
                'sources_checked': self.sources_checked,
                'successful_sources': self.successful_sources,
                'scan_timestamp': self.scan_timestamp
            },
            'source_breakdown': [result.to_dict() for result in self.source_results]
        }
