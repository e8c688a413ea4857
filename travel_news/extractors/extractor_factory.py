"""
Extractor factory for travel-news.

This module provides a factory for managing content extractors: it downloads
the page once, runs the primary extractor and falls back to the secondary
extractor when the primary reports low confidence.
"""

import logging
from typing import Optional, List
from enum import Enum

from .content_extractor import ContentExtractor
from .readability_fallback import ReadabilityFallback
from ..config import Config
from ..models import ExtractionResult
from ..scraper.fetcher import FetchError, PageFetcher

logger = logging.getLogger(__name__)


class ExtractorType(Enum):
    """Available extractor types."""
    HEURISTIC = "heuristic"
    READABILITY = "readability"


class ExtractorFactory:
    """
    Factory for managing content extractors with fallback.

    The primary extractor runs first; the fallback is only consulted when the
    primary result fails the success gate. When every extractor reports low
    confidence the highest-scoring result is returned.
    """

    def __init__(self, config: Config, fetcher: Optional[PageFetcher] = None):
        """
        Initialize the extractor factory.

        Args:
            config: Application configuration
            fetcher: Page fetcher (one is built from ``config`` if None)
        """
        self.config = config
        self.extractor_config = config.get_extractor_config()
        self.fetcher = fetcher or PageFetcher(config)

        # Determine extractor order from config
        primary = self.extractor_config.get('primary', 'heuristic')
        fallback = self.extractor_config.get('fallback', 'readability')
        use_fallback = self.extractor_config.get('use_fallback', True)

        self.extractors = self._setup_extractors(primary, fallback if use_fallback else None)

        # Cache extractor instances for reuse
        self._extractor_cache = {}

    def _setup_extractors(self, primary: str, fallback: Optional[str]) -> List[ExtractorType]:
        """
        Set up the extractor order based on configuration.

        Args:
            primary: Primary extractor name
            fallback: Fallback extractor name, or None to disable the fallback

        Returns:
            List of extractor types in order of preference
        """
        # Default to the heuristic extractor if the primary is unknown
        extractors = [self._get_extractor_type(primary) or ExtractorType.HEURISTIC]

        fallback_type = self._get_extractor_type(fallback) if fallback else None
        if fallback_type and fallback_type not in extractors:
            extractors.append(fallback_type)

        return extractors

    def _get_extractor(self, extractor_type: ExtractorType):
        """
        Get an extractor instance, using cache for efficiency.

        Args:
            extractor_type: Type of extractor to get

        Returns:
            Extractor instance
        """
        if extractor_type not in self._extractor_cache:
            if extractor_type == ExtractorType.HEURISTIC:
                self._extractor_cache[extractor_type] = ContentExtractor()
            elif extractor_type == ExtractorType.READABILITY:
                self._extractor_cache[extractor_type] = ReadabilityFallback()

        return self._extractor_cache[extractor_type]

    def _get_extractor_type(self, extractor_name: Optional[str]) -> Optional[ExtractorType]:
        """
        Convert extractor name to ExtractorType.

        Args:
            extractor_name: Name of the extractor

        Returns:
            ExtractorType or None if not found
        """
        if not extractor_name:
            return None
        try:
            return ExtractorType(extractor_name.lower())
        except ValueError:
            return None

    def extract(self, url: str, preferred_extractor: Optional[str] = None) -> ExtractionResult:
        """
        Download a page and extract its article content.

        Args:
            url: URL to extract content from
            preferred_extractor: Optional preferred extractor name to try first

        Returns:
            ExtractionResult; a download failure yields an unsuccessful result
            carrying the error message
        """
        try:
            html = self.fetcher.fetch(url)
        except FetchError as e:
            logger.warning("%s", e)
            return ExtractionResult(
                url=url,
                extractor_used="factory",
                error_message=str(e)
            )

        return self.extract_html(html, url, preferred_extractor)

    def extract_html(self, html: str, url: str,
                     preferred_extractor: Optional[str] = None) -> ExtractionResult:
        """
        Extract article content from HTML that was already downloaded.

        Args:
            html: Raw HTML of the page
            url: URL the HTML came from
            preferred_extractor: Optional preferred extractor name to try first

        Returns:
            The first successful result, or the highest-scoring one
        """
        # Determine extractor order
        extractor_order = self.extractors.copy()

        # If preferred extractor is specified, try it first
        if preferred_extractor:
            preferred_type = self._get_extractor_type(preferred_extractor)
            if preferred_type:
                if preferred_type in extractor_order:
                    extractor_order.remove(preferred_type)
                extractor_order.insert(0, preferred_type)

        attempts: List[ExtractionResult] = []

        for extractor_type in extractor_order:
            result = self._get_extractor(extractor_type).extract(html, url)
            attempts.append(result)

            logger.debug(
                "%s on %s: success=%s score=%d",
                extractor_type.value, url, result.success, result.quality_score
            )

            if result.success:
                return result

        # All extractors reported low confidence; keep the most convincing one
        best = attempts[0]
        for result in attempts[1:]:
            if result.quality_score > best.quality_score:
                best = result
        return best

    def get_available_extractors(self) -> List[str]:
        """
        Get list of configured extractor names, in order of preference.

        Returns:
            List of extractor names
        """
        return [extractor.value for extractor in self.extractors]
